"""
Browser automation backend used by the interaction layer.

`Driver` is the capability the rest of the package consumes; `PlaywrightDriver`
implements it on a single Playwright Chromium page.
"""

import functools
from typing import Any, List, Optional
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)
from .errors import NoSuchElement, PageLoadFailed, StaleElement, TimeoutWaiting
from .models import LocatorSpec, LocatorStrategy


SCRIPT_CLICK = "el => el.click()"


class Driver:
    """
    One live page. All element handles it returns are opaque and become
    invalid after any navigation.
    """

    async def locate(self, spec: LocatorSpec, within: Any = None) -> Any:
        """First match for `spec`; raises NoSuchElement when nothing matches."""
        raise NotImplementedError

    async def locate_all(self, spec: LocatorSpec, within: Any = None) -> List[Any]:
        """Every match for `spec`, possibly none."""
        raise NotImplementedError

    async def click(self, handle: Any) -> None:
        raise NotImplementedError

    async def script_click(self, handle: Any) -> None:
        """Click from inside the page, bypassing hit-testing."""
        await self.execute_script(SCRIPT_CLICK, handle)

    async def hover(self, handle: Any) -> None:
        raise NotImplementedError

    async def scroll_into_view(self, handle: Any) -> None:
        raise NotImplementedError

    async def send_keys(self, handle: Any, text: str) -> None:
        raise NotImplementedError

    async def clear(self, handle: Any) -> None:
        raise NotImplementedError

    async def text(self, handle: Any) -> str:
        raise NotImplementedError

    async def attribute(self, handle: Any, name: str) -> Optional[str]:
        raise NotImplementedError

    async def is_visible(self, handle: Any) -> bool:
        raise NotImplementedError

    async def is_enabled(self, handle: Any) -> bool:
        raise NotImplementedError

    async def navigate(self, url: str) -> None:
        raise NotImplementedError

    async def current_url(self) -> str:
        raise NotImplementedError

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        raise NotImplementedError

    async def page_source(self) -> str:
        raise NotImplementedError

    async def quit(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.quit()


def _translated(action: str):
    """
    Map Playwright failures onto the scraper's errors.

    Timeouts become TimeoutWaiting. Any other Playwright error means the
    handle was detached or its execution context destroyed by a navigation,
    which waits treat like a missing element.
    """
    def decorate(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except PlaywrightTimeoutError as e:
                raise TimeoutWaiting(action, self.action_timeout) from e
            except PlaywrightError as e:
                raise StaleElement(action, e.message) from e
        return wrapper
    return decorate


class PlaywrightDriver(Driver):
    """Drives a Chromium page through Playwright's async API."""

    def __init__(
        self,
        headless: bool = True,
        action_timeout: float = 10.0,
        navigation_timeout: float = 30.0,
        viewport: Optional[dict] = None
    ):
        self.headless = headless
        self.action_timeout = action_timeout
        self.navigation_timeout = navigation_timeout
        self.viewport = viewport or {"width": 1920, "height": 1080}
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self):
        """Context manager entry."""
        await self.start()
        return self

    async def start(self) -> None:
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(headless=self.headless)
        self.context = await self.browser.new_context(viewport=self.viewport)
        self.context.set_default_timeout(self.action_timeout * 1000)
        self.context.set_default_navigation_timeout(self.navigation_timeout * 1000)
        self.page = await self.context.new_page()

    async def quit(self) -> None:
        if self.context:
            await self.context.close()
            self.context = None
        if self.browser:
            await self.browser.close()
            self.browser = None
        if self.playwright:
            await self.playwright.stop()
            self.playwright = None
        self.page = None

    def _require_page(self) -> Page:
        if not self.page:
            raise RuntimeError("Browser not initialized. Use async with context manager.")
        return self.page

    @staticmethod
    def _selector(spec: LocatorSpec) -> str:
        if spec.strategy == LocatorStrategy.XPATH:
            return f"xpath={spec.expression}"
        return f"css={spec.selector}"

    @_translated("element lookup")
    async def locate(self, spec: LocatorSpec, within: Optional[ElementHandle] = None) -> ElementHandle:
        root = within or self._require_page()
        handle = await root.query_selector(self._selector(spec))
        if handle is None:
            raise NoSuchElement(str(spec))
        return handle

    @_translated("element lookup")
    async def locate_all(self, spec: LocatorSpec, within: Optional[ElementHandle] = None) -> List[ElementHandle]:
        root = within or self._require_page()
        return await root.query_selector_all(self._selector(spec))

    @_translated("native click to land")
    async def click(self, handle: ElementHandle) -> None:
        await handle.click()

    @_translated("scripted click")
    async def script_click(self, handle: ElementHandle) -> None:
        await handle.evaluate(SCRIPT_CLICK)

    @_translated("pointer to reach element")
    async def hover(self, handle: ElementHandle) -> None:
        await handle.hover()

    @_translated("scroll into view")
    async def scroll_into_view(self, handle: ElementHandle) -> None:
        await handle.scroll_into_view_if_needed()

    @_translated("typing")
    async def send_keys(self, handle: ElementHandle, text: str) -> None:
        await handle.type(text)

    @_translated("clearing a field")
    async def clear(self, handle: ElementHandle) -> None:
        await handle.fill("")

    @_translated("reading text")
    async def text(self, handle: ElementHandle) -> str:
        # innerText of a display:none element falls back to its raw text
        if not await handle.is_visible():
            return ""
        return await handle.inner_text()

    @_translated("reading an attribute")
    async def attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        return await handle.get_attribute(name)

    @_translated("visibility check")
    async def is_visible(self, handle: ElementHandle) -> bool:
        return await handle.is_visible()

    @_translated("enabled check")
    async def is_enabled(self, handle: ElementHandle) -> bool:
        return await handle.is_enabled()

    async def navigate(self, url: str) -> None:
        try:
            await self._require_page().goto(url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise PageLoadFailed(url, e.message) from e

    async def current_url(self) -> str:
        return self._require_page().url

    @_translated("script execution")
    async def execute_script(self, script: str, arg: Any = None) -> Any:
        return await self._require_page().evaluate(script, arg)

    @_translated("reading page source")
    async def page_source(self) -> str:
        return await self._require_page().content()
