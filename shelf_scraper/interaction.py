"""
Synchronized interaction layer: explicit waits around every click, hover and read.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional
from .driver import Driver
from .errors import NoSuchElement, TimeoutWaiting
from .models import LocatorSpec


class ClickMode(str, Enum):
    """How `Interactor.activate` delivers a click."""
    NATIVE = "native"
    # element.click() from inside the page; lands even under overlays,
    # so only use it where the target is known to be obscured.
    SCRIPTED = "scripted"


class Interactor:
    """
    Wraps a Driver with polling waits.

    Every wait has a bounded timeout and raises TimeoutWaiting when it runs
    out. NoSuchElement raised while polling means "not there yet".
    """

    def __init__(
        self,
        driver: Driver,
        timeout: float = 10.0,
        poll_interval: float = 0.25,
        settle_delay: float = 1.0
    ):
        self.driver = driver
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.settle_delay = settle_delay

    async def wait_until(
        self,
        condition: Callable[[], Awaitable[Any]],
        timeout: Optional[float] = None,
        message: str = "condition"
    ) -> Any:
        """
        Poll `condition` until it returns a result and return that result.
        None, False and an empty list all mean "not yet".
        """
        timeout = self.timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout

        while True:
            try:
                value = await condition()
            except NoSuchElement:
                value = None

            if not _pending(value):
                return value

            if time.monotonic() >= deadline:
                raise TimeoutWaiting(message, timeout)

            await asyncio.sleep(self.poll_interval)

    async def wait_visible(self, handle: Any, timeout: Optional[float] = None) -> Any:
        async def visible():
            return handle if await self.driver.is_visible(handle) else None

        return await self.wait_until(visible, timeout, "element to become visible")

    async def wait_clickable(self, handle: Any, timeout: Optional[float] = None) -> Any:
        async def clickable():
            if await self.driver.is_visible(handle) and await self.driver.is_enabled(handle):
                return handle
            return None

        return await self.wait_until(clickable, timeout, "element to become clickable")

    async def find(self, spec: LocatorSpec, timeout: Optional[float] = None, within: Any = None) -> Any:
        """Wait until `spec` matches something and return the first match."""
        async def present():
            return await self.driver.locate(spec, within)

        return await self.wait_until(present, timeout, f"{spec} to be present")

    async def find_visible(self, spec: LocatorSpec, timeout: Optional[float] = None) -> Any:
        """Re-locate `spec` on every poll until the match is visible."""
        async def visible():
            handle = await self.driver.locate(spec)
            return handle if await self.driver.is_visible(handle) else None

        return await self.wait_until(visible, timeout, f"{spec} to become visible")

    async def find_all(self, spec: LocatorSpec, timeout: Optional[float] = None, within: Any = None) -> List[Any]:
        """
        Wait for at least one match of `spec` and return every match.

        An empty page is a legitimate answer here, so running out of time
        returns [] instead of raising.
        """
        async def any_present():
            return await self.driver.locate_all(spec, within)

        try:
            return await self.wait_until(any_present, timeout, f"{spec} to be present")
        except TimeoutWaiting:
            return []

    async def wait_for_text(self, spec: LocatorSpec, text: str, timeout: Optional[float] = None) -> Any:
        async def has_text():
            handle = await self.driver.locate(spec)
            return handle if text in await self.driver.text(handle) else None

        return await self.wait_until(has_text, timeout, f"'{text}' in {spec}")

    async def activate(
        self,
        handle: Any,
        mode: ClickMode,
        timeout: Optional[float] = None
    ) -> None:
        """Click `handle` once it is visible, natively or from inside the page."""
        await self.wait_visible(handle, timeout)
        if mode == ClickMode.SCRIPTED:
            await self.driver.script_click(handle)
        else:
            await self.driver.click(handle)

    async def hover_then_wait(self, handle: Any, settle_delay: Optional[float] = None) -> None:
        """
        Move the pointer onto `handle` and give CSS-driven flyouts time to open.
        The page exposes no completion signal for the reveal, hence the fixed delay.
        """
        await self.driver.hover(handle)
        await asyncio.sleep(self.settle_delay if settle_delay is None else settle_delay)

    async def scroll_to(self, handle: Any, settle_delay: Optional[float] = None) -> None:
        """Bring `handle` into the viewport without moving the pointer onto it."""
        await self.driver.scroll_into_view(handle)
        await asyncio.sleep(self.settle_delay if settle_delay is None else settle_delay)

    async def type_text(self, handle: Any, text: str, timeout: Optional[float] = None, replace: bool = False) -> None:
        """Type into `handle` once visible. `replace` empties the field first."""
        await self.wait_visible(handle, timeout)
        if replace:
            await self.driver.clear(handle)
        await self.driver.send_keys(handle, text)

    async def read_text(self, handle: Any) -> str:
        return (await self.driver.text(handle)).strip()


def _pending(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, list) and not value)
