"""
Pagination traversal: move the listing to page n and confirm it settled.
"""

from enum import Enum
from typing import List, Optional
from urllib.parse import parse_qs, urlparse
from .errors import NavigationNotConfirmed, ScraperError
from .interaction import ClickMode, Interactor
from .locators import LocatorCatalog
from .models import PageState


class TraversalState(str, Enum):
    IDLE = "idle"
    NAVIGATION_REQUESTED = "navigation_requested"
    AWAITING_SETTLE = "awaiting_settle"
    SETTLED = "settled"


def url_has_page(url: str, page_number: int) -> bool:
    """True if the URL's query string carries page=<page_number>."""
    values = parse_qs(urlparse(url).query).get("page", [])
    return str(page_number) in values


class PaginationTraversal:
    """
    Drives the listing paginator.

    A page counts as settled only when the listing heading is visible and the
    URL carries the page marker, both within the same timeout. Anything else
    is NavigationNotConfirmed.
    """

    def __init__(
        self,
        interactor: Interactor,
        catalog: LocatorCatalog,
        timeout: Optional[float] = None,
        click_mode: ClickMode = ClickMode.SCRIPTED
    ):
        self.interactor = interactor
        self.catalog = catalog
        self.timeout = interactor.timeout if timeout is None else timeout
        self.click_mode = click_mode
        self.state = TraversalState.IDLE
        self.transitions: List[TraversalState] = []

    def _enter(self, state: TraversalState) -> None:
        self.state = state
        self.transitions.append(state)

    async def go_to_page(self, page_number: int) -> PageState:
        """Activate the page-n control and wait for page n to settle."""
        driver = self.interactor.driver
        self._enter(TraversalState.NAVIGATION_REQUESTED)

        try:
            try:
                control = await self.interactor.find(
                    self.catalog.resolve("page_link", page=page_number),
                    timeout=self.timeout
                )
                await self.interactor.scroll_to(control)
                await self.interactor.activate(control, mode=self.click_mode, timeout=self.timeout)
            except ScraperError as e:
                raise NavigationNotConfirmed(page_number, f"page control unavailable ({e})") from e

            # The driver gives no signal that navigation started.
            self._enter(TraversalState.AWAITING_SETTLE)
            heading_spec = self.catalog.resolve("heading")
            seen = {"url": "", "heading": False, "text": ""}

            async def settled():
                seen["url"] = await driver.current_url()
                seen["heading"] = False
                heading = await driver.locate(heading_spec)
                seen["heading"] = await driver.is_visible(heading)
                if seen["heading"] and url_has_page(seen["url"], page_number):
                    seen["text"] = (await driver.text(heading)).strip()
                    return True
                return None

            try:
                await self.interactor.wait_until(
                    settled,
                    timeout=self.timeout,
                    message=f"page {page_number} to settle"
                )
            except ScraperError as e:
                reason = "heading not visible" if not seen["heading"] else f"URL is {seen['url']}"
                raise NavigationNotConfirmed(page_number, reason) from e

            self._enter(TraversalState.SETTLED)
            return PageState(
                url=seen["url"],
                heading_text=seen["text"],
                page_index=page_number,
            )
        finally:
            self._enter(TraversalState.IDLE)

    async def current_state(self, page_number: int = 1) -> PageState:
        """PageState of whatever page is loaded now, without navigating."""
        driver = self.interactor.driver
        heading = await self.interactor.find_visible(self.catalog.resolve("heading"))
        return PageState(
            url=await driver.current_url(),
            heading_text=await self.interactor.read_text(heading),
            page_index=page_number,
        )
