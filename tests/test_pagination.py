import asyncio
import pytest
from shelf_scraper import (
    Interactor,
    LocatorCatalog,
    NavigationNotConfirmed,
    PaginationTraversal,
    SnapshotDriver,
    StaleElement,
    TraversalState,
)
from shelf_scraper.pagination import url_has_page
from helpers import LISTING_URL, cards, listing, page_url


class LaggingUrlDriver(SnapshotDriver):
    """Reports the previous URL for a few polls after each click."""

    def __init__(self, pages, start_url, lag):
        super().__init__(pages, start_url=start_url)
        self.lag = lag
        self.remaining = 0
        self.stale_url = start_url

    async def click(self, handle):
        self.stale_url = self.url
        await super().click(handle)
        self.remaining = self.lag

    async def current_url(self):
        if self.remaining > 0:
            self.remaining -= 1
            return self.stale_url
        return self.url


class ReloadingDriver(SnapshotDriver):
    """Lookups fail as stale for a few polls after each click, like a full page load."""

    def __init__(self, pages, start_url, stale_lookups):
        super().__init__(pages, start_url=start_url)
        self.stale_lookups = stale_lookups
        self.remaining = 0

    async def click(self, handle):
        await super().click(handle)
        self.remaining = self.stale_lookups

    async def locate(self, spec, within=None):
        if self.remaining > 0:
            self.remaining -= 1
            raise StaleElement("element lookup", "Execution context was destroyed")
        return await super().locate(spec, within)


class DetachedControlDriver(SnapshotDriver):
    async def script_click(self, handle):
        raise StaleElement("scripted click", "Element is not attached to the DOM")


def three_pages(**page_1_options):
    return {
        page_url(1): listing(cards(5), **page_1_options),
        page_url(2): listing(cards(5, start=6), heading="Juice - page 2"),
        page_url(3): listing(cards(5, start=11), heading="Juice - page 3"),
    }


def traversal(driver, timeout=0.2):
    interactor = Interactor(driver, timeout=timeout, poll_interval=0.01, settle_delay=0)
    return PaginationTraversal(interactor, LocatorCatalog.default())


def test_go_to_page_settles():
    async def go():
        driver = SnapshotDriver(three_pages(), start_url=LISTING_URL)
        pager = traversal(driver)
        state = await pager.go_to_page(2)
        return state, pager

    state, pager = asyncio.run(go())
    assert state.page_index == 2
    assert url_has_page(state.url, 2)
    assert state.heading_text == "Juice - page 2"
    assert pager.state == TraversalState.IDLE
    assert pager.transitions == [
        TraversalState.NAVIGATION_REQUESTED,
        TraversalState.AWAITING_SETTLE,
        TraversalState.SETTLED,
        TraversalState.IDLE,
    ]


def test_waits_for_url_after_heading_is_visible():
    async def go():
        driver = LaggingUrlDriver(three_pages(), start_url=LISTING_URL, lag=5)
        return await traversal(driver, timeout=1.0).go_to_page(2)

    state = asyncio.run(go())
    assert state.url == page_url(2)


def test_url_never_updates():
    pages = three_pages(link_hrefs={2: "#"})

    async def go():
        driver = SnapshotDriver(pages, start_url=LISTING_URL)
        pager = traversal(driver)
        try:
            await pager.go_to_page(2)
        finally:
            assert pager.state == TraversalState.IDLE
            assert TraversalState.SETTLED not in pager.transitions

    with pytest.raises(NavigationNotConfirmed) as exc:
        asyncio.run(go())
    assert exc.value.page == 2
    assert "URL" in exc.value.reason


def test_heading_never_visible():
    pages = three_pages()
    pages[page_url(2)] = listing(cards(5), heading_hidden=True)

    async def go():
        driver = SnapshotDriver(pages, start_url=LISTING_URL)
        await traversal(driver).go_to_page(2)

    with pytest.raises(NavigationNotConfirmed) as exc:
        asyncio.run(go())
    assert exc.value.reason == "heading not visible"


def test_missing_page_control():
    async def go():
        driver = SnapshotDriver(three_pages(), start_url=LISTING_URL)
        await traversal(driver, timeout=0.05).go_to_page(7)

    with pytest.raises(NavigationNotConfirmed) as exc:
        asyncio.run(go())
    assert exc.value.page == 7
    assert "page control" in exc.value.reason


def test_settles_through_stale_lookups_while_page_reloads():
    async def go():
        driver = ReloadingDriver(three_pages(), start_url=LISTING_URL, stale_lookups=4)
        state = await traversal(driver, timeout=1.0).go_to_page(2)
        return state, driver

    state, driver = asyncio.run(go())
    assert state.page_index == 2
    assert driver.remaining == 0


def test_detached_control_is_navigation_not_confirmed():
    async def go():
        driver = DetachedControlDriver(three_pages(), start_url=LISTING_URL)
        await traversal(driver).go_to_page(2)

    with pytest.raises(NavigationNotConfirmed) as exc:
        asyncio.run(go())
    assert exc.value.page == 2
    assert isinstance(exc.value.__cause__, StaleElement)


def test_current_state():
    async def go():
        driver = SnapshotDriver(three_pages(), start_url=LISTING_URL)
        return await traversal(driver).current_state()

    state = asyncio.run(go())
    assert state.page_index == 1
    assert state.heading_text == "Juice"
    assert state.url == LISTING_URL


@pytest.mark.parametrize("url,page,expected", [
    ("https://shop.test/juice?page=2", 2, True),
    ("https://shop.test/juice?sort=price&page=3", 3, True),
    ("https://shop.test/juice?page=12", 1, False),
    ("https://shop.test/juice?page=1", 12, False),
    ("https://shop.test/juice", 2, False),
])
def test_url_has_page(url, page, expected):
    assert url_has_page(url, page) is expected
