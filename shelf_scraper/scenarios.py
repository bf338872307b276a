"""
Named site scenarios.

Each scenario is an async function taking a ScenarioContext. `run_scenario`
wraps it with setup (open browser, load the base URL, build the locator
catalog) and teardown (close the browser).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional
from .config import COFFEE_URL, JUICE_URL, ScrapeConfig
from .driver import Driver, PlaywrightDriver
from .errors import ScenarioCheckFailed, UnknownScenario
from .interaction import ClickMode, Interactor
from .locators import LocatorCatalog
from .models import PageTarget, ScrapeResult
from .session import ScrapeSession
from .sinks import CsvSink


NO_SERVICE_MESSAGE = "We’re sorry but it looks like we’re not available in your area yet."


@dataclass
class ScenarioContext:
    driver: Driver
    catalog: LocatorCatalog
    interactor: Interactor
    config: ScrapeConfig
    verbose: bool = True

    async def visible(self, name: str, **params) -> Any:
        return await self.interactor.find_visible(self.catalog.resolve(name, **params))

    async def click(self, name: str, mode: ClickMode, **params) -> None:
        handle = await self.interactor.find(self.catalog.resolve(name, **params))
        await self.interactor.activate(handle, mode=mode)

    async def reveal_and_click(self, name: str, mode: ClickMode, **params) -> None:
        handle = await self.interactor.find(self.catalog.resolve(name, **params))
        await self.interactor.scroll_to(handle)
        await self.interactor.activate(handle, mode=mode)

    async def scrape(self, targets: List[PageTarget], filename: str) -> ScrapeResult:
        sink = CsvSink(Path(self.config.output_dir) / filename)
        session = ScrapeSession(self.driver, sink, self.catalog, self.config, verbose=self.verbose)
        result = await session.run(targets)
        check(result.total_count > 0, f"no products written to {sink.path}")
        check(not result.incomplete, f"empty first page for target(s) {result.incomplete_targets}")
        return result


Scenario = Callable[[ScenarioContext], Awaitable[Optional[ScrapeResult]]]
SCENARIOS: Dict[str, Scenario] = {}


def scenario(name: str):
    def register(func: Scenario) -> Scenario:
        SCENARIOS[name] = func
        return func
    return register


def check(condition: bool, message: str) -> None:
    if not condition:
        raise ScenarioCheckFailed(message)


async def heading_contains(ctx: ScenarioContext, text: str) -> bool:
    """True if the listing heading is visible and contains `text`, ignoring case."""
    heading = await ctx.visible("heading")
    return text.lower() in (await ctx.interactor.read_text(heading)).lower()


async def sort_products(ctx: ScenarioContext, option_index: int) -> None:
    """Open the Sort By menu and pick the option at `option_index`."""
    await ctx.reveal_and_click("sort_menu", ClickMode.NATIVE)
    await ctx.reveal_and_click("sort_option", ClickMode.NATIVE, index=option_index)


async def wait_for_url(ctx: ScenarioContext, fragment: str) -> str:
    async def url_matches():
        url = await ctx.driver.current_url()
        return url if fragment in url else None

    return await ctx.interactor.wait_until(url_matches, message=f"URL to contain '{fragment}'")


@scenario("menu-interact")
async def menu_interact(ctx: ScenarioContext) -> None:
    await ctx.click("grocery_menu", ClickMode.NATIVE)

    # Each flyout level only renders once the pointer rests on its parent.
    menus = (
        "drinks_menu", "drinks_juice_menu", "drinks_coffee_menu",
        "home_beauty_baby_menu", "joe_fresh_menu", "discover_menu",
    )
    for name in menus:
        item = await ctx.visible(name)
        await ctx.interactor.hover_then_wait(item)


@scenario("product-page-interact")
async def product_page_interact(ctx: ScenarioContext) -> None:
    await ctx.click("grocery_menu", ClickMode.NATIVE)
    drinks = await ctx.visible("drinks_menu")
    await ctx.interactor.hover_then_wait(drinks)

    juice = await ctx.visible("drinks_juice_menu")
    await ctx.interactor.activate(juice, mode=ClickMode.NATIVE)
    check(await heading_contains(ctx, "juice"), "Juice listing heading not shown")

    await sort_products(ctx, 1)  # Price Low to High
    await sort_products(ctx, 2)  # Price High to Low

    # The filter checkbox is covered by its styled label.
    await ctx.reveal_and_click("brand_filter", ClickMode.SCRIPTED, brand="Sunny Delight")
    await wait_for_url(ctx, "productBrand=SUND")


@scenario("footer-interact")
async def footer_interact(ctx: ScenarioContext) -> None:
    await ctx.reveal_and_click("weekly_flyer_link", ClickMode.SCRIPTED)
    check(await heading_contains(ctx, "flyer items"), "Weekly flyer heading not shown")

    await ctx.reveal_and_click("contact_link", ClickMode.SCRIPTED)
    await ctx.visible("contact_header_title")


@scenario("scrape-products")
async def scrape_products(ctx: ScenarioContext) -> ScrapeResult:
    return await ctx.scrape([PageTarget(category_url=JUICE_URL)], "products_page1.csv")


@scenario("scrape-multi-pages")
async def scrape_multi_pages(ctx: ScenarioContext) -> ScrapeResult:
    return await ctx.scrape([PageTarget(category_url=JUICE_URL, page_count=3)], "products_pages123.csv")


@scenario("scrape-categories")
async def scrape_categories(ctx: ScenarioContext) -> ScrapeResult:
    targets = [PageTarget(category_url=JUICE_URL), PageTarget(category_url=COFFEE_URL)]
    return await ctx.scrape(targets, "products_dif_cat.csv")


@scenario("search-products")
async def search_products(ctx: ScenarioContext) -> None:
    for i, query in enumerate(["milk & cream", "coffee"]):
        if i > 0:
            await ctx.click("search_clear", ClickMode.NATIVE)

        field = await ctx.visible("search_field")
        await ctx.interactor.type_text(field, query, replace=True)
        await ctx.click("search_button", ClickMode.NATIVE)

        async def title_matches():
            title = await ctx.visible("page_title")
            text = await ctx.interactor.read_text(title)
            return text if query.lower() in text.lower() else None

        await ctx.interactor.wait_until(title_matches, message=f"search results for '{query}'")


@scenario("handle-popup")
async def handle_popup(ctx: ScenarioContext) -> None:
    await ctx.click("rapid_logo", ClickMode.SCRIPTED)

    autocomplete = await ctx.visible("address_autocomplete")
    await ctx.interactor.type_text(autocomplete, "401 Sunset Ave")
    await ctx.click("address_first_suggestion", ClickMode.SCRIPTED)

    continue_button = await ctx.interactor.find(ctx.catalog.resolve("address_continue"))
    await ctx.interactor.wait_clickable(continue_button)
    await ctx.interactor.activate(continue_button, mode=ClickMode.NATIVE)

    title = await ctx.interactor.wait_for_text(ctx.catalog.resolve("no_service_title"), NO_SERVICE_MESSAGE)
    check(
        NO_SERVICE_MESSAGE.lower() in (await ctx.interactor.read_text(title)).lower(),
        "No-service message not shown"
    )

    await ctx.click("no_service_back", ClickMode.NATIVE)


def build_catalog(config: ScrapeConfig) -> LocatorCatalog:
    if config.locators_file:
        return LocatorCatalog.from_file(config.locators_file)
    return LocatorCatalog.default()


async def run_scenario(
    name: str,
    config: Optional[ScrapeConfig] = None,
    driver: Optional[Driver] = None,
    verbose: bool = True
) -> Optional[ScrapeResult]:
    """Run one scenario between setup and teardown."""
    func = SCENARIOS.get(name)
    if func is None:
        raise UnknownScenario(name)

    config = config or ScrapeConfig()
    driver = driver or PlaywrightDriver(
        headless=config.headless,
        action_timeout=config.wait_timeout
    )

    async with driver:
        await driver.navigate(config.base_url)
        ctx = ScenarioContext(
            driver=driver,
            catalog=build_catalog(config),
            interactor=Interactor(
                driver,
                timeout=config.wait_timeout,
                poll_interval=config.poll_interval,
                settle_delay=config.settle_delay
            ),
            config=config,
            verbose=verbose,
        )
        return await func(ctx)
