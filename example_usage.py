"""
Example usage of the listing scraper.
"""

import asyncio
from shelf_scraper import (
    CsvSink,
    LocatorCatalog,
    PageTarget,
    PlaywrightDriver,
    ScrapeConfig,
    ScrapeSession,
    ScraperError,
    run_scenario,
)
from shelf_scraper.config import COFFEE_URL, JUICE_URL


async def example_1_basic_usage():
    """Three pages of one category into a CSV file."""
    print("=" * 60)
    print("Example 1: Multi-page scrape")
    print("=" * 60)

    config = ScrapeConfig(max_records_per_page=5, headless=True)

    async with PlaywrightDriver(headless=config.headless) as driver:
        sink = CsvSink("resources/example_pages123.csv")
        session = ScrapeSession(driver, sink, LocatorCatalog.default(), config)

        try:
            result = await session.run([PageTarget(category_url=JUICE_URL, page_count=3)])
        except ScraperError as e:
            print(f"Error: {e} ({len(session.records)} records written before it)")
            return

        print(f"\n✓ Scraped {result.total_count} records")
        for record in result.records[:3]:
            print(f"  {record.as_row()}")


async def example_2_categories():
    """Two categories numbered as one run."""
    print("\n" + "=" * 60)
    print("Example 2: Several categories")
    print("=" * 60)

    config = ScrapeConfig(max_records_per_page=10, snapshot_dir="resources/html")

    async with PlaywrightDriver() as driver:
        sink = CsvSink("resources/example_categories.csv")
        session = ScrapeSession(driver, sink, config=config)
        result = await session.run([
            PageTarget(category_url=JUICE_URL),
            PageTarget(category_url=COFFEE_URL),
        ])

    print(f"\n✓ Extracted {result.total_count} records, incomplete={result.incomplete}")
    print("Saved pages can be re-read with: shelf-scraper replay resources/html/*.html")


async def example_3_scenario():
    """A named site scenario with setup and teardown handled for you."""
    print("\n" + "=" * 60)
    print("Example 3: Search scenario")
    print("=" * 60)

    try:
        await run_scenario("search-products", ScrapeConfig(headless=False))
        print("\n✓ search-products passed")
    except ScraperError as e:
        print(f"Error: {e}")


def main():
    """Run examples."""
    print("Listing Scraper - Example Usage\n")

    # Run examples (comment out as needed)
    asyncio.run(example_1_basic_usage())
    # asyncio.run(example_2_categories())
    # asyncio.run(example_3_scenario())


if __name__ == "__main__":
    main()
