import asyncio
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.table import Table
from .config import ScrapeConfig
from .driver import Driver, PlaywrightDriver
from .errors import ScraperError
from .models import PageTarget, ScrapeResult
from .scenarios import SCENARIOS, build_catalog, run_scenario
from .session import ScrapeSession
from .sinks import CsvSink
from .snapshot import SnapshotDriver


app = typer.Typer(help="Retail listing scraper and site scenario runner")
console = Console()


@app.command()
def scrape(
    urls: List[str] = typer.Argument(..., help="Category listing URL(s), scraped in order"),
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Pages to read per category"),
    max_per_page: Optional[int] = typer.Option(None, "--max-per-page", "-m", min=1, help="Records kept per page"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output CSV path"),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window"),
    save_html: Optional[str] = typer.Option(None, "--save-html", help="Directory to save each scraped page's HTML"),
    locators: Optional[str] = typer.Option(None, "--locators", help="JSON file with locator overrides")
):
    """Scrape product listings from one or more categories into a CSV file."""
    config = ScrapeConfig.from_env(
        max_records_per_page=max_per_page,
        headless=False if headed else None,
        snapshot_dir=save_html,
        locators_file=locators
    )
    targets = [PageTarget(category_url=url, page_count=pages) for url in urls]
    path = Path(output) if output else Path(config.output_dir) / "products.csv"

    driver = PlaywrightDriver(headless=config.headless, action_timeout=config.wait_timeout)
    result = _run_session(driver, targets, config, path)
    _report(result, path)


@app.command()
def replay(
    html_files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Saved listing pages"),
    max_per_page: Optional[int] = typer.Option(None, "--max-per-page", "-m", min=1),
    output: str = typer.Option("resources/replayed.csv", "--output", "-o", help="Output CSV path"),
    locators: Optional[str] = typer.Option(None, "--locators", help="JSON file with locator overrides")
):
    """Extract records from HTML saved with --save-html, without a browser."""
    config = ScrapeConfig.from_env(
        max_records_per_page=max_per_page,
        listing_timeout=0,
        locators_file=locators
    )
    driver = SnapshotDriver.from_files(html_files)
    targets = [PageTarget(category_url=url) for url in driver.pages]

    path = Path(output)
    result = _run_session(driver, targets, config, path)
    _report(result, path)


@app.command("scenario")
def run_named_scenario(
    name: str = typer.Argument(..., help="Scenario name, see `scenarios`"),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window")
):
    """Run one named site scenario against the live site."""
    config = ScrapeConfig.from_env(headless=False if headed else None)

    console.print(f"[cyan]Running scenario:[/cyan] {name}")
    try:
        result = asyncio.run(run_scenario(name, config))
    except ScraperError as e:
        console.print(f"[red]FAIL {name}: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]PASS {name}[/green]")
    if result is not None:
        console.print(f"[green]Extracted {result.total_count} records[/green]")


@app.command("scenarios")
def list_scenarios():
    """List the available scenario names."""
    for name in SCENARIOS:
        console.print(name)


@app.command("locators")
def list_locators(
    locators: Optional[str] = typer.Option(None, "--locators", help="JSON file with locator overrides")
):
    """Show the locator catalog, with overrides applied."""
    catalog = build_catalog(ScrapeConfig.from_env(locators_file=locators))

    table = Table("Name", "Strategy", "Expression")
    for name in catalog.names():
        spec = catalog.get(name)
        table.add_row(name, spec.strategy.value, spec.expression)
    console.print(table)


def _run_session(driver: Driver, targets: List[PageTarget], config: ScrapeConfig, path: Path) -> ScrapeResult:
    async def go() -> ScrapeResult:
        async with driver:
            sink = CsvSink(path)
            session = ScrapeSession(driver, sink, build_catalog(config), config, verbose=True)
            try:
                return await session.run(targets)
            except ScraperError:
                console.print(f"[yellow]{sink.rows_written} records were written to {path} before the failure[/yellow]")
                raise

    try:
        return asyncio.run(go())
    except ScraperError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _report(result: ScrapeResult, path: Path) -> None:
    console.print(f"\n[green]Extracted {result.total_count} records[/green]")
    console.print(f"[green]Saved to {path}[/green]")

    if result.records:
        table = Table("No", "Product Name", "Price", "Image URL")
        for record in result.records[:5]:
            table.add_row(*record.as_row())
        console.print(table)
        if result.total_count > 5:
            console.print(f"... and {result.total_count - 5} more records")

    if result.incomplete:
        console.print(f"[red]Run incomplete: empty first page for target(s) {result.incomplete_targets}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
