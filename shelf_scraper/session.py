from pathlib import Path
from typing import List, Optional, Sequence
from rich.console import Console
from .config import ScrapeConfig
from .driver import Driver
from .errors import MissingField
from .extractor import RecordExtractor
from .interaction import Interactor
from .locators import LocatorCatalog
from .models import CSV_HEADER, PageTarget, ProductRecord, ScrapeResult
from .pagination import PaginationTraversal
from .sinks import CsvSink


console = Console()


class ScrapeSession:
    """
    Main orchestrator: walks each target's pages, extracts listing cards and
    numbers the records across the whole run.

    `running_index` is the last sequence number handed out. It only ever
    grows, so numbers stay unique and gap-free across categories and pages.
    """

    def __init__(
        self,
        driver: Driver,
        sink: CsvSink,
        catalog: Optional[LocatorCatalog] = None,
        config: Optional[ScrapeConfig] = None,
        verbose: bool = True
    ):
        self.driver = driver
        self.sink = sink
        self.catalog = catalog or LocatorCatalog.default()
        self.config = config or ScrapeConfig()
        self.verbose = verbose

        self.interactor = Interactor(
            driver,
            timeout=self.config.wait_timeout,
            poll_interval=self.config.poll_interval,
            settle_delay=self.config.settle_delay
        )
        self.extractor = RecordExtractor(driver, self.catalog)
        self.pagination = PaginationTraversal(
            self.interactor,
            self.catalog,
            timeout=self.config.navigation_timeout,
            click_mode=self.config.pagination_click_mode
        )

        self.running_index = 0
        self.records: List[ProductRecord] = []
        self.pages_visited = 0
        self.incomplete_targets: List[int] = []

    @property
    def max_records_per_page(self) -> int:
        return self.config.max_records_per_page

    async def run(self, targets: Sequence[PageTarget]) -> ScrapeResult:
        """
        Scrape every target in order and write each record to the sink.

        Errors propagate after the sink is closed; whatever was written before
        the failure is still available in `self.records`.
        """
        self.sink.write_header(CSV_HEADER)
        try:
            for target_index, target in enumerate(targets, 1):
                await self._run_target(target_index, target)
        finally:
            self.sink.close()

        if self.verbose:
            console.print(
                f"Scraping complete: {len(self.records)} records from {self.pages_visited} pages"
            )
            if self.incomplete_targets:
                console.print(
                    f"[yellow]Incomplete run: no listing cards on the first page of "
                    f"target(s) {self.incomplete_targets}[/yellow]"
                )

        return ScrapeResult(
            records=list(self.records),
            total_count=len(self.records),
            pages_visited=self.pages_visited,
            incomplete=bool(self.incomplete_targets),
            incomplete_targets=list(self.incomplete_targets),
        )

    async def _run_target(self, target_index: int, target: PageTarget) -> None:
        if target.category_url:
            if self.verbose:
                console.print(f"Fetching category: {target.category_url}")
            await self.driver.navigate(target.category_url)

        for page_number in range(1, target.page_count + 1):
            if page_number > 1:
                state = await self.pagination.go_to_page(page_number)
                if self.verbose:
                    console.print(f"  Settled on page {state.page_index}: {state.url}")

            card_count = await self._scrape_current_page(target_index, page_number)

            # An empty first page means the listing never loaded; trailing
            # empty pages are just a short category.
            if card_count == 0 and page_number == 1:
                self.incomplete_targets.append(target_index)

    async def _scrape_current_page(self, target_index: int, page_number: int) -> int:
        """Extract up to max_records_per_page records; returns the number of cards found."""
        # Cards are re-located on every page, handles from before a navigation are stale.
        cards = await self.interactor.find_all(
            self.catalog.resolve("product_card"),
            timeout=self.config.listing_timeout
        )
        self.pages_visited += 1
        await self._save_snapshot(target_index, page_number)

        written = 0
        for card in cards:
            if written >= self.max_records_per_page:
                break

            try:
                info = await self.extractor.extract(card)
            except MissingField as e:
                if not self.config.skip_cards_missing_name:
                    raise
                if self.verbose:
                    console.print(f"[yellow]  Skipping card: {e}[/yellow]")
                continue

            self.running_index += 1
            record = ProductRecord.numbered(info, self.running_index)
            self.sink.write_row(record.as_row())
            self.records.append(record)
            written += 1

        if self.verbose:
            console.print(f"  Page {page_number}: {len(cards)} cards found, {written} records written")

        return len(cards)

    async def _save_snapshot(self, target_index: int, page_number: int) -> None:
        if not self.config.snapshot_dir:
            return
        snapshot_dir = Path(self.config.snapshot_dir)
        snapshot_dir.mkdir(parents=True, exist_ok=True)
        path = snapshot_dir / f"target{target_index}_page{page_number}.html"
        path.write_text(await self.driver.page_source(), encoding="utf-8")
        if self.verbose:
            console.print(f"  HTML saved to {path}")
