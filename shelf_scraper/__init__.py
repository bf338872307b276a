"""
Browser-driven product listing scraper with synchronized waits and
confirmed pagination.
"""

from .models import LocatorSpec, LocatorStrategy, PageState, PageTarget, ProductInfo, ProductRecord, ScrapeResult
from .config import ScrapeConfig
from .driver import Driver, PlaywrightDriver
from .snapshot import SnapshotDriver
from .interaction import ClickMode, Interactor
from .locators import LocatorCatalog
from .extractor import RecordExtractor
from .pagination import PaginationTraversal, TraversalState
from .session import ScrapeSession
from .sinks import CsvSink
from .scenarios import SCENARIOS, run_scenario
from .errors import (
    ScraperError,
    UnknownLocator,
    NoSuchElement,
    StaleElement,
    TimeoutWaiting,
    PageLoadFailed,
    NavigationNotConfirmed,
    MissingField,
    ScenarioCheckFailed,
    UnknownScenario,
)

__version__ = "1.0.0"

__all__ = [
    "LocatorSpec",
    "LocatorStrategy",
    "PageState",
    "PageTarget",
    "ProductInfo",
    "ProductRecord",
    "ScrapeResult",
    "ScrapeConfig",
    "Driver",
    "PlaywrightDriver",
    "SnapshotDriver",
    "ClickMode",
    "Interactor",
    "LocatorCatalog",
    "RecordExtractor",
    "PaginationTraversal",
    "TraversalState",
    "ScrapeSession",
    "CsvSink",
    "SCENARIOS",
    "run_scenario",
    "ScraperError",
    "UnknownLocator",
    "NoSuchElement",
    "StaleElement",
    "TimeoutWaiting",
    "PageLoadFailed",
    "NavigationNotConfirmed",
    "MissingField",
    "ScenarioCheckFailed",
    "UnknownScenario",
]
