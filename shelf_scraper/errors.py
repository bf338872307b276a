"""
Exception taxonomy for the scraper.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for every error raised by shelf_scraper."""


class UnknownLocator(ScraperError):
    """Locator name is not in the catalog. A configuration defect."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown locator: '{name}'")


class NoSuchElement(ScraperError):
    """A selector matched nothing on the current page."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"No element matches {selector}")


class StaleElement(NoSuchElement):
    """A handle or the page behind it went away, usually mid-navigation."""

    def __init__(self, action: str, detail: str):
        self.action = action
        ScraperError.__init__(self, f"Element went stale during {action}: {detail}")


class TimeoutWaiting(ScraperError):
    """An explicit wait ran out before its condition held."""

    def __init__(self, message: str, timeout: float):
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:.1f}s waiting for {message}")


class PageLoadFailed(ScraperError):
    def __init__(self, url: str, detail: str):
        self.url = url
        super().__init__(f"Could not load {url}: {detail}")


class NavigationNotConfirmed(ScraperError):
    """Pagination could not confirm that page `page` settled."""

    def __init__(self, page: int, reason: Optional[str] = None):
        self.page = page
        self.reason = reason
        message = f"Navigation to page {page} not confirmed"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MissingField(ScraperError):
    """A required field could not be read from a listing card."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Listing card has no '{field}'")


class ScenarioCheckFailed(ScraperError):
    """A scenario checkpoint did not hold."""


class UnknownScenario(ScraperError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown scenario: '{name}'")
