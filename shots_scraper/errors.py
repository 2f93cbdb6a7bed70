"""Run-level failures. Anything raised from here triggers the fallback set."""


class ScraperError(RuntimeError):
    """Base class for scraper failures."""


class NavigationError(ScraperError):
    """The target page could not be opened (timeout or network failure)."""


class ContentNotFound(ScraperError):
    """No selector candidate matched any element on the page."""


class SiteErrorPage(ContentNotFound):
    """The site served an error page instead of the gallery."""


class StructureChanged(ContentNotFound):
    """The page loaded but none of the known markup patterns are present."""
