import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from shots_scraper.adapters.base import RawShot, SiteAdapter
from shots_scraper.adapters.sixtyfps import SixtyFpsAdapter
from shots_scraper.browser import browser_session
from shots_scraper.config import ScraperSettings, load_settings
from shots_scraper.fallback import fallback_shots

logger = logging.getLogger(__name__)


# Registered adapters; each declares the hosts it handles.
ADAPTERS: list[SiteAdapter] = [
    SixtyFpsAdapter(),
]


def pick_adapter(url: str) -> SiteAdapter:
    """
    Selects the adapter for `url` by hostname.
    Example:
        "https://60fps.design" -> SixtyFpsAdapter
    """
    host = urlparse(url).netloc.lower()

    for a in ADAPTERS:
        if any(d in host for d in a.domains):
            return a

    raise ValueError(f"No adapter registered for host: {host}")


@dataclass
class CrawlResult:
    shots: List[RawShot] = field(default_factory=list)
    used_fallback: bool = False
    error: Optional[str] = None


async def scrape_live(url: str, settings: ScraperSettings, log: logging.Logger = logger) -> List[RawShot]:
    """
    One live run:
        1. open a browser session
        2. navigate and let the SPA render
        3. find the selector that identifies shots
        4. click "load more" until the grid stops growing
        5. extract and dedupe shots
    The browser is closed on every exit path. Errors propagate.
    """
    adapter = pick_adapter(url)

    async with browser_session(settings) as page:
        await adapter.navigate_board(page, url, settings)
        content_selector = await adapter.detect_content(page, log=log)
        await adapter.load_all(page, content_selector, settings, log=log)
        return await adapter.extract(page, settings, log=log)


async def crawl_shots(
    url: Optional[str] = None,
    settings: Optional[ScraperSettings] = None,
    log: logging.Logger = logger,
) -> CrawlResult:
    """
    Live scrape with the fixed example set as the failure path, so callers
    always get a well-formed, non-empty list unless fallback is disabled.
    """
    settings = settings or load_settings()
    url = url or settings.target_url

    log.info("Starting scraper for %s", url)
    try:
        shots = await scrape_live(url, settings, log=log)
    except Exception as e:
        if not settings.use_fallback:
            raise
        log.error("[ERR ] Error during scraping: %s", e)
        log.warning("[FALLBACK] Using example data; these are not live results")
        return CrawlResult(shots=fallback_shots(), used_fallback=True, error=str(e))

    log.info("[OK] Extracted %d shots", len(shots))
    return CrawlResult(shots=shots)
