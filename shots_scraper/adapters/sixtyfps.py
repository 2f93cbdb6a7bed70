import logging
from typing import List
from urllib.parse import urlparse

from shots_scraper.adapters.base import RawShot, SiteAdapter
from shots_scraper.browser import navigate
from shots_scraper.errors import SiteErrorPage, StructureChanged
from shots_scraper.utils.extract import extract_shots
from shots_scraper.utils.load_more import load_all_content
from shots_scraper.utils.probe import detect_content

logger = logging.getLogger(__name__)


def site_origin(url: str) -> str:
    """'https://60fps.design/shots/x' -> 'https://60fps.design'."""
    parts = urlparse(url)
    return f"{parts.scheme}://{parts.netloc}" if parts.netloc else url.rstrip("/")


class SixtyFpsAdapter(SiteAdapter):
    name = "60fps.design"
    domains = ["60fps.design"]

    # Framer renders the grid without stable class names: most specific first.
    CONTENT_SELECTORS = (
        'a[href^="/shots/"]',
        'a[href*="/shots/"]',
        '[href*="/shots/"]',
        'a[href*="shots"]',
        "video",
        "video source",
        '[data-framer-name*="shot"]',
        '[data-framer-name*="card"]',
        '[data-framer-name*="grid"]',
        '[class*="shot"]',
        '[class*="card"]',
        '[class*="item"]',
    )

    BUTTON_SELECTORS = (
        'button:has-text("Load")',
        'button:has-text("Show more")',
        'button:has-text("Load more")',
        'button:has-text("More")',
        '[data-framer-name*="load"]',
        '[data-framer-name*="more"]',
        '[data-framer-name*="button"]',
        'button[class*="load"]',
        'button[class*="more"]',
        ".load-more",
        ".show-more",
        "button",
        '[role="button"]',
    )

    ERROR_TITLE_MARKERS = ("Wups", "Error")

    async def navigate_board(self, page, url, settings):
        await navigate(
            page,
            url,
            timeout_ms=settings.navigation_timeout_ms,
            settle_ms=settings.settle_ms,
        )

    async def detect_content(self, page, log=logger) -> str:
        probe = await detect_content(page, self.CONTENT_SELECTORS, log=log)
        if probe.found:
            log.info("[OK] Found content using selector: %s", probe.selector)
            return probe.selector

        title = await page.title()
        log.warning('Page title: "%s" | Current URL: %s', title, page.url)
        if any(marker in title for marker in self.ERROR_TITLE_MARKERS):
            raise SiteErrorPage(
                "The shots page appears to be showing an error. "
                "The site might be down or have changed structure."
            )
        raise StructureChanged("No shot content found with any known selectors. The site structure may have changed.")

    async def load_all(self, page, content_selector, settings, log=logger):
        return await load_all_content(
            page,
            content_selector,
            self.BUTTON_SELECTORS,
            max_attempts=settings.max_load_attempts,
            settle_ms=settings.click_settle_ms,
            log=log,
        )

    async def extract(self, page, settings, log=logger) -> List[RawShot]:
        log.info("Extracting shot data...")
        html = await page.content()
        shots = extract_shots(
            html,
            base_url=site_origin(settings.target_url),
            max_depth=settings.ancestor_depth,
            log=log,
        )
        log.info("[OK] Successfully extracted %d unique shots", len(shots))
        return shots
