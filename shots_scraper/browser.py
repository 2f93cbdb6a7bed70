import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import async_playwright, Error as PWError, Page
# Asynchronous Playwright API: one driver, one browser, one context, one page per run.

from shots_scraper.config import ScraperSettings, UA
from shots_scraper.errors import NavigationError

logger = logging.getLogger(__name__)


CHROME_ARGS = [
    "--disable-blink-features=AutomationControlled",
    # Keeps navigator.webdriver from being flagged by the site's bot checks.

    "--no-sandbox",
    # Required inside containers and serverless sandboxes.

    "--disable-dev-shm-usage",
    # /dev/shm is tiny in Docker; Chromium crashes without this.
]

VIEWPORT = {"width": 1440, "height": 900}
# Desktop width. Below ~800px the gallery switches to its mobile layout.


async def open_page(headless: bool = True, user_agent: str = UA):
    """
    Starts Playwright, launches Chromium and opens one isolated context + page.

    Returns:
        pw: Playwright instance
        browser: Chromium browser object
        context: Browser context carrying the desktop user agent
        page: The tab all navigation and extraction happens in
    """

    pw = await async_playwright().start()

    try:
        browser = await pw.chromium.launch(headless=headless, args=CHROME_ARGS)
        context = await browser.new_context(user_agent=user_agent, viewport=VIEWPORT)
        page = await context.new_page()
    except BaseException:
        # Launch failed half way; don't leave the driver running.
        await pw.stop()
        raise

    return pw, browser, context, page


async def close_page(pw, browser, context):
    """
    Closes context, browser process and the Playwright driver, in that order.
    Each step runs even if an earlier one fails.
    """

    try:
        await context.close()
    except PWError as e:
        logger.debug("context close failed: %s", e)

    try:
        await browser.close()
        # Kills the Chromium process; skipping this leaves zombie browsers.
    except PWError as e:
        logger.debug("browser close failed: %s", e)

    await pw.stop()


@asynccontextmanager
async def browser_session(settings: ScraperSettings) -> AsyncIterator[Page]:
    """Yields a fresh page; the browser is torn down on every exit path."""
    pw, browser, context, page = await open_page(
        headless=settings.headless,
        user_agent=settings.user_agent,
    )
    try:
        yield page
    finally:
        await close_page(pw, browser, context)
        logger.info("[OK] Browser closed")


async def navigate(page, url: str, timeout_ms: int = 60_000, settle_ms: int = 10_000):
    """
    Opens `url` and waits for client-side rendering to fill the page.

    Only waits for DOMContentLoaded: the gallery is a SPA that keeps fetching
    long after that, so networkidle would never settle. Not retried.
    """
    logger.info("Navigating to %s", url)
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
    except PWError as e:
        raise NavigationError(f"Failed to load {url}: {e}") from e

    logger.info("[OK] Page loaded, waiting %d ms for dynamic content", settle_ms)
    await page.wait_for_timeout(settle_ms)
