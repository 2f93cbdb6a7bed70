import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from playwright.async_api import Error as PWError

from shots_scraper.utils.probe import count_matches

logger = logging.getLogger(__name__)

LOAD_WORDS = ("load", "more", "show", "view")

# Attempts always made before a stalled count may end the loop.
MIN_ATTEMPTS = 3


@dataclass(frozen=True)
class LoadState:
    attempts: int = 0
    previous_count: int = 0
    current_count: int = 0
    clicked: bool = False


@dataclass
class LoadOutcome:
    state: LoadState
    reason: str  # "exhausted" | "no_control" | "stagnant"


def looks_like_load_control(text: Optional[str]) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(word in lowered for word in LOAD_WORDS)


def should_continue(state: LoadState, max_attempts: int) -> bool:
    """
    Loop condition evaluated after each attempt.

    Keeps going for at least MIN_ATTEMPTS, then only while a click grew the
    count. This can run one extra round after content has stabilised.
    """
    if state.attempts >= max_attempts:
        return False
    if not state.clicked and state.current_count > 0:
        return False
    return state.attempts < MIN_ATTEMPTS or (state.clicked and state.current_count > state.previous_count)


def stop_reason(state: LoadState, max_attempts: int) -> str:
    if state.attempts >= max_attempts:
        return "exhausted"
    if not state.clicked and state.current_count > 0:
        return "no_control"
    return "stagnant"


async def load_control_candidates(page, selectors: Sequence[str]):
    """Yields (selector, element) for visible elements whose text reads like 'load more', in priority order."""
    for selector in selectors:
        try:
            buttons = await page.locator(selector).all()
        except PWError as e:
            logger.debug("Button selector %r failed: %s", selector, e)
            continue
        for button in buttons:
            try:
                text = await button.text_content()
                visible = await button.is_visible()
            except PWError as e:
                logger.debug("Button under %r went away: %s", selector, e)
                break
            if visible and looks_like_load_control(text):
                yield selector, button


async def find_load_control(page, selectors: Sequence[str]):
    """First visible element, in selector priority order, whose text reads like 'load more'."""
    async for _, button in load_control_candidates(page, selectors):
        return button
    return None


async def click_load_control(page, selectors: Sequence[str], log: logging.Logger = logger) -> bool:
    """Clicks the first candidate that accepts a click. A failed click skips the rest of its selector."""
    failed = set()
    async for selector, button in load_control_candidates(page, selectors):
        if selector in failed:
            continue
        try:
            text = (await button.text_content() or "").strip()
            log.info('   Clicking button: "%s"', text)
            await button.click()
        except PWError as e:
            log.warning("   Load button click failed, trying next selector: %s", e)
            failed.add(selector)
            continue
        return True
    return False


async def load_all_content(
    page,
    content_selector: str,
    button_selectors: Sequence[str],
    *,
    max_attempts: int = 20,
    settle_ms: int = 3000,
    log: logging.Logger = logger,
) -> LoadOutcome:
    """
    Clicks "load more" controls until the gallery stops growing or the
    attempt budget runs out. Running out of budget is a normal stop.
    """
    state = LoadState()
    log.info("Looking for a load button to load all content...")

    while True:
        clicked = await click_load_control(page, button_selectors, log=log)

        if not clicked and state.attempts == 0:
            log.info("   No load button found, checking for existing content...")
        elif not clicked:
            log.info("   No more load buttons found")

        await page.wait_for_timeout(settle_ms)

        count = await count_matches(page, content_selector)
        state = replace(
            state,
            attempts=state.attempts + 1,
            previous_count=state.current_count,
            current_count=count,
            clicked=clicked,
        )
        log.info(
            "   Attempt %d: Found %d items (%s)",
            state.attempts,
            state.current_count,
            "after clicking button" if clicked else "no button clicked",
        )

        if not should_continue(state, max_attempts):
            break

    reason = stop_reason(state, max_attempts)
    if reason == "exhausted":
        log.warning("[DONE] Reached maximum load attempts (%d), stopping", max_attempts)
    elif reason == "no_control":
        log.info("[DONE] No load button available, using existing content")
    else:
        log.info("[DONE] Content stopped growing")
    log.info("Finished loading content. Total items found: %d", state.current_count)
    return LoadOutcome(state=state, reason=reason)
