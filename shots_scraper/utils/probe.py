import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional, Sequence, TypeVar

from playwright.async_api import Error as PWError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def find_first(candidates: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """First candidate satisfying `predicate`, in priority order; None if none do."""
    for candidate in candidates:
        if predicate(candidate):
            return candidate
    return None


async def afind_first(
    candidates: Iterable[T],
    predicate: Callable[[T], Awaitable[bool]],
) -> Optional[T]:
    """Async-predicate version of find_first (predicate may touch the page)."""
    for candidate in candidates:
        if await predicate(candidate):
            return candidate
    return None


@dataclass
class ContentProbe:
    selector: Optional[str]
    count: int

    @property
    def found(self) -> bool:
        return self.selector is not None and self.count > 0


async def count_matches(page, selector: str) -> int:
    """Number of elements matching `selector`; a selector the engine rejects counts as 0."""
    try:
        return await page.locator(selector).count()
    except PWError as e:
        logger.debug("Selector %r rejected: %s", selector, e)
        return 0


async def detect_content(page, selectors: Sequence[str], log: logging.Logger = logger) -> ContentProbe:
    """
    Tries each selector candidate in order and returns the first one that
    matches anything. The markup has no stable hook, so several plausible
    patterns are ranked from specific to broad.
    """
    counts: dict[str, int] = {}

    async def has_matches(selector: str) -> bool:
        counts[selector] = await count_matches(page, selector)
        log.info('   Checking "%s": %d elements found', selector, counts[selector])
        return counts[selector] > 0

    selector = await afind_first(selectors, has_matches)
    if selector is None:
        return ContentProbe(selector=None, count=0)
    return ContentProbe(selector=selector, count=counts[selector])
