"""
Shot extraction heuristics.

The gallery exposes no data attribute tying a preview video to its shot page,
so each <video> is matched to a permalink and a title by searching outward
through its ancestors. Everything here works on an HTML snapshot parsed with
BeautifulSoup, so it runs the same against a live page or a saved fixture.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from shots_scraper.adapters.base import RawShot
from shots_scraper.config import TARGET_URL
from shots_scraper.utils.probe import find_first

logger = logging.getLogger(__name__)

SHOT_PATH = "/shots/"

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
TEXT_SELECTOR = "p, span, div"
LINK_SELECTOR = "a[href]"

# Site chrome that shows up in headings near the grid.
NAV_WORDS = ("Shots", "Apps", "Filter", "Learn")

# Generic text only counts as a title if it reads like a motion-design shot.
MOTION_KEYWORDS = (
    "Interaction",
    "Animation",
    "Swipe",
    "Card",
    "Button",
    "Progress",
    "Splash",
    "Gesture",
)

LINK_EXCLUDES = ("filter", "watch")
MIN_LINK_LENGTH = 16
MIN_LINK_TEXT_LENGTH = 6

HEADING_LENGTH = (11, 99)
TEXT_LENGTH = (16, 79)

DEFAULT_DEPTH = 8

_GUMLET_RE = re.compile(r"video\.gumlet\.io/[^/]+/([^/]+)")
_TRAILING_NUMBER_RE = re.compile(r"\s+\d+$")


def strip_trailing_number(text: str) -> str:
    """'Card Swipe 5' -> 'Card Swipe'."""
    return _TRAILING_NUMBER_RE.sub("", text).strip()


def slugify(title: str) -> str:
    slug = strip_trailing_number(title).lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _text(node: Tag) -> str:
    return node.get_text().strip()


def _attr(node: Tag, name: str) -> Optional[str]:
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def resolve_preview_url(video: Tag) -> Optional[str]:
    """<source src> first, then the video's own src, then data-src."""
    source = video.find("source")
    if source is not None:
        src = _attr(source, "src")
        if src:
            return src
    return _attr(video, "src") or _attr(video, "data-src")


def extract_video_id(preview_url: Optional[str]) -> Optional[str]:
    if not preview_url or "video.gumlet.io" not in preview_url:
        return None
    match = _GUMLET_RE.search(preview_url)
    return match.group(1) if match else None


def is_heading_title(text: str) -> bool:
    lo, hi = HEADING_LENGTH
    return lo <= len(text) <= hi and not any(word in text for word in NAV_WORDS)


def is_motion_text(text: str) -> bool:
    lo, hi = TEXT_LENGTH
    return lo <= len(text) <= hi and any(word in text for word in MOTION_KEYWORDS)


def is_shot_href(href: Optional[str]) -> bool:
    return bool(
        href
        and SHOT_PATH in href
        and not any(word in href for word in LINK_EXCLUDES)
        and len(href) >= MIN_LINK_LENGTH
    )


def normalize_href(href: str) -> str:
    if href.startswith("./"):
        href = href[2:]
    if not href.startswith("/"):
        href = "/" + href
    return href


def shot_url(base_url: str, path: str, video_id: Optional[str]) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    return f"{url}?video={video_id}" if video_id else url


def find_title_candidate(node: Tag) -> Optional[str]:
    """Qualifying heading text under `node`, or None."""
    texts = (_text(h) for h in node.select(HEADING_SELECTOR))
    return find_first(texts, is_heading_title)


def find_motion_text(node: Tag) -> Optional[str]:
    texts = (_text(el) for el in node.select(TEXT_SELECTOR))
    return find_first(texts, is_motion_text)


def find_permalink_candidate(node: Tag) -> Optional[Tag]:
    """First anchor under `node` that points at a shot page."""
    return find_first(node.select(LINK_SELECTOR), lambda a: is_shot_href(_attr(a, "href")))


def iter_ancestors(node: Tag, max_depth: int) -> Iterable[Tag]:
    """`node` and its parents, at most `max_depth` of them, stopping at <html>."""
    current = node
    depth = 0
    while current is not None and depth < max_depth:
        yield current
        if current.name == "html":
            return
        current = current.parent
        depth += 1


def search_ancestors(
    video: Tag,
    video_id: Optional[str],
    base_url: str = TARGET_URL,
    max_depth: int = DEFAULT_DEPTH,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Walks outward from the video looking for a title and a permalink.
    Returns (url, title); the walk ends at the first permalink.
    """
    url = None
    title = None

    for node in iter_ancestors(video, max_depth):
        heading = find_title_candidate(node)
        if heading:
            title = heading
        elif not title:
            title = find_motion_text(node)

        link = find_permalink_candidate(node)
        if link is not None:
            url = shot_url(base_url, normalize_href(_attr(link, "href")), video_id)
            link_text = _text(link)
            if not title and len(link_text) >= MIN_LINK_TEXT_LENGTH:
                title = strip_trailing_number(link_text)
            break

    return url, title


def synthesize_url(
    video_id: str,
    title: Optional[str],
    position: int,
    base_url: str = TARGET_URL,
) -> Tuple[str, str]:
    """Shot URL built from the title (or the video id) when no permalink exists."""
    slug = slugify(title) if title else ""
    if not slug:
        slug = f"motion-video-{video_id[:8]}"
        title = title or f"Motion Video {position}"
    return shot_url(base_url, f"{SHOT_PATH}{slug}", video_id), title


def extract_shot(
    video: Tag,
    position: int,
    base_url: str = TARGET_URL,
    max_depth: int = DEFAULT_DEPTH,
) -> Optional[RawShot]:
    """RawShot for one <video>, or None if no usable URL pair was found."""
    preview_url = resolve_preview_url(video)
    video_id = extract_video_id(preview_url)

    url, title = search_ancestors(video, video_id, base_url=base_url, max_depth=max_depth)

    if not url and video_id:
        url, title = synthesize_url(video_id, title, position, base_url=base_url)

    if not url or not preview_url:
        return None

    return RawShot(url=url, preview_url=preview_url, title=title or f"Video {position}")


def dedupe_shots(shots: Iterable[RawShot], log: logging.Logger = logger) -> List[RawShot]:
    """Keeps the first shot seen for each URL, in input order."""
    seen = set()
    out: List[RawShot] = []
    for shot in shots:
        if shot.url in seen:
            log.debug("[DUPE] %s", shot.url)
            continue
        seen.add(shot.url)
        out.append(shot)
    return out


def extract_shots(
    html: str,
    base_url: str = TARGET_URL,
    max_depth: int = DEFAULT_DEPTH,
    log: logging.Logger = logger,
) -> List[RawShot]:
    soup = BeautifulSoup(html, "html.parser")
    # Inert in a scripted page; querySelectorAll never reaches inside these.
    for inert in soup.find_all(["noscript", "template"]):
        inert.decompose()
    videos = soup.find_all("video")
    log.info("Found %d video elements", len(videos))

    results: List[RawShot] = []
    for index, video in enumerate(videos):
        position = index + 1
        try:
            shot = extract_shot(video, position, base_url=base_url, max_depth=max_depth)
        except Exception as e:
            log.warning("[ERR ] Video %03d: %s", position, e)
            continue
        if shot is None:
            continue
        log.debug("[NEW ] Video %03d: %s", position, shot.url)
        results.append(shot)

    unique = dedupe_shots(results, log=log)
    log.info("Extracted %d unique shots from %d total", len(unique), len(results))
    return unique
