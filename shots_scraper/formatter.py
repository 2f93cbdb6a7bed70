"""Maps raw shots onto the row shape the datastore insert step expects."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from shots_scraper.adapters.base import RawShot

SOURCE = "60fps.design"

T = TypeVar("T")

_TRAILING_NUMBER_RE = re.compile(r"\s+\d+$")


class FormattedRecord(BaseModel):
    """One row for the `shots` table."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    preview_url: str
    source: str = SOURCE
    scraped_at: str


def title_from_url(url: Optional[str]) -> str:
    """'.../shots/card-swipe?video=x' -> 'Card Swipe'."""
    if not url:
        return "Untitled Shot"
    parts = url.split("/shots/")
    if len(parts) < 2:
        return "Untitled Shot"
    slug = re.sub(r"\?.*$", "", parts[1])
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def clean_title(title: str) -> str:
    return _TRAILING_NUMBER_RE.sub("", title).strip()


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def format_records(shots: Iterable[RawShot], scraped_at: Optional[str] = None) -> List[FormattedRecord]:
    """All records of one run share a single timestamp."""
    stamp = scraped_at or now_iso()
    return [
        FormattedRecord(
            title=clean_title(shot.title or title_from_url(shot.url)),
            url=shot.url,
            preview_url=shot.preview_url,
            source=SOURCE,
            scraped_at=stamp,
        )
        for shot in shots
    ]


def apply_limit(records: Sequence[T], limit: Optional[int]) -> List[T]:
    if not limit:
        return list(records)
    return list(records[:limit])


def records_to_json(records: Iterable[FormattedRecord]) -> list[dict]:
    return [record.model_dump() for record in records]
