from dataclasses import dataclass             # dataclass keeps scraped records light and readable
from typing import List, Optional, Sequence

@dataclass
class RawShot:                                    # One shot as scraped, before formatting
    url: str                                      # Absolute permalink; dedup key within a run
    preview_url: str                              # Playable preview video (required)
    title: Optional[str] = None                   # Display title, may be missing

class SiteAdapter:                                # Base class for site-specific adapters
    name: str = "base"                            # Adapter name, also the record `source`
    domains: List[str] = []                       # Host fragments handled by this adapter

    CONTENT_SELECTORS: Sequence[str] = ()         # Ranked probes for "shot" content
    BUTTON_SELECTORS: Sequence[str] = ()          # Ranked probes for "load more" controls

    async def navigate_board(self, page, url, settings): ...   # Open the gallery and let it render

    async def detect_content(self, page, log=None) -> str:     # Selector that identifies shots
        raise NotImplementedError

    async def load_all(self, page, content_selector, settings, log=None): ...  # Click "load more" until done

    async def extract(self, page, settings, log=None) -> List[RawShot]:
        """Implement in concrete adapters: snapshot + heuristics + dedupe."""
        raise NotImplementedError
