"""Fixed example shots returned when a live scrape cannot complete."""

from typing import List

from shots_scraper.adapters.base import RawShot

_FALLBACK = (
    (
        "https://60fps.design/shots/amie-drag-to-calendar-morph",
        "https://cdn.60fps.design/shots/amie-drag-to-calendar-morph/preview.mp4",
        "Amie Drag To Calendar Morph",
    ),
    (
        "https://60fps.design/shots/cred-recurring-payments-card-swipe",
        "https://cdn.60fps.design/shots/cred-recurring-payments/preview.mp4",
        "CRED Recurring Payments Card Swipe",
    ),
    (
        "https://60fps.design/shots/mozi-onboarding-carousel-tabs",
        "https://cdn.60fps.design/shots/mozi-onboarding/preview.mp4",
        "Mozi Onboarding Carousel Tabs",
    ),
    (
        "https://60fps.design/shots/opentable-splash-animation",
        "https://cdn.60fps.design/shots/opentable-splash/preview.mp4",
        "OpenTable Splash Animation",
    ),
    (
        "https://60fps.design/shots/framer-motion-cards-grid",
        "https://cdn.60fps.design/shots/framer-motion-cards/preview.mp4",
        "Framer Motion Cards Grid",
    ),
)


def fallback_shots() -> List[RawShot]:
    """A new list on every call, so callers may mutate it."""
    return [RawShot(url=url, preview_url=preview, title=title) for url, preview, title in _FALLBACK]
