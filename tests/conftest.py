"""
Pytest fixtures for the shot scraper test suite.

The fakes below stand in for the small slice of the Playwright Page API the
scraper touches: locator().count()/all(), goto, title, content,
wait_for_timeout.
"""

from typing import Callable, Dict, List, Optional

import pytest
from playwright.async_api import Error as PWError

from shots_scraper.config import ScraperSettings


class FakeElement:
    def __init__(self, page, text: Optional[str], visible: bool = True, click_error: Optional[Exception] = None):
        self.page = page
        self.text = text
        self.visible = visible
        self.click_error = click_error
        self.clicks = 0

    async def text_content(self):
        return self.text

    async def is_visible(self):
        return self.visible

    async def click(self):
        if self.click_error is not None:
            raise self.click_error
        self.clicks += 1
        self.page.clicks += 1


class FakeLocator:
    def __init__(self, page, selector: str):
        self.page = page
        self.selector = selector

    async def count(self):
        if self.selector in self.page.invalid:
            raise PWError(f"Unexpected token in {self.selector}")
        if self.page.count_fn is not None and self.selector == self.page.content_selector:
            return self.page.count_fn(self.page)
        return self.page.counts.get(self.selector, 0)

    async def all(self):
        if self.selector in self.page.invalid:
            raise PWError(f"Unexpected token in {self.selector}")
        return list(self.page.buttons.get(self.selector, []))


class FakePage:
    def __init__(
        self,
        counts: Optional[Dict[str, int]] = None,
        html: str = "",
        title: str = "60fps.design",
        content_selector: Optional[str] = None,
        count_fn: Optional[Callable[["FakePage"], int]] = None,
        invalid=(),
        goto_error: Optional[Exception] = None,
    ):
        self.counts = counts or {}
        self.html = html
        self._title = title
        self.content_selector = content_selector
        self.count_fn = count_fn
        self.invalid = set(invalid)
        self.goto_error = goto_error
        self.buttons: Dict[str, List[FakeElement]] = {}
        self.clicks = 0
        self.waits: List[int] = []
        self.gotos: List[dict] = []
        self.url = "about:blank"

    def add_button(
        self, selector: str, text: Optional[str], visible: bool = True, click_error: Optional[Exception] = None
    ) -> FakeElement:
        button = FakeElement(self, text, visible, click_error)
        self.buttons.setdefault(selector, []).append(button)
        return button

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def goto(self, url, wait_until=None, timeout=None):
        self.gotos.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    async def wait_for_timeout(self, ms):
        self.waits.append(ms)

    async def title(self):
        return self._title

    async def content(self):
        return self.html


@pytest.fixture
def fake_page():
    """Factory for FakePage instances."""
    return FakePage


@pytest.fixture
def fast_settings() -> ScraperSettings:
    """Default settings with every settle delay removed."""
    return ScraperSettings(settle_ms=0, click_settle_ms=0)


def video_card(href: Optional[str], src: str, link_text: str = "", extra: str = "") -> str:
    link = f'<a href="{href}">{link_text}</a>' if href else ""
    return (
        f'<div class="card">{extra}{link}'
        f'<div class="media"><video autoplay muted><source src="{src}"></video></div>'
        f"</div>"
    )


@pytest.fixture
def make_card():
    return video_card


@pytest.fixture
def gallery_html():
    """Five distinct shot cards, as served after client rendering."""
    cards = [
        video_card(
            f"/shots/example-shot-{i}",
            f"https://video.gumlet.io/bucket1/id{i}0000000/main.mp4",
            link_text=f"Example Shot {i}",
        )
        for i in range(1, 6)
    ]
    return "<html><head><title>60fps</title></head><body><main>" + "".join(cards) + "</main></body></html>"
