"""
Tests for run orchestration: adapter selection, the live pipeline against a
fake page, browser teardown and the fallback path.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PWError

from shots_scraper import browser, dispatcher
from shots_scraper.adapters.sixtyfps import SixtyFpsAdapter
from shots_scraper.dispatcher import crawl_shots, pick_adapter, scrape_live
from shots_scraper.errors import NavigationError
from shots_scraper.fallback import fallback_shots
from shots_scraper.formatter import format_records


def _session_for(page):
    @asynccontextmanager
    async def session(settings):
        yield page

    return session


def test_pick_adapter():
    assert isinstance(pick_adapter("https://60fps.design/shots"), SixtyFpsAdapter)
    with pytest.raises(ValueError):
        pick_adapter("https://example.com")


class TestScrapeLive:
    @pytest.mark.asyncio
    async def test_full_pipeline(self, fake_page, fast_settings, gallery_html):
        page = fake_page(counts={'a[href^="/shots/"]': 5}, html=gallery_html)

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            shots = await scrape_live("https://60fps.design", fast_settings)

        assert len(shots) == 5
        assert page.gotos == [
            {"url": "https://60fps.design", "wait_until": "domcontentloaded", "timeout": 60_000}
        ]

    @pytest.mark.asyncio
    async def test_serverless_depth_used(self, fake_page, fast_settings):
        inner = '<video><source src="https://cdn.example.com/x.mp4"></video>'
        for _ in range(6):
            inner = f"<div>{inner}</div>"
        html = f'<section><a href="/shots/seven-levels-up">Seven levels up</a>{inner}</section>'
        page = fake_page(counts={"video": 1}, html=html)

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            deep = await scrape_live("https://60fps.design", fast_settings)
            shallow = await scrape_live("https://60fps.design", fast_settings.serverless())

        assert [s.url for s in deep] == ["https://60fps.design/shots/seven-levels-up"]
        assert shallow == []


class TestCrawlShots:
    @pytest.mark.asyncio
    async def test_live_result(self, fake_page, fast_settings, gallery_html):
        page = fake_page(counts={"video": 5}, html=gallery_html)

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            result = await crawl_shots(settings=fast_settings)

        assert not result.used_fallback
        assert len(result.shots) == 5

    @pytest.mark.asyncio
    async def test_navigation_failure_returns_fallback(self, fake_page, fast_settings):
        page = fake_page(goto_error=PWError("Timeout 60000ms exceeded"))

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            result = await crawl_shots(settings=fast_settings)

        assert result.used_fallback
        assert result.shots == fallback_shots()
        assert "Timeout" in result.error

        stamp = "2026-01-01T00:00:00Z"
        assert format_records(result.shots, stamp) == format_records(fallback_shots(), stamp)

    @pytest.mark.asyncio
    async def test_structure_change_returns_fallback(self, fake_page, fast_settings):
        page = fake_page(title="60fps.design")

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            result = await crawl_shots(settings=fast_settings)

        assert result.used_fallback
        assert all(s.url and s.preview_url for s in result.shots)

    @pytest.mark.asyncio
    async def test_loader_failure_returns_fallback(self, fast_settings):
        with patch.object(SixtyFpsAdapter, "navigate_board", AsyncMock()), \
             patch.object(SixtyFpsAdapter, "detect_content", AsyncMock(return_value="video")), \
             patch.object(SixtyFpsAdapter, "load_all", AsyncMock(side_effect=RuntimeError("page crashed"))), \
             patch.object(dispatcher, "browser_session", _session_for(MagicMock())):
            result = await crawl_shots(settings=fast_settings)

        assert result.used_fallback
        assert len(result.shots) == 5

    @pytest.mark.asyncio
    async def test_fallback_disabled_propagates(self, fake_page, fast_settings):
        page = fake_page(goto_error=PWError("net::ERR_NAME_NOT_RESOLVED"))
        settings = fast_settings.model_copy(update={"use_fallback": False})

        with patch.object(dispatcher, "browser_session", _session_for(page)):
            with pytest.raises(NavigationError):
                await crawl_shots(settings=settings)


class TestBrowserSession:
    @pytest.mark.asyncio
    async def test_closed_on_error(self, fast_settings):
        handles = ("pw", "browser", "context", "page")
        with patch.object(browser, "open_page", AsyncMock(return_value=handles)) as open_mock, \
             patch.object(browser, "close_page", AsyncMock()) as close_mock:
            with pytest.raises(RuntimeError):
                async with browser.browser_session(fast_settings) as page:
                    assert page == "page"
                    raise RuntimeError("boom")

        open_mock.assert_awaited_once_with(headless=True, user_agent=fast_settings.user_agent)
        close_mock.assert_awaited_once_with("pw", "browser", "context")

    @pytest.mark.asyncio
    async def test_closed_on_success(self, fast_settings):
        with patch.object(browser, "open_page", AsyncMock(return_value=("pw", "b", "c", "p"))), \
             patch.object(browser, "close_page", AsyncMock()) as close_mock:
            async with browser.browser_session(fast_settings):
                pass

        close_mock.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_navigate_settles(self, fake_page):
        page = fake_page()

        await browser.navigate(page, "https://60fps.design", timeout_ms=30_000, settle_ms=8_000)

        assert page.gotos[0]["timeout"] == 30_000
        assert page.waits == [8_000]

    @pytest.mark.asyncio
    async def test_navigate_wraps_errors(self, fake_page):
        page = fake_page(goto_error=PWError("net::ERR_CONNECTION_RESET"))

        with pytest.raises(NavigationError):
            await browser.navigate(page, "https://60fps.design")

        assert page.waits == []
