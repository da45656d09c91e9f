"""
Tests for the YtScraper facade.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tests.factories.id_factory import TestIds
from tests.factories.video_factory import ClosedCaptionTrackInfoFactory
from ytreader.exceptions import ValidationError
from ytreader.services.fetcher import HttpFetcher
from ytreader.services.scraper import YtScraper

pytestmark = pytest.mark.asyncio


@pytest.fixture
def scraper(mock_fetcher: MagicMock) -> YtScraper:
    """Scraper over a mocked fetcher."""
    return YtScraper(mock_fetcher)


class TestYtScraper:
    """Tests for delegation to the extractors."""

    async def test_get_channel(self, scraper: YtScraper, mock_fetcher: MagicMock) -> None:
        with patch(
            "ytreader.services.scraper.channel_extractor.get_channel",
            new_callable=AsyncMock,
        ) as get_channel:
            await scraper.get_channel(TestIds.RICK_ASTLEY_CHANNEL)

        get_channel.assert_awaited_once_with(mock_fetcher, TestIds.RICK_ASTLEY_CHANNEL)

    async def test_get_video(self, scraper: YtScraper, mock_fetcher: MagicMock) -> None:
        with patch(
            "ytreader.services.scraper.video_extractor.get_video",
            new_callable=AsyncMock,
        ) as get_video:
            await scraper.get_video(TestIds.NEVER_GONNA_GIVE_YOU_UP)

        get_video.assert_awaited_once_with(mock_fetcher, TestIds.NEVER_GONNA_GIVE_YOU_UP)

    async def test_get_playlist(self, scraper: YtScraper, mock_fetcher: MagicMock) -> None:
        with patch(
            "ytreader.services.scraper.playlist_pager.get_playlist",
            new_callable=AsyncMock,
        ) as get_playlist:
            await scraper.get_playlist(TestIds.TEST_PLAYLIST)

        get_playlist.assert_awaited_once_with(mock_fetcher, TestIds.TEST_PLAYLIST)

    async def test_get_closed_caption_track(
        self, scraper: YtScraper, mock_fetcher: MagicMock
    ) -> None:
        info = ClosedCaptionTrackInfoFactory()
        with patch(
            "ytreader.services.scraper.caption_fetcher.get_closed_caption_track",
            new_callable=AsyncMock,
        ) as get_track:
            await scraper.get_closed_caption_track(info)

        get_track.assert_awaited_once_with(mock_fetcher, info)

    async def test_get_channel_uploads_validates_eagerly(
        self, scraper: YtScraper
    ) -> None:
        with pytest.raises(ValidationError):
            scraper.get_channel_uploads("bogus")

    async def test_context_manager_closes_fetcher(self, mock_fetcher: MagicMock) -> None:
        mock_fetcher.aclose = AsyncMock()

        async with YtScraper(mock_fetcher):
            pass

        mock_fetcher.aclose.assert_awaited_once()

    async def test_from_settings(self, mock_settings) -> None:
        scraper = YtScraper.from_settings(mock_settings)
        try:
            assert isinstance(scraper.fetcher, HttpFetcher)
            assert scraper.fetcher.max_attempts == mock_settings.retry_attempts
        finally:
            await scraper.aclose()
