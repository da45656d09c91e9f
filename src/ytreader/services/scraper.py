"""
Scraper facade used by crawl workers.

Owns the shared ``HttpFetcher`` and exposes one method per extraction.
Extractions are independent and stateless, so many can run concurrently
on one scraper.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from types import TracebackType

from ytreader.config.settings import Settings
from ytreader.models.captions import ClosedCaptionTrack, ClosedCaptionTrackInfo
from ytreader.models.channel import ChannelExtended
from ytreader.models.playlist import Playlist
from ytreader.models.video import Video, VideoItem
from ytreader.models.youtube_types import ensure_channel_id
from ytreader.services import (
    caption_fetcher,
    channel_extractor,
    playlist_pager,
    video_extractor,
)
from ytreader.services.fetcher import HttpFetcher
from ytreader.services.playlist_pager import PlaylistPager


class YtScraper:
    """
    Facade over the channel, playlist, video and caption extractors.

    Parameters
    ----------
    fetcher : HttpFetcher
        Fetcher shared by every extraction made through this scraper.

    Examples
    --------
    >>> async with YtScraper.from_settings(settings) as scraper:
    ...     channel = await scraper.get_channel("UCuAXFkgsw1L7xaCfnd5JJOw")
    ...     async for video in scraper.get_channel_uploads(channel.id):
    ...         print(video.title)
    """

    def __init__(self, fetcher: HttpFetcher) -> None:
        self.fetcher = fetcher

    @classmethod
    def from_settings(cls, settings: Settings) -> YtScraper:
        """Build a scraper with a fetcher configured from settings."""
        return cls(HttpFetcher.from_settings(settings))

    async def get_channel(self, channel_id: str) -> ChannelExtended:
        """Extract channel metadata, or the restricted variant."""
        return await channel_extractor.get_channel(self.fetcher, channel_id)

    async def get_playlist(self, playlist_id: str) -> Playlist:
        """Fetch playlist metadata and an unstarted pager over its videos."""
        return await playlist_pager.get_playlist(self.fetcher, playlist_id)

    async def get_channel_upload_batches(self, channel_id: str) -> PlaylistPager:
        """Return a pager over the batches of a channel's uploads."""
        return await playlist_pager.get_channel_upload_batches(self.fetcher, channel_id)

    def get_channel_uploads(self, channel_id: str) -> AsyncIterator[VideoItem]:
        """
        Lazily iterate every upload of a channel.

        Raises
        ------
        ValidationError
            Immediately, if ``channel_id`` is malformed.
        """
        ensure_channel_id(channel_id)
        return playlist_pager.get_channel_uploads(self.fetcher, channel_id)

    async def get_video(self, video_id: str) -> Video:
        """Extract a full video record."""
        return await video_extractor.get_video(self.fetcher, video_id)

    async def get_closed_caption_track(
        self, info: ClosedCaptionTrackInfo
    ) -> ClosedCaptionTrack:
        """Fetch and parse one caption track."""
        return await caption_fetcher.get_closed_caption_track(self.fetcher, info)

    async def aclose(self) -> None:
        """Close the shared fetcher."""
        await self.fetcher.aclose()

    async def __aenter__(self) -> YtScraper:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
