"""
Lazy, deduplicating pagination over YouTube playlists.

The ``list_ajax`` endpoint returns up to 100 playlist entries per request,
addressed by an ``index`` query parameter. Pages overlap and the endpoint
never signals the end explicitly, so the pager tracks every video ID seen
during a run and stops at the first page that contributes nothing new.

Functions
---------
parse_keywords
    Tokenize a raw keyword string.
get_playlist
    Fetch playlist metadata and a pager over its videos.
get_channel_uploads
    Flatten a channel's uploads playlist into single videos.

Classes
-------
PlaylistPager
    Explicit pull-based pagination state for one playlist.
"""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from ytreader.exceptions import ParseError
from ytreader.models.api_responses import PlaylistEntryJson, PlaylistPageJson, decode_json
from ytreader.models.playlist import Playlist
from ytreader.models.video import Statistics, ThumbnailSet, VideoItem
from ytreader.models.youtube_types import (
    ensure_channel_id,
    ensure_playlist_id,
    uploads_playlist_id,
    validate_video_id,
)
from ytreader.services.fetcher import HttpFetcher

logger = logging.getLogger(__name__)

_PLAYLIST_URL = "https://youtube.com/list_ajax"
_PAGE_SIZE = 100
_FIRST_PAGE_INDEX = 1

# Quoted phrases stay together, everything else splits on whitespace
_KEYWORD_RE = re.compile(r'"[^"]+"|\S+')


def parse_keywords(raw: str) -> list[str]:
    """
    Tokenize a raw keyword string.

    >>> parse_keywords('music "rick astley" 80s')
    ['music', 'rick astley', '80s']
    """
    tokens = (m.group(0).strip('"') for m in _KEYWORD_RE.finditer(raw or ""))
    return [t for t in tokens if t.strip()]


def playlist_page_url(playlist_id: str, index: int) -> str:
    """URL of the playlist page starting at ``index``."""
    query = urlencode(
        {
            "style": "json",
            "action_get_list": 1,
            "list": playlist_id,
            "index": index,
            "hl": "en",
        }
    )
    return f"{_PLAYLIST_URL}?{query}"


async def fetch_playlist_page(
    fetcher: HttpFetcher, playlist_id: str, index: int
) -> PlaylistPageJson:
    """Fetch and decode one playlist page."""
    raw = await fetcher.fetch_text(playlist_page_url(playlist_id, index), "playlist")
    return decode_json(raw, PlaylistPageJson, source="playlist page")


def _to_video_item(entry: PlaylistEntryJson, video_id: str) -> VideoItem:
    return VideoItem(
        id=video_id,
        author=entry.author,
        upload_date=datetime.fromtimestamp(entry.time_created, tz=timezone.utc),
        title=entry.title,
        description=entry.description,
        thumbnails=ThumbnailSet(video_id=video_id),
        duration=timedelta(seconds=entry.length_seconds),
        keywords=parse_keywords(entry.keywords),
        statistics=Statistics(
            view_count=entry.views,
            like_count=entry.likes,
            dislike_count=entry.dislikes,
        ),
    )


class PlaylistPager:
    """
    Forward-only sequence of video batches for one playlist.

    The pager is single-pass: once a page yields no new videos it is
    exhausted for good, and a new run needs a fresh ``get_playlist`` call.
    It can be driven with ``next_batch()`` or ``async for``.

    Parameters
    ----------
    playlist_id : str
        Validated playlist ID.
    fetcher : HttpFetcher
        Fetcher used for pages after the first.
    first_page : PlaylistPageJson
        The already-fetched page at index 1, which supplies the first batch.

    Examples
    --------
    >>> playlist = await get_playlist(fetcher, "PLOU2XLYxmsIK9qQfztXeybpHvru-TrqAP")
    >>> async for batch in playlist.videos:
    ...     print(len(batch))
    """

    def __init__(
        self,
        playlist_id: str,
        fetcher: HttpFetcher,
        first_page: PlaylistPageJson,
    ) -> None:
        self.playlist_id = playlist_id
        self._fetcher = fetcher
        self._pending_page: PlaylistPageJson | None = first_page
        start_index = 101 if playlist_id.startswith("PL") else 0
        self._next_index = start_index + _PAGE_SIZE
        self._seen_ids: set[str] = set()
        self._exhausted = False

    @property
    def next_index(self) -> int:
        """Index the next page will be requested at."""
        return self._next_index

    @property
    def seen_ids(self) -> frozenset[str]:
        """Video IDs emitted so far in this run."""
        return frozenset(self._seen_ids)

    @property
    def is_exhausted(self) -> bool:
        """Whether pagination has terminated."""
        return self._exhausted

    async def next_batch(self) -> list[VideoItem] | None:
        """
        Return the next batch of previously unseen videos.

        Returns
        -------
        list[VideoItem] | None
            Non-empty list of new videos, or None once pagination has
            terminated. A page with no new videos terminates pagination and
            is not returned.
        """
        if self._exhausted:
            return None

        if self._pending_page is not None:
            page = self._pending_page
            self._pending_page = None
        else:
            page = await fetch_playlist_page(
                self._fetcher, self.playlist_id, self._next_index
            )
            self._next_index += _PAGE_SIZE

        new_videos: list[VideoItem] = []
        for entry in page.video:
            video_id = entry.encrypted_id
            if not video_id or not validate_video_id(video_id):
                logger.debug(
                    "Skipping playlist %s entry with invalid id %r",
                    self.playlist_id,
                    video_id,
                )
                continue
            if video_id in self._seen_ids:
                continue
            self._seen_ids.add(video_id)
            new_videos.append(_to_video_item(entry, video_id))

        if not new_videos:
            logger.debug(
                "Playlist %s exhausted after %d videos",
                self.playlist_id,
                len(self._seen_ids),
            )
            self._exhausted = True
            return None

        return new_videos

    def __aiter__(self) -> PlaylistPager:
        return self

    async def __anext__(self) -> list[VideoItem]:
        batch = await self.next_batch()
        if batch is None:
            raise StopAsyncIteration
        return batch


async def get_playlist(fetcher: HttpFetcher, playlist_id: str) -> Playlist:
    """
    Fetch a playlist's metadata and a pager over its videos.

    Parameters
    ----------
    fetcher : HttpFetcher
        Shared fetcher.
    playlist_id : str
        Playlist ID; validated.

    Returns
    -------
    Playlist
        Metadata from the first page plus an unstarted ``PlaylistPager``.

    Raises
    ------
    ValidationError
        If ``playlist_id`` is malformed.
    ParseError
        If the first page has no title.
    """
    ensure_playlist_id(playlist_id)

    page = await fetch_playlist_page(fetcher, playlist_id, _FIRST_PAGE_INDEX)
    if page.title is None:
        raise ParseError(
            message=f"Playlist [{playlist_id}] response has no title",
            field_name="title",
            source="playlist page",
        )

    return Playlist(
        id=playlist_id,
        author=page.author,
        title=page.title,
        description=page.description,
        statistics=Statistics(
            view_count=page.views,
            like_count=page.likes,
            dislike_count=page.dislikes,
        ),
        videos=PlaylistPager(playlist_id, fetcher, first_page=page),
    )


async def get_channel_upload_batches(
    fetcher: HttpFetcher, channel_id: str
) -> PlaylistPager:
    """Return a pager over the uploads playlist of a channel."""
    ensure_channel_id(channel_id)
    playlist = await get_playlist(fetcher, uploads_playlist_id(channel_id))
    return playlist.videos


async def get_channel_uploads(
    fetcher: HttpFetcher, channel_id: str
) -> AsyncIterator[VideoItem]:
    """
    Yield every upload of a channel, one video at a time.

    Pages are fetched lazily as the caller consumes videos; the sequence
    ends when pagination terminates.
    """
    pager = await get_channel_upload_batches(fetcher, channel_id)
    async for batch in pager:
        for video in batch:
            yield video
