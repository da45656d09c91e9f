"""
Playlist record with its lazily paginated video sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ytreader.models.video import Statistics

if TYPE_CHECKING:
    from ytreader.services.playlist_pager import PlaylistPager


@dataclass(frozen=True)
class Playlist:
    """
    Playlist metadata plus a single-pass pager over its videos.

    System playlists (watch later, uploads) report no author and zero
    statistics.

    Attributes
    ----------
    id : str
        Validated playlist ID.
    author : str
        Playlist owner display name, empty for system playlists.
    title : str
        Playlist title.
    description : str
        Playlist description.
    statistics : Statistics
        Playlist-level counters.
    videos : PlaylistPager
        Forward-only sequence of video batches. Once exhausted it stays
        exhausted; fetch the playlist again to restart.
    """

    id: str
    author: str
    title: str
    description: str
    statistics: Statistics
    videos: PlaylistPager
