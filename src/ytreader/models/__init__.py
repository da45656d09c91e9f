"""
Data models for ytreader.

Pydantic models for extracted channels, playlists, videos and captions,
tolerant decodes of third-party responses, and worker fleet records.
"""

from __future__ import annotations

from ytreader.models.captions import (
    ClosedCaption,
    ClosedCaptionTrack,
    ClosedCaptionTrackInfo,
    Language,
)
from ytreader.models.channel import ChannelExtended
from ytreader.models.enums import (
    REGIONS,
    ContainerGroupState,
    Region,
    RestartPolicy,
    UpdateType,
)
from ytreader.models.fleet import (
    CatalogChannel,
    ChannelBatch,
    ContainerGroup,
    FleetContainerSpec,
    FleetLaunchResult,
)
from ytreader.models.playlist import Playlist
from ytreader.models.video import Rec, Statistics, ThumbnailSet, Video, VideoItem
from ytreader.models.youtube_types import ChannelId, PlaylistId, VideoId

__all__ = [
    # Identifiers
    "ChannelId",
    "PlaylistId",
    "VideoId",
    # Extraction
    "ChannelExtended",
    "ClosedCaption",
    "ClosedCaptionTrack",
    "ClosedCaptionTrackInfo",
    "Language",
    "Playlist",
    "Rec",
    "Statistics",
    "ThumbnailSet",
    "Video",
    "VideoItem",
    # Fleet
    "CatalogChannel",
    "ChannelBatch",
    "ContainerGroup",
    "ContainerGroupState",
    "FleetContainerSpec",
    "FleetLaunchResult",
    "REGIONS",
    "Region",
    "RestartPolicy",
    "UpdateType",
]
