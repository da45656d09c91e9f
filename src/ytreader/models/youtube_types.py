"""
Custom validated types for YouTube identifiers.

Provides the syntactic checks for channel, video and playlist IDs, URL
parsing for video IDs, and strongly-typed pydantic wrappers that enforce
those checks wherever a model holds an identifier.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Annotated

from pydantic import BeforeValidator, Field

from ytreader.exceptions import FormatError, ValidationError

_ID_CHARS_RE = re.compile(r"[0-9A-Za-z_-]+")

# Watch later and My Mix are the only playlists outside the prefix rules
_SPECIAL_PLAYLIST_IDS = frozenset(["WL", "RDMM"])

_PLAYLIST_PREFIXES = ("PL", "RD", "UL", "UU", "PU", "OL", "LL", "FL")

_WATCH_URL_RE = re.compile(r"youtube\..+?/watch.*?v=(.*?)(?:&|/|$)")
_SHORT_URL_RE = re.compile(r"youtu\.be/(.*?)(?:\?|&|/|$)")
_EMBED_URL_RE = re.compile(r"youtube\..+?/embed/(.*?)(?:\?|&|/|$)")


def _is_blank(v: object) -> bool:
    return not isinstance(v, str) or not v.strip()


def validate_channel_id(channel_id: str) -> bool:
    """Check that a string is syntactically a valid YouTube channel ID."""
    if _is_blank(channel_id):
        return False

    if not channel_id.startswith("UC"):
        return False

    # Channel IDs are always 24 characters
    if len(channel_id) != 24:
        return False

    return _ID_CHARS_RE.fullmatch(channel_id) is not None


def validate_video_id(video_id: str) -> bool:
    """Check that a string is syntactically a valid YouTube video ID."""
    if _is_blank(video_id):
        return False

    # Video IDs are always 11 characters
    if len(video_id) != 11:
        return False

    return _ID_CHARS_RE.fullmatch(video_id) is not None


def validate_playlist_id(playlist_id: str) -> bool:
    """Check that a string is syntactically a valid YouTube playlist ID."""
    if _is_blank(playlist_id):
        return False

    if playlist_id in _SPECIAL_PLAYLIST_IDS:
        return True

    if not playlist_id.startswith(_PLAYLIST_PREFIXES):
        return False

    # Playlist IDs vary a lot in length, so only the extremes are checked
    if not (13 <= len(playlist_id) <= 42):
        return False

    return _ID_CHARS_RE.fullmatch(playlist_id) is not None


def try_parse_video_id(video_url: str) -> str | None:
    """
    Extract a video ID from a YouTube URL.

    Supported shapes, tried in order:

    - ``https://www.youtube.com/watch?v=yIVRs6YSbOM``
    - ``https://youtu.be/yIVRs6YSbOM``
    - ``https://www.youtube.com/embed/yIVRs6YSbOM``

    Parameters
    ----------
    video_url : str
        URL to parse.

    Returns
    -------
    str | None
        The first candidate that is also a valid video ID, or None.
    """
    if _is_blank(video_url):
        return None

    for pattern in (_WATCH_URL_RE, _SHORT_URL_RE, _EMBED_URL_RE):
        match = pattern.search(video_url)
        if match is None:
            continue
        candidate = match.group(1)
        if validate_video_id(candidate):
            return candidate

    return None


def parse_video_id(video_url: str) -> str:
    """
    Extract a video ID from a YouTube URL.

    Raises
    ------
    FormatError
        If no supported URL shape yields a valid video ID.
    """
    video_id = try_parse_video_id(video_url)
    if video_id is None:
        raise FormatError(video_url)
    return video_id


def uploads_playlist_id(channel_id: str) -> str:
    """Return the ID of the playlist holding every upload of a channel."""
    return "UU" + channel_id[2:]


def ensure_channel_id(channel_id: str) -> str:
    """Return ``channel_id`` unchanged or raise ValidationError."""
    if not validate_channel_id(channel_id):
        raise ValidationError(
            message=f"Invalid YouTube channel ID [{channel_id}].",
            field_name="channel_id",
            invalid_value=channel_id,
        )
    return channel_id


def ensure_video_id(video_id: str) -> str:
    """Return ``video_id`` unchanged or raise ValidationError."""
    if not validate_video_id(video_id):
        raise ValidationError(
            message=f"Invalid YouTube video ID [{video_id}].",
            field_name="video_id",
            invalid_value=video_id,
        )
    return video_id


def ensure_playlist_id(playlist_id: str) -> str:
    """Return ``playlist_id`` unchanged or raise ValidationError."""
    if not validate_playlist_id(playlist_id):
        raise ValidationError(
            message=f"Invalid YouTube playlist ID [{playlist_id}].",
            field_name="playlist_id",
            invalid_value=playlist_id,
        )
    return playlist_id


def _check(
    validator: Callable[[str], bool], type_name: str
) -> Callable[[object], str]:
    def _validate(v: object) -> str:
        if not isinstance(v, str):
            raise ValueError(f"{type_name} must be a string")
        if not validator(v):
            raise ValueError(f"Invalid {type_name}: {v}")
        return v

    return _validate


# Type aliases for use in Pydantic models
ChannelId = Annotated[
    str,
    BeforeValidator(_check(validate_channel_id, "ChannelId")),
    Field(description="YouTube Channel ID (24 chars, starts with UC)"),
]

VideoId = Annotated[
    str,
    BeforeValidator(_check(validate_video_id, "VideoId")),
    Field(description="YouTube Video ID (11 chars, alphanumeric, _ or -)"),
]

PlaylistId = Annotated[
    str,
    BeforeValidator(_check(validate_playlist_id, "PlaylistId")),
    Field(description="YouTube Playlist ID (WL, RDMM, or 13-42 chars with a known prefix)"),
]
