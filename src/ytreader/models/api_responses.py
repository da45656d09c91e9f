"""
Pydantic models for the undocumented YouTube responses the scraper reads.

Each third-party shape is decoded once, here, into an explicit record whose
optional fields carry their documented defaults. Code downstream of these
models never checks for missing keys.

Shapes
------
- ``list_ajax`` playlist pages (snake_case JSON)
- the ``player_response`` JSON embedded in ``get_video_info``
  (camelCase JSON)
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import timedelta
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ytreader.exceptions import ParseError

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"\D")

# Largest values datetime and timedelta can represent
_MAX_EPOCH_SECONDS = 253402300799  # 9999-12-31T23:59:59Z
_MAX_DURATION_SECONDS = timedelta.max.days * 86400

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _lenient_int(v: Any) -> int:
    """Coerce counters that may be missing, null, numeric or formatted text."""
    if v is None or isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return max(v, 0)
    if isinstance(v, float):
        return max(int(v), 0) if math.isfinite(v) else 0
    digits = _NON_DIGIT_RE.sub("", str(v))
    try:
        return int(digits) if digits else 0
    except ValueError:
        # Beyond the interpreter's int string conversion limit
        return 0


def _lenient_float(v: Any) -> float:
    if v is None or v == "":
        return 0.0
    try:
        value = float(v)
    except (TypeError, ValueError):
        return 0.0
    return max(value, 0.0) if math.isfinite(value) else 0.0


def _lenient_seconds(v: Any) -> float:
    """Durations beyond what ``timedelta`` holds are treated as unknown (0)."""
    value = _lenient_float(v)
    if value > _MAX_DURATION_SECONDS:
        logger.debug("Ignoring out-of-range duration %r", v)
        return 0.0
    return value


def _lenient_epoch(v: Any) -> int:
    """Timestamps outside the ``datetime`` range are treated as unknown (0)."""
    value = _lenient_int(v)
    if value > _MAX_EPOCH_SECONDS:
        logger.debug("Ignoring out-of-range timestamp %r", v)
        return 0
    return value


def decode_json(text: str, model: type[_ModelT], source: str) -> _ModelT:
    """
    Decode a JSON document into ``model``.

    Parameters
    ----------
    text : str
        Raw JSON text.
    model : type[BaseModel]
        Target model.
    source : str
        Short description of the response, used in error messages.

    Returns
    -------
    BaseModel
        The decoded model.

    Raises
    ------
    ParseError
        If the text is not JSON or does not fit the model.
    """
    try:
        return model.model_validate(json.loads(text))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise ParseError(
            message=f"Could not decode {source}: {e}",
            source=source,
        ) from e


# =============================================================================
# Playlist pages (list_ajax)
# =============================================================================


class _SnakeCaseModel(BaseModel):
    """Base for snake_case responses; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class PlaylistEntryJson(_SnakeCaseModel):
    """One video entry of a playlist page."""

    encrypted_id: Optional[str] = None
    author: str = ""
    time_created: int = 0
    title: str = ""
    description: str = ""
    length_seconds: float = 0.0
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    keywords: str = ""

    @field_validator("author", "title", "description", "keywords", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Treat null text as empty."""
        return "" if v is None else str(v)

    @field_validator("views", "likes", "dislikes", mode="before")
    @classmethod
    def parse_counter(cls, v: Any) -> int:
        """Views arrive as formatted text (``"1,234"``), others as numbers."""
        return _lenient_int(v)

    @field_validator("time_created", mode="before")
    @classmethod
    def parse_time_created(cls, v: Any) -> int:
        """Epoch seconds; unrepresentable values fall back to 0."""
        return _lenient_epoch(v)

    @field_validator("length_seconds", mode="before")
    @classmethod
    def parse_length(cls, v: Any) -> float:
        """Durations may arrive as text."""
        return _lenient_seconds(v)


class PlaylistPageJson(_SnakeCaseModel):
    """
    One page of the ``list_ajax`` playlist endpoint.

    System playlists (watch later, uploads) have no author, views, likes
    or dislikes; those default to empty/zero. ``title`` is load-bearing
    and is checked by the pager, not here, because only the first page's
    metadata is used.
    """

    title: Optional[str] = None
    author: str = ""
    description: str = ""
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    video: list[PlaylistEntryJson] = Field(default_factory=list)

    @field_validator("author", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Treat null text as empty."""
        return "" if v is None else str(v)

    @field_validator("views", "likes", "dislikes", mode="before")
    @classmethod
    def parse_counter(cls, v: Any) -> int:
        """Missing counters are zero."""
        return _lenient_int(v)

    @field_validator("video", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        """A page past the end may carry ``null`` instead of a list."""
        return [] if v is None else v


# =============================================================================
# Player response (get_video_info)
# =============================================================================


class BaseYouTubeModel(BaseModel):
    """
    Base model for camelCase YouTube JSON.

    Configures:
    - populate_by_name: Allow both camelCase (API) and snake_case (Python)
    - alias_generator: Auto-convert snake_case fields to camelCase for API
    - extra='ignore': Ignore unexpected fields from API responses
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class PlayabilityStatus(BaseYouTubeModel):
    """Playability verdict of a video (``OK``, ``ERROR``, ``UNPLAYABLE``...)."""

    status: str = ""
    reason: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """Whether the server declared the video unavailable."""
        return self.status.lower() == "error"


class VideoDetails(BaseYouTubeModel):
    """The ``videoDetails`` object of a player response."""

    video_id: Optional[str] = None
    author: str = ""
    title: Optional[str] = None
    length_seconds: float = 0.0
    keywords: list[str] = Field(default_factory=list)
    short_description: str = ""
    view_count: int = 0

    @field_validator("author", "short_description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Treat null text as empty."""
        return "" if v is None else str(v)

    @field_validator("keywords", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        """Videos without keywords omit the list."""
        return [] if v is None else v

    @field_validator("view_count", mode="before")
    @classmethod
    def parse_view_count(cls, v: Any) -> int:
        """Some videos have no views; the counter arrives as text."""
        return _lenient_int(v)

    @field_validator("length_seconds", mode="before")
    @classmethod
    def parse_length(cls, v: Any) -> float:
        """Length arrives as text."""
        return _lenient_seconds(v)


class SimpleText(BaseYouTubeModel):
    """A ``{"simpleText": ...}`` text run."""

    simple_text: str = ""


class CaptionTrackJson(BaseYouTubeModel):
    """One entry of a ``captionTracks`` list."""

    base_url: str
    language_code: str = ""
    name: SimpleText = Field(default_factory=SimpleText)
    vss_id: str = ""

    @property
    def is_auto_generated(self) -> bool:
        """Best-effort: auto-generated tracks have a ``vssId`` starting ``a.``."""
        return self.vss_id.lower().startswith("a.")


def _find_key(node: Any, key: str) -> Any:
    """Depth-first search for the first value stored under ``key``."""
    if isinstance(node, dict):
        if key in node:
            return node[key]
        children = node.values()
    elif isinstance(node, list):
        children = node
    else:
        return None
    for child in children:
        found = _find_key(child, key)
        if found is not None:
            return found
    return None


class PlayerResponse(BaseYouTubeModel):
    """
    The ``player_response`` JSON embedded in the legacy video info blob.

    Caption tracks are located anywhere in the document under a
    ``captionTracks`` key; their nesting has moved between page versions.
    Tracks without a ``baseUrl`` are dropped.
    """

    playability_status: PlayabilityStatus = Field(default_factory=PlayabilityStatus)
    video_details: VideoDetails = Field(default_factory=VideoDetails)
    caption_tracks: list[CaptionTrackJson] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def collect_caption_tracks(cls, data: Any) -> Any:
        """Hoist ``captionTracks`` from wherever it is nested."""
        if not isinstance(data, dict):
            return data
        tracks = _find_key(data, "captionTracks")
        usable = []
        for track in tracks if isinstance(tracks, list) else []:
            if isinstance(track, dict) and track.get("baseUrl"):
                usable.append(track)
            else:
                logger.debug("Skipping caption track without baseUrl: %r", track)
        return {**data, "captionTracks": usable}
