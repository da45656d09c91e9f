"""
Pydantic models for closed caption tracks.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


class Language(BaseModel):
    """Language of a caption track."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str = ""


class ClosedCaptionTrackInfo(BaseModel):
    """
    Metadata for one caption track of a video.

    ``is_auto_generated`` is a best-effort flag: it is derived from an
    undocumented track identifier prefix and may be wrong.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    language: Language
    is_auto_generated: bool = False


class ClosedCaption(BaseModel):
    """A single timed caption cue."""

    model_config = ConfigDict(frozen=True)

    text: str
    offset: timedelta
    duration: timedelta

    @property
    def end(self) -> timedelta:
        """Time at which the caption stops being displayed."""
        return self.offset + self.duration


class ClosedCaptionTrack(BaseModel):
    """A caption track together with its parsed cues, in document order."""

    info: ClosedCaptionTrackInfo
    captions: list[ClosedCaption] = Field(default_factory=list)

    def get_by_time(self, time: timedelta) -> ClosedCaption | None:
        """
        Return the caption displayed at the given time.

        Parameters
        ----------
        time : timedelta
            Offset from the start of the video.

        Returns
        -------
        ClosedCaption | None
            The first caption whose interval contains ``time``, or None.
        """
        for caption in self.captions:
            if caption.offset <= time <= caption.end:
                return caption
        return None
