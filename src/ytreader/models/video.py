"""
Pydantic models for videos extracted from YouTube.

Provides the summary record produced while paginating playlists
(``VideoItem``), the full record produced by the video extractor
(``Video``), and their value types.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ytreader.models.captions import ClosedCaptionTrackInfo
from ytreader.models.youtube_types import VideoId

_THUMBNAIL_BASE_URL = "https://img.youtube.com/vi"


class Statistics(BaseModel):
    """View and rating counters; any counter missing at the source is zero."""

    model_config = ConfigDict(frozen=True)

    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    dislike_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_rating(self) -> float:
        """
        Average rating on a 1-5 scale derived from likes and dislikes.

        Returns
        -------
        float
            0.0 when there are no ratings at all.
        """
        total = self.like_count + self.dislike_count
        if total == 0:
            return 0.0
        return 1 + 4.0 * self.like_count / total


class ThumbnailSet(BaseModel):
    """
    Thumbnail URLs for a video.

    Thumbnails are derived from the video ID alone; no request is made.
    """

    model_config = ConfigDict(frozen=True)

    video_id: VideoId

    @computed_field  # type: ignore[prop-decorator]
    @property
    def low_res_url(self) -> str:
        """Low resolution thumbnail URL."""
        return f"{_THUMBNAIL_BASE_URL}/{self.video_id}/default.jpg"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def medium_res_url(self) -> str:
        """Medium resolution thumbnail URL."""
        return f"{_THUMBNAIL_BASE_URL}/{self.video_id}/mqdefault.jpg"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def high_res_url(self) -> str:
        """High resolution thumbnail URL."""
        return f"{_THUMBNAIL_BASE_URL}/{self.video_id}/hqdefault.jpg"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def standard_res_url(self) -> str:
        """Standard resolution thumbnail URL."""
        return f"{_THUMBNAIL_BASE_URL}/{self.video_id}/sddefault.jpg"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_res_url(self) -> str:
        """Maximum resolution thumbnail URL."""
        return f"{_THUMBNAIL_BASE_URL}/{self.video_id}/maxresdefault.jpg"


class Rec(BaseModel):
    """A recommendation scraped from the related videos list of a watch page."""

    model_config = ConfigDict(frozen=True)

    to_video_id: VideoId
    to_video_title: str = ""
    to_channel_title: str = ""


class VideoItem(BaseModel):
    """
    Summary record for a video, produced while paginating a playlist.

    Attributes
    ----------
    id : VideoId
        YouTube video ID.
    author : str
        Display name of the uploading channel.
    upload_date : datetime
        Upload time (UTC).
    title : str
        Video title.
    description : str
        Video description, empty when unavailable.
    thumbnails : ThumbnailSet
        Thumbnail URLs derived from ``id``.
    duration : timedelta
        Video length.
    keywords : list[str]
        Video keywords.
    statistics : Statistics
        View, like and dislike counts.
    """

    model_config = ConfigDict(frozen=True)

    id: VideoId
    author: str = ""
    upload_date: datetime
    title: str
    description: str = ""
    thumbnails: ThumbnailSet
    duration: timedelta = timedelta(0)
    keywords: list[str] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)


class Video(VideoItem):
    """Full video record with caption track index and recommendations."""

    caption_tracks: list[ClosedCaptionTrackInfo] = Field(default_factory=list)
    recommendations: list[Rec] = Field(default_factory=list)
