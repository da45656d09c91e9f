"""
Tests for the extracted record models: statistics, thumbnails, captions
and channels.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from tests.factories.id_factory import TestIds
from tests.factories.video_factory import (
    ClosedCaptionFactory,
    ClosedCaptionTrackFactory,
    StatisticsFactory,
    VideoItemFactory,
)
from ytreader.models.captions import ClosedCaption
from ytreader.models.channel import ChannelExtended
from ytreader.models.video import Statistics, ThumbnailSet


class TestStatistics:
    """Tests for Statistics."""

    def test_defaults_to_zero(self) -> None:
        stats = Statistics()
        assert (stats.view_count, stats.like_count, stats.dislike_count) == (0, 0, 0)

    def test_average_rating_without_ratings(self) -> None:
        assert Statistics(view_count=10).average_rating == 0.0

    def test_average_rating(self) -> None:
        stats = StatisticsFactory(like_count=3, dislike_count=1)
        assert stats.average_rating == pytest.approx(4.0)

    def test_average_rating_all_likes(self) -> None:
        assert Statistics(like_count=10).average_rating == pytest.approx(5.0)

    def test_rejects_negative_counts(self) -> None:
        with pytest.raises(PydanticValidationError):
            Statistics(view_count=-1)


class TestThumbnailSet:
    """Tests for ThumbnailSet."""

    def test_urls_derived_from_id(self) -> None:
        thumbs = ThumbnailSet(video_id=TestIds.NEVER_GONNA_GIVE_YOU_UP)
        base = "https://img.youtube.com/vi/dQw4w9WgXcQ"
        assert thumbs.low_res_url == f"{base}/default.jpg"
        assert thumbs.medium_res_url == f"{base}/mqdefault.jpg"
        assert thumbs.high_res_url == f"{base}/hqdefault.jpg"
        assert thumbs.standard_res_url == f"{base}/sddefault.jpg"
        assert thumbs.max_res_url == f"{base}/maxresdefault.jpg"

    def test_urls_serialized(self) -> None:
        dumped = ThumbnailSet(video_id=TestIds.NEVER_GONNA_GIVE_YOU_UP).model_dump()
        assert dumped["max_res_url"].endswith("/maxresdefault.jpg")


class TestVideoItem:
    """Tests for VideoItem."""

    def test_factory_builds_consistent_thumbnails(self) -> None:
        item = VideoItemFactory()
        assert item.thumbnails.video_id == item.id

    def test_rejects_invalid_id(self) -> None:
        with pytest.raises(PydanticValidationError):
            VideoItemFactory(id="bad")


class TestClosedCaptionTrack:
    """Tests for caption lookup by time."""

    def test_end(self) -> None:
        caption = ClosedCaption(
            text="hi", offset=timedelta(seconds=1), duration=timedelta(seconds=2)
        )
        assert caption.end == timedelta(seconds=3)

    def test_get_by_time(self) -> None:
        first = ClosedCaptionFactory(
            text="first", offset=timedelta(seconds=0), duration=timedelta(seconds=2)
        )
        second = ClosedCaptionFactory(
            text="second", offset=timedelta(seconds=5), duration=timedelta(seconds=2)
        )
        track = ClosedCaptionTrackFactory(captions=[first, second])

        assert track.get_by_time(timedelta(seconds=1)) == first
        assert track.get_by_time(timedelta(seconds=6)) == second
        assert track.get_by_time(timedelta(seconds=3)) is None

    def test_get_by_time_empty_track(self) -> None:
        assert ClosedCaptionTrackFactory().get_by_time(timedelta(0)) is None


class TestChannelExtended:
    """Tests for the channel record and its restricted variant."""

    def test_regular_channel(self) -> None:
        channel = ChannelExtended(
            id=TestIds.RICK_ASTLEY_CHANNEL,
            title="Rick Astley",
            subscriber_count=3_500_000,
        )
        assert channel.is_restricted is False

    def test_restricted_channel(self) -> None:
        channel = ChannelExtended(
            id=TestIds.RICK_ASTLEY_CHANNEL, status_message="This account has been terminated."
        )
        assert channel.is_restricted is True
        assert channel.title is None

    def test_restricted_channel_cannot_carry_metadata(self) -> None:
        with pytest.raises(PydanticValidationError):
            ChannelExtended(
                id=TestIds.RICK_ASTLEY_CHANNEL,
                title="Rick Astley",
                status_message="Suspended",
            )

    def test_rejects_invalid_id(self) -> None:
        with pytest.raises(PydanticValidationError):
            ChannelExtended(id="invalid")
