"""
Tests for video extraction from the info blob and watch page.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlencode, urlsplit

import pytest

from tests.factories.id_factory import TestIds
from ytreader.exceptions import ParseError, UnavailableContentError, ValidationError
from ytreader.services.video_extractor import (
    get_video,
    parse_player_response,
    parse_video_info,
    video_info_url,
    watch_page_url,
)

pytestmark = pytest.mark.asyncio

VIDEO_ID = TestIds.NEVER_GONNA_GIVE_YOU_UP


def _player_response(**overrides: Any) -> dict[str, Any]:
    response: dict[str, Any] = {
        "playabilityStatus": {"status": "OK"},
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": "Never Gonna Give You Up",
            "author": "Rick Astley",
            "lengthSeconds": "213",
            "keywords": ["rick astley", "music"],
            "shortDescription": "The official video",
            "viewCount": "1000000",
        },
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": [
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en&fmt=srv1",
                        "languageCode": "en",
                        "name": {"simpleText": "English"},
                        "vssId": ".en",
                    },
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=de&format=1",
                        "languageCode": "de",
                        "name": {"simpleText": "German (auto-generated)"},
                        "vssId": "a.de",
                    },
                ]
            }
        },
    }
    response.update(overrides)
    return response


def _info_blob(player_response: dict[str, Any] | None) -> str:
    fields = {"status": "ok", "Video_Id": VIDEO_ID}
    if player_response is not None:
        fields["player_response"] = json.dumps(player_response)
    return urlencode(fields)


WATCH_HTML = """
<html><head>
<meta itemprop="datePublished" content="2009-10-25">
</head><body>
<button class="yt-uix-button like-button-renderer-like-button"><span>1,234</span></button>
<button class="yt-uix-button like-button-renderer-dislike-button"><span>56</span></button>
<ul>
  <li class="video-list-item related-list-item">
    <a class="content-link" href="/watch?v=yIVRs6YSbOM">
      <span class="title">Related One</span>
      <span class="stat attribution"><span>Some Channel</span></span>
    </a>
  </li>
  <li class="video-list-item related-list-item">
    <span class="title">No link here</span>
  </li>
</ul>
</body></html>
"""


def _serve(mock_fetcher: MagicMock, info: str, watch: str) -> list[tuple[str, str]]:
    requests: list[tuple[str, str]] = []

    async def fetch_text(url: str, description: str = "page") -> str:
        requests.append((description, url))
        return info if description == "video dictionary" else watch

    mock_fetcher.fetch_text.side_effect = fetch_text
    return requests


class TestParseVideoInfo:
    """Tests for info blob parsing."""

    async def test_lowercases_keys(self) -> None:
        info = parse_video_info("Status=ok&Player_Response=%7B%7D&&=skip")
        assert info == {"status": "ok", "player_response": "{}"}

    async def test_missing_player_response(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_player_response({"status": "fail"})

        assert exc_info.value.field_name == "player_response"

    async def test_malformed_player_response(self) -> None:
        with pytest.raises(ParseError):
            parse_player_response({"player_response": "{oops"})


class TestGetVideo:
    """Tests for get_video."""

    async def test_full_record(self, mock_fetcher: MagicMock) -> None:
        requests = _serve(mock_fetcher, _info_blob(_player_response()), WATCH_HTML)

        video = await get_video(mock_fetcher, VIDEO_ID)

        assert dict(requests) == {
            "video dictionary": video_info_url(VIDEO_ID),
            "video watch": watch_page_url(VIDEO_ID),
        }
        assert video.id == VIDEO_ID
        assert video.title == "Never Gonna Give You Up"
        assert video.author == "Rick Astley"
        assert video.description == "The official video"
        assert video.duration == timedelta(seconds=213)
        assert video.keywords == ["rick astley", "music"]
        assert video.upload_date == datetime(2009, 10, 25, tzinfo=timezone.utc)
        assert video.statistics.view_count == 1_000_000
        assert video.statistics.like_count == 1234
        assert video.statistics.dislike_count == 56
        assert video.thumbnails.video_id == VIDEO_ID

    async def test_caption_tracks_request_format_3(self, mock_fetcher: MagicMock) -> None:
        _serve(mock_fetcher, _info_blob(_player_response()), WATCH_HTML)

        video = await get_video(mock_fetcher, VIDEO_ID)

        english, german = video.caption_tracks
        english_query = parse_qs(urlsplit(english.url).query)
        german_query = parse_qs(urlsplit(german.url).query)
        assert english_query["format"] == ["3"]
        assert english_query["lang"] == ["en"]
        assert english_query["fmt"] == ["srv1"]
        assert german_query["format"] == ["3"]
        assert english.language.code == "en"
        assert english.language.name == "English"
        assert english.is_auto_generated is False
        assert german.is_auto_generated is True

    async def test_recommendations(self, mock_fetcher: MagicMock) -> None:
        _serve(mock_fetcher, _info_blob(_player_response()), WATCH_HTML)

        video = await get_video(mock_fetcher, VIDEO_ID)

        assert len(video.recommendations) == 1
        rec = video.recommendations[0]
        assert rec.to_video_id == "yIVRs6YSbOM"
        assert rec.to_video_title == "Related One"
        assert rec.to_channel_title == "Some Channel"

    async def test_missing_buttons_default_to_zero(self, mock_fetcher: MagicMock) -> None:
        html = '<html><head><meta itemprop="datePublished" content="2020-01-02"></head></html>'
        _serve(mock_fetcher, _info_blob(_player_response()), html)

        video = await get_video(mock_fetcher, VIDEO_ID)

        assert video.statistics.like_count == 0
        assert video.statistics.dislike_count == 0
        assert video.recommendations == []

    async def test_recommendation_failure_is_not_fatal(
        self, mock_fetcher: MagicMock
    ) -> None:
        _serve(mock_fetcher, _info_blob(_player_response()), WATCH_HTML)

        with patch(
            "ytreader.services.video_extractor.parse_recommendations",
            side_effect=RuntimeError("layout changed"),
        ):
            video = await get_video(mock_fetcher, VIDEO_ID)

        assert video.recommendations == []
        assert video.title == "Never Gonna Give You Up"

    async def test_unavailable_video(self, mock_fetcher: MagicMock) -> None:
        response = _player_response(
            playabilityStatus={"status": "ERROR", "reason": "Video unavailable"}
        )
        _serve(mock_fetcher, _info_blob(response), WATCH_HTML)

        with pytest.raises(UnavailableContentError) as exc_info:
            await get_video(mock_fetcher, VIDEO_ID)

        assert exc_info.value.video_id == VIDEO_ID
        assert exc_info.value.reason == "Video unavailable"

    async def test_missing_title(self, mock_fetcher: MagicMock) -> None:
        response = _player_response()
        del response["videoDetails"]["title"]
        _serve(mock_fetcher, _info_blob(response), WATCH_HTML)

        with pytest.raises(ParseError) as exc_info:
            await get_video(mock_fetcher, VIDEO_ID)

        assert exc_info.value.field_name == "videoDetails.title"

    async def test_missing_upload_date(self, mock_fetcher: MagicMock) -> None:
        _serve(mock_fetcher, _info_blob(_player_response()), "<html></html>")

        with pytest.raises(ParseError) as exc_info:
            await get_video(mock_fetcher, VIDEO_ID)

        assert exc_info.value.field_name == "datePublished"

    async def test_malformed_upload_date(self, mock_fetcher: MagicMock) -> None:
        html = '<meta itemprop="datePublished" content="Oct 25, 2009">'
        _serve(mock_fetcher, _info_blob(_player_response()), html)

        with pytest.raises(ParseError):
            await get_video(mock_fetcher, VIDEO_ID)

    async def test_missing_player_response(self, mock_fetcher: MagicMock) -> None:
        _serve(mock_fetcher, _info_blob(None), WATCH_HTML)

        with pytest.raises(ParseError):
            await get_video(mock_fetcher, VIDEO_ID)

    async def test_video_without_captions(self, mock_fetcher: MagicMock) -> None:
        response = _player_response()
        del response["captions"]
        _serve(mock_fetcher, _info_blob(response), WATCH_HTML)

        video = await get_video(mock_fetcher, VIDEO_ID)

        assert video.caption_tracks == []

    async def test_invalid_id(self, mock_fetcher: MagicMock) -> None:
        with pytest.raises(ValidationError):
            await get_video(mock_fetcher, "nope")

        mock_fetcher.fetch_text.assert_not_awaited()
