"""
Video extraction from the legacy video info blob and the watch page.

Two independent requests are made concurrently:

1. ``get_video_info`` - URL-encoded key/value text whose ``player_response``
   field holds JSON with the video details, playability verdict and caption
   track list.
2. The watch page - markup carrying the upload date, like/dislike buttons
   and the related videos list.

The like/dislike buttons and related list are located by class names the
site may rename at any time; missing elements default to zero or an empty
list rather than failing the extraction.

Functions
---------
parse_video_info
    Split the info blob into a case-insensitive dict.
parse_player_response
    Decode the embedded player response.
parse_recommendations
    Scrape related videos from watch page markup.
get_video
    Fetch and reconcile both sources into a ``Video``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag

from ytreader.exceptions import ParseError, UnavailableContentError
from ytreader.models.api_responses import CaptionTrackJson, PlayerResponse, decode_json
from ytreader.models.captions import ClosedCaptionTrackInfo, Language
from ytreader.models.video import Rec, Statistics, ThumbnailSet, Video
from ytreader.models.youtube_types import ensure_video_id, try_parse_video_id
from ytreader.services.fetcher import HttpFetcher

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"\D")

_UPLOAD_DATE_FORMAT = "%Y-%m-%d"
_LIKE_BUTTON_CLASS = "like-button-renderer-like-button"
_DISLIKE_BUTTON_CLASS = "like-button-renderer-dislike-button"
_RELATED_ITEM_SELECTOR = "li.video-list-item.related-list-item"


def video_info_url(video_id: str) -> str:
    """URL of the legacy info blob for a video."""
    # Many videos only answer with this embedding URL present
    eurl = quote(f"https://youtube.googleapis.com/v/{video_id}", safe="")
    return (
        f"https://youtube.com/get_video_info?video_id={video_id}"
        f"&el=embedded&eurl={eurl}&hl=en"
    )


def watch_page_url(video_id: str) -> str:
    """URL of the static watch page for a video."""
    return (
        f"https://youtube.com/watch?v={video_id}"
        f"&disable_polymer=true&bpctr=9999999999&hl=en"
    )


def parse_video_info(raw: str) -> dict[str, str]:
    """
    Split a URL-encoded key/value blob into a dict with lower-cased keys.

    Parameters without a key are skipped; a repeated key keeps its last value.
    """
    return {
        key.lower(): value
        for key, value in parse_qsl(raw.lstrip("?"), keep_blank_values=True)
        if key
    }


def parse_player_response(video_info: dict[str, str]) -> PlayerResponse:
    """
    Decode the ``player_response`` JSON embedded in the info blob.

    Raises
    ------
    ParseError
        If the field is missing or is not valid JSON.
    """
    raw = video_info.get("player_response")
    if not raw:
        raise ParseError(
            message="Video info has no player_response",
            field_name="player_response",
            source="video info",
        )
    return decode_json(raw, PlayerResponse, source="player response")


def _with_query_param(url: str, name: str, value: str) -> str:
    scheme, netloc, path, query, fragment = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(query, keep_blank_values=True) if k != name]
    params.append((name, value))
    return urlunsplit((scheme, netloc, path, urlencode(params), fragment))


def to_caption_track_info(track: CaptionTrackJson) -> ClosedCaptionTrackInfo:
    """Build track metadata, requesting the timed-text format 3 variant."""
    return ClosedCaptionTrackInfo(
        url=_with_query_param(track.base_url, "format", "3"),
        language=Language(code=track.language_code, name=track.name.simple_text),
        is_auto_generated=track.is_auto_generated,
    )


def _count_from_button(soup: BeautifulSoup, class_name: str) -> int:
    button = soup.find(class_=class_name)
    if button is None:
        return 0
    digits = _NON_DIGIT_RE.sub("", button.get_text())
    return int(digits) if digits else 0


def _parse_upload_date(soup: BeautifulSoup, video_id: str) -> datetime:
    meta = soup.find("meta", attrs={"itemprop": "datePublished"})
    content = meta.get("content") if meta is not None else None
    if not isinstance(content, str):
        raise ParseError(
            message=f"Watch page for video [{video_id}] has no datePublished",
            field_name="datePublished",
            source="watch page",
        )
    try:
        return datetime.strptime(content.strip(), _UPLOAD_DATE_FORMAT).replace(
            tzinfo=timezone.utc
        )
    except ValueError as e:
        raise ParseError(
            message=f"Unexpected datePublished {content!r} for video [{video_id}]",
            field_name="datePublished",
            source="watch page",
        ) from e


def _text_of(item: Tag, selector: str) -> str:
    found = item.select_one(selector)
    return found.get_text(strip=True) if found is not None else ""


def parse_recommendations(soup: BeautifulSoup) -> list[Rec]:
    """
    Scrape related videos from a watch page.

    Items without a link to a parseable video are skipped.
    """
    recs: list[Rec] = []
    for item in soup.select(_RELATED_ITEM_SELECTOR):
        link = item.select_one("a.content-link")
        if link is None:
            continue
        href = link.get("href")
        if not isinstance(href, str):
            continue
        to_video_id = try_parse_video_id(f"https://youtube.com/{href.lstrip('/')}")
        if to_video_id is None:
            continue
        recs.append(
            Rec(
                to_video_id=to_video_id,
                to_video_title=_text_of(item, "span.title"),
                to_channel_title=_text_of(item, "span.stat.attribution > span"),
            )
        )
    return recs


def build_video(
    video_id: str, player_response: PlayerResponse, watch_html: str
) -> Video:
    """
    Reconcile the player response and watch page into one record.

    Raises
    ------
    UnavailableContentError
        If the playability status is ``error``.
    ParseError
        If the title or upload date is missing.
    """
    status = player_response.playability_status
    if status.is_error:
        raise UnavailableContentError(video_id, status.reason)

    details = player_response.video_details
    if details.title is None:
        raise ParseError(
            message=f"Player response for video [{video_id}] has no title",
            field_name="videoDetails.title",
            source="player response",
        )

    soup = BeautifulSoup(watch_html, "html.parser")
    upload_date = _parse_upload_date(soup, video_id)

    statistics = Statistics(
        view_count=details.view_count,
        like_count=_count_from_button(soup, _LIKE_BUTTON_CLASS),
        dislike_count=_count_from_button(soup, _DISLIKE_BUTTON_CLASS),
    )

    try:
        recommendations = parse_recommendations(soup)
    except Exception:
        logger.warning(
            "Failed to scrape recommendations for video %s", video_id, exc_info=True
        )
        recommendations = []

    return Video(
        id=video_id,
        author=details.author,
        upload_date=upload_date,
        title=details.title,
        description=details.short_description,
        thumbnails=ThumbnailSet(video_id=video_id),
        duration=timedelta(seconds=details.length_seconds),
        keywords=details.keywords,
        statistics=statistics,
        caption_tracks=[
            to_caption_track_info(track) for track in player_response.caption_tracks
        ],
        recommendations=recommendations,
    )


async def get_video(fetcher: HttpFetcher, video_id: str) -> Video:
    """
    Fetch a video's info blob and watch page concurrently and build a ``Video``.

    Parameters
    ----------
    fetcher : HttpFetcher
        Shared fetcher.
    video_id : str
        Video ID; validated.

    Returns
    -------
    Video
        The reconciled record.

    Raises
    ------
    ValidationError
        If ``video_id`` is malformed.
    UnavailableContentError
        If the video reports an error playability status.
    ParseError
        If a load-bearing field is missing.
    NetworkError
        If either request failed after retries.
    """
    ensure_video_id(video_id)

    info_raw, watch_html = await asyncio.gather(
        fetcher.fetch_text(video_info_url(video_id), "video dictionary"),
        fetcher.fetch_text(watch_page_url(video_id), "video watch"),
    )

    player_response = parse_player_response(parse_video_info(info_raw))
    return build_video(video_id, player_response, watch_html)
