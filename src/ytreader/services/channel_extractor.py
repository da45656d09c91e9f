"""
Channel metadata extraction from rendered channel pages.

Functions
---------
parse_abbreviated_count
    Expand ``"12.3K subscribers"`` style text into an integer.
parse_channel_page
    Build a ``ChannelExtended`` from channel page HTML.
get_channel
    Fetch and parse a channel page.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_EVEN, Decimal

from bs4 import BeautifulSoup

from ytreader.models.channel import ChannelExtended
from ytreader.models.youtube_types import ensure_channel_id
from ytreader.services.fetcher import HttpFetcher

logger = logging.getLogger(__name__)

_ABBREVIATED_COUNT_RE = re.compile(r"(?P<num>\d+\.?\d*)(?P<unit>[BMK]?)")

_UNIT_MULTIPLIERS: dict[str, int] = {
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

_ALERT_SELECTOR = "div.yt-alert-message"
_SUBSCRIBER_SELECTOR = (
    "span.yt-subscription-button-subscriber-count-branded-horizontal.subscribed"
)


def channel_page_url(channel_id: str) -> str:
    """URL of a channel's page, forced to English."""
    return f"https://www.youtube.com/channel/{channel_id}?hl=en"


def parse_abbreviated_count(text: str | None) -> int | None:
    """
    Expand an abbreviated count into an integer.

    Matches the first decimal number and an optional ``K``/``M``/``B``
    suffix directly after it; rounds half to even.

    Parameters
    ----------
    text : str | None
        Text such as ``"12.3K subscribers"`` or ``"845 subscribers"``.

    Returns
    -------
    int | None
        The expanded count, or None if the text is empty or has no number.

    Examples
    --------
    >>> parse_abbreviated_count("12.3K subscribers")
    12300
    >>> parse_abbreviated_count("") is None
    True
    """
    if not text:
        return None
    match = _ABBREVIATED_COUNT_RE.search(text)
    if match is None:
        return None
    number = Decimal(match.group("num"))
    multiplier = _UNIT_MULTIPLIERS.get(match.group("unit"), 1)
    return int((number * multiplier).quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def _meta_content(soup: BeautifulSoup, prop: str) -> str | None:
    tag = soup.find("meta", attrs={"property": prop})
    if tag is None:
        return None
    content = tag.get("content")
    return content if isinstance(content, str) else None


def parse_channel_page(html: str, channel_id: str) -> ChannelExtended:
    """
    Extract channel metadata from channel page HTML.

    A non-empty alert banner marks the channel as suspended or restricted;
    in that case only the ID and banner text are returned and nothing else
    is extracted.

    Parameters
    ----------
    html : str
        Channel page markup.
    channel_id : str
        Validated channel ID.

    Returns
    -------
    ChannelExtended
        Extracted metadata. Missing meta tags or subscriber element leave the
        corresponding fields unset.
    """
    soup = BeautifulSoup(html, "html.parser")

    alert = soup.select_one(_ALERT_SELECTOR)
    if alert is not None:
        alert_text = alert.get_text(strip=True)
        if alert_text:
            logger.info("Channel %s is restricted: %s", channel_id, alert_text)
            return ChannelExtended(id=channel_id, status_message=alert_text)

    subscriber_span = soup.select_one(_SUBSCRIBER_SELECTOR)
    subscriber_text = (
        subscriber_span.get_text(strip=True) if subscriber_span is not None else None
    )

    return ChannelExtended(
        id=channel_id,
        title=_meta_content(soup, "og:title"),
        logo_url=_meta_content(soup, "og:image"),
        subscriber_count=parse_abbreviated_count(subscriber_text),
    )


async def get_channel(fetcher: HttpFetcher, channel_id: str) -> ChannelExtended:
    """
    Fetch a channel page and extract its metadata.

    Raises
    ------
    ValidationError
        If ``channel_id`` is malformed.
    NetworkError
        If the page could not be fetched.
    """
    ensure_channel_id(channel_id)
    html = await fetcher.fetch_text(channel_page_url(channel_id), "channel page")
    return parse_channel_page(html, channel_id)
