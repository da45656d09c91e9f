"""
Caption track retrieval and parsing.

Tracks are requested in timed-text format 3: an XML document whose ``<p>``
elements each hold one cue, with ``t`` (offset) and ``d`` (duration)
attributes in milliseconds.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import timedelta

from ytreader.exceptions import ParseError
from ytreader.models.captions import (
    ClosedCaption,
    ClosedCaptionTrack,
    ClosedCaptionTrackInfo,
)
from ytreader.services.fetcher import HttpFetcher

logger = logging.getLogger(__name__)


def _strip_namespaces(root: ET.Element) -> ET.Element:
    for element in root.iter():
        if isinstance(element.tag, str) and "}" in element.tag:
            element.tag = element.tag.split("}", 1)[1]
        for key in [k for k in element.attrib if "}" in k]:
            element.attrib[key.split("}", 1)[1]] = element.attrib.pop(key)
    return root


def _milliseconds(value: str | None) -> timedelta:
    if not value:
        return timedelta(0)
    try:
        return timedelta(milliseconds=float(value))
    except ValueError:
        logger.debug("Ignoring malformed caption time %r", value)
        return timedelta(0)


def parse_caption_xml(raw: str) -> list[ClosedCaption]:
    """
    Parse a format 3 timed-text document into caption cues.

    Parameters
    ----------
    raw : str
        XML text.

    Returns
    -------
    list[ClosedCaption]
        One cue per ``<p>`` element with non-blank text, in document order.

    Raises
    ------
    ParseError
        If the document is not well-formed XML.
    """
    try:
        root = _strip_namespaces(ET.fromstring(raw))
    except ET.ParseError as e:
        raise ParseError(
            message=f"Malformed caption track XML: {e}",
            source="caption track",
        ) from e

    captions: list[ClosedCaption] = []
    for node in root.iter("p"):
        text = "".join(node.itertext())
        if not text.strip():
            continue
        captions.append(
            ClosedCaption(
                text=text,
                offset=_milliseconds(node.get("t")),
                duration=_milliseconds(node.get("d")),
            )
        )
    return captions


async def get_closed_caption_track(
    fetcher: HttpFetcher, info: ClosedCaptionTrackInfo
) -> ClosedCaptionTrack:
    """Fetch the track described by ``info`` and parse its cues."""
    raw = await fetcher.fetch_text(info.url, "caption")
    return ClosedCaptionTrack(info=info, captions=parse_caption_xml(raw))
