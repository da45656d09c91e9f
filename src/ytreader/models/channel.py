"""
Pydantic models for channels extracted from YouTube channel pages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ytreader.models.youtube_types import ChannelId


class ChannelExtended(BaseModel):
    """
    Channel metadata scraped from a channel page.

    A channel that displays a suspension or restriction banner is a terminal
    variant: only ``id`` and ``status_message`` are set.

    Attributes
    ----------
    id : ChannelId
        YouTube channel ID.
    title : str | None
        Channel title from the ``og:title`` meta tag.
    logo_url : str | None
        Channel logo from the ``og:image`` meta tag.
    subscriber_count : int | None
        Subscriber count, absent when the page does not show it.
    status_message : str | None
        Alert banner text for suspended or restricted channels.
    """

    model_config = ConfigDict(frozen=True)

    id: ChannelId
    title: Optional[str] = None
    logo_url: Optional[str] = None
    subscriber_count: Optional[int] = Field(default=None, ge=0)
    status_message: Optional[str] = None

    @model_validator(mode="after")
    def validate_restricted_variant(self) -> ChannelExtended:
        """Reject records that mix a status message with extracted metadata."""
        if self.status_message is not None and any(
            v is not None for v in (self.title, self.logo_url, self.subscriber_count)
        ):
            raise ValueError(
                "A channel with a status message cannot carry other metadata"
            )
        return self

    @property
    def is_restricted(self) -> bool:
        """Whether the channel page showed a suspension/restriction banner."""
        return self.status_message is not None
