"""
File-backed channel catalog.

Reads the crawl catalog from a CSV export with an ``id`` column (and an
optional ``title`` column). Rows whose ID is not a valid channel ID are
skipped with a warning; duplicate IDs keep their first occurrence.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List

from ytreader.exceptions import YtReaderError
from ytreader.models.fleet import CatalogChannel
from ytreader.models.youtube_types import validate_channel_id
from ytreader.services.interfaces import ChannelCatalog

logger = logging.getLogger(__name__)


class CatalogFileError(YtReaderError):
    """Raised when the catalog file is missing or has no ``id`` column."""

    pass


class CsvChannelCatalog(ChannelCatalog):
    """Channel catalog read from a CSV file."""

    def __init__(self, path: Path) -> None:
        """
        Initialize the catalog.

        Args:
            path: CSV file with an ``id`` column
        """
        self.path = path

    async def list_channels(self) -> List[CatalogChannel]:
        """
        Parse the catalog file.

        Returns
        -------
        List[CatalogChannel]
            Valid, de-duplicated channels in file order.

        Raises
        ------
        CatalogFileError
            If the file does not exist or lacks an ``id`` column.
        """
        if not self.path.exists():
            raise CatalogFileError(f"Catalog file not found: {self.path}")

        channels: List[CatalogChannel] = []
        seen: set[str] = set()
        with open(self.path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None or "id" not in reader.fieldnames:
                raise CatalogFileError(f"Catalog file {self.path} has no 'id' column")

            for line_number, row in enumerate(reader, start=2):
                channel_id = (row.get("id") or "").strip()
                if not validate_channel_id(channel_id):
                    logger.warning(
                        "Skipping catalog line %d: invalid channel id %r",
                        line_number,
                        channel_id,
                    )
                    continue
                if channel_id in seen:
                    continue
                seen.add(channel_id)
                title = (row.get("title") or "").strip() or None
                channels.append(CatalogChannel(id=channel_id, title=title))

        logger.info("Loaded %d channels from %s", len(channels), self.path)
        return channels
