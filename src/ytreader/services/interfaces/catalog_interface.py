"""
Abstract Base Class for channel catalog sources.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ...models.fleet import CatalogChannel


class ChannelCatalog(ABC):
    """Source of the channels a fleet should crawl."""

    @abstractmethod
    async def list_channels(self) -> List[CatalogChannel]:
        """
        Return the channels to crawl, in catalog order.

        Returns
        -------
        List[CatalogChannel]
            Catalog entries; only ``id`` is relied upon.
        """
        pass
