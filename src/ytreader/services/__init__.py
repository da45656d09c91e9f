"""
Services module for ytreader.

Contains the scraping services (fetcher, channel, playlist, video and
caption extractors) and the crawl fleet orchestration services.
"""

from __future__ import annotations

from ytreader.services.fetcher import HttpFetcher
from ytreader.services.scraper import YtScraper

__all__: list[str] = ["HttpFetcher", "YtScraper"]
