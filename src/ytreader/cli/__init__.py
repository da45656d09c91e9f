"""
CLI interface module for ytreader.

Provides the Typer-based command-line interface for channel, video, upload
and caption extraction and for crawl fleet planning.
"""

from __future__ import annotations

__all__: list[str] = []
