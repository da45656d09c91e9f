"""
Configuration management module for ytreader.

Handles application settings loaded from environment variables and
``.env`` files: proxy credentials, fetch policy, and worker container
parameters.
"""

from __future__ import annotations

from ytreader.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
