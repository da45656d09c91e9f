"""
ytreader - YouTube channel crawler and worker fleet launcher.

Extracts channel, playlist, video, caption and recommendation data from
YouTube's public pages and legacy endpoints, and distributes a channel
catalog across a fleet of short-lived worker container groups.
"""

from __future__ import annotations

__version__ = "0.4.0"
__author__ = "ytreader"
__email__ = "noreply@ytreader.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
