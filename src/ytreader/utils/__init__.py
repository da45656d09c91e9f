"""Utility modules for ytreader."""

from ytreader.utils.log_setup import TRACE, configure_logging

__all__ = ["TRACE", "configure_logging"]
