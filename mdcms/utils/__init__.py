"""
Shared utility functions.

This package contains utility code used by the web layer and the CLI.
"""

from .logging import EventFormatter, JsonlFormatter, log_event, setup_logging

__all__ = [
    "setup_logging",
    "log_event",
    "EventFormatter",
    "JsonlFormatter",
]
