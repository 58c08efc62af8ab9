"""Utility functions for cliclockwork."""

from .config import ConfigStore, get_config_store
from .formatting import format_duration, format_seconds

__all__ = [
    "ConfigStore",
    "get_config_store",
    "format_duration",
    "format_seconds",
]
