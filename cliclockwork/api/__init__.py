"""Clockwork API client package."""

from .client import ClockworkClient

__all__ = ["ClockworkClient"]
