"""Core timer, credential and worklog services for cliclockwork."""

from .credentials import CredentialResolver, Resolution
from ..exceptions import (
    ClockworkAPIError,
    ClockworkError,
    CredentialError,
    NoActiveTimerError,
    SummaryError,
)
from .timer import TimerService
from .worklogs import NameMatchPolicy, WorklogSummarizer

__all__ = [
    "ClockworkAPIError",
    "ClockworkError",
    "CredentialError",
    "CredentialResolver",
    "NameMatchPolicy",
    "NoActiveTimerError",
    "Resolution",
    "SummaryError",
    "TimerService",
    "WorklogSummarizer",
]
