"""
Exceptions raised by cliclockwork services.
"""

from typing import Any, Optional


class ClockworkError(Exception):
    """Base exception for cliclockwork operations."""

    pass


class ClockworkAPIError(ClockworkError):
    """Raised when a call to the Clockwork API fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.payload is not None:
            return str(self.payload)
        return super().__str__()


class NoActiveTimerError(ClockworkError):
    """Raised when an operation needs an active timer and none is recorded."""

    def __init__(self) -> None:
        super().__init__("No active timer found.")


class CredentialError(ClockworkError):
    """Raised when a credential could not be resolved."""

    pass


class SummaryError(ClockworkError):
    """Raised when the text-generation service fails."""

    pass
