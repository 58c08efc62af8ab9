"""
Core timer functionality for cliclockwork.

This module contains the TimerService class that mirrors the remote Clockwork
timer in the local configuration record.
"""

import logging
from typing import Callable, Optional

from ..api.client import ClockworkClient
from ..exceptions import ClockworkError, NoActiveTimerError
from ..utils.config import ConfigStore
from .credentials import CredentialResolver

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], ClockworkClient]


def default_client_factory(token: str, base_url: str) -> ClockworkClient:
    """Build a Clockwork client for the given token and base URL."""
    return ClockworkClient(token, base_url=base_url)


class TimerService:
    """Start, stop and inspect the single active timer."""

    def __init__(
        self,
        store: ConfigStore,
        resolver: CredentialResolver,
        client_factory: ClientFactory = default_client_factory,
    ) -> None:
        """
        Initialize TimerService.

        Args:
            store: Configuration store holding the timer and token
            resolver: Resolver used to obtain the API token
            client_factory: Builds an API client from a token and base URL
        """
        self.store = store
        self.resolver = resolver
        self.client_factory = client_factory

    def _client(self, token: str) -> ClockworkClient:
        return self.client_factory(token, self.store.get_api_url())

    def start(self, issue_key: str) -> str:
        """
        Start the remote timer for a ticket and record it locally.

        The remote service owns single-timer semantics, so any previously
        recorded timer is simply replaced.

        Args:
            issue_key: Ticket identifier, e.g. PROJ-1

        Returns:
            Confirmation message from the API

        Raises:
            ClockworkError: If the ticket identifier is blank
            ClockworkAPIError: If the remote call fails; the record is unchanged
        """
        token = self.resolver.get_token()
        issue_key = issue_key.strip()
        if not issue_key:
            raise ClockworkError("Ticket identifier must not be empty")
        previous = self.store.get_timer()

        with self._client(token) as client:
            message = client.start_timer(issue_key)

        self.store.merge({"timer": issue_key})
        if previous and previous != issue_key:
            logger.info(f"Replaced local timer {previous} with {issue_key}")
        else:
            logger.info(f"Started timer for {issue_key}")
        return message

    def stop(self) -> str:
        """
        Stop the active timer.

        Returns:
            Confirmation message from the API

        Raises:
            NoActiveTimerError: If no timer is recorded; nothing is sent
            ClockworkAPIError: If the remote call fails; the timer stays recorded
        """
        token = self.resolver.get_token()
        issue_key = self.store.get_timer()
        if not issue_key:
            raise NoActiveTimerError()

        with self._client(token) as client:
            message = client.stop_timer(issue_key)

        self.store.merge({"timer": None})
        logger.info(f"Stopped timer for {issue_key}")
        return message

    def info(self) -> Optional[str]:
        """
        Get the active timer.

        Returns:
            The ticket identifier, or None if no timer is active
        """
        return self.store.get_timer()

    def reset(self) -> None:
        """Clear the local timer without contacting the API."""
        self.store.merge({"timer": None})
        logger.info("Local timer reset")

    def auth(self) -> str:
        """Resolve the API token, prompting for it if needed."""
        return self.resolver.get_token()
