"""
HTTP client for the Clockwork API.

This module wraps the three endpoints cliclockwork consumes: starting a timer,
stopping a timer, and listing worklogs.
"""

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from ..exceptions import ClockworkAPIError
from ..models import ApiResponse, Worklog
from ..utils.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)

WORKLOG_EXPAND = "authors,issues,worklogs"


class ClockworkClient:
    """Thin synchronous client for the Clockwork REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Clockwork API token
            base_url: API base URL, without trailing slash
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Token {token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    def __enter__(self) -> "ClockworkClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http_client.close()

    def start_timer(self, issue_key: str) -> str:
        """
        Start the remote timer for an issue.

        Returns:
            The success message reported by the API

        Raises:
            ClockworkAPIError: If the request fails
        """
        data = self._request("POST", "/start_timer", json={"issue_key": issue_key})
        return self._message(data, f"Started timer for {issue_key}")

    def stop_timer(self, issue_key: str) -> str:
        """
        Stop the remote timer for an issue.

        Returns:
            The success message reported by the API

        Raises:
            ClockworkAPIError: If the request fails
        """
        data = self._request("POST", "/stop_timer", json={"issue_key": issue_key})
        return self._message(data, f"Stopped timer for {issue_key}")

    def get_worklogs(
        self,
        starting_at: str,
        ending_at: str,
        expand: str = WORKLOG_EXPAND,
    ) -> List[Worklog]:
        """
        List worklogs between two ISO dates (inclusive).

        Args:
            starting_at: First day of the window (YYYY-MM-DD)
            ending_at: Last day of the window (YYYY-MM-DD)
            expand: Sub-resources to expand in the response

        Returns:
            Parsed worklogs

        Raises:
            ClockworkAPIError: If the request fails or the payload is not a worklog list
        """
        data = self._request(
            "GET",
            "/worklogs",
            params={"starting_at": starting_at, "ending_at": ending_at, "expand": expand},
        )

        if isinstance(data, dict):
            data = data.get("worklogs", [])
        if not isinstance(data, list):
            raise ClockworkAPIError("Unexpected worklog payload", payload=data)

        try:
            worklogs = [Worklog.model_validate(item) for item in data]
        except ValidationError as e:
            raise ClockworkAPIError(f"Invalid worklog payload: {e}") from e

        logger.info(f"Retrieved {len(worklogs)} worklogs for {starting_at}..{ending_at}")
        return worklogs

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body."""
        logger.debug(f"{method} {self.base_url}{path}")
        try:
            response = self._http_client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ClockworkAPIError(f"Request to {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.is_error:
            payload = self._decode(response)
            logger.error(f"Clockwork API returned {response.status_code} for {path}: {payload}")
            raise ClockworkAPIError(
                f"Clockwork API returned {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a JSON body, falling back to the raw text."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _message(data: Any, default: str) -> str:
        if not isinstance(data, dict):
            return default
        try:
            return ApiResponse.model_validate(data).first_message(default)
        except ValidationError:
            return default

