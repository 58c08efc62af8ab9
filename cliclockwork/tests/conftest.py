"""
Pytest configuration and fixtures for cliclockwork tests.

This module provides shared fixtures and configuration for all test modules.
"""

import json
import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional

import httpx
import pytest

from cliclockwork.api.client import ClockworkClient
from cliclockwork.core.credentials import CredentialResolver
from cliclockwork.core.timer import TimerService
from cliclockwork.core.worklogs import WorklogSummarizer
from cliclockwork.utils.config import ConfigStore


class FakePrompter:
    """Prompter returning canned answers and recording the questions asked."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.messages: List[str] = []

    def __call__(self, message: str) -> str:
        self.messages.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


class FakeClockworkAPI:
    """In-memory stand-in for the Clockwork API behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, httpx.Response] = {}
        self.worklogs: List[Dict[str, Any]] = []

    def fail(self, path: str, status_code: int, payload: Any) -> None:
        """Make the endpoint at ``path`` answer with an error."""
        self.responses[path] = httpx.Response(status_code, json=payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rsplit("/", 1)[-1]

        if path in self.responses:
            return self.responses[path]

        if path in ("start_timer", "stop_timer"):
            issue_key = json.loads(request.content)["issue_key"]
            verb = "started" if path == "start_timer" else "stopped"
            return httpx.Response(
                200, json={"messages": [{"body": f"Timer {verb} for {issue_key}"}]}
            )

        if path == "worklogs":
            return httpx.Response(200, json=self.worklogs)

        return httpx.Response(404, json={"error": "not found"})

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Provide a settings path inside a not-yet-existing directory."""
    return temp_dir / "cliclockwork" / "settings.json"


@pytest.fixture
def store(config_file: Path) -> ConfigStore:
    """Provide a configuration store backed by a temporary file."""
    return ConfigStore(config_file)


@pytest.fixture
def write_config(config_file: Path) -> Callable[[Dict[str, Any]], None]:
    """Write a raw configuration record to the settings file."""

    def _write(record: Dict[str, Any]) -> None:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(record))

    return _write


@pytest.fixture
def fake_api() -> FakeClockworkAPI:
    """Provide a fake Clockwork API."""
    return FakeClockworkAPI()


@pytest.fixture
def client_factory(fake_api: FakeClockworkAPI) -> Callable[[str, str], ClockworkClient]:
    """Build clients that talk to the fake API."""

    def _factory(token: str, base_url: str) -> ClockworkClient:
        return ClockworkClient(
            token, base_url=base_url, transport=httpx.MockTransport(fake_api.handler)
        )

    return _factory


@pytest.fixture
def prompter() -> FakePrompter:
    """Provide a prompter that must not be used unless answers are added."""
    return FakePrompter()


@pytest.fixture
def resolver(store: ConfigStore, prompter: FakePrompter) -> CredentialResolver:
    """Provide a credential resolver using the fake prompter."""
    return CredentialResolver(store, prompter=prompter)


@pytest.fixture
def timer_service(
    store: ConfigStore,
    resolver: CredentialResolver,
    client_factory: Callable[[str, str], ClockworkClient],
) -> TimerService:
    """Provide a timer service wired to the fake API."""
    return TimerService(store, resolver, client_factory=client_factory)


@pytest.fixture
def today() -> date:
    """Provide a fixed 'today' for date calculations."""
    return date(2024, 3, 1)


@pytest.fixture
def summarizer(
    store: ConfigStore,
    resolver: CredentialResolver,
    client_factory: Callable[[str, str], ClockworkClient],
    today: date,
) -> WorklogSummarizer:
    """Provide a worklog summarizer wired to the fake API."""
    return WorklogSummarizer(
        store, resolver, client_factory=client_factory, today=lambda: today
    )


def make_worklog(
    author: str,
    issue: str = "PROJ-1",
    summary: str = "Fix login",
    comment: Optional[Any] = "Worked on it",
    seconds: int = 3600,
    time_spent: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a worklog payload shaped like the Clockwork API's."""
    worklog: Dict[str, Any] = {
        "id": f"{issue}-{author}",
        "author": {"displayName": author, "accountId": author.lower()},
        "issue": {"key": issue, "fields": {"summary": summary}},
        "comment": comment,
        "timeSpentSeconds": seconds,
        "started": "2024-02-29T09:00:00.000+0000",
    }
    if time_spent is not None:
        worklog["timeSpent"] = time_spent
    return worklog

