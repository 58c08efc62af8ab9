"""
Daily worklog reports for cliclockwork.

This module fetches the previous day's worklogs, keeps the entries written by
the current user and projects them for display or summarization.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Callable, List, Optional

from ..exceptions import ClockworkError
from ..models import Worklog, WorklogSummaryEntry
from ..utils.config import ConfigStore
from ..utils.formatting import format_iso_date
from .credentials import CredentialResolver
from .timer import ClientFactory, default_client_factory

logger = logging.getLogger(__name__)


class NameMatchPolicy(str, Enum):
    """How a worklog author is matched against the configured name."""

    SUBSTRING = "substring"
    EXACT = "exact"
    REGEX = "regex"

    def matches(self, name: str, author: str) -> bool:
        """Check whether ``author`` matches ``name`` under this policy."""
        if not author:
            return False
        if self is NameMatchPolicy.EXACT:
            return author.casefold() == name.casefold()
        if self is NameMatchPolicy.REGEX:
            return re.search(name, author, re.IGNORECASE) is not None
        return name.casefold() in author.casefold()


def yesterday(today: Optional[date] = None) -> date:
    """Return the calendar day before ``today`` (local time)."""
    return (today or date.today()) - timedelta(days=1)


def filter_worklogs(
    worklogs: List[Worklog], name: str, policy: NameMatchPolicy = NameMatchPolicy.SUBSTRING
) -> List[Worklog]:
    """Keep the worklogs whose author matches ``name``."""
    if policy is NameMatchPolicy.REGEX:
        try:
            re.compile(name)
        except re.error as e:
            raise ClockworkError(f"Invalid name pattern '{name}': {e}") from e
    return [w for w in worklogs if policy.matches(name, w.author_name)]


@dataclass
class DailyReport:
    """Worklogs of a single day for one user."""

    day: date
    name: str
    entries: List[WorklogSummaryEntry] = field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        return sum(entry.time_spent_seconds for entry in self.entries)

    def to_report_dicts(self) -> List[dict]:
        return [entry.to_report_dict() for entry in self.entries]


class WorklogSummarizer:
    """Builds the daily report of the current user's worklogs."""

    def __init__(
        self,
        store: ConfigStore,
        resolver: CredentialResolver,
        client_factory: ClientFactory = default_client_factory,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.client_factory = client_factory
        self.today = today

    def resolve_policy(self, policy: Optional[str] = None) -> NameMatchPolicy:
        """
        Pick the author match policy.

        An explicit value wins over the ``name_match`` config key.

        Raises:
            ClockworkError: If the policy name is unknown
        """
        value = policy or self.store.get_name_match()
        try:
            return NameMatchPolicy(value.lower())
        except ValueError as e:
            choices = ", ".join(p.value for p in NameMatchPolicy)
            raise ClockworkError(f"Unknown name match policy '{value}' (choose from {choices})") from e

    def build_report(
        self, day: Optional[date] = None, policy: Optional[str] = None
    ) -> DailyReport:
        """
        Fetch and filter the worklogs of a single day.

        Args:
            day: Day to report on; defaults to yesterday
            policy: Author match policy name; defaults to the configured one

        Returns:
            The report for the day

        Raises:
            ClockworkAPIError: If fetching the worklogs fails
        """
        token = self.resolver.get_token()
        name = self.resolver.get_name()
        match_policy = self.resolve_policy(policy)

        report_day = day or yesterday(self.today())
        day_str = format_iso_date(report_day)

        with self.client_factory(token, self.store.get_api_url()) as client:
            worklogs = client.get_worklogs(starting_at=day_str, ending_at=day_str)

        own = filter_worklogs(worklogs, name, match_policy)
        logger.info(
            f"{len(own)} of {len(worklogs)} worklogs on {day_str} match "
            f"'{name}' ({match_policy.value})"
        )

        return DailyReport(
            day=report_day,
            name=name,
            entries=[WorklogSummaryEntry.from_worklog(w) for w in own],
        )
