"""
Data models for cliclockwork.

This module defines the Pydantic models for Clockwork API payloads and the
projected worklog report entries.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.formatting import format_seconds


def flatten_rich_text(value: Any) -> str:
    """
    Flatten a comment value into plain text.

    Jira Cloud returns comments as Atlassian Document Format trees; older
    servers return plain strings.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "".join(flatten_rich_text(item) for item in value)
    if isinstance(value, dict):
        if value.get("type") == "text":
            return str(value.get("text", ""))
        text = flatten_rich_text(value.get("content", []))
        if value.get("type") == "paragraph":
            text += "\n"
        return text
    return str(value)


class ApiMessage(BaseModel):
    """A single entry of the ``messages`` array in a Clockwork response."""

    body: str = Field("", description="Human readable message")

    model_config = ConfigDict(extra="ignore")


class ApiResponse(BaseModel):
    """Envelope returned by the timer endpoints."""

    messages: List[ApiMessage] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def first_message(self, default: str) -> str:
        """Return the body of the first message, or ``default`` if there is none."""
        if self.messages and self.messages[0].body:
            return self.messages[0].body
        return default


class WorklogAuthor(BaseModel):
    """Author of a worklog, as expanded by the API."""

    display_name: str = Field("", alias="displayName")
    account_id: Optional[str] = Field(None, alias="accountId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WorklogIssue(BaseModel):
    """Issue a worklog was recorded against."""

    key: str = Field("", description="Issue key, e.g. PROJ-1")
    issue_fields: Dict[str, Any] = Field(default_factory=dict, alias="fields")
    summary_text: Optional[str] = Field(None, alias="summary")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def summary(self) -> str:
        """Issue summary from either the flat or the Jira ``fields`` shape."""
        if self.summary_text:
            return self.summary_text
        return str(self.issue_fields.get("summary") or "")


class Worklog(BaseModel):
    """Model for a remote worklog record."""

    id: Optional[Any] = None
    author: Optional[WorklogAuthor] = None
    issue: Optional[WorklogIssue] = None
    comment: str = ""
    started: Optional[str] = None
    time_spent: Optional[str] = Field(None, alias="timeSpent")
    time_spent_seconds: Optional[int] = Field(None, alias="timeSpentSeconds")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("comment", mode="before")
    @classmethod
    def validate_comment(cls, v: Any) -> str:
        """Normalize rich-text comments to plain text."""
        return flatten_rich_text(v).strip()

    @property
    def author_name(self) -> str:
        """Display name of the author, empty if not expanded."""
        return self.author.display_name if self.author else ""


class WorklogSummaryEntry(BaseModel):
    """Projection of a worklog used for reports and summaries."""

    issue: str
    summary: str = ""
    comment: str = ""
    time_spent: str = ""
    time_spent_seconds: int = 0

    @classmethod
    def from_worklog(cls, worklog: Worklog) -> "WorklogSummaryEntry":
        """Project a remote worklog onto the report fields."""
        seconds = worklog.time_spent_seconds or 0
        return cls(
            issue=worklog.issue.key if worklog.issue else "",
            summary=worklog.issue.summary if worklog.issue else "",
            comment=worklog.comment,
            time_spent=worklog.time_spent or format_seconds(seconds),
            time_spent_seconds=seconds,
        )

    def to_report_dict(self) -> Dict[str, str]:
        """Return the ``{issue, summary, comment, timeSpent}`` mapping."""
        return {
            "issue": self.issue,
            "summary": self.summary,
            "comment": self.comment,
            "timeSpent": self.time_spent,
        }
