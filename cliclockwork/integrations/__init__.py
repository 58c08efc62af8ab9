"""
cliclockwork integrations package.

This package provides the optional text-generation summary of worklog reports.
"""

from .summary import SummaryConfig, WorklogSummaryService

__all__ = ["SummaryConfig", "WorklogSummaryService"]
