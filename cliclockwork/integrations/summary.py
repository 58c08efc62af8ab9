"""
Text-generation summaries of worklog reports.

The summarizer is only available when an OpenAI API key is present in the
environment.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import openai

from ..exceptions import SummaryError

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "OPENAI_API_KEY"
MODEL_ENV_VAR = "OPENAI_MODEL"
DEFAULT_MODEL = "gpt-4o-mini"

PROMPT_TEMPLATE = """You are helping a developer prepare for their daily stand-up.
Below are the Jira worklogs they recorded yesterday as JSON, one object per entry
with the issue key, the issue summary, the worklog comment and the time spent.

Write a short, first-person summary of what was worked on, grouped by issue,
suitable for reading aloud in a stand-up. Mention time spent where useful.

Worklogs:
{worklogs}
"""


@dataclass
class SummaryConfig:
    """Settings for the summarization service."""

    api_key: str
    model: str = DEFAULT_MODEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Optional["SummaryConfig"]:
        """
        Read the configuration from the environment.

        Returns:
            The configuration, or None when no API key is set
        """
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_ENV_VAR, "").strip()
        if not api_key:
            return None
        return cls(api_key=api_key, model=env.get(MODEL_ENV_VAR) or DEFAULT_MODEL)


def build_prompt(entries: List[Dict[str, str]]) -> str:
    """Render the projected worklogs into a single prompt."""
    return PROMPT_TEMPLATE.format(worklogs=json.dumps(entries, indent=2, ensure_ascii=False))


class WorklogSummaryService:
    """Sends projected worklogs to a chat completion model."""

    def __init__(self, config: SummaryConfig, client: Any = None) -> None:
        self.config = config
        self._client = client or openai.OpenAI(api_key=config.api_key)

    def summarize(self, entries: List[Dict[str, str]]) -> str:
        """
        Summarize worklog entries.

        Args:
            entries: Projected ``{issue, summary, comment, timeSpent}`` mappings

        Returns:
            The generated summary text

        Raises:
            SummaryError: If the call fails or returns no content
        """
        prompt = build_prompt(entries)
        logger.debug(f"Requesting summary of {len(entries)} worklogs from {self.config.model}")

        try:
            response = self._client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            logger.error(f"Summary request failed: {e}")
            raise SummaryError(f"Summary request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise SummaryError("Summary service returned an empty response")
        return content.strip()
