"""
Credential resolution for cliclockwork.

Values such as the API token and the user's display name are read from the
configuration record and, when missing, obtained from a prompter and persisted.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from rich.prompt import Prompt

from ..exceptions import CredentialError
from ..utils.config import ConfigStore

logger = logging.getLogger(__name__)

Prompter = Callable[[str], str]

TOKEN_PROMPT = "Please enter your Clockwork API token"
NAME_PROMPT = "Please enter your name as shown in Jira"
MAX_PROMPT_ATTEMPTS = 3


def rich_prompter(message: str) -> str:
    """Ask interactively on the terminal."""
    try:
        return Prompt.ask(message)
    except EOFError:
        raise CredentialError(f"Input closed while waiting for: {message}")


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a credential."""

    value: str
    prompted: bool = False


class CredentialResolver:
    """Resolves credentials from the store, prompting and persisting on first use."""

    def __init__(self, store: ConfigStore, prompter: Prompter = rich_prompter) -> None:
        """
        Initialize the resolver.

        Args:
            store: Configuration store holding the credentials
            prompter: Callable used when a value is missing
        """
        self.store = store
        self.prompter = prompter

    def needs_prompt(self, key: str) -> bool:
        """Check whether resolving ``key`` would require prompting."""
        value = self.store.get(key)
        return not (isinstance(value, str) and value.strip())

    def resolve(self, key: str, message: str) -> Resolution:
        """
        Return the stored value for ``key`` or prompt for one and persist it.

        Args:
            key: Configuration record key
            message: Prompt text shown when the value is missing

        Returns:
            The resolved value and whether the prompter was used

        Raises:
            CredentialError: If the prompter only produced blank answers
        """
        if not self.needs_prompt(key):
            return Resolution(value=self.store.get(key))

        for _ in range(MAX_PROMPT_ATTEMPTS):
            answer = (self.prompter(message) or "").strip()
            if answer:
                self.store.merge({key: answer})
                logger.info(f"Stored new value for '{key}'")
                return Resolution(value=answer, prompted=True)

        raise CredentialError(f"No value provided for '{key}'")

    def get_token(self) -> str:
        """Resolve the Clockwork API token."""
        return self.resolve("token", TOKEN_PROMPT).value

    def get_name(self) -> str:
        """Resolve the display name used to filter worklogs."""
        return self.resolve("name", NAME_PROMPT).value
