"""
Configuration management for cliclockwork.

This module handles the persisted configuration record (API token, active timer,
user name) and its location on disk.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, cast

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "cliclockwork"
CONFIG_ENV_VAR = "CLICLOCKWORK_CONFIG"
DEFAULT_API_URL = "https://api.clockwork.report/v1"
DEFAULT_NAME_MATCH = "substring"


def default_config_path() -> Path:
    """Return the settings file path, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME)) / "settings.json"


class ConfigStore:
    """Reads and merge-writes the single JSON configuration record."""

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Initialize the store.

        Args:
            config_file: Path of the JSON settings file. Defaults to the per-user
                configuration path.
        """
        self.config_file = Path(config_file) if config_file else default_config_path()

    def load(self) -> Dict[str, Any]:
        """
        Load the configuration record.

        A missing, unreadable or malformed file yields an empty record.
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning(f"Could not load config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file}: not a JSON object")
            return {}

        return data

    def merge(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shallow-merge ``partial`` over the stored record and write it back.

        Keys in ``partial`` overwrite stored values; every other stored key is kept.

        Returns:
            The record as written to disk
        """
        config = self.load()
        config.update(partial)
        self._save_config(config)
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value from the stored record, treating ``None`` as absent."""
        value = self.load().get(key)
        return default if value is None else value

    def _save_config(self, config: Dict[str, Any]) -> None:
        """Atomically replace the settings file with ``config``."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.config_file.parent, prefix=".settings-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.config_file)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote config keys {sorted(config)} to {self.config_file}")

    def get_token(self) -> Optional[str]:
        """Get the stored API token, if any."""
        return cast(Optional[str], self.get("token"))

    def get_timer(self) -> Optional[str]:
        """Get the ticket identifier of the active timer, if any."""
        return cast(Optional[str], self.get("timer"))

    def get_name(self) -> Optional[str]:
        """Get the display name used to filter worklogs."""
        return cast(Optional[str], self.get("name"))

    def get_api_url(self) -> str:
        """Get the Clockwork API base URL."""
        return cast(str, self.get("api_url", DEFAULT_API_URL)).rstrip("/")

    def get_name_match(self) -> str:
        """Get the default worklog author match policy."""
        return cast(str, self.get("name_match", DEFAULT_NAME_MATCH))


# Default store handle used by the CLI layer
_config_store: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    """Get the default configuration store for this process."""
    global _config_store
    if _config_store is None:
        _config_store = ConfigStore()
    return _config_store
