"""Application configuration and persisted preferences."""

import getpass
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Persisted preference keys
IS_USING_SHARED_DATA = "isUsingSharedData"
MODE_WAS_EXPLICITLY_SET = "modeWasExplicitlySet"


@dataclass(frozen=True)
class AppConfig:
    """Locations of the stores and the preferences file."""

    data_dir: Path
    local_database_path: Path
    shared_database_url: str
    preferences_path: Path
    user_id: str

    @property
    def local_database_url(self) -> str:
        """SQLAlchemy URL of the standalone store."""
        return f"sqlite:///{self.local_database_path}"


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "local-user"


def load_config(
    data_dir: Optional[str] = None,
    database_path: Optional[str] = None,
    shared_database_url: Optional[str] = None,
    user_id: Optional[str] = None,
) -> AppConfig:
    """Load configuration from arguments, then environment, then defaults.

    Args:
        data_dir: Data directory. If None, checks SCHEDULEC_HOME, then
            defaults to ~/.schedulec
        database_path: Standalone SQLite file. If None, checks
            SCHEDULEC_DB_PATH, then defaults to <data_dir>/schedulec.db
        shared_database_url: SQLAlchemy URL of the shared store. If None,
            checks SCHEDULEC_SHARED_DB_URL, then defaults to a SQLite file
            <data_dir>/shared.db
        user_id: Acting user. If None, checks SCHEDULEC_USER, then the OS login

    Returns:
        AppConfig instance
    """
    if data_dir is None:
        data_dir = os.environ.get("SCHEDULEC_HOME")
    home = Path(data_dir) if data_dir else Path.home() / ".schedulec"
    home.mkdir(parents=True, exist_ok=True)

    if database_path is None:
        database_path = os.environ.get("SCHEDULEC_DB_PATH")
    local_path = Path(database_path) if database_path else home / "schedulec.db"

    if shared_database_url is None:
        shared_database_url = os.environ.get("SCHEDULEC_SHARED_DB_URL")
    if not shared_database_url:
        shared_database_url = f"sqlite:///{home / 'shared.db'}"

    if user_id is None:
        user_id = os.environ.get("SCHEDULEC_USER") or _default_user()

    return AppConfig(
        data_dir=home,
        local_database_path=local_path,
        shared_database_url=shared_database_url,
        preferences_path=home / "preferences.json",
        user_id=user_id,
    )


class Preferences:
    """Small persisted key/value store backed by a JSON file."""

    def __init__(self, path: Path):
        """Initialize preferences.

        Args:
            path: JSON file holding the values; created on first write
        """
        self.path = Path(path)
        self._values: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Preferences file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Preferences file {self.path} does not contain an object")
        return data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(self._values, handle, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def has(self, key: str) -> bool:
        """Return True if a value has ever been stored for key."""
        return key in self._values

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return a stored flag, or default if unset."""
        return bool(self._values.get(key, default))

    def set_bool(self, key: str, value: bool) -> None:
        """Store a flag and persist immediately."""
        self._values[key] = bool(value)
        self._save()
        logger.debug("Preference %s set to %s", key, value)

    def set_many(self, values: dict[str, bool]) -> None:
        """Store several flags with a single write."""
        self._values.update({key: bool(value) for key, value in values.items()})
        self._save()
