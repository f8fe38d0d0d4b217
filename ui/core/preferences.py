from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from domain import settings as settings_repo

LOGGER = logging.getLogger("ui.core.preferences")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})


class SettingsBackend:
    """String key/value store behind the UI preferences (dark mode and friends)."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def set(self, key: str, value: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


def read_flag(backend: SettingsBackend, key: str, default: bool = False) -> bool:
    """Read a boolean preference stored as ``"true"``/``"false"``."""

    raw = backend.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_WORDS


def write_flag(backend: SettingsBackend, key: str, value: bool) -> bool:
    return backend.set(key, "true" if value else "false")


class DatabaseSettingsBackend(SettingsBackend):
    """Preferences kept in the ``app_settings`` table of the app database."""

    def get(self, key: str) -> Optional[str]:
        return settings_repo.get_setting(key)

    def set(self, key: str, value: str) -> bool:
        return settings_repo.set_setting(key, value)


class JsonFallbackSettingsBackend(SettingsBackend):
    """Preferences kept in a small JSON file under the user's home."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            LOGGER.warning("Ignoring unreadable preferences file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> bool:
        data = self._load()
        data[key] = value
        try:
            self._path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Unable to write preferences file %s: %s", self._path, exc)
            return False
        return True


class CompositeSettingsBackend(SettingsBackend):
    """Reads the primary first and mirrors every write into the fallback.

    A write counts as durable only if the next :meth:`get` returns it: either
    the primary took it, or the primary holds nothing for the key so reads
    fall through to the fallback.
    """

    def __init__(self, primary: SettingsBackend, fallback: SettingsBackend) -> None:
        self._primary = primary
        self._fallback = fallback

    def get(self, key: str) -> Optional[str]:
        value = self._primary.get(key)
        if value is not None:
            return value
        return self._fallback.get(key)

    def set(self, key: str, value: str) -> bool:
        primary_ok = self._primary.set(key, value)
        fallback_ok = self._fallback.set(key, value)
        if primary_ok:
            return True
        if fallback_ok and self._primary.get(key) is None:
            return True
        LOGGER.warning("Preference '%s' was not stored where it will be read back", key)
        return False


def default_backend(user_home: Path) -> SettingsBackend:
    return CompositeSettingsBackend(
        DatabaseSettingsBackend(),
        JsonFallbackSettingsBackend(user_home / "settings" / "ui.json"),
    )
