"""JSON caches for the auto-trade form and the UI settings."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping

_AUTOTRADE_FILE = "autotrade.json"
_SETTINGS_FILE = "settings.json"


@dataclass
class SettingsCache:
    """UI preferences persisted between sessions."""

    hide_wallet: bool = False
    hide_runtime: bool = False
    sim_mode: bool = False


def cache_dir(base_dir: str | os.PathLike[str] | None = None) -> Path:
    """Return ``<base>/.cache``, creating it; ``base`` defaults to the working directory."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    path = base / ".cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_autotrade_cache(base_dir: str | os.PathLike[str] | None = None) -> dict[str, str]:
    """Load the saved auto-trade config; empty when no cache exists."""
    path = cache_dir(base_dir) / _AUTOTRADE_FILE
    if not path.exists():
        return {}
    contents = path.read_text(encoding="utf-8")
    try:
        data = json.loads(contents)
    except ValueError as exc:
        raise ValueError(f"Failed to parse autotrade cache: {exc}") from exc
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError("Failed to parse autotrade cache: expected an object of strings")
    return data


def save_autotrade_cache(
    store: Mapping[str, str], base_dir: str | os.PathLike[str] | None = None
) -> Path:
    """Write the auto-trade config as pretty JSON and return the file path."""
    path = cache_dir(base_dir) / _AUTOTRADE_FILE
    path.write_text(json.dumps(dict(store), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def load_settings_cache(base_dir: str | os.PathLike[str] | None = None) -> SettingsCache:
    """Load UI settings; defaults when no cache exists."""
    path = cache_dir(base_dir) / _SETTINGS_FILE
    if not path.exists():
        return SettingsCache()
    contents = path.read_text(encoding="utf-8")
    try:
        data = json.loads(contents)
    except ValueError as exc:
        raise ValueError(f"Failed to parse settings cache: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Failed to parse settings cache: expected an object")
    values = {}
    for name in ("hide_wallet", "hide_runtime", "sim_mode"):
        value = data.get(name)
        if not isinstance(value, bool):
            raise ValueError(f"Failed to parse settings cache: missing or invalid {name}")
        values[name] = value
    return SettingsCache(**values)


def save_settings_cache(
    settings: SettingsCache, base_dir: str | os.PathLike[str] | None = None
) -> Path:
    """Write UI settings as pretty JSON and return the file path."""
    path = cache_dir(base_dir) / _SETTINGS_FILE
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    return path