"""Optional debug log files under a ``logs`` directory."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path


def debug_logs_enabled() -> bool:
    """True when ``DEBUG_LOGS`` equals ``true`` ignoring ASCII case."""
    value = os.environ.get("DEBUG_LOGS")
    return value is not None and value.lower() == "true" and value.isascii()


def save_log_to_file(message: str, logs_dir: str | os.PathLike[str] = "logs") -> Path | None:
    """Append a timestamped line to the hourly log file; returns its path when written."""
    if not debug_logs_enabled():
        return None
    directory = Path(logs_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"save_log_to_file mkdir error: {exc}", file=sys.stderr)
        return None
    now = datetime.now(timezone.utc)
    path = directory / f"logs_{now.strftime('%H-%d-%m-%Y')}.txt"
    stamp = f"{now.strftime('%H:%M:%S')}.{now.microsecond // 1000:03d}"
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(f"[{stamp}] {message}\n")
    except OSError as exc:
        print(f"save_log_to_file error: {exc}", file=sys.stderr)
        return None
    return path


def trim_chars(text: str, limit: int) -> str:
    """Return at most the first ``limit`` characters of ``text``."""
    return text[: max(limit, 0)]