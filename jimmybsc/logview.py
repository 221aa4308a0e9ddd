"""Merged view over the debug log files and the token addresses they mention."""

from __future__ import annotations

import os
import re
from pathlib import Path

from .keys import to_checksum_address

LINES_PER_PAGE = 100

_ADDRESS_BODY_RE = re.compile(r"[0-9a-fA-F]{40}")
_FOURMEME_SUFFIX = "4444"


def _split_lines(data: bytes) -> list[bytes]:
    if not data:
        return []
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


def _modified_secs(path: Path) -> int:
    try:
        mtime = path.stat().st_mtime
    except OSError:
        return 0
    return int(mtime) if mtime >= 0 else 0


def _display_name(path: Path) -> str:
    name = path.name
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return "log"
    return name


def _files(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    try:
        return sorted(directory.iterdir())
    except OSError:
        return []


def load_logs_from_dir(directory: str | os.PathLike[str] = "logs") -> list[str]:
    """Every line of every file in ``directory``, newest file first and last line first.

    Each line reads ``"<file name> | <line>"`` with trailing whitespace removed;
    lines that are not valid UTF-8 are skipped.
    """
    merged: list[tuple[int, int, str]] = []
    for path in _files(Path(directory)):
        if not path.is_file():
            continue
        modified = _modified_secs(path)
        try:
            data = path.read_bytes()
        except OSError:
            continue
        name = _display_name(path)
        for index, raw in enumerate(_split_lines(data)):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError:
                continue
            merged.append((modified, index, f"{name} | {text.rstrip()}"))
    merged.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
    return [text for _, _, text in merged]


def clamp_logs_scroll(total: int, scroll: int) -> int:
    """Keep the scroll position on an existing line; zero when there are none."""
    if total <= 0:
        return 0
    return min(scroll, total - 1)


def logs_title(total: int, scroll: int) -> str:
    """Title of the logs panel with the current page of 100 lines."""
    scroll = clamp_logs_scroll(total, scroll)
    page = 1 if total <= 0 else scroll // LINES_PER_PAGE + 1
    pages = max(1, (total + LINES_PER_PAGE - 1) // LINES_PER_PAGE)
    return f"Logs (newest first) {page}/{pages} ({total} lines)"


def fourmeme_candidates(directory: str | os.PathLike[str] = "logs") -> set[str]:
    """Checksummed addresses ending in ``4444`` that appear anywhere in the log files."""
    found: set[str] = set()
    for path in _files(Path(directory)):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        for word in text.split():
            if len(word) != 42 or not word.startswith("0x"):
                continue
            body = word[2:]
            if not _ADDRESS_BODY_RE.fullmatch(body):
                continue
            if body.lower().endswith(_FOURMEME_SUFFIX):
                found.add(to_checksum_address(word))
    return found