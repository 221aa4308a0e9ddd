"""Inline editing of a numeric field of the auto-trade form."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, MutableMapping

from .cache import save_autotrade_cache

_ACCEPTED_CHARS = frozenset("0123456789.")


@dataclass
class FieldEditor:
    """Edit buffer for the focused auto-trade field.

    Keys are named ``"Backspace"``, ``"Enter"`` and ``"Esc"`` or given as a
    single character. While a field is focused every key belongs to the editor.
    """

    base_dir: str | os.PathLike[str] | None = None
    focused_field: str | None = None
    buffer: str = ""

    @property
    def active(self) -> bool:
        """True while a field is being edited."""
        return self.focused_field is not None

    def focus(self, field: str | None) -> None:
        """Start editing ``field`` with an empty buffer; ``None`` stops editing."""
        self.focused_field = field
        self.buffer = ""

    def _reset(self) -> None:
        self.focused_field = None
        self.buffer = ""

    def handle_key(self, key: str, store: MutableMapping[str, str]) -> tuple[str, str] | None:
        """Apply a key press to the buffer.

        Enter writes a non-empty buffer into ``store``, saves the auto-trade
        cache and returns the committed ``(field, value)``; Enter and Esc both
        end editing. Every other case returns ``None``.
        """
        field = self.focused_field
        if field is None:
            return None
        if len(key) == 1 and key in _ACCEPTED_CHARS:
            self.buffer += key
        elif key == "Backspace":
            self.buffer = self.buffer[:-1]
        elif key == "Enter":
            committed: tuple[str, str] | None = None
            if self.buffer:
                store[field] = self.buffer
                try:
                    save_autotrade_cache(store, self.base_dir)
                except OSError:
                    pass
                committed = (field, self.buffer)
            self._reset()
            return committed
        elif key == "Esc":
            self._reset()
        return None

    def display_store(self, store: Mapping[str, str]) -> dict[str, str]:
        """A copy of ``store`` showing the buffer in place of the focused field."""
        shown = dict(store)
        if self.focused_field is not None:
            shown[self.focused_field] = self.buffer
        return shown