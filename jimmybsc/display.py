"""Small formatting and hit-testing helpers for the terminal UI."""

from __future__ import annotations

from dataclasses import dataclass

_CJK_RANGES = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0x20000, 0x2A6DF),
    (0x2A700, 0x2B73F),
    (0x2B740, 0x2B81F),
    (0x2B820, 0x2CEAF),
)


@dataclass(frozen=True)
class Rect:
    """A screen rectangle in cell coordinates."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        """True when the cell ``(x, y)`` lies inside the rectangle."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


def short_addr(addr: str) -> str:
    """Shorten a long address to its first six and last four characters."""
    if len(addr) > 12:
        return f"{addr[:6]}…{addr[-4:]}"
    return addr


def balance_short(balance: str) -> str:
    """Cut the numeric part of ``"<number> <unit>"`` to six characters."""
    number, sep, rest = balance.partition(" ")
    if not sep:
        return balance
    return f"{number[:6]} {rest}"


def contains_cjk(text: str) -> bool:
    """True when ``text`` holds any CJK unified ideograph."""
    return any(lo <= ord(ch) <= hi for ch in text for lo, hi in _CJK_RANGES)


def dexes_enabled(csv: str) -> tuple[bool, bool, bool]:
    """Which of v2, v3 and fm a comma list mentions, ignoring case."""
    lower = csv.lower()
    return "v2" in lower, "v3" in lower, "fm" in lower