"""Hex quantity parsing and BNB formatting."""

from __future__ import annotations

import re

WEI_PER_BNB = 10**18
_U128_MAX = 2**128 - 1
_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def parse_hex_quantity(raw_hex: str) -> int:
    """Parse an RPC hex quantity such as ``0x1`` or ``0XDEAD``; empty means zero."""
    s = raw_hex.strip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if not s:
        return 0
    if len(s) % 2:
        s = "0" + s
    if not _HEX_RE.fullmatch(s):
        raise ValueError(f"failed to decode balance hex `{s}`")
    if len(s) // 2 > 32:
        raise ValueError(f"balance hex `{s}` exceeds 256 bits")
    return int(s, 16)


def wei_to_bnb(wei: int) -> str:
    """Format wei as BNB with trailing zeros trimmed; values above 128 bits stay in wei."""
    if wei > _U128_MAX:
        return f"{wei} wei"
    whole, frac = divmod(wei, WEI_PER_BNB)
    if frac == 0:
        return f"{whole} BNB"
    frac_str = f"{frac:018d}".rstrip("0")
    return f"{whole}.{frac_str} BNB"


def format_bnb(raw_hex: str) -> str:
    """Format a hex wei balance as a human BNB string."""
    return wei_to_bnb(parse_hex_quantity(raw_hex))