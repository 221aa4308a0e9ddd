"""The Settings tab: three persisted on/off switches."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .cache import SettingsCache, load_settings_cache, save_settings_cache
from .display import Rect


@dataclass
class SettingsToggles:
    """Wallet/runtime panel visibility and simulation mode, with their click areas."""

    hide_wallet: bool = False
    hide_runtime: bool = False
    sim_mode: bool = True
    base_dir: str | os.PathLike[str] | None = None
    wallet_area: Rect | None = None
    runtime_area: Rect | None = None
    sim_mode_area: Rect | None = None

    @classmethod
    def load(cls, base_dir: str | os.PathLike[str] | None = None) -> "SettingsToggles":
        """Load saved settings, force simulation mode on and save that at once."""
        try:
            cached = load_settings_cache(base_dir)
        except (OSError, ValueError):
            cached = SettingsCache()
        toggles = cls(
            hide_wallet=cached.hide_wallet,
            hide_runtime=cached.hide_runtime,
            sim_mode=True,
            base_dir=base_dir,
        )
        toggles.save()
        return toggles

    @property
    def show_left_column(self) -> bool:
        """True when at least one of the left panels is visible."""
        return not self.hide_wallet or not self.hide_runtime

    def click(self, x: int, y: int) -> list[str]:
        """Flip every switch whose area holds ``(x, y)``, saving after each; return their names."""
        changed: list[str] = []
        for name, area in (
            ("hide_wallet", self.wallet_area),
            ("hide_runtime", self.runtime_area),
            ("sim_mode", self.sim_mode_area),
        ):
            if area is not None and area.contains(x, y):
                setattr(self, name, not getattr(self, name))
                self.save()
                changed.append(name)
        return changed

    def save(self) -> Path | None:
        """Persist the switches; returns the file written, or ``None`` when it failed."""
        settings = SettingsCache(
            hide_wallet=self.hide_wallet,
            hide_runtime=self.hide_runtime,
            sim_mode=self.sim_mode,
        )
        try:
            return save_settings_cache(settings, self.base_dir)
        except OSError:
            return None