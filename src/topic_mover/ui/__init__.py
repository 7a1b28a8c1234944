"""Terminal user interfaces for topic mover."""

from .settings_panel import SettingsPanel

__all__ = ["SettingsPanel"]
