"""Persistent storage for the settings record."""

import logging
from pathlib import Path
from typing import Optional

from .models.settings import Settings, load_settings, save_settings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = ".topic-mover.json"


def default_settings_path(vault_root: Path) -> Path:
    """Get the settings file location for a vault."""
    return Path(vault_root) / SETTINGS_FILENAME


class SettingsStore:
    """Loads and saves the single settings record of a vault."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.settings: Optional[Settings] = None

    def load(self) -> Settings:
        """Load settings, falling back to defaults for anything not on disk."""
        if self.path.exists():
            self.settings = load_settings(self.path)
        else:
            logger.debug(f"No settings file at {self.path}, using defaults")
            self.settings = Settings.default()
        return self.settings

    def save(self, settings: Optional[Settings] = None) -> None:
        """Write settings to disk."""
        if settings is not None:
            self.settings = settings
        if self.settings is None:
            self.settings = Settings.default()
        save_settings(self.settings, self.path)
        logger.debug(f"Saved settings to {self.path}")

    @property
    def current(self) -> Settings:
        """Get the loaded settings, loading them on first use."""
        if self.settings is None:
            return self.load()
        return self.settings
