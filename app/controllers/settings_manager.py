"""Gradebook settings manager - load/save preferences as JSON."""

import json
import logging
from pathlib import Path
from typing import Optional

from models.settings import GradebookSettings

logger = logging.getLogger(__name__)


class SettingsManager:
    """Reads and writes GradebookSettings.

    Settings live in a user-writable JSON file. A missing, unreadable or
    invalid file yields the default settings.
    """

    def __init__(self, settings_file: Optional[Path] = None):
        if settings_file is None:
            settings_file = self._default_settings_path()
        self._settings_file = Path(settings_file)
        self.settings = self._load()

    @staticmethod
    def _default_settings_path() -> Path:
        """Return the default path for the settings file."""
        return Path.home() / ".gradebook" / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def update(self, **changes) -> GradebookSettings:
        """Apply changes, validate them and save.

        Raises:
            ValueError: If a changed value is invalid; nothing is saved.
        """
        data = self.settings.to_dict()
        unknown = set(changes) - set(data)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        data.update(changes)
        self.settings = GradebookSettings.from_dict(data)
        self.save()
        return self.settings

    def reset(self) -> GradebookSettings:
        self.settings = GradebookSettings()
        self.save()
        return self.settings

    # --- Persistence ---

    def _load(self) -> GradebookSettings:
        """Load settings from disk."""
        if not self._settings_file.exists():
            return GradebookSettings()
        try:
            data = json.loads(self._settings_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to load settings from %s: %s", self._settings_file, e)
            return GradebookSettings()
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self._settings_file)
            return GradebookSettings()
        try:
            return GradebookSettings.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid settings in %s: %s", self._settings_file, e)
            return GradebookSettings()

    def save(self) -> None:
        """Write settings to disk."""
        try:
            self._settings_file.parent.mkdir(parents=True, exist_ok=True)
            self._settings_file.write_text(json.dumps(self.settings.to_dict(), indent=2))
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self._settings_file, e)
