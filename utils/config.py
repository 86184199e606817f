"""Configuration management for BongoStats."""

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

log = logging.getLogger("bongostats.config")

SETTINGS_FILE_NAME = "settings.json"


class AppSettings(BaseModel):
    """Application settings with validation."""

    # Persistence
    autosave_every_events: int = Field(
        default=100,
        gt=0,
        description="Recorded events between automatic saves",
    )

    # Rate tracking
    rate_window_size: int = Field(
        default=1000,
        gt=0,
        description="Key presses kept for keys/words per minute",
    )
    average_word_length: float = Field(
        default=5.0,
        gt=0,
        description="Letters per word for WPM",
    )

    # Wrapped stats
    top_inputs_limit: int = Field(
        default=10,
        gt=0,
        description="Entries in the wrapped stats top inputs ranking",
    )

    model_config = ConfigDict(extra="ignore")


class Config:
    """Configuration manager using a JSON file with Pydantic validation."""

    def __init__(self, path: Path):
        """Initialize config backed by a settings file.

        Args:
            path: Path to the JSON settings file
        """
        self.path = Path(path)
        self._values = self._load()
        self._ensure_defaults()

    @classmethod
    def for_base_dir(cls, base_dir: Path) -> "Config":
        return cls(Path(base_dir) / SETTINGS_FILE_NAME)

    def _load(self) -> dict[str, Any]:
        """Read stored values, falling back to empty on any problem."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            log.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            log.warning(f"Ignoring settings file {self.path}: not a JSON object")
            return {}
        return data

    def _ensure_defaults(self) -> None:
        """Ensure all default settings are present, dropping invalid stored ones."""
        defaults = AppSettings().model_dump()
        changed = False
        for key, default in defaults.items():
            if key not in self._values:
                self._values[key] = default
                changed = True
                continue
            try:
                AppSettings(**{key: self._values[key]})
            except ValidationError as e:
                log.warning(f"Invalid stored value for {key}, using default: {e}")
                self._values[key] = default
                changed = True
        if changed:
            self._write()

    def _write(self) -> None:
        """Write settings atomically; failures are logged, not raised."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            log.warning(f"Could not write settings file {self.path}: {e}")

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get configuration value.

        Args:
            key: Setting key
            default: Default value if not found

        Returns:
            Setting value
        """
        if key in self._values:
            return self._values[key]
        if default is not None:
            return default
        if key in AppSettings.model_fields:
            return getattr(AppSettings(), key)
        return None

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get integer configuration value."""
        value = self.get(key, default)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(value)
        except (ValueError, TypeError):
            settings = AppSettings()
            if hasattr(settings, key):
                return getattr(settings, key)
            return default if default is not None else 0

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        """Get float configuration value."""
        value = self.get(key, default)
        try:
            return float(value)
        except (ValueError, TypeError):
            settings = AppSettings()
            if hasattr(settings, key):
                return float(getattr(settings, key))
            return default if default is not None else 0.0

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with pydantic validation.

        Args:
            key: Setting key
            value: Setting value

        Raises:
            ValueError: If value fails validation
        """
        if key in AppSettings.model_fields:
            try:
                validated = AppSettings(**{key: value})
                value = getattr(validated, key)
            except ValidationError as e:
                raise ValueError(f"Invalid value for {key}: {e}")

        self._values[key] = value
        self._write()

    def get_all(self) -> dict[str, Any]:
        """Get all settings as dictionary."""
        return dict(self._values)

    def to_settings(self) -> AppSettings:
        """Get the known settings as a validated AppSettings."""
        return AppSettings(**self._values)
