"""
Core settings management for the backporter.
"""

import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from .logging import LoggingSettings
from .pipeline import PipelineSettings
from .types import ConfigError, ConfigVersion, ValidationResult
from .validation import SettingsValidator

logger = logging.getLogger(__name__)

ORGANIZATION = "backporter"
APPLICATION = "backporter"


class BackportSettings:
    """
    Configuration management using QSettings in INI format.

    Settings live either in an explicit INI file or in the per-user INI
    location, grouped under a profile name.
    """

    def __init__(self, config_file: Path | str | None = None, profile: str = "default"):
        """Initialize settings.

        Args:
            config_file: INI file to use instead of the per-user location
            profile: Settings profile name (default: "default")
        """
        if config_file is not None:
            config_path = Path(config_file)
            if config_path.is_dir():
                raise ConfigError(f"Config path is a directory: {config_path}")
            self.settings = QSettings(str(config_path), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(
                QSettings.Format.IniFormat,
                QSettings.Scope.UserScope,
                ORGANIZATION,
                APPLICATION,
            )
        self.profile = profile
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._logging = LoggingSettings(self.settings)
        self._pipeline = PipelineSettings(self.settings)

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def pipeline(self) -> PipelineSettings:
        """Access pipeline settings subsystem."""
        return self._pipeline

    @property
    def version(self) -> str:
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
