"""
Settings validation for the backporter.
"""

import logging
import os
from pathlib import Path
from typing import List, TYPE_CHECKING

from .helpers import VALID_LEVELS
from .types import ConfigVersion, ValidationResult

if TYPE_CHECKING:
    from .core import BackportSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "BackportSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        level = self.settings.logging.console_log_level
        if level.upper() not in VALID_LEVELS:
            errors.append(f"Unknown console log level: {level}")

        if not self.settings.pipeline.namespace.strip():
            errors.append("Asset namespace must not be empty")

        known_versions = {version.value for version in ConfigVersion}
        if self.settings.version not in known_versions:
            warnings.append(f"Unknown settings version: {self.settings.version}")

        if self.settings.logging.file_logging:
            log_dir = self._existing_parent(self.settings.logging.log_file_absolute_path.parent)
            if not os.access(log_dir, os.W_OK):
                warnings.append(f"Log directory is not writable: {log_dir}")

        if errors:
            logger.debug(f"Settings validation failed: {errors}")
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)

    @staticmethod
    def _existing_parent(path: Path) -> Path:
        while not path.exists() and path.parent != path:
            path = path.parent
        return path
