"""
Settings package for the backporter.

Settings are stored with Qt's QSettings in INI format, either in an explicit
file or in the per-user configuration location.

Usage:
    from backporter.settings import BackportSettings

    settings = BackportSettings("backporter.ini")
    result = settings.validate()
"""

from .core import BackportSettings
from .logging import LoggingSettings
from .pipeline import PipelineSettings
from .types import ConfigError, ConfigVersion, ValidationResult

__all__ = [
    "BackportSettings",
    "LoggingSettings",
    "PipelineSettings",
    "ConfigError",
    "ConfigVersion",
    "ValidationResult",
]
