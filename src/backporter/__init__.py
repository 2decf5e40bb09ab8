"""
Resource pack backporter

Compiles conditional, selector-tree item models into predicate-override models
and metadata-matching property files understood by older renderers.
"""

__version__ = "0.1.0"
__author__ = "Resource Pack Backporter Contributors"

from .coordinator import BackportCoordinator, BackportSummary
from .errors import (
    BackportError,
    InputPackError,
    MissingSourcePathError,
    TemplateValidationError,
    UnsupportedNodeError,
)
from .utils.logging_config import setup_logging

__all__ = [
    "BackportCoordinator",
    "BackportSummary",
    "BackportError",
    "InputPackError",
    "MissingSourcePathError",
    "TemplateValidationError",
    "UnsupportedNodeError",
    "setup_logging",
]
