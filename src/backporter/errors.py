"""
Exception types raised by the backport pipeline.
"""

from pathlib import Path


class BackportError(Exception):
    """Base class for all backporter errors."""
    pass


class InputPackError(BackportError):
    """Raised when the input pack directory is missing or unusable."""
    pass


class UnsupportedNodeError(BackportError):
    """Raised when an item descriptor contains a node outside the known shapes."""

    def __init__(self, message: str, node: object = None):
        super().__init__(message)
        self.node = node


class MissingSourcePathError(BackportError):
    """Raised when an asset copy request carries no source path."""
    pass


class TemplateValidationError(BackportError):
    """Raised when a hand-authored template model fails structural validation."""

    def __init__(self, path: Path | str, errors: list[str]):
        super().__init__(f"Template file validation failed: {path}")
        self.path = path
        self.errors = errors
