"""
Postprocessing passes over the written output.
"""

from .model_compatibility import ModelCompatibilityProcessor

__all__ = ["ModelCompatibilityProcessor"]
