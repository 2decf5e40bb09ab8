"""
Resource pack layout: scanning the input tree and copying base assets.
"""

from .models import ResourcePackStructure, DirectoryIndex, strip_namespace
from .scanner import StructureScanner
from .assets import BaseAssetCopier

__all__ = [
    "ResourcePackStructure",
    "DirectoryIndex",
    "strip_namespace",
    "StructureScanner",
    "BaseAssetCopier",
]
