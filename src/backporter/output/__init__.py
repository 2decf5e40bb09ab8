"""
Write-request buffering, conflict resolution and serialization.
"""

from .manager import FileManager
from .mergers import MergerRegistry, OverridesMerger, RequestMerger, deduplicate_overrides
from .requests import MergeStrategy, RequestType, WriteRequest
from .writers import (
    CITPropertiesWriter,
    FileWriter,
    PommelModelWriter,
    TextureCopyWriter,
    VanillaModelWriter,
    WriterRegistry,
    dump_json,
    format_properties,
)

__all__ = [
    "FileManager",
    "MergerRegistry",
    "OverridesMerger",
    "RequestMerger",
    "deduplicate_overrides",
    "MergeStrategy",
    "RequestType",
    "WriteRequest",
    "CITPropertiesWriter",
    "FileWriter",
    "PommelModelWriter",
    "TextureCopyWriter",
    "VanillaModelWriter",
    "WriterRegistry",
    "dump_json",
    "format_properties",
]
