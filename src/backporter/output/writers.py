"""
Writers serializing resolved write requests to disk.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Mapping, Sequence

import orjson

from ..errors import MissingSourcePathError
from .requests import RequestType, WriteRequest

HANDHELD_PARENT = "minecraft:item/handheld"
GENERATED_PARENT = "minecraft:item/generated"

# Written first and in this order; everything else follows as given.
PROPERTIES_KEY_ORDER = ("type", "items", "model", "texture")


def dump_json(data: Any) -> bytes:
    """Serialize a model the way every writer in the pipeline does."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2) + b"\n"


class FileWriter(ABC):
    """Writes one request type below its own output root."""

    request_type: RequestType

    def __init__(self, namespace: str = "minecraft"):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.namespace = namespace

    @property
    def name(self) -> str:
        return self.request_type.value

    def can_write(self, request: WriteRequest) -> bool:
        return request.type == self.request_type

    @abstractmethod
    def target_path(self, request: WriteRequest, output_dir: Path) -> Path:
        pass

    @abstractmethod
    def write(self, request: WriteRequest, output_dir: Path) -> Path:
        pass

    def _prepare(self, request: WriteRequest, output_dir: Path) -> Path:
        target = self.target_path(request, output_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target


class PommelModelWriter(FileWriter):
    """Predicate-override models. Never omits parent, textures or overrides."""

    request_type = RequestType.POMMEL_MODEL

    def __init__(self, namespace: str = "minecraft", parent: str = HANDHELD_PARENT):
        super().__init__(namespace)
        self.parent = parent

    def target_path(self, request: WriteRequest, output_dir: Path) -> Path:
        return output_dir / "assets" / self.namespace / "models" / request.path

    def write(self, request: WriteRequest, output_dir: Path) -> Path:
        content = request.content
        model = {
            "parent": content.get("parent") or self.parent,
            "textures": content.get("textures") or {},
            "overrides": content.get("overrides") or [],
        }
        for key, value in content.items():
            model.setdefault(key, value)

        target = self._prepare(request, output_dir)
        target.write_bytes(dump_json(model))
        return target


class VanillaModelWriter(FileWriter):
    """Plain item models with optional overrides."""

    request_type = RequestType.VANILLA_MODEL

    def __init__(self, namespace: str = "minecraft", parent: str = GENERATED_PARENT):
        super().__init__(namespace)
        self.parent = parent

    def target_path(self, request: WriteRequest, output_dir: Path) -> Path:
        return output_dir / "assets" / self.namespace / "models" / request.path

    def write(self, request: WriteRequest, output_dir: Path) -> Path:
        content = request.content
        model = {
            "parent": content.get("parent") or self.parent,
            "textures": content.get("textures") or {},
        }
        if content.get("overrides"):
            model["overrides"] = content["overrides"]

        target = self._prepare(request, output_dir)
        target.write_bytes(dump_json(model))
        return target


class CITPropertiesWriter(FileWriter):
    """Metadata-matching `.properties` rule files."""

    request_type = RequestType.CIT_PROPERTIES

    def target_path(self, request: WriteRequest, output_dir: Path) -> Path:
        return output_dir / "assets" / self.namespace / "optifine" / request.path

    def write(self, request: WriteRequest, output_dir: Path) -> Path:
        target = self._prepare(request, output_dir)
        target.write_text(format_properties(request.content), encoding="utf-8")
        return target


def format_properties(content: Mapping[str, Any]) -> str:
    """Render flat `key=value` lines.

    Nested mappings flatten to dotted keys and list items to `key.[index]`,
    e.g. `{"nbt": {"Tags": ["a"]}}` becomes `nbt.Tags.[0]=a`.
    """
    lines: List[str] = []
    for key in PROPERTIES_KEY_ORDER:
        if key in content and content[key] not in (None, ""):
            _flatten(key, content[key], lines)
    for key, value in content.items():
        if key not in PROPERTIES_KEY_ORDER and value is not None:
            _flatten(key, value, lines)
    return "\n".join(lines) + "\n"


def _flatten(key: str, value: Any, lines: List[str]) -> None:
    if isinstance(value, Mapping):
        for child, child_value in value.items():
            _flatten(f"{key}.{child}", child_value, lines)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{key}.[{index}]", item, lines)
    elif isinstance(value, bool):
        lines.append(f"{key}={str(value).lower()}")
    else:
        lines.append(f"{key}={value}")


class TextureCopyWriter(FileWriter):
    """Copies an existing asset file; the request must name its `sourcePath`."""

    request_type = RequestType.TEXTURE_COPY

    def target_path(self, request: WriteRequest, output_dir: Path) -> Path:
        return output_dir / "assets" / self.namespace / request.path

    def write(self, request: WriteRequest, output_dir: Path) -> Path:
        source = request.content.get("sourcePath")
        if not source:
            raise MissingSourcePathError(f"Texture copy request requires sourcePath: {request.path}")
        target = self._prepare(request, output_dir)
        shutil.copyfile(Path(source), target)
        return target


class WriterRegistry:
    """Dispatches each request to the first writer that accepts its type."""

    def __init__(self, writers: Sequence[FileWriter] | None = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._writers: List[FileWriter] = list(writers) if writers is not None else []

    @classmethod
    def default(
        cls,
        namespace: str = "minecraft",
        handheld_parent: str = HANDHELD_PARENT,
        generated_parent: str = GENERATED_PARENT,
    ) -> "WriterRegistry":
        return cls(
            [
                PommelModelWriter(namespace, handheld_parent),
                CITPropertiesWriter(namespace),
                VanillaModelWriter(namespace, generated_parent),
                TextureCopyWriter(namespace),
            ]
        )

    def register(self, writer: FileWriter) -> None:
        self._writers.append(writer)

    def find(self, request: WriteRequest) -> FileWriter | None:
        for writer in self._writers:
            if writer.can_write(request):
                return writer
        return None

    def write(self, request: WriteRequest, output_dir: Path) -> Path | None:
        """Write one request; returns the written file, or None if skipped."""
        writer = self.find(request)
        if writer is None:
            self.logger.error(f"No writer found for request type: {request.key[0]} ({request.path})")
            return None
        try:
            target = writer.write(request, output_dir)
        except Exception as e:
            self.logger.error(f"Failed to write {writer.name}: {request.path}: {e}")
            raise
        self.logger.debug(f"Wrote {writer.name}: {request.path}")
        return target
