"""
Data models describing the layout of a resource pack on disk.

Kept free of file-system logic; the scanner fills these in once per run and
everything downstream only reads them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, TypeAlias

DirectoryIndex: TypeAlias = Dict[str, List[str]]
"""Maps a directory (relative, posix style) to the relative files it holds."""

ITEM_EXTENSIONS = (".json",)
MODEL_EXTENSIONS = (".json",)
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")


@dataclass
class ResourcePackStructure:
    """Item, model and texture files found under one pack root.

    File lists hold absolute paths in discovery order. The directory indices
    map each containing directory (relative to the pack root) to the relative
    paths of the files inside it.
    """
    root: Path
    namespace: str = "minecraft"
    item_files: List[Path] = field(default_factory=list)
    model_files: List[Path] = field(default_factory=list)
    texture_files: List[Path] = field(default_factory=list)
    model_directories: DirectoryIndex = field(default_factory=dict)
    texture_directories: DirectoryIndex = field(default_factory=dict)

    @property
    def assets_root(self) -> Path:
        """Directory holding this pack's namespaced assets."""
        return self.root / "assets" / self.namespace

    def relative(self, path: Path) -> str:
        """Return `path` relative to the pack root in posix form."""
        return path.relative_to(self.root).as_posix()

    def find_model(self, reference: str) -> Path | None:
        """Locate the source file for a model reference like `minecraft:item/foo`."""
        candidate = self.assets_root / "models" / f"{strip_namespace(reference)}.json"
        for model_file in self.model_files:
            if model_file == candidate:
                return model_file
        return None

    def find_textures_named(self, stem: str) -> List[Path]:
        """Return texture files whose file name (without extension) equals `stem`."""
        return [t for t in self.texture_files if t.stem == stem]


def strip_namespace(reference: str) -> str:
    """Drop a leading `namespace:` from a resource reference."""
    return reference.split(":", 1)[1] if ":" in reference else reference
