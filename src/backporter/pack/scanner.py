"""
Structure scanner for resource packs.

Walks the input tree depth-first and sorts files into item, model and texture
buckets. A missing directory contributes nothing instead of failing.
"""

import logging
from pathlib import Path

from .models import (
    ResourcePackStructure,
    ITEM_EXTENSIONS,
    MODEL_EXTENSIONS,
    IMAGE_EXTENSIONS,
)


class StructureScanner:
    """Builds a `ResourcePackStructure` for one pack directory."""

    def __init__(self, namespace: str = "minecraft"):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.namespace = namespace

    def scan(self, root: str | Path) -> ResourcePackStructure:
        """Scan `root` and classify every file below it.

        Args:
            root: Pack root (the directory holding pack.mcmeta)

        Returns:
            The populated structure; empty if `root` does not exist
        """
        structure = ResourcePackStructure(root=Path(root), namespace=self.namespace)
        self._scan_directory(structure.root, structure)

        self.logger.info(
            f"Scanned {root}: {len(structure.item_files)} items, "
            f"{len(structure.model_files)} models, "
            f"{len(structure.texture_files)} textures"
        )
        return structure

    def _scan_directory(self, directory: Path, structure: ResourcePackStructure) -> None:
        if not directory.is_dir():
            self.logger.debug(f"Directory does not exist, skipping: {directory}")
            return

        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                self._scan_directory(entry, structure)
            elif entry.is_file():
                self._categorize_file(entry, structure)

    def _categorize_file(self, path: Path, structure: ResourcePackStructure) -> None:
        relative = structure.relative(path)
        parts = relative.split("/")
        # assets/<namespace>/<bucket>/...
        if len(parts) < 4 or parts[0] != "assets" or parts[1] != self.namespace:
            return

        bucket = parts[2]
        directory = relative.rsplit("/", 1)[0]
        suffix = path.suffix.lower()

        if bucket == "items" and suffix in ITEM_EXTENSIONS:
            structure.item_files.append(path)
        elif bucket == "models" and suffix in MODEL_EXTENSIONS:
            structure.model_files.append(path)
            structure.model_directories.setdefault(directory, []).append(relative)
        elif bucket == "textures" and suffix in IMAGE_EXTENSIONS:
            structure.texture_files.append(path)
            structure.texture_directories.setdefault(directory, []).append(relative)
        else:
            self.logger.debug(f"Skipped non-resource file: {relative}")
