"""
Copies the parts of the input pack that pass through unchanged.
"""

import logging
import shutil
from pathlib import Path

from .models import ResourcePackStructure


class BaseAssetCopier:
    """Copies pack metadata, models and textures into the output pack.

    Item descriptors are not copied; they only exist in the newer format and
    are replaced by the generated artifacts.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def copy(self, structure: ResourcePackStructure, output_dir: Path) -> int:
        """Copy base assets and return the number of files copied."""
        output_dir.mkdir(parents=True, exist_ok=True)

        copied = self._copy_pack_files(structure.root, output_dir)
        for source in structure.model_files + structure.texture_files:
            destination = output_dir / structure.relative(source)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
            copied += 1

        self.logger.info(f"Copied {copied} base asset files")
        return copied

    def _copy_pack_files(self, input_dir: Path, output_dir: Path) -> int:
        """Copy root-level files (pack.mcmeta, pack.png, ...) verbatim."""
        copied = 0
        for entry in sorted(input_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_file() or entry.name.startswith("."):
                continue
            shutil.copyfile(entry, output_dir / entry.name)
            self.logger.debug(f"Copied pack file: {entry.name}")
            copied += 1
        return copied
