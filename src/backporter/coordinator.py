"""
Backport coordinator: runs the whole pipeline for one pack.

Stages run strictly in order: clear, scan, copy base assets, compile every
item into write requests, resolve and write them, then repair the written
models. Nothing is written before all items have contributed.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List

import orjson

from .compiler.analyzer import ComponentAnalyzer
from .compiler.nodes import parse_item
from .compiler.paths import PathExtractor
from .compiler.targets import GENERATED_PARENT, HANDHELD_PARENT, TargetMapper
from .errors import InputPackError, UnsupportedNodeError
from .handlers import HandlerRegistry, ProcessingContext
from .output.manager import FileManager
from .output.mergers import MergerRegistry
from .output.requests import WriteRequest
from .output.writers import WriterRegistry
from .pack.assets import BaseAssetCopier
from .pack.models import ResourcePackStructure
from .pack.scanner import StructureScanner
from .postprocessors.model_compatibility import ModelCompatibilityProcessor
from .settings import BackportSettings


@dataclass
class BackportSummary:
    """Counts reported at the end of a run."""
    items_found: int = 0
    items_processed: int = 0
    items_skipped: int = 0
    base_assets_copied: int = 0
    requests_collected: int = 0
    files_written: int = 0
    models_repaired: int = 0


class BackportCoordinator:
    """Wires scanner, compiler, handlers, file manager and postprocessor."""

    def __init__(
        self,
        namespace: str = "minecraft",
        handheld_parent: str = HANDHELD_PARENT,
        generated_parent: str = GENERATED_PARENT,
        handlers: HandlerRegistry | None = None,
        mergers: MergerRegistry | None = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.namespace = namespace
        self.handheld_parent = handheld_parent
        self.generated_parent = generated_parent
        self.handlers = handlers if handlers is not None else HandlerRegistry.default()
        self.mergers = mergers if mergers is not None else MergerRegistry.default()

        self.scanner = StructureScanner(namespace)
        self.copier = BaseAssetCopier()
        self.analyzer = ComponentAnalyzer()
        self.extractor = PathExtractor()
        self.postprocessor = ModelCompatibilityProcessor(namespace, handheld_parent)

    @classmethod
    def from_settings(cls, settings: BackportSettings) -> "BackportCoordinator":
        pipeline = settings.pipeline
        return cls(
            namespace=pipeline.namespace,
            handheld_parent=pipeline.handheld_parent,
            generated_parent=pipeline.generated_parent,
        )

    def backport(self, input_dir: Path, output_dir: Path, clear_output: bool = True) -> BackportSummary:
        """Convert the pack at `input_dir` into `output_dir`.

        Raises:
            InputPackError: If the input is missing or overlaps the output
            OSError: On any file-system failure; the run is aborted
        """
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)
        self._validate_directories(input_dir, output_dir)

        self.logger.info(f"Backporting {input_dir} -> {output_dir}")
        summary = BackportSummary()

        if clear_output:
            self.clear_output_directory(output_dir)

        structure = self.scanner.scan(input_dir)
        summary.items_found = len(structure.item_files)
        summary.base_assets_copied = self.copier.copy(structure, output_dir)

        file_manager = FileManager(
            output_dir,
            mergers=self.mergers,
            writers=WriterRegistry.default(self.namespace, self.handheld_parent, self.generated_parent),
        )
        mapper = TargetMapper(structure, self.handheld_parent, self.generated_parent)

        for item_file in sorted(structure.item_files):
            requests = self.process_item(item_file, structure, mapper)
            if requests is None:
                summary.items_skipped += 1
                continue
            summary.items_processed += 1
            summary.requests_collected += len(requests)
            file_manager.add_requests(requests)

        summary.files_written = len(file_manager.write_all())
        summary.models_repaired = self.postprocessor.fix_model_compatibility(output_dir)

        self.logger.info(
            f"Backport complete: {summary.items_processed}/{summary.items_found} items, "
            f"{summary.files_written} files written, {summary.models_repaired} models repaired"
        )
        return summary

    def process_item(
        self, item_file: Path, structure: ResourcePackStructure, mapper: TargetMapper
    ) -> List[WriteRequest] | None:
        """Compile one item descriptor into write requests.

        Returns None when the descriptor cannot be read or parsed.
        """
        item_id = item_file.stem
        try:
            with item_file.open("rb") as f:
                root = parse_item(orjson.loads(f.read()))
        except orjson.JSONDecodeError as e:
            self.logger.warning(f"Skipping {item_id}: invalid JSON ({e})")
            return None
        except UnsupportedNodeError as e:
            self.logger.warning(f"Skipping {item_id}: {e}")
            return None

        analysis = self.analyzer.analyze(item_id, root, item_file)
        context = ProcessingContext(
            item_id=item_id,
            item_path=item_file,
            root=root,
            analysis=analysis,
            structure=structure,
            mapper=mapper,
            extractor=self.extractor,
        )
        return self.handlers.process(context)

    def clear_output_directory(self, output_dir: Path) -> None:
        if output_dir.exists():
            self.logger.info(f"Clearing output directory {output_dir}")
            shutil.rmtree(output_dir)

    def _validate_directories(self, input_dir: Path, output_dir: Path) -> None:
        if not input_dir.is_dir():
            raise InputPackError(f"Input directory does not exist: {input_dir}")
        if not (input_dir / "pack.mcmeta").is_file():
            self.logger.warning(f"No pack.mcmeta in {input_dir}")

        resolved_in = input_dir.resolve()
        resolved_out = output_dir.resolve()
        if resolved_out == resolved_in or resolved_out in resolved_in.parents:
            raise InputPackError(f"Output directory {output_dir} would contain the input pack")
