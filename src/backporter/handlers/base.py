"""
Handler strategy pipeline.

Every registered handler whose `can_handle` passes contributes write
requests for an item; handlers are not exclusive.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..compiler.models import ComponentAnalysis, OutputTarget, TargetKind
from ..compiler.nodes import Node
from ..compiler.paths import PathExtractor
from ..compiler.targets import TargetMapper
from ..output.requests import MergeStrategy, RequestType, WriteRequest
from ..pack.models import ResourcePackStructure


@dataclass
class ProcessingContext:
    """Everything a handler may look at for one item."""
    item_id: str
    item_path: Path | None
    root: Node
    analysis: ComponentAnalysis
    structure: ResourcePackStructure
    mapper: TargetMapper
    extractor: PathExtractor


class ItemHandler(ABC):
    """A single extraction rule."""

    name: str = "handler"

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def can_handle(self, context: ProcessingContext) -> bool:
        pass

    @abstractmethod
    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        pass


def target_to_request(target: OutputTarget) -> WriteRequest:
    """Turn a mapped output target into the write request that realizes it."""
    match target.kind:
        case TargetKind.OVERRIDE_MODEL:
            return WriteRequest(
                RequestType.POMMEL_MODEL,
                target.path,
                target.content,
                MergeStrategy.MERGE_OVERRIDES,
                target.priority,
            )
        case TargetKind.PROPERTIES:
            return WriteRequest(
                RequestType.CIT_PROPERTIES,
                target.path,
                target.content,
                MergeStrategy.REPLACE,
                target.priority,
            )
        case TargetKind.PRESERVED_MODEL:
            return WriteRequest(
                RequestType.TEXTURE_COPY,
                target.path,
                target.content,
                MergeStrategy.REPLACE,
                target.priority,
            )
    raise ValueError(f"Unknown target kind: {target.kind}")


class HandlerRegistry:
    """Ordered handlers, most specific first."""

    def __init__(self, handlers: Sequence[ItemHandler] | None = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._handlers: List[ItemHandler] = list(handlers) if handlers is not None else []

    @classmethod
    def default(cls) -> "HandlerRegistry":
        from .base_item import BaseItemHandler
        from .display_context import DisplayContextHandler
        from .stored_enchantments import StoredEnchantmentsHandler
        from .writable_book import WritableBookContentHandler

        return cls(
            [
                StoredEnchantmentsHandler(),
                WritableBookContentHandler(),
                DisplayContextHandler(),
                BaseItemHandler(),
            ]
        )

    @property
    def handlers(self) -> List[ItemHandler]:
        return list(self._handlers)

    def register(self, handler: ItemHandler) -> None:
        self._handlers.append(handler)

    def applicable(self, context: ProcessingContext) -> List[ItemHandler]:
        return [h for h in self._handlers if h.can_handle(context)]

    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        """Run every applicable handler and collect their requests.

        An item no handler accepts is reported and yields nothing.
        """
        handlers = self.applicable(context)
        if not handlers:
            self.logger.warning(f"No handler applies to {context.item_id}, skipping")
            return []

        requests: List[WriteRequest] = []
        for handler in handlers:
            contributed = handler.process(context)
            self.logger.debug(
                f"{handler.name} contributed {len(contributed)} requests for {context.item_id}"
            )
            requests.extend(contributed)
        return requests
