"""
Stored enchantment rule: one properties file plus one override model per
enchantment variant.
"""

from typing import List

from ..compiler.nodes import ComponentSelect, iter_nodes
from ..output.requests import WriteRequest
from .base import ItemHandler, ProcessingContext, target_to_request


class StoredEnchantmentsHandler(ItemHandler):
    name = "stored-enchantments"

    def can_handle(self, context: ProcessingContext) -> bool:
        return any(
            isinstance(node, ComponentSelect)
            and any(match.level is not None for case in node.cases for match in case.when)
            for node in iter_nodes(context.root)
        )

    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        paths = context.extractor.extract(context.root)
        targets = context.mapper.map_paths(context.item_id, paths)
        return [target_to_request(target) for target in targets]
