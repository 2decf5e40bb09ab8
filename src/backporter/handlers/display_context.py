"""
Display context rule: a context-only selector becomes held/offhand/ground
predicate overrides on the item's model.
"""

from typing import Dict, List

from ..compiler.nodes import ContextSelect, iter_nodes
from ..output.requests import WriteRequest
from .base import ItemHandler, ProcessingContext, target_to_request


class DisplayContextHandler(ItemHandler):
    name = "display-context"

    def can_handle(self, context: ProcessingContext) -> bool:
        if not context.analysis.pure_context_models():
            return False
        return any(isinstance(node, ContextSelect) for node in iter_nodes(context.root))

    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        mapping: Dict[str, str] = {}
        for fragment in context.analysis.pure_context_models():
            for display_context, model in fragment.context_mappings.items():
                mapping.setdefault(display_context, model)

        targets = context.mapper.context_targets(context.item_id, mapping, priority=1)
        return [target_to_request(target) for target in targets]
