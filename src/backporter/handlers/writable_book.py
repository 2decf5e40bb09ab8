"""
Writable book rule: the closed book (condition false) is the model shown
in each context.
"""

from typing import List, Tuple

from ..compiler.analyzer import flatten_contexts
from ..compiler.nodes import BooleanCondition, Node, iter_nodes
from ..output.requests import WriteRequest
from .base import ItemHandler, ProcessingContext, target_to_request

WRITABLE_BOOK_CONTENT = "minecraft:writable_book_content"


def _prefer_closed(condition: BooleanCondition) -> Tuple[Node, Node]:
    if _is_book_content(condition):
        return condition.on_false, condition.on_true
    return condition.on_true, condition.on_false


def _is_book_content(node: Node) -> bool:
    return isinstance(node, BooleanCondition) and WRITABLE_BOOK_CONTENT in (
        node.predicate,
        node.property,
    )


class WritableBookContentHandler(ItemHandler):
    name = "writable-book-content"

    def can_handle(self, context: ProcessingContext) -> bool:
        return any(_is_book_content(node) for node in iter_nodes(context.root))

    def process(self, context: ProcessingContext) -> List[WriteRequest]:
        mapping = flatten_contexts(context.root, branch_order=_prefer_closed)
        if not mapping:
            return []
        targets = context.mapper.context_targets(context.item_id, mapping, priority=2)
        return [target_to_request(target) for target in targets]
