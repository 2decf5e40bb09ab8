"""
Component analyzer.

Walks one item's selector tree depth-first and records which components and
display contexts it depends on, together with flattened context -> model
fragments for the handlers to consume.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import orjson

from .models import PURE_DISPLAY_CONTEXT, ComponentAnalysis, ConditionalModel
from .nodes import (
    CANONICAL_CONTEXTS,
    BooleanCondition,
    ComponentSelect,
    ContextSelect,
    ModelLeaf,
    Node,
    iter_nodes,
    parse_item,
)

ContextMap = Dict[str, str]
BranchOrder = Callable[[BooleanCondition], Tuple[Node, Node]]


def true_first(condition: BooleanCondition) -> Tuple[Node, Node]:
    return condition.on_true, condition.on_false


def false_first(condition: BooleanCondition) -> Tuple[Node, Node]:
    return condition.on_false, condition.on_true


def _ordered_unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def missing_contexts(claimed: Iterable[str], active: Sequence[str] = ()) -> List[str]:
    """Contexts a fallback covers: active (or all canonical) minus those claimed."""
    claimed_set = set(claimed)
    pool = active or CANONICAL_CONTEXTS
    return [context for context in pool if context not in claimed_set]


def flatten_contexts(
    node: Node,
    contexts: Sequence[str] = (),
    branch_order: BranchOrder = true_first,
) -> ContextMap:
    """Reduce a subtree to one model per display context.

    The first leaf reached for a context wins. Component selects resolve to
    their fallback when they have one, else to their first case. Boolean
    conditions are visited in `branch_order`.
    """
    active = list(contexts) or list(CANONICAL_CONTEXTS)
    mapping: ContextMap = {}

    match node:
        case ModelLeaf(model=model):
            for context in active:
                mapping.setdefault(context, model)
        case ContextSelect(cases=cases, fallback=fallback):
            claimed: List[str] = []
            for case in cases:
                narrowed = [c for c in case.when if c in active]
                claimed.extend(case.when)
                if narrowed:
                    for key, value in flatten_contexts(case.model, narrowed, branch_order).items():
                        mapping.setdefault(key, value)
            if fallback is not None:
                rest = missing_contexts(claimed, active)
                if rest:
                    for key, value in flatten_contexts(fallback, rest, branch_order).items():
                        mapping.setdefault(key, value)
        case ComponentSelect(cases=cases, fallback=fallback):
            chosen = fallback if fallback is not None else (cases[0].model if cases else None)
            if chosen is not None:
                mapping.update(flatten_contexts(chosen, active, branch_order))
        case BooleanCondition():
            for branch in branch_order(node):
                for key, value in flatten_contexts(branch, active, branch_order).items():
                    mapping.setdefault(key, value)

    return mapping


class ComponentAnalyzer:
    """Builds a `ComponentAnalysis` for one item."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._components: List[str] = []
        self._contexts: List[str] = []
        self._models: List[ConditionalModel] = []

    def analyze_file(self, path: Path) -> ComponentAnalysis:
        """Read and analyze an item descriptor file.

        Raises:
            orjson.JSONDecodeError: If the file is not valid JSON
            UnsupportedNodeError: If the tree contains an unknown node shape
        """
        with path.open("rb") as f:
            data = orjson.loads(f.read())
        return self.analyze(path.stem, parse_item(data), path)

    def analyze(self, item_id: str, root: Node, file_path: Path | None = None) -> ComponentAnalysis:
        self._components = []
        self._contexts = []
        self._models = []

        self._walk(root, (), conditional=False)

        analysis = ComponentAnalysis(
            item_id=item_id,
            file_path=file_path,
            components_used=tuple(self._components),
            display_contexts=tuple(self._contexts),
            conditional_models=tuple(self._models),
        )
        self.logger.debug(
            f"Analyzed {item_id}: components={list(analysis.components_used)}, "
            f"contexts={list(analysis.display_contexts)}, "
            f"fragments={len(analysis.conditional_models)}"
        )
        return analysis

    def _note_contexts(self, contexts: Iterable[str]) -> None:
        for context in contexts:
            if context not in self._contexts:
                self._contexts.append(context)

    def _note_component(self, component: str) -> None:
        if component and component not in self._components:
            self._components.append(component)

    def _walk(self, node: Node, active: Tuple[str, ...], conditional: bool = True) -> None:
        match node:
            case ModelLeaf(model=model):
                # A bare root leaf carries no condition worth recording.
                if conditional:
                    contexts = active or CANONICAL_CONTEXTS
                    self._note_contexts(contexts)
                    self._models.append(
                        ConditionalModel(
                            component=PURE_DISPLAY_CONTEXT,
                            context_mappings={context: model for context in contexts},
                        )
                    )
            case ContextSelect():
                self._walk_context_select(node, active)
            case ComponentSelect():
                self._walk_component_select(node, active)
            case BooleanCondition(predicate=predicate, on_true=on_true, on_false=on_false):
                self._note_component(predicate)
                self._walk(on_true, active)
                self._walk(on_false, active)

    def _walk_context_select(self, node: ContextSelect, active: Tuple[str, ...]) -> None:
        claimed: List[str] = []
        for case in node.cases:
            contexts = tuple(_ordered_unique(c for c in case.when if not active or c in active))
            claimed.extend(case.when)
            self._note_contexts(contexts)
            if not contexts:
                continue
            if isinstance(case.model, ModelLeaf):
                self._models.append(
                    ConditionalModel(
                        component=PURE_DISPLAY_CONTEXT,
                        context_mappings={context: case.model.model for context in contexts},
                    )
                )
            else:
                self._walk(case.model, contexts)

        if node.fallback is None:
            return
        rest = tuple(missing_contexts(claimed, active))
        if not rest:
            return
        self._note_contexts(rest)
        if isinstance(node.fallback, ModelLeaf):
            self._models.append(
                ConditionalModel(
                    component=PURE_DISPLAY_CONTEXT,
                    context_mappings={context: node.fallback.model for context in rest},
                )
            )
        else:
            self._walk(node.fallback, rest)

    def _walk_component_select(self, node: ComponentSelect, active: Tuple[str, ...]) -> None:
        self._note_component(node.component)

        for case in node.cases:
            mappings = self._flatten_recorded(case.model, active)
            for match in case.when:
                self._models.append(
                    ConditionalModel(
                        component=node.component,
                        conditions=(match,),
                        context_mappings=mappings,
                    )
                )

        if node.fallback is not None:
            self._models.append(
                ConditionalModel(
                    component=node.component,
                    conditions=(),
                    context_mappings=self._flatten_recorded(node.fallback, active),
                )
            )

    def _flatten_recorded(self, node: Node, active: Tuple[str, ...]) -> ContextMap:
        """Flatten a component case's subtree, noting what it depends on."""
        for inner in iter_nodes(node):
            match inner:
                case ComponentSelect(component=component):
                    self._note_component(component)
                case BooleanCondition(predicate=predicate):
                    self._note_component(predicate)
                case ContextSelect(cases=cases):
                    for case in cases:
                        self._note_contexts(c for c in case.when if not active or c in active)
        mappings = flatten_contexts(node, active)
        self._note_contexts(mappings)
        return mappings

