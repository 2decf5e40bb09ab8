"""
Execution path extraction.

Re-expresses a selector tree as the list of every reachable branch, each
bound to one target model and a specificity priority.
"""

import logging
from typing import List, Tuple

from .analyzer import missing_contexts
from .models import Enchantment, ExecutionPath, PathConditions
from .nodes import BooleanCondition, ComponentSelect, ContextSelect, ModelLeaf, Node

CONTEXT_WEIGHT = 10
COMPONENT_WEIGHT = 20


class PathExtractor:
    """Enumerates execution paths of a selector tree in traversal order.

    Priority grows by 10 for every display-context select on the path
    (fallbacks included) and by 20 for every matched component case. Boolean
    conditions are walked on_true first and add nothing: both branches
    produce paths with identical conditions.

    Weights add up, so two nested context selects score the same as one
    component case. Enchantment paths are mapped to their own variant files
    and never compete with context-only paths for a predicate.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def extract(self, root: Node) -> List[ExecutionPath]:
        paths: List[ExecutionPath] = []
        self._traverse(root, PathConditions(), 0, False, paths)
        self.logger.debug(f"Extracted {len(paths)} execution paths")
        return paths

    def _traverse(
        self,
        node: Node,
        conditions: PathConditions,
        priority: int,
        is_fallback: bool,
        out: List[ExecutionPath],
    ) -> None:
        match node:
            case ModelLeaf(model=model):
                out.append(
                    ExecutionPath(
                        conditions=conditions,
                        target_model=model,
                        priority=priority,
                        is_fallback=is_fallback,
                    )
                )

            case ContextSelect(cases=cases, fallback=fallback):
                active = conditions.display_context
                claimed: List[str] = []
                for case in cases:
                    claimed.extend(case.when)
                    contexts = _narrow(case.when, active)
                    if not contexts:
                        continue
                    self._traverse(
                        case.model,
                        _with_contexts(conditions, contexts),
                        priority + CONTEXT_WEIGHT,
                        is_fallback,
                        out,
                    )
                if fallback is not None:
                    rest = tuple(missing_contexts(claimed, active))
                    if rest:
                        self._traverse(
                            fallback,
                            _with_contexts(conditions, rest),
                            priority + CONTEXT_WEIGHT,
                            True,
                            out,
                        )

            case ComponentSelect(component=component, cases=cases, fallback=fallback):
                for case in cases:
                    for match in case.when:
                        enchantment = (
                            Enchantment(match.id, match.level) if match.level is not None else None
                        )
                        self._traverse(
                            case.model,
                            PathConditions(
                                display_context=conditions.display_context,
                                enchantment=enchantment or conditions.enchantment,
                                component=component,
                            ),
                            priority + COMPONENT_WEIGHT,
                            is_fallback,
                            out,
                        )
                if fallback is not None:
                    self._traverse(
                        fallback,
                        PathConditions(
                            display_context=conditions.display_context,
                            enchantment=conditions.enchantment,
                            component=component,
                        ),
                        priority,
                        True,
                        out,
                    )

            case BooleanCondition(predicate=predicate, on_true=on_true, on_false=on_false):
                self.logger.debug(f"Condition {predicate} not encoded, emitting both branches")
                self._traverse(on_true, conditions, priority, is_fallback, out)
                self._traverse(on_false, conditions, priority, is_fallback, out)


def _narrow(contexts: Tuple[str, ...], active: Tuple[str, ...]) -> Tuple[str, ...]:
    narrowed: List[str] = []
    for context in contexts:
        if (not active or context in active) and context not in narrowed:
            narrowed.append(context)
    return tuple(narrowed)


def _with_contexts(conditions: PathConditions, contexts: Tuple[str, ...]) -> PathConditions:
    return PathConditions(
        display_context=contexts,
        enchantment=conditions.enchantment,
        component=conditions.component,
    )
