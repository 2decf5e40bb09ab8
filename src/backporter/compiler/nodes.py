"""
Selector tree node types for item descriptors.

An item descriptor's `model` field is a tree built from exactly four node
shapes. They are modelled as a closed set of frozen dataclasses so that the
traversals can match on them exhaustively; anything else is rejected at parse
time with `UnsupportedNodeError`.
"""

import logging
from dataclasses import dataclass
from typing import Any, Tuple, TypeAlias, cast

from ..errors import UnsupportedNodeError

logger = logging.getLogger(__name__)

MODEL_TYPE = "minecraft:model"
SELECT_TYPE = "minecraft:select"
CONDITION_TYPE = "minecraft:condition"

DISPLAY_CONTEXT_PROPERTY = "minecraft:display_context"
COMPONENT_PROPERTY = "minecraft:component"

# Order matters: fallback backfill walks this list.
CANONICAL_CONTEXTS: Tuple[str, ...] = (
    "gui",
    "fixed",
    "ground",
    "firstperson_righthand",
    "thirdperson_righthand",
    "firstperson_lefthand",
    "thirdperson_lefthand",
    "head",
)


@dataclass(frozen=True)
class ModelLeaf:
    """Terminal node referencing a model by path."""
    model: str


@dataclass(frozen=True)
class ContextCase:
    when: Tuple[str, ...]
    model: "Node"


@dataclass(frozen=True)
class ContextSelect:
    """Selects a model by display context."""
    cases: Tuple[ContextCase, ...]
    fallback: "Node | None" = None


@dataclass(frozen=True)
class ComponentMatch:
    """One `{id: level}` entry of a component case.

    `level` is None when the case matched on a bare id.
    """
    id: str
    level: int | None = None


@dataclass(frozen=True)
class ComponentCase:
    when: Tuple[ComponentMatch, ...]
    model: "Node"


@dataclass(frozen=True)
class ComponentSelect:
    """Selects a model by the value of an item component."""
    component: str
    cases: Tuple[ComponentCase, ...]
    fallback: "Node | None" = None


@dataclass(frozen=True)
class BooleanCondition:
    """Two-way branch on a boolean predicate such as component presence."""
    property: str
    predicate: str
    on_true: "Node"
    on_false: "Node"


Node: TypeAlias = ModelLeaf | ContextSelect | ComponentSelect | BooleanCondition


def parse_item(data: Any) -> Node:
    """Parse a whole item descriptor (the object holding the root `model`)."""
    if not isinstance(data, dict) or "model" not in data:
        raise UnsupportedNodeError("Item descriptor has no root 'model' field", data)
    return parse_node(cast(dict[str, Any], data)["model"])


def parse_node(raw: Any) -> Node:
    """Convert a raw JSON value into a typed node.

    Args:
        raw: Decoded JSON for one node (a dict, or a bare model path string)

    Returns:
        The typed node

    Raises:
        UnsupportedNodeError: If the value is not one of the four known shapes
    """
    if isinstance(raw, str):
        return ModelLeaf(raw)
    if not isinstance(raw, dict):
        raise UnsupportedNodeError(f"Expected an object node, got {type(raw).__name__}", raw)

    node = cast(dict[str, Any], raw)
    node_type = node.get("type")

    if node_type == MODEL_TYPE:
        model = node.get("model")
        if not isinstance(model, str):
            raise UnsupportedNodeError("Model node without a string 'model' path", raw)
        return ModelLeaf(model)

    if node_type == SELECT_TYPE:
        if node.get("property") == DISPLAY_CONTEXT_PROPERTY:
            return _parse_context_select(node)
        return _parse_component_select(node)

    if node_type == CONDITION_TYPE:
        return _parse_condition(node)

    raise UnsupportedNodeError(f"Unknown node type: {node_type or 'missing type'}", raw)


def _parse_fallback(node: dict[str, Any]) -> Node | None:
    fallback = node.get("fallback")
    return parse_node(fallback) if fallback is not None else None


def _case_list(node: dict[str, Any]) -> list[dict[str, Any]]:
    cases = node.get("cases", [])
    if not isinstance(cases, list):
        raise UnsupportedNodeError("Select node 'cases' must be a list", node)
    result: list[dict[str, Any]] = []
    for case in cast(list[Any], cases):
        if not isinstance(case, dict) or "when" not in case or "model" not in case:
            raise UnsupportedNodeError("Select case needs 'when' and 'model'", case)
        result.append(cast(dict[str, Any], case))
    return result


def _parse_context_select(node: dict[str, Any]) -> ContextSelect:
    cases: list[ContextCase] = []
    for case in _case_list(node):
        when = case["when"]
        values = cast(list[Any], when) if isinstance(when, list) else [when]
        contexts = tuple(str(v) for v in values if isinstance(v, str))
        cases.append(ContextCase(when=contexts, model=parse_node(case["model"])))
    return ContextSelect(cases=tuple(cases), fallback=_parse_fallback(node))


def _parse_component_select(node: dict[str, Any]) -> ComponentSelect:
    # Both {"property": "minecraft:component", "component": id} and the
    # shorthand {"property": id} appear in the wild.
    component = node.get("component")
    if not isinstance(component, str):
        component = node.get("property")
    if not isinstance(component, str) or component == COMPONENT_PROPERTY:
        raise UnsupportedNodeError("Component select without a component id", node)

    cases: list[ComponentCase] = []
    for case in _case_list(node):
        cases.append(
            ComponentCase(when=_parse_matches(case["when"]), model=parse_node(case["model"]))
        )
    return ComponentSelect(component=component, cases=tuple(cases), fallback=_parse_fallback(node))


def _parse_matches(when: Any) -> Tuple[ComponentMatch, ...]:
    entries = cast(list[Any], when) if isinstance(when, list) else [when]
    matches: list[ComponentMatch] = []
    for entry in entries:
        if isinstance(entry, str):
            matches.append(ComponentMatch(entry))
        elif isinstance(entry, dict):
            for match_id, level in cast(dict[str, Any], entry).items():
                if isinstance(level, int) and not isinstance(level, bool):
                    matches.append(ComponentMatch(match_id, level))
                else:
                    logger.debug(f"Ignoring non-integer level for {match_id}: {level!r}")
    return tuple(matches)


def _parse_condition(node: dict[str, Any]) -> BooleanCondition:
    condition = node.get("condition")
    source = cast(dict[str, Any], condition) if isinstance(condition, dict) else node

    if "on_true" not in node or "on_false" not in node:
        raise UnsupportedNodeError("Condition node needs both 'on_true' and 'on_false'", node)

    return BooleanCondition(
        property=str(source.get("property", "")),
        predicate=str(source.get("predicate", source.get("component", ""))),
        on_true=parse_node(node["on_true"]),
        on_false=parse_node(node["on_false"]),
    )


def iter_nodes(node: Node):
    """Yield `node` and every node below it, depth-first."""
    yield node
    match node:
        case ModelLeaf():
            return
        case ContextSelect(cases=cases, fallback=fallback) | ComponentSelect(
            cases=cases, fallback=fallback
        ):
            for case in cases:
                yield from iter_nodes(case.model)
            if fallback is not None:
                yield from iter_nodes(fallback)
        case BooleanCondition(on_true=on_true, on_false=on_false):
            yield from iter_nodes(on_true)
            yield from iter_nodes(on_false)
