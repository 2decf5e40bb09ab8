"""Tests for selector tree parsing."""

import pytest

from backporter.compiler.nodes import (
    BooleanCondition,
    ComponentMatch,
    ComponentSelect,
    ContextSelect,
    ModelLeaf,
    iter_nodes,
    parse_item,
    parse_node,
)
from backporter.errors import UnsupportedNodeError


class TestParseLeaves:
    """Terminal nodes."""

    def test_model_node(self) -> None:
        node = parse_node({"type": "minecraft:model", "model": "minecraft:item/book"})
        assert node == ModelLeaf("minecraft:item/book")

    def test_bare_string_is_leaf(self) -> None:
        assert parse_node("minecraft:item/book") == ModelLeaf("minecraft:item/book")

    def test_model_node_without_path_is_rejected(self) -> None:
        with pytest.raises(UnsupportedNodeError):
            parse_node({"type": "minecraft:model"})


class TestParseSelectors:
    """Context selects, component selects and conditions."""

    def test_context_select(self) -> None:
        node = parse_node(
            {
                "type": "minecraft:select",
                "property": "minecraft:display_context",
                "cases": [
                    {"when": ["gui", "fixed"], "model": {"type": "minecraft:model", "model": "a"}},
                    {"when": "ground", "model": "b"},
                ],
                "fallback": {"type": "minecraft:model", "model": "c"},
            }
        )
        assert isinstance(node, ContextSelect)
        assert node.cases[0].when == ("gui", "fixed")
        assert node.cases[1].when == ("ground",)
        assert node.fallback == ModelLeaf("c")

    def test_component_select_with_levels(self) -> None:
        node = parse_node(
            {
                "type": "minecraft:select",
                "property": "minecraft:component",
                "component": "minecraft:stored_enchantments",
                "cases": [
                    {
                        "when": [{"minecraft:sharpness": 1}, {"minecraft:sharpness": 2}],
                        "model": "a",
                    },
                    {"when": {"minecraft:channeling": 1}, "model": "b"},
                ],
            }
        )
        assert isinstance(node, ComponentSelect)
        assert node.component == "minecraft:stored_enchantments"
        assert node.cases[0].when == (
            ComponentMatch("minecraft:sharpness", 1),
            ComponentMatch("minecraft:sharpness", 2),
        )
        assert node.cases[1].when == (ComponentMatch("minecraft:channeling", 1),)
        assert node.fallback is None

    def test_component_select_without_component_is_rejected(self) -> None:
        with pytest.raises(UnsupportedNodeError):
            parse_node({"type": "minecraft:select", "property": "minecraft:component", "cases": []})

    def test_condition_nested_and_flat(self) -> None:
        nested = parse_node(
            {
                "type": "minecraft:condition",
                "condition": {
                    "property": "minecraft:has_component",
                    "predicate": "minecraft:writable_book_content",
                },
                "on_true": "open",
                "on_false": "closed",
            }
        )
        flat = parse_node(
            {
                "type": "minecraft:condition",
                "property": "minecraft:has_component",
                "component": "minecraft:writable_book_content",
                "on_true": "open",
                "on_false": "closed",
            }
        )
        expected = BooleanCondition(
            "minecraft:has_component",
            "minecraft:writable_book_content",
            ModelLeaf("open"),
            ModelLeaf("closed"),
        )
        assert nested == expected
        assert flat == expected

    def test_condition_needs_both_branches(self) -> None:
        with pytest.raises(UnsupportedNodeError):
            parse_node({"type": "minecraft:condition", "on_true": "a"})

    def test_unknown_type_is_rejected(self) -> None:
        with pytest.raises(UnsupportedNodeError) as excinfo:
            parse_node({"type": "minecraft:range_dispatch"})
        assert "minecraft:range_dispatch" in str(excinfo.value)


class TestItemDescriptor:
    """Whole item descriptors."""

    def test_requires_root_model(self) -> None:
        with pytest.raises(UnsupportedNodeError):
            parse_item({"hand_animation_on_swap": False})

    def test_iter_nodes_visits_every_node(self) -> None:
        root = parse_item(
            {
                "model": {
                    "type": "minecraft:select",
                    "property": "minecraft:display_context",
                    "cases": [{"when": "gui", "model": "a"}],
                    "fallback": {
                        "type": "minecraft:condition",
                        "predicate": "p",
                        "on_true": "b",
                        "on_false": "c",
                    },
                }
            }
        )
        kinds = [type(node).__name__ for node in iter_nodes(root)]
        assert kinds == ["ContextSelect", "ModelLeaf", "BooleanCondition", "ModelLeaf", "ModelLeaf"]
