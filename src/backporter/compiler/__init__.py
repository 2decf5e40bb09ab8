"""
Conditional compiler: selector tree parsing, analysis and target projection.
"""

from .analyzer import ComponentAnalyzer, false_first, flatten_contexts, true_first
from .enchantments import CURSE_NAMES, NO_LEVEL_SUFFIX, variant_name
from .models import (
    PURE_DISPLAY_CONTEXT,
    ComponentAnalysis,
    ConditionalModel,
    Enchantment,
    ExecutionPath,
    OutputTarget,
    PathConditions,
    TargetKind,
)
from .nodes import (
    CANONICAL_CONTEXTS,
    BooleanCondition,
    ComponentCase,
    ComponentMatch,
    ComponentSelect,
    ContextCase,
    ContextSelect,
    ModelLeaf,
    Node,
    iter_nodes,
    parse_item,
    parse_node,
)
from .paths import PathExtractor
from .targets import CONTEXT_PREDICATES, TargetMapper

__all__ = [
    "ComponentAnalyzer",
    "flatten_contexts",
    "true_first",
    "false_first",
    "CURSE_NAMES",
    "NO_LEVEL_SUFFIX",
    "variant_name",
    "PURE_DISPLAY_CONTEXT",
    "ComponentAnalysis",
    "ConditionalModel",
    "Enchantment",
    "ExecutionPath",
    "OutputTarget",
    "PathConditions",
    "TargetKind",
    "CANONICAL_CONTEXTS",
    "BooleanCondition",
    "ComponentCase",
    "ComponentMatch",
    "ComponentSelect",
    "ContextCase",
    "ContextSelect",
    "ModelLeaf",
    "Node",
    "iter_nodes",
    "parse_item",
    "parse_node",
    "PathExtractor",
    "CONTEXT_PREDICATES",
    "TargetMapper",
]
