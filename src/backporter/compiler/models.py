"""
Data models produced by the conditional compiler.

Analysis results and execution paths are immutable once built; the handler
pipeline reads them to decide which artifacts to emit.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, TypeAlias

from .enchantments import variant_name
from .nodes import ComponentMatch

PURE_DISPLAY_CONTEXT = "pure_display_context"
"""Component tag for fragments that depend on display context only."""

ModelOverride: TypeAlias = Dict[str, Any]
"""One `{"predicate": {...}, "model": "..."}` entry of an override list."""


@dataclass(frozen=True)
class ConditionalModel:
    """One flattened decision fragment: under these conditions, context -> model."""
    component: str
    conditions: Tuple[ComponentMatch, ...] = ()
    context_mappings: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ComponentAnalysis:
    """Normalized view of one item's selector tree."""
    item_id: str
    file_path: Path | None
    components_used: Tuple[str, ...]
    display_contexts: Tuple[str, ...]
    conditional_models: Tuple[ConditionalModel, ...]

    def pure_context_models(self) -> List[ConditionalModel]:
        """Fragments that do not depend on any component value."""
        return [m for m in self.conditional_models if m.component == PURE_DISPLAY_CONTEXT]


@dataclass(frozen=True)
class Enchantment:
    """A stored enchantment condition, e.g. `minecraft:sharpness` level 2."""
    id: str
    level: int

    @property
    def name(self) -> str:
        """Enchantment id without its namespace."""
        return self.id.split(":", 1)[-1]

    @property
    def variant(self) -> str:
        """Legacy file/texture name for this enchantment and level."""
        return variant_name(self.name, self.level)


@dataclass(frozen=True)
class PathConditions:
    display_context: Tuple[str, ...] = ()
    enchantment: Enchantment | None = None
    component: str | None = None


@dataclass(frozen=True)
class ExecutionPath:
    """A single reachable branch through a selector tree.

    An empty `display_context` means the branch is not constrained by
    context at all.
    """
    conditions: PathConditions
    target_model: str
    priority: int
    is_fallback: bool = False


class TargetKind(Enum):
    """Kinds of artifact the target mapper can ask for."""
    OVERRIDE_MODEL = "override_model"
    PROPERTIES = "properties"
    PRESERVED_MODEL = "preserved_model"


@dataclass(frozen=True)
class OutputTarget:
    """A concrete artifact projected from one or more execution paths.

    `path` is relative to the artifact's output root (models/ for models,
    optifine/ for properties, assets/<namespace>/ for preserved copies).
    """
    kind: TargetKind
    path: str
    content: Mapping[str, Any]
    priority: int = 0
