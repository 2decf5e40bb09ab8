"""
Target mapping.

Projects execution paths onto concrete artifacts: predicate-override models
for the held/offhand/ground split, metadata-matching properties files for
enchantment variants, and preserved copies of 3-D models that a generated
model would otherwise overwrite.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import orjson

from ..pack.models import ResourcePackStructure, strip_namespace
from .models import Enchantment, ExecutionPath, ModelOverride, OutputTarget, TargetKind
from .nodes import CANONICAL_CONTEXTS

HANDHELD_PARENT = "minecraft:item/handheld"
GENERATED_PARENT = "minecraft:item/generated"

# Contexts the target renderer has no predicate for (gui, fixed) are absent.
CONTEXT_PREDICATES: Dict[str, str] = {
    "ground": "pommel:is_ground",
    "firstperson_righthand": "pommel:is_held",
    "thirdperson_righthand": "pommel:is_held",
    "firstperson_lefthand": "pommel:is_offhand",
    "thirdperson_lefthand": "pommel:is_offhand",
    "head": "pommel:is_offhand",
}

BASE_CONTEXTS: Tuple[str, ...] = ("gui", "fixed", "ground")

PRESERVED_SUFFIX = "_3d"


class TargetMapper:
    """Maps one item's execution paths onto output targets."""

    def __init__(
        self,
        structure: ResourcePackStructure,
        handheld_parent: str = HANDHELD_PARENT,
        generated_parent: str = GENERATED_PARENT,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.structure = structure
        self.handheld_parent = handheld_parent
        self.generated_parent = generated_parent

    @property
    def namespace(self) -> str:
        return self.structure.namespace

    def map_paths(self, item_id: str, paths: List[ExecutionPath]) -> List[OutputTarget]:
        """Expand execution paths into the targets that realize them.

        Enchantment paths become one properties file and one override model
        per variant. The remaining paths share the item's own override model.
        """
        targets: List[OutputTarget] = []

        variants: Dict[Enchantment, List[ExecutionPath]] = {}
        general: List[ExecutionPath] = []
        for path in paths:
            enchantment = path.conditions.enchantment
            if enchantment is not None:
                variants.setdefault(enchantment, []).append(path)
            else:
                general.append(path)

        for enchantment, group in variants.items():
            targets.extend(self.variant_targets(item_id, enchantment, group))

        if general:
            targets.extend(self.item_targets(item_id, general))
        elif variants:
            targets.append(
                OutputTarget(
                    kind=TargetKind.OVERRIDE_MODEL,
                    path=f"item/{item_id}.json",
                    content={
                        "parent": self.generated_parent,
                        "textures": {"layer0": self.resolve_base_texture({}, item_id)},
                    },
                    priority=1,
                )
            )

        self.logger.debug(f"Mapped {len(paths)} paths of {item_id} to {len(targets)} targets")
        return targets

    def variant_targets(
        self, item_id: str, enchantment: Enchantment, paths: List[ExecutionPath]
    ) -> List[OutputTarget]:
        variant = enchantment.variant
        model_path = f"item/{item_id}/{variant}"
        mapping = context_mapping(paths)

        overrides, preserved = self._overrides_with_preservation(item_id, paths)
        model = {
            "parent": self.handheld_parent,
            "textures": {"layer0": self.resolve_base_texture(mapping, item_id, variant)},
            "overrides": overrides,
        }
        properties = {
            "type": "item",
            "items": item_id,
            "model": f"assets/{self.namespace}/models/{model_path}",
            "enchantmentIDs": enchantment.id,
            "enchantmentLevels": enchantment.level,
        }
        return [
            OutputTarget(TargetKind.PROPERTIES, f"cit/{item_id}/{variant}.properties", properties, 1),
            OutputTarget(TargetKind.OVERRIDE_MODEL, f"{model_path}.json", model, 2),
            *preserved,
        ]

    def item_targets(self, item_id: str, paths: List[ExecutionPath]) -> List[OutputTarget]:
        mapping = context_mapping(paths)
        overrides, preserved = self._overrides_with_preservation(item_id, paths)
        model = {
            "parent": self.handheld_parent,
            "textures": {"layer0": self.resolve_base_texture(mapping, item_id)},
            "overrides": overrides,
        }
        return [OutputTarget(TargetKind.OVERRIDE_MODEL, f"item/{item_id}.json", model, 1), *preserved]

    def context_targets(
        self, item_id: str, mapping: Mapping[str, str], priority: int = 1
    ) -> List[OutputTarget]:
        """Targets for a plain context -> model mapping (no enchantments)."""
        claims = claim_predicates((context, model, 0) for context, model in mapping.items())
        overrides, preserved = self._preserve(item_id, claims)
        model = {
            "parent": self.handheld_parent,
            "textures": {"layer0": self.resolve_base_texture(mapping, item_id)},
            "overrides": overrides,
        }
        return [
            OutputTarget(TargetKind.OVERRIDE_MODEL, f"item/{item_id}.json", model, priority),
            *preserved,
        ]

    def _overrides_with_preservation(
        self, item_id: str, paths: List[ExecutionPath]
    ) -> Tuple[List[ModelOverride], List[OutputTarget]]:
        claims = claim_predicates(
            (context, path.target_model, path.priority)
            for path in paths
            for context in (path.conditions.display_context or CANONICAL_CONTEXTS)
        )
        return self._preserve(item_id, claims)

    def _preserve(
        self, item_id: str, claims: Dict[str, Tuple[int, str]]
    ) -> Tuple[List[ModelOverride], List[OutputTarget]]:
        """Redirect overrides that point at the item's own generated model.

        The generated `item/<id>.json` replaces the pack's model of the same
        name, so a 3-D model living there is copied to `item/<id>_3d.json`
        first and the override retargeted to the copy.
        """
        own = f"item/{item_id}"
        preserved_ref = f"{self.namespace}:{own}{PRESERVED_SUFFIX}"
        preserved: List[OutputTarget] = []
        overrides: List[ModelOverride] = []

        for predicate, (_, model) in claims.items():
            if strip_namespace(model) == own:
                source = self.structure.find_model(model)
                if source is not None:
                    if not preserved:
                        self.logger.debug(f"Preserving {source.name} as {own}{PRESERVED_SUFFIX}")
                        preserved.append(
                            OutputTarget(
                                kind=TargetKind.PRESERVED_MODEL,
                                path=f"models/{own}{PRESERVED_SUFFIX}.json",
                                content={"sourcePath": str(source)},
                            )
                        )
                    model = preserved_ref
            overrides.append({"predicate": {predicate: 1.0}, "model": model})

        return overrides, preserved

    def resolve_base_texture(
        self, mapping: Mapping[str, str], item_id: str, variant: str | None = None
    ) -> str:
        """Find the 2-D texture used as a generated model's `layer0`.

        The model shown in the base contexts (gui, fixed, ground) is read
        from the pack and its `layer0` reused. Otherwise the texture is
        guessed from the item and variant names.
        """
        for context in BASE_CONTEXTS:
            reference = mapping.get(context)
            if not reference:
                continue
            texture = self._read_layer0(reference)
            if texture:
                return texture
            break

        if variant is None:
            return f"{self.namespace}:item/{item_id}"
        if "book" in item_id:
            return f"{self.namespace}:item/enchanted_books/{variant}"
        return f"{self.namespace}:item/{variant}"

    def _read_layer0(self, reference: str) -> str | None:
        source = self.structure.find_model(reference)
        if source is None:
            return None
        try:
            with source.open("rb") as f:
                data: Any = orjson.loads(f.read())
        except orjson.JSONDecodeError as e:
            self.logger.debug(f"Cannot read textures of {source}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        textures = data.get("textures")
        if isinstance(textures, dict) and isinstance(textures.get("layer0"), str):
            return textures["layer0"]
        return None


def context_mapping(paths: Iterable[ExecutionPath]) -> Dict[str, str]:
    """First model claimed per display context, honoring priority."""
    best: Dict[str, Tuple[int, str]] = {}
    for path in paths:
        for context in path.conditions.display_context or CANONICAL_CONTEXTS:
            current = best.get(context)
            if current is None or path.priority > current[0]:
                best[context] = (path.priority, path.target_model)
    return {context: model for context, (_, model) in best.items()}


def claim_predicates(claims: Iterable[Tuple[str, str, int]]) -> Dict[str, Tuple[int, str]]:
    """Resolve (context, model, priority) claims into one model per predicate.

    A later claim replaces an earlier one only with strictly greater
    priority; the result keeps first-claim order.
    """
    resolved: Dict[str, Tuple[int, str]] = {}
    for context, model, priority in claims:
        predicate = CONTEXT_PREDICATES.get(context)
        if predicate is None:
            continue
        current = resolved.get(predicate)
        if current is None or priority > current[0]:
            resolved[predicate] = (priority, model)
    return resolved
