"""
Model compatibility postprocessor.

Final sweep over every model in the output tree: repairs zero-thickness
cuboids and inheritance from parents the older renderer cannot load. Files
named `template_*` or kept under a `templates` directory are hand-authored
and only ever lose their `parent`; if they fail structural validation they
are not touched at all.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import orjson

from ..errors import TemplateValidationError

EPSILON = 0.01
INVALID_PARENTS = ("builtin/entity", "minecraft:builtin/entity")
TEMPLATE_PREFIX = "template_"
TEMPLATE_DIRS = ("template", "templates")


class ModelCompatibilityProcessor:
    """Repairs written models in place."""

    def __init__(self, namespace: str = "minecraft", replacement_parent: str = "minecraft:item/handheld"):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.namespace = namespace
        self.replacement_parent = replacement_parent

    def fix_model_compatibility(self, output_dir: Path) -> int:
        """Repair every model below the output's models directory.

        Returns:
            Number of files rewritten
        """
        models_dir = output_dir / "assets" / self.namespace / "models"
        if not models_dir.is_dir():
            self.logger.info("No models directory found, skipping compatibility fixes")
            return 0

        fixed = 0
        for model_path in sorted(models_dir.rglob("*.json")):
            if self.fix_single_model(model_path, models_dir):
                fixed += 1

        self.logger.info(f"Model compatibility: {fixed} files repaired")
        return fixed

    def fix_single_model(self, model_path: Path, models_dir: Path | None = None) -> bool:
        """Repair one model file; returns whether it was rewritten."""
        try:
            with model_path.open("rb") as f:
                model = orjson.loads(f.read())
        except orjson.JSONDecodeError as e:
            self.logger.warning(f"Skipping unreadable model {model_path}: {e}")
            return False
        if not isinstance(model, dict):
            self.logger.warning(f"Skipping model that is not an object: {model_path}")
            return False

        relative = model_path.relative_to(models_dir) if models_dir else model_path
        try:
            changed = self.repair(model, is_template(relative), model_path)
        except TemplateValidationError as e:
            self.logger.warning(f"{e}; leaving file untouched: {'; '.join(e.errors)}")
            return False

        if changed:
            model_path.write_bytes(orjson.dumps(model, option=orjson.OPT_INDENT_2) + b"\n")
            self.logger.debug(f"Applied compatibility fixes to {model_path}")
        return changed

    def repair(self, model: Dict[str, Any], template: bool, path: Path | str = "<model>") -> bool:
        """Apply all fixes to a decoded model in place.

        Raises:
            TemplateValidationError: If a template model lacks required fields.
                The model may have been modified; callers discard it.
        """
        changed = False

        if template:
            if "parent" in model:
                self.logger.debug(f"Removing parent {model['parent']!r} from template {path}")
                del model["parent"]
                changed = True
            validate_template(model, path)
        elif model.get("parent") in INVALID_PARENTS:
            self.logger.debug(f"Replacing parent {model['parent']} in {path}")
            model["parent"] = self.replacement_parent
            changed = True

        elements = model.get("elements")
        if isinstance(elements, list):
            for element in elements:
                if fix_zero_thickness(element):
                    changed = True

        return changed


def is_template(relative: Path) -> bool:
    if relative.name.startswith(TEMPLATE_PREFIX):
        return True
    return any(part in TEMPLATE_DIRS for part in relative.parent.parts)


def validate_template(model: Dict[str, Any], path: Path | str) -> None:
    errors: List[str] = []
    if not model.get("credit"):
        errors.append("missing credit")
    if not isinstance(model.get("texture_size"), list):
        errors.append("missing or invalid texture_size")
    if not isinstance(model.get("elements"), list):
        errors.append("missing or invalid elements")
    if not isinstance(model.get("display"), dict):
        errors.append("missing or invalid display")
    if errors:
        raise TemplateValidationError(path, errors)


def fix_zero_thickness(element: Any) -> bool:
    """Give a flat cuboid a minimal depth along every degenerate axis."""
    if not isinstance(element, dict):
        return False
    start, end = element.get("from"), element.get("to")
    if not isinstance(start, list) or not isinstance(end, list):
        return False

    changed = False
    for axis in range(min(3, len(start), len(end))):
        if start[axis] == end[axis]:
            end[axis] = end[axis] + EPSILON
            changed = True
    return changed
