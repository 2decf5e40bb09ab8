"""Tests for the model compatibility postprocessor."""

from pathlib import Path
from typing import Any

import orjson

from backporter.postprocessors.model_compatibility import (
    ModelCompatibilityProcessor,
    fix_zero_thickness,
    is_template,
)

VALID_TEMPLATE = {
    "credit": "Made with Blockbench",
    "texture_size": [32, 32],
    "elements": [{"from": [0, 0, 0], "to": [8, 8, 1]}],
    "display": {"gui": {"rotation": [0, 0, 0]}},
}


def write_model(output_dir: Path, name: str, data: Any) -> Path:
    path = output_dir / "assets" / "minecraft" / "models" / f"{name}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))
    return path


class TestGeometryRepair:
    """Zero-thickness cuboids."""

    def test_flat_axis_gets_epsilon(self) -> None:
        element = {"from": [0, 0, 0], "to": [16, 16, 0]}
        assert fix_zero_thickness(element)
        assert element == {"from": [0, 0, 0], "to": [16, 16, 0.01]}

    def test_solid_element_is_untouched(self) -> None:
        element = {"from": [0, 0, 0], "to": [16, 16, 1]}
        assert not fix_zero_thickness(element)
        assert element["to"] == [16, 16, 1]

    def test_repaired_file_is_rewritten(self, tmp_path: Path) -> None:
        path = write_model(tmp_path, "item/plane", {"elements": [{"from": [0, 0, 0], "to": [16, 16, 0]}]})

        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 1
        assert orjson.loads(path.read_bytes())["elements"][0]["to"] == [16, 16, 0.01]


class TestInheritanceRepair:
    """Invalid parents and template files."""

    def test_builtin_entity_parent_is_replaced(self, tmp_path: Path) -> None:
        path = write_model(tmp_path, "item/shield", {"parent": "builtin/entity"})

        ModelCompatibilityProcessor().fix_model_compatibility(tmp_path)
        assert orjson.loads(path.read_bytes())["parent"] == "minecraft:item/handheld"

    def test_unchanged_file_is_not_rewritten(self, tmp_path: Path) -> None:
        path = write_model(tmp_path, "item/stick", {"parent": "minecraft:item/handheld"})
        before = path.read_bytes()

        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 0
        assert path.read_bytes() == before

    def test_template_parent_is_stripped(self, tmp_path: Path) -> None:
        data = {"parent": "minecraft:item/handheld", **VALID_TEMPLATE}
        path = write_model(tmp_path, "item/books_3d/template_book_open", data)

        ModelCompatibilityProcessor().fix_model_compatibility(tmp_path)
        model = orjson.loads(path.read_bytes())
        assert "parent" not in model
        assert model["elements"] == VALID_TEMPLATE["elements"]

    def test_invalid_template_is_left_byte_identical(self, tmp_path: Path) -> None:
        data = {key: value for key, value in VALID_TEMPLATE.items() if key != "elements"}
        path = write_model(tmp_path, "item/books_3d/template_book", {"parent": "builtin/entity", **data})
        before = path.read_bytes()

        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 0
        assert path.read_bytes() == before

    def test_sweep_continues_past_bad_files(self, tmp_path: Path) -> None:
        broken = tmp_path / "assets/minecraft/models/item/broken.json"
        broken.parent.mkdir(parents=True)
        broken.write_text("{not json")
        fixed = write_model(tmp_path, "item/shield", {"parent": "builtin/entity"})

        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 1
        assert orjson.loads(fixed.read_bytes())["parent"] == "minecraft:item/handheld"

    def test_template_detection(self) -> None:
        assert is_template(Path("item/books_3d/template_book_open.json"))
        assert is_template(Path("templates/book.json"))
        assert not is_template(Path("item/books_3d/channeling_3d.json"))
        assert not is_template(Path("item/templated_sword.json"))
        assert not is_template(Path("item/templatebanner.json"))
        assert not is_template(Path("templated/sword.json"))

    def test_template_like_name_still_gets_parent_repaired(self, tmp_path: Path) -> None:
        path = write_model(tmp_path, "item/templated_sword", {"parent": "builtin/entity"})

        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 1
        assert orjson.loads(path.read_bytes())["parent"] == "minecraft:item/handheld"

    def test_missing_models_directory(self, tmp_path: Path) -> None:
        assert ModelCompatibilityProcessor().fix_model_compatibility(tmp_path) == 0
