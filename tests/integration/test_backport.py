"""End-to-end runs of the backport pipeline on a small generated pack."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict

import orjson
import pytest

from backporter.__main__ import clean_pack_name, default_output_dir, main
from backporter.coordinator import BackportCoordinator
from backporter.errors import InputPackError

HELD = ["firstperson_righthand", "thirdperson_righthand"]

TEMPLATE = {
    "parent": "builtin/entity",
    "credit": "Made with Blockbench",
    "texture_size": [32, 32],
    "elements": [{"from": [0, 0, 0], "to": [16, 16, 0]}],
    "display": {"firstperson_righthand": {"rotation": [0, 90, 0]}},
}


@pytest.fixture
def book_pack(
    pack_dir: Path,
    add_item: Callable[[str, Any], Path],
    add_model: Callable[[str, Any], Path],
    add_texture: Callable[[str], Path],
) -> Path:
    add_item(
        "enchanted_book",
        {
            "type": "minecraft:select",
            "property": "minecraft:component",
            "component": "minecraft:stored_enchantments",
            "cases": [
                {
                    "when": {"minecraft:channeling": 1},
                    "model": {
                        "type": "minecraft:select",
                        "property": "minecraft:display_context",
                        "cases": [
                            {"when": HELD, "model": {"type": "minecraft:model", "model": "minecraft:item/books_3d/channeling_3d_open"}}
                        ],
                        "fallback": {"type": "minecraft:model", "model": "minecraft:item/books_3d/channeling_3d"},
                    },
                }
            ],
            "fallback": {
                "type": "minecraft:select",
                "property": "minecraft:display_context",
                "cases": [
                    {"when": ["gui", "fixed", "ground"], "model": {"type": "minecraft:model", "model": "minecraft:item/enchanted_book"}}
                ],
                "fallback": {"type": "minecraft:model", "model": "minecraft:item/books_3d/enchanted_book_3d"},
            },
        },
    )
    add_item("stick", {"type": "minecraft:model", "model": "minecraft:item/stick"})
    add_item("mystery", {"type": "minecraft:range_dispatch", "property": "minecraft:count"})

    add_model("item/enchanted_book", {"parent": "minecraft:item/generated", "textures": {"layer0": "minecraft:item/enchanted_book"}})
    add_model("item/stick", {"parent": "minecraft:item/handheld", "textures": {"layer0": "minecraft:item/stick"}})
    add_model("item/books_3d/template_book", TEMPLATE)
    for name in ("channeling_3d", "channeling_3d_open", "enchanted_book_3d"):
        add_model(f"item/books_3d/{name}", {"parent": "minecraft:item/books_3d/template_book"})
    add_texture("item/stick")
    add_texture("item/enchanted_books/channeling")
    return pack_dir


def snapshot(root: Path) -> Dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def load(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    package = logging.getLogger("backporter")
    handlers, level, package_level = list(root.handlers), root.level, package.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    package.setLevel(package_level)


class TestEnchantedBookBackport:
    """Stored enchantment selector nested under a held/other split."""

    def test_summary(self, book_pack: Path, tmp_path: Path) -> None:
        summary = BackportCoordinator().backport(book_pack, tmp_path / "out")

        assert summary.items_found == 3
        assert summary.items_processed == 2
        assert summary.items_skipped == 1
        assert summary.files_written > 0

    def test_invalid_item_json_is_skipped(
        self, book_pack: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (book_pack / "assets/minecraft/items/broken.json").write_text('{"model": {"type": ')
        out = tmp_path / "out"

        with caplog.at_level(logging.WARNING, logger="backporter"):
            summary = BackportCoordinator().backport(book_pack, out)

        assert summary.items_found == 4
        assert summary.items_processed == 2
        assert summary.items_skipped == 2
        assert "Skipping broken: invalid JSON" in caplog.text
        assert not (out / "assets/minecraft/models/item/broken.json").exists()
        assert (out / "assets/minecraft/models/item/enchanted_book/channeling.json").is_file()

    def test_properties_file(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)

        text = (out / "assets/minecraft/optifine/cit/enchanted_book/channeling.properties").read_text()
        lines = text.splitlines()
        assert "type=item" in lines
        assert "items=enchanted_book" in lines
        assert "enchantmentIDs=minecraft:channeling" in lines
        assert "model=assets/minecraft/models/item/enchanted_book/channeling" in lines

    def test_variant_model_splits_held_and_other(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)

        model = load(out / "assets/minecraft/models/item/enchanted_book/channeling.json")
        overrides = {next(iter(o["predicate"])): o["model"] for o in model["overrides"]}
        assert overrides["pommel:is_held"] == "minecraft:item/books_3d/channeling_3d_open"
        assert overrides["pommel:is_offhand"] == "minecraft:item/books_3d/channeling_3d"
        assert overrides["pommel:is_ground"] == "minecraft:item/books_3d/channeling_3d"
        assert model["parent"] == "minecraft:item/handheld"

    def test_base_model_is_preserved(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)
        models = out / "assets/minecraft/models/item"

        book = load(models / "enchanted_book.json")
        assert book["textures"] == {"layer0": "minecraft:item/enchanted_book"}
        assert {"predicate": {"pommel:is_ground": 1.0}, "model": "minecraft:item/enchanted_book_3d"} in book["overrides"]
        assert load(models / "enchanted_book_3d.json")["parent"] == "minecraft:item/generated"

    def test_template_is_repaired_without_parent(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)

        template = load(out / "assets/minecraft/models/item/books_3d/template_book.json")
        assert "parent" not in template
        assert template["elements"][0]["to"] == [16, 16, 0.01]

    def test_plain_item_keeps_its_model(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)

        stick = out / "assets/minecraft/models/item/stick.json"
        assert stick.read_bytes() == (book_pack / "assets/minecraft/models/item/stick.json").read_bytes()
        assert (out / "assets/minecraft/textures/item/stick.png").exists()
        assert (out / "pack.mcmeta").exists()


class TestRunBehaviour:
    """Clearing, idempotence and input validation."""

    def test_rerun_is_byte_identical(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        BackportCoordinator().backport(book_pack, out)
        first = snapshot(out)
        BackportCoordinator().backport(book_pack, out)

        assert snapshot(out) == first

    def test_clearing_removes_stale_files(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        stale = out / "assets/minecraft/models/item/old.json"
        stale.parent.mkdir(parents=True)
        stale.write_text("{}")

        BackportCoordinator().backport(book_pack, out, clear_output=False)
        assert stale.exists()
        BackportCoordinator().backport(book_pack, out)
        assert not stale.exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        with pytest.raises(InputPackError):
            BackportCoordinator().backport(tmp_path / "missing", tmp_path / "out")

    def test_output_may_not_contain_input(self, book_pack: Path) -> None:
        with pytest.raises(InputPackError):
            BackportCoordinator().backport(book_pack, book_pack.parent)


@pytest.mark.usefixtures("restore_root_logger")
class TestCommandLine:
    """The `backport` entry point."""

    def test_success_exit_code(self, book_pack: Path, tmp_path: Path) -> None:
        out = tmp_path / "cli-out"
        code = main([str(book_pack), str(out), "--config", str(tmp_path / "cfg.ini")])

        assert code == 0
        assert (out / "assets/minecraft/optifine/cit/enchanted_book/channeling.properties").exists()

    def test_failure_exit_code(self, tmp_path: Path) -> None:
        code = main([str(tmp_path / "missing"), str(tmp_path / "out"), "--config", str(tmp_path / "cfg.ini")])
        assert code == 1

    def test_default_output_name(self) -> None:
        assert clean_pack_name("§6My Cool  Pack!") == "my_cool_pack"
        assert clean_pack_name("§a!!") == "unknown_pack"
        assert default_output_dir(Path("Some Pack")) == Path("dist") / "↺--some_pack"
