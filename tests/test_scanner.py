"""Tests for pack scanning and base asset copying."""

from pathlib import Path
from typing import Any, Callable

from backporter.pack import BaseAssetCopier, StructureScanner, strip_namespace


class TestStructureScanner:
    """File classification."""

    def test_classifies_items_models_and_textures(
        self,
        pack_dir: Path,
        add_item: Callable[[str, Any], Path],
        add_model: Callable[[str, Any], Path],
        add_texture: Callable[[str], Path],
    ) -> None:
        item = add_item("book", "minecraft:item/book")
        model = add_model("item/books_3d/book_3d", {})
        texture = add_texture("item/book")
        (pack_dir / "assets" / "minecraft" / "textures" / "item" / "notes.txt").write_text("x")

        structure = StructureScanner().scan(pack_dir)

        assert structure.item_files == [item]
        assert structure.model_files == [model]
        assert structure.texture_files == [texture]
        assert structure.model_directories == {
            "assets/minecraft/models/item/books_3d": ["assets/minecraft/models/item/books_3d/book_3d.json"]
        }
        assert list(structure.texture_directories) == ["assets/minecraft/textures/item"]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        structure = StructureScanner().scan(tmp_path / "nope")
        assert structure.item_files == [] and structure.model_files == [] and structure.texture_files == []

    def test_find_model(self, pack_dir: Path, add_model: Callable[[str, Any], Path]) -> None:
        model = add_model("item/book", {})
        structure = StructureScanner().scan(pack_dir)

        assert structure.find_model("minecraft:item/book") == model
        assert structure.find_model("item/book") == model
        assert structure.find_model("minecraft:item/missing") is None

    def test_strip_namespace(self) -> None:
        assert strip_namespace("minecraft:item/book") == "item/book"
        assert strip_namespace("item/book") == "item/book"


class TestBaseAssetCopier:
    """Pass-through copying."""

    def test_copies_pack_files_models_and_textures(
        self,
        pack_dir: Path,
        tmp_path: Path,
        add_item: Callable[[str, Any], Path],
        add_model: Callable[[str, Any], Path],
        add_texture: Callable[[str], Path],
    ) -> None:
        add_item("book", "minecraft:item/book")
        add_model("item/book", {"parent": "minecraft:item/generated"})
        add_texture("item/book")
        (pack_dir / ".hidden").write_text("secret")
        output = tmp_path / "out"

        copied = BaseAssetCopier().copy(StructureScanner().scan(pack_dir), output)

        assert copied == 4
        assert (output / "pack.mcmeta").read_bytes() == (pack_dir / "pack.mcmeta").read_bytes()
        assert (output / "pack.png").exists()
        assert (output / "assets/minecraft/models/item/book.json").exists()
        assert (output / "assets/minecraft/textures/item/book.png").exists()
        assert not (output / "assets/minecraft/items").exists()
        assert not (output / ".hidden").exists()
