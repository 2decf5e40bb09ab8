"""Shared fixtures: tiny resource packs built in a temporary directory."""

from pathlib import Path
from typing import Any, Callable

import orjson
import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))
    return path


def read_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


@pytest.fixture
def pack_dir(tmp_path: Path) -> Path:
    """An empty pack with pack.mcmeta and pack.png."""
    root = tmp_path / "My Pack"
    root.mkdir()
    write_json(root / "pack.mcmeta", {"pack": {"pack_format": 34, "description": "test"}})
    (root / "pack.png").write_bytes(PNG_BYTES)
    return root


@pytest.fixture
def add_item(pack_dir: Path) -> Callable[[str, Any], Path]:
    def _add(item_id: str, model: Any) -> Path:
        return write_json(pack_dir / "assets" / "minecraft" / "items" / f"{item_id}.json", {"model": model})

    return _add


@pytest.fixture
def add_model(pack_dir: Path) -> Callable[[str, Any], Path]:
    def _add(name: str, data: Any) -> Path:
        return write_json(pack_dir / "assets" / "minecraft" / "models" / f"{name}.json", data)

    return _add


@pytest.fixture
def add_texture(pack_dir: Path) -> Callable[[str], Path]:
    def _add(name: str) -> Path:
        path = pack_dir / "assets" / "minecraft" / "textures" / f"{name}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(PNG_BYTES)
        return path

    return _add
