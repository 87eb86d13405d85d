from __future__ import annotations

import pathlib
import re

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]


def _declared_floor(name: str) -> tuple[int, ...]:
    text = (REPO_ROOT / "pyproject.toml").read_text(encoding="utf-8")
    m = re.search(rf'"{name}>=([0-9.]+)"', text)
    assert m is not None, f"{name} floor not declared"
    return tuple(int(p) for p in m.group(1).split("."))


@pytest.mark.smoke
def test_pyglet_floor_provides_display_module() -> None:
    # `RenderWindow` は `pyglet.display`（2.1 で `pyglet.canvas` から改名）を使う
    assert _declared_floor("pyglet") >= (2, 1)


@pytest.mark.smoke
def test_installed_pyglet_matches_floor() -> None:
    pyglet = pytest.importorskip("pyglet")
    assert hasattr(pyglet, "display")
