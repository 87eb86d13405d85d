from __future__ import annotations

from pathlib import Path

import pytest

from util.utils import _find_project_root, _safe_load_yaml, config_section, load_config


@pytest.mark.integration
def test_load_config_provides_sphere_defaults() -> None:
    cfg = load_config()
    sphere = config_section("sphere", cfg)
    assert sphere.get("node_count") == 180
    assert config_section("canvas", cfg).get("width") == 1280


def test_config_section_missing_or_invalid() -> None:
    assert config_section("nope", {}) == {}
    assert config_section("canvas", {"canvas": [1, 2]}) == {}


def test_safe_load_yaml_broken_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    p = tmp_path / "broken.yaml"
    p.write_text("sphere: [unclosed", encoding="utf-8")
    assert _safe_load_yaml(p) == {}
    assert any("failed to read config" in r.message for r in caplog.records)

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("42\n", encoding="utf-8")
    assert _safe_load_yaml(scalar) == {}


def test_find_project_root_fallback(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert _find_project_root(start) == start.parent.parent
