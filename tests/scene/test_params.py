from __future__ import annotations

import logging

import pytest

from common.settings import reload_from_env
from engine.core.projection import Facing
from engine.scene.params import SphereParams, resolve_params


def test_defaults_match_reference_look() -> None:
    p = SphereParams()
    assert p.node_count == 180
    assert p.radius_factor == 0.7
    assert p.link_ratio == 0.45
    assert p.decay == 0.92
    assert p.wave_half_width == 0.28
    assert p.facing is Facing.NEGATIVE_DEPTH
    assert p.background == (1.0, 1.0, 1.0, 1.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"node_count": -1},
        {"wave_half_width": 0.0},
        {"decay": 1.0},
        {"decay": -0.1},
        {"focal_length": 0.0},
        {"glow_threshold": 0.7, "peak_threshold": 0.6},
        {"background": (1.0, 1.0, 1.0, 0.5)},
        {"background": (1.0, 1.0, 1.0)},
    ],
)
def test_invalid_values_raise(kwargs) -> None:
    with pytest.raises(ValueError):
        SphereParams(**kwargs)


def test_from_mapping_coerces_types() -> None:
    p = SphereParams.from_mapping(
        {
            "node_count": "64",
            "focal_length": 600,
            "center_ratio": [0.5, 0.5],
            "facing": "positive",
            "link_color": [91, 61, 245],
            "background": "#000000",
        }
    )
    assert p.node_count == 64
    assert p.focal_length == 600.0
    assert p.center_ratio == (0.5, 0.5)
    assert p.facing is Facing.POSITIVE_DEPTH
    assert p.link_color == pytest.approx((91 / 255, 61 / 255, 245 / 255, 1.0))
    assert p.background == (0.0, 0.0, 0.0, 1.0)


def test_from_mapping_ignores_unknown_keys(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="engine.scene.params"):
        p = SphereParams.from_mapping({"node_count": 10, "sparkle": True})
    assert p.node_count == 10
    assert "sparkle" in caplog.text


def test_resolve_params_falls_back_on_bad_config(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="engine.scene.params"):
        p = resolve_params({"decay": 5})
    assert p == SphereParams()
    assert "invalid sphere config" in caplog.text


def test_resolve_params_priority(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NSP_NODE_COUNT", "90")
    reload_from_env()
    # 環境変数は設定ファイルより優先、明示引数は環境変数より優先
    assert resolve_params({"node_count": 30}).node_count == 90
    assert resolve_params({"node_count": 30}, node_count=12).node_count == 12


def test_resolve_params_env_facing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NSP_FACING", "positive")
    reload_from_env()
    assert resolve_params().facing is Facing.POSITIVE_DEPTH

    monkeypatch.setenv("NSP_FACING", "upward")
    reload_from_env()
    assert resolve_params().facing is Facing.NEGATIVE_DEPTH


def test_explicit_invalid_override_raises() -> None:
    with pytest.raises(ValueError):
        resolve_params(decay=2.0)


def test_translucent_background_override_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_params({"node_count": 10}, background="#FFFFFF80")


def test_translucent_background_in_config_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="engine.scene.params"):
        p = resolve_params({"node_count": 10, "background": "#00000080"})
    assert p.background == (1.0, 1.0, 1.0, 1.0)
    assert p.node_count == 180
    assert "invalid sphere config" in caplog.text


def test_scene_clear_is_always_opaque() -> None:
    from engine.render.surface import RecordingSurface
    from engine.render.types import Clear
    from engine.scene.neural_sphere import NeuralSphereScene

    params = resolve_params({"node_count": 10}, background="#102030FF")
    scene = NeuralSphereScene(RecordingSurface(), params)
    scene.resize(200, 100)
    scene.tick(1 / 60)
    first = scene.surface.commands[0]
    assert isinstance(first, Clear)
    assert first.color[3] == 1.0
