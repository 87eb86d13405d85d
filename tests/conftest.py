"""共通フィクスチャ。

- 乱数シード固定
- 記録用描画面・手動スケジューラ
- 小さな球面ネットワーク試料
- 環境変数設定（`NSP_*`）の後始末
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common.settings import reload_from_env
from engine.core.scheduler import ManualFrameScheduler
from engine.render.surface import RecordingSurface
from shapes.sphere import SphereNetwork, generate_sphere


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """テスト中に設定された `NSP_*` を外し、設定スナップショットを再読込する。"""
    for name in ("NSP_NODE_COUNT", "NSP_FACING", "NSP_FPS", "NSP_SHOW_HUD", "NSP_LOG_LEVEL", "NSP_METRICS_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    reload_from_env()
    yield
    monkeypatch.undo()
    reload_from_env()


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture()
def sphere_180() -> SphereNetwork:
    return generate_sphere(180, 100.0)


@pytest.fixture()
def sphere_small() -> SphereNetwork:
    return generate_sphere(24, 50.0, link_ratio=0.8)
