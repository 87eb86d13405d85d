"""
どこで: `engine.monitor.sampler`。
何を: 実効 FPS・描画統計（ノード/接続線数）・CPU/MEM を一定間隔でサンプリングし dict に保持する。
なぜ: HUD 表示と DEBUG ログの両方から同じ計測値を参照するため。
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable

import psutil

from engine.scene.neural_sphere import FrameStats

from ..core.tickable import Tickable

logger = logging.getLogger(__name__)


class MetricSampler(Tickable):
    """フレーム数・描画統計・CPU・MEM を一定間隔でサンプリングする。"""

    def __init__(
        self,
        stats_provider: Callable[[], FrameStats],
        interval: float = 0.5,
        *,
        clock: Callable[[], float] = time.perf_counter,
        track_process: bool = True,
    ):
        self._stats = stats_provider
        self._interval = float(interval)
        self._clock = clock
        self._proc = psutil.Process(os.getpid()) if track_process else None
        # 前回サンプリング時刻とフレーム数（実効FPS算出に使用）
        self._last = self._clock()
        self._frames = 0
        self.data: dict[str, str] = {}

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        self._frames += 1
        now = self._clock()
        elapsed = now - self._last
        if elapsed < self._interval:
            return
        fps = self._frames / elapsed if elapsed > 0.0 else 0.0
        self._last = now
        self._frames = 0

        stats = self._stats()
        # 表示順序：FPSを最初に
        self.data["FPS"] = f"{fps:4.1f}"
        self.data["NODES"] = f"{stats.nodes}"
        self.data["LINKS"] = f"{stats.links}"
        if self._proc is not None:
            self.data["CPU"] = f"{self._proc.cpu_percent(0.0):4.1f}%"
            self.data["MEM"] = self._human(self._proc.memory_info().rss)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("metrics %s", " ".join(f"{k}={v.strip()}" for k, v in self.data.items()))

    # -------- helpers --------
    @staticmethod
    def _human(n: float) -> str:
        for u in "B KB MB GB TB".split():
            if n < 1024:
                return f"{n:4.1f}{u}"
            n /= 1024
        return f"{n:4.1f}PB"


__all__ = ["MetricSampler"]
