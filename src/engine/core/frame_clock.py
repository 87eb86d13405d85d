"""
どこで: `engine.core` のフレームドライバ。
何を: `Tickable` の列を固定順序で呼び出し、毎フレーム次フレームを再予約する FrameClock。
なぜ: GUI/ループから独立した「1 フレーム実行 → 再予約」の単一タスクとして扱い、
      `stop()` で予約ハンドルを解放するだけで即時に停止できるようにするため。
"""

from __future__ import annotations

import logging
import time
from typing import Hashable, Sequence

from .scheduler import FrameScheduler
from .tickable import Tickable

logger = logging.getLogger(__name__)


class FrameClock:
    """登録された Tickable を固定順序で実行し、次フレームを予約する極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable], scheduler: FrameScheduler | None = None):
        self._tickables = tuple(tickables)
        self._scheduler = scheduler
        self._handle: Hashable | None = None
        self._running = False
        self._frames = 0
        self._last_time = time.perf_counter()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        """これまでに実行したフレーム数。"""
        return self._frames

    def start(self) -> None:
        """最初のフレームを予約してループを開始する（実行中なら何もしない）。"""
        if self._running:
            return
        if self._scheduler is None:
            raise RuntimeError("FrameClock.start() requires a scheduler")
        self._running = True
        self._last_time = time.perf_counter()
        self._handle = self._scheduler.request(self._on_frame)
        logger.debug("frame clock started (%d tickables)", len(self._tickables))

    def stop(self) -> None:
        """未実行の予約を取り消して停止する（冪等）。"""
        if not self._running:
            return
        self._running = False
        handle, self._handle = self._handle, None
        if handle is not None and self._scheduler is not None:
            self._scheduler.cancel(handle)
        logger.debug("frame clock stopped after %d frames", self._frames)

    # GUI フレームワークから直接呼ばせることもできる（pyglet は dt を渡してくれる）
    def tick(self, dt: float | None = None) -> None:
        if dt is None:
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        for t in self._tickables:
            t.tick(dt)
        self._frames += 1

    def _on_frame(self, dt: float) -> None:
        self._handle = None
        if not self._running:
            return
        self.tick(dt)
        # tick 中に stop() された場合は再予約しない
        if self._running and self._scheduler is not None:
            self._handle = self._scheduler.request(self._on_frame)
