"""
どこで: `engine.core.scheduler`。
何を: 「次フレームで 1 回呼ぶ」スケジューラの Protocol と、pyglet 実装/手動実装。
なぜ: フレームループをホスト（pyglet の clock など）から切り離し、ヘッドレスでも駆動・検証できるようにするため。

契約:
- `request(callback)` は次フレームで `callback(dt)` を 1 回だけ呼ぶ予約を行い、ハンドルを返す。
- `cancel(handle)` は未実行の予約を取り消す（実行済み/不明なハンドルは無視）。
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Hashable, Protocol

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """次フレームのコールバック予約と取消。"""

    def request(self, callback: FrameCallback) -> Hashable: ...

    def cancel(self, handle: Hashable) -> None: ...


class PygletFrameScheduler:
    """`pyglet.clock.schedule_once` で 1 フレーム先に予約する実装。"""

    def __init__(self, fps: int = 60, *, clock: Any | None = None):
        if int(fps) < 1:
            raise ValueError(f"fps must be >= 1, got {fps}")
        self._interval = 1.0 / float(fps)
        if clock is None:
            import pyglet  # 遅延 import（ヘッドレスでの import を避ける）

            clock = pyglet.clock
        self._clock = clock

    def request(self, callback: FrameCallback) -> Hashable:
        # unschedule は関数の同一性で行うため、予約ごとに固有のラッパを作る
        def _handle(dt: float) -> None:
            callback(dt)

        self._clock.schedule_once(_handle, self._interval)
        return _handle

    def cancel(self, handle: Hashable) -> None:
        self._clock.unschedule(handle)


class ManualFrameScheduler:
    """`advance()` で明示的にフレームを進める手動スケジューラ（ヘッドレス/テスト用）。"""

    def __init__(self, frame_dt: float = 1.0 / 60.0):
        self.frame_dt = float(frame_dt)
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        """未実行の予約数。"""
        return len(self._pending)

    def request(self, callback: FrameCallback) -> Hashable:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)  # type: ignore[arg-type]

    def advance(self, frames: int = 1) -> int:
        """最大 `frames` フレーム進め、実際に実行したコールバック数を返す。

        各フレームではその時点の予約のみを実行する（実行中の再予約は次フレーム扱い）。
        """
        ran = 0
        for _ in range(int(frames)):
            if not self._pending:
                break
            due = list(self._pending.items())
            self._pending.clear()
            for _handle, cb in due:
                cb(self.frame_dt)
                ran += 1
        return ran


__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "PygletFrameScheduler",
    "ManualFrameScheduler",
]
