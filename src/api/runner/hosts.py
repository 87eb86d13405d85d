"""
どこで: `api.runner.hosts`。
何を: シーンを載せるホスト環境の Protocol と、その実装（pyglet ウィンドウ/ヘッドレス）。
なぜ: 描画面・サイズ通知・画素比・フレームスケジューラの供給元を差し替え可能にし、
      ウィンドウ無しでも同じ配線（mount）を検証できるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from engine.core.scheduler import FrameScheduler, ManualFrameScheduler
from engine.render.surface import DrawSurface, RecordingSurface

logger = logging.getLogger(__name__)

ResizeListener = Callable[[int, int], None]


class SphereHost(Protocol):
    """シーンが必要とするホスト機能。"""

    scheduler: FrameScheduler

    def create_surface(self) -> DrawSurface | None:
        """描画面を返す。利用できない環境では None。"""

    @property
    def size(self) -> tuple[int, int]: ...

    @property
    def pixel_ratio(self) -> float: ...

    def add_resize_listener(self, listener: ResizeListener) -> None: ...

    def remove_resize_listener(self, listener: ResizeListener) -> None: ...


class WindowHost:
    """`RenderWindow` をホストとして扱うアダプタ。"""

    def __init__(self, window: Any, scheduler: FrameScheduler):
        self.window = window
        self.scheduler = scheduler

    def create_surface(self) -> DrawSurface | None:
        if getattr(self.window, "context", None) is None:
            return None
        from engine.render.pyglet_surface import PygletSurface  # 遅延 import

        surface = PygletSurface(self.window)
        self.window.add_draw_callback(surface.render)
        return surface

    @property
    def size(self) -> tuple[int, int]:
        return int(self.window.width), int(self.window.height)

    @property
    def pixel_ratio(self) -> float:
        return float(getattr(self.window, "pixel_ratio", 1.0))

    def add_resize_listener(self, listener: ResizeListener) -> None:
        self.window.add_resize_listener(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        self.window.remove_resize_listener(listener)


class HeadlessHost:
    """記録用描画面と手動スケジューラを持つホスト（ウィンドウ無し）。

    `available=False` で「描画面が利用できない」環境を表す。
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        pixel_ratio: float = 1.0,
        *,
        surface: DrawSurface | None = None,
        available: bool = True,
        scheduler: FrameScheduler | None = None,
    ):
        self._size = (int(width), int(height))
        self._pixel_ratio = float(pixel_ratio)
        if surface is None and available:
            surface = RecordingSurface(width, height, pixel_ratio)
        self._surface: DrawSurface | None = surface if available else None
        self.scheduler: FrameScheduler = scheduler or ManualFrameScheduler()
        self.listeners: list[ResizeListener] = []

    def create_surface(self) -> DrawSurface | None:
        return self._surface

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def pixel_ratio(self) -> float:
        return self._pixel_ratio

    def add_resize_listener(self, listener: ResizeListener) -> None:
        self.listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def resize(self, width: int, height: int, pixel_ratio: float | None = None) -> None:
        """サイズ変更を登録済みリスナへ通知する（ウィンドウのリサイズ相当）。"""
        self._size = (int(width), int(height))
        if pixel_ratio is not None:
            self._pixel_ratio = float(pixel_ratio)
        for listener in tuple(self.listeners):
            listener(*self._size)


__all__ = ["SphereHost", "WindowHost", "HeadlessHost", "ResizeListener"]
