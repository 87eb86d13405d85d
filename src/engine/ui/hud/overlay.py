"""
どこで: `engine.ui.hud` の HUD 表示モジュール。
何を: MetricSampler のキー/値ペアと一時メッセージを pyglet の Label でオーバーレイ描画する。
なぜ: 実行時メトリクスを即座に可視化し、チューニング時のフィードバックを高めるため。
"""

from __future__ import annotations

import time
from typing import Literal

import pyglet
from pyglet.window import Window

from engine.monitor.sampler import MetricSampler

from ...core.tickable import Tickable

_LEVEL_COLORS = {
    "info": (0, 0, 0, 200),
    "warn": (200, 120, 0, 230),
    "error": (200, 0, 0, 230),
}


class OverlayHUD(Tickable):
    """MetricSampler が溜めた文字列を左下に、メッセージを左上に描画する。"""

    def __init__(
        self,
        window: Window,
        sampler: MetricSampler,
        *,
        font_size: int = 8,
        color: tuple[int, int, int, int] = (0, 0, 0, 155),
        message_seconds: float = 3.0,
    ):
        self.window = window
        self.sampler = sampler
        self.font_size = int(font_size)
        self._color = color
        self._message_seconds = float(message_seconds)
        self._batch = pyglet.graphics.Batch()
        self._labels: dict[str, pyglet.text.Label] = {}
        self._messages: list[tuple[str, float, Literal["info", "warn", "error"]]] = []
        self._message_labels: list[pyglet.text.Label] = []

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        line_h = self.font_size + 10
        for i, (key, value) in enumerate(self.sampler.data.items()):
            text = f"{key:>6}: {value}"
            label = self._labels.get(key)
            if label is None:
                label = pyglet.text.Label(
                    text,
                    x=10,
                    y=10 + i * line_h,
                    font_size=self.font_size,
                    color=self._color,
                    batch=self._batch,
                )
                self._labels[key] = label
            elif label.text != text:
                label.text = text

        now = time.monotonic()
        alive = [m for m in self._messages if m[1] > now]
        if len(alive) != len(self._messages) or len(alive) != len(self._message_labels):
            self._messages = alive
            self._rebuild_messages()

    def draw(self) -> None:
        self._batch.draw()

    # -------- messages --------
    def show_message(self, text: str, level: Literal["info", "warn", "error"] = "info") -> None:
        """左上に一定時間メッセージを表示する。"""
        self._messages.append((text, time.monotonic() + self._message_seconds, level))
        self._rebuild_messages()

    def _rebuild_messages(self) -> None:
        for label in self._message_labels:
            label.delete()
        line_h = self.font_size + 10
        top = int(self.window.height) - line_h
        self._message_labels = [
            pyglet.text.Label(
                text,
                x=10,
                y=top - i * line_h,
                font_size=self.font_size,
                color=_LEVEL_COLORS.get(level, _LEVEL_COLORS["info"]),
                batch=self._batch,
            )
            for i, (text, _until, level) in enumerate(self._messages)
        ]


__all__ = ["OverlayHUD"]
