"""
どこで: `engine.render.surface`。
何を: 2D 即時描画面の Protocol `DrawSurface` と、コマンドを記録するだけの `RecordingSurface`。
なぜ: シーンは描画 API のみに依存させ、ウィンドウ実装（pyglet）とヘッドレス検証を差し替え可能にするため。

座標は論理ピクセル、原点は左上・y 下向き（キャンバス規約）。色は RGBA(0–1)。
"""

from __future__ import annotations

from typing import Protocol

from common.types import RGBA

from .types import Circle, Clear, DrawCommand, Line


class DrawSurface(Protocol):
    """シーンから見た描画面。"""

    def configure(self, width: int, height: int, pixel_ratio: float = 1.0) -> None:
        """論理サイズと画素比の変更を通知する。"""

    def begin_frame(self) -> None: ...

    def clear(self, color: RGBA) -> None: ...

    def line(self, x0: float, y0: float, x1: float, y1: float, width: float, color: RGBA) -> None: ...

    def circle(self, x: float, y: float, radius: float, color: RGBA) -> None: ...

    def end_frame(self) -> None: ...


class RecordingSurface:
    """描画コマンドをフレーム単位で記録する描画面。

    - `commands` は直近に開始したフレームのコマンド列。
    - `frames` は `end_frame()` 済みフレーム数。
    """

    def __init__(self, width: int = 0, height: int = 0, pixel_ratio: float = 1.0):
        self.width = int(width)
        self.height = int(height)
        self.pixel_ratio = float(pixel_ratio)
        self.commands: list[DrawCommand] = []
        self.frames = 0

    def configure(self, width: int, height: int, pixel_ratio: float = 1.0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.pixel_ratio = float(pixel_ratio)

    @property
    def pixel_size(self) -> tuple[int, int]:
        """実画素サイズ（論理サイズ × 画素比）。"""
        return (
            int(round(self.width * self.pixel_ratio)),
            int(round(self.height * self.pixel_ratio)),
        )

    def begin_frame(self) -> None:
        self.commands = []

    def clear(self, color: RGBA) -> None:
        self.commands.append(Clear(color))

    def line(self, x0: float, y0: float, x1: float, y1: float, width: float, color: RGBA) -> None:
        self.commands.append(Line(x0, y0, x1, y1, width, color))

    def circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        self.commands.append(Circle(x, y, radius, color))

    def end_frame(self) -> None:
        self.frames += 1

    # ---- 検査用ヘルパ ----
    def lines(self) -> list[Line]:
        return [c for c in self.commands if isinstance(c, Line)]

    def circles(self) -> list[Circle]:
        return [c for c in self.commands if isinstance(c, Circle)]


__all__ = ["DrawSurface", "RecordingSurface"]
