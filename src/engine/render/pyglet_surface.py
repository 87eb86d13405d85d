"""
どこで: `engine.render.pyglet_surface`。
何を: `DrawSurface` を pyglet の `shapes.Line`/`shapes.Circle` + `graphics.Batch` で実装する。
なぜ: シーンが発行した 1 フレーム分の即時描画を 1 つのバッチへまとめ、`on_draw` で一括描画するため。

注意:
- pyglet の原点は左下のため、y を `height - y` に反転する。
- 背景色はウィンドウの `set_background_color` に委譲する（クリアは `RenderWindow.on_draw`）。
- 図形はスロットとして保持し、フレーム間で再利用する（頂点バッファを作り直さない）。
  スロットは増えるだけで削除しない。確保順 = 描画順を保つため。
- 接続線は順序 0、ノードは順序 1 のグループに置き、線が常にノードの下になる。
"""

from __future__ import annotations

import logging
from typing import Any

import pyglet

from common.types import RGBA
from util.color import to_u8_rgba

logger = logging.getLogger(__name__)

# 半径を変えても頂点数が変わらないよう分割数を固定する
DEFAULT_CIRCLE_SEGMENTS = 24


class PygletSurface:
    """pyglet バッチ上の図形スロットを毎フレーム書き換え、`render()` で描く描画面。"""

    def __init__(self, window: Any, *, circle_segments: int | None = None):
        self._window = window
        self._segments = int(circle_segments or DEFAULT_CIRCLE_SEGMENTS)
        self.width = int(getattr(window, "width", 0))
        self.height = int(getattr(window, "height", 0))
        self.pixel_ratio = 1.0
        self._batch = pyglet.graphics.Batch()
        self._line_group = pyglet.graphics.Group(order=0)
        self._circle_group = pyglet.graphics.Group(order=1)
        self._lines: list[Any] = []
        self._circles: list[Any] = []
        self._n_lines = 0
        self._n_circles = 0

    def configure(self, width: int, height: int, pixel_ratio: float = 1.0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.pixel_ratio = float(pixel_ratio)
        logger.debug("surface configured: %dx%d @%.2fx", self.width, self.height, self.pixel_ratio)

    def begin_frame(self) -> None:
        self._n_lines = 0
        self._n_circles = 0

    def clear(self, color: RGBA) -> None:
        setter = getattr(self._window, "set_background_color", None)
        if setter is not None:
            setter(color)

    def line(self, x0: float, y0: float, x1: float, y1: float, width: float, color: RGBA) -> None:
        h = float(self.height)
        rgba = to_u8_rgba(color)
        if self._n_lines < len(self._lines):
            shape = self._lines[self._n_lines]
            shape.x, shape.y = x0, h - y0
            shape.x2, shape.y2 = x1, h - y1
            shape.thickness = float(width)
            shape.color = rgba
            shape.visible = True
        else:
            shape = pyglet.shapes.Line(
                x0,
                h - y0,
                x1,
                h - y1,
                thickness=float(width),
                color=rgba,
                batch=self._batch,
                group=self._line_group,
            )
            self._lines.append(shape)
        self._n_lines += 1

    def circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        cy = float(self.height) - y
        rgba = to_u8_rgba(color)
        if self._n_circles < len(self._circles):
            shape = self._circles[self._n_circles]
            shape.x, shape.y = x, cy
            shape.radius = float(radius)
            shape.color = rgba
            shape.visible = True
        else:
            shape = pyglet.shapes.Circle(
                x,
                cy,
                float(radius),
                segments=self._segments,
                color=rgba,
                batch=self._batch,
                group=self._circle_group,
            )
            self._circles.append(shape)
        self._n_circles += 1

    def end_frame(self) -> None:
        # 今フレームで使わなかったスロットは隠す
        for shape in self._lines[self._n_lines :]:
            if shape.visible:
                shape.visible = False
        for shape in self._circles[self._n_circles :]:
            if shape.visible:
                shape.visible = False

    def render(self) -> None:
        """直近に完成したフレームを描画する（`RenderWindow.on_draw` から呼ぶ）。"""
        self._batch.draw()

    @property
    def shape_count(self) -> int:
        """直近フレームで表示中の図形数。"""
        return self._n_lines + self._n_circles

    @property
    def slot_count(self) -> int:
        """確保済みの図形スロット数（表示/非表示を含む）。"""
        return len(self._lines) + len(self._circles)


__all__ = ["PygletSurface", "DEFAULT_CIRCLE_SEGMENTS"]
