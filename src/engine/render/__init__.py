"""
どこで: `engine.render` サブパッケージ。
何を: 2D 即時描画面（Protocol/記録用/pyglet 実装）と描画コマンド型を提供。
なぜ: シーン計算と描画の責務を分離し、ウィンドウ依存を局所化するため。

pyglet 実装は `engine.render.pyglet_surface` から明示 import する（ヘッドレスでの import を避ける）。
"""

from .surface import DrawSurface, RecordingSurface
from .types import Circle, Clear, DrawCommand, Line

__all__ = ["DrawSurface", "RecordingSurface", "Clear", "Line", "Circle", "DrawCommand"]
