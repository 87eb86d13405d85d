"""
どこで: `engine.render` 型定義。
何を: 描画面へ発行される即時描画コマンド（Clear/Line/Circle）の軽量データクラス。
なぜ: 描画結果を GPU/ウィンドウ無しで記録・検査できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from common.types import RGBA


@dataclass(frozen=True)
class Clear:
    color: RGBA


@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x1: float
    y1: float
    width: float
    color: RGBA


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: RGBA


DrawCommand = Union[Clear, Line, Circle]


__all__ = ["Clear", "Line", "Circle", "DrawCommand", "RGBA"]
