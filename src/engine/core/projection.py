"""
どこで: `engine.core.projection`。
何を: 点群の回転（Y 軸/X 軸）、透視投影、向き判定、奥行き順序を numpy でベクトル化した純粋関数群。
なぜ: 描画面から切り離して単体テスト可能にし、奥行き符号の取り違えを `Facing` で明示するため。

座標系:
- 入力は (N, 3) の float 配列（x 右, y 下, z 奥）。
- `project()` は中心オフセット済みの画面座標 (N, 2) と、オフセット前の奥行き z (N,) を返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from common.types import Vec2


class Facing(Enum):
    """「視点側を向いている」と判定する奥行きの符号規約。"""

    NEGATIVE_DEPTH = "negative"
    POSITIVE_DEPTH = "positive"

    @classmethod
    def parse(cls, value: "Facing | str") -> "Facing":
        """Enum 値/名前/値文字列（`"negative"` など）を受理して `Facing` を返す。"""
        if isinstance(value, Facing):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"invalid facing: {value!r}; allowed={allowed}")


@dataclass(frozen=True)
class ProjectionParams:
    """透視投影のパラメータ。

    Parameters
    ----------
    focal_length : float
        焦点距離。`scale = focal / (focal + z)`。正であること。
    center : Vec2
        投影中心（画面座標, px）。
    """

    focal_length: float = 800.0
    center: Vec2 = (0.0, 0.0)

    def __post_init__(self) -> None:
        if not float(self.focal_length) > 0.0:
            raise ValueError(f"focal_length must be > 0, got {self.focal_length}")


def _as_points(points: np.ndarray) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points must have shape (N, 3), got {pts.shape}")
    return pts


def rotate_y(points: np.ndarray, angle: float) -> np.ndarray:
    """Y 軸回りに回転した新しい配列を返す（水平方向の自転）。"""
    pts = _as_points(points)
    c, s = np.cos(angle), np.sin(angle)
    out = np.empty_like(pts)
    out[:, 0] = pts[:, 0] * c + pts[:, 2] * s
    out[:, 1] = pts[:, 1]
    out[:, 2] = -pts[:, 0] * s + pts[:, 2] * c
    return out


def rotate_x(points: np.ndarray, angle: float) -> np.ndarray:
    """X 軸回りに回転した新しい配列を返す（傾き）。"""
    pts = _as_points(points)
    c, s = np.cos(angle), np.sin(angle)
    out = np.empty_like(pts)
    out[:, 0] = pts[:, 0]
    out[:, 1] = pts[:, 1] * c - pts[:, 2] * s
    out[:, 2] = pts[:, 1] * s + pts[:, 2] * c
    return out


def perspective_scale(depth: np.ndarray, focal_length: float) -> np.ndarray:
    """奥行きごとの透視スケール `focal / (focal + z)` を返す。

    カメラ位置以遠（`focal + z <= 0`）の点はスケール 0（中心へ潰す）とし、ゼロ除算を起こさない。
    """
    z = np.asarray(depth, dtype=np.float64)
    denom = focal_length + z
    scale = np.zeros_like(z)
    np.divide(focal_length, denom, out=scale, where=denom > 0.0)
    return scale


def project(points: np.ndarray, params: ProjectionParams) -> tuple[np.ndarray, np.ndarray]:
    """ローカル 3D 座標を画面へ透視投影する。

    Returns
    -------
    (xy, depth)
        xy: (N, 2) 中心オフセット済み画面座標。depth: (N,) オフセット前の z。
    """
    pts = _as_points(points)
    depth = pts[:, 2].copy()
    scale = perspective_scale(depth, float(params.focal_length))
    cx, cy = params.center
    xy = np.empty((pts.shape[0], 2), dtype=np.float64)
    xy[:, 0] = pts[:, 0] * scale + float(cx)
    xy[:, 1] = pts[:, 1] * scale + float(cy)
    return xy, depth


def facing_mask(depth: np.ndarray, facing: Facing = Facing.NEGATIVE_DEPTH) -> np.ndarray:
    """視点側を向いている点の bool マスクを返す（境界 0 はどちらの規約でも背面扱い）。"""
    z = np.asarray(depth, dtype=np.float64)
    if facing is Facing.NEGATIVE_DEPTH:
        return z < 0.0
    return z > 0.0


def depth_order(depth: np.ndarray) -> np.ndarray:
    """奥行き昇順のインデックス列を返す（安定ソート: 同値は元の順序を保つ）。"""
    z = np.asarray(depth, dtype=np.float64)
    return np.argsort(z, kind="stable")


__all__ = [
    "Facing",
    "ProjectionParams",
    "rotate_y",
    "rotate_x",
    "perspective_scale",
    "project",
    "facing_mask",
    "depth_order",
]
