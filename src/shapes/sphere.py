"""
どこで: `shapes.sphere`。
何を: フィボナッチ球（黄金角）で球面上にノードを等間隔配置し、近傍ノード同士を相互に接続した
      `SphereNetwork` を生成する。
なぜ: 点群アニメーションの不変部分（位置/隣接）を決定的に 1 度だけ作り、
      フレームごとに変わる投影/活性だけを配列で持ち回るため。

要点:
- 位置と隣接はリサイズ時に丸ごと再生成し、生成後は読み取り専用。
- 隣接は対称・自己ループなし。`edges` は `i < j` の無向辺を 1 回ずつ保持する。
- ノード数 0 や半径 0 でもゼロ除算を起こさず、空/潰れた構造を返す。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

GOLDEN_RATIO = (1.0 + np.sqrt(5.0)) / 2.0
# 1 ノードごとの方位角の増分（2π·φ）
ANGLE_INCREMENT = 2.0 * np.pi * GOLDEN_RATIO


@dataclass(frozen=True)
class Node:
    """1 ノードの読み取り専用スナップショット。"""

    index: int
    position: tuple[float, float, float]
    projected: tuple[float, float]
    depth: float
    activation: float
    neighbors: tuple[int, ...]


@dataclass(eq=False)
class SphereNetwork:
    """球面ノード群とその隣接、およびフレームごとの可変状態。

    Attributes
    ----------
    radius : float
        生成時の球半径。
    positions : np.ndarray
        (N, 3) 初期 3D 位置（読み取り専用）。
    neighbors : tuple[tuple[int, ...], ...]
        ノードごとの隣接インデックス（昇順）。
    edges : np.ndarray
        (E, 2) の無向辺 `i < j`（読み取り専用）。
    projected : np.ndarray
        (N, 2) 直近フレームの投影座標。
    depth : np.ndarray
        (N,) 直近フレームの奥行き（投影オフセット前の z）。
    activation : np.ndarray
        (N,) 活性度 [0, 1]。
    """

    radius: float
    positions: np.ndarray
    neighbors: tuple[tuple[int, ...], ...]
    edges: np.ndarray
    projected: np.ndarray
    depth: np.ndarray
    activation: np.ndarray

    @classmethod
    def from_points(cls, points: np.ndarray, radius: float, max_distance: float) -> "SphereNetwork":
        pts = np.array(points, dtype=np.float64).reshape(-1, 3)
        neighbors, edges = build_adjacency(pts, max_distance)
        pts.setflags(write=False)
        edges.setflags(write=False)
        n = pts.shape[0]
        return cls(
            radius=float(radius),
            positions=pts,
            neighbors=neighbors,
            edges=edges,
            projected=np.zeros((n, 2), dtype=np.float64),
            depth=np.zeros(n, dtype=np.float64),
            activation=np.zeros(n, dtype=np.float64),
        )

    @classmethod
    def empty(cls) -> "SphereNetwork":
        return cls.from_points(np.empty((0, 3)), 0.0, 0.0)

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    @property
    def edge_count(self) -> int:
        return int(self.edges.shape[0])

    def node(self, index: int) -> Node:
        """`index` 番目のノードのスナップショットを返す。"""
        i = int(index)
        x, y, z = (float(v) for v in self.positions[i])
        px, py = (float(v) for v in self.projected[i])
        return Node(
            index=i,
            position=(x, y, z),
            projected=(px, py),
            depth=float(self.depth[i]),
            activation=float(self.activation[i]),
            neighbors=self.neighbors[i],
        )

    def nodes(self) -> list[Node]:
        return [self.node(i) for i in range(len(self))]


def fibonacci_sphere(count: int, radius: float) -> np.ndarray:
    """フィボナッチ球で `count` 点を半径 `radius` の球面へ配置した (N, 3) 配列を返す。

    i 番目の点は `t = i / N` に対して傾斜角 `acos(1 - 2t)`、方位角 `i · 2πφ`。
    同じ入力に対して常に同じ配置を返す。
    """
    n = int(count)
    if n < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if n == 0:
        return np.empty((0, 3), dtype=np.float64)
    r = max(0.0, float(radius))
    i = np.arange(n, dtype=np.float64)
    t = i / n
    inclination = np.arccos(1.0 - 2.0 * t)
    azimuth = ANGLE_INCREMENT * i
    sin_inc = np.sin(inclination)
    return np.stack(
        (
            r * sin_inc * np.cos(azimuth),
            r * sin_inc * np.sin(azimuth),
            r * np.cos(inclination),
        ),
        axis=1,
    )


def build_adjacency(
    points: np.ndarray, max_distance: float
) -> tuple[tuple[tuple[int, ...], ...], np.ndarray]:
    """距離が `max_distance` 未満の全ペアを相互に接続する。

    O(N²) の総当たり（N は数百程度、リサイズ時のみ）。

    Returns
    -------
    (neighbors, edges)
        neighbors: ノードごとの隣接インデックス（昇順, 重複/自己なし）。
        edges: (E, 2) int64 の無向辺（各行 `i < j`, 行は辞書順）。
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    n = pts.shape[0]
    if n == 0:
        return (), np.empty((0, 2), dtype=np.int64)
    diff = pts[:, None, :] - pts[None, :, :]
    dist = np.sqrt(np.einsum("ijk,ijk->ij", diff, diff))
    linked = dist < float(max_distance)
    np.fill_diagonal(linked, False)
    # 浮動小数の非対称を避けるため上三角から対称行列を作り直す
    upper = np.triu(linked, k=1)
    linked = upper | upper.T
    edges = np.argwhere(upper).astype(np.int64)
    neighbors = tuple(tuple(int(j) for j in np.flatnonzero(row)) for row in linked)
    return neighbors, edges


def generate_sphere(count: int, radius: float, link_ratio: float = 0.45) -> SphereNetwork:
    """球面ノード群を生成し、`link_ratio × radius` 未満の距離のペアを接続する。

    半径が 0 以下の場合は全ノードを原点に潰し、接続は作らない。
    """
    r = max(0.0, float(radius))
    points = fibonacci_sphere(count, r)
    return SphereNetwork.from_points(points, r, float(link_ratio) * r)


def sphere_radius(width: float, height: float, factor: float = 0.7) -> float:
    """描画面の短辺 × `factor` を球半径として返す（負/欠損寸法は 0 扱い）。"""
    return max(0.0, min(float(width), float(height))) * float(factor)


__all__ = [
    "GOLDEN_RATIO",
    "Node",
    "SphereNetwork",
    "fibonacci_sphere",
    "build_adjacency",
    "generate_sphere",
    "sphere_radius",
]
