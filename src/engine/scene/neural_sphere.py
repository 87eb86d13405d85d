"""
どこで: `engine.scene.neural_sphere`。
何を: 回転する球面ネットワークの 1 フレーム更新（回転→投影→波→減衰）と、
      奥行き順の描画（接続線→ノード: グロー/コア/ピーク）を行うシーン。
なぜ: アニメーション状態（ノード群と 2 つの位相）を単一オブジェクトが排他的に所有し、
      複数インスタンス化/ヘッドレス検証を可能にするため。

フレーム手順（`tick`）:
1) 位相を進める（回転角 += rotation_step, 波位相 += wave_step）
2) 各ノードを Y 軸回転 → X 軸固定傾き → 透視投影（奥行きは記録）
3) 波の寄与を max で取り込み、乗算減衰
4) 奥行き昇順（奥→手前）で安定ソート
5) 背景を不透明色でクリアし、視点側の接続線（各無向辺 1 回）→ ノードを描画

スレッド:
- 単一スレッドのイベントキューから `resize()` と `tick()` が交互に呼ばれる前提（ロック無し）。
- `resize()` は新しいネットワークを完成させてから差し替えるため、フレームが途中状態を読むことはない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from engine.core.projection import (
    ProjectionParams,
    depth_order,
    facing_mask,
    project,
    rotate_x,
    rotate_y,
)
from engine.core.tickable import Tickable
from engine.render.surface import DrawSurface
from shapes.sphere import SphereNetwork, generate_sphere, sphere_radius
from util.color import shade, with_alpha

from .params import SphereParams
from .wave import apply_wave, normalized_x, wave_position

logger = logging.getLogger(__name__)


@dataclass
class FrameStats:
    """直近フレームの描画統計。"""

    frame: int = 0
    nodes: int = 0
    links: int = 0
    glows: int = 0
    peaks: int = 0


class NeuralSphereScene(Tickable):
    """球面ネットワークの状態を所有し、`tick(dt)` ごとに更新/描画する。"""

    def __init__(self, surface: DrawSurface, params: SphereParams | None = None):
        self.surface = surface
        self.params = params or SphereParams()
        self.width = 0
        self.height = 0
        self.pixel_ratio = 1.0
        self.rotation = 0.0
        self.wave_phase = 0.0
        self.network: SphereNetwork = SphereNetwork.empty()
        self._order = np.empty(0, dtype=np.int64)
        self._visible = np.zeros(0, dtype=bool)
        self._stats = FrameStats()

    # ------------------------------------------------------------------ #
    # Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    def resize(self, width: int, height: int, pixel_ratio: float = 1.0) -> bool:
        """描画面サイズ変更に追従してノード群を作り直す。

        同一サイズ・同一画素比なら何もしない。作り直した場合は True を返す。
        """
        w, h = max(0, int(width)), max(0, int(height))
        ratio = float(pixel_ratio) if pixel_ratio and pixel_ratio > 0 else 1.0
        if (w, h, ratio) == (self.width, self.height, self.pixel_ratio) and len(self.network):
            return False
        self.surface.configure(w, h, ratio)
        radius = sphere_radius(w, h, self.params.radius_factor)
        network = generate_sphere(self.params.node_count, radius, self.params.link_ratio)
        # 完成したネットワークで一括差し替え
        self.width, self.height, self.pixel_ratio = w, h, ratio
        self.network = network
        self._order = np.arange(len(network), dtype=np.int64)
        self._visible = np.zeros(len(network), dtype=bool)
        logger.debug(
            "sphere rebuilt: %dx%d @%.2fx radius=%.1f nodes=%d edges=%d",
            w,
            h,
            ratio,
            radius,
            len(network),
            network.edge_count,
        )
        return True

    @property
    def center(self) -> tuple[float, float]:
        cx, cy = self.params.center_ratio
        return (self.width * cx, self.height * cy)

    @property
    def order(self) -> np.ndarray:
        """直近フレームの描画順（奥→手前）。"""
        return self._order

    def frame_stats(self) -> FrameStats:
        """直近に描画したフレームの統計（ノード/接続線/グロー/ピーク数）。"""
        return self._stats

    # ------------------------------------------------------------------ #
    # Tickable                                                           #
    # ------------------------------------------------------------------ #
    def tick(self, dt: float) -> None:
        """1 フレーム進めて描画する（位相は dt ではなくフレーム単位で進む）。"""
        self.update()
        self.draw()

    def update(self) -> None:
        """位相を進め、投影・活性・描画順を再計算する。"""
        p = self.params
        self.rotation += p.rotation_step
        self.wave_phase += p.wave_step

        net = self.network
        if len(net) == 0:
            self._order = np.empty(0, dtype=np.int64)
            self._visible = np.zeros(0, dtype=bool)
            return

        local = rotate_x(rotate_y(net.positions, self.rotation), p.tilt)
        xy, depth = project(local, ProjectionParams(p.focal_length, self.center))
        net.projected[:] = xy
        net.depth[:] = depth

        nx = normalized_x(local[:, 0], net.radius)
        apply_wave(net.activation, nx, wave_position(self.wave_phase), p.wave_half_width, p.decay)

        self._order = depth_order(net.depth)
        self._visible = facing_mask(net.depth, p.facing)

    def draw(self) -> None:
        """背景クリア → 接続線 → ノードの順に描画する。"""
        p = self.params
        surface = self.surface
        stats = FrameStats(frame=self._stats.frame + 1)

        surface.begin_frame()
        surface.clear(p.background)
        net = self.network
        if len(net):
            stats.links = self._draw_links(net)
            stats.nodes, stats.glows, stats.peaks = self._draw_nodes(net)
        surface.end_frame()
        self._stats = stats

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #
    def _draw_links(self, net: SphereNetwork) -> int:
        p = self.params
        visible = self._visible
        act = net.activation
        xy = net.projected
        count = 0
        for i in self._order:
            i = int(i)
            if not visible[i]:
                continue
            for j in net.neighbors[i]:
                # 無向辺は i < j の側からだけ描く
                if j <= i or not visible[j]:
                    continue
                avg = (act[i] + act[j]) * 0.5
                opacity = p.link_base_opacity + avg * p.link_active_opacity
                width = p.link_base_width + avg * p.link_active_width
                self.surface.line(
                    float(xy[i, 0]),
                    float(xy[i, 1]),
                    float(xy[j, 0]),
                    float(xy[j, 1]),
                    float(width),
                    with_alpha(p.link_color, float(opacity)),
                )
                count += 1
        return count

    def _draw_nodes(self, net: SphereNetwork) -> tuple[int, int, int]:
        p = self.params
        visible = self._visible
        nodes = glows = peaks = 0
        for i in self._order:
            i = int(i)
            if not visible[i]:
                continue
            a = float(net.activation[i])
            x, y = float(net.projected[i, 0]), float(net.projected[i, 1])
            size = p.node_base_size + a * p.node_active_size

            if a > p.glow_threshold:
                self.surface.circle(
                    x, y, size * p.glow_scale, with_alpha(p.glow_color, a * p.glow_opacity)
                )
                glows += 1

            brightness = p.node_base_brightness + a * (1.0 - p.node_base_brightness)
            alpha = p.node_base_opacity + a * p.node_active_opacity
            self.surface.circle(x, y, size, shade(p.node_color, brightness, alpha))
            nodes += 1

            if a > p.peak_threshold:
                self.surface.circle(
                    x, y, size * p.peak_scale, with_alpha(p.peak_color, a * p.peak_opacity)
                )
                peaks += 1
        return nodes, glows, peaks


__all__ = ["NeuralSphereScene", "FrameStats"]
