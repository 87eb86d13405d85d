"""
どこで: `engine.scene.params`。
何を: 球面ネットワーク演出の定数群 `SphereParams`（配置/回転/投影/波/描画スタイル）と、
      設定ファイル・環境変数からの解決。
なぜ: マジックナンバーを 1 箇所に集め、検証済みの不変値としてシーンへ渡すため。

優先順位: 明示引数 > 環境変数（`NSP_*`）> `sphere:` セクション（YAML）> 既定値。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from common.settings import get as get_settings
from common.types import RGBA
from engine.core.projection import Facing
from util.color import normalize_color

logger = logging.getLogger(__name__)

_COLOR_FIELDS = frozenset({"background", "link_color", "glow_color", "node_color", "peak_color"})


@dataclass(frozen=True)
class SphereParams:
    """演出パラメータ。

    Parameters
    ----------
    node_count : int
        ノード数（0 以上）。
    radius_factor : float
        球半径 = 描画面の短辺 × この係数（> 1/2 で球の一部がはみ出す）。
    link_ratio : float
        接続距離の閾値（半径比）。
    rotation_step, wave_step : float
        1 フレームあたりの回転角/波位相の増分 [rad]。
    tilt : float
        X 軸回りの固定傾き [rad]。
    focal_length : float
        透視投影の焦点距離。
    center_ratio : tuple[float, float]
        投影中心（描画面サイズ比）。
    wave_half_width : float
        波の半幅（正規化 x 単位）。
    decay : float
        活性の毎フレーム減衰係数 [0, 1)。
    facing : Facing
        視点側とみなす奥行きの符号規約。
    """

    # 配置
    node_count: int = 180
    radius_factor: float = 0.7
    link_ratio: float = 0.45

    # 回転/投影
    rotation_step: float = 0.003
    wave_step: float = 0.02
    tilt: float = 0.3
    focal_length: float = 800.0
    center_ratio: tuple[float, float] = (0.85, 0.5)
    facing: Facing = Facing.NEGATIVE_DEPTH

    # 波/活性
    wave_half_width: float = 0.28
    decay: float = 0.92

    # 接続線
    link_color: RGBA = (91 / 255, 61 / 255, 245 / 255, 1.0)
    link_base_opacity: float = 0.096
    link_active_opacity: float = 0.4
    link_base_width: float = 0.5
    link_active_width: float = 1.5

    # ノード
    node_color: RGBA = (147 / 255, 51 / 255, 234 / 255, 1.0)
    node_base_size: float = 2.0
    node_active_size: float = 4.0
    node_base_brightness: float = 0.4
    node_base_opacity: float = 0.56
    node_active_opacity: float = 0.24
    glow_color: RGBA = (91 / 255, 61 / 255, 245 / 255, 1.0)
    glow_threshold: float = 0.3
    glow_scale: float = 3.0
    glow_opacity: float = 0.16
    peak_color: RGBA = (1.0, 1.0, 1.0, 1.0)
    peak_threshold: float = 0.6
    peak_scale: float = 0.5
    peak_opacity: float = 0.64

    background: RGBA = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        if int(self.node_count) < 0:
            raise ValueError(f"node_count must be >= 0, got {self.node_count}")
        if not self.wave_half_width > 0.0:
            raise ValueError(f"wave_half_width must be > 0, got {self.wave_half_width}")
        if not 0.0 <= self.decay < 1.0:
            raise ValueError(f"decay must be in [0, 1), got {self.decay}")
        if not self.focal_length > 0.0:
            raise ValueError(f"focal_length must be > 0, got {self.focal_length}")
        if self.radius_factor < 0.0 or self.link_ratio < 0.0:
            raise ValueError("radius_factor and link_ratio must be >= 0")
        if not self.glow_threshold <= self.peak_threshold:
            raise ValueError("glow_threshold must not exceed peak_threshold")
        # 毎フレーム不透明色で塗りつぶす（半透明だと前フレームが残像として残る）
        if len(self.background) != 4 or float(self.background[3]) != 1.0:
            raise ValueError(f"background must be opaque, got {self.background}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SphereParams":
        """辞書（YAML の `sphere:` セクション等）から生成する。

        未知キーは警告して無視する。値の検証エラーは `ValueError` として送出する。
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("unknown sphere parameter ignored: %s", key)
                continue
            kwargs[key] = _coerce(key, value)
        return cls(**kwargs)


def _coerce(key: str, value: Any) -> Any:
    if key in _COLOR_FIELDS:
        return normalize_color(value)
    if key == "facing":
        return Facing.parse(value)
    if key == "center_ratio":
        cx, cy = value
        return (float(cx), float(cy))
    if key == "node_count":
        return int(value)
    return float(value)


def resolve_params(
    config: Mapping[str, Any] | None = None, **overrides: Any
) -> SphereParams:
    """YAML セクション → 環境変数 → 明示引数の順に重ねて `SphereParams` を得る。

    YAML 側の不正値は警告を出して既定値へフォールバックし、明示引数の不正値は送出する。
    """
    params = SphereParams()
    if config:
        try:
            params = SphereParams.from_mapping(config)
        except (TypeError, ValueError) as e:
            logger.warning("invalid sphere config; using defaults: %s", e)

    settings = get_settings()
    env: dict[str, Any] = {}
    if settings.NODE_COUNT is not None:
        env["node_count"] = int(settings.NODE_COUNT)
    if settings.FACING is not None:
        try:
            env["facing"] = Facing.parse(settings.FACING)
        except ValueError as e:
            logger.warning("NSP_FACING ignored: %s", e)
    if env:
        params = replace(params, **env)

    if overrides:
        params = replace(params, **{k: _coerce(k, v) for k, v in overrides.items()})
    return params


__all__ = ["SphereParams", "resolve_params"]
