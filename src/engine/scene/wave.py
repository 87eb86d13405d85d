"""
どこで: `engine.scene.wave`。
何を: 球面を横切る進行波によるノード活性の更新（立ち上がり: 二乗フォールオフの max、減衰: 乗算）。
なぜ: 描画から独立した純粋関数として、活性が [0, 1] を外れないことを単体で検証できるようにするため。
"""

from __future__ import annotations

import math

import numpy as np


def wave_position(phase: float) -> float:
    """波の現在位置（球半径で正規化した x 座標, [-1, 1]）。"""
    return math.sin(phase)


def normalized_x(local_x: np.ndarray, radius: float) -> np.ndarray:
    """ローカル x を球半径で正規化する。半径 0 以下では 0 を返す（ゼロ除算なし）。"""
    x = np.asarray(local_x, dtype=np.float64)
    if not radius > 0.0:
        return np.zeros_like(x)
    return x / float(radius)


def wave_intensity(nx: np.ndarray, position: float, half_width: float) -> np.ndarray:
    """各ノードへの波の寄与 `(1 - d/half_width)²` を返す（帯の外側は 0）。"""
    d = np.abs(np.asarray(nx, dtype=np.float64) - float(position))
    falloff = np.clip(1.0 - d / float(half_width), 0.0, 1.0)
    return falloff * falloff


def apply_wave(
    activation: np.ndarray,
    nx: np.ndarray,
    position: float,
    half_width: float,
    decay: float,
) -> np.ndarray:
    """活性を波で持ち上げ（上書きではなく max）、その後 `decay` 倍に減衰させる。

    `activation` はその場で更新し、同じ配列を返す。入力が [0, 1] なら出力も [0, 1]。
    """
    intensity = wave_intensity(nx, position, half_width)
    np.maximum(activation, intensity, out=activation)
    activation *= float(decay)
    return activation


__all__ = ["wave_position", "normalized_x", "wave_intensity", "apply_wave"]
