"""
どこで: `engine.scene` サブパッケージ。
何を: 球面ネットワーク演出（パラメータ/波の活性計算/シーン本体）。
なぜ: フレームごとの状態更新を描画バックエンドから独立させるため。
"""

from .neural_sphere import FrameStats, NeuralSphereScene
from .params import SphereParams, resolve_params

__all__ = ["NeuralSphereScene", "FrameStats", "SphereParams", "resolve_params"]
