"""
どこで: `api` 入口（高レベル公開 API）。
何を: 背景アニメーションの実行 `run`・ホストへの取り付け `mount`・演出パラメータ `SphereParams` を再輸出。
なぜ: 利用者が単一名前空間から設定→取り付け→実行まで完結できるようにするため。

Usage:
    from api import run

    run(node_count=240, fps=60)
"""

from engine.scene.params import SphereParams

from .background import SphereBackground, mount, run

__all__ = [
    "run",
    "mount",
    "SphereBackground",
    "SphereParams",
]

# バージョン情報
__version__ = "2026.10"
