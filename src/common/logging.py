"""
どこで: `common.logging`。
何を: プロジェクト向けの軽量ロギングユーティリティ。
なぜ: 各モジュールは `logging.getLogger(__name__)` のみを使い、設定はランナー側で 1 度だけ行うため。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str) -> int:
    """`"DEBUG"` などの名前/数値をロギングレベル int に解決する（不明名は INFO）。"""
    if isinstance(level, str):
        return int(getattr(logging, level.upper(), logging.INFO))
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 上位のランナー/CLI から呼び出す想定
    """
    lvl = resolve_level(level)

    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(level=lvl, format=_FORMAT)


__all__ = ["setup_default_logging", "resolve_level"]
