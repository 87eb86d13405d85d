"""
どこで: `common` パッケージ。
何を: ロギング/環境変数/設定/型エイリアスなど、全層で使う軽量基盤。
なぜ: 依存の向きを内側に揃え、上位層（engine/api）から再利用するため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
