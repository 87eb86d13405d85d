"""
内部ヘルパ群（API 非公開）。

どこで: `api.runner`
何を: `api.background` の補助（設定解決の純粋関数/ホストアダプタ）を分離し、
      `run` 本体を薄く保つための内部モジュール群。
なぜ: シンプルさと可読性を維持しつつ、責務を小分割するため。
"""

from __future__ import annotations

__all__: list[str] = []
