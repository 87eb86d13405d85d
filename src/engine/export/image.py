"""
どこで: `engine.export.image`。
何を: 現在の描画ウィンドウ内容を PNG として保存する最小ラッパ。
なぜ: ワンアクション（`P` キー）でスクリーンショットを得られるようにするため。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pyglet

from util.paths import ensure_screenshots_dir, unique_path

logger = logging.getLogger(__name__)


def default_png_path(width: int, height: int) -> Path:
    """`data/screenshot/<timestamp>_<w>x<h>.png`（衝突時は連番付き）を返す。"""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return unique_path(ensure_screenshots_dir() / f"{ts}_{int(width)}x{int(height)}.png")


def save_png(window: "pyglet.window.Window", path: Path | None = None) -> Path:
    """現在のウィンドウ内容（カラーバッファ）を PNG として保存する。

    Parameters
    ----------
    window : pyglet.window.Window
        対象ウィンドウ。
    path : Path | None
        出力先パス。None の場合は既定の `data/screenshot/` にタイムスタンプ名で保存。

    Returns
    -------
    Path
        保存先のファイルパス。

    Raises
    ------
    RuntimeError
        pyglet が未初期化/ヘッドレスなどでバッファを取得・保存できない場合。
    """
    if path is None:
        path = default_png_path(window.width, window.height)
    try:
        buffer = pyglet.image.get_buffer_manager().get_color_buffer()
        buffer.save(str(path))
    except Exception as e:  # pyglet が未初期化/ヘッドレスなど
        raise RuntimeError(f"PNG 保存に失敗: {e}") from e
    logger.info("saved PNG: %s", path)
    return path


__all__ = ["save_png", "default_png_path"]
