"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/背景クリア/リサイズ通知/画素比）と描画コールバック登録を提供。
なぜ: シーン/描画面から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, bg_color=(1, 1, 1, 1))
    win.add_draw_callback(surface.render)
    win.add_resize_listener(lambda w, h: scene.resize(w, h, win.pixel_ratio))
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

from common.types import RGBA

logger = logging.getLogger(__name__)

ResizeListener = Callable[[int, int], None]


def _make_config() -> Config | None:
    """MSAA 付きの GL Config を返す。非対応環境では None（pyglet 既定）を返す。"""
    # 線描画を滑らかにするために MSAA を有効化
    config = Config(double_buffer=True, sample_buffers=1, samples=4, vsync=True)
    try:
        screen = pyglet.display.get_display().get_default_screen()
        return screen.get_best_config(config)
    except pyglet.window.NoSuchConfigException:
        logger.info("MSAA config unavailable; falling back to default GL config")
        return None


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: RGBA = (1.0, 1.0, 1.0, 1.0),
        caption: str = "neurosphere",
        resizable: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（論理ピクセル）。
            height: ウィンドウ高さ（論理ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            resizable: ユーザ操作によるリサイズを許可するか。
        """
        super().__init__(
            width=width,
            height=height,
            caption=caption,
            resizable=resizable,
            config=_make_config(),
        )
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_listeners: list[ResizeListener] = []

    @property
    def pixel_ratio(self) -> float:
        """論理ピクセル→フレームバッファ画素の倍率（HiDPI で 2.0 など）。"""
        getter = getattr(self, "get_pixel_ratio", None)
        if getter is None:
            return 1.0
        ratio = float(getter())
        return ratio if ratio > 0.0 else 1.0

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_resize_listener(self, func: ResizeListener) -> None:
        """論理サイズ変更時に `func(width, height)` を呼ぶよう登録する。"""
        self._resize_listeners.append(func)

    def remove_resize_listener(self, func: ResizeListener) -> None:
        """登録済みのリサイズリスナを外す（未登録なら何もしない）。"""
        try:
            self._resize_listeners.remove(func)
        except ValueError:
            pass

    def on_resize(self, width, height):  # Pyglet 既定のイベント名
        # ビューポート/投影の更新は pyglet 既定処理に任せる
        super().on_resize(width, height)
        self._notify_resize(width, height)

    def on_scale(self, scale, dpi):  # Pyglet 既定のイベント名
        # 論理サイズが同じまま画素比だけ変わる場合（モニタ間の移動など）もリスナへ通知する
        self._notify_resize()

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。背景クリア後、登録された描画コールバックを呼び出す。"""
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    # ---- helpers ----
    def _notify_resize(self, width: int | None = None, height: int | None = None) -> None:
        w = self.width if width is None else width
        h = self.height if height is None else height
        for listener in tuple(self._resize_listeners):
            listener(int(w), int(h))

    def set_background_color(self, rgba: RGBA) -> None:
        """背景色 RGBA(0–1) を更新する。次フレームから反映。"""
        r, g, b, a = rgba
        self._bg_color = (float(r), float(g), float(b), float(a))
