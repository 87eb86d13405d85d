"""
どこで: `api.background`（実行ランナー）。
何を: 球面ネットワークのアニメーション背景をホストへ取り付け（mount）、pyglet ウィンドウで実行（run）する。
なぜ: 少ない記述で「描画面の確保 → シーン生成 → リサイズ追従 → フレームループ」を一括配線するため。

実行フロー（`run` の概要）:
1) ロギング/設定: `setup_default_logging()`、`util.utils.load_config()` と `NSP_*` 環境変数を解決。
2) `init_only=True` ならここで返す（pyglet を import しない。ヘッドレス検証用）。
3) ウィンドウ: `RenderWindow` を生成し、`WindowHost` + `PygletFrameScheduler` で包む。
4) mount: 描画面を確保できなければ何もしない。できればシーンを生成し、リサイズリスナを登録、
   `FrameClock` を開始する。
5) キー: `ESC` で終了、`P` で PNG 保存。終了時はループ停止・リスナ解除を冪等に行う。

スレッド/安全性:
- すべて pyglet のイベントループ（単一スレッド）上で動く。リサイズとフレーム描画は排他的に実行される。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from engine.core.frame_clock import FrameClock
from engine.core.tickable import Tickable
from engine.scene.neural_sphere import NeuralSphereScene
from engine.scene.params import SphereParams, resolve_params
from util.utils import config_section, load_config

from .runner.hosts import ResizeListener, SphereHost
from .runner.utils import resolve_fps, resolve_show_hud, resolve_window_size

logger = logging.getLogger(__name__)


class SphereBackground:
    """取り付け済みの背景アニメーション（シーン・フレームクロック・リサイズリスナの束）。"""

    def __init__(
        self,
        scene: NeuralSphereScene,
        clock: FrameClock,
        host: SphereHost,
        listener: ResizeListener,
    ):
        self.scene = scene
        self.clock = clock
        self._host = host
        self._listener = listener
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """フレームループを止め、リサイズリスナを外す（冪等）。"""
        if self._closed:
            return
        self._closed = True
        self.clock.stop()
        self._host.remove_resize_listener(self._listener)
        logger.debug("sphere background closed after %d frames", self.clock.frames)


def mount(
    host: SphereHost,
    params: SphereParams | None = None,
    *,
    extra_tickables: Sequence[Tickable] = (),
) -> SphereBackground | None:
    """ホストに背景アニメーションを取り付けて開始する。

    描画面（またはそのコンテキスト）が利用できない場合は、ノード生成・ループ開始・
    リスナ登録のいずれも行わずに None を返す。

    Parameters
    ----------
    host : SphereHost
        描画面/サイズ/画素比/スケジューラの供給元。
    params : SphereParams | None
        演出パラメータ。None で既定値。
    extra_tickables : Sequence[Tickable]
        シーンの後に毎フレーム呼ぶ追加コンポーネント（メトリクス等）。
    """
    surface = host.create_surface()
    if surface is None:
        logger.debug("drawing surface unavailable; sphere background disabled")
        return None

    scene = NeuralSphereScene(surface, params)
    width, height = host.size
    scene.resize(width, height, host.pixel_ratio)

    def _on_resize(w: int, h: int) -> None:
        scene.resize(w, h, host.pixel_ratio)

    host.add_resize_listener(_on_resize)
    clock = FrameClock([scene, *extra_tickables], host.scheduler)
    clock.start()
    return SphereBackground(scene, clock, host, _on_resize)


def run(
    *,
    width: int | None = None,
    height: int | None = None,
    fps: int | None = None,
    background: Any = None,
    show_hud: bool | None = None,
    init_only: bool = False,
    **param_overrides: Any,
) -> SphereParams | None:
    """ウィンドウを開き、球面ネットワーク背景を実行する（ブロッキング）。

    Parameters
    ----------
    width, height : int | None
        ウィンドウの論理サイズ [px]。None で設定 `canvas.width/height`、なければ 1280x720。
    fps : int | None
        フレームレート。None で `NSP_FPS` → 設定 `canvas_controller.fps` → 60。
    background : str | tuple | None
        背景色（Hex または RGB(A)）。None で設定/白。
    show_hud : bool | None
        メトリクス HUD の表示。None で `NSP_SHOW_HUD` → 設定 `hud.enabled`。
    init_only : bool
        True で設定解決のみ行い、pyglet を import せずに解決済みパラメータを返す。
    **param_overrides
        `SphereParams` のフィールド上書き（例: `node_count=240`）。

    Returns
    -------
    SphereParams | None
        `init_only=True` のときのみ解決済みパラメータ。
    """
    settings = get_settings()
    setup_default_logging(settings.LOG_LEVEL)

    cfg = load_config()
    fps = resolve_fps(fps, cfg)
    window_width, window_height = resolve_window_size(width, height, cfg)
    if background is None:
        background = config_section("canvas", cfg).get("background_color")
    if background is not None:
        param_overrides["background"] = background
    params = resolve_params(config_section("sphere", cfg), **param_overrides)
    hud_enabled = resolve_show_hud(show_hud, cfg)

    if init_only:
        return params

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.render_window import RenderWindow
    from engine.core.scheduler import PygletFrameScheduler
    from engine.export.image import save_png

    from .runner.hosts import WindowHost

    window = RenderWindow(window_width, window_height, bg_color=params.background)
    host = WindowHost(window, PygletFrameScheduler(fps))

    overlay = None
    extra: list[Tickable] = []
    # シーン生成前に HUD を組めないため、統計の参照は遅延させる
    scene_ref: list[NeuralSphereScene] = []
    if hud_enabled:
        from engine.monitor.sampler import MetricSampler
        from engine.ui.hud.overlay import OverlayHUD

        sampler = MetricSampler(
            lambda: scene_ref[0].frame_stats(), interval=settings.METRICS_INTERVAL
        )
        overlay = OverlayHUD(window, sampler)
        extra = [sampler, overlay]

    sphere = mount(host, params, extra_tickables=extra)
    if sphere is None:
        logger.warning("no drawing context available; nothing to run")
        window.close()
        return None
    scene_ref.append(sphere.scene)
    if overlay is not None:
        window.add_draw_callback(overlay.draw)
    logger.info(
        "neurosphere running: %dx%d @%d fps, %d nodes",
        window_width,
        window_height,
        fps,
        len(sphere.scene.network),
    )

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            window.close()
        if sym == key.P:
            try:
                p = save_png(window)
            except RuntimeError as e:
                logger.error("%s", e)
                if overlay is not None:
                    overlay.show_message(str(e), level="error")
                return
            if overlay is not None:
                overlay.show_message(f"Saved PNG: {p}")

    @window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        sphere.close()
        pyglet.app.exit()

    pyglet.app.run()
    logger.info("neurosphere stopped")
    return None


__all__ = ["SphereBackground", "mount", "run"]
