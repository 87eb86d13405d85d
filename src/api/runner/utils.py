"""
どこで: `api.runner.utils`（純粋関数/小ヘルパ）。
何を: FPS・ウィンドウサイズ・HUD 有無を「明示引数 > 環境変数 > 設定ファイル > 既定」で解決する。
なぜ: `api.background` を薄く保ち、テスト容易性と再利用性を上げるため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import get as get_settings

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = (1280, 720)


def _section(cfg: Mapping[str, Any] | None, name: str) -> Mapping[str, Any]:
    section = cfg.get(name, {}) if isinstance(cfg, Mapping) else {}
    return section if isinstance(section, Mapping) else {}


def resolve_fps(
    requested_fps: int | None, cfg: Mapping[str, Any] | None = None, *, default: int = 60
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない値は `ValueError`）。
    - 次に `NSP_FPS`、続いて設定 `canvas_controller.fps`、最後に既定値。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid fps: {requested_fps!r}") from e
    env_fps = get_settings().FPS
    if env_fps is not None:
        return max(1, int(env_fps))
    raw = _section(cfg, "canvas_controller").get("fps", default)
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        logger.warning("invalid canvas_controller.fps=%r; using %d", raw, default)
        return max(1, int(default))


def resolve_window_size(
    width: int | None, height: int | None, cfg: Mapping[str, Any] | None = None
) -> tuple[int, int]:
    """ウィンドウの論理サイズ [px] を解決する（明示 > `canvas.width/height` > 既定）。"""
    canvas = _section(cfg, "canvas")
    dw, dh = DEFAULT_WINDOW_SIZE
    w = width if width is not None else canvas.get("width", dw)
    h = height if height is not None else canvas.get("height", dh)
    try:
        w_i, h_i = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid window size: {(w, h)!r}") from e
    if w_i <= 0 or h_i <= 0:
        raise ValueError(f"window size must be positive, got: {(w_i, h_i)}")
    return w_i, h_i


def resolve_show_hud(show_hud: bool | None, cfg: Mapping[str, Any] | None = None) -> bool:
    """HUD 表示の有無（明示 > `NSP_SHOW_HUD` > `hud.enabled` > False）。"""
    if show_hud is not None:
        return bool(show_hud)
    if get_settings().SHOW_HUD:
        return True
    return bool(_section(cfg, "hud").get("enabled", False))


__all__ = ["resolve_fps", "resolve_window_size", "resolve_show_hud", "DEFAULT_WINDOW_SIZE"]
