"""
どこで: `common.settings`
何を: プロジェクトの環境変数（`NSP_*`）を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

None は「環境変数で上書きしない」を表す（設定ファイル/既定値を尊重する）。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # Scene
    NODE_COUNT: int | None = None
    FACING: str | None = None

    # Runner
    FPS: int | None = None
    LOG_LEVEL: str = "INFO"

    # Monitor
    SHOW_HUD: bool = False
    METRICS_INTERVAL: float = 0.5


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - 下限を下回る値は丸める。
    """
    _settings.NODE_COUNT = env_int("NSP_NODE_COUNT", None, min_value=0)
    _settings.FACING = env_str("NSP_FACING", None)

    fps = env_int("NSP_FPS", None)
    _settings.FPS = max(1, fps) if fps is not None else None
    _settings.LOG_LEVEL = env_str("NSP_LOG_LEVEL", "INFO") or "INFO"

    _settings.SHOW_HUD = env_bool("NSP_SHOW_HUD", False)
    interval = env_float("NSP_METRICS_INTERVAL", 0.5) or 0.5
    _settings.METRICS_INTERVAL = interval if interval > 0.0 else 0.5


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
