"""
どこで: `api.cli`。
何を: コマンドライン入口（`neurosphere` / `python main.py`）。引数を `api.background.run` へ渡す。
なぜ: 設定ファイルを編集せずに、サイズ/FPS/ノード数などを試せるようにするため。
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from .background import run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="neurosphere", description="Rotating neural-network sphere background."
    )
    p.add_argument("--width", type=int, default=None, help="window width [px]")
    p.add_argument("--height", type=int, default=None, help="window height [px]")
    p.add_argument("--fps", type=int, default=None, help="frames per second")
    p.add_argument("--nodes", type=int, default=None, help="number of sphere nodes")
    p.add_argument("--background", default=None, help="background color (#RRGGBB)")
    p.add_argument("--facing", choices=("negative", "positive"), default=None)
    p.add_argument("--hud", action="store_true", default=None, help="show metrics HUD")
    p.add_argument(
        "--check", action="store_true", help="resolve configuration and exit (no window)"
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    overrides: dict[str, Any] = {}
    if args.nodes is not None:
        overrides["node_count"] = args.nodes
    if args.facing is not None:
        overrides["facing"] = args.facing
    result = run(
        width=args.width,
        height=args.height,
        fps=args.fps,
        background=args.background,
        show_hud=args.hud,
        init_only=args.check,
        **overrides,
    )
    if args.check and result is not None:
        print(result)
    return 0


__all__ = ["build_parser", "main"]
