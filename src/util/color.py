"""
どこで: `util.color`。
何を: 色指定の正規化（Hex, RGBA 0–1, RGB 0–255）と、明度/不透明度の合成ヘルパ。
なぜ: 設定ファイル・シーン・描画バックエンドで同一の受理仕様を共有するため。
"""

from __future__ import annotations

from typing import Sequence

from common.types import RGBA


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "RRGGBB", "RRGGBBAA"（大文字/小文字は不問）。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 文字列は Hex として解釈する。
    - 3/4 要素の数値列は、いずれかの要素が 1 を超えれば 0–255 表記とみなす。
      アルファは常に 0–1 表記（CSS の `rgba()` と同じ）。
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(value) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        rgb = [float(c) for c in value[:3]]
        a = float(value[3]) if len(value) == 4 else 1.0
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if any(c > 1.0 for c in rgb):
        rgb = [c / 255.0 for c in rgb]
    r, g, b = (_clamp01(c) for c in rgb)
    return (r, g, b, _clamp01(a))


def shade(color: Sequence[float], brightness: float, alpha: float) -> RGBA:
    """RGB に明度係数を掛け、アルファを差し替えた RGBA を返す（結果は 0–1 にクランプ）。"""
    r, g, b = color[0], color[1], color[2]
    return (
        _clamp01(r * brightness),
        _clamp01(g * brightness),
        _clamp01(b * brightness),
        _clamp01(alpha),
    )


def with_alpha(color: Sequence[float], alpha: float) -> RGBA:
    """RGB はそのままにアルファのみ差し替える。"""
    return shade(color, 1.0, alpha)


def to_u8_rgba(value: Sequence[float]) -> tuple[int, int, int, int]:
    """RGBA(0–1) を RGBA(0–255) の int へ変換する。"""
    r, g, b, a = value
    return (
        int(round(_clamp01(r) * 255)),
        int(round(_clamp01(g) * 255)),
        int(round(_clamp01(b) * 255)),
        int(round(_clamp01(a) * 255)),
    )


__all__ = [
    "parse_hex_color_str",
    "normalize_color",
    "shade",
    "with_alpha",
    "to_u8_rgba",
]
