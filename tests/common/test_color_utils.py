from __future__ import annotations

import pytest

from util.color import normalize_color, parse_hex_color_str, shade, to_u8_rgba, with_alpha


def _approx_tuple(t):
    return tuple(round(v, 6) for v in t)


def test_parse_hex_color_valid_variants() -> None:
    assert _approx_tuple(parse_hex_color_str("#5B3DF5")) == (
        round(91 / 255.0, 6),
        round(61 / 255.0, 6),
        round(245 / 255.0, 6),
        1.0,
    )
    assert _approx_tuple(parse_hex_color_str("112233cc")) == (
        round(0x11 / 255.0, 6),
        round(0x22 / 255.0, 6),
        round(0x33 / 255.0, 6),
        round(0xCC / 255.0, 6),
    )


def test_parse_hex_color_invalid() -> None:
    with pytest.raises(ValueError):
        parse_hex_color_str("#123")
    with pytest.raises(ValueError):
        parse_hex_color_str("not-a-color")


def test_normalize_color_from_tuple_01() -> None:
    assert _approx_tuple(normalize_color((0.1, 0.2, 0.3))) == (0.1, 0.2, 0.3, 1.0)


def test_normalize_color_from_tuple_255_keeps_unit_alpha() -> None:
    rgba = normalize_color([147, 51, 234, 0.5])
    assert _approx_tuple(rgba) == (
        round(147 / 255.0, 6),
        round(51 / 255.0, 6),
        round(234 / 255.0, 6),
        0.5,
    )


@pytest.mark.parametrize("bad", [None, 3, (1, 2), ("a", "b", "c")])
def test_normalize_color_rejects(bad) -> None:
    with pytest.raises(ValueError):
        normalize_color(bad)


def test_shade_and_with_alpha_clamp() -> None:
    assert shade((0.5, 0.5, 1.0, 1.0), 0.4, 0.56) == pytest.approx((0.2, 0.2, 0.4, 0.56))
    assert shade((0.8, 0.8, 0.8), 2.0, 1.5) == (1.0, 1.0, 1.0, 1.0)
    assert with_alpha((0.1, 0.2, 0.3, 1.0), 0.25) == pytest.approx((0.1, 0.2, 0.3, 0.25))


def test_to_u8_rgba() -> None:
    assert to_u8_rgba(parse_hex_color_str("#FF00FF80")) == (255, 0, 255, 128)
    assert to_u8_rgba((0.0, 1.0, 0.5, 1.0)) == (0, 255, 128, 255)
