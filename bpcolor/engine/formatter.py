# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Render OKLCH colors as CSS-style strings.

    hex    #2D72D2
    rgb    rgb(45, 114, 210)            rgba(45, 114, 210, 0.5)
    oklch  oklch(56.03% 0.163 257.6)    oklch(56.03% 0.163 257.6 / 0.5)
    oklab  oklab(56.03% -0.035 -0.160)
"""

from __future__ import annotations

import math

from bpcolor.engine.colorspace import normalize_hue, to_hex, to_oklab, to_rgb
from bpcolor.schema.color import ColorSpace, OKLCHColor


def _fixed(value: float, digits: int) -> str:
    """Fixed-point text without a "-0.000" artifact."""
    rounded = round(value, digits)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:.{digits}f}"


def _alpha_suffix(alpha: float) -> str:
    return "" if alpha >= 1.0 else f" / {round(alpha, 3):g}"


def format_color(color: OKLCHColor, space: ColorSpace) -> str:
    """
    Format a color in the given output space.

    Raises:
        ConversionError: If the color cannot be converted
    """
    space = ColorSpace.parse(space)

    if space is ColorSpace.HEX:
        return to_hex(color)

    if space is ColorSpace.RGB:
        r, g, b, alpha = to_rgb(color)
        if alpha < 1.0:
            return f"rgba({r}, {g}, {b}, {round(alpha, 3):g})"
        return f"rgb({r}, {g}, {b})"

    if space is ColorSpace.OKLCH:
        hue = 0.0 if math.isnan(color.H) else normalize_hue(color.H)
        return (
            f"oklch({_fixed(color.L * 100, 2)}% {_fixed(color.C, 3)} "
            f"{_fixed(hue, 1)}{_alpha_suffix(color.alpha)})"
        )

    L, a, b, alpha = to_oklab(color)
    return (
        f"oklab({_fixed(L * 100, 2)}% {_fixed(a, 3)} {_fixed(b, 3)}"
        f"{_alpha_suffix(alpha)})"
    )
