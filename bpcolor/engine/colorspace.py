# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Color space conversions and sRGB gamut enforcement.

Conversion chain: sRGB → Linear RGB → OKLab → OKLCH

References:
- OKLab: https://bottosson.github.io/posts/oklab/
- OKLCH: Cylindrical form of OKLab (Lightness, Chroma, Hue)

The array functions are pure NumPy and work on (..., 3) arrays. The scalar
helpers below them operate on OKLCHColor and raise ConversionError instead
of returning NaN.
"""

from __future__ import annotations

import math
import re
from dataclasses import replace
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from bpcolor.errors import ColorParseError, ConversionError, InterpolationError
from bpcolor.schema.color import OKLCHColor


# Chroma below this, when derived from RGB or OKLab, is rounding noise
ACHROMATIC_EPSILON = 1e-6

# Linear-RGB tolerance for the gamut test
GAMUT_EPSILON = 1e-6

# Chroma bisection for gamut mapping
CLAMP_RESOLUTION = 1e-5
CLAMP_MAX_ITERATIONS = 64


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    linear = np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.04045) + 0.055) / 1.055, 2.4)
    )
    return linear


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to sRGB values [0,1].

    Inverse of srgb_to_linear. Out-of-gamut values are clipped.
    """
    linear = np.asarray(linear, dtype=np.float64)
    # Clip negative values to avoid NaN in power function
    linear_safe = np.maximum(linear, 0.0)
    srgb = np.where(
        linear_safe <= 0.0031308,
        linear_safe * 12.92,
        1.055 * np.power(linear_safe, 1.0 / 2.4) - 0.055
    )
    return np.clip(srgb, 0.0, 1.0)


# =============================================================================
# Linear RGB ↔ OKLab
# =============================================================================

# Matrices from https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverse matrices
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_rgb_to_oklab(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)

    lms = np.einsum('...j,ij->...i', rgb, _M1)

    # Cube root (handle negative values for out-of-gamut colors)
    lms_cbrt = np.sign(lms) * np.abs(lms) ** (1.0 / 3.0)

    return np.einsum('...j,ij->...i', lms_cbrt, _M2)


def oklab_to_linear_rgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to linear RGB.

    The result is NOT clipped: channels outside [0, 1] mean the color lies
    outside the sRGB gamut.

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with linear RGB values
    """
    lab = np.asarray(lab, dtype=np.float64)

    lms_cbrt = np.einsum('...j,ij->...i', lab, _M2_INV)
    lms = lms_cbrt ** 3

    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH (cylindrical coordinates).

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H), H in [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0

    return np.stack([L, C, H], axis=-1)


def oklch_to_oklab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to OKLab.

    Args:
        lch: Array of shape (..., 3) with OKLCH values (L, C, H in degrees)
    """
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2])

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# Convenience: sRGB ↔ OKLCH (full chain)
# =============================================================================


def srgb_to_oklch(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to OKLCH.

    Full chain: sRGB → Linear RGB → OKLab → OKLCH
    """
    linear = srgb_to_linear(srgb)
    lab = linear_rgb_to_oklab(linear)
    return oklab_to_oklch(lab)


# =============================================================================
# Hue Arithmetic
# =============================================================================


def normalize_hue(hue: float) -> float:
    """
    Wrap a hue into [0, 360).

    normalize_hue(-90) == 270, normalize_hue(720) == 0
    """
    normalized = hue % 360.0
    # -1e-20 % 360 rounds to 360.0
    return 0.0 if normalized == 360.0 else normalized


def hue_difference(h1: float, h2: float) -> float:
    """
    Signed shortest angular distance from h1 to h2, in (-180, 180].

    hue_difference(350, 10) == 20, hue_difference(10, 350) == -20
    """
    diff = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return 180.0 if diff <= -180.0 else diff


def circular_mean(degrees: Iterable[float]) -> float:
    """
    Mean of angles, accounting for wraparound.

    Each angle becomes a unit vector; the vectors are averaged and the
    result converted back with atan2. circular_mean([-175, 175]) is 180,
    where a linear mean would give 0.

    Returns:
        Mean angle in (-180, 180]

    Raises:
        InterpolationError: If no angles are given
    """
    values = np.radians(np.fromiter(degrees, dtype=np.float64))
    if values.size == 0:
        raise InterpolationError("Cannot compute circular mean of an empty set")

    mean = float(np.degrees(np.arctan2(np.sin(values).mean(), np.cos(values).mean())))
    return 180.0 if mean <= -180.0 else mean


# =============================================================================
# Scalar Conversions on OKLCHColor
# =============================================================================


def _lch_array(color: OKLCHColor) -> NDArray[np.float64]:
    """OKLCH triple with an undefined hue mapped to 0."""
    hue = 0.0 if math.isnan(color.H) else color.H
    return np.array([color.L, color.C, hue], dtype=np.float64)


def _require_finite(values: NDArray[np.float64], color: object, to_space: str) -> None:
    if not np.all(np.isfinite(values)):
        raise ConversionError("oklch", to_space, color, "non-finite result")


def to_oklab(color: OKLCHColor) -> tuple[float, float, float, float]:
    """OKLCH → (L, a, b, alpha)."""
    lab = oklch_to_oklab(_lch_array(color))
    _require_finite(lab, color, "oklab")
    L, a, b = (float(v) for v in lab)
    return L, a, b, color.alpha


def from_oklab(L: float, a: float, b: float, alpha: float = 1.0) -> OKLCHColor:
    """
    OKLab → OKLCH.

    Chroma below ACHROMATIC_EPSILON is rounding noise and snaps to an
    exact 0 with hue 0.

    Raises:
        ConversionError: If the values are non-finite or L is outside [0, 1]
    """
    lab = np.array([L, a, b], dtype=np.float64)
    if not np.all(np.isfinite(lab)) or not math.isfinite(alpha):
        raise ConversionError("oklab", "oklch", (L, a, b, alpha), "non-finite input")
    if not -GAMUT_EPSILON <= L <= 1.0 + GAMUT_EPSILON:
        raise ConversionError("oklab", "oklch", (L, a, b, alpha), f"lightness {L} outside [0, 1]")

    lightness, chroma, hue = (float(v) for v in oklab_to_oklch(lab))
    if chroma < ACHROMATIC_EPSILON:
        chroma, hue = 0.0, 0.0
    return OKLCHColor(
        L=min(max(lightness, 0.0), 1.0),
        C=chroma,
        H=hue,
        alpha=min(max(alpha, 0.0), 1.0),
    )


def to_rgb(color: OKLCHColor) -> tuple[int, int, int, float]:
    """
    OKLCH → (r, g, b, alpha) with 0-255 integer channels.

    Out-of-gamut channels are clipped; clamp_to_gamut first for a
    perceptual mapping.
    """
    lab = oklch_to_oklab(_lch_array(color))
    linear = oklab_to_linear_rgb(lab)
    _require_finite(linear, color, "rgb")
    r, g, b = (int(v) for v in (linear_to_srgb(linear) * 255).round())
    return r, g, b, color.alpha


def from_rgb(r: float, g: float, b: float, alpha: float = 1.0) -> OKLCHColor:
    """
    sRGB channels (0-255) → OKLCH.

    Raises:
        ConversionError: If a channel is outside [0, 255] or non-finite
    """
    channels = np.array([r, g, b], dtype=np.float64)
    if not np.all(np.isfinite(channels)) or np.any((channels < 0) | (channels > 255)):
        raise ConversionError("rgb", "oklch", (r, g, b, alpha), "channels must be 0-255")

    linear = srgb_to_linear(channels / 255.0)
    L, a, b_ = (float(v) for v in linear_rgb_to_oklab(linear))
    return from_oklab(L, a, b_, alpha)


def to_hex(color: OKLCHColor) -> str:
    """
    OKLCH → "#RRGGBB", or "#RRGGBBAA" when alpha < 1.

    Raises:
        ConversionError: If the color cannot be represented
    """
    try:
        r, g, b, alpha = to_rgb(color)
    except ConversionError as e:
        raise ConversionError("oklch", "hex", color, e.reason) from e

    hex_color = f"#{r:02X}{g:02X}{b:02X}"
    if alpha < 1.0:
        hex_color += f"{int(round(alpha * 255)):02X}"
    return hex_color


_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def from_hex(hex_color: str) -> OKLCHColor:
    """
    Hex string → OKLCH.

    Accepts "#RGB", "#RGBA", "#RRGGBB", "#RRGGBBAA"; the hash is optional.

    Raises:
        ColorParseError: If the string is not a hex color
    """
    text = hex_color.strip()
    m = _HEX_RE.match(text)
    if not m:
        raise ColorParseError(hex_color, "not a hex color")

    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)

    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0

    return from_rgb(r, g, b, alpha)


# =============================================================================
# Color String Parsing
# =============================================================================

_FUNCTION_RE = re.compile(r"^(rgba?|oklch|oklab)\s*\((.*)\)$", re.IGNORECASE)

# CSS Color 4: 100% chroma / a / b corresponds to 0.4
_OK_PERCENT_SCALE = 0.4


def _split_arguments(body: str) -> tuple[list[str], str | None]:
    """Split "a, b, c" / "a b c / alpha" into components and optional alpha."""
    alpha = None
    if "/" in body:
        body, alpha = body.split("/", 1)
        alpha = alpha.strip()
    parts = [p for p in re.split(r"[\s,]+", body.strip()) if p]
    return parts, alpha


def _parse_number(token: str, percent_scale: float, source: str) -> float:
    token = token.strip().lower()
    try:
        if token.endswith("%"):
            return float(token[:-1]) / 100.0 * percent_scale
        return float(token)
    except ValueError:
        raise ColorParseError(source, f"invalid component {token!r}") from None


def _parse_hue(token: str, source: str) -> float:
    token = token.strip().lower()
    if token == "none":
        return math.nan
    if token.endswith("deg"):
        token = token[:-3]
    try:
        return float(token)
    except ValueError:
        raise ColorParseError(source, f"invalid hue {token!r}") from None


def _parse_alpha(token: str | None, source: str) -> float:
    if token is None:
        return 1.0
    alpha = _parse_number(token, 1.0, source)
    if not 0.0 <= alpha <= 1.0:
        raise ColorParseError(source, f"alpha {alpha} outside [0, 1]")
    return alpha


def parse_color(text: str) -> OKLCHColor:
    """
    Parse a color string into OKLCH.

    Supported forms:
        "#2D72D2", "2D72D2", "#2D72D2CC", "#fff"
        "rgb(45, 114, 210)", "rgba(45, 114, 210, 0.5)", "rgb(45 114 210 / 50%)"
        "oklch(0.57 0.15 259)", "oklch(57% 0.15 259deg / 0.8)"
        "oklab(0.57 -0.05 -0.14)"

    Raises:
        ColorParseError: If the string matches none of the forms or a
            component is out of range
    """
    if not isinstance(text, str) or not text.strip():
        raise ColorParseError(str(text), "empty color string")

    source = text
    text = text.strip()
    m = _FUNCTION_RE.match(text)
    if m is None:
        return from_hex(text)

    name = m.group(1).lower()
    parts, alpha_token = _split_arguments(m.group(2))
    if name.startswith("rgb") and alpha_token is None and len(parts) == 4:
        alpha_token = parts.pop()
    if len(parts) != 3:
        raise ColorParseError(source, f"{name}() takes 3 components, got {len(parts)}")
    alpha = _parse_alpha(alpha_token, source)

    try:
        if name.startswith("rgb"):
            r, g, b = (_parse_number(p, 255.0, source) for p in parts)
            return from_rgb(r, g, b, alpha)

        if name == "oklab":
            L = _parse_number(parts[0], 1.0, source)
            a = _parse_number(parts[1], _OK_PERCENT_SCALE, source)
            b = _parse_number(parts[2], _OK_PERCENT_SCALE, source)
            return from_oklab(L, a, b, alpha)

        L = _parse_number(parts[0], 1.0, source)
        C = _parse_number(parts[1], _OK_PERCENT_SCALE, source)
        H = _parse_hue(parts[2], source)
        return OKLCHColor(L=L, C=C, H=H, alpha=alpha)
    except (ConversionError, ValueError) as e:
        if isinstance(e, ColorParseError):
            raise
        raise ColorParseError(source, str(e)) from e


# =============================================================================
# Gamut
# =============================================================================


def is_displayable(color: OKLCHColor) -> bool:
    """True if the color maps into the sRGB gamut without clipping."""
    linear = oklab_to_linear_rgb(oklch_to_oklab(_lch_array(color)))
    if not np.all(np.isfinite(linear)):
        return False
    return bool(np.all((linear >= -GAMUT_EPSILON) & (linear <= 1.0 + GAMUT_EPSILON)))


def clamp_to_gamut(color: OKLCHColor) -> OKLCHColor:
    """
    Perceptual gamut mapping into sRGB.

    Lightness, hue and alpha are kept; chroma is bisected down to the
    largest displayable value. Displayable input is returned unchanged.

    Raises:
        ConversionError: If the search does not end on a displayable color
    """
    if is_displayable(color):
        return color

    gray = replace(color, C=0.0)
    if not is_displayable(gray):
        raise ConversionError("oklch", "oklch", color, "no displayable chroma at this lightness")

    low, high = 0.0, color.C
    for _ in range(CLAMP_MAX_ITERATIONS):
        if high - low <= CLAMP_RESOLUTION:
            break
        mid = (low + high) / 2.0
        if is_displayable(replace(color, C=mid)):
            low = mid
        else:
            high = mid

    clamped = replace(color, C=low)
    if not is_displayable(clamped):
        raise ConversionError("oklch", "oklch", color, "gamut clamping did not converge")
    return clamped


# =============================================================================
# ΔE Distance (Perceptual Color Difference)
# =============================================================================


def delta_e(color1: OKLCHColor, color2: OKLCHColor) -> float:
    """
    Perceptual color difference (ΔE) as Euclidean distance in OKLab.

    Reference thresholds (OKLab Euclidean, 0-1 scale):
    - ΔE ≈ 0.02: barely perceptible
    - ΔE ≈ 0.04: noticeable difference
    - ΔE ≈ 0.08+: clearly different colors
    """
    lab1 = oklch_to_oklab(_lch_array(color1))
    lab2 = oklch_to_oklab(_lch_array(color2))
    return float(np.sqrt(np.sum((lab1 - lab2) ** 2)))
