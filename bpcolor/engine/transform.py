# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Optical appearance transfer.

Takes lightness and chroma from a reference color and applies them to a
target color's hue. The result looks as bright and as saturated as the
reference, in the target's hue family.

Example:
    blue  = OKLCHColor(L=0.57, C=0.15, H=259)
    green = OKLCHColor(L=0.62, C=0.18, H=140)
    apply_optical_appearance(blue, green)
    # OKLCHColor(L=0.57, C=0.15, H=140)
"""

from __future__ import annotations

import math

from bpcolor.engine.colorspace import clamp_to_gamut, is_displayable, normalize_hue
from bpcolor.errors import ConversionError, TransformationError
from bpcolor.schema.color import OKLCHColor


# Reference lightness outside this band leaves too little chroma room
MIN_VIABLE_LIGHTNESS = 0.05
MAX_VIABLE_LIGHTNESS = 0.95

# Largest fraction of chroma gamut clamping may remove from a viable transform
MAX_CHROMA_LOSS = 0.5


def _target_hue(target: OKLCHColor) -> float:
    return 0.0 if math.isnan(target.H) else normalize_hue(target.H)


def _candidate(reference: OKLCHColor, target: OKLCHColor) -> OKLCHColor:
    return OKLCHColor(
        L=reference.L,
        C=reference.C,
        H=_target_hue(target),
        alpha=reference.alpha,
    )


def apply_optical_appearance(reference: OKLCHColor, target: OKLCHColor) -> OKLCHColor:
    """
    Reference lightness and chroma, target hue.

    - Achromatic reference: chroma 0, target hue kept.
    - Achromatic target: the target expresses no hue, so the reference
      color is kept as is.
    - Out of gamut: chroma is reduced until the color fits sRGB.

    Raises:
        TransformationError: If gamut clamping reduces chroma to 0, losing
            the target's hue
        ConversionError: If gamut clamping fails
    """
    if reference.C == 0.0:
        return OKLCHColor(L=reference.L, C=0.0, H=_target_hue(target), alpha=reference.alpha)

    if target.is_achromatic:
        hue = 0.0 if math.isnan(reference.H) else normalize_hue(reference.H)
        return OKLCHColor(L=reference.L, C=reference.C, H=hue, alpha=reference.alpha)

    transformed = _candidate(reference, target)
    if is_displayable(transformed):
        return transformed

    clamped = clamp_to_gamut(transformed)
    if clamped.C == 0.0 and transformed.C > 0.0:
        raise TransformationError(
            reference,
            target,
            "Transformed color is out of gamut and clamping reduced chroma to 0, "
            "losing hue information",
        )
    return clamped


def is_transformation_viable(reference: OKLCHColor, target: OKLCHColor) -> bool:
    """
    Whether a transform keeps reasonable color fidelity.

    Near-black and near-white references are rejected outright; otherwise
    the transform is viable when gamut clamping removes less than half of
    the reference chroma.
    """
    if reference.L < MIN_VIABLE_LIGHTNESS or reference.L > MAX_VIABLE_LIGHTNESS:
        return False

    if reference.C == 0.0 and target.C == 0.0:
        return True

    candidate = _candidate(reference, target)
    if is_displayable(candidate):
        return True

    try:
        clamped = clamp_to_gamut(candidate)
    except ConversionError:
        return False

    chroma_loss = (reference.C - clamped.C) / reference.C if reference.C > 0 else 0.0
    return chroma_loss < MAX_CHROMA_LOSS
