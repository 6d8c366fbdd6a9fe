# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Canonical color type.

OKLCH Color Space:
- L (Lightness): 0.0 = black, 1.0 = white
- C (Chroma): 0.0 = gray, ~0.32 = max saturation in sRGB
- H (Hue): degrees, any range; normalized to [0, 360) wherever it is used.
  NaN marks an undefined hue.

RGB, hex and OKLab are derived views computed by bpcolor.engine.colorspace.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class OKLCHColor:
    """
    A single color in OKLCH color space.

    Hue carries no visual meaning when chroma is 0. Transformations treat
    such a color as expressing no hue preference.

    Attributes:
        L: Lightness (0.0 = black, 1.0 = white)
        C: Chroma (0.0 = neutral gray)
        H: Hue in degrees (NaN when undefined)
        alpha: Opacity (0.0 = transparent, 1.0 = opaque)
    """
    L: float
    C: float
    H: float = 0.0
    alpha: float = 1.0

    def __post_init__(self) -> None:
        """Validate color values are within expected ranges."""
        if not 0.0 <= self.L <= 1.0:
            raise ValueError(f"Lightness must be 0-1, got {self.L}")
        if not self.C >= 0.0 or math.isinf(self.C):
            raise ValueError(f"Chroma must be a finite value >= 0, got {self.C}")
        if math.isinf(self.H):
            raise ValueError(f"Hue must be finite or NaN, got {self.H}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"Alpha must be 0-1, got {self.alpha}")

    @property
    def is_achromatic(self) -> bool:
        """True if the color has no hue (zero chroma or undefined hue)."""
        return self.C == 0.0 or math.isnan(self.H)

    @property
    def hex(self) -> str:
        """Hex string like "#2D72D2" (alpha appended when < 1)."""
        from bpcolor.engine.colorspace import to_hex
        return to_hex(self)

    def to_dict(self) -> dict:
        """Serialize to dictionary. An undefined hue becomes None."""
        return {
            "L": self.L,
            "C": self.C,
            "H": None if math.isnan(self.H) else self.H,
            "alpha": self.alpha,
        }

    @classmethod
    def from_dict(cls, data: dict) -> OKLCHColor:
        """Deserialize from dictionary."""
        hue = data.get("H")
        return cls(
            L=data["L"],
            C=data["C"],
            H=math.nan if hue is None else hue,
            alpha=data.get("alpha", 1.0),
        )


class ColorSpace(Enum):
    """Textual output representations for generated stops."""
    HEX = "hex"      # #2D72D2
    RGB = "rgb"      # rgb(45, 114, 210)
    OKLCH = "oklch"  # oklch(56.03% 0.163 257.6)
    OKLAB = "oklab"  # oklab(56.03% -0.035 -0.160)

    @classmethod
    def parse(cls, value: str | ColorSpace) -> ColorSpace:
        """Look up a color space by name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Invalid color space {value!r}. Must be one of: {valid}"
            ) from None
