# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Error taxonomy for palette generation.

Every failure the engine can report derives from PaletteError, so batch
orchestration can capture per-item failures without catching programming
errors (TypeError, AttributeError, ...).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class PaletteError(Exception):
    """Base class for all bpcolor errors."""


class ColorParseError(PaletteError, ValueError):
    """A color string could not be parsed."""

    def __init__(self, input: str, reason: str) -> None:
        self.input = input
        self.reason = reason
        super().__init__(f"Cannot parse color {input!r}: {reason}")


class ConversionError(PaletteError):
    """A color-space conversion or gamut operation produced no valid result."""

    def __init__(
        self,
        from_space: str,
        to_space: str,
        color: Any,
        reason: str,
    ) -> None:
        self.from_space = from_space
        self.to_space = to_space
        self.color = color
        self.reason = reason
        super().__init__(
            f"Cannot convert {from_space} -> {to_space} for {color!r}: {reason}"
        )


class TransformationError(PaletteError):
    """An optical transform lost the target's hue information."""

    def __init__(self, reference: Any, target: Any, reason: str) -> None:
        self.reference = reference
        self.target = target
        self.reason = reason
        super().__init__(reason)


class PatternExtractionError(PaletteError):
    """Example palettes were empty or missing the reference stop."""

    def __init__(self, reason: str, palette_count: int) -> None:
        self.reason = reason
        self.palette_count = palette_count
        super().__init__(f"{reason} (palettes: {palette_count})")


class InterpolationError(PaletteError):
    """Pattern smoothing could not compute a value."""


class PatternLoadError(PaletteError):
    """A pattern source could not be read, decoded or validated."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load pattern from {source}: {reason}")


class GeneratePaletteError(PaletteError):
    """Palette generation failed for a specific input color."""


class TransformColorError(PaletteError):
    """A reference -> target transformation failed."""


class BatchGenerationError(PaletteError):
    """Every item in a batch failed."""

    def __init__(
        self,
        message: str,
        failures: Optional[Sequence[Any]] = None,
    ) -> None:
        self.failures = tuple(failures or ())
        super().__init__(message)


class SyntaxParseError(PaletteError, ValueError):
    """Compact input syntax (color::stop, ref>target::stop) was malformed."""

    def __init__(self, input: str, reason: str) -> None:
        self.input = input
        self.reason = reason
        super().__init__(f"Invalid input {input!r}: {reason}")


def describe(error: BaseException) -> str:
    """
    Render an error with its cause chain for end-user display.

    "Failed to generate palette for zzz: Cannot parse color 'zzz': ..."
    """
    parts = [str(error)]
    cause = error.__cause__
    while cause is not None:
        text = str(cause)
        if text and text not in parts:
            parts.append(text)
        cause = cause.__cause__
    return ": ".join(parts)
