# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Palette, pattern and result schemas.

Design principles:
- Immutable: All types are frozen dataclasses
- Closed stop domain: per-stop data lives in a 10-slot tuple indexed by
  stop_index(), never in an open mapping
- Serializable: JSON-ready for export

Stops run from 100 (lightest) to 1000 (darkest). Stop 500 is the
reference stop: every pattern ratio is expressed relative to it.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Optional

from bpcolor.schema.color import ColorSpace, OKLCHColor


# =============================================================================
# Stop Positions
# =============================================================================


class StopPosition(IntEnum):
    """One of the ten palette stops."""
    STOP_100 = 100
    STOP_200 = 200
    STOP_300 = 300
    STOP_400 = 400
    STOP_500 = 500
    STOP_600 = 600
    STOP_700 = 700
    STOP_800 = 800
    STOP_900 = 900
    STOP_1000 = 1000

    @classmethod
    def parse(cls, value: int | str) -> StopPosition:
        """Accept 500, "500" or " 500 "; reject anything off the grid."""
        try:
            number = int(str(value).strip()) if isinstance(value, str) else int(value)
            return cls(number)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid stop position {value!r}: must be one of 100, 200, ..., 1000"
            ) from None


STOP_POSITIONS: tuple[StopPosition, ...] = tuple(StopPosition)

REFERENCE_STOP = StopPosition.STOP_500

LIGHTEST_STOP = StopPosition.STOP_100
DARKEST_STOP = StopPosition.STOP_1000


def stop_index(position: int) -> int:
    """Slot of a stop in a 10-entry tuple: 100 -> 0, ..., 1000 -> 9."""
    return int(StopPosition(position)) // 100 - 1


# =============================================================================
# Pattern Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class StopTransform:
    """
    Ratio of one stop to the reference stop.

    Attributes:
        lightness_multiplier: stop.L / reference.L
        chroma_multiplier: stop.C / reference.C
        hue_shift: Signed degrees from the reference hue to the stop hue
    """
    lightness_multiplier: float
    chroma_multiplier: float
    hue_shift: float = 0.0

    def __post_init__(self) -> None:
        for label, value in (
            ("Lightness multiplier", self.lightness_multiplier),
            ("Chroma multiplier", self.chroma_multiplier),
        ):
            if not value >= 0.0 or math.isinf(value):
                raise ValueError(f"{label} must be a finite value >= 0, got {value}")
        if not math.isfinite(self.hue_shift):
            raise ValueError(f"Hue shift must be finite, got {self.hue_shift}")

    @classmethod
    def identity(cls) -> StopTransform:
        """The transform of the reference stop onto itself."""
        return cls(lightness_multiplier=1.0, chroma_multiplier=1.0, hue_shift=0.0)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "lightness_multiplier": self.lightness_multiplier,
            "chroma_multiplier": self.chroma_multiplier,
            "hue_shift": self.hue_shift,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StopTransform:
        """Deserialize from dictionary."""
        return cls(
            lightness_multiplier=data["lightness_multiplier"],
            chroma_multiplier=data["chroma_multiplier"],
            hue_shift=data.get("hue_shift", 0.0),
        )


@dataclass(frozen=True, slots=True)
class PatternMetadata:
    """
    Provenance of a pattern.

    Attributes:
        source_count: Number of example palettes the pattern was learned from
        confidence: Agreement between the sources (0.0-1.0)
    """
    source_count: int
    confidence: float

    def __post_init__(self) -> None:
        if self.source_count < 1:
            raise ValueError(f"Source count must be >= 1, got {self.source_count}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0-1, got {self.confidence}")

    def to_dict(self) -> dict:
        return {"source_count": self.source_count, "confidence": self.confidence}

    @classmethod
    def from_dict(cls, data: dict) -> PatternMetadata:
        return cls(source_count=data["source_count"], confidence=data["confidence"])


@dataclass(frozen=True, slots=True)
class TransformationPattern:
    """
    Per-stop ratios learned from example palettes.

    Built by the extractor, replaced (never mutated) by the smoother, and
    shared read-only by every generation task.

    Attributes:
        name: Pattern name; smoothed patterns end in "-smoothed"
        reference_stop: Stop whose multipliers are fixed at 1.0
        transforms: Exactly 10 StopTransform, indexed by stop_index()
        metadata: Source count and confidence
    """
    name: str
    reference_stop: StopPosition
    transforms: tuple[StopTransform, ...]
    metadata: PatternMetadata

    def __post_init__(self) -> None:
        """Validate pattern structure."""
        if not self.name:
            raise ValueError("Pattern name cannot be empty")
        StopPosition(self.reference_stop)
        if len(self.transforms) != len(STOP_POSITIONS):
            raise ValueError(
                f"Pattern requires {len(STOP_POSITIONS)} transforms, "
                f"got {len(self.transforms)}"
            )

    def transform_at(self, position: int) -> StopTransform:
        """Transform for one stop."""
        return self.transforms[stop_index(position)]

    def to_dict(self) -> dict:
        """Serialize to dictionary (transforms keyed by stop)."""
        return {
            "name": self.name,
            "reference_stop": int(self.reference_stop),
            "transforms": {
                str(int(position)): transform.to_dict()
                for position, transform in zip(STOP_POSITIONS, self.transforms)
            },
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> TransformationPattern:
        """Deserialize from dictionary."""
        raw = data["transforms"]
        return cls(
            name=data["name"],
            reference_stop=StopPosition.parse(data.get("reference_stop", 500)),
            transforms=tuple(
                StopTransform.from_dict(raw[str(int(position))])
                for position in STOP_POSITIONS
            ),
            metadata=PatternMetadata.from_dict(data["metadata"]),
        )


# =============================================================================
# Palettes
# =============================================================================


@dataclass(frozen=True, slots=True)
class PaletteStop:
    """A single stop in a palette."""
    position: StopPosition
    color: OKLCHColor

    def to_dict(self) -> dict:
        return {"position": int(self.position), "color": self.color.to_dict()}


@dataclass(frozen=True, slots=True)
class Palette:
    """
    A complete palette: exactly 10 stops, 100 through 1000 in order.

    Attributes:
        name: Human-readable palette name
        stops: Tuple of PaletteStop ordered by position
    """
    name: str
    stops: tuple[PaletteStop, ...]

    def __post_init__(self) -> None:
        """Validate palette structure."""
        if not self.name:
            raise ValueError("Palette name cannot be empty")
        positions = tuple(int(s.position) for s in self.stops)
        if positions != tuple(int(p) for p in STOP_POSITIONS):
            raise ValueError(
                f"Palette must have exactly 10 stops (positions 100-1000), "
                f"got {positions}"
            )

    def color_at(self, position: int) -> OKLCHColor:
        """Color of one stop."""
        return self.stops[stop_index(position)].color

    def to_dict(self) -> dict:
        return {"name": self.name, "stops": [s.to_dict() for s in self.stops]}

    @classmethod
    def from_example(cls, data: dict) -> Palette:
        """
        Parse an example palette in its storage shape.

        Example palettes are stored with hex colors for easier editing::

            {
              "name": "example-blue",
              "description": "optional",
              "stops": [{"position": 100, "hex": "#E6F1FF"}, ...]
            }

        Stops may appear in any order; all 10 positions are required.

        Raises:
            ValueError: If the shape, a position or a hex value is invalid
        """
        from bpcolor.engine.colorspace import from_hex

        if not isinstance(data, dict):
            raise ValueError(f"Example palette must be an object, got {type(data).__name__}")
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("Example palette requires a non-empty 'name'")
        raw_stops = data.get("stops")
        if not isinstance(raw_stops, list) or len(raw_stops) != len(STOP_POSITIONS):
            raise ValueError("Example palette must have exactly 10 stops")

        by_position: dict[StopPosition, OKLCHColor] = {}
        for entry in raw_stops:
            if not isinstance(entry, dict) or "position" not in entry or "hex" not in entry:
                raise ValueError(f"Invalid stop entry: {entry!r}")
            position = StopPosition.parse(entry["position"])
            if position in by_position:
                raise ValueError(f"Duplicate stop position {int(position)}")
            by_position[position] = from_hex(str(entry["hex"]))

        return cls(
            name=name,
            stops=tuple(PaletteStop(p, by_position[p]) for p in STOP_POSITIONS),
        )


# =============================================================================
# Requests
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorStopPair:
    """An input color paired with the stop it represents."""
    color: str
    stop: StopPosition

    def __post_init__(self) -> None:
        # Off-grid stops are rejected here, before any batch starts
        object.__setattr__(self, "stop", StopPosition.parse(self.stop))


@dataclass(frozen=True, slots=True)
class TransformationRequest:
    """reference>target::stop"""
    reference: str
    target: str
    stop: StopPosition
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stop", StopPosition.parse(self.stop))


@dataclass(frozen=True, slots=True)
class ManyTransformationRequest:
    """reference>(t1,t2,...)::stop"""
    reference: str
    targets: tuple[str, ...]
    stop: StopPosition
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.targets:
            raise ValueError("One-to-many transformation requires at least one target")
        object.__setattr__(self, "stop", StopPosition.parse(self.stop))


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class FormattedStop:
    """A palette stop with its value rendered in the requested format."""
    position: StopPosition
    color: OKLCHColor
    value: str

    def to_dict(self) -> dict:
        return {
            "position": int(self.position),
            "color": self.color.to_dict(),
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class StopFailure:
    """
    A stop whose gamut clamp collapsed a nonzero chroma to 0.

    The stop still carries the clamped (achromatic) color; this record
    tells the caller its hue was lost.
    """
    position: StopPosition
    reason: str

    def to_dict(self) -> dict:
        return {"position": int(self.position), "reason": self.reason}


@dataclass(frozen=True, slots=True)
class PaletteResult:
    """
    A generated palette with formatted stop values.

    Attributes:
        name: Palette name
        input_color: The anchor color string exactly as supplied
        anchor_stop: The stop the input color was declared to represent
        output_format: Format of every stop's value
        stops: Exactly 10 FormattedStop ordered by position
        stop_failures: Stops whose hue was lost to gamut clamping
    """
    name: str
    input_color: str
    anchor_stop: StopPosition
    output_format: ColorSpace
    stops: tuple[FormattedStop, ...]
    stop_failures: tuple[StopFailure, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Palette name cannot be empty")
        if len(self.stops) != len(STOP_POSITIONS):
            raise ValueError(
                f"Palette result must have exactly 10 stops, got {len(self.stops)}"
            )

    @property
    def values(self) -> dict[int, str]:
        """Formatted value per stop position."""
        return {int(s.position): s.value for s in self.stops}

    def value_at(self, position: int) -> str:
        return self.stops[stop_index(position)].value

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "input_color": self.input_color,
            "anchor_stop": int(self.anchor_stop),
            "output_format": self.output_format.value,
            "stops": [s.to_dict() for s in self.stops],
        }
        if self.stop_failures:
            result["stop_failures"] = [f.to_dict() for f in self.stop_failures]
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True, slots=True)
class GenerationFailure:
    """A batch item that produced no palette."""
    color: str
    stop: StopPosition
    error: str

    def to_dict(self) -> dict:
        return {"color": self.color, "stop": int(self.stop), "error": self.error}


@dataclass(frozen=True, slots=True)
class BatchResult:
    """
    Terminal output of a batch invocation.

    A batch with at least one success is a result, even when some items
    failed; failures are reported alongside the palettes.

    Attributes:
        group_name: Name of the batch
        output_format: Format shared by every palette
        generated_at: When the result was assembled (timezone-aware)
        palettes: Non-empty tuple of PaletteResult, in input order
        failures: Tuple of GenerationFailure, in input order
    """
    group_name: str
    output_format: ColorSpace
    generated_at: datetime
    palettes: tuple[PaletteResult, ...]
    failures: tuple[GenerationFailure, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.group_name:
            raise ValueError("Group name cannot be empty")
        if not self.palettes:
            raise ValueError("Batch result requires at least one palette")

    @property
    def is_partial(self) -> bool:
        """True when some items failed."""
        return bool(self.failures)

    def to_dict(self) -> dict:
        return {
            "group_name": self.group_name,
            "output_format": self.output_format.value,
            "generated_at": self.generated_at.isoformat(),
            "palettes": [p.to_dict() for p in self.palettes],
            "failures": [f.to_dict() for f in self.failures],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
