# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""Shared fixtures: the example palette file and hand-built patterns."""

from pathlib import Path

import pytest

from bpcolor.runtime.loader import clear_cache, load_palette, load_pattern
from bpcolor.schema.palette import (
    REFERENCE_STOP,
    PatternMetadata,
    StopTransform,
    TransformationPattern,
)

FIXTURES = Path(__file__).parent / "fixtures"
EXAMPLE_BLUE = FIXTURES / "example-blue.json"

# Lightness 1.8x at stop 100 down to 0.3x at stop 1000
RAMP_LIGHTNESS = (1.8, 1.6, 1.4, 1.2, 1.0, 0.85, 0.7, 0.55, 0.4, 0.3)
RAMP_CHROMA = (0.3, 0.5, 0.7, 0.9, 1.0, 1.0, 0.95, 0.9, 0.85, 0.8)


def make_pattern(lightness, chroma, hue=None, name="test-pattern"):
    """Build a pattern from per-stop multiplier sequences."""
    hue = hue or (0.0,) * 10
    return TransformationPattern(
        name=name,
        reference_stop=REFERENCE_STOP,
        transforms=tuple(
            StopTransform(lightness_multiplier=l, chroma_multiplier=c, hue_shift=h)
            for l, c, h in zip(lightness, chroma, hue)
        ),
        metadata=PatternMetadata(source_count=1, confidence=0.8),
    )


@pytest.fixture(autouse=True)
def _fresh_pattern_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def example_path():
    return str(EXAMPLE_BLUE)


@pytest.fixture
def example_palette():
    return load_palette(EXAMPLE_BLUE)


@pytest.fixture
def example_pattern():
    return load_pattern(EXAMPLE_BLUE)


@pytest.fixture
def ramp_pattern():
    return make_pattern(RAMP_LIGHTNESS, RAMP_CHROMA)


@pytest.fixture
def static_loader(ramp_pattern):
    """LoadPattern that ignores the source and counts its calls."""
    calls = []

    def load(source):
        calls.append(source)
        return ramp_pattern

    load.calls = calls
    return load
