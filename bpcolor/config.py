# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Generator configuration.

Defaults can be overridden from the environment:

    PATTERN_SOURCE          path of the example palette JSON
                            (default: the bundled example-blue.json)
    DEFAULT_OUTPUT_FORMAT   hex | rgb | oklch | oklab
    DEFAULT_PALETTE_NAME    name of single palettes
    DEFAULT_BATCH_NAME      group name of batches
    MAX_CONCURRENCY         worker threads per batch
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from bpcolor.schema.color import ColorSpace


# Example palettes shipped inside the package
PALETTES_DIR = Path(__file__).resolve().parent / "palettes"

DEFAULT_PATTERN_SOURCE = str(PALETTES_DIR / "example-blue.json")
DEFAULT_PALETTE_NAME = "generated"
DEFAULT_BATCH_NAME = "batch"
DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Configuration for palette generation.

    Attributes:
        pattern_source: Example palette the pattern is learned from
        default_output_format: Output format when the caller gives none
        default_palette_name: Palette name when the caller gives none
        default_batch_name: Batch group name when the caller gives none
        max_concurrency: Upper bound on concurrent generation tasks
    """
    pattern_source: str = DEFAULT_PATTERN_SOURCE
    default_output_format: ColorSpace = ColorSpace.HEX
    default_palette_name: str = DEFAULT_PALETTE_NAME
    default_batch_name: str = DEFAULT_BATCH_NAME
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self):
        if not self.pattern_source:
            raise ValueError("pattern_source cannot be empty")
        if not self.default_palette_name:
            raise ValueError("default_palette_name cannot be empty")
        if not self.default_batch_name:
            raise ValueError("default_batch_name cannot be empty")
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {self.max_concurrency}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GeneratorConfig:
        """
        Build a config from environment variables, falling back to defaults.

        Raises:
            ValueError: If a variable holds an invalid value (the message
                names the variable)
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if env.get("PATTERN_SOURCE"):
            kwargs["pattern_source"] = env["PATTERN_SOURCE"]
        if env.get("DEFAULT_PALETTE_NAME"):
            kwargs["default_palette_name"] = env["DEFAULT_PALETTE_NAME"]
        if env.get("DEFAULT_BATCH_NAME"):
            kwargs["default_batch_name"] = env["DEFAULT_BATCH_NAME"]

        if env.get("DEFAULT_OUTPUT_FORMAT"):
            try:
                kwargs["default_output_format"] = ColorSpace.parse(env["DEFAULT_OUTPUT_FORMAT"])
            except ValueError as e:
                raise ValueError(f"DEFAULT_OUTPUT_FORMAT: {e}") from e

        if env.get("MAX_CONCURRENCY"):
            raw = env["MAX_CONCURRENCY"]
            try:
                value = int(raw)
            except ValueError:
                raise ValueError(f"MAX_CONCURRENCY must be an integer, got {raw!r}") from None
            if value < 1:
                raise ValueError(f"MAX_CONCURRENCY must be >= 1, got {value}")
            kwargs["max_concurrency"] = value

        return cls(**kwargs)
