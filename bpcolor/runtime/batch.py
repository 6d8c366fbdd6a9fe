# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Batch orchestration.

Many palettes against one pattern. The pattern is loaded once per call
and shared read-only; items run concurrently on a thread pool. A failed
item is recorded as a GenerationFailure and the rest of the batch goes
on. Only a batch with no successes at all raises.

Palettes and failures are reported in input order, whatever order the
workers finish in.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Optional, Sequence, Union

from bpcolor.config import GeneratorConfig
from bpcolor.engine.colorspace import parse_color
from bpcolor.errors import BatchGenerationError, ColorParseError, PaletteError, describe
from bpcolor.runtime.generate import (
    generate_palette_with_pattern,
    transform_color,
    transform_from_reference,
)
from bpcolor.runtime import loader
from bpcolor.runtime.loader import LoadPattern
from bpcolor.schema.color import ColorSpace
from bpcolor.schema.palette import (
    BatchResult,
    ColorStopPair,
    GenerationFailure,
    ManyTransformationRequest,
    PaletteResult,
    StopPosition,
    TransformationRequest,
)

logger = logging.getLogger(__name__)


Transformation = Union[TransformationRequest, ManyTransformationRequest]


@dataclass(frozen=True)
class _BatchItem:
    """One unit of work; items failed up front carry an error instead of a task."""
    color: str
    stop: StopPosition
    task: Optional[Callable[[], PaletteResult]] = None
    error: Optional[str] = None


def _run_items(
    items: Sequence[_BatchItem],
    max_workers: int,
) -> list[Union[PaletteResult, GenerationFailure]]:
    """Run every task concurrently; outcomes come back in item order."""
    outcomes: list[Union[PaletteResult, GenerationFailure, None]] = [None] * len(items)

    for i, item in enumerate(items):
        if item.task is None:
            outcomes[i] = GenerationFailure(color=item.color, stop=item.stop, error=item.error or "")

    runnable = [i for i, item in enumerate(items) if item.task is not None]
    if runnable:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(runnable))) as executor:
            futures = {executor.submit(items[i].task): i for i in runnable}
            for future in as_completed(futures):
                i = futures[future]
                try:
                    outcomes[i] = future.result()
                except (PaletteError, ValueError) as e:
                    outcomes[i] = GenerationFailure(
                        color=items[i].color, stop=items[i].stop, error=describe(e)
                    )

    return outcomes


def _format_failures(failures: Sequence[GenerationFailure]) -> str:
    return ", ".join(f"{f.color} ({f.error})" for f in failures)


def _assemble(
    items: Sequence[_BatchItem],
    output_format: ColorSpace,
    group_name: str,
    max_workers: int,
    failure_prefix: str,
) -> BatchResult:
    if not items:
        raise BatchGenerationError(f"{failure_prefix}: no items given")
    outcomes = _run_items(items, max_workers)
    palettes = tuple(o for o in outcomes if isinstance(o, PaletteResult))
    failures = tuple(o for o in outcomes if isinstance(o, GenerationFailure))

    for failure in failures:
        logger.warning(
            "Batch %r: %s at stop %d failed: %s",
            group_name, failure.color, int(failure.stop), failure.error,
        )

    if not palettes:
        raise BatchGenerationError(f"{failure_prefix}: {_format_failures(failures)}", failures)

    logger.info(
        "Batch %r: %d palette(s), %d failure(s)", group_name, len(palettes), len(failures)
    )
    return BatchResult(
        group_name=group_name,
        output_format=output_format,
        generated_at=datetime.now(timezone.utc),
        palettes=palettes,
        failures=failures,
    )


def _batch_settings(
    output_format: Optional[ColorSpace],
    group_name: Optional[str],
    pattern_source: Optional[str],
    max_workers: Optional[int],
) -> tuple[ColorSpace, str, str, int]:
    """Fill unset batch arguments from GeneratorConfig.from_env()."""
    if None in (output_format, group_name, pattern_source, max_workers):
        config = GeneratorConfig.from_env()
        if output_format is None:
            output_format = config.default_output_format
        if group_name is None:
            group_name = config.default_batch_name
        if pattern_source is None:
            pattern_source = config.pattern_source
        if max_workers is None:
            max_workers = config.max_concurrency

    if not group_name:
        raise ValueError("group_name cannot be empty")
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    return ColorSpace.parse(output_format), group_name, pattern_source, max_workers


def generate_batch(
    pairs: Sequence[ColorStopPair],
    output_format: Optional[ColorSpace] = None,
    group_name: Optional[str] = None,
    load_pattern: LoadPattern = loader.load_pattern,
    pattern_source: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    One palette per color/stop pair, named "<group_name>-<color>".

    Args:
        pairs: Input colors with their anchor stops
        output_format: Format of every stop value
        group_name: Batch name (non-empty)
        load_pattern: Pattern loader, called once
        pattern_source: Source passed to load_pattern
        max_workers: Upper bound on concurrent generations

    Arguments left as None come from GeneratorConfig.from_env().

    Returns:
        BatchResult with the successful palettes and the failures

    Raises:
        ValueError: If group_name is empty or max_workers < 1
        PatternLoadError: If the pattern cannot be loaded
        BatchGenerationError: If every pair failed
    """
    output_format, group_name, pattern_source, max_workers = _batch_settings(
        output_format, group_name, pattern_source, max_workers
    )
    pattern = load_pattern(pattern_source)

    items = [
        _BatchItem(
            color=pair.color,
            stop=StopPosition(pair.stop),
            task=partial(
                generate_palette_with_pattern,
                pair.color,
                pair.stop,
                output_format,
                f"{group_name}-{pair.color}",
                pattern,
            ),
        )
        for pair in pairs
    ]
    return _assemble(items, output_format, group_name, max_workers, "All palette generations failed")


def _transformation_items(
    transformation: Transformation,
    output_format: ColorSpace,
    group_name: str,
    pattern,
) -> list[_BatchItem]:
    """Expand one transformation into batch items (one per target)."""
    stop = StopPosition(transformation.stop)
    name = transformation.name or group_name

    if isinstance(transformation, TransformationRequest):
        return [
            _BatchItem(
                color=transformation.target,
                stop=stop,
                task=partial(
                    transform_color,
                    transformation.reference,
                    transformation.target,
                    stop,
                    output_format,
                    name,
                    pattern,
                ),
            )
        ]

    try:
        reference = parse_color(transformation.reference)
    except ColorParseError:
        error = f"Invalid reference color: {transformation.reference}"
        return [_BatchItem(color=t, stop=stop, error=error) for t in transformation.targets]

    return [
        _BatchItem(
            color=target,
            stop=stop,
            task=partial(
                transform_from_reference,
                reference,
                target,
                stop,
                output_format,
                f"{name}-{target}",
                pattern,
            ),
        )
        for target in transformation.targets
    ]


def transform_batch(
    transformations: Sequence[Transformation],
    output_format: Optional[ColorSpace] = None,
    group_name: Optional[str] = None,
    load_pattern: LoadPattern = loader.load_pattern,
    pattern_source: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Palettes from reference>target transformations.

    Single transformations produce one palette named after the request
    (or the group). One-to-many transformations fan out to one palette per
    target, named "<name>-<target>"; if their reference does not parse,
    every target fails with "Invalid reference color: <reference>".

    Arguments left as None come from GeneratorConfig.from_env(), as in
    generate_batch.

    Raises:
        ValueError: If group_name is empty or max_workers < 1
        PatternLoadError: If the pattern cannot be loaded
        BatchGenerationError: If every transformation failed
    """
    output_format, group_name, pattern_source, max_workers = _batch_settings(
        output_format, group_name, pattern_source, max_workers
    )
    pattern = load_pattern(pattern_source)

    items = [
        item
        for transformation in transformations
        for item in _transformation_items(transformation, output_format, group_name, pattern)
    ]
    return _assemble(items, output_format, group_name, max_workers, "All transformations failed")
