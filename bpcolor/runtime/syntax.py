# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Compact input syntax for batch callers.

    2D72D2::500                         color and stop
    2D72D2:500, 2D72D2 500              same, alternative separators
    2D72D2::500, 238551::600            batch (commas or newlines)
    2D72D2>238551::500                  transformation
    2D72D2>(238551,DC143C)::500         one-to-many transformation

Colors are not validated here: an unparseable color becomes a per-item
failure when the batch runs.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from bpcolor.errors import SyntaxParseError
from bpcolor.schema.palette import (
    ColorStopPair,
    ManyTransformationRequest,
    StopPosition,
    TransformationRequest,
)


_PAIR_RE = re.compile(r"^(?P<color>.*?\S)\s*(?:::|:|\s)\s*(?P<stop>\d+)$")

_TRANSFORMATION_RE = re.compile(
    r"^(?P<reference>[^>]*?)\s*>\s*(?P<targets>.+?)\s*::\s*(?P<stop>\S+)$"
)


def split_top_level(text: str, separators: str = ",\n") -> list[str]:
    """
    Split on separators that are not inside parentheses.

    split_top_level("rgb(1, 2, 3)::500, #fff::100") == ["rgb(1, 2, 3)::500", "#fff::100"]
    Empty entries are dropped.
    """
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        if ch in separators and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def _parse_stop(value: str, source: str) -> StopPosition:
    try:
        return StopPosition.parse(value)
    except ValueError as e:
        raise SyntaxParseError(source, str(e)) from None


def parse_color_stop_pair(text: str, default_stop: Optional[int] = None) -> ColorStopPair:
    """
    Parse "color::stop" (also "color:stop" or "color stop").

    Args:
        text: Pair to parse
        default_stop: Stop used when text is a bare color

    Raises:
        SyntaxParseError: If the stop is missing or invalid
    """
    stripped = text.strip()
    if not stripped:
        raise SyntaxParseError(text, "empty input")

    m = _PAIR_RE.match(stripped)
    if m is not None:
        return ColorStopPair(color=m.group("color"), stop=_parse_stop(m.group("stop"), text))

    if "::" in stripped:
        color, stop = stripped.rsplit("::", 1)
        if not color.strip():
            raise SyntaxParseError(text, "missing color")
        return ColorStopPair(color=color.strip(), stop=_parse_stop(stop, text))

    if default_stop is None:
        raise SyntaxParseError(text, "missing stop position (expected color::stop)")
    return ColorStopPair(color=stripped, stop=_parse_stop(str(default_stop), text))


def parse_batch_pairs(text: str, default_stop: Optional[int] = None) -> list[ColorStopPair]:
    """
    Parse comma- or newline-separated color/stop pairs.

    Raises:
        SyntaxParseError: If there are no pairs or any pair is malformed
    """
    entries = split_top_level(text)
    if not entries:
        raise SyntaxParseError(text, "no color/stop pairs found")
    return [parse_color_stop_pair(entry, default_stop) for entry in entries]


def is_transformation_syntax(text: str) -> bool:
    """True if the input uses the reference>target operator."""
    return ">" in text


def parse_transformation(
    text: str,
) -> Union[TransformationRequest, ManyTransformationRequest]:
    """
    Parse "ref>target::stop" or "ref>(t1,t2,...)::stop".

    Raises:
        SyntaxParseError: If the input is not transformation syntax
    """
    stripped = text.strip()
    if not is_transformation_syntax(stripped):
        raise SyntaxParseError(text, "transformation must contain '>' (e.g. 'ref>target::stop')")

    m = _TRANSFORMATION_RE.match(stripped)
    if m is None:
        raise SyntaxParseError(text, "expected 'ref>target::stop' or 'ref>(t1,t2)::stop'")

    reference = m.group("reference").strip()
    targets = m.group("targets").strip()
    stop = _parse_stop(m.group("stop"), text)
    if not reference:
        raise SyntaxParseError(text, "missing reference color")

    if targets.startswith("(") and targets.endswith(")"):
        many = split_top_level(targets[1:-1], separators=",")
        if not many:
            raise SyntaxParseError(text, "one-to-many transformation requires at least one target")
        return ManyTransformationRequest(reference=reference, targets=tuple(many), stop=stop)

    return TransformationRequest(reference=reference, target=targets, stop=stop)


def parse_transformations(
    text: str,
) -> list[Union[TransformationRequest, ManyTransformationRequest]]:
    """
    Parse comma- or newline-separated transformations.

    Raises:
        SyntaxParseError: If there are none or any entry is malformed
    """
    entries = split_top_level(text)
    if not entries:
        raise SyntaxParseError(text, "no transformations found")
    return [parse_transformation(entry) for entry in entries]
