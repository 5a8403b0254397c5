"""
Numeric/unit helper for token literals.

A literal is ``<number><unit>`` (``1rem``, ``12vw``, ``1024``). This module
is the only place literals are split apart and put back together. None of
these functions raise on malformed input: they feed live typing and drag
interactions, so bad text degrades to ``0rem``.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

DEFAULT_UNIT = "rem"
UNITLESS = ""

# Units the editor offers in its unit selector
SELECTABLE_UNITS = ("rem", "ch", "px")

_LITERAL_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))\s*(.*?)\s*$")


class Magnitude(NamedTuple):
    """A literal split into its numeric part and unit suffix."""

    magnitude: float
    unit: str


def decompose(literal: str | float | None) -> Magnitude:
    """
    Split a literal into magnitude and unit.

    ``"12vw"`` -> ``(12.0, "vw")``; ``"1024"`` -> ``(1024.0, "")``.
    Text without a numeric prefix yields ``(0.0, "rem")``.
    """
    match = _LITERAL_RE.match(str(literal if literal is not None else ""))
    if not match:
        return Magnitude(0.0, DEFAULT_UNIT)
    return Magnitude(float(match.group(1)), match.group(2))


def format_magnitude(value: float) -> str:
    """Render a magnitude the way it is typed: ``6`` not ``6.0``, ``0.5`` not ``.5``."""
    if value == int(value):
        return str(int(value))
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def recompose(magnitude: float, unit: str) -> str:
    """Join a magnitude and unit back into a literal."""
    return f"{format_magnitude(magnitude)}{unit}"


def clamp_floor(literal: str, floor: float | None) -> str:
    """Raise a literal's magnitude to ``floor``, keeping its unit. No-op without a floor."""
    if floor is None:
        return literal
    magnitude, unit = decompose(literal)
    if magnitude >= floor:
        return literal
    return recompose(floor, unit)


def strip_px(value: str) -> str:
    """Drop a trailing ``px`` (breakpoints are stored unitless)."""
    value = value.strip()
    return value[:-2].rstrip() if value.endswith("px") else value


def pixels_per_unit(unit: str, viewport_width: float, root_font_size: float) -> float:
    """How many CSS pixels one unit of ``unit`` spans in the current document."""
    if unit == "vw":
        return viewport_width / 100
    if unit == "rem":
        return root_font_size
    return 1.0


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def apply_pixel_delta(
    start: float,
    unit: str,
    delta_px: float,
    *,
    viewport_width: float,
    root_font_size: float,
) -> float:
    """
    Convert a pointer movement into a new magnitude.

    Args:
        start: Magnitude when the drag began
        unit: Unit of the literal being dragged
        delta_px: Signed pointer movement in pixels
        viewport_width: Current viewport width in pixels (for vw)
        root_font_size: Root font size in pixels (for rem)

    Returns:
        New magnitude, never negative, rounded to one decimal place
    """
    ppu = pixels_per_unit(unit, viewport_width, root_font_size)
    value = start + delta_px / ppu if ppu else start
    return round_half_up(max(value, 0.0), 1)
