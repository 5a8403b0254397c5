"""
Layout diagnostics: active breakpoint and editor warnings.
"""

from __future__ import annotations

from .schema import GridConfig
from .units import decompose, strip_px

# rem -> px for warnings (assuming 16px base)
_REM_PX = 16

READABLE_CONTENT_MAX_REM = 55


def current_breakpoint(viewport_width: float, config: GridConfig | None = None) -> str:
    """Return ``xl``, ``lg`` or ``mobile`` for a viewport width."""
    config = config or GridConfig()
    xl = decompose(strip_px(config.value("breakpoints.xl"))).magnitude
    lg = decompose(strip_px(config.value("breakpoints.lg"))).magnitude
    if viewport_width >= xl:
        return "xl"
    if viewport_width >= lg:
        return "lg"
    return "mobile"


def gap_scale_key(breakpoint: str) -> str:
    """Gap-scale token key used at a breakpoint (``mobile`` uses ``default``)."""
    return "default" if breakpoint == "mobile" else breakpoint


def content_readability_warning(config: GridConfig) -> str | None:
    """Warn when the content column is wider than comfortable for prose."""
    content_max = decompose(config.value("contentMax")).magnitude
    if content_max > READABLE_CONTENT_MAX_REM:
        return (
            f"Content max ({content_max:g}rem) exceeds {READABLE_CONTENT_MAX_REM}rem"
            " and may be wide for reading. Ideal for prose: 45-55rem."
        )
    return None


def track_overflow_warning(config: GridConfig, viewport_width: float) -> str | None:
    """Warn when the fixed track widths add up to more than the viewport."""
    content_max = decompose(config.value("contentMax")).magnitude * _REM_PX
    feature_max = decompose(config.value("featureMax")).magnitude * _REM_PX
    popout_width = decompose(config.value("popoutWidth")).magnitude * _REM_PX

    total_fixed = content_max + feature_max * 2 + popout_width * 2
    if total_fixed > viewport_width:
        overflow = round(total_fixed - viewport_width)
        return f"Tracks exceed viewport by ~{overflow}px; outer columns will compress"
    return None
