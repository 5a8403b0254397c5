"""
Config parser for breakout grid stylesheets.

Recovers a GridConfig from generated stylesheet text, an exported ``:root``
block, or hand-pasted declarations. Only the fixed set of schema variables is
recognized; everything else in the input is ignored. This is not a CSS
parser: there is no cascade, selector or media-query handling.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from .errors import ConfigFormatError
from .schema import BASE_VARS, BREAKPOINT_VARS, GAP_SCALE_VARS, GridConfig
from .units import strip_px

logger = logging.getLogger(__name__)

# Matches: --var-name: value;  OR  /* --var-name: value; */
_DECLARATION_RE = re.compile(r"(?:/\*\s*)?(--[\w-]+)\s*:\s*([^;*]+);?\s*(?:\*/)?")

FORMAT_ERROR_MESSAGE = (
    "Unrecognized format: no breakout grid variables found. "
    "Paste the :root block from a config export."
)


def scan_declarations(text: str) -> Iterator[tuple[str, str]]:
    """
    Yield ``(name, value)`` for every custom-property declaration in ``text``.

    Declarations inside comments are included (breakpoints are exported
    commented out). Values are stripped of surrounding whitespace.
    """
    for match in _DECLARATION_RE.finditer(text):
        yield match.group(1), match.group(2).strip()


def parse_config(text: str) -> GridConfig:
    """
    Parse stylesheet text into a partial GridConfig.

    Later declarations of the same variable win. Tokens not mentioned in the
    text are left absent; callers complete them from defaults.

    Args:
        text: Generated stylesheet, exported block, or pasted declarations

    Returns:
        GridConfig holding the recognized values

    Raises:
        ConfigFormatError: If no known variable is declared in the text
    """
    values: dict[str, str] = {}

    for name, value in scan_declarations(text.strip()):
        if name in BASE_VARS:
            values[BASE_VARS[name].name] = value
        elif name in GAP_SCALE_VARS:
            values[GAP_SCALE_VARS[name].name] = value
        elif name in BREAKPOINT_VARS:
            values[BREAKPOINT_VARS[name].name] = strip_px(value)

    if not values:
        raise ConfigFormatError(FORMAT_ERROR_MESSAGE)

    logger.debug("Parsed %d grid variables", len(values))
    return GridConfig.from_flat(values)
