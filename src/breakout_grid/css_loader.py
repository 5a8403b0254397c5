"""
CSS loader for the breakout grid structural library.

The structural rules (grid containers, column and spacing utilities) only
reference custom properties, so they are shipped as static CSS and appended
verbatim to every generated stylesheet.
"""

from __future__ import annotations

from functools import cache
from pathlib import Path

_STATIC_CSS_DIR = Path(__file__).parent / "static" / "css"

STRUCTURAL_CSS_FILE = "structural.css"


def _load_css_file(filename: str) -> str:
    """Load a CSS file from the static/css directory."""
    path = _STATIC_CSS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"CSS file not found: {path}")
    return path.read_text(encoding="utf-8")


@cache
def get_structural_css() -> str:
    """Return the structural rule library, identical for every config."""
    return _load_css_file(STRUCTURAL_CSS_FILE)
