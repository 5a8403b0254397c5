"""
Breakout Grid - layout tokens for a named-line CSS grid.

Generates the standalone breakout grid stylesheet from a token config,
parses configs back out of stylesheet text, and keeps a live document in
sync while tokens are edited.
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import get_version
from .editor import GridEditor
from .errors import (
    BreakoutGridError,
    ConfigFormatError,
    ParseError,
    SettingsError,
    UnknownSectionError,
    UnknownTokenError,
)
from .generator import export_config_block, generate_css, section_declarations
from .parser import parse_config
from .schema import TOKENS, GridConfig, TokenSpec, default_config, get_token
from .synchronizer import EditSession, EditState, LiveSynchronizer

__version__ = get_version()

__all__ = [
    "__version__",
    "TOKENS",
    "TokenSpec",
    "GridConfig",
    "default_config",
    "get_token",
    "generate_css",
    "export_config_block",
    "section_declarations",
    "parse_config",
    "EditSession",
    "EditState",
    "LiveSynchronizer",
    "GridEditor",
    "BreakoutGridError",
    "ParseError",
    "ConfigFormatError",
    "UnknownTokenError",
    "UnknownSectionError",
    "SettingsError",
]
