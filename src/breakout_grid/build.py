"""
Build helpers: write the generated stylesheet and verify version tags.

Usage::

    from breakout_grid.build import build_css, verify_versions
    build_css(Path("dist/_objects.breakout-grid.css"), version="1.2.0")
    results = verify_versions([Path("dist/_objects.breakout-grid.css")], "1.2.0")
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from .generator import generate_css
from .schema import GridConfig

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^\s*\*\s*Version:\s*(\S+)\s*$", re.MULTILINE)


class CheckStatus(StrEnum):
    OK = "ok"
    MISMATCH = "mismatch"
    MISSING_VERSION = "missing_version"
    UNREADABLE = "unreadable"


@dataclass
class VersionCheck:
    """Result of checking one built file."""

    path: Path
    status: CheckStatus
    found: str | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == CheckStatus.OK


def build_css(output_path: Path, config: GridConfig | None = None, version: str = "dev") -> Path:
    """
    Write the generated stylesheet to ``output_path``.

    Creates parent directories as needed.

    Returns:
        The path written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    css = generate_css(config, version)
    output_path.write_text(css, encoding="utf-8")
    size_kb = output_path.stat().st_size / 1024
    logger.info("Generated %s (v%s, %.1f KB)", output_path, version, size_kb)
    return output_path


def read_embedded_version(css: str) -> str | None:
    """Version tag from a generated stylesheet's header, if present."""
    match = _VERSION_RE.search(css)
    return match.group(1) if match else None


def verify_versions(paths: Iterable[Path], expected: str) -> list[VersionCheck]:
    """
    Check that each built file embeds the ``expected`` version tag.

    Catches files that were hand-edited or not rebuilt after a version bump.
    """
    results: list[VersionCheck] = []
    for path in paths:
        try:
            css = path.read_text(encoding="utf-8")
        except OSError as e:
            results.append(VersionCheck(path, CheckStatus.UNREADABLE, detail=str(e)))
            continue

        found = read_embedded_version(css)
        if found is None:
            results.append(
                VersionCheck(path, CheckStatus.MISSING_VERSION, detail="Could not find version")
            )
        elif found != expected:
            results.append(
                VersionCheck(
                    path,
                    CheckStatus.MISMATCH,
                    found=found,
                    detail=f"Expected {expected}, found {found}",
                )
            )
        else:
            results.append(VersionCheck(path, CheckStatus.OK, found=found))
    return results
