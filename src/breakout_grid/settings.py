"""
Project settings loaded from breakout-grid.toml.

Example::

    [project]
    version = "1.2.0"

    [build]
    output = "dist/_objects.breakout-grid.css"
    check = ["dist/_objects.breakout-grid.css"]

    [storage]
    dir = ".breakout-grid"

    [tokens]
    contentMax = "60rem"
    gapScale = { lg = "5.5vw" }

Every section is optional; a project without the file gets the defaults.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from ._version import get_version
from .errors import ErrorContext, SettingsError
from .schema import GridConfig
from .storage import default_storage_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE = "breakout-grid.toml"
DEFAULT_OUTPUT = "dist/_objects.breakout-grid.css"


@dataclass
class BuildConfig:
    """Where generated CSS is written and which files check-version inspects."""

    output: str = DEFAULT_OUTPUT
    check: list[str] = field(default_factory=lambda: [DEFAULT_OUTPUT])


@dataclass
class GridSettings:
    """Settings for one project."""

    project_root: Path
    version: str
    build: BuildConfig = field(default_factory=BuildConfig)
    storage_dir: Path | None = None
    tokens: GridConfig = field(default_factory=GridConfig)

    @property
    def output_path(self) -> Path:
        return self.project_root / self.build.output

    @property
    def check_paths(self) -> list[Path]:
        return [self.project_root / path for path in self.build.check]


def get_settings_path(project_root: Path) -> Path:
    return project_root / SETTINGS_FILE


def load_settings(project_root: Path) -> GridSettings:
    """
    Load settings for a project.

    Environment overrides: BREAKOUT_GRID_VERSION (version tag) and
    BREAKOUT_GRID_STORAGE_DIR (snapshot directory).

    Raises:
        SettingsError: If the file exists but is not valid
    """
    path = get_settings_path(project_root)
    data: dict = {}
    if path.exists():
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"Invalid TOML: {e}", ErrorContext(path)) from e
        logger.debug("Loaded settings from %s", path)

    project = data.get("project", {})
    build_data = data.get("build", {})
    storage_data = data.get("storage", {})

    version = os.environ.get("BREAKOUT_GRID_VERSION") or project.get("version") or get_version()

    output = build_data.get("output", DEFAULT_OUTPUT)
    build = BuildConfig(output=output, check=list(build_data.get("check", [output])))

    if os.environ.get("BREAKOUT_GRID_STORAGE_DIR"):
        storage_dir = default_storage_dir(project_root)
    elif "dir" in storage_data:
        storage_dir = project_root / storage_data["dir"]
    else:
        storage_dir = default_storage_dir(project_root)

    try:
        tokens = GridConfig.model_validate(data.get("tokens", {}))
    except ValidationError as e:
        raise SettingsError(f"Invalid [tokens] section: {e}", ErrorContext(path)) from e

    return GridSettings(
        project_root=project_root,
        version=str(version),
        build=build,
        storage_dir=storage_dir,
        tokens=tokens,
    )
