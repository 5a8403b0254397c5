"""
Persisted snapshot storage.

Saves the edited grid config and a few editor preferences as JSON files in
``.breakout-grid/`` so edits survive between sessions. Each key is one file
(``{key}.json``); writes are last-write-wins.

Storage is best-effort: a failed read or write is logged and ignored, and
the in-memory edit state stays the source of truth for the session.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .schema import GridConfig

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = ".breakout-grid"

CONFIG_KEY = "breakoutGridConfig"
VISIBLE_KEY = "breakoutGridVisualizerVisible"
EDITOR_OPEN_KEY = "breakoutGridEditorOpen"
EDITOR_POS_KEY = "breakoutGridEditorPos"
SPACING_POS_KEY = "breakoutGridSpacingPos"
SPACING_COLLAPSED_KEY = "breakoutGridSpacingCollapsed"

# Keys that mean the user has customized something
OVERRIDE_KEYS = (
    CONFIG_KEY,
    EDITOR_OPEN_KEY,
    EDITOR_POS_KEY,
    SPACING_POS_KEY,
    SPACING_COLLAPSED_KEY,
)

ALL_KEYS = (VISIBLE_KEY, *OVERRIDE_KEYS)


def default_storage_dir(project_root: Path) -> Path:
    """Storage directory, honouring BREAKOUT_GRID_STORAGE_DIR."""
    override = os.environ.get("BREAKOUT_GRID_STORAGE_DIR")
    if override:
        return Path(override)
    return project_root / DEFAULT_STORAGE_DIR


class SnapshotStore:
    """
    File-based key/value store for snapshots and editor preferences.

    Args:
        directory: Directory holding one JSON file per key
    """

    def __init__(self, directory: Path) -> None:
        self._dir = directory

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Any | None:
        """Load a value, or None if missing or unreadable."""
        path = self._path(key)
        try:
            if not path.exists():
                return None
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable stored value %s: %s", path.name, e)
            return None

    def set(self, key: str, value: Any) -> bool:
        """Store a JSON-serializable value. Returns False if the write failed."""
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(value, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.warning("Failed to store %s: %s", key, e)
            return False
        logger.debug("Stored %s", path.name)
        return True

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", key, e)

    def has(self, key: str) -> bool:
        return self._path(key).exists()

    def has_any(self, keys: Iterable[str]) -> bool:
        return any(self.has(key) for key in keys)

    def clear(self, keys: Iterable[str] = ALL_KEYS) -> None:
        for key in keys:
            self.remove(key)

    # -------------------------------------------------------------------------
    # Config snapshot
    # -------------------------------------------------------------------------

    def load_config(self) -> GridConfig | None:
        """
        Load the persisted config snapshot.

        A corrupt snapshot is treated as no snapshot.
        """
        data = self.get(CONFIG_KEY)
        if data is None:
            return None
        try:
            return GridConfig.model_validate(data)
        except ValidationError:
            logger.warning("Corrupt config snapshot in %s, using defaults", self._dir)
            return None

    def save_config(self, config: GridConfig) -> bool:
        return self.set(CONFIG_KEY, config.to_json_dict())

    def delete_config(self) -> None:
        self.remove(CONFIG_KEY)
