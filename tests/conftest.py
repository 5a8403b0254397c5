"""Shared pytest fixtures for breakout grid tests."""

from pathlib import Path

import pytest

from breakout_grid.clipboard import MemoryClipboard
from breakout_grid.document import DocumentStyle
from breakout_grid.editor import GridEditor
from breakout_grid.storage import SnapshotStore
from breakout_grid.synchronizer import EditSession, LiveSynchronizer


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for name in ("BREAKOUT_GRID_VERSION", "BREAKOUT_GRID_STORAGE_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def document() -> DocumentStyle:
    """Return an empty document at a 1280px viewport with a 16px root font."""
    return DocumentStyle()


@pytest.fixture
def store(tmp_path: Path) -> SnapshotStore:
    """Return a snapshot store in a temporary directory."""
    return SnapshotStore(tmp_path / ".breakout-grid")


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def session(
    document: DocumentStyle, store: SnapshotStore, clipboard: MemoryClipboard
) -> EditSession:
    return EditSession(document=document, store=store, clipboard=clipboard)


@pytest.fixture
def sync(session: EditSession) -> LiveSynchronizer:
    return LiveSynchronizer(session)


@pytest.fixture
def editor(session: EditSession) -> GridEditor:
    return GridEditor(session)
