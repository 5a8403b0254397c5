"""Tests for column resize and panel drag handling."""

from __future__ import annotations

from breakout_grid.document import DocumentStyle
from breakout_grid.drag import (
    DEFAULT_PANEL_POSITIONS,
    DragController,
    DragKind,
    resize_token_for_column,
)
from breakout_grid.storage import EDITOR_POS_KEY, SnapshotStore
from breakout_grid.synchronizer import LiveSynchronizer


class TestColumnResize:
    def test_left_edge_handle_grows_when_dragged_left(
        self, sync: LiveSynchronizer, document: DocumentStyle
    ) -> None:
        drag = DragController(sync)
        assert drag.start_resize("popoutWidth", 400)
        drag.move(384)
        assert sync.value("popoutWidth") == "6rem"
        assert document.get_property("--popout") == "minmax(0, 6rem)"

    def test_right_edge_handle_grows_when_dragged_right(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.start_resize("contentMax", 100)
        drag.move(132)
        assert sync.value("contentMax") == "57rem"

    def test_vw_token_uses_viewport(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.start_resize("featureScale", 500)
        drag.move(500 - 12.8)
        assert sync.value("featureScale") == "13vw"

    def test_moves_are_relative_to_start(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.start_resize("popoutWidth", 400)
        drag.move(384)
        drag.move(368)
        assert sync.value("popoutWidth") == "7rem"

    def test_never_negative(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.start_resize("popoutWidth", 0)
        drag.move(1000)
        assert sync.value("popoutWidth") == "0rem"

    def test_end_stops_resizing(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.start_resize("popoutWidth", 400)
        drag.end()
        drag.move(384)
        assert not drag.is_dragging
        assert sync.value("popoutWidth") == "5rem"


class TestSingleActiveDrag:
    def test_second_drag_rejected(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        assert drag.start_resize("popoutWidth", 0)
        assert not drag.start_panel_drag("editor", 0, 0)
        assert not drag.start_resize("contentMax", 0)
        assert drag.active_kind == DragKind.COLUMN_RESIZE

    def test_move_while_idle_ignored(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        drag.move(100, 100)
        assert drag.active_kind is None
        assert sync.state.values == {}


class TestPanelDrag:
    def test_moves_panel_keeping_grab_offset(self, sync: LiveSynchronizer) -> None:
        drag = DragController(sync)
        assert drag.panel_positions["editor"] == DEFAULT_PANEL_POSITIONS["editor"]
        drag.start_panel_drag("editor", 30, 110)
        drag.move(110, 210)
        assert drag.panel_positions["editor"] == (100, 200)

    def test_position_persisted_on_release(
        self, sync: LiveSynchronizer, store: SnapshotStore
    ) -> None:
        drag = DragController(sync)
        drag.start_panel_drag("editor", 30, 110)
        drag.move(110, 210)
        assert store.get(EDITOR_POS_KEY) is None
        drag.end()
        assert store.get(EDITOR_POS_KEY) == {"x": 100, "y": 200}


class TestResizeTokenForColumn:
    def test_known_columns(self) -> None:
        assert resize_token_for_column("feature") == "featureScale"
        assert resize_token_for_column("popout") == "popoutWidth"
        assert resize_token_for_column("full-limit") == "fullLimit"

    def test_unknown_column(self) -> None:
        assert resize_token_for_column("content") is None
