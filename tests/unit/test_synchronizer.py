"""Tests for the live synchronizer."""

from __future__ import annotations

from pathlib import Path

import pytest

from breakout_grid.document import DocumentStyle
from breakout_grid.errors import UnknownTokenError
from breakout_grid.parser import parse_config
from breakout_grid.schema import TOKENS, GridConfig
from breakout_grid.storage import CONFIG_KEY, SnapshotStore
from breakout_grid.synchronizer import EditSession, EditState, LiveSynchronizer


class TestSetField:
    def test_pushes_live_property(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        sync.set_field("contentMax", "60rem")
        assert document.get_property("--content-max") == "60rem"
        assert sync.value("contentMax") == "60rem"

    def test_recomputes_dependents(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        sync.set_field("popoutWidth", "8rem")
        assert document.get_property("--popout") == "minmax(0, 8rem)"
        assert document.get_property("--breakout-padding") == "clamp(1rem, 5vw, 8rem)"
        assert document.get_property("--popout-to-content") == "clamp(1rem, 5vw, 8rem)"
        assert document.get_property("--feature-to-content") == (
            "calc(clamp(0rem, 12vw, 12rem) + 8rem)"
        )

    def test_content_formula_uses_literals(
        self, sync: LiveSynchronizer, document: DocumentStyle
    ) -> None:
        sync.set_field("contentMin", "40rem")
        assert document.get_property("--content") == (
            "min(clamp(40rem, 75vw, 55rem), 100% - var(--gap) * 2)"
        )
        assert document.get_property("--content-inset") == (
            "min(clamp(40rem, 75vw, 55rem), calc(100% - var(--gap)))"
        )

    def test_floor_applied_silently(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        assert sync.set_field("featureMin", "-5rem") == "0rem"
        assert document.get_property("--feature-min") == "0rem"
        assert sync.state.values["featureMin"] == "0rem"

    def test_tokens_without_floor_keep_negative(self, sync: LiveSynchronizer) -> None:
        assert sync.set_field("breakoutMin", "-1rem") == "-1rem"

    def test_marks_state(self, session: EditSession) -> None:
        session.store = None
        sync = LiveSynchronizer(session)
        sync.set_field("baseGap", "2rem")
        assert sync.state.dirty
        assert sync.state.modified
        assert sync.has_unsaved_edits()

    def test_autosaves_snapshot(self, sync: LiveSynchronizer, store: SnapshotStore) -> None:
        sync.set_field("popoutWidth", "8rem")
        saved = store.load_config()
        assert saved is not None
        assert saved.is_complete()
        assert saved.get("popoutWidth") == "8rem"
        assert not sync.state.dirty

    def test_no_autosave(self, session: EditSession, store: SnapshotStore) -> None:
        session.autosave = False
        sync = LiveSynchronizer(session)
        sync.set_field("popoutWidth", "8rem")
        assert not store.has(CONFIG_KEY)
        assert sync.state.dirty

    def test_unknown_token(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        with pytest.raises(UnknownTokenError):
            sync.set_field("gutter", "1rem")
        assert sync.state.values == {}
        assert document.overrides == {}

    def test_keyword_token(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        sync.set_field("defaultCol", "feature")
        assert document.get_property("--default-col") == "feature"


class TestBreakpointEdits:
    def test_stored_without_px(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        assert sync.set_field("breakpoints.lg", "900px") == "900"
        assert document.get_property("--breakpoint-lg") is None

    def test_breakpoint_edit_recomputes_gap(
        self, sync: LiveSynchronizer, document: DocumentStyle
    ) -> None:
        sync.set_field("breakpoints.xl", "1400")
        # 1280px viewport is now below xl
        assert document.get_property("--gap") == "clamp(1rem, 5vw, 15rem)"

    def test_gap_follows_viewport(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        sync.set_field("baseGap", "2rem")
        assert document.get_property("--gap") == "clamp(2rem, 6vw, 15rem)"
        sync.set_viewport(1100)
        assert document.get_property("--gap") == "clamp(2rem, 5vw, 15rem)"
        sync.set_viewport(600)
        assert document.get_property("--gap") == "clamp(2rem, 4vw, 15rem)"

    def test_viewport_change_without_edits(
        self, sync: LiveSynchronizer, document: DocumentStyle
    ) -> None:
        sync.set_viewport(600)
        assert document.viewport_width == 600
        assert document.get_property("--gap") is None


class TestStepAndUnit:
    def test_set_numeric_keeps_unit(self, sync: LiveSynchronizer) -> None:
        assert sync.set_numeric("featureScale", 14) == "14vw"

    def test_set_unit_keeps_magnitude(self, sync: LiveSynchronizer) -> None:
        assert sync.set_unit("contentMax", "ch") == "55ch"

    def test_magnitude_and_unit(self, sync: LiveSynchronizer) -> None:
        sync.set_field("popoutWidth", "6.5rem")
        assert sync.magnitude("popoutWidth") == 6.5
        assert sync.unit("popoutWidth") == "rem"


class TestApplyConfig:
    def test_applies_every_present_field(
        self, sync: LiveSynchronizer, document: DocumentStyle, store: SnapshotStore
    ) -> None:
        config = parse_config("--popout-width: 7rem;\n--gap-scale-xl: 8vw;")
        sync.apply_config(config)
        assert document.get_property("--popout-width") == "7rem"
        assert document.get_property("--popout") == "minmax(0, 7rem)"
        assert document.get_property("--gap") == "clamp(1rem, 8vw, 15rem)"
        saved = store.load_config()
        assert saved is not None
        assert saved.get("gapScale.xl") == "8vw"

    def test_export_config_is_complete(self, sync: LiveSynchronizer) -> None:
        sync.apply_config(GridConfig.from_flat({"maxGap": "10rem"}))
        exported = sync.export_config()
        assert exported.is_complete()
        assert exported.get("maxGap") == "10rem"


class TestLoadFromDocument:
    def test_live_property_preferred(self, store: SnapshotStore) -> None:
        document = DocumentStyle(
            {"--popout-width": "7rem", "--config-popout": "6rem", "--config-max-gap": "12rem"}
        )
        sync = LiveSynchronizer(EditSession(document=document, store=store))
        sync.load_from_document()
        assert sync.value("popoutWidth") == "7rem"
        assert sync.value("maxGap") == "12rem"
        assert sync.value("baseGap") == "1rem"

    def test_seeds_every_token_without_marking_modified(self, sync: LiveSynchronizer) -> None:
        sync.load_from_document()
        assert set(sync.state.values) == {token.name for token in TOKENS}
        assert not sync.state.modified
        assert not sync.has_unsaved_edits()

    def test_breakpoints_read_from_config_vars(self, store: SnapshotStore) -> None:
        document = DocumentStyle({"--config-breakpoint-lg": "1000px"})
        sync = LiveSynchronizer(EditSession(document=document, store=store))
        sync.load_from_document()
        assert sync.value("breakpoints.lg") == "1000"


class TestSaveAndRestore:
    def test_save_failure_keeps_dirty(self, tmp_path: Path, document: DocumentStyle) -> None:
        blocker = tmp_path / "blocked"
        blocker.write_text("")
        sync = LiveSynchronizer(EditSession(document=document, store=SnapshotStore(blocker)))
        sync.set_field("baseGap", "2rem")
        assert sync.state.dirty
        assert sync.value("baseGap") == "2rem"

    def test_save_without_store(self, document: DocumentStyle) -> None:
        sync = LiveSynchronizer(EditSession(document=document))
        assert sync.save() is False

    def test_restore_defaults(self, sync: LiveSynchronizer, document: DocumentStyle) -> None:
        sync.set_field("popoutWidth", "8rem")
        sync.set_field("baseGap", "2rem")
        sync.restore_defaults()
        assert document.overrides == {}
        assert sync.state.values == {}
        assert sync.value("popoutWidth") == "5rem"

    def test_restore_falls_back_to_authored(self, store: SnapshotStore) -> None:
        document = DocumentStyle({"--popout-width": "4rem"})
        sync = LiveSynchronizer(EditSession(document=document, store=store))
        sync.set_field("popoutWidth", "8rem")
        sync.restore_defaults()
        assert document.get_property("--popout-width") == "4rem"

    def test_mark_exported(self, sync: LiveSynchronizer) -> None:
        sync.set_field("baseGap", "2rem")
        sync.mark_exported()
        assert not sync.has_unsaved_edits()


class TestEditState:
    def test_clear(self) -> None:
        state = EditState(values={"baseGap": "2rem"}, dirty=True, modified=True)
        state.clear()
        assert state == EditState()
