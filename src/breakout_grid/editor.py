"""
Editing-session flow for the breakout grid config editor.

``GridEditor`` wires the synchronizer, drag controller, storage and
clipboard into the operations the editor panel exposes: restoring a saved
config at start-up, opening and closing the editor, pasting a config back
in, copying it out, and resetting.
"""

from __future__ import annotations

import logging

from .diagnostics import content_readability_warning, track_overflow_warning
from .drag import DEFAULT_PANEL_POSITIONS, PANEL_STORAGE_KEYS, DragController
from .errors import ConfigFormatError
from .generator import export_config_block, generate_css, section_declarations
from .parser import parse_config
from .storage import (
    ALL_KEYS,
    CONFIG_KEY,
    EDITOR_OPEN_KEY,
    OVERRIDE_KEYS,
    SPACING_COLLAPSED_KEY,
    VISIBLE_KEY,
)
from .synchronizer import EditSession, LiveSynchronizer

logger = logging.getLogger(__name__)


class GridEditor:
    """
    Editor state for one document.

    Args:
        session: Document, storage and clipboard for this editor
    """

    def __init__(self, session: EditSession) -> None:
        self.session = session
        self.sync = LiveSynchronizer(session)
        self.drag = DragController(self.sync)
        self.visible = False
        self.editor_open = False
        self.edit_mode = False
        self.spacing_collapsed = False
        self.restore_error: str | None = None

    # -------------------------------------------------------------------------
    # Start-up
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Restore preferences and any saved config from storage."""
        store = self.session.store
        if store is None:
            return

        visible = store.get(VISIBLE_KEY)
        if isinstance(visible, bool):
            self.visible = visible

        collapsed = store.get(SPACING_COLLAPSED_KEY)
        if isinstance(collapsed, bool):
            self.spacing_collapsed = collapsed

        for panel, key in PANEL_STORAGE_KEYS.items():
            position = store.get(key)
            if isinstance(position, dict) and {"x", "y"} <= position.keys():
                self.drag.panel_positions[panel] = (position["x"], position["y"])

        if store.get(EDITOR_OPEN_KEY) is True:
            self.open_editor()

        config = store.load_config()
        if config is not None:
            self.edit_mode = True
            self.sync.apply_config(config)
            logger.info("Restored saved grid config")

    @property
    def has_config_override(self) -> bool:
        """Whether a saved config snapshot exists."""
        store = self.session.store
        return store is not None and store.has(CONFIG_KEY)

    def toggle_visible(self) -> bool:
        self.visible = not self.visible
        if self.session.store is not None:
            self.session.store.set(VISIBLE_KEY, self.visible)
        return self.visible

    def warnings(self) -> list[str]:
        """Layout warnings for the current edits at the document's viewport."""
        config = self.sync.export_config()
        found = [
            content_readability_warning(config),
            track_overflow_warning(config, self.session.document.viewport_width),
        ]
        return [warning for warning in found if warning]

    # -------------------------------------------------------------------------
    # Editor panel
    # -------------------------------------------------------------------------

    def open_editor(self) -> None:
        """Enter edit mode, starting from what the document renders."""
        self.editor_open = True
        self.edit_mode = True
        self.sync.load_from_document()
        if self.session.store is not None:
            self.session.store.set(EDITOR_OPEN_KEY, True)

    def close_editor(self, force: bool = False) -> bool:
        """
        Leave edit mode and drop live overrides.

        Returns:
            False if there are uncopied edits and ``force`` is not set
        """
        if not force and self.sync.has_unsaved_edits():
            return False
        self.editor_open = False
        self.edit_mode = False
        self.sync.restore_defaults()
        if self.session.store is not None:
            self.session.store.set(EDITOR_OPEN_KEY, False)
        return True

    def copy_and_close(self) -> bool:
        self.copy_config()
        return self.close_editor(force=True)

    def toggle_edit_mode(self) -> bool:
        self.edit_mode = not self.edit_mode
        if self.edit_mode:
            self.sync.load_from_document()
        else:
            self.sync.restore_defaults()
        return self.edit_mode

    def start_column_resize(self, token_name: str, pointer_x: float) -> bool:
        """Column resize handles only respond in edit mode."""
        if not self.edit_mode:
            return False
        return self.drag.start_resize(token_name, pointer_x)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def restore_from_text(self, text: str) -> bool:
        """
        Apply a pasted config.

        On a format error the message is kept in ``restore_error`` and nothing
        is applied.
        """
        self.restore_error = None
        try:
            config = parse_config(text)
        except ConfigFormatError as e:
            self.restore_error = e.message
            return False
        self.edit_mode = True
        self.sync.apply_config(config)
        return True

    def _write_clipboard(self, text: str) -> bool:
        clipboard = self.session.clipboard
        if clipboard is None:
            return False
        try:
            clipboard.write_text(text)
        except Exception as e:
            logger.warning("Clipboard write failed: %s", e)
            return False
        return True

    def copy_config(self) -> str:
        """Copy the ``:root`` config block; marks the edits as exported."""
        text = export_config_block(self.sync.export_config())
        if self._write_clipboard(text):
            self.sync.mark_exported()
        return text

    def copy_section(self, section: str) -> str:
        text = section_declarations(self.sync.export_config(), section)
        self._write_clipboard(text)
        return text

    def export_css(self, version: str = "dev") -> str:
        """Full stylesheet for the current edits (the download button)."""
        self.sync.mark_exported()
        return generate_css(self.sync.export_config(), version)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_to_defaults(self) -> None:
        """Forget the saved config and reload values from the document."""
        if self.session.store is not None:
            self.session.store.delete_config()
        self.sync.restore_defaults()
        self.sync.load_from_document()

    def has_stored_overrides(self) -> bool:
        store = self.session.store
        return store is not None and store.has_any(OVERRIDE_KEYS)

    def reset_all_storage(self) -> None:
        """Remove every stored key and return the editor to its initial state."""
        if self.session.store is not None:
            self.session.store.clear(ALL_KEYS)
        self.sync.restore_defaults()
        self.editor_open = False
        self.edit_mode = False
        self.spacing_collapsed = False
        self.drag.panel_positions = dict(DEFAULT_PANEL_POSITIONS)
