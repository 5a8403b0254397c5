"""
Live synchronizer for breakout grid edits.

Keeps the three representations of a grid config consistent while a user
edits it: the in-memory edit state, the custom properties on the live
document, and the persisted snapshot. Every field edit goes through
``LiveSynchronizer.set_field`` so the document and the snapshot are updated
from the same value the edit state holds.

The session (document, storage, clipboard) is passed in explicitly; there is
no module-level "current session".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .clipboard import Clipboard
from .diagnostics import current_breakpoint, gap_scale_key
from .document import StyleDocument
from .formulas import DERIVED_BY_NAME, LIVE_DERIVED, DerivedProperty, affected_by
from .schema import TOKENS, GridConfig, TokenGroup, TokenKind, TokenSpec, get_token
from .storage import SnapshotStore
from .units import clamp_floor, decompose, recompose, strip_px

logger = logging.getLogger(__name__)


@dataclass
class EditState:
    """
    Working set of an editing session.

    Attributes:
        values: Token name -> literal for every field seeded or edited
        dirty: Values changed since the snapshot was last written
        modified: Values changed since they were last copied/exported
    """

    values: dict[str, str] = field(default_factory=dict)
    dirty: bool = False
    modified: bool = False

    def clear(self) -> None:
        self.values.clear()
        self.dirty = False
        self.modified = False


@dataclass
class EditSession:
    """Everything a synchronizer writes to during one editing session."""

    document: StyleDocument
    store: SnapshotStore | None = None
    clipboard: Clipboard | None = None
    autosave: bool = True


class LiveSynchronizer:
    """
    Propagates token edits to the live document and persisted storage.

    Args:
        session: Document, storage and clipboard for this session
        state: Existing edit state (a fresh, empty one by default)
    """

    def __init__(self, session: EditSession, state: EditState | None = None) -> None:
        self.session = session
        self.state = state or EditState()

    @property
    def document(self) -> StyleDocument:
        return self.session.document

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def value(self, name: str) -> str:
        """Current literal for a token: edited value, else schema default."""
        token = get_token(name)
        return self.state.values.get(name, token.default)

    def magnitude(self, name: str) -> float:
        return decompose(self.value(name)).magnitude

    def unit(self, name: str) -> str:
        return decompose(self.value(name)).unit

    def export_config(self) -> GridConfig:
        """Complete config: edit state over schema defaults."""
        return GridConfig.from_flat(self.state.values).complete()

    @property
    def breakpoint(self) -> str:
        """Breakpoint in effect for the document's viewport."""
        return current_breakpoint(self.document.viewport_width, self.export_config())

    def has_unsaved_edits(self) -> bool:
        """True when edits were made since the config was last copied or exported."""
        return bool(self.state.values) and self.state.modified

    def mark_exported(self) -> None:
        self.state.modified = False

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def _normalize(self, token: TokenSpec, literal: str) -> str:
        literal = str(literal).strip()
        if token.kind == TokenKind.PIXELS:
            return strip_px(literal)
        if token.kind == TokenKind.LENGTH and token.floor is not None:
            clamped = clamp_floor(literal, token.floor)
            if clamped != literal:
                logger.debug("Clamped %s from %s to %s", token.name, literal, clamped)
            return clamped
        return literal

    def set_field(self, name: str, literal: str, *, persist: bool = True) -> str:
        """
        Apply one field edit.

        Floors are applied silently, the literal is pushed to the token's live
        property, dependent derived properties are recomputed, and the
        snapshot is saved when the session autosaves.

        Args:
            name: Token name
            literal: New value
            persist: Save the snapshot after the edit

        Returns:
            The value actually stored (after floor clamping)

        Raises:
            UnknownTokenError: If ``name`` is not in the schema
        """
        token = get_token(name)
        value = self._normalize(token, literal)

        self.state.values[name] = value
        self.state.dirty = True
        self.state.modified = True

        if token.live_var:
            self.document.set_property(token.live_var, value)
        self._push_dependents(token)

        if persist and self.session.autosave:
            self.save()
        return value

    def set_numeric(self, name: str, magnitude: float) -> str:
        """Step edit: new magnitude, same unit."""
        return self.set_field(name, recompose(magnitude, self.unit(name)))

    def set_unit(self, name: str, unit: str) -> str:
        """Switch a token's unit, keeping its magnitude."""
        return self.set_field(name, recompose(self.magnitude(name), unit))

    def apply_config(self, config: GridConfig) -> None:
        """
        Apply every field present in ``config`` (parsed text or a snapshot).

        Performs the same derived-property recomputation as ``set_field`` and
        saves the snapshot once at the end.
        """
        values = config.to_flat()
        for name, value in values.items():
            self.set_field(name, value, persist=False)
        logger.debug("Applied %d config values", len(values))
        if values and self.session.autosave:
            self.save()

    def set_viewport(self, width: float) -> None:
        """Track a viewport resize; --gap follows the breakpoint now in effect."""
        self.document.viewport_width = width
        if self.state.values:
            self._push_derived(DERIVED_BY_NAME["--gap"])

    # -------------------------------------------------------------------------
    # Document and storage
    # -------------------------------------------------------------------------

    def load_from_document(self) -> None:
        """
        Seed the edit state from what the document currently renders.

        For each token the live property is preferred over the documentation
        ``--config-*`` property; tokens set by neither use the default.
        """
        for token in TOKENS:
            found = None
            if token.live_var:
                found = self.document.get_property(token.live_var)
            if found is None and token.config_var:
                found = self.document.get_property(token.config_var)
            if found is None:
                found = token.default
            self.state.values[token.name] = self._normalize(token, found)
        self.state.modified = False

    def save(self) -> bool:
        """Write the complete config as the persisted snapshot (best-effort)."""
        store = self.session.store
        if store is None:
            return False
        if store.save_config(self.export_config()):
            self.state.dirty = False
            return True
        return False

    def restore_defaults(self) -> None:
        """
        Drop all edits and every live override.

        The document falls back to its own authored stylesheet values.
        """
        for token in TOKENS:
            if token.live_var:
                self.document.remove_property(token.live_var)
        for prop in LIVE_DERIVED:
            self.document.remove_property(prop.name)
        self.state.clear()

    # -------------------------------------------------------------------------
    # Derived properties
    # -------------------------------------------------------------------------

    def _push_dependents(self, token: TokenSpec) -> None:
        affected = affected_by(token.name)
        if token.group == TokenGroup.BREAKPOINT:
            affected.append(DERIVED_BY_NAME["--gap"])
        for prop in affected:
            self._push_derived(prop)

    def _push_derived(self, prop: DerivedProperty) -> None:
        expression = prop.expression(self.value, gap_scale_key(self.breakpoint))
        self.document.set_property(prop.name, expression)
