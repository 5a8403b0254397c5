"""
Drag interactions: column resize handles and panel dragging.

At most one drag is active at a time. ``DragController`` is a small state
machine, Idle -> Dragging(kind) -> Idle, driven by pointer down/move/up
events. Pointer moves while idle are ignored, and a pointer down while a
drag is active does not start a second one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .storage import EDITOR_POS_KEY, SPACING_POS_KEY
from .synchronizer import LiveSynchronizer
from .units import apply_pixel_delta

logger = logging.getLogger(__name__)


class DragKind(StrEnum):
    COLUMN_RESIZE = "column_resize"
    PANEL = "panel"


# Handles on the right edge of their column grow when dragged right;
# all others sit on the left edge and grow when dragged left.
RIGHT_EDGE_TOKENS = frozenset({"contentMax", "contentBase"})

# Overlay column -> token its resize handle edits
RESIZE_TOKENS: dict[str, str] = {
    "full-limit": "fullLimit",
    "feature": "featureScale",
    "popout": "popoutWidth",
}

PANEL_STORAGE_KEYS: dict[str, str] = {
    "editor": EDITOR_POS_KEY,
    "spacing": SPACING_POS_KEY,
}

DEFAULT_PANEL_POSITIONS: dict[str, tuple[float, float]] = {
    "editor": (20, 100),
    "spacing": (16, 16),
}


def resize_token_for_column(column: str) -> str | None:
    """Token edited by dragging an overlay column's handle."""
    return RESIZE_TOKENS.get(column)


@dataclass
class _ActiveDrag:
    kind: DragKind
    target: str
    start_x: float
    start_y: float
    start_magnitude: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0


class DragController:
    """
    Routes pointer events to the single active drag.

    Args:
        synchronizer: Receives resize edits
    """

    def __init__(self, synchronizer: LiveSynchronizer) -> None:
        self.synchronizer = synchronizer
        self.panel_positions: dict[str, tuple[float, float]] = dict(DEFAULT_PANEL_POSITIONS)
        self._active: _ActiveDrag | None = None

    @property
    def active_kind(self) -> DragKind | None:
        return self._active.kind if self._active else None

    @property
    def is_dragging(self) -> bool:
        return self._active is not None

    def start_resize(self, token_name: str, pointer_x: float) -> bool:
        """Begin resizing the column controlled by ``token_name``."""
        if self._active is not None:
            return False
        self._active = _ActiveDrag(
            kind=DragKind.COLUMN_RESIZE,
            target=token_name,
            start_x=pointer_x,
            start_y=0.0,
            start_magnitude=self.synchronizer.magnitude(token_name),
        )
        return True

    def start_panel_drag(self, panel: str, pointer_x: float, pointer_y: float) -> bool:
        """Begin moving a floating panel (``editor`` or ``spacing``)."""
        if self._active is not None:
            return False
        x, y = self.panel_positions.get(panel, (0.0, 0.0))
        self._active = _ActiveDrag(
            kind=DragKind.PANEL,
            target=panel,
            start_x=pointer_x,
            start_y=pointer_y,
            offset_x=pointer_x - x,
            offset_y=pointer_y - y,
        )
        return True

    def move(self, pointer_x: float, pointer_y: float = 0.0) -> None:
        drag = self._active
        if drag is None:
            return
        if drag.kind == DragKind.COLUMN_RESIZE:
            self._resize(drag, pointer_x)
        else:
            self.panel_positions[drag.target] = (
                pointer_x - drag.offset_x,
                pointer_y - drag.offset_y,
            )

    def end(self) -> None:
        """Pointer released: finish the active drag, if any."""
        drag = self._active
        self._active = None
        if drag is None or drag.kind != DragKind.PANEL:
            return
        store = self.synchronizer.session.store
        key = PANEL_STORAGE_KEYS.get(drag.target)
        if store is not None and key is not None:
            x, y = self.panel_positions[drag.target]
            store.set(key, {"x": x, "y": y})

    def _resize(self, drag: _ActiveDrag, pointer_x: float) -> None:
        delta = pointer_x - drag.start_x
        if drag.target not in RIGHT_EDGE_TOKENS:
            delta = -delta
        document = self.synchronizer.document
        unit = self.synchronizer.unit(drag.target)
        magnitude = apply_pixel_delta(
            drag.start_magnitude,
            unit,
            delta,
            viewport_width=document.viewport_width,
            root_font_size=document.root_font_size,
        )
        self.synchronizer.set_numeric(drag.target, magnitude)
