"""
Live document model.

The synchronizer talks to the running document through the small
``StyleDocument`` protocol: set, remove and read root-level custom
properties, plus the two measurements drag conversion needs. ``DocumentStyle``
is the in-process implementation: inline overrides layered over the values
of the document's authored stylesheet.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from .parser import scan_declarations

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_ROOT_FONT_SIZE = 16.0


@runtime_checkable
class StyleDocument(Protocol):
    """Root element style of an open document."""

    viewport_width: float
    root_font_size: float

    def set_property(self, name: str, value: str) -> None: ...

    def remove_property(self, name: str) -> None: ...

    def get_property(self, name: str) -> str | None:
        """Value currently in effect, or None if the property is not set."""
        ...


class DocumentStyle:
    """
    In-memory root style: inline overrides over authored values.

    Args:
        authored: Custom properties declared by the document's own stylesheet
        viewport_width: Viewport width in CSS pixels
        root_font_size: Root font size in CSS pixels
    """

    def __init__(
        self,
        authored: Mapping[str, str] | None = None,
        *,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        root_font_size: float = DEFAULT_ROOT_FONT_SIZE,
    ) -> None:
        self.authored: dict[str, str] = dict(authored or {})
        self.overrides: dict[str, str] = {}
        self.viewport_width = viewport_width
        self.root_font_size = root_font_size

    @classmethod
    def from_stylesheet(cls, css: str, **kwargs: float) -> DocumentStyle:
        """
        Build a document whose authored values come from stylesheet text.

        The first declaration of each property wins, which for a generated
        stylesheet is the unconditional ``:root`` value.
        """
        authored: dict[str, str] = {}
        for name, value in scan_declarations(css):
            authored.setdefault(name, value)
        logger.debug("Loaded %d authored custom properties", len(authored))
        return cls(authored, **kwargs)

    def set_property(self, name: str, value: str) -> None:
        self.overrides[name] = value

    def remove_property(self, name: str) -> None:
        self.overrides.pop(name, None)

    def get_property(self, name: str) -> str | None:
        value = self.overrides.get(name, self.authored.get(name))
        if value is None:
            return None
        value = value.strip()
        return value or None

    def clear_overrides(self) -> None:
        self.overrides.clear()
