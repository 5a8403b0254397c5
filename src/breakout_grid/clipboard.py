"""Clipboard targets for copied config text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clipboard(Protocol):
    """Anything that accepts copied text."""

    def write_text(self, text: str) -> None: ...


class MemoryClipboard:
    """Clipboard that keeps copied text in memory (most recent last)."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def write_text(self, text: str) -> None:
        self.history.append(text)

    @property
    def text(self) -> str | None:
        return self.history[-1] if self.history else None
