"""
Error types for breakout grid parsing, lookup and configuration.
"""

from dataclasses import dataclass
from pathlib import Path


class BreakoutGridError(Exception):
    """Base exception for all breakout grid errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(BreakoutGridError):
    """
    Raised when stylesheet text cannot be turned into a config.

    Examples:
    - Input contains no recognized custom properties
    - Pasted text is not CSS at all
    """

    pass


class ConfigFormatError(ParseError):
    """Raised when none of the known grid variables appear in the input."""

    pass


class UnknownTokenError(BreakoutGridError, KeyError):
    """Raised when a token name is not part of the schema."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown token: {name!r}")

    def __str__(self) -> str:
        return self.message


class UnknownSectionError(BreakoutGridError, KeyError):
    """Raised when a copy section name is not defined."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown config section: {name!r}")

    def __str__(self) -> str:
        return self.message


class SettingsError(BreakoutGridError):
    """
    Raised when breakout-grid.toml cannot be read or validated.

    Examples:
    - Invalid TOML syntax
    - Token override with an unsupported value type
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the file being read
        line: Line number (1-indexed), 0 when unknown
    """

    file: Path
    line: int = 0

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "breakout-grid.toml:3"
        """
        if self.line:
            return f"{self.file}:{self.line}"
        return str(self.file)
