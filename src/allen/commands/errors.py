"""Command parsing error contracts."""

from __future__ import annotations


class CommandError(ValueError):
    """Base class for failures surfaced to the chat user."""

    def __init__(self, message: str) -> None:
        """Create command failure.

        Args:
            message: Human-readable cause shown to the end user.
        """
        super().__init__(message)
        self.message = message


class ParseError(CommandError):
    """Raised when input text cannot be mapped onto a command or parameter."""


class ValidationError(CommandError):
    """Raised when parsed parameters fail the command's semantic check."""
