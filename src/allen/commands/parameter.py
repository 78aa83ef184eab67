"""Parameter contract for text commands."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from allen.commands.command import Command


class ParameterHelp(BaseModel):
    """Help text rendered by the owning command's help action."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    header: str
    detail: str = ""


class Parameter(ABC):
    """A named, independently parseable slot of a command's input.

    The name must be one word: the command tokenizer uses it as the delimiter
    that ends the previous parameter's value. Use hyphens or any other symbol
    for multi-word names (``--start-date``, ``-start``, ``start``), just keep
    one convention across the commands of a bot.

    A parameter only converts the text it is given. It writes the converted
    data into ``self.model`` (the owning command's model) and never performs
    the command's action itself.

    ``help.header`` is listed by ``<command> help``; ``help.detail`` is shown
    by ``<command> help <parameter>``.

    Whole-input parameters receive the complete argument text instead of a
    token-bounded fragment and are never used as delimiters. Use them for
    values that may legitimately contain other parameters' names.
    """

    def __init__(
        self,
        name: str,
        *,
        whole_input: bool = False,
        header: str | None = None,
        detail: str = "",
    ) -> None:
        """Create an unbound parameter.

        Args:
            name: One-word parameter name, unique within its command.
            whole_input: Whether this parameter takes the entire argument text.
            header: Short help line; defaults to the parameter name.
            detail: Detailed help body for parameter-specific help.
        """
        self.name = name
        self.whole_input = whole_input
        self.help = ParameterHelp(header=header or name, detail=detail)
        self._command_ref: weakref.ReferenceType[Command] | None = None

    def bind(self, command: Command) -> None:
        """Attach the non-owning back-reference to the owning command.

        Args:
            command: Command that will own this parameter.

        Raises:
            RuntimeError: If the parameter already belongs to another live command.
        """
        current = self._command_ref() if self._command_ref is not None else None
        if current is not None and current is not command:
            raise RuntimeError(
                f"Parameter '{self.name}' is already bound to command '{current.name}'."
            )
        self._command_ref = weakref.ref(command)

    @property
    def command(self) -> Command:
        """Owning command.

        Raises:
            RuntimeError: If the parameter is unbound or its command is gone.
        """
        command = self._command_ref() if self._command_ref is not None else None
        if command is None:
            raise RuntimeError(f"Parameter '{self.name}' is not bound to a command.")
        return command

    @property
    def model(self) -> dict[str, Any]:
        """Model of the owning command, as of the current parse."""
        return self.command.model

    @abstractmethod
    def parse(self, value_text: str) -> None:
        """Convert the raw value text into model data.

        Args:
            value_text: Trimmed segment assigned by the tokenizer, or the whole
                argument text for whole-input parameters.

        Raises:
            ParseError: If the text is empty when required or malformed.
        """

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"whole_input={self.whole_input})"
        )
