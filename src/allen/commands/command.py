"""Command base class: tokenizer, dispatcher and help renderer.

A command is addressed by a chat line whose first word is the command name.
The rest of the line is split into parameter segments: each registered
parameter name is a boundary word, and the words following it (up to the next
boundary word) are that parameter's value::

    test from 2015-12-01T09:00 to 2015-12-01T10:30
    ^^^^ ^^^^ ^^^^^^^^^^^^^^^^ ^^ ^^^^^^^^^^^^^^^^
    name param value           param value

Subclasses register parameters in their constructor, implement ``run`` and
optionally override ``validate``::

    class TestCommand(Command):
        def __init__(self) -> None:
            super().__init__("test", help="A test command")
            self.add_parameter(FromParameter())
            self.add_parameter(ToParameter())

        def validate(self) -> bool:
            return self.model["from"] < self.model["to"]

        def run(self) -> dict[str, Any]:
            self.model["executed"] = True
            return self.model

    result = await TestCommand().execute("test from 2015 to 2016")

A command instance owns its model, so one instance must not serve two
overlapping ``execute`` calls. Build one instance per call instead.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any

from allen.commands.errors import ParseError, ValidationError
from allen.commands.parameter import Parameter

_LOGGER = logging.getLogger(__name__)

HELP_KEYWORD = "help"


class Command(ABC):
    """Named, user-invocable operation with a parameter schema and an action."""

    def __init__(self, name: str, *, help: str | None = None) -> None:  # noqa: A002
        """Create command without parameters.

        Args:
            name: Command name; the leading token of every accepted input.
            help: Free-text synopsis; defaults to the command name.
        """
        self.name = name
        self.help = help or name
        self.parameters: dict[str, Parameter] = {}
        self.model: dict[str, Any] = {}

    def add_parameter(self, parameter: Parameter) -> None:
        """Register a parameter, replacing any parameter with the same name.

        Args:
            parameter: Parameter to bind to this command.

        Raises:
            RuntimeError: If the parameter belongs to another live command.
        """
        parameter.bind(self)
        self.parameters[parameter.name] = parameter

    def get_parameter(self, name: str) -> Parameter | None:
        """Return the parameter registered under ``name``, if any."""
        return self.parameters.get(name)

    def will_parse_command(self, text: str) -> bool:
        """Cheap check for whether ``text`` is addressed to this command.

        Compares the beginning of the input with the command name only, so a
        command named ``test`` also accepts ``testing``. Routers use this to
        pick a command before paying for a full parse.

        Args:
            text: Raw input line.

        Returns:
            True when the input starts with the command name.
        """
        return text[: len(self.name)] == self.name

    async def execute(self, text: str) -> Any:
        """Parse, validate and run the command, or render help.

        Any input containing ``help`` is answered with help text instead of
        being executed, including words such as ``unhelpful``.

        Args:
            text: Raw input line.

        Returns:
            Rendered help text, or whatever ``run`` produced.

        Raises:
            ParseError: If the input is not addressed to this command, a
                parameter rejects its value, or help names an unknown parameter.
            ValidationError: If ``validate`` rejects the parsed model.
        """
        self._ensure_addressed(text)
        if HELP_KEYWORD in text:
            return self.render_help(text)
        self._parse(text)
        result = self.run()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def parse(self, text: str) -> dict[str, Any]:
        """Parse and validate without running the command.

        Args:
            text: Raw input line.

        Returns:
            The populated model.

        Raises:
            ParseError: If the input or a parameter value cannot be parsed.
            ValidationError: If ``validate`` rejects the parsed model.
        """
        self._ensure_addressed(text)
        return self._parse(text)

    def render_help(self, text: str) -> str:
        """Render general or parameter-specific help for a help request.

        Args:
            text: Raw input line, e.g. ``test help`` or ``test help from``.

        Returns:
            General help listing or one parameter's detail text.

        Raises:
            ParseError: If the requested parameter is not registered.
        """
        topic = text[len(self.name) :].replace(HELP_KEYWORD, "", 1).strip()
        if not topic:
            _LOGGER.debug("Rendering general help for '%s'", self.name)
            lines = [f"{self.help}\n\nParameters:\n"]
            for parameter in self.parameters.values():
                lines.append(f"\t- {parameter.name}: {parameter.help.header}\n")
            return "".join(lines)
        parameter = self.get_parameter(topic)
        if parameter is None:
            raise ParseError(
                f"The command {self.name} has no parameter named '{topic}'."
            )
        _LOGGER.debug("Rendering help for '%s %s'", self.name, topic)
        return f"{parameter.name}:\n\t{parameter.help.detail}"

    def validate(self) -> bool:
        """Cross-field semantic check, run after every parameter has parsed.

        Returns:
            True when the model is valid. Defaults to always valid.
        """
        return True

    @abstractmethod
    def run(self) -> Any:
        """Perform the command's action on the parsed model.

        May return a plain value or an awaitable; both are awaited by
        ``execute``.
        """

    def _ensure_addressed(self, text: str) -> None:
        if not self.will_parse_command(text):
            raise ParseError(
                f"The given input ({text}) cannot be parsed by the command {self.name}"
            )

    def _parse(self, text: str) -> dict[str, Any]:
        """Reset the model, feed every parameter its segment, then validate."""
        self.model = {}
        argument_text = text[len(self.name) + 1 :]

        for parameter in self.parameters.values():
            if parameter.whole_input:
                _LOGGER.debug("Parameter '%s' takes the whole input", parameter.name)
                parameter.parse(argument_text)

        current: Parameter | None = None
        buffer = ""
        for word in argument_text.split():
            candidate = self.get_parameter(word)
            if candidate is None or candidate.whole_input:
                buffer += word + " "
                continue
            if current is not None:
                self._finalize(current, buffer)
            current = candidate
            buffer = ""
        if current is not None:
            self._finalize(current, buffer)

        if not self.validate():
            raise ValidationError("The arguments passed to the parameter are not valid")
        return self.model

    @staticmethod
    def _finalize(parameter: Parameter, buffer: str) -> None:
        value = buffer.strip()
        _LOGGER.debug("Parameter '%s' receives %r", parameter.name, value)
        parameter.parse(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
