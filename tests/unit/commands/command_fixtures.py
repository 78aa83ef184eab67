"""Shared command fixtures for command engine unit tests."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any

from allen.commands import Command, Parameter, ParseError

GENERAL_HELP = (
    "A test command to prove that the library works\n\nParameters:\n"
    "\t- from: when to start\n"
    "\t- to: when to stop\n"
)
FROM_DETAIL = "From when to start the command. ISO8601 date format expected."


class FromParameter(Parameter):
    """The `from` parameter; only admits ISO8601 dates."""

    def __init__(self) -> None:
        super().__init__("from", header="when to start", detail=FROM_DETAIL)

    def parse(self, value_text: str) -> None:
        if not value_text:
            raise ParseError('the "from" parameter cannot be empty')
        self.model["from"] = datetime.fromisoformat(value_text)


class ToParameter(Parameter):
    """The `to` parameter; only admits ISO8601 dates."""

    def __init__(self) -> None:
        super().__init__(
            "to",
            header="when to stop",
            detail="When to stop the command. ISO8601 date format expected.",
        )

    def parse(self, value_text: str) -> None:
        if not value_text:
            raise ParseError('the "to" parameter cannot be empty')
        self.model["to"] = datetime.fromisoformat(value_text)


class ComplexParameter(Parameter):
    """Whole-input parameter dumping the argument text into the model."""

    def __init__(self) -> None:
        super().__init__(
            "complex",
            whole_input=True,
            header=(
                "An arbitrary complex parameter that needs "
                "the whole command input string."
            ),
            detail="detail",
        )

    def parse(self, value_text: str) -> None:
        self.model["complex_dump"] = value_text


class WindowCommand(Command):
    """The `test` command: a from/to window that must be ordered."""

    def __init__(self) -> None:
        super().__init__("test", help="A test command to prove that the library works")
        self.add_parameter(FromParameter())
        self.add_parameter(ToParameter())
        self.validate_calls = 0
        self.run_calls = 0

    def validate(self) -> bool:
        self.validate_calls += 1
        return self.model["from"] < self.model["to"]

    def run(self) -> dict[str, Any]:
        self.run_calls += 1
        self.model["executed"] = True
        return self.model


class ReversedWindowCommand(WindowCommand):
    """Same command with parameters declared in the opposite order."""

    def __init__(self) -> None:
        Command.__init__(self, "test", help="reversed")
        self.add_parameter(ToParameter())
        self.add_parameter(FromParameter())
        self.validate_calls = 0
        self.run_calls = 0


class ComplexCommand(WindowCommand):
    """Window command with an extra whole-input parameter."""

    def __init__(self) -> None:
        super().__init__()
        self.add_parameter(ComplexParameter())


class AsyncWindowCommand(WindowCommand):
    """Window command whose action is a coroutine."""

    async def run(self) -> dict[str, Any]:  # type: ignore[override]
        await asyncio.sleep(0)
        self.model["executed_async"] = True
        return self.model
