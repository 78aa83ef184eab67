"""Handler for `echo <any text>`."""

from __future__ import annotations

from allen.commands.command import Command
from allen.commands.parameter import Parameter


class TextParameter(Parameter):
    """Whole-input parameter keeping the argument text verbatim."""

    def __init__(self) -> None:
        super().__init__(
            "text",
            whole_input=True,
            header="text to repeat",
            detail="Everything after the command name, repeated verbatim.",
        )

    def parse(self, value_text: str) -> None:
        self.model["text"] = value_text


class EchoCommand(Command):
    """Repeat the user's text back."""

    def __init__(self) -> None:
        super().__init__("echo", help="Repeat the given text")
        self.add_parameter(TextParameter())

    def run(self) -> str:
        return self.model["text"]
