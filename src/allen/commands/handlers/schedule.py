"""Handler for `schedule from <datetime> to <datetime> [note <text>]`."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from allen.commands.command import Command
from allen.commands.errors import ParseError
from allen.commands.parameter import Parameter


class DateTimeParameter(Parameter):
    """Required ISO-8601 datetime stored under the parameter name."""

    def parse(self, value_text: str) -> None:
        """Convert an ISO-8601 datetime such as ``2015-12-01T09:00``.

        Args:
            value_text: Raw datetime text.

        Raises:
            ParseError: If the text is empty or not ISO-8601.
        """
        if not value_text:
            raise ParseError(f'the "{self.name}" parameter cannot be empty')
        try:
            self.model[self.name] = datetime.fromisoformat(value_text)
        except ValueError as exc:
            raise ParseError(
                f'the "{self.name}" parameter expects an ISO8601 date, '
                f"got {value_text!r}"
            ) from exc


class NoteParameter(Parameter):
    """Optional free-text note."""

    def parse(self, value_text: str) -> None:
        self.model["note"] = value_text


class ScheduleCommand(Command):
    """Schedule a time window with an optional note."""

    def __init__(self) -> None:
        super().__init__("schedule", help="Schedule a time window")
        self.add_parameter(
            DateTimeParameter(
                "from",
                header="when to start",
                detail="When the window starts. ISO8601 date format expected.",
            )
        )
        self.add_parameter(
            DateTimeParameter(
                "to",
                header="when to stop",
                detail="When the window ends. ISO8601 date format expected.",
            )
        )
        self.add_parameter(
            NoteParameter(
                "note",
                header="optional note",
                detail=(
                    "Free text attached to the window; "
                    "must not contain parameter names."
                ),
            )
        )

    def validate(self) -> bool:
        """Require both ends, with the start strictly before the end.

        Both ends must either carry a UTC offset or both omit it.
        """
        start = self.model.get("from")
        end = self.model.get("to")
        if start is None or end is None:
            return False
        if (start.utcoffset() is None) != (end.utcoffset() is None):
            return False
        return start < end

    def run(self) -> dict[str, Any]:
        self.model["scheduled"] = True
        return self.model
