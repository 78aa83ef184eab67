"""Bundled reference commands."""

from allen.commands.handlers.echo import EchoCommand
from allen.commands.handlers.schedule import ScheduleCommand

__all__ = [
    "EchoCommand",
    "ScheduleCommand",
]
