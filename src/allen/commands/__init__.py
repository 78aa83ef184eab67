"""Command parsing engine exports."""

from allen.commands.command import Command
from allen.commands.errors import CommandError, ParseError, ValidationError
from allen.commands.parameter import Parameter, ParameterHelp
from allen.commands.registry import (
    CommandEntry,
    CommandRegistry,
    InMemoryRegistryStore,
    RegistryStore,
    SqliteRegistryStore,
)
from allen.commands.router import CommandRouter

__all__ = [
    "Command",
    "CommandEntry",
    "CommandError",
    "CommandRegistry",
    "CommandRouter",
    "InMemoryRegistryStore",
    "Parameter",
    "ParameterHelp",
    "ParseError",
    "RegistryStore",
    "SqliteRegistryStore",
    "ValidationError",
]
