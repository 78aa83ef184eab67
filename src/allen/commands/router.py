"""Route chat lines to the command that will parse them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from allen.commands.command import Command
from allen.commands.errors import ParseError
from allen.commands.registry import CommandRegistry

_LOGGER = logging.getLogger(__name__)

CommandFactory = Callable[[], Command]


class CommandRouter:
    """Selects a command by name prefix and runs it on a fresh instance."""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        """Construct router.

        Args:
            registry: Optional registry that registered commands are published to.
        """
        self._registry = registry
        self._routes: list[tuple[Command, CommandFactory]] = []

    @property
    def registry(self) -> CommandRegistry | None:
        """Registry that commands are published to, if any."""
        return self._registry

    def register(self, factory: CommandFactory) -> Command:
        """Register a command factory, typically a Command subclass.

        One probe instance is built to read the command's name and help text.
        Every dispatch builds its own instance, so the probe's model is never
        shared between calls.

        Args:
            factory: Zero-argument callable returning a new command.

        Returns:
            The probe instance.
        """
        probe = factory()
        self._routes.append((probe, factory))
        if self._registry is not None:
            self._registry.add_command(probe)
        _LOGGER.debug("Routing '%s' to %s", probe.name, type(probe).__name__)
        return probe

    def close(self) -> None:
        """Close the attached registry, if any."""
        if self._registry is not None:
            self._registry.close()

    def names(self) -> list[str]:
        """Return registered command names in registration order."""
        return [probe.name for probe, _ in self._routes]

    def route(self, text: str) -> str | None:
        """Return the name of the first command accepting ``text``."""
        for probe, _ in self._routes:
            if probe.will_parse_command(text):
                return probe.name
        return None

    async def dispatch(self, text: str) -> Any:
        """Execute ``text`` on a fresh instance of the matching command.

        Args:
            text: Raw chat line.

        Returns:
            Help text or the command's run result.

        Raises:
            ParseError: If no registered command accepts the text, or parsing fails.
            ValidationError: If the matched command rejects the parsed model.
        """
        for probe, factory in self._routes:
            if probe.will_parse_command(text):
                return await factory().execute(text)
        raise ParseError(f"No registered command can parse the input ({text}).")
