"""Unit tests for routing chat lines to commands."""

from __future__ import annotations

import asyncio

import pytest

from allen.commands import CommandRegistry, CommandRouter, ParseError
from allen.commands.handlers import EchoCommand, ScheduleCommand
from tests.unit.commands.command_fixtures import WindowCommand


def _make_router() -> CommandRouter:
    """Build router with the test, schedule and echo commands."""
    router = CommandRouter(CommandRegistry())
    router.register(WindowCommand)
    router.register(ScheduleCommand)
    router.register(EchoCommand)
    return router


@pytest.mark.unit
def test_register_publishes_commands_to_registry() -> None:
    """Registered commands should appear in the attached registry."""
    # Arrange/Act - build router
    router = _make_router()

    # Assert - names in order and registry populated
    assert router.names() == ["test", "schedule", "echo"]
    assert router.registry is not None
    assert [entry.name for entry in router.registry.list_commands()] == [
        "echo",
        "schedule",
        "test",
    ]


@pytest.mark.unit
def test_route_picks_first_prefix_match() -> None:
    """Routing should use the commands' prefix check in registration order."""
    # Arrange - router
    router = _make_router()

    # Act/Assert - prefix routing, including loose matches
    assert router.route("echo hi") == "echo"
    assert router.route("testing") == "test"
    assert router.route("hello") is None


@pytest.mark.unit
def test_dispatch_uses_fresh_instance_per_call() -> None:
    """Each dispatch should start from an empty model."""
    # Arrange - router
    router = _make_router()

    # Act - two dispatches on the same command
    first = asyncio.run(
        router.dispatch("schedule from 2015-12-01T09:00 to 2015-12-01T10:30 note a")
    )
    second = asyncio.run(
        router.dispatch("schedule from 2015-12-01T09:00 to 2015-12-01T10:30")
    )

    # Assert - no note leaked, distinct model objects
    assert first["note"] == "a"
    assert "note" not in second
    assert first is not second


@pytest.mark.unit
def test_dispatch_unknown_input_raises_parse_error() -> None:
    """Input addressed to no command should be rejected."""
    # Arrange - router
    router = _make_router()

    # Act/Assert - parse error
    with pytest.raises(ParseError, match="No registered command"):
        asyncio.run(router.dispatch("weather today"))


@pytest.mark.unit
def test_dispatch_renders_help() -> None:
    """Help requests should pass through the router."""
    # Arrange - router
    router = _make_router()

    # Act - request echo help
    result = asyncio.run(router.dispatch("echo help text"))

    # Assert - parameter detail
    assert result == "text:\n\tEverything after the command name, repeated verbatim."


@pytest.mark.unit
def test_router_close_closes_registry() -> None:
    """Closing the router should close its registry."""

    # Arrange - registry recording close calls
    class _ClosingRegistry(CommandRegistry):
        def __init__(self) -> None:
            super().__init__()
            self.closed = False

        def close(self) -> None:
            self.closed = True

    registry = _ClosingRegistry()
    router = CommandRouter(registry)

    # Act - close router
    router.close()

    # Assert - registry closed
    assert registry.closed is True
