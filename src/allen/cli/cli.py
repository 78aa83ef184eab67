"""Typer CLI entrypoint for Allen."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Any

import click
import typer
from rich.console import Console
from rich.table import Table

from allen.cli.bootstrap import configure_logging, load_router
from allen.commands.errors import CommandError
from allen.commands.router import CommandRouter
from allen.config import ConfigError

app = typer.Typer(help="Allen command interpreter CLI")
_CONSOLE = Console()

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        file_okay=True,
        dir_okay=False,
        help="Path to Allen config YAML/JSON file.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show tokenizer debug records."),
]


def _build_router(config_file: Path | None) -> CommandRouter:
    """Build router or exit with a rendered config error."""
    try:
        return load_router(config_file)
    except ConfigError as exc:
        _CONSOLE.print(f"Invalid config: {exc}", style="bold red", markup=False)
        raise typer.Exit(code=2) from exc


def _render_result(result: Any) -> None:
    """Render one command result for the terminal.

    Args:
        result: Help text, model mapping or any other run result.
    """
    if isinstance(result, dict):
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for key, value in result.items():
            table.add_row(str(key), str(value))
        _CONSOLE.print(table)
        return
    _CONSOLE.print(str(result), markup=False, highlight=False)


def _execute_once(router: CommandRouter, text: str) -> int:
    """Dispatch one line and render the outcome.

    Args:
        router: Router holding the configured commands.
        text: Raw input line.

    Returns:
        Shell exit code: 0 on success, 1 on command error.
    """
    try:
        result = asyncio.run(router.dispatch(text))
    except CommandError as exc:
        _CONSOLE.print(f"Error: {exc.message}", style="bold red", markup=False)
        return 1
    _render_result(result)
    return 0


@app.command("exec")
def exec_command(
    text: Annotated[str, typer.Argument(help="Single input line to execute.")],
    config_file: ConfigFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Execute one input line and print the result.

    Args:
        text: Raw input line.
        config_file: Optional config file path override.
        verbose: Whether to show debug records.

    Raises:
        Exit: Raised with command status code for shell integration.
    """
    configure_logging(verbose=verbose)
    router = _build_router(config_file)
    try:
        exit_code = _execute_once(router, text)
    finally:
        router.close()
    raise typer.Exit(code=exit_code)


@app.command("commands")
def commands_command(
    config_file: ConfigFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List commands published to the registry.

    Args:
        config_file: Optional config file path override.
        verbose: Whether to show debug records.
    """
    configure_logging(verbose=verbose)
    router = _build_router(config_file)
    table = Table(title="Commands", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    try:
        registry = router.registry
        entries = registry.list_commands() if registry is not None else []
    finally:
        router.close()
    for entry in entries:
        table.add_row(entry.name, entry.description)
    _CONSOLE.print(table)


@app.command("repl")
def repl_command(
    config_file: ConfigFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run an interactive loop dispatching each line to the commands.

    Args:
        config_file: Optional config file path override.
        verbose: Whether to show debug records.
    """
    configure_logging(verbose=verbose)
    router = _build_router(config_file)
    try:
        _repl_loop(router)
    finally:
        router.close()


def _repl_loop(router: CommandRouter) -> None:
    """Prompt for lines until exit, dispatching each one."""
    names = ", ".join(router.names())
    _CONSOLE.print(
        f"Allen REPL. Commands: {names}. Type 'exit' to leave.", style="cyan"
    )
    while True:
        try:
            raw = typer.prompt("allen")
        except (EOFError, KeyboardInterrupt, click.Abort):
            _CONSOLE.print("\nbye", style="yellow")
            break
        text = raw.strip()
        if text.lower() in {"exit", "quit"}:
            _CONSOLE.print("bye", style="yellow")
            break
        if not text:
            continue
        _execute_once(router, text)


def main() -> None:
    """Run the Typer application."""
    app()


if __name__ == "__main__":
    main()
