"""CLI bootstrap helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from allen.commands.router import CommandRouter
from allen.config import build_router, load_config

PACKAGE_LOGGER = "allen"


def configure_logging(*, verbose: bool = False) -> None:
    """Route Allen's log records to a Rich handler.

    The handler is attached to the ``allen`` logger only, so host libraries keep
    their own logging setup. Verbose mode exposes the tokenizer's per-parameter
    debug records.

    Args:
        verbose: Whether to emit debug records.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def default_config_file() -> Path:
    """Return default config file path under the working directory.

    Returns:
        Config file path (may not exist).
    """
    return Path.cwd() / ".allen" / "config.yaml"


def load_router(config_file: Path | None) -> CommandRouter:
    """Load config and build the command router.

    Args:
        config_file: Optional config path override.

    Returns:
        Router with every configured command registered. Callers close it.

    Raises:
        ConfigError: If the config or a command path is invalid.
    """
    config = load_config(config_file or default_config_file())
    return build_router(config)
