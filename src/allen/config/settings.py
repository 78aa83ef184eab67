"""Allen config models and loading helpers."""

from __future__ import annotations

import importlib
import json
from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from allen.commands.command import Command
from allen.commands.registry import (
    DEFAULT_KEY_PREFIX,
    CommandRegistry,
    InMemoryRegistryStore,
    SqliteRegistryStore,
)
from allen.commands.router import CommandFactory, CommandRouter

DEFAULT_COMMANDS = (
    "allen.commands.handlers.schedule:ScheduleCommand",
    "allen.commands.handlers.echo:EchoCommand",
)


class RegistryBackend(StrEnum):
    """Supported registry store identifiers."""

    MEMORY = "memory"
    SQLITE = "sqlite"


class RegistrySettings(BaseModel):
    """Command registry configuration."""

    model_config = ConfigDict(extra="forbid")

    backend: RegistryBackend = RegistryBackend.MEMORY
    sqlite_path: str = ".allen/registry.sqlite"
    key_prefix: str = DEFAULT_KEY_PREFIX


class AllenConfig(BaseModel):
    """Root Allen configuration model."""

    model_config = ConfigDict(extra="forbid")

    commands: list[str] = list(DEFAULT_COMMANDS)
    registry: RegistrySettings = RegistrySettings()


class ConfigError(RuntimeError):
    """Raised when config cannot be decoded, validated or resolved."""


def _read_config_mapping(path: Path) -> dict[str, object]:
    """Read a config file as a mapping.

    Files ending in `.json` are decoded as JSON, anything else as YAML. An empty
    document yields an empty mapping, i.e. all defaults.

    Raises:
        ConfigError: If decode fails or the root is not a mapping.
    """
    raw = path.read_text(encoding="utf-8")
    kind = "JSON" if path.suffix.lower() == ".json" else "YAML"
    try:
        payload = json.loads(raw) if kind == "JSON" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config {kind} in {path.name}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(
            f"Invalid config payload in {path.name}: root must be a mapping"
        )
    return payload


def load_config(path: Path) -> AllenConfig:
    """Load Allen config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config payload, or defaults when file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return AllenConfig()
    payload = _read_config_mapping(path)
    try:
        return AllenConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc


def load_command_factory(import_path: str) -> CommandFactory:
    """Resolve a ``module:attr`` path to a command factory.

    Args:
        import_path: Dotted module path and attribute, separated by ``:``.

    Returns:
        Zero-argument callable producing commands.

    Raises:
        ConfigError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(
            f"Invalid command path '{import_path}': expected 'module:attr'."
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(
            f"Cannot import command module '{module_name}': {exc}"
        ) from exc
    factory = getattr(module, attr, None)
    if factory is None:
        raise ConfigError(f"Module '{module_name}' has no attribute '{attr}'.")
    if isinstance(factory, type) and not issubclass(factory, Command):
        raise ConfigError(f"'{import_path}' is not a Command subclass.")
    if not callable(factory):
        raise ConfigError(f"'{import_path}' is not callable.")
    return factory


def build_registry(settings: RegistrySettings) -> CommandRegistry:
    """Build the command registry for the configured backend."""
    if settings.backend == RegistryBackend.SQLITE:
        store = SqliteRegistryStore(Path(settings.sqlite_path))
        return CommandRegistry(store, key_prefix=settings.key_prefix)
    return CommandRegistry(InMemoryRegistryStore(), key_prefix=settings.key_prefix)


def build_router(config: AllenConfig) -> CommandRouter:
    """Build a router with every configured command registered.

    Args:
        config: Loaded Allen config.

    Returns:
        Router publishing its commands to the configured registry.

    Raises:
        ConfigError: If a command path cannot be resolved.
    """
    router = CommandRouter(build_registry(config.registry))
    try:
        for import_path in config.commands:
            router.register(load_command_factory(import_path))
    except ConfigError:
        router.close()
        raise
    return router
