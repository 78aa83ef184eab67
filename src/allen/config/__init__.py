"""Allen configuration loading."""

from allen.config.settings import (
    AllenConfig,
    ConfigError,
    RegistryBackend,
    RegistrySettings,
    build_registry,
    build_router,
    load_command_factory,
    load_config,
)

__all__ = [
    "AllenConfig",
    "ConfigError",
    "RegistryBackend",
    "RegistrySettings",
    "build_registry",
    "build_router",
    "load_command_factory",
    "load_config",
]
