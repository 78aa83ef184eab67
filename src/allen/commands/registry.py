"""Discoverable registry of available commands.

Each command is published as one hash keyed by a namespaced key, e.g.
``hubot-commands.registry.schedule`` holding
``{"name": "schedule", "description": "..."}``. The store is not meant to
persist parsed data; the hosting bot re-publishes its commands on start-up.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from allen.commands.command import Command

_LOGGER = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "hubot-commands.registry"

CREATE_SQL = """
CREATE TABLE IF NOT EXISTS registry_hashes (
    hash_key TEXT NOT NULL,
    field TEXT NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (hash_key, field)
)
"""


class CommandEntry(BaseModel):
    """Published view of one command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str


class RegistryStore(Protocol):
    """Key/hash store backing the command registry."""

    def get_hash(self, key: str) -> dict[str, str] | None:
        """Return the hash stored under ``key``, or None when absent."""

    def set_hash(self, key: str, mapping: dict[str, str]) -> None:
        """Store ``mapping`` under ``key``."""

    def keys(self, prefix: str) -> list[str]:
        """Return every key starting with ``prefix``."""

    def close(self) -> None:
        """Release resources held by the store."""


class InMemoryRegistryStore:
    """Process-local registry store."""

    def __init__(self) -> None:
        self._hashes: dict[str, dict[str, str]] = {}

    def get_hash(self, key: str) -> dict[str, str] | None:
        stored = self._hashes.get(key)
        return dict(stored) if stored is not None else None

    def set_hash(self, key: str, mapping: dict[str, str]) -> None:
        self._hashes.setdefault(key, {}).update(mapping)

    def keys(self, prefix: str) -> list[str]:
        return [key for key in self._hashes if key.startswith(prefix)]

    def close(self) -> None:
        self._hashes.clear()


class SqliteRegistryStore:
    """SQLite-backed registry store shared between bot processes."""

    def __init__(self, path: Path) -> None:
        """Open the database, creating file and table if needed.

        Args:
            path: SQLite database file path.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path))
        self._conn.execute(CREATE_SQL)
        self._conn.commit()

    def get_hash(self, key: str) -> dict[str, str] | None:
        rows = self._conn.execute(
            "SELECT field, value FROM registry_hashes WHERE hash_key = ?", (key,)
        ).fetchall()
        if not rows:
            return None
        return {field: value for field, value in rows}

    def set_hash(self, key: str, mapping: dict[str, str]) -> None:
        with self._conn:
            self._conn.executemany(
                "INSERT OR REPLACE INTO registry_hashes (hash_key, field, value) "
                "VALUES (?, ?, ?)",
                [(key, field, value) for field, value in mapping.items()],
            )

    def keys(self, prefix: str) -> list[str]:
        rows = self._conn.execute(
            "SELECT DISTINCT hash_key FROM registry_hashes "
            "WHERE substr(hash_key, 1, ?) = ?",
            (len(prefix), prefix),
        ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()


class CommandRegistry:
    """Publishes command names and help text for discovery."""

    def __init__(
        self,
        store: RegistryStore | None = None,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        """Construct registry over a store.

        Args:
            store: Backing store; defaults to an in-memory store.
            key_prefix: Namespace prepended to every command key.
        """
        self._store: RegistryStore = store or InMemoryRegistryStore()
        self._key_prefix = key_prefix

    def compose_key(self, name: str) -> str:
        """Build the namespaced store key for a command name."""
        return f"{self._key_prefix}.{name}"

    def add_command(self, command: Command) -> bool:
        """Publish a command unless it is already registered.

        Args:
            command: Command whose name and help text are published.

        Returns:
            True when a new entry was written, False when one already existed.
        """
        key = self.compose_key(command.name)
        if self._store.get_hash(key) is not None:
            _LOGGER.debug("Command '%s' already registered", command.name)
            return False
        self._store.set_hash(key, {"name": command.name, "description": command.help})
        _LOGGER.debug("Registered command '%s'", command.name)
        return True

    def get_command(self, name: str) -> CommandEntry | None:
        """Return the published entry for ``name``, or None."""
        stored = self._store.get_hash(self.compose_key(name))
        if stored is None:
            return None
        return CommandEntry.model_validate(stored)

    def list_commands(self) -> list[CommandEntry]:
        """Return every published entry, sorted by name."""
        entries = []
        for key in self._store.keys(f"{self._key_prefix}."):
            stored = self._store.get_hash(key)
            if stored is not None:
                entries.append(CommandEntry.model_validate(stored))
        return sorted(entries, key=lambda entry: entry.name)

    def close(self) -> None:
        """Close the backing store."""
        self._store.close()
