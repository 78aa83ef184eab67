"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from a temporary directory so `.allen/` never leaks."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
