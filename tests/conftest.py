"""Pytest configuration and fixtures."""

from __future__ import annotations

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from dotcmd.config import Settings, get_settings
from dotcmd.mappings import MappingStore, get_store


@pytest.fixture  # type: ignore[misc]
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture  # type: ignore[misc]
def test_settings(temp_dir: Path) -> Settings:
    """Create test settings with a temporary mappings file."""
    return Settings(
        mappings_file=temp_dir / "dotcmd" / "mappings.yaml",
        log_level="DEBUG",
    )


@pytest.fixture  # type: ignore[misc]
def store() -> MappingStore:
    """Create a fresh store with a small ls table."""
    store = MappingStore()
    store.add("ls", "all", "-a", "Show all files including hidden (. and ..)")
    store.add("ls", "almost", "-A", "Show all files except . and ..")
    store.add("ls", "long", "-l", "Long listing format")
    store.add("ls", "human", "-l -h")
    store.add("ls", "color", "--color=auto", "Colorized output")
    store.add("grep", "ignore", "-i")
    store.add("grep", "context", "-C 3")
    return store


@pytest.fixture(autouse=True)  # type: ignore[misc]
def clear_caches() -> Generator[None, None, None]:
    """Clear the settings and store caches before and after each test."""
    get_settings.cache_clear()
    get_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_store.cache_clear()
