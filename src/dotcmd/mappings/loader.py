"""Mapping file loading and persistence."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from dotcmd.config import Settings, get_settings
from dotcmd.errors import MappingFileError
from dotcmd.mappings.defaults import DEFAULT_MAPPINGS, DEFAULT_MAPPINGS_FILE
from dotcmd.mappings.store import MappingEntry, MappingStore

logger = logging.getLogger(__name__)


def iter_entries(table: Mapping[str, Any], source: object = "<table>") -> Iterator[MappingEntry]:
    """Yield entries from a ``{base: {option: value}}`` table.

    A value is either the flags string or a dict with ``flags`` and an
    optional ``description``.

    Args:
        table: The nested mapping table.
        source: Where the table came from, used in error messages.

    Raises:
        MappingFileError: If the table has the wrong shape.
    """
    if not isinstance(table, Mapping):
        raise MappingFileError(source, "top level must be a mapping of base commands")

    for base_command, options in table.items():
        # YAML reads bare keys such as `on` or `no` as booleans
        if not isinstance(base_command, str):
            raise MappingFileError(
                source, f"base command {base_command!r} must be a string; quote it"
            )
        if not isinstance(options, Mapping):
            raise MappingFileError(source, f"'{base_command}' must map option names to flags")

        for option, value in options.items():
            if not isinstance(option, str):
                raise MappingFileError(
                    source, f"option {option!r} of '{base_command}' must be a string; quote it"
                )
            if isinstance(value, str):
                yield MappingEntry(base_command, option, value)
            elif isinstance(value, Mapping) and isinstance(value.get("flags"), str):
                description = value.get("description")
                yield MappingEntry(
                    base_command,
                    option,
                    value["flags"],
                    str(description) if description is not None else None,
                )
            else:
                raise MappingFileError(
                    source,
                    f"'{base_command}.{option}' must be a flags string or have a 'flags' key",
                )


def read_table(path: Path) -> dict[str, Any]:
    """Read the raw YAML table from a mappings file.

    Returns:
        The parsed table, or an empty dict for an empty file.

    Raises:
        MappingFileError: If the file is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise MappingFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MappingFileError(path, "top level must be a mapping of base commands")
    return data


def load_mappings(path: Path) -> list[MappingEntry]:
    """Load mapping entries from a YAML file.

    Args:
        path: Path to the mappings file.

    Returns:
        The entries in file order.
    """
    entries = list(iter_entries(read_table(path), source=path))
    logger.debug(f"Loaded {len(entries)} mappings from {path}")
    return entries


def ensure_defaults(settings: Settings | None = None) -> Path:
    """Create the starter user mappings file if it doesn't exist.

    Returns:
        Path to the user mappings file.
    """
    if settings is None:
        settings = get_settings()
    settings.ensure_directories()

    path = settings.mappings_path
    if not path.exists():
        path.write_text(DEFAULT_MAPPINGS_FILE, encoding="utf-8")
        logger.info(f"Created mappings file {path}")
    return path


def build_store(settings: Settings | None = None) -> MappingStore:
    """Build a store from the bundled defaults and the user mappings file.

    User entries are loaded last and override defaults with the same key.
    """
    if settings is None:
        settings = get_settings()

    store = MappingStore()
    if settings.include_defaults:
        for entry in iter_entries(DEFAULT_MAPPINGS, source="defaults"):
            store.add(entry.base_command, entry.option, entry.flags, entry.description)

    path = settings.mappings_path
    if path.exists():
        for entry in load_mappings(path):
            store.add(entry.base_command, entry.option, entry.flags, entry.description)

    logger.debug(f"Built store with {len(store)} mappings")
    return store


@lru_cache
def get_store() -> MappingStore:
    """Get the cached process-wide store."""
    return build_store()


def save_mapping(
    base_command: str,
    option: str,
    flags: str,
    description: str | None = None,
    settings: Settings | None = None,
) -> MappingEntry:
    """Add or replace a mapping in the user mappings file.

    Returns:
        The saved entry.
    """
    if settings is None:
        settings = get_settings()

    # Validate the key before touching the file
    entry = MappingStore().add(base_command, option, flags, description)

    path = ensure_defaults(settings)
    table = read_table(path)
    value: str | dict[str, str] = flags
    if description:
        value = {"flags": flags, "description": description}
    table.setdefault(base_command, {})[option] = value

    path.write_text(yaml.safe_dump(table, sort_keys=True), encoding="utf-8")
    get_store.cache_clear()
    logger.info(f"Saved mapping {entry.key} -> {flags} to {path}")
    return entry


def delete_mapping(
    base_command: str,
    option: str,
    settings: Settings | None = None,
) -> bool:
    """Remove a mapping from the user mappings file.

    Returns:
        True if the mapping was in the file.
    """
    if settings is None:
        settings = get_settings()

    path = settings.mappings_path
    if not path.exists():
        return False

    table = read_table(path)
    options = table.get(base_command)
    if not isinstance(options, dict) or option not in options:
        return False

    del options[option]
    if not options:
        del table[base_command]

    path.write_text(yaml.safe_dump(table, sort_keys=True), encoding="utf-8")
    get_store.cache_clear()
    logger.info(f"Removed mapping {base_command}.{option} from {path}")
    return True
