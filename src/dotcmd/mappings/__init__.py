"""Mappings module for registering and loading dot-notation command mappings."""

from dotcmd.mappings.defaults import DEFAULT_MAPPINGS, DEFAULT_MAPPINGS_FILE
from dotcmd.mappings.loader import (
    build_store,
    delete_mapping,
    ensure_defaults,
    get_store,
    iter_entries,
    load_mappings,
    save_mapping,
)
from dotcmd.mappings.store import MappingEntry, MappingStats, MappingStore

__all__ = [
    "DEFAULT_MAPPINGS",
    "DEFAULT_MAPPINGS_FILE",
    "MappingEntry",
    "MappingStats",
    "MappingStore",
    "build_store",
    "delete_mapping",
    "ensure_defaults",
    "get_store",
    "iter_entries",
    "load_mappings",
    "save_mapping",
]
