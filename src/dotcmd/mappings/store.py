"""In-memory table of dot-notation command mappings."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from dotcmd.errors import InvalidMapping

# Names that the completion shapes and the dot-notation guard can address
NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")


@dataclass(frozen=True, slots=True)
class MappingEntry:
    """A registered translation from ``base.option`` to literal flags.

    Attributes:
        base_command: The program name (e.g., "ls").
        option: The option token (e.g., "human").
        flags: The mapping value as registered (e.g., "-l -h").
        description: Optional human-readable description.
    """

    base_command: str
    option: str
    flags: str
    description: str | None = None

    @property
    def key(self) -> str:
        """Return the dot-notation key (e.g., "ls.human")."""
        return f"{self.base_command}.{self.option}"

    @property
    def argv(self) -> tuple[str, ...]:
        """Return the flags split on whitespace into argument-vector entries."""
        return tuple(self.flags.split())


@dataclass(frozen=True, slots=True)
class MappingStats:
    """Counts describing the contents of a store."""

    base_commands: int
    total_mappings: int
    mappings_per_command: dict[str, int]


class MappingStore:
    """Registered ``(base_command, option) -> MappingEntry`` table.

    Lookups for unknown keys return None (or False for removal); absence is
    a normal outcome and never raises. Base commands are derived from the
    registered keys rather than stored separately.
    """

    def __init__(self, entries: Iterable[MappingEntry] = ()) -> None:
        self._entries: dict[tuple[str, str], MappingEntry] = {}
        for entry in entries:
            self.add(entry.base_command, entry.option, entry.flags, entry.description)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"MappingStore({len(self)} mappings)"

    def lookup(self, base_command: str, option: str) -> MappingEntry | None:
        """Return the entry for ``base_command.option``, or None."""
        return self._entries.get((base_command, option))

    def options_for(self, base_command: str) -> set[str]:
        """Return every option registered for a base command."""
        return {option for base, option in self._entries if base == base_command}

    def entries_for(self, base_command: str) -> list[MappingEntry]:
        """Return the entries for a base command, sorted by option."""
        entries = [e for (base, _), e in self._entries.items() if base == base_command]
        return sorted(entries, key=lambda e: e.option)

    def base_commands(self) -> set[str]:
        """Return every distinct base command."""
        return {base for base, _ in self._entries}

    def add(
        self,
        base_command: str,
        option: str,
        flags: str,
        description: str | None = None,
    ) -> MappingEntry:
        """Register a mapping, overwriting any existing entry for the key.

        Raises:
            InvalidMapping: If the base command or option is empty or
                contains a dot or whitespace.
        """
        for name in (base_command, option):
            if not name:
                raise InvalidMapping(f"{base_command}.{option}", "empty name")
            if "." in name or any(ch.isspace() for ch in name):
                raise InvalidMapping(
                    f"{base_command}.{option}",
                    f"'{name}' must not contain dots or whitespace",
                )

        entry = MappingEntry(base_command, option, flags, description)
        self._entries[(base_command, option)] = entry
        return entry

    def remove(self, base_command: str, option: str) -> bool:
        """Remove a mapping. Returns True if it existed."""
        return self._entries.pop((base_command, option), None) is not None

    def snapshot(self) -> MappingStore:
        """Return an independent copy of the current table."""
        copy = MappingStore()
        copy._entries = dict(self._entries)
        return copy

    def search(self, pattern: str) -> list[MappingEntry]:
        """Find entries whose key, flags or description match a pattern.

        The pattern is a case-insensitive regular expression; an invalid
        expression is matched as a literal substring instead.
        """
        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error:
            regex = re.compile(re.escape(pattern), re.IGNORECASE)

        results = [
            entry
            for entry in self._entries.values()
            if regex.search(entry.key)
            or regex.search(entry.flags)
            or (entry.description and regex.search(entry.description))
        ]
        return sorted(results, key=lambda e: (e.base_command, e.option))

    def stats(self) -> MappingStats:
        """Count base commands and mappings."""
        per_command: dict[str, int] = {}
        for base, _ in self._entries:
            per_command[base] = per_command.get(base, 0) + 1
        return MappingStats(
            base_commands=len(per_command),
            total_mappings=len(self._entries),
            mappings_per_command=dict(sorted(per_command.items())),
        )

    def validate(self) -> list[str]:
        """Return a list of problems with the registered mappings."""
        problems: list[str] = []
        for entry in self._entries.values():
            if not NAME_PATTERN.match(entry.base_command):
                problems.append(f"Invalid base command name: {entry.key}")
            if not NAME_PATTERN.match(entry.option):
                problems.append(f"Invalid option name: {entry.key}")
            if not entry.flags.strip():
                problems.append(f"Empty flags for mapping: {entry.key}")
        return problems
