"""Expansion of parsed dot-chains into argument vectors."""

from __future__ import annotations

from dotcmd.errors import UnknownOption
from dotcmd.mappings.store import MappingStore
from dotcmd.tools.parser import ParsedChain, parse_chain
from dotcmd.tools.types import ExpansionResult


class Expander:
    """Resolve option tokens through a mapping store into flags."""

    def __init__(self, store: MappingStore) -> None:
        self.store = store

    def expand(self, parsed: ParsedChain) -> ExpansionResult:
        """Expand a parsed chain into command and flags.

        Every token is resolved against one snapshot of the store. Each
        mapping value is split on whitespace, so ``-l -h`` contributes two
        argument-vector entries.

        Args:
            parsed: The parsed chain.

        Returns:
            ExpansionResult with flags in chain order.

        Raises:
            UnknownOption: If any token has no mapping. Lists every
                unresolved token, not only the first.
        """
        table = self.store.snapshot()
        flags: list[str] = []
        unknown: list[str] = []

        for option in parsed.options:
            entry = table.lookup(parsed.base_command, option)
            if entry is None:
                unknown.append(option)
                continue
            flags.extend(entry.argv)

        if unknown:
            raise UnknownOption(
                unknown,
                parsed.base_command,
                table.options_for(parsed.base_command),
                input=parsed.original,
            )

        full_command_line = " ".join([parsed.base_command, *flags])
        return ExpansionResult(
            command=parsed.base_command,
            flags=tuple(flags),
            full_command_line=full_command_line,
        )


def expand_only(raw_chain: str, store: MappingStore) -> ExpansionResult:
    """Parse and expand a chain without running it."""
    return Expander(store).expand(parse_chain(raw_chain))
