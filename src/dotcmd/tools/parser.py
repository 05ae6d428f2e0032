"""Dot-chain parsing utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass

from dotcmd.errors import EmptyInput, NotDotNotation

DELIMITER: str = "."

DOT_NOTATION_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*\.[a-zA-Z][a-zA-Z0-9_.-]*$")


@dataclass(frozen=True, slots=True)
class ParsedChain:
    """A parsed dot-chain with base command and ordered option tokens."""

    base_command: str
    options: tuple[str, ...]
    original: str = ""

    @property
    def key(self) -> str:
        """Return the chain rebuilt from its parts."""
        return DELIMITER.join((self.base_command, *self.options))


def is_dot_notation(text: str) -> bool:
    """Return True if text looks like a complete dot-notation command.

    Examples:
        >>> is_dot_notation("ls.all.long")
        True
        >>> is_dot_notation("ls")
        False
        >>> is_dot_notation("ls.")
        False
    """
    return bool(DOT_NOTATION_PATTERN.match(text))


def tokenize(text: str) -> list[str]:
    """Split text on the delimiter.

    Examples:
        >>> tokenize("ls.all.long")
        ['ls', 'all', 'long']
        >>> tokenize("ls.")
        ['ls', '']
    """
    return text.split(DELIMITER)


def parse_chain(raw_chain: str) -> ParsedChain:
    """Parse a dot-chain into base command and option tokens.

    A single trailing dot is tolerated and produces no extra token, so
    ``ls.`` parses to no options at all. Empty tokens inside the chain are
    kept and left for expansion to reject.

    Args:
        raw_chain: The raw chain (e.g., "ls.all.long")

    Returns:
        ParsedChain with base command and options in input order.

    Raises:
        EmptyInput: If raw_chain is empty or whitespace.
        NotDotNotation: If raw_chain has no delimiter or no base command.

    Examples:
        >>> parse_chain("ls.all.long")
        ParsedChain(base_command='ls', options=('all', 'long'), original='ls.all.long')
        >>> parse_chain("ls.")
        ParsedChain(base_command='ls', options=(), original='ls.')
    """
    text = raw_chain.strip()
    if not text:
        raise EmptyInput()

    if DELIMITER not in text:
        raise NotDotNotation(text)

    base_command, *options = tokenize(text)
    if not base_command:
        raise NotDotNotation(text)

    if options and options[-1] == "":
        options.pop()

    return ParsedChain(base_command=base_command, options=tuple(options), original=text)
