"""Tab completion for dot-notation chains."""

from __future__ import annotations

import re
import time
from collections.abc import Callable

from dotcmd.mappings.store import MappingStore
from dotcmd.tools.parser import DELIMITER
from dotcmd.tools.types import CompletionContext, CompletionSource, CompletionSuggestion

# Bare command or command with a trailing dot: "ls" or "ls."
BASE_ONLY_PATTERN = re.compile(r"^[a-zA-Z]+\.?$")


def current_word(buffer: str, cursor: int | None = None) -> str:
    """Return the word being completed: the last word before the cursor.

    Examples:
        >>> current_word("dot ls.a")
        'ls.a'
        >>> current_word("ls.all ")
        ''
        >>> current_word("ls.all.long", cursor=6)
        'ls.all'
    """
    if cursor is not None:
        buffer = buffer[:cursor]
    if not buffer or buffer[-1].isspace():
        return ""
    return buffer.rsplit(None, 1)[-1]


def parse_completion_input(word: str) -> CompletionContext:
    """Work out which shape of chain is being completed.

    Shapes, in precedence order:

    1. ``ls`` or ``ls.``: every option of the base command.
    2. ``ls.all.long.``: every option not yet in the chain.
    3. ``ls.all.c``: unused options starting with ``c``.
    4. ``ls.c``: options starting with ``c``.

    Examples:
        >>> parse_completion_input("ls.all.c")
        CompletionContext(input='ls.all.c', base_command='ls', used_options=('all',), partial_option='c')
        >>> parse_completion_input("ls.all.")
        CompletionContext(input='ls.all.', base_command='ls', used_options=('all',), partial_option=None)
    """
    if BASE_ONLY_PATTERN.match(word) or DELIMITER not in word:
        return CompletionContext(input=word, base_command=word.rstrip(DELIMITER))

    if word.endswith(DELIMITER):
        base_command, *used = word[: -len(DELIMITER)].split(DELIMITER)
        return CompletionContext(
            input=word,
            base_command=base_command,
            used_options=tuple(o for o in used if o),
        )

    # Empty tokens ("ls..c") never expand, so they are dropped from the prefix
    base_command, *parts = word.split(DELIMITER)
    return CompletionContext(
        input=word,
        base_command=base_command,
        used_options=tuple(o for o in parts[:-1] if o),
        partial_option=parts[-1],
    )


class CompletionEngine:
    """Compute completion candidates for partial chains.

    Stateless: every call receives the full buffer and returns the complete
    candidate set. Candidates are full chains (``ls.all.color``) so callers
    never need to rebuild context.
    """

    def __init__(self, store: MappingStore) -> None:
        self.store = store

    def parse_context(self, buffer: str, cursor: int | None = None) -> CompletionContext | None:
        """Parse the word before the cursor, or None if there is nothing to complete."""
        word = current_word(buffer, cursor)
        if not word:
            return None
        return parse_completion_input(word)

    def candidates(self, context: CompletionContext) -> list[str]:
        """Return the sorted option names that can extend the context."""
        available = self.store.options_for(context.base_command) - context.used
        if context.partial_option is not None:
            available = {o for o in available if o.startswith(context.partial_option)}
        return sorted(available)

    def complete(self, buffer: str, cursor: int | None = None) -> list[str]:
        """Return full candidate chains for the buffer, sorted."""
        context = self.parse_context(buffer, cursor)
        if context is None:
            return []
        return [context.prefix + option for option in self.candidates(context)]

    def suggest(self, buffer: str, cursor: int | None = None) -> list[CompletionSuggestion]:
        """Return candidates with display labels and descriptions."""
        context = self.parse_context(buffer, cursor)
        if context is None:
            return []

        suggestions: list[CompletionSuggestion] = []
        for option in self.candidates(context):
            entry = self.store.lookup(context.base_command, option)
            description = None
            if entry is not None:
                description = entry.description or entry.flags
            suggestions.append(
                CompletionSuggestion(
                    completion=context.prefix + option,
                    display=f"{DELIMITER}{option}",
                    description=description,
                )
            )
        return suggestions


class CompletionCycler:
    """Rotate through candidates on repeated completion requests.

    A request counts as a repeat when it arrives within ``threshold``
    seconds of the previous one and the word is either the one that
    produced the cached candidates or one of those candidates. Anything
    else is a new context and asks the source again.
    """

    def __init__(
        self,
        source: CompletionSource,
        threshold: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.threshold = threshold
        self.clock = clock
        self.candidates: list[str] = []
        self.index = -1
        self._origin: str | None = None
        self._last_request: float | None = None

    @property
    def position(self) -> tuple[int, int]:
        """Return the 1-based position of the current candidate and the count."""
        return self.index + 1, len(self.candidates)

    def reset(self) -> None:
        """Forget the cached candidates."""
        self.candidates = []
        self.index = -1
        self._origin = None
        self._last_request = None

    def _is_repeat(self, word: str, now: float) -> bool:
        if self._last_request is None or now - self._last_request >= self.threshold:
            return False
        return word == self._origin or word in self.candidates

    def next(self, word: str) -> str | None:
        """Return the next completion for the word, or None if there is none."""
        now = self.clock()
        repeat = self._is_repeat(word, now)
        self._last_request = now

        if not repeat:
            self._origin = word
            self.candidates = self.source.complete(word)
            self.index = -1

        if not self.candidates:
            return None

        self.index = (self.index + 1) % len(self.candidates)
        return self.candidates[self.index]
