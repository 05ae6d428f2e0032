"""Type definitions for expansion, completion and execution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Result of expanding a dot-chain.

    Attributes:
        command: The base command to execute.
        flags: Argument-vector entries, in chain order.
        full_command_line: Display form of the command. Never executed.
    """

    command: str
    flags: tuple[str, ...]
    full_command_line: str

    @property
    def argv(self) -> list[str]:
        """Return the argument vector for an exec-style call."""
        return [self.command, *self.flags]


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """Completion request parsed from the current input buffer.

    Attributes:
        input: The word being completed.
        base_command: The base command being completed.
        used_options: Options already in the chain, in chain order.
        partial_option: The option being typed, or None on a boundary.
    """

    input: str
    base_command: str
    used_options: tuple[str, ...] = ()
    partial_option: str | None = None

    @property
    def used(self) -> frozenset[str]:
        """Return the used options as a set for exclusion."""
        return frozenset(self.used_options)

    @property
    def prefix(self) -> str:
        """Return the chain that every candidate extends, with trailing dot."""
        return ".".join((self.base_command, *self.used_options)) + "."


@dataclass(frozen=True, slots=True)
class CompletionSuggestion:
    """Completion suggestion for an interactive completion UI.

    Attributes:
        completion: The full, executable chain to insert.
        display: Short label showing only the next token (e.g., ".color").
        description: What the option does, or its flags.
    """

    completion: str
    display: str
    description: str | None = None


class CompletionSource(Protocol):
    """Anything that turns an input buffer into full completion chains."""

    def complete(self, buffer: str, cursor: int | None = None) -> list[str]:
        """Return candidate chains for the buffer."""
        ...


@dataclass(frozen=True, slots=True)
class ExecutionOptions:
    """Options for running an expanded command."""

    show_command: bool = True
    cwd: Path | None = None
    capture_output: bool = False
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    check_command: bool = True


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Result of running a command."""

    success: bool
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""
    argv: tuple[str, ...] = ()
