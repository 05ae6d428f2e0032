"""Errors raised while parsing, expanding and running dot-notation commands."""

from __future__ import annotations

from collections.abc import Iterable


class DotCommandError(Exception):
    """Base exception for dot-notation command errors.

    Attributes:
        input: The input that caused the error.
        suggestions: Hints for fixing the error, shown to the user.
    """

    def __init__(
        self,
        message: str,
        input: str = "",
        suggestions: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.input = input
        self.suggestions = list(suggestions)


class EmptyInput(DotCommandError):
    """Raised when no command was provided."""

    def __init__(self) -> None:
        super().__init__(
            "No command provided",
            suggestions=["Usage: dotcmd run <command.options>", "Example: dotcmd run ls.all.long"],
        )


class NotDotNotation(DotCommandError):
    """Raised when the input contains no dot delimiter."""

    def __init__(self, input: str) -> None:
        super().__init__(
            f"'{input}' is not a dot-notation command",
            input=input,
            suggestions=["Dot-notation commands must contain at least one dot (e.g., ls.all)"],
        )


class UnknownBaseCommand(DotCommandError):
    """Raised when the base command is not available on the host."""

    def __init__(self, command: str, input: str = "") -> None:
        super().__init__(
            f"Command '{command}' not found",
            input=input or command,
            suggestions=["Make sure the command is installed and in your PATH"],
        )
        self.command = command


class UnknownOption(DotCommandError):
    """Raised when one or more option tokens have no mapping.

    Attributes:
        options: Every unresolved token, in chain order.
        base_command: The base command the tokens were looked up under.
        available: Every valid option for the base command, sorted.
    """

    def __init__(
        self,
        options: Iterable[str],
        base_command: str,
        available: Iterable[str],
        input: str = "",
    ) -> None:
        self.options = list(dict.fromkeys(options))
        self.base_command = base_command
        self.available = sorted(available)
        message = ", ".join(
            f"Unknown option '{option}' for command '{base_command}'"
            for option in self.options
        )
        super().__init__(message, input=input, suggestions=self.available)

    @property
    def option(self) -> str:
        """The first unresolved token."""
        return self.options[0]


class InvalidMapping(DotCommandError):
    """Raised when a mapping key cannot be registered."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid mapping '{key}': {reason}", input=key)
        self.key = key
        self.reason = reason


class MappingFileError(DotCommandError):
    """Raised when a mappings file cannot be read or has the wrong shape."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Invalid mappings file {path}: {reason}", input=str(path))
        self.path = path
        self.reason = reason
