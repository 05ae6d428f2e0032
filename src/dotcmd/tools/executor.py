"""Running expanded dot-notation commands."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from dotcmd.errors import DotCommandError, UnknownBaseCommand, UnknownOption
from dotcmd.mappings.store import MappingStore
from dotcmd.tools.expander import Expander
from dotcmd.tools.parser import parse_chain
from dotcmd.tools.types import ExecutionOptions, ExecutionResult, ExpansionResult

logger = logging.getLogger(__name__)

# Exit codes reported when the process could not run, as a POSIX shell would
EXIT_TIMEOUT: int = 124
EXIT_NOT_EXECUTABLE: int = 126
EXIT_NOT_FOUND: int = 127


def command_exists(command: str) -> bool:
    """Check whether a command is available on PATH."""
    return shutil.which(command) is not None


def format_error(error: DotCommandError) -> str:
    """Format an error and its suggestions for display."""
    lines = [f"Error: {error.message}"]
    if isinstance(error, UnknownOption):
        lines.append("Available options:")
        lines.extend(f"  {option}" for option in error.available)
    else:
        lines.extend(error.suggestions)
    return "\n".join(lines)


def execute_command(
    expanded: ExpansionResult,
    options: ExecutionOptions | None = None,
) -> ExecutionResult:
    """Run an expanded command as an argument vector, without a shell.

    Args:
        expanded: The expansion to run.
        options: Execution options.

    Returns:
        ExecutionResult. Output fields are empty unless output is captured.
    """
    if options is None:
        options = ExecutionOptions()

    if options.show_command:
        print(f"+ {expanded.full_command_line}", file=sys.stderr)
    logger.debug(f"Executing {expanded.argv!r}")

    env = None
    if options.env is not None:
        env = {**os.environ, **options.env}

    def failed(exit_code: int, message: str) -> ExecutionResult:
        logger.warning(f"{expanded.full_command_line}: {message}")
        return ExecutionResult(
            success=False,
            exit_code=exit_code,
            stderr=message,
            command=expanded.full_command_line,
            argv=tuple(expanded.argv),
        )

    try:
        result = subprocess.run(
            expanded.argv,
            cwd=options.cwd,
            env=env,
            capture_output=options.capture_output,
            text=True,
            timeout=options.timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return failed(EXIT_TIMEOUT, f"Command timed out after {options.timeout}s")
    except FileNotFoundError:
        return failed(EXIT_NOT_FOUND, f"{expanded.command}: command not found")
    except PermissionError:
        return failed(EXIT_NOT_EXECUTABLE, f"{expanded.command}: permission denied")
    except OSError as e:
        return failed(1, str(e))

    return ExecutionResult(
        success=result.returncode == 0,
        exit_code=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        command=expanded.full_command_line,
        argv=tuple(expanded.argv),
    )


def expand_and_run(
    raw_chain: str,
    store: MappingStore,
    options: ExecutionOptions | None = None,
) -> ExecutionResult:
    """Parse, expand and run a dot-notation command.

    Errors from parsing and expansion are returned as a failed result with
    the formatted message in ``stderr``.

    Args:
        raw_chain: The dot-chain (e.g., "ls.all.long")
        store: Mapping store to resolve options against.
        options: Execution options.

    Returns:
        ExecutionResult of the run, or of the failure.
    """
    if options is None:
        options = ExecutionOptions()

    try:
        parsed = parse_chain(raw_chain)
        if options.check_command and not command_exists(parsed.base_command):
            raise UnknownBaseCommand(parsed.base_command, input=raw_chain)
        expanded = Expander(store).expand(parsed)
    except DotCommandError as e:
        logger.info(f"Rejected {raw_chain!r}: {e.message}")
        return ExecutionResult(
            success=False,
            exit_code=1,
            stderr=format_error(e),
            command=raw_chain,
        )

    return execute_command(expanded, options)
