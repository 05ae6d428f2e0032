"""Command-line interface for dot-notation commands."""

from __future__ import annotations

import json
from functools import wraps
from pathlib import Path

import typer
from click.exceptions import Exit

from dotcmd import __version__
from dotcmd.config import get_settings, setup_logging
from dotcmd.errors import DotCommandError
from dotcmd.mappings import delete_mapping, get_store, save_mapping
from dotcmd.tools.completion import CompletionEngine
from dotcmd.tools.executor import expand_and_run, format_error
from dotcmd.tools.expander import expand_only
from dotcmd.tools.parser import parse_chain
from dotcmd.tools.scripts import generate_completion_script, get_installation_instructions
from dotcmd.tools.types import ExecutionOptions

app = typer.Typer(
    help="Shell command dot notation: run ls.all.long as ls -a -l.",
    no_args_is_help=True,
    add_completion=False,
)


def error_feedback(f):
    """Report dot-notation errors on stderr and exit with status 1."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (SystemExit, Exit):
            raise
        except DotCommandError as e:
            typer.echo(format_error(e), err=True)
            raise typer.Exit(1) from e
        except (ValueError, OSError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper


def _split_key(key: str) -> tuple[str, str]:
    parsed = parse_chain(key)
    if len(parsed.options) != 1 or not parsed.options[0]:
        raise typer.BadParameter(f"expected <command>.<option>, got '{key}'")
    return parsed.base_command, parsed.options[0]


def version_callback(value: bool):
    if value:
        typer.echo(f"dotcmd {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Shell command dot notation system."""
    setup_logging(get_settings())


@app.command()
@error_feedback
def run(
    chain: str = typer.Argument(..., help="Dot-notation command, e.g. ls.all.long"),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Show the expansion only."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Don't echo the expanded command."),
    cwd: Path | None = typer.Option(None, "--cwd", help="Working directory."),
    capture: bool = typer.Option(False, "--capture", help="Capture output and print it as JSON."),
):
    """Execute a dot-notation command."""
    store = get_store()

    if dry_run:
        expanded = expand_only(chain, store)
        typer.echo(f"Would execute: {expanded.full_command_line}")
        typer.echo(f"Command: {expanded.command}")
        typer.echo(f"Flags: {' '.join(expanded.flags)}")
        return

    settings = get_settings()
    options = ExecutionOptions(
        show_command=settings.show_command and not quiet,
        cwd=cwd,
        capture_output=capture,
        timeout=settings.timeout,
        check_command=settings.check_command,
    )
    result = expand_and_run(chain, store, options)

    if capture:
        payload = {
            "success": result.success,
            "exitCode": result.exit_code,
            "stdout": result.stdout,
            "stderr": result.stderr,
            "command": result.command,
        }
        typer.echo(json.dumps(payload, indent=2))
    elif result.stderr:
        typer.echo(result.stderr, err=True)

    raise typer.Exit(result.exit_code)


@app.command()
@error_feedback
def expand(chain: str = typer.Argument(..., help="Dot-notation command.")):
    """Print the command a chain expands to."""
    typer.echo(expand_only(chain, get_store()).full_command_line)


@app.command()
def complete(
    buffer: str = typer.Argument("", help="Current input buffer."),
    describe: bool = typer.Option(False, "--describe", help="Include descriptions."),
    cursor: int | None = typer.Option(None, "--cursor", help="Cursor position in the buffer."),
):
    """Print completion candidates, one per line."""
    engine = CompletionEngine(get_store())
    limit = get_settings().max_completions
    for suggestion in engine.suggest(buffer, cursor)[:limit]:
        if describe and suggestion.description:
            typer.echo(f"{suggestion.completion}:{suggestion.description}")
        else:
            typer.echo(suggestion.completion)


@app.command("list")
def list_commands():
    """List all available base commands."""
    base_commands = sorted(get_store().base_commands())
    typer.echo("Available base commands:")
    for command in base_commands:
        typer.echo(f"  {command}")
    typer.echo(f"\nTotal: {len(base_commands)} commands")


@app.command()
def show(base_command: str | None = typer.Argument(None, help="Base command to show.")):
    """Show options and the flags they map to."""
    store = get_store()
    base_commands = [base_command] if base_command else sorted(store.base_commands())

    typer.echo("Available commands and options:\n")
    for command in base_commands:
        typer.echo(f"  {command}:")
        for entry in store.entries_for(command):
            line = f"    {entry.option:<12} -> {entry.flags}"
            if entry.description:
                line += f" ({entry.description})"
            typer.echo(line)
        typer.echo("")


@app.command()
def search(term: str = typer.Argument(..., help="Pattern to search for.")):
    """Search commands, options, flags and descriptions."""
    results = get_store().search(term)
    if not results:
        typer.echo(f"No results found for: {term}")
        return

    typer.echo(f"Search results for: {term}\n")
    for entry in results:
        typer.echo(f"  {entry.key:<20} -> {entry.flags}")
        if entry.description:
            typer.echo(f"    {entry.description}")
    typer.echo(f"\nFound {len(results)} result(s)")


@app.command()
def stats():
    """Show mapping statistics."""
    summary = get_store().stats()
    typer.echo(f"Base commands: {summary.base_commands}")
    typer.echo(f"Total mappings: {summary.total_mappings}\n")
    typer.echo("Mappings per command:")
    for command, count in summary.mappings_per_command.items():
        typer.echo(f"  {command:<10}: {count} options")


@app.command()
def validate():
    """Check the registered mappings for problems."""
    problems = get_store().validate()
    if not problems:
        typer.echo("All mappings are valid.")
        return
    for problem in problems:
        typer.echo(problem, err=True)
    raise typer.Exit(1)


@app.command()
@error_feedback
def add(
    key: str = typer.Argument(..., help="Mapping key, e.g. ls.tree"),
    flags: str = typer.Argument(..., help="Flags the option expands to."),
    description: str | None = typer.Option(None, "--description", help="What it does."),
):
    """Add or replace a mapping in the user mappings file."""
    base_command, option = _split_key(key)
    entry = save_mapping(base_command, option, flags, description)
    typer.echo(f"Saved {entry.key} -> {entry.flags}")


@app.command()
@error_feedback
def remove(key: str = typer.Argument(..., help="Mapping key, e.g. ls.tree")):
    """Remove a mapping from the user mappings file."""
    base_command, option = _split_key(key)
    if not delete_mapping(base_command, option):
        typer.echo(f"No user mapping named {key}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Removed {key}")


@app.command("generate-completion")
@error_feedback
def generate_completion(
    shell: str = typer.Argument("zsh", help="Shell type: zsh or bash."),
    instructions: bool = typer.Option(False, "--instructions", help="Show install steps."),
):
    """Generate a shell completion script."""
    if instructions:
        typer.echo(get_installation_instructions(shell))
        return
    typer.echo(generate_completion_script(shell, get_store()))


@app.command()
def serve():
    """Run the MCP server."""
    from dotcmd.server import run_server

    run_server()


def main() -> None:
    """Entry point for the dotcmd command."""
    app()


if __name__ == "__main__":
    main()
