"""MCP tool registration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import mcp.types as types

from dotcmd.config import Settings, get_settings
from dotcmd.errors import DotCommandError
from dotcmd.mappings import MappingStore, get_store
from dotcmd.tools.completion import CompletionCycler, CompletionEngine
from dotcmd.tools.executor import expand_and_run, format_error
from dotcmd.tools.expander import expand_only
from dotcmd.tools.types import ExecutionOptions

if TYPE_CHECKING:
    from mcp.server import Server

logger = logging.getLogger(__name__)

ToolContent = list[types.TextContent | types.ImageContent | types.EmbeddedResource]

# Tool descriptions
RUN_DOT_COMMAND_DESCRIPTION: str = (
    "Run a dot-notation shell command. Dot notation chains a base command "
    "with named options, each expanding to registered flags: "
    "'ls.all.long' runs 'ls -a -l', 'git.log.graph' runs "
    "'git log --oneline --graph'. Returns exit code, stdout and stderr. "
    "Call list_dot_commands to see the available options."
)

EXPAND_DOT_COMMAND_DESCRIPTION: str = (
    "Show the command a dot-notation chain expands to, without running it."
)

COMPLETE_DOT_COMMAND_DESCRIPTION: str = (
    "List completions for a partial dot-notation chain. "
    "'ls.' lists every ls option, 'ls.all.c' lists unused options starting with 'c'. "
    "With cycle=true, return one completion at a time; repeating the call quickly "
    "with the returned chain moves on to the next candidate."
)

LIST_DOT_COMMANDS_DESCRIPTION: str = "List all base commands and their dot-notation options"


def _text(text: str) -> ToolContent:
    return [types.TextContent(type="text", text=text)]


def create_cycler(store: MappingStore, settings: Settings | None = None) -> CompletionCycler:
    """Create a completion cycler using the configured repeat threshold."""
    if settings is None:
        settings = get_settings()
    return CompletionCycler(CompletionEngine(store), threshold=settings.cycle_threshold)


def register_tools(server: Server, store: MappingStore | None = None) -> None:
    """Register all MCP tools with the server.

    Args:
        server: The MCP server instance.
        store: Mapping store to serve; defaults to the process-wide store.
    """
    cycler: CompletionCycler | None = None
    cycler_store: MappingStore | None = None

    def current_store() -> MappingStore:
        return store if store is not None else get_store()

    def current_cycler(active: MappingStore) -> CompletionCycler:
        # The process-wide store is replaced when the user file changes
        nonlocal cycler, cycler_store
        if cycler is None or cycler_store is not active:
            cycler = create_cycler(active)
            cycler_store = active
        return cycler

    @server.list_tools()  # type: ignore[misc]
    async def list_tools() -> list[types.Tool]:
        """Return the list of available tools."""
        chain_schema = {
            "type": "object",
            "properties": {
                "command": {
                    "type": "string",
                    "description": "The dot-notation chain (e.g., 'ls.all.long')",
                },
            },
            "required": ["command"],
        }
        return [
            types.Tool(
                name="run_dot_command",
                description=RUN_DOT_COMMAND_DESCRIPTION,
                inputSchema=chain_schema,
            ),
            types.Tool(
                name="expand_dot_command",
                description=EXPAND_DOT_COMMAND_DESCRIPTION,
                inputSchema=chain_schema,
            ),
            types.Tool(
                name="complete_dot_command",
                description=COMPLETE_DOT_COMMAND_DESCRIPTION,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "buffer": {
                            "type": "string",
                            "description": "The partial chain (e.g., 'ls.all.c')",
                        },
                        "cycle": {
                            "type": "boolean",
                            "description": "Return the next single completion",
                            "default": False,
                        },
                    },
                    "required": ["buffer"],
                },
            ),
            types.Tool(
                name="list_dot_commands",
                description=LIST_DOT_COMMANDS_DESCRIPTION,
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    @server.call_tool()  # type: ignore[misc]
    async def call_tool(name: str, arguments: dict[str, Any]) -> ToolContent:
        """Handle tool execution.

        Raises:
            ValueError: If the tool name is unknown.
        """
        logger.info(f"Executing tool {name} with {arguments!r}")

        if name == "run_dot_command":
            return handle_run_command(arguments, current_store())

        if name == "expand_dot_command":
            return handle_expand_command(arguments, current_store())

        if name == "complete_dot_command":
            active = current_store()
            return handle_complete_command(arguments, active, current_cycler(active))

        if name == "list_dot_commands":
            return handle_list_commands(current_store())

        raise ValueError(f"Unknown tool: {name}")


def handle_run_command(arguments: dict[str, str], store: MappingStore) -> ToolContent:
    """Handle the run_dot_command tool."""
    command = arguments.get("command", "").strip()
    settings = get_settings()
    options = ExecutionOptions(
        show_command=False,
        capture_output=True,
        timeout=settings.timeout,
        check_command=settings.check_command,
    )
    result = expand_and_run(command, store, options)
    payload = {
        "success": result.success,
        "exitCode": result.exit_code,
        "stdout": result.stdout,
        "stderr": result.stderr,
        "command": result.command,
    }
    return _text(json.dumps(payload, indent=2))


def handle_expand_command(arguments: dict[str, str], store: MappingStore) -> ToolContent:
    """Handle the expand_dot_command tool."""
    command = arguments.get("command", "").strip()
    try:
        expanded = expand_only(command, store)
    except DotCommandError as e:
        return _text(format_error(e))
    return _text(expanded.full_command_line)


def handle_complete_command(
    arguments: dict[str, Any],
    store: MappingStore,
    cycler: CompletionCycler | None = None,
) -> ToolContent:
    """Handle the complete_dot_command tool.

    With ``cycle`` set and a cycler given, only the next candidate is
    returned, followed by its position in the candidate list.
    """
    buffer = arguments.get("buffer", "")
    if arguments.get("cycle") and cycler is not None:
        completion = cycler.next(buffer)
        if completion is None:
            return _text(f"No completions for: {buffer}")
        index, count = cycler.position
        return _text(f"{completion}  [{index}/{count}]")

    suggestions = CompletionEngine(store).suggest(buffer)
    if not suggestions:
        return _text(f"No completions for: {buffer}")

    limit = get_settings().max_completions
    lines = [
        f"{s.completion}  ({s.description})" if s.description else s.completion
        for s in suggestions[:limit]
    ]
    return _text("\n".join(lines))


def handle_list_commands(store: MappingStore) -> ToolContent:
    """Handle the list_dot_commands tool."""
    sections: list[str] = []
    for base_command in sorted(store.base_commands()):
        options = ", ".join(e.option for e in store.entries_for(base_command))
        sections.append(f"{base_command}: {options}")

    if not sections:
        return _text("No dot-notation commands registered.")
    return _text("\n".join(sections))
