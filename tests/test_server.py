"""Tests for the MCP server application."""

from __future__ import annotations

import asyncio
from typing import Any

import mcp.types as types
from mcp.server.sse import SseServerTransport

from dotcmd.mappings.store import MappingStore
from dotcmd.server import create_app, create_server


def call_app(path: str, method: str) -> list[dict[str, Any]]:
    """Send one HTTP request through the ASGI app and collect the messages."""
    server = create_server(MappingStore())
    app = create_app(server, SseServerTransport("/messages"))
    sent: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    scope = {"type": "http", "path": path, "method": method, "headers": []}
    asyncio.run(app(scope, receive, send))
    return sent


class TestCreateApp:
    """Tests for create_app."""

    def test_unknown_path(self) -> None:
        """Unknown paths return 404."""
        sent = call_app("/nope", "GET")
        assert sent[0]["status"] == 404
        assert sent[1]["body"] == b"Not Found"

    def test_sse_probe(self) -> None:
        """POST /sse answers OK."""
        sent = call_app("/sse", "POST")
        assert sent[0]["status"] == 200
        assert sent[1]["body"] == b"OK"


def test_create_server_name() -> None:
    """The server is named after the project."""
    assert create_server(MappingStore()).name == "dotcmd-server"


class TestCreateServer:
    """Tests for create_server."""

    def test_registers_tool_handlers(self) -> None:
        """Listing and calling tools are both wired up."""
        server = create_server(MappingStore())
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    def test_lists_dot_command_tools(self) -> None:
        """Every dot-command tool is advertised."""
        server = create_server(MappingStore())
        handler = server.request_handlers[types.ListToolsRequest]
        result = asyncio.run(handler(types.ListToolsRequest(method="tools/list")))
        names = [tool.name for tool in result.root.tools]
        assert names == [
            "run_dot_command",
            "expand_dot_command",
            "complete_dot_command",
            "list_dot_commands",
        ]
