"""MCP Server implementation."""

from __future__ import annotations

import logging
from typing import Any

import uvicorn
from mcp.server import Server
from mcp.server.sse import SseServerTransport

from dotcmd.config import Settings, get_settings, setup_logging
from dotcmd.mappings import MappingStore, build_store
from dotcmd.tools import register_tools

logger = logging.getLogger(__name__)

# Type aliases for ASGI
Scope = dict[str, Any]
Receive = Any
Send = Any


def create_server(store: MappingStore | None = None) -> Server:
    """Create and configure the MCP server.

    Args:
        store: Mapping store to serve; defaults to the process-wide store.

    Returns:
        Configured MCP server instance.
    """
    server = Server("dotcmd-server")
    register_tools(server, store)
    return server


async def _respond(send: Send, status: int, body: bytes) -> None:
    await send({"type": "http.response.start", "status": status, "headers": []})
    await send({"type": "http.response.body", "body": body})


def create_app(server: Server, sse: SseServerTransport) -> Any:
    """Create the ASGI application.

    Args:
        server: The MCP server instance.
        sse: The SSE transport.

    Returns:
        ASGI application callable.
    """

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        """Handle ASGI requests."""
        if scope["type"] != "http":
            return

        path: str = scope["path"]
        method: str = scope["method"]

        # GET /sse - SSE Handshake
        if path == "/sse" and method == "GET":
            logger.info(f"New connection from {scope.get('client')}")
            try:
                async with sse.connect_sse(scope, receive, send) as streams:
                    await server.run(
                        streams[0],
                        streams[1],
                        server.create_initialization_options(),
                    )
                logger.info("Connection closed")
            except Exception:
                logger.exception("SSE connection failed")
            return

        # POST /messages - Message handling
        if path == "/messages" and method == "POST":
            await sse.handle_post_message(scope, receive, send)
            return

        # POST /sse - client probe
        if path == "/sse" and method == "POST":
            await _respond(send, 200, b"OK")
            return

        await _respond(send, 404, b"Not Found")

    return app


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server.

    Args:
        settings: Optional settings override.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    store = build_store(settings)

    server = create_server(store)
    sse = SseServerTransport("/messages")
    app = create_app(server, sse)

    print("=" * 60)
    print("DOTCMD MCP SERVER")
    print(f"Serving {len(store)} mappings for {len(store.base_commands())} commands")
    print(f"Listening on {settings.server_host}:{settings.server_port}")
    print("=" * 60)

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
    )


if __name__ == "__main__":
    run_server()
