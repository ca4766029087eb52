"""MCP SSE Transport: mounts the MCP server on the FastAPI app.

Invariants:
    - GET /sse opens one MCP session per connection
    - POST /messages/?session_id=... delivers client messages to that session
    - Unknown session ids are rejected by the transport (404), not by us

Design Decisions:
    - SseServerTransport mounted as raw ASGI routes: it writes the SSE stream
      itself, so it cannot sit behind a regular APIRouter endpoint
"""

import logging

from fastapi import FastAPI
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/messages/"


def mount_mcp_sse(app: FastAPI, server: Server) -> None:
    """Register /sse and /messages/ for the given MCP server."""
    transport = SseServerTransport(MESSAGES_PATH)

    async def handle_sse(request: Request) -> Response:
        logger.info("MCP client connected via SSE")
        # connect_sse needs the raw ASGI send; request._send is how the mcp
        # SDK's own Starlette example passes it.
        async with transport.connect_sse(
            request.scope, request.receive, request._send,
        ) as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream,
                server.create_initialization_options(),
            )
        logger.info("MCP client disconnected")
        return Response()

    app.add_route("/sse", handle_sse, methods=["GET"])
    app.mount(MESSAGES_PATH, app=transport.handle_post_message)
