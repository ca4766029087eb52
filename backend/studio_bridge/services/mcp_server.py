"""MCP Adapter: exposes the tool registry to remote agents as MCP tools.

Invariants:
    - list_tools() mirrors the registry one-to-one, in registration order
    - call_tool() returns a single text block on success
    - Failures propagate as BridgeError; the MCP server reports them as
      isError results, so one failing call never affects other sessions

Design Decisions:
    - Low-level mcp.server.Server over FastMCP: tools are data (registry
      entries), not decorated functions
    - Handlers live on a plain class and are registered in build_server(),
      so they can be exercised without a transport
"""

import logging
from typing import Any

from mcp import types
from mcp.server import Server

from studio_bridge.services.tool_invocation import ToolInvoker

logger = logging.getLogger(__name__)


class StudioMcpBridge:
    """MCP list_tools/call_tool handlers backed by a ToolInvoker."""

    def __init__(self, invoker: ToolInvoker):
        self.invoker = invoker

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=spec.name,
                description=spec.description,
                inputSchema=spec.input_schema(),
            )
            for spec in self.invoker.registry
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        logger.info(f"MCP tool call: {name}", extra={"tool_name": name})
        text = await self.invoker.execute(name, arguments)
        return [types.TextContent(type="text", text=text)]

    def build_server(self, name: str) -> Server:
        server = Server(name)
        server.list_tools()(self.list_tools)
        server.call_tool()(self.call_tool)
        return server
