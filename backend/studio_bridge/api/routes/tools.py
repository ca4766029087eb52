"""Tool Routes: REST access to the tool registry for non-MCP agents.

Invariants:
    - GET /api/v1/tools lists every registered tool with its input schema
    - POST /api/v1/tools/{name} returns 200 with a ToolResponse for success
      and for tool failures alike; is_error tells them apart
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from studio_bridge.api.dependencies import get_tool_invoker
from studio_bridge.schemas.commands import ToolDescriptor, ToolResponse
from studio_bridge.services.tool_invocation import ToolInvoker

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=list[ToolDescriptor])
async def list_tools(invoker: ToolInvoker = Depends(get_tool_invoker)):
    return invoker.registry.descriptors()


@router.post("/{tool_name}", response_model=ToolResponse)
async def invoke_tool(
    tool_name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    invoker: ToolInvoker = Depends(get_tool_invoker),
):
    """Relay one tool call to Studio and wait for its result."""
    return await invoker.invoke(tool_name, arguments)
