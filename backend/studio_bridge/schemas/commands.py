"""Command Schemas: shapes exchanged with the Studio plugin and the tool surface.

Invariants:
    - CompletionReport accepts result and error as optional; either may be absent
    - error may be any JSON value; a truthy one marks the command failed
    - ToolResponse always distinguishes success content from error content
"""

from typing import Any

from pydantic import BaseModel, JsonValue


class DispatchedCommand(BaseModel):
    """A command handed to the plugin by /studio/poll."""
    id: int
    tool: str
    args: dict[str, Any]


class CompletionReport(BaseModel):
    """Body of /studio/result."""
    id: int
    result: JsonValue = None
    error: JsonValue = None


class Ack(BaseModel):
    ok: bool = True


class ToolDescriptor(BaseModel):
    """Public view of a registry entry."""
    name: str
    description: str
    input_schema: dict[str, Any]


class ToolResponse(BaseModel):
    """Outcome of one tool invocation, success or failure."""
    tool: str
    is_error: bool = False
    content: str
    error_code: str | None = None


class HealthStatus(BaseModel):
    status: str
    service: str
    version: str
    alive: bool
    queue_size: int
    pending: int
