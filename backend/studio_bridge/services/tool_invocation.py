"""Tool Invocation: validate tool arguments, relay them to Studio, shape the reply.

Invariants:
    - Argument validation happens before enqueue; invalid input creates no command
    - call() is the synchronous round trip: enqueue, await, fail on error outcome
    - invoke() never raises: every failure becomes a ToolResponse with is_error
    - Unknown tools return UNKNOWN_TOOL (never reach the relay)

Design Decisions:
    - Three layers of entry: call() for raw relay use, execute() for protocol
      adapters that map exceptions themselves (MCP), invoke() for REST
    - No automatic retry: a timeout or execution error ends the call
"""

import logging
from typing import Any

from pydantic import ValidationError

from studio_bridge.core.errors import (
    BridgeError, CommandExecutionError, ErrorContext, ToolValidationError,
    UnknownToolError,
)
from studio_bridge.schemas.commands import ToolResponse
from studio_bridge.services.relay_queue import RelayQueue
from studio_bridge.services.tools_registry import ToolRegistry

logger = logging.getLogger(__name__)


def _validation_error(tool_name: str, exc: ValidationError) -> ToolValidationError:
    """Collapse a pydantic ValidationError into one ToolValidationError."""
    errors = exc.errors()
    first = errors[0] if errors else {"loc": (), "msg": "invalid arguments"}
    field = ".".join(str(loc) for loc in first["loc"]) or "arguments"
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc']) or 'arguments'}: {e['msg']}"
        for e in errors
    )
    return ToolValidationError(
        f"Invalid arguments for '{tool_name}': {details}",
        field=field,
        context=ErrorContext(tool_name=tool_name, debug_info={"errors": len(errors)}),
    )


class ToolInvoker:
    """Turns named tool requests into relay round trips."""

    def __init__(
        self, relay: RelayQueue, registry: ToolRegistry,
        timeout_ms: int | None = None,
    ):
        self.relay = relay
        self.registry = registry
        self.timeout_ms = timeout_ms

    async def call(self, tool: str, args: dict[str, Any]) -> Any:
        """Enqueue a command and wait for Studio to complete it."""
        command_id = self.relay.enqueue(tool, args)
        outcome = await self.relay.await_result(command_id, self.timeout_ms)
        if outcome.failed:
            logger.info(
                f"Studio reported failure for command {command_id} ({tool})",
                extra={
                    "command_id": command_id, "tool_name": tool,
                    "error_code": "EXECUTION_ERROR",
                },
            )
            raise CommandExecutionError(
                outcome.error,
                ErrorContext(command_id=command_id, tool_name=tool),
            )
        return outcome.result

    async def execute(self, tool_name: str, raw_args: dict[str, Any] | None) -> str:
        """Validate, relay and shape one tool call. Raises BridgeError subclasses."""
        spec = self.registry.get(tool_name)
        if spec is None:
            raise UnknownToolError(tool_name)
        try:
            parsed = spec.args_model.model_validate(raw_args or {})
        except ValidationError as e:
            raise _validation_error(tool_name, e) from e
        result = await self.call(spec.name, parsed.to_command_args())
        return spec.shape_result(result)

    async def invoke(self, tool_name: str, raw_args: dict[str, Any] | None) -> ToolResponse:
        """Isolated entry point: always returns a response, never raises."""
        try:
            content = await self.execute(tool_name, raw_args)
        except BridgeError as e:
            return ToolResponse(
                tool=tool_name, is_error=True,
                content=e.message, error_code=e.code,
            )
        except Exception as e:
            logger.error(
                f"Unexpected failure invoking '{tool_name}': {e}",
                exc_info=True, extra={"tool_name": tool_name},
            )
            return ToolResponse(
                tool=tool_name, is_error=True,
                content="An unexpected error occurred",
                error_code="INTERNAL_ERROR",
            )
        return ToolResponse(tool=tool_name, content=content)
