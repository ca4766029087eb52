"""Error Hierarchy: typed, categorized exceptions for every relay failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are raised before a command is enqueued
    - Timeout and vanished-command errors are distinguishable by code in logs
    - message is safe to show to the calling agent

Design Decisions:
    - Single hierarchy rooted at BridgeError: ToolInvoker.invoke catches the
      base class and turns it into an error ToolResponse
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_CLIENT = "external_client"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    command_id: int | None = None
    tool_name: str | None = None
    timeout_ms: int | None = None
    debug_info: dict[str, Any] | None = None


class BridgeError(Exception):
    """Base exception for all Studio Bridge errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()


# ─── Caller Errors ──────────────────────────────────────────

class ToolValidationError(BridgeError):
    """Tool arguments did not match the tool's declared shape."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class UnknownToolError(BridgeError):
    """No registry entry for the requested tool name."""
    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tool_name = tool_name
        super().__init__(
            f"Tool '{tool_name}' does not exist.",
            "UNKNOWN_TOOL", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx,
        )


# ─── Relay Errors ────────────────────────────────────────────

class CommandExecutionError(BridgeError):
    """The Studio plugin ran the command and reported a failure."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXECUTION_ERROR", ErrorCategory.EXTERNAL_CLIENT,
            ErrorSeverity.ERROR, context,
        )


class CommandTimeoutError(BridgeError):
    """No completion arrived within the timeout budget."""
    def __init__(self, command_id: int, timeout_ms: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.command_id = command_id
        ctx.timeout_ms = timeout_ms
        super().__init__(
            "Timeout - Is Roblox Studio plugin running?",
            "COMMAND_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, ctx,
        )


class CommandVanishedError(BridgeError):
    """A live command disappeared from the queue without being resolved."""
    def __init__(self, command_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.command_id = command_id
        super().__init__(
            "Command not found",
            "COMMAND_VANISHED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx,
        )
