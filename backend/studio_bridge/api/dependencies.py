"""API Dependencies: access to the process-wide relay objects.

Invariants:
    - One RelayQueue and one ToolInvoker per app, created in main.py
    - Tests replace them through app.dependency_overrides
"""

from fastapi import Request

from studio_bridge.services.relay_queue import RelayQueue
from studio_bridge.services.tool_invocation import ToolInvoker


def get_relay_queue(request: Request) -> RelayQueue:
    return request.app.state.relay_queue


def get_tool_invoker(request: Request) -> ToolInvoker:
    return request.app.state.tool_invoker
