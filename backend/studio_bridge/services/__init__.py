"""Services Layer: relay queue, tool registry, invocation and MCP adapter.

Invariants:
    - The relay queue is tool-agnostic; tool knowledge lives in the registry
    - Tool lookup goes through one explicit registry (no auto-discovery)
"""
