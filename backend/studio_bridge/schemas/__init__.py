"""Pydantic Schemas: wire contracts for the plugin endpoints and tool arguments.

Invariants:
    - Schemas validate at system boundaries (plugin pushes, agent tool input)
    - Domain types from core/ used for enum fields
"""
