"""Core Layer: pure domain types and errors, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
"""
