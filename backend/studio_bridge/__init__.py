"""Studio Bridge: relays agent tool calls to a poll-only Roblox Studio plugin.

Invariants:
    - Package root contains no executable code (no import side effects)

Design Decisions:
    - Explicit imports only, no star exports
"""
