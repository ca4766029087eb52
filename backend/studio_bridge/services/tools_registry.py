"""Tools Registry: name -> ToolSpec lookup for the invocation layer.

Invariants:
    - Tool names are unique; registering a duplicate raises ValueError
    - descriptors() lists tools in registration order
    - The relay queue never imports this module (it treats tool/args as opaque)

Design Decisions:
    - Explicit registration from define_studio_tools.py, no auto-discovery
    - New tools are new ToolSpec entries; RelayQueue stays unchanged
"""

from studio_bridge.core.tool_spec import ToolSpec
from studio_bridge.schemas.commands import ToolDescriptor
from studio_bridge.services.define_studio_tools import TOOLS_STUDIO


class ToolRegistry:
    """Ordered collection of ToolSpec entries."""

    def __init__(self, specs: list[ToolSpec] | None = None):
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Tool '{spec.name}' is already registered")
        self._specs[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        return self._specs.get(name)

    def names(self) -> list[str]:
        return list(self._specs)

    def __iter__(self):
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def descriptors(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor(
                name=s.name, description=s.description,
                input_schema=s.input_schema(),
            )
            for s in self._specs.values()
        ]


def build_default_registry() -> ToolRegistry:
    """Registry with every Studio tool."""
    return ToolRegistry(TOOLS_STUDIO)
