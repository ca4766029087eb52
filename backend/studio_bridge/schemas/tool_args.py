"""Tool Argument Schemas: one Pydantic model per Studio tool.

Invariants:
    - Field names are snake_case in Python, camelCase on the wire (className,
      newParent, assetId); both spellings are accepted on input
    - Optional fields left unset are omitted from the payload sent to Studio
    - Free-form values (set_property.value, insert_instance.properties) accept
      any JSON value and are not otherwise checked

Design Decisions:
    - alias_generator=to_camel instead of per-field aliases: one rule for all tools
    - ScriptContext as str Enum: JSON schema lists the three allowed contexts
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from pydantic.alias_generators import to_camel


class ScriptContext(str, Enum):
    """Where run_script executes inside Studio."""
    SERVER = "Server"
    CLIENT = "Client"
    PLUGIN = "Plugin"


class ToolArgs(BaseModel):
    """Base for tool argument models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_command_args(self) -> dict[str, Any]:
        """Serialize for the plugin, dropping optional fields that were not given."""
        omitted = {
            name for name, info in type(self).model_fields.items()
            if not info.is_required() and info.default is None
            and getattr(self, name) is None
        }
        return self.model_dump(mode="json", by_alias=True, exclude=omitted)


class RunScriptArgs(ToolArgs):
    code: str
    context: ScriptContext = ScriptContext.PLUGIN


class InsertInstanceArgs(ToolArgs):
    class_name: str
    parent: str
    name: str | None = None
    properties: dict[str, JsonValue] | None = None


class EditScriptArgs(ToolArgs):
    path: str
    source: str


class GetScriptArgs(ToolArgs):
    path: str


class SetPropertyArgs(ToolArgs):
    path: str
    property: str
    value: JsonValue


class ListChildrenArgs(ToolArgs):
    path: str = "game"


class DeleteInstanceArgs(ToolArgs):
    path: str


class MoveInstanceArgs(ToolArgs):
    path: str
    new_parent: str


class InsertFreeModelArgs(ToolArgs):
    asset_id: int = Field(strict=True)
    parent: str = "game.Workspace"
