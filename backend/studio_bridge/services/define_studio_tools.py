"""Studio Tool Definitions: the tools relayed to the Roblox Studio plugin.

Invariants:
    - Every entry names a tool the plugin knows how to execute
    - get_script is the only tool that extracts a single field from its result
    - insert_free_model is an optional plugin feature; older plugins report an
      error for it, which surfaces as an execution error
"""

from studio_bridge.core.tool_spec import ToolSpec, script_source
from studio_bridge.schemas.tool_args import (
    DeleteInstanceArgs, EditScriptArgs, GetScriptArgs, InsertFreeModelArgs,
    InsertInstanceArgs, ListChildrenArgs, MoveInstanceArgs, RunScriptArgs,
    SetPropertyArgs,
)

TOOLS_STUDIO = [
    ToolSpec(
        name="run_script",
        description="Execute Lua in Roblox Studio.",
        args_model=RunScriptArgs,
    ),
    ToolSpec(
        name="insert_instance",
        description="Insert a new Instance into Roblox Studio.",
        args_model=InsertInstanceArgs,
    ),
    ToolSpec(
        name="edit_script",
        description="Edit a script's source code.",
        args_model=EditScriptArgs,
    ),
    ToolSpec(
        name="get_script",
        description="Read a script's source code.",
        args_model=GetScriptArgs,
        shape_result=script_source,
    ),
    ToolSpec(
        name="set_property",
        description="Set a property on any instance.",
        args_model=SetPropertyArgs,
    ),
    ToolSpec(
        name="list_children",
        description="List children of an instance.",
        args_model=ListChildrenArgs,
    ),
    ToolSpec(
        name="delete_instance",
        description="Delete an instance.",
        args_model=DeleteInstanceArgs,
    ),
    ToolSpec(
        name="move_instance",
        description="Move/reparent an instance.",
        args_model=MoveInstanceArgs,
    ),
    ToolSpec(
        name="insert_free_model",
        description=(
            "Insert a free model from the Roblox library by asset id."
        ),
        args_model=InsertFreeModelArgs,
    ),
]
