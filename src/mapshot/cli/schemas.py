#!/usr/bin/env python3
"""
Schema Definitions for MapShot CLI

This module provides the JSON response envelope used by --json output and
schema generation for the CLI and the MCP tool. The CLI schema is read from
the command tree that Typer builds; the MCP tool schema comes from the
pydantic model of the tool payload.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Third-party package documentation:
- Typer: https://typer.tiangolo.com/
- Pydantic: https://docs.pydantic.dev/

Sample input:
    schema = generate_cli_schema(app)

Expected output:
- CLI Schema:
  ```python
  {
      "name": "mapshot",
      "version": "1.0.0",
      "description": "Generate map screenshots with markers",
      "commands": {
          "snap": {
              "name": "snap",
              "help": "Generate a map screenshot and save it to a file.",
              "parameters": {
                  "center": {
                      "name": "center",
                      "type": "string",
                      "default": None,
                      "required": False,
                      "help": "Latitude and longitude of the map center ..."
                  },
                  ...
              }
          },
          "tools": {"name": "tools", "help": "Utility tools", "commands": {...}}
      }
  }
  ```

- Response Format:
  ```python
  {"success": True, "data": {"file": "/abs/map.png"}}
  # or
  {"success": False, "error": "Latitude must be between -90 and 90"}
  ```
"""

from typing import Any, Dict, Optional

import typer
from pydantic import BaseModel

from mapshot.core.models import MapScreenshotToolInput

CLI_NAME = "mapshot"
CLI_DESCRIPTION = "Generate map screenshots with markers"

_CLICK_TYPES = {
    "text": "string",
    "integer": "integer",
    "float": "number",
    "boolean": "boolean",
}


# Response structure models
class ErrorResponse(BaseModel):
    """Error response model"""
    success: bool = False
    error: str
    details: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseModel):
    """Success response model"""
    success: bool = True
    data: Dict[str, Any]


def format_cli_response(
    success: bool,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the JSON envelope printed in --json mode.

    Args:
        success: Whether the command succeeded
        data: Result data for successful commands
        error: Error message for failed commands
        details: Extra context for failures

    Returns:
        Dict[str, Any]: Response dictionary
    """
    if success:
        return SuccessResponse(data=data or {}).model_dump()
    return ErrorResponse(error=error or "Unknown error", details=details).model_dump(exclude_none=True)


def generate_cli_schema(app: typer.Typer, version: str = "1.0.0") -> Dict[str, Any]:
    """
    Generate schema for a Typer app.

    The command tree is read from the Click command Typer builds. Typer may
    ship its own copy of Click, so groups and options are recognised by their
    attributes rather than by class.

    Args:
        app: Typer app
        version: Version reported in the schema

    Returns:
        Dict[str, Any]: Schema dictionary
    """
    command = typer.main.get_command(app)
    schema: Dict[str, Any] = {
        "name": CLI_NAME,
        "version": version,
        "description": CLI_DESCRIPTION,
        "commands": {},
    }
    if _is_group(command):
        _add_commands_to_schema(schema["commands"], command)
    return schema


def _is_group(command: Any) -> bool:
    return isinstance(getattr(command, "commands", None), dict)


def _add_commands_to_schema(schema: Dict[str, Any], group: Any) -> None:
    for name, command in group.commands.items():
        if _is_group(command):
            schema[name] = {
                "name": name,
                "help": command.help or "",
                "commands": {},
            }
            _add_commands_to_schema(schema[name]["commands"], command)
        else:
            schema[name] = {
                "name": name,
                "help": (command.help or "").strip(),
                "parameters": _get_command_parameters(command),
            }


def _get_command_parameters(command: Any) -> Dict[str, Any]:
    parameters = {}
    for param in command.params:
        if getattr(param, "param_type_name", None) != "option" or param.name == "help":
            continue
        parameters[param.name] = {
            "name": param.name,
            "flags": list(param.opts) + list(param.secondary_opts),
            "type": _CLICK_TYPES.get(param.type.name, "string"),
            "default": param.default if isinstance(param.default, (str, int, float)) else None,
            "required": bool(param.required),
            "help": param.help or "",
        }
    return parameters


def generate_tool_schema() -> Dict[str, Any]:
    """
    JSON schema of the generate-map-screenshot tool payload.

    Returns:
        Dict[str, Any]: JSON schema with camelCase property names
    """
    return MapScreenshotToolInput.model_json_schema(by_alias=True)
