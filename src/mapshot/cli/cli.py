#!/usr/bin/env python3
"""
Command Line Interface for MapShot

This module provides a CLI for map screenshots using Typer and Rich,
allowing users to render a map around a center point, with optional markers,
and save it as a PNG file.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer. The "mcp" command imports
the server lazily so the CLI can start it.

Sample input:
- mapshot snap --center "37.7749,-122.4194" --zoom 12 --output ./maps/sf.png

Expected output:
- Formatted console output of the saved file and map details
- PNG file saved to disk
- Structured JSON output for machine consumption (--json)
"""

import sys
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from mapshot import __version__
from mapshot.core.constants import DEFAULT_OPTIONS, DEFAULT_OUTPUT_PATH
from mapshot.core.capture import take_map_screenshot
from mapshot.core.errors import MapshotError, validation_error_from_pydantic
from mapshot.core.models import MapScreenshotOptions
from mapshot.core.normalizer import with_defaults
from mapshot.core.output import write_screenshot_file
from mapshot.core.utils import summarize_request
from mapshot.cli.formatters import (
    print_screenshot_result,
    print_error,
    print_warning,
    print_info,
    print_json,
    create_progress
)
from mapshot.cli.validators import (
    validate_center_option,
    validate_zoom_option,
    validate_dimension_option,
    validate_rounded_option,
    validate_markers_option,
    validate_output_option,
    validate_json_output
)
from mapshot.cli.schemas import (
    CLI_DESCRIPTION,
    format_cli_response,
    generate_cli_schema,
    generate_tool_schema
)


# Initialize typer app with command groups
app = typer.Typer(
    help=CLI_DESCRIPTION,
    rich_markup_mode="rich",
    add_completion=False
)

tools_app = typer.Typer(help="Utility tools", rich_markup_mode="rich")

app.add_typer(tools_app, name="tools", help="Utility tools")


def _json_mode(ctx: typer.Context) -> bool:
    return bool((ctx.obj or {}).get("json_output", False))


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON",
        callback=validate_json_output
    ),
):
    """
    MapShot - Generate map screenshots with markers

    Renders a map in a headless browser and saves it as a PNG image.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output


@app.command("snap")
def snap_command(
    ctx: typer.Context,
    center: Optional[str] = typer.Option(
        None,
        "--center", "-c",
        help='Latitude and longitude of the map center, as "lat,lng" or a JSON array of the two. Required.',
        callback=validate_center_option
    ),
    zoom: str = typer.Option(
        str(DEFAULT_OPTIONS["zoom"]),
        "--zoom", "-z",
        help="Zoom level for the map (1-18)",
        callback=validate_zoom_option
    ),
    width: str = typer.Option(
        str(DEFAULT_OPTIONS["width"]),
        "--width", "-w",
        help="Width of the image in pixels (1-10000)",
        callback=validate_dimension_option
    ),
    height: str = typer.Option(
        str(DEFAULT_OPTIONS["height"]),
        "--height", "-h",
        help="Height of the image in pixels (1-10000)",
        callback=validate_dimension_option
    ),
    rounded: bool = typer.Option(
        False,
        "--rounded",
        help="Round the corners of the map container",
        callback=validate_rounded_option
    ),
    markers: Optional[str] = typer.Option(
        None,
        "--markers", "-m",
        help='Markers as a JSON array of objects with "position" (latitude and longitude) and optional "popupText"',
        callback=validate_markers_option
    ),
    output: str = typer.Option(
        DEFAULT_OUTPUT_PATH,
        "--output", "-o",
        help="Output file to save the result. Can be relative or absolute path",
        callback=validate_output_option
    ),
    file: Optional[str] = typer.Option(
        None,
        "--file",
        help="Path to image/video to try to read the location from (not yet implemented)"
    ),
):
    """
    Generate a map screenshot and save it to a file.
    """
    json_output = _json_mode(ctx)

    if file:
        if json_output:
            logger.warning("File processing not yet implemented, ignoring --file argument")
        else:
            print_warning("File processing not yet implemented, ignoring --file argument")

    try:
        try:
            options = MapScreenshotOptions(
                center=center,
                zoom=zoom,
                width=width,
                height=height,
                is_rounded=rounded,
                markers=markers
            )
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(e) from e

        if not json_output:
            with create_progress() as progress:
                progress.add_task("Generating map screenshot...", total=None)
                png = take_map_screenshot(options)
        else:
            png = take_map_screenshot(options)

        written_path = write_screenshot_file(png, output)
        details = summarize_request(with_defaults(options))

        if json_output:
            print_json(format_cli_response(True, data={
                "file": written_path,
                "size": len(png),
                "details": details
            }))
        else:
            print_screenshot_result({"file": written_path, "details": details})

    except MapshotError as e:
        logger.error(f"Snap command failed: {str(e)}")
        if json_output:
            print_json(format_cli_response(False, error=str(e)))
        else:
            print_error(str(e))
        raise typer.Exit(1)


@app.command("mcp")
def mcp_command():
    """
    Start MapShot MCP server for AI assistants (stdio transport only).
    """
    from mapshot.mcp.mcp_server import run_server

    raise typer.Exit(run_server())


@tools_app.command("version")
def show_version(ctx: typer.Context):
    """
    Show version information.
    """
    version_info = {
        "name": "MapShot",
        "version": __version__,
        "description": CLI_DESCRIPTION,
    }

    if _json_mode(ctx):
        print_json(format_cli_response(True, data=version_info))
    else:
        print_info(
            f"Name: {version_info['name']}\n"
            f"Version: {version_info['version']}\n"
            f"Description: {version_info['description']}"
        )


@tools_app.command("schema")
def schema_command(
    ctx: typer.Context,
    format: str = typer.Option(
        "human",
        "--format", "-f",
        help="Output format: human, json, or mcp"
    )
):
    """
    Show CLI schema with all commands and options.

    Format options:
    - human: Human-readable text format
    - json: CLI schema in JSON format
    - mcp: JSON schema of the generate-map-screenshot tool
    """
    if format not in ("human", "json", "mcp"):
        print_error(f"Unknown format: {format}. Expected human, json, or mcp.")
        raise typer.Exit(1)

    if format == "mcp":
        print_json(format_cli_response(True, data={"schema": generate_tool_schema()}))
        return

    cli_schema = generate_cli_schema(app, version=__version__)

    if format == "json" or _json_mode(ctx):
        print_json(format_cli_response(True, data={"schema": cli_schema}))
        return

    lines = ["MapShot CLI Schema", "=================="]
    for cmd_name, cmd in cli_schema["commands"].items():
        if "commands" in cmd:
            lines.append(f"\n[Command Group] {cmd_name}: {cmd.get('help', '')}")
            for subcmd_name, subcmd in cmd["commands"].items():
                lines.append(f"  {subcmd_name}: {subcmd.get('help', '')}")
                lines.extend(_describe_parameters(subcmd, indent="    "))
        else:
            lines.append(f"\n[Command] {cmd_name}: {cmd.get('help', '')}")
            lines.extend(_describe_parameters(cmd, indent="  "))
    print_info("\n".join(lines), title="Schema")


def _describe_parameters(command, indent: str):
    for param_name, param in command.get("parameters", {}).items():
        required = " (required)" if param.get("required", False) else ""
        default = f" (default: {param.get('default')})" if param.get("default") not in (None, "") else ""
        yield f"{indent}--{param_name}: {param.get('type', 'string')}{required}{default}"
        if param.get("help"):
            yield f"{indent}  {param['help']}"


def run() -> None:
    """Console script entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level}: {message}</level>",
        level="WARNING",
        colorize=True
    )
    app()


if __name__ == "__main__":
    run()
