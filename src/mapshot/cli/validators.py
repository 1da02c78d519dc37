#!/usr/bin/env python3
"""
Validators for MapShot CLI

Typer callbacks that coerce the raw string options of the snap command through
mapshot.core.parsing. An invalid value prints an error panel and exits with
code 1 before any browser work starts.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- --center "37.7749,-122.4194" --zoom 12 --markers '[{"position": [37.7749, -122.4194]}]'

Expected output:
- (37.7749, -122.4194), 12, [MarkerConfig(...)]
- Friendly error messages, or a JSON error envelope with --json
"""

from typing import Any, Callable, List, Optional, Tuple

import typer
from loguru import logger

from mapshot.core.errors import ValidationError
from mapshot.core.models import MarkerConfig
from mapshot.core.parsing import (
    parse_boolean,
    parse_center,
    parse_dimension,
    parse_file_path,
    parse_markers,
    parse_zoom,
)
from mapshot.cli.formatters import print_error, print_json
from mapshot.cli.schemas import format_cli_response


def _fail(ctx: typer.Context, message: str) -> None:
    if (ctx.obj or {}).get("json_output", False):
        print_json(format_cli_response(False, error=message))
    else:
        print_error(message)
    raise typer.Exit(1)


def _run(ctx: typer.Context, parser: Callable[[Any], Any], value: Any, option: str) -> Any:
    try:
        return parser(value)
    except ValidationError as e:
        logger.debug(f"Rejected {option}={value!r}: {str(e)}")
        _fail(ctx, f"Invalid {option}: {str(e)}")


def validate_center_option(ctx: typer.Context, value: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    Typer callback for --center.

    The option is required; a missing value is reported the same way as a
    malformed one, with exit code 1.
    """
    if ctx.resilient_parsing:
        return None
    if value is None:
        _fail(ctx, "Missing required option --center. Provide it as \"[lat, lng]\" or \"lat,lng\".")
    return _run(ctx, parse_center, value, "--center")


def validate_zoom_option(ctx: typer.Context, value: str) -> int:
    """Typer callback for --zoom."""
    return _run(ctx, parse_zoom, value, "--zoom")


def validate_dimension_option(ctx: typer.Context, param: typer.CallbackParam, value: str) -> int:
    """Typer callback for --width and --height."""
    return _run(ctx, parse_dimension, value, f"--{param.name}")


def validate_rounded_option(ctx: typer.Context, value: bool) -> bool:
    """Typer callback for --rounded."""
    return _run(ctx, parse_boolean, value, "--rounded")


def validate_markers_option(ctx: typer.Context, value: Optional[str]) -> Optional[List[MarkerConfig]]:
    """Typer callback for --markers."""
    if value is None:
        return None
    return _run(ctx, parse_markers, value, "--markers")


def validate_output_option(ctx: typer.Context, value: str) -> str:
    """Typer callback for --output."""
    return _run(ctx, parse_file_path, value, "--output")


def validate_json_output(ctx: typer.Context, value: bool) -> bool:
    """
    Typer callback for the global --json flag.

    Stores the flag in the context for commands to read.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = value
    return value
