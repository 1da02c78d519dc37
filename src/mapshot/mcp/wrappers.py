#!/usr/bin/env python3
"""
MCP Wrappers for MapShot

This module provides MCP-specific wrapper functions for the core map screenshot
functionality, handling payload validation and error formatting specific to MCP.
Every outcome, including failures, is returned as a tool result; nothing is
raised to the caller.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
    generate_map_screenshot_wrapper(
        {"center": [40.7128, -74.006], "zoom": 12},
        "./maps/nyc.png"
    )

Expected output:
    {
        "content": [{"type": "text", "text": "Successfully generated map screenshot and saved to: /abs/maps/nyc.png\n\nMap Details:\n- Center: [40.7128, -74.006]\n..."}],
        "isError": False
    }
"""

from typing import Any, Dict, Optional, Union

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from mapshot.core.capture import take_map_screenshot
from mapshot.core.errors import MapshotError, validation_error_from_pydantic
from mapshot.core.models import MapScreenshotOptions, MapScreenshotToolInput
from mapshot.core.normalizer import with_defaults
from mapshot.core.output import write_screenshot_file
from mapshot.core.utils import summarize_request, truncate_large_value


def format_mcp_response(text: str, is_error: bool = False) -> Dict[str, Any]:
    """
    Format a response in MCP tool-result format.

    Args:
        text: Message for the client
        is_error: Whether the call failed

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    return {
        "content": [{"type": "text", "text": text}],
        "isError": is_error,
    }


def format_success_text(output_path: str, details: Dict[str, str]) -> str:
    lines = [f"Successfully generated map screenshot and saved to: {output_path}", "", "Map Details:"]
    lines.extend(f"- {label}: {value}" for label, value in details.items())
    return "\n".join(lines)


def generate_map_screenshot_wrapper(
    options: Union[MapScreenshotOptions, Dict[str, Any]],
    output_path: str,
    base_dir: Optional[str] = None
) -> Dict[str, Any]:
    """
    MCP wrapper for the generate-map-screenshot tool.

    Validates the payload, renders one screenshot and writes it through the
    output writer, creating missing directories.

    Args:
        options: Screenshot options as a model or a camelCase dict
        output_path: Destination of the PNG file
        base_dir: Directory relative paths are resolved against (defaults to cwd)

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    logger.info(
        f"Map screenshot requested: options={truncate_large_value(str(options))}, output_path={output_path}"
    )
    try:
        try:
            payload = MapScreenshotToolInput(options=options, outputPath=output_path)
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(e) from e

        request = with_defaults(payload.options)
        png = take_map_screenshot(request)
        written_path = write_screenshot_file(png, payload.output_path, base_dir=base_dir)

        logger.info(f"Map screenshot saved to {written_path} ({len(png)} bytes)")
        return format_mcp_response(format_success_text(written_path, summarize_request(request)))

    except MapshotError as e:
        logger.error(f"Map screenshot failed: {str(e)}")
        return format_mcp_response(f"Failed to generate map screenshot: {str(e)}", is_error=True)
    except Exception as e:
        logger.exception(f"Unexpected error in map screenshot tool: {str(e)}")
        return format_mcp_response(f"Failed to generate map screenshot: {str(e)}", is_error=True)


if __name__ == "__main__":
    """Validate MCP wrapper formatting"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: error response shape
    total_tests += 1
    response = format_mcp_response("boom", is_error=True)
    if response != {"content": [{"type": "text", "text": "boom"}], "isError": True}:
        all_validation_failures.append(f"Unexpected error response: {response}")

    # Test 2: invalid payload returns an in-band error
    total_tests += 1
    response = generate_map_screenshot_wrapper({"center": [999, 0]}, "map.png")
    if not response["isError"] or "Latitude must be between -90 and 90" not in response["content"][0]["text"]:
        all_validation_failures.append(f"Invalid payload not reported: {response}")

    # Test 3: empty output path
    total_tests += 1
    response = generate_map_screenshot_wrapper({"center": [0, 0]}, "")
    if not response["isError"] or "File path cannot be empty" not in response["content"][0]["text"]:
        all_validation_failures.append(f"Empty path not reported: {response}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
