#!/usr/bin/env python3
"""
Utility Functions for MapShot

Shared helpers for the presentation and integration layers: human readable
request summaries, error responses and system information for debugging.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.
"""

import platform
from typing import Any, Dict

from mapshot.core.constants import LOG_MAX_STR_LEN
from mapshot.core.models import ScreenshotRequest


def format_coordinates(center) -> str:
    lat, lng = center
    return f"[{lat}, {lng}]"


def summarize_request(request: ScreenshotRequest) -> Dict[str, str]:
    """
    Describe a request as ordered label/value pairs.

    Args:
        request: Fully specified request

    Returns:
        Dict[str, str]: Labels mapped to display values
    """
    return {
        "Center": format_coordinates(request.center),
        "Zoom Level": str(request.zoom),
        "Dimensions": f"{request.width}x{request.height}",
        "Rounded Corners": "true" if request.is_rounded else "false",
        "Markers": f"{len(request.markers)} marker(s)",
    }


def truncate_large_value(value: Any, max_str_len: int = LOG_MAX_STR_LEN) -> Any:
    """
    Truncates large string values for logging purposes.
    """
    if isinstance(value, str) and len(value) > max_str_len:
        return f"{value[:max_str_len]}... [truncated, {len(value)} chars total]"
    return value


def get_system_info() -> Dict[str, str]:
    """
    Get system information for debugging.

    Returns:
        Dict[str, str]: System information
    """
    return {
        "platform": platform.system(),
        "platform_version": platform.version(),
        "python_version": platform.python_version(),
        "architecture": platform.architecture()[0],
    }


def format_error_response(error_message: str, include_system_info: bool = False) -> Dict[str, Any]:
    """
    Creates a standardized error response.

    Args:
        error_message: Error message
        include_system_info: Whether to include system information

    Returns:
        Dict[str, Any]: Error response dictionary
    """
    response: Dict[str, Any] = {"error": error_message}

    if include_system_info:
        response["system_info"] = get_system_info()

    return response
