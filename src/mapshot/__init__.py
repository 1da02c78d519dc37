"""
MapShot

Headless-browser map screenshots with a clean three-layer architecture:

1. Core Layer: request models, input coercion, capture loop and output writer
2. Presentation Layer: CLI interface with rich formatting
3. Integration Layer: MCP server for AI assistant usage

Usage:
    # Direct API usage (Core Layer)
    from mapshot.core import take_map_screenshot, write_screenshot_file
    png = take_map_screenshot({"center": (48.8566, 2.3522), "zoom": 13})
    write_screenshot_file(png, "./maps/paris.png")

    # CLI usage (Presentation Layer)
    # mapshot snap --center "48.8566,2.3522" --zoom 13 --output ./maps/paris.png

    # MCP server usage (Integration Layer)
    # mapshot mcp
"""

__version__ = "1.0.0"

# Core functionality
from mapshot.core import (
    take_map_screenshot,
    take_map_screenshots,
    write_screenshot_file,
    with_defaults,
    MapScreenshotOptions,
    ScreenshotRequest,
    MarkerConfig,
    MapshotError,
    ValidationError,
    SessionAcquisitionError,
    PageLoadError,
    CaptureError,
    FilesystemError
)

# CLI layer
from mapshot.cli import app as cli_app

# MCP layer
from mapshot.mcp import create_mcp_server

__all__ = [
    # Core functions
    'take_map_screenshot',
    'take_map_screenshots',
    'write_screenshot_file',
    'with_defaults',

    # Models and errors
    'MapScreenshotOptions',
    'ScreenshotRequest',
    'MarkerConfig',
    'MapshotError',
    'ValidationError',
    'SessionAcquisitionError',
    'PageLoadError',
    'CaptureError',
    'FilesystemError',

    # CLI entrypoint
    'cli_app',

    # MCP server
    'create_mcp_server',

    # Version info
    '__version__'
]
