"""
Core Layer for MapShot

This package contains the core business logic: request models and defaults,
input coercion, the browser-driven capture loop and the output writer.

The core layer is designed to be:
1. Independent of UI or integration concerns
2. Fully testable in isolation
3. Focused on business logic only

Usage:
    from mapshot.core import take_map_screenshot, write_screenshot_file
    png = take_map_screenshot({"center": (37.7749, -122.4194), "zoom": 14})
    path = write_screenshot_file(png, "./out/san-francisco.png")
"""

from mapshot.core.constants import DEFAULT_OPTIONS, DEFAULT_OUTPUT_PATH, BOUNDS

from mapshot.core.config import CONFIG, get_capture_settings, validate_config

from mapshot.core.errors import (
    MapshotError,
    ValidationError,
    SessionAcquisitionError,
    PageLoadError,
    CaptureError,
    FilesystemError,
)

from mapshot.core.models import (
    MarkerConfig,
    MapScreenshotOptions,
    ScreenshotRequest,
    MapScreenshotToolInput,
)

from mapshot.core.normalizer import with_defaults

from mapshot.core.parsing import (
    parse_center,
    parse_zoom,
    parse_dimension,
    parse_boolean,
    parse_markers,
    parse_file_path,
)

from mapshot.core.capture import (
    MapSession,
    NetworkIdleWatcher,
    take_map_screenshot,
    take_map_screenshots,
)

from mapshot.core.output import (
    FileOutput,
    resolve_output_path,
    write_files_to_disk,
    write_screenshot_file,
)

__all__ = [
    # Constants and configuration
    'DEFAULT_OPTIONS',
    'DEFAULT_OUTPUT_PATH',
    'BOUNDS',
    'CONFIG',
    'get_capture_settings',
    'validate_config',

    # Errors
    'MapshotError',
    'ValidationError',
    'SessionAcquisitionError',
    'PageLoadError',
    'CaptureError',
    'FilesystemError',

    # Models
    'MarkerConfig',
    'MapScreenshotOptions',
    'ScreenshotRequest',
    'MapScreenshotToolInput',
    'with_defaults',

    # Parsing
    'parse_center',
    'parse_zoom',
    'parse_dimension',
    'parse_boolean',
    'parse_markers',
    'parse_file_path',

    # Capture
    'MapSession',
    'NetworkIdleWatcher',
    'take_map_screenshot',
    'take_map_screenshots',

    # Output
    'FileOutput',
    'resolve_output_path',
    'write_files_to_disk',
    'write_screenshot_file',
]
