"""
CLI Layer for MapShot

This package contains the CLI (Command Line Interface) layer for map screenshots,
providing a rich interface for human users.

The CLI layer is designed to:
1. Handle user interaction concerns
2. Format outputs for human readability
3. Parse and validate command-line arguments
4. Implement CLI-specific error handling

Usage:
    from mapshot.cli import app as mapshot_app

    # Run the CLI app
    mapshot_app()

    # Alternative: use formatters directly
    from mapshot.cli.formatters import print_screenshot_result
    print_screenshot_result({"file": "/abs/map.png", "details": {...}})
"""

# CLI application
from mapshot.cli.cli import app, run

# Formatters for rich output
from mapshot.cli.formatters import (
    print_screenshot_result,
    print_error,
    print_warning,
    print_info,
    print_json,
    create_progress,
    console
)

# CLI validators
from mapshot.cli.validators import (
    validate_center_option,
    validate_zoom_option,
    validate_dimension_option,
    validate_rounded_option,
    validate_markers_option,
    validate_output_option,
    validate_json_output
)

# Schema definitions
from mapshot.cli.schemas import (
    generate_cli_schema,
    generate_tool_schema,
    format_cli_response
)

__all__ = [
    # CLI application
    'app',
    'run',

    # Formatters
    'print_screenshot_result',
    'print_error',
    'print_warning',
    'print_info',
    'print_json',
    'create_progress',
    'console',

    # Validators
    'validate_center_option',
    'validate_zoom_option',
    'validate_dimension_option',
    'validate_rounded_option',
    'validate_markers_option',
    'validate_output_option',
    'validate_json_output',

    # Schemas
    'generate_cli_schema',
    'generate_tool_schema',
    'format_cli_response'
]

# Example usage
if __name__ == "__main__":
    print("""
Example usage of the MapShot CLI:

# Screenshot of San Francisco at the default zoom
mapshot snap --center "37.7749,-122.4194" --output ./maps/sf.png

# Custom size with rounded corners and a marker
mapshot snap -c "[51.5074, -0.1278]" -z 12 -w 1024 -h 600 --rounded \\
    -m '[{"position": [51.5074, -0.1278], "popupText": "London"}]'

# Show version information
mapshot tools version

# Output in JSON format (for all commands)
mapshot --json snap -c "0,0"
""")
