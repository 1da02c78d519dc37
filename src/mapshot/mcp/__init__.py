"""
MCP Layer for MapShot

This package contains the MCP (Model Context Protocol) layer for map screenshots,
exposing the capture pipeline as a tool for AI assistants.

The MCP layer is designed to:
1. Expose core functions as MCP tools
2. Handle MCP-specific protocol requirements
3. Manage server startup and configuration
4. Implement MCP-compatible error handling

Usage:
    # Start the MCP server
    python -m mapshot.mcp.mcp_server start

    # Use the MCP server in Python
    from mapshot.mcp import create_mcp_server
    mcp = create_mcp_server()
    mcp.run()
"""

# MCP server creation
from mapshot.mcp.mcp_tools import create_mcp_server, register_map_screenshot_tool

# MCP server entry point
from mapshot.mcp.mcp_server import (
    main,
    run_server,
    health_check,
    get_server_info,
    configure_logging
)

# MCP wrappers
from mapshot.mcp.wrappers import (
    generate_map_screenshot_wrapper,
    format_mcp_response
)

__all__ = [
    # MCP server
    'create_mcp_server',
    'register_map_screenshot_tool',
    'main',
    'run_server',
    'health_check',
    'get_server_info',
    'configure_logging',

    # MCP wrappers
    'generate_map_screenshot_wrapper',
    'format_mcp_response'
]

# Example configuration for .mcp.json
EXAMPLE_MCP_CONFIG = """
{
  "mcpServers": {
    "mapshot": {
      "command": "mapshot",
      "args": ["mcp"]
    }
  }
}
"""

if __name__ == "__main__":
    print("""
Example usage of the MapShot MCP server:

# Start the MCP server
python -m mapshot.mcp.mcp_server start

# Run a health check
python -m mapshot.mcp.mcp_server health

# Show server information
python -m mapshot.mcp.mcp_server info

# Show the tool schema
python -m mapshot.mcp.mcp_server schema

# Example .mcp.json configuration:
""")
    print(EXAMPLE_MCP_CONFIG)
