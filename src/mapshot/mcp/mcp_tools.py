#!/usr/bin/env python3
"""
MCP Tools for MapShot

This module provides the MCP tool definition for map screenshot generation
to be used by AI assistants over the stdio transport.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- MCP server configuration

Expected output:
- Configured MCP server with the generate-map-screenshot tool registered
"""

import asyncio

from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from mapshot.core.models import MapScreenshotOptions
from mapshot.mcp.wrappers import generate_map_screenshot_wrapper

SERVER_NAME = "mapshot-mcp-server"
TOOL_NAME = "generate-map-screenshot"
TOOL_DESCRIPTION = (
    "Generate a PNG screenshot of a map centered on the given coordinates, "
    "with optional markers and popups, and save it to the given file path."
)


def create_mcp_server(name: str = SERVER_NAME) -> FastMCP:
    """
    Create and configure MCP server with the map screenshot tool

    Logging is configured by the server entry point, not here.

    Args:
        name: Name for the MCP server

    Returns:
        FastMCP: Configured MCP server instance
    """
    mcp = FastMCP(name)
    logger.info(f"Initialized FastMCP server: {name}")

    register_map_screenshot_tool(mcp)

    return mcp


def register_map_screenshot_tool(mcp: FastMCP) -> None:
    """
    Register generate-map-screenshot tool with the MCP server

    Args:
        mcp: MCP server instance
    """
    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def generate_map_screenshot(options: MapScreenshotOptions, outputPath: str) -> CallToolResult:
        """
        Render a map and save it as a PNG file.

        Args:
            options: Map screenshot configuration options
            outputPath: The file path where the screenshot should be saved

        Returns:
            CallToolResult: Confirmation with the absolute path and the map details,
                or the failure message with isError set
        """
        logger.info(f"Map screenshot tool called with outputPath={outputPath}")
        # Playwright's sync API cannot run on the server's event loop
        result = await asyncio.to_thread(generate_map_screenshot_wrapper, options, outputPath)
        return CallToolResult.model_validate(result)


if __name__ == "__main__":
    """Test MCP tools functionality"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: Create MCP server and list its tools
    total_tests += 1
    try:
        mcp_server = create_mcp_server("Test MCP Server")
        tools = asyncio.run(mcp_server.list_tools())
        names = [tool.name for tool in tools]
        if names != [TOOL_NAME]:
            all_validation_failures.append(f"Unexpected tools registered: {names}")
    except Exception as e:
        all_validation_failures.append(f"MCP server creation failed: {str(e)}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        print("MCP Tools are validated and ready for use")
        sys.exit(0)
