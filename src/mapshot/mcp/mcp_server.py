#!/usr/bin/env python3
"""
MCP Server Entry Point for MapShot

This is the main entry point for the map screenshot MCP server, designed to be
directly referenced in the .mcp.json configuration. The server speaks the
stdio transport only, so stdout is reserved for protocol messages and all
logging goes to stderr and the log file.

This module is part of the Integration Layer and connects the MCP functionality
to the application core.
"""

import sys
import argparse
import json
import platform
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from mapshot import __version__
from mapshot.core.capture import MapSession
from mapshot.core.config import CONFIG, validate_config
from mapshot.core.errors import MapshotError
from mapshot.core.utils import format_error_response
from mapshot.cli.schemas import generate_tool_schema
from mapshot.mcp.mcp_tools import SERVER_NAME, TOOL_NAME, TOOL_DESCRIPTION, create_mcp_server


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    """
    Configure logging with proper format and level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR), defaults to MAPSHOT_LOG_LEVEL
        log_dir: Directory of mcp_server.log, defaults to MAPSHOT_LOG_DIR
    """
    level = level or CONFIG["logging"]["level"]
    log_dir = log_dir or CONFIG["logging"]["log_dir"]
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    # Remove default handlers
    logger.remove()

    # Add file logger
    logger.add(
        str(Path(log_dir) / "mcp_server.log"),
        rotation="10 MB",
        retention="1 week",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
    )

    # stdout carries the protocol
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {message}",
        level=level,
        colorize=True
    )


def _package_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "unknown"


def get_server_info() -> Dict[str, Any]:
    """
    Get server information.

    Returns:
        Dict[str, Any]: Server information
    """
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "description": "Map screenshot generation for AI assistants over MCP",
        "transport": "stdio",
        "tools": [TOOL_NAME],
    }


def health_check() -> Dict[str, Any]:
    """
    Perform a health check by starting a browser session with the map page.

    Returns:
        Dict[str, Any]: Health check results
    """
    try:
        with MapSession():
            pass
        return {
            "status": "healthy",
            "platform": platform.system(),
            "python_version": platform.python_version(),
            "playwright_version": _package_version("playwright"),
            "mcp_version": _package_version("mcp"),
        }
    except MapshotError as e:
        logger.error(f"Health check failed: {str(e)}")
        response = format_error_response(str(e), include_system_info=True)
        response["status"] = "unhealthy"
        return response


def run_server(level: Optional[str] = None, log_dir: Optional[str] = None) -> int:
    """
    Configure logging and serve the MCP tool over stdio until the client disconnects.

    Returns:
        int: Exit code
    """
    configure_logging(level, log_dir)
    logger.info(f"Starting {SERVER_NAME} {__version__} (stdio)")

    if not validate_config():
        logger.error("Invalid configuration, refusing to start")
        return 1

    try:
        mcp = create_mcp_server()
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.exception(f"Server failed: {str(e)}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the MCP server.

    Returns:
        int: Exit code
    """
    parser = argparse.ArgumentParser(description="MapShot MCP Server")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Start server command
    start_parser = subparsers.add_parser("start", help="Start the MCP server on stdio")
    start_parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    start_parser.add_argument("--log-dir", type=str, default=None, help="Directory for mcp_server.log")

    # Health check command
    subparsers.add_parser("health", help="Check that a browser session can be started")

    # Info command
    subparsers.add_parser("info", help="Display server information")

    # Schema command
    schema_parser = subparsers.add_parser("schema", help="Display the tool schema")
    schema_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "start":
        return run_server("DEBUG" if args.debug else None, args.log_dir)

    elif args.command == "health":
        result = health_check()
        print(json.dumps(result, indent=2))
        return 0 if result["status"] == "healthy" else 1

    elif args.command == "info":
        print(json.dumps(get_server_info(), indent=2))
        return 0

    elif args.command == "schema":
        schema = generate_tool_schema()
        if args.json:
            print(json.dumps({"name": TOOL_NAME, "description": TOOL_DESCRIPTION, "inputSchema": schema}, indent=2))
        else:
            print(f"Function: {TOOL_NAME}")
            print(f"  Description: {TOOL_DESCRIPTION}")
            print("  Parameters:")
            for param_name, param_info in schema.get("properties", {}).items():
                param_type = param_info.get("type", "object")
                print(f"    {param_name}: {param_type} - {param_info.get('description', 'No description')}")
        return 0

    return 0


if __name__ == "__main__":
    """
    Direct entry point for the MapShot MCP server.
    This file is designed to be referenced in .mcp.json.

    Usage:
      python -m mapshot.mcp.mcp_server start [--debug] [--log-dir DIR]
      python -m mapshot.mcp.mcp_server health
      python -m mapshot.mcp.mcp_server info
      python -m mapshot.mcp.mcp_server schema [--json]
    """
    sys.exit(main())
