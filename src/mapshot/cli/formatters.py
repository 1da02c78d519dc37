#!/usr/bin/env python3
"""
Formatters for MapShot CLI

This module provides rich formatting utilities for the CLI presentation layer.
It includes panels for results and messages and a progress indicator.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- Screenshot result dictionary
- Error messages

Expected output:
- Rich formatted panels and progress indicators
"""

import os
from typing import Any, Dict

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.text import Text


# Initialize console
console = Console()


# Color scheme
COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "path": "cyan",
    "highlight": "magenta",
    "dim": "grey70",
}


def print_screenshot_result(result: Dict[str, Any]) -> None:
    """
    Format and print a saved map screenshot to the console.

    Args:
        result: Dictionary with "file" and optional "details"
    """
    if "error" in result:
        print_error(result["error"])
        return

    file_path = result.get("file", "Unknown")

    file_info = Text()
    file_info.append("Filename: ", style=COLORS["dim"])
    file_info.append(f"{os.path.basename(file_path)}\n", style=COLORS["path"])
    file_info.append("Directory: ", style=COLORS["dim"])
    file_info.append(f"{os.path.dirname(file_path)}", style=COLORS["path"])

    if os.path.exists(file_path):
        size_kb = os.path.getsize(file_path) / 1024
        file_info.append("\nSize: ", style=COLORS["dim"])
        file_info.append(f"{size_kb:.1f} KB", style=COLORS["info"])

    details = result.get("details") or {}
    if details:
        file_info.append("\n")
    for label, value in details.items():
        file_info.append(f"\n{label}: ", style=COLORS["dim"])
        file_info.append(str(value), style=COLORS["highlight"])

    panel = Panel(
        file_info,
        title="[bold green]Map Screenshot Saved",
        border_style=COLORS["success"],
        padding=(1, 2)
    )

    console.print(panel)


def _print_message(message: str, title: str, color: str) -> None:
    panel = Panel(
        Text(message, style=color),
        title=f"[bold {color}]{title}",
        border_style=color,
        padding=(1, 2)
    )
    console.print(panel)


def print_error(message: str, title: str = "Error") -> None:
    """Format and print error message to the console."""
    _print_message(message, title, COLORS["error"])


def print_warning(message: str, title: str = "Warning") -> None:
    """Format and print warning message to the console."""
    _print_message(message, title, COLORS["warning"])


def print_info(message: str, title: str = "Info") -> None:
    """Format and print info message to the console."""
    _print_message(message, title, COLORS["info"])


def print_json(data: Dict[str, Any]) -> None:
    """
    Print data as JSON for machine consumption.

    Args:
        data: JSON-serializable data
    """
    console.print_json(data=data)


def create_progress() -> Progress:
    """
    Create a transient progress spinner.

    Returns:
        Progress: Rich progress indicator
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
