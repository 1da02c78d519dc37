#!/usr/bin/env python3
"""
Output Writer for MapShot

Writes screenshot bytes to disk. Relative paths are resolved against a base
directory (the current working directory by default), absolute paths are used
as given, missing parent directories are created and existing files are
overwritten.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- write_screenshot_file(png_bytes, "./out/map.png")

Expected output:
- "/current/working/dir/out/map.png" (the directory "out" is created if needed)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from loguru import logger

from mapshot.core.errors import FilesystemError, ValidationError


@dataclass(frozen=True)
class FileOutput:
    """Bytes to persist and where to put them."""

    path: str
    content: bytes
    description: Optional[str] = None


def resolve_output_path(path: str, base_dir: Optional[str] = None) -> Path:
    """
    Resolve a relative or absolute path to an absolute one.

    Args:
        path: Target path
        base_dir: Directory for relative paths, defaults to the working directory

    Returns:
        Path: Absolute target path
    """
    if not path:
        raise ValidationError("File path cannot be empty")
    base = Path(base_dir) if base_dir else Path(os.getcwd())
    # Joining onto an absolute path discards the base
    return Path(os.path.abspath(base / Path(path).expanduser()))


def _ensure_parent(target: Path) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Cannot create directory {target.parent}: {str(e)}") from e


def write_files_to_disk(
    files: Union[FileOutput, Sequence[FileOutput]],
    base_dir: Optional[str] = None,
    create_dirs: bool = True,
) -> List[str]:
    """
    Write one or more files, creating directories as needed.

    Args:
        files: A single file or a sequence of files
        base_dir: Base directory for relative paths
        create_dirs: Whether to create missing parent directories

    Returns:
        List[str]: Absolute paths written, in input order

    Raises:
        FilesystemError: If a directory or file cannot be written
    """
    file_list = [files] if isinstance(files, FileOutput) else list(files)
    written_paths: List[str] = []

    for file in file_list:
        target = resolve_output_path(file.path, base_dir)

        if create_dirs:
            _ensure_parent(target)

        try:
            target.write_bytes(file.content)
        except OSError as e:
            raise FilesystemError(f"Cannot write {target}: {str(e)}") from e

        label = f" ({file.description})" if file.description else ""
        logger.info(f"Wrote {len(file.content)} bytes to {target}{label}")
        written_paths.append(str(target))

    return written_paths


def write_screenshot_file(content: bytes, output_path: str, base_dir: Optional[str] = None) -> str:
    """
    Write a single screenshot file.

    Args:
        content: The screenshot bytes
        output_path: The output path (relative or absolute)
        base_dir: Base directory for relative paths

    Returns:
        str: The absolute path where the file was written
    """
    [written_path] = write_files_to_disk(
        FileOutput(path=output_path, content=content, description="map screenshot"),
        base_dir=base_dir,
    )
    return written_path


if __name__ == "__main__":
    """Validate the output writer"""
    import sys
    import shutil
    import tempfile

    all_validation_failures = []
    total_tests = 0
    test_dir = tempfile.mkdtemp()

    try:
        # Test 1: nested relative path
        total_tests += 1
        path = write_screenshot_file(b"first", "./out/map.png", base_dir=test_dir)
        if Path(path).read_bytes() != b"first":
            all_validation_failures.append("Nested write failed")

        # Test 2: overwrite
        total_tests += 1
        write_screenshot_file(b"second", "./out/map.png", base_dir=test_dir)
        if Path(path).read_bytes() != b"second":
            all_validation_failures.append("Overwrite failed")
    finally:
        shutil.rmtree(test_dir, ignore_errors=True)

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
