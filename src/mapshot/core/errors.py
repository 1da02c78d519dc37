#!/usr/bin/env python3
"""
Error Taxonomy for MapShot

Every failure that can abort a call is one of these. Validation problems are
raised before any browser work starts; the others come from the capture
pipeline or the output writer.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
    try:
        MapScreenshotOptions(center=(95, 0))
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e)

Expected output:
    ValidationError("center: Latitude must be between -90 and 90")
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError


class MapshotError(Exception):
    """Base exception for MapShot errors."""

    pass


class ValidationError(MapshotError):
    """Raised when a request field is malformed or out of range."""

    pass


class SessionAcquisitionError(MapshotError):
    """Raised when the browser session cannot be started."""

    pass


class PageLoadError(MapshotError):
    """Raised when the map page fails to load or settle."""

    pass


class CaptureError(MapshotError):
    """Raised when a step of the per-request capture loop fails."""

    def __init__(self, message: str, index: Optional[int] = None, total: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.total = total


class FilesystemError(MapshotError):
    """Raised when the screenshot cannot be written to disk."""

    pass


def validation_error_from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """
    Convert a pydantic validation error into a MapShot ValidationError.

    Custom messages raised from validators arrive prefixed with "Value error, ";
    the prefix is dropped so the validator wording reaches the user.
    """
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return ValidationError("; ".join(messages) or str(exc))
