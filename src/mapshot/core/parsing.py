#!/usr/bin/env python3
"""
String Coercion for MapShot Inputs

Command-line arguments arrive as strings. This module turns them into the
typed values a MapScreenshotOptions expects and rejects anything malformed or
out of range with a ValidationError carrying a human readable message.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- parse_center("[37.7749, -122.4194]")
- parse_center("37.7749,-122.4194")
- parse_markers('[{"position": [40.7128, -74.0060], "popupText": "NYC"}]')

Expected output:
- (37.7749, -122.4194)
- (37.7749, -122.4194)
- [MarkerConfig(position=(40.7128, -74.006), popup_text='NYC')]
"""

import json
import math
import re
from typing import Any, List, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from mapshot.core.errors import ValidationError, validation_error_from_pydantic
from mapshot.core.models import MarkerConfig, check_coordinates, check_dimension, check_zoom

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

MARKERS_FORMAT_HINT = '[{"position": [lat, lng], "popupText": "text"}, ...]'


def _to_number(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(f"{label} must be a number")
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(f"{label} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{label} must be a number")
    return number


def parse_center(text: str) -> Tuple[float, float]:
    """
    Parse map center coordinates.

    Accepts a JSON array "[lat, lng]" or comma separated "lat,lng".

    Args:
        text: Raw center argument

    Returns:
        Tuple[float, float]: (latitude, longitude)

    Raises:
        ValidationError: If the format or ranges are invalid
    """
    try:
        coords = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        coords = None

    if not (isinstance(coords, list) and len(coords) == 2):
        parts = [part.strip() for part in str(text).split(",")]
        if len(parts) != 2:
            raise ValidationError('Center must be in format "[lat, lng]" or "lat,lng"')
        coords = parts

    lat = _to_number(coords[0], "Latitude")
    lng = _to_number(coords[1], "Longitude")
    try:
        return check_coordinates((lat, lng))
    except ValueError as e:
        raise ValidationError(str(e)) from None


def _parse_integer(text: Union[str, int], label: str) -> int:
    if isinstance(text, bool):
        raise ValidationError(f"{label} must be a valid number")
    if isinstance(text, int):
        return text
    value = str(text).strip()
    if _INTEGER_PATTERN.match(value):
        return int(value)
    try:
        float(value)
    except ValueError:
        raise ValidationError(f"{label} must be a valid number") from None
    raise ValidationError(f"{label} must be an integer")


def parse_zoom(text: Union[str, int]) -> int:
    """Parse a zoom level between 1 and 18."""
    try:
        return check_zoom(_parse_integer(text, "Zoom level"))
    except ValueError as e:
        raise ValidationError(str(e)) from None


def parse_dimension(text: Union[str, int]) -> int:
    """Parse an image width or height between 1 and 10000 pixels."""
    try:
        return check_dimension(_parse_integer(text, "Dimension"))
    except ValueError as e:
        raise ValidationError(str(e)) from None


def parse_boolean(value: Union[bool, str]) -> bool:
    """
    Parse a boolean given as a real bool or as "true"/"false"/"1"/"0".
    """
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise ValidationError("Value must be a boolean or string")
    return value.lower() == "true" or value == "1"


def parse_markers(text: str) -> List[MarkerConfig]:
    """
    Parse markers from a JSON array string.

    Args:
        text: JSON such as '[{"position": [lat, lng], "popupText": "text"}]'

    Returns:
        List[MarkerConfig]: Markers in input order

    Raises:
        ValidationError: On malformed JSON, a non-array value or an invalid marker
    """
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError(f"Invalid JSON format for markers. Expected: {MARKERS_FORMAT_HINT}") from None

    if not isinstance(raw, list):
        raise ValidationError("Markers must be an array")

    markers = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(
                f"Marker {index}: Marker configuration must be an object with position and optional popupText"
            )
        try:
            markers.append(MarkerConfig.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(f"Marker {index}: {validation_error_from_pydantic(e)}") from e
    return markers


def parse_file_path(text: str) -> str:
    """Check that an output file path is a non-empty string."""
    if not isinstance(text, str):
        raise ValidationError("File path must be a string")
    if not text:
        raise ValidationError("File path cannot be empty")
    return text


if __name__ == "__main__":
    """Validate parsing functions"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: both center formats agree
    total_tests += 1
    if parse_center("[37.7749,-122.4194]") != parse_center("37.7749,-122.4194"):
        all_validation_failures.append("Center formats disagree")

    # Test 2: out of range latitude rejected
    total_tests += 1
    try:
        parse_center("95,0")
        all_validation_failures.append("Latitude 95 accepted")
    except ValidationError:
        pass

    # Test 3: markers
    total_tests += 1
    markers = parse_markers('[{"position":[40.7128,-74.0060],"popupText":"NYC"}]')
    if len(markers) != 1 or markers[0].popup_text != "NYC":
        all_validation_failures.append(f"Unexpected markers: {markers}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
