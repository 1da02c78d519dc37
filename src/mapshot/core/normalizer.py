#!/usr/bin/env python3
"""
Request Normalizer

Fills the optional fields of a partially specified request with the documented
defaults (zoom=14, width=800, height=800, isRounded=false, markers=[]).
The merge is pure: it never validates ranges and never touches the input.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- MapScreenshotOptions(center=(51.5074, -0.1278), zoom=10)

Expected output:
- ScreenshotRequest(center=(51.5074, -0.1278), zoom=10, width=800, height=800,
                    is_rounded=False, markers=())
"""

from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from mapshot.core.constants import DEFAULT_OPTIONS
from mapshot.core.errors import validation_error_from_pydantic
from mapshot.core.models import MapScreenshotOptions, ScreenshotRequest

OptionsLike = Union[MapScreenshotOptions, ScreenshotRequest, Dict[str, Any]]


def with_defaults(options: OptionsLike) -> ScreenshotRequest:
    """
    Produce a fully specified request from a partial one.

    Args:
        options: Partial options model, an already complete request, or a dict
                 using either snake_case or camelCase keys

    Returns:
        ScreenshotRequest: Request with every optional field filled in

    Raises:
        ValidationError: If the input has no usable center
    """
    if isinstance(options, ScreenshotRequest):
        return options

    if isinstance(options, MapScreenshotOptions):
        provided = options.model_dump(exclude_none=True)
    else:
        provided = {key: value for key, value in dict(options).items() if value is not None}
        # camelCase spelling of the one renamed field
        if "isRounded" in provided:
            provided["is_rounded"] = provided.pop("isRounded")

    merged = {**DEFAULT_OPTIONS, **provided}
    try:
        return ScreenshotRequest(**merged)
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e) from e


if __name__ == "__main__":
    """Validate the normalizer"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: defaults fill the gaps
    total_tests += 1
    request = with_defaults(MapScreenshotOptions(center=(51.5074, -0.1278), zoom=10))
    if (request.zoom, request.width, request.height, request.is_rounded, request.markers) != (10, 800, 800, False, ()):
        all_validation_failures.append(f"Defaults not applied: {request}")

    # Test 2: idempotent
    total_tests += 1
    if with_defaults(request) != request:
        all_validation_failures.append("Normalizing a complete request changed it")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
