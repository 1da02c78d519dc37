#!/usr/bin/env python3
"""
Constants for MapShot

This module defines the defaults, bounds and page contract used throughout
the map screenshot functionality.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, Any, List

# Defaults applied to a partially specified request
DEFAULT_OPTIONS: Dict[str, Any] = {
    "zoom": 14,
    "width": 800,
    "height": 800,
    "is_rounded": False,
    "markers": (),
}

# Accepted ranges for request fields
BOUNDS: Dict[str, Dict[str, float]] = {
    "latitude": {"min": -90, "max": 90},
    "longitude": {"min": -180, "max": 180},
    "zoom": {"min": 1, "max": 18},
    "dimension": {"min": 1, "max": 10000},
}

# Default output file for the CLI
DEFAULT_OUTPUT_PATH = "map-screenshot.png"

# Map page contract
CONFIGURE_EVENT = "map-configure"
READY_FLAG = "__mapshotReady"

# Browser settings
BROWSER_LAUNCH_ARGS: List[str] = ["--no-sandbox", "--disable-setuid-sandbox"]
DEVICE_SCALE_FACTOR = 1

# Readiness strategies for a configured map
READY_STRATEGIES = ("network-idle", "map-ready")

# Polling interval while waiting for network idle
IDLE_POLL_MS = 50

# Logging settings
LOG_MAX_STR_LEN: int = 100


if __name__ == "__main__":
    """Validate module constants"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: defaults sit inside the bounds
    total_tests += 1
    if not (BOUNDS["zoom"]["min"] <= DEFAULT_OPTIONS["zoom"] <= BOUNDS["zoom"]["max"]):
        all_validation_failures.append(f"Default zoom {DEFAULT_OPTIONS['zoom']} outside bounds")
    for key in ("width", "height"):
        if not (BOUNDS["dimension"]["min"] <= DEFAULT_OPTIONS[key] <= BOUNDS["dimension"]["max"]):
            all_validation_failures.append(f"Default {key} {DEFAULT_OPTIONS[key]} outside bounds")

    # Test 2: default strategy is known
    total_tests += 1
    if "network-idle" not in READY_STRATEGIES:
        all_validation_failures.append("network-idle strategy missing")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
