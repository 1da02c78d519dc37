"""
Module Description:
Defines the central configuration dictionary (CONFIG) for MapShot.
Loads settings from environment variables using python-dotenv for the browser
session, the bundled map page, the capture waits and logging. Includes a
validation function that checks the values before a session is started.

Links:
- python-dotenv: https://github.com/theskumar/python-dotenv
- Playwright: https://playwright.dev/python/docs/api/class-page

Sample Input/Output:

- Accessing config values:
  from mapshot.core.config import CONFIG
  idle_ms = CONFIG["capture"]["network_idle_ms"]

- Flattened capture settings with overrides:
  settings = get_capture_settings(network_idle_ms=0)

- Running validation:
  python -m mapshot.core.config
  (Prints validation status and exits with 0 or 1)
"""
import os
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from loguru import logger

from mapshot.core.constants import BROWSER_LAUNCH_ARGS, DEVICE_SCALE_FACTOR, READY_STRATEGIES

# Load environment variables
load_dotenv()

BUNDLED_MAP_HTML = Path(__file__).parent / "static" / "map.html"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}, using {default}")
        return default


# Configuration
CONFIG: Dict[str, Dict[str, Any]] = {
    "browser": {
        "headless": _env_bool("MAPSHOT_HEADLESS", True),
        "launch_args": list(BROWSER_LAUNCH_ARGS),
        "launch_timeout_ms": _env_int("MAPSHOT_LAUNCH_TIMEOUT_MS", 30000),
    },
    "page": {
        "map_html": os.getenv("MAPSHOT_MAP_HTML", str(BUNDLED_MAP_HTML)),
        "load_timeout_ms": _env_int("MAPSHOT_PAGE_LOAD_TIMEOUT_MS", 30000),
    },
    "capture": {
        "network_idle_ms": _env_int("MAPSHOT_NETWORK_IDLE_MS", 250),  # quiet period treated as "tiles loaded"
        "idle_timeout_ms": _env_int("MAPSHOT_IDLE_TIMEOUT_MS", 30000),
        "ready_strategy": os.getenv("MAPSHOT_READY_STRATEGY", "network-idle"),
        "ready_timeout_ms": _env_int("MAPSHOT_READY_TIMEOUT_MS", 15000),
        "device_scale_factor": DEVICE_SCALE_FACTOR,
    },
    "logging": {
        "level": os.getenv("MAPSHOT_LOG_LEVEL", "INFO"),
        "log_dir": os.getenv("MAPSHOT_LOG_DIR", "logs"),
    },
}


def get_capture_settings(**overrides: Any) -> Dict[str, Any]:
    """
    Flatten the browser, page and capture sections into one settings dict.

    Args:
        **overrides: Keys to replace in the flattened settings

    Returns:
        Dict[str, Any]: Settings consumed by MapSession
    """
    settings: Dict[str, Any] = {}
    for section in ("browser", "page", "capture"):
        settings.update(CONFIG[section])
    unknown = set(overrides) - set(settings)
    if unknown:
        raise KeyError(f"Unknown capture settings: {', '.join(sorted(unknown))}")
    settings.update(overrides)
    return settings


# Validate environment
def validate_config() -> bool:
    """
    Validate the configured values.
    Returns True if valid, False otherwise. Logs errors.
    """
    validation_passed = True

    if CONFIG["capture"]["ready_strategy"] not in READY_STRATEGIES:
        logger.error(
            f"MAPSHOT_READY_STRATEGY must be one of {', '.join(READY_STRATEGIES)}, "
            f"got {CONFIG['capture']['ready_strategy']!r}"
        )
        validation_passed = False

    if not Path(CONFIG["page"]["map_html"]).is_file():
        logger.error(f"Map page not found: {CONFIG['page']['map_html']}")
        validation_passed = False

    for section, key in (
        ("browser", "launch_timeout_ms"),
        ("page", "load_timeout_ms"),
        ("capture", "idle_timeout_ms"),
        ("capture", "ready_timeout_ms"),
    ):
        if CONFIG[section][key] <= 0:
            logger.error(f"{section}.{key} must be positive, got {CONFIG[section][key]}")
            validation_passed = False

    if CONFIG["capture"]["network_idle_ms"] < 0:
        logger.error(f"capture.network_idle_ms must not be negative, got {CONFIG['capture']['network_idle_ms']}")
        validation_passed = False

    if validation_passed:
        logger.info("Configuration validated successfully.")

    return validation_passed


if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level="INFO")

    logger.info("Running configuration validation...")
    is_valid = validate_config()

    if is_valid:
        print("✅ VALIDATION COMPLETE - Configuration is usable.")
        sys.exit(0)
    else:
        print("❌ VALIDATION FAILED - See logs for details.")
        sys.exit(1)
