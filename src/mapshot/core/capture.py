#!/usr/bin/env python3
"""
Map Screenshot Capture Module

This module drives a headless Chromium through Playwright to render the bundled
map page and capture PNG screenshots of it.

One browser session is opened per batch. The map page is loaded once, then each
request in turn resizes the viewport, delivers its options through a single
"map-configure" event, waits for the tile traffic to settle and captures the
viewport with a transparent background. Requests are processed strictly in
order against the one page; the session is closed whatever happens.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Third-party package documentation:
- Playwright: https://playwright.dev/python/docs/api/class-page

Sample input:
- take_map_screenshot({"center": (51.5074, -0.1278), "zoom": 10, "width": 400, "height": 400})
- take_map_screenshots([{"center": (37.7749, -122.4194)}, {"center": (40.7128, -74.0060)}])

Expected output:
- PNG bytes for a single request
- A list of PNG bytes, one per request, in input order
"""

import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from mapshot.core.config import get_capture_settings
from mapshot.core.constants import CONFIGURE_EVENT, IDLE_POLL_MS, READY_FLAG, READY_STRATEGIES
from mapshot.core.errors import (
    CaptureError,
    MapshotError,
    PageLoadError,
    SessionAcquisitionError,
    ValidationError,
)
from mapshot.core.models import ScreenshotRequest
from mapshot.core.normalizer import OptionsLike, with_defaults

DISPATCH_CONFIGURE_JS = (
    "(options) => window.dispatchEvent("
    f"new CustomEvent('{CONFIGURE_EVENT}', {{ detail: {{ options }} }}))"
)
READY_CHECK_JS = f"() => window.{READY_FLAG} === true"


class NetworkIdleWatcher:
    """
    Waits until a page has had no requests in flight for a quiet period.

    Listeners are attached on enter so requests started by anything done inside
    the block are counted.
    """

    def __init__(
        self,
        page: Any,
        idle_ms: int,
        timeout_ms: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._page = page
        self._idle_ms = idle_ms
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._inflight: set = set()
        self._last_activity = clock()
        self._handlers = {
            "request": self._on_request,
            "requestfinished": self._on_done,
            "requestfailed": self._on_done,
        }

    def __enter__(self) -> "NetworkIdleWatcher":
        for event, handler in self._handlers.items():
            self._page.on(event, handler)
        self._last_activity = self._clock()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        for event, handler in self._handlers.items():
            self._page.remove_listener(event, handler)
        return False

    @property
    def pending(self) -> int:
        return len(self._inflight)

    def _on_request(self, request: Any) -> None:
        self._inflight.add(request)
        self._last_activity = self._clock()

    def _on_done(self, request: Any) -> None:
        self._inflight.discard(request)
        self._last_activity = self._clock()

    def wait(self) -> None:
        """
        Block until the network is idle.

        Raises:
            CaptureError: If the page is still busy after timeout_ms
        """
        deadline = self._clock() + self._timeout_ms / 1000
        while True:
            now = self._clock()
            if not self._inflight and (now - self._last_activity) * 1000 >= self._idle_ms:
                return
            if now >= deadline:
                raise CaptureError(
                    f"Network did not become idle within {self._timeout_ms}ms "
                    f"({self.pending} request(s) still pending)"
                )
            # Playwright dispatches page events while this wait runs
            self._page.wait_for_timeout(IDLE_POLL_MS)


class MapSession:
    """
    A browser with the map page loaded, usable for any number of captures.

    Use as a context manager; the browser is closed on exit even when a
    capture failed.
    """

    def __init__(self, **overrides: Any):
        self.settings: Dict[str, Any] = get_capture_settings(**overrides)
        if self.settings["ready_strategy"] not in READY_STRATEGIES:
            raise ValidationError(
                f"Unknown ready strategy {self.settings['ready_strategy']!r}, "
                f"expected one of {', '.join(READY_STRATEGIES)}"
            )
        self._playwright = None
        self._browser = None
        self.page = None

    def __enter__(self) -> "MapSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def open(self) -> None:
        """
        Launch the browser and load the map page.

        Raises:
            SessionAcquisitionError: If the browser cannot be started
            PageLoadError: If the map page does not load and settle
        """
        logger.info(f"Launching headless browser (headless={self.settings['headless']})")
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.settings["headless"],
                args=self.settings["launch_args"],
                timeout=self.settings["launch_timeout_ms"],
            )
            self.page = self._browser.new_page(device_scale_factor=self.settings["device_scale_factor"])
        except PlaywrightError as e:
            logger.error(f"Browser launch failed: {str(e)}")
            self.close()
            raise SessionAcquisitionError(f"Failed to start browser session: {str(e)}") from e

        try:
            self._load_map_page()
        except MapshotError:
            self.close()
            raise

    def _load_map_page(self) -> None:
        map_html = Path(self.settings["map_html"])
        if not map_html.is_file():
            raise PageLoadError(f"Map page not found: {map_html}")

        url = map_html.resolve().as_uri()
        logger.info(f"Loading map page {url}")
        try:
            self.page.goto(url, wait_until="networkidle", timeout=self.settings["load_timeout_ms"])
        except PlaywrightError as e:
            logger.error(f"Map page failed to load: {str(e)}")
            raise PageLoadError(f"Map page did not finish loading: {str(e)}") from e

    def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call more than once."""
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        self.page = None

        if browser is not None:
            try:
                browser.close()
            except PlaywrightError as e:
                logger.warning(f"Error while closing browser: {str(e)}")
        if playwright is not None:
            try:
                playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error while stopping Playwright: {str(e)}")
        if browser is not None:
            logger.info("Browser session closed")

    def capture(self, request: ScreenshotRequest) -> bytes:
        """
        Render one request on the loaded page and capture it.

        Args:
            request: Fully specified request

        Returns:
            bytes: PNG-encoded screenshot

        Raises:
            CaptureError: If the network never goes idle
            playwright Error: If any browser step fails
        """
        if self.page is None:
            raise CaptureError("Map session is not open")

        page = self.page
        page.set_viewport_size({"width": request.width, "height": request.height})

        with NetworkIdleWatcher(
            page,
            idle_ms=self.settings["network_idle_ms"],
            timeout_ms=self.settings["idle_timeout_ms"],
        ) as watcher:
            page.evaluate(DISPATCH_CONFIGURE_JS, request.to_event_payload())
            if self.settings["ready_strategy"] == "map-ready":
                page.wait_for_function(READY_CHECK_JS, timeout=self.settings["ready_timeout_ms"])
            watcher.wait()

        return page.screenshot(type="png", omit_background=True)


def take_map_screenshots(options_list: Sequence[OptionsLike], **overrides: Any) -> List[bytes]:
    """
    Capture one screenshot per request using a single browser session.

    Args:
        options_list: Requests, partial or complete, in the order to capture
        **overrides: Capture settings to replace for this batch

    Returns:
        List[bytes]: PNG bytes, same length and order as options_list

    Raises:
        ValidationError: If the batch is empty or a request has no valid center
        SessionAcquisitionError: If the browser cannot be started
        PageLoadError: If the map page does not load
        CaptureError: If any request fails; no results are returned
    """
    requests = [with_defaults(options) for options in options_list]
    if not requests:
        raise ValidationError("At least one screenshot request is required")

    total = len(requests)
    results: List[bytes] = []
    with MapSession(**overrides) as session:
        for index, request in enumerate(requests, start=1):
            logger.info(
                f"Capturing map {index}/{total}: center={list(request.center)}, zoom={request.zoom}, "
                f"size={request.width}x{request.height}, markers={len(request.markers)}"
            )
            try:
                results.append(session.capture(request))
            except (CaptureError, PlaywrightError) as e:
                logger.error(f"Capture {index}/{total} failed: {str(e)}")
                raise CaptureError(
                    f"Failed to capture map {index} of {total}: {str(e)}", index=index, total=total
                ) from e

    logger.info(f"Captured {total} map screenshot(s)")
    return results


def take_map_screenshot(options: OptionsLike, **overrides: Any) -> bytes:
    """
    Capture a single map screenshot.

    Args:
        options: Partial or complete request
        **overrides: Capture settings to replace for this call

    Returns:
        bytes: PNG-encoded screenshot
    """
    return take_map_screenshots([options], **overrides)[0]


if __name__ == "__main__":
    """Validate capture against a real browser"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: single screenshot is a PNG
    total_tests += 1
    try:
        png = take_map_screenshot({"center": (51.5074, -0.1278), "zoom": 10, "width": 400, "height": 400})
        if not png.startswith(b"\x89PNG"):
            all_validation_failures.append("Screenshot is not a PNG")
    except MapshotError as e:
        all_validation_failures.append(f"Single capture failed: {str(e)}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
