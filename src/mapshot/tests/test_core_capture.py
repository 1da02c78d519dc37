#!/usr/bin/env python3
"""
Unit tests for core/capture.py

The browser is replaced by mocks; no Chromium is needed.
"""

import os
import sys
import unittest
from unittest.mock import patch, MagicMock, call

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from playwright.sync_api import Error as PlaywrightError

from mapshot.core.capture import (
    DISPATCH_CONFIGURE_JS,
    READY_CHECK_JS,
    MapSession,
    NetworkIdleWatcher,
    take_map_screenshot,
    take_map_screenshots
)
from mapshot.core.config import BUNDLED_MAP_HTML
from mapshot.core.constants import CONFIGURE_EVENT, READY_FLAG
from mapshot.core.errors import (
    CaptureError,
    PageLoadError,
    SessionAcquisitionError,
    ValidationError
)

FAST = {"network_idle_ms": 0}


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestTakeMapScreenshots(unittest.TestCase):
    """Test cases for the capture loop"""

    def setUp(self):
        patcher = patch('mapshot.core.capture.sync_playwright')
        self.mock_sync_playwright = patcher.start()
        self.addCleanup(patcher.stop)

        self.playwright = self.mock_sync_playwright.return_value.start.return_value
        self.browser = self.playwright.chromium.launch.return_value
        self.page = self.browser.new_page.return_value

    def test_single_screenshot(self):
        """Test one request produces the page's PNG bytes"""
        self.page.screenshot.return_value = b"\x89PNG-one"

        png = take_map_screenshot({"center": (51.5074, -0.1278), "zoom": 10}, **FAST)

        self.assertEqual(png, b"\x89PNG-one")
        self.page.set_viewport_size.assert_called_once_with({"width": 800, "height": 800})
        self.page.evaluate.assert_called_once_with(DISPATCH_CONFIGURE_JS, {
            "center": [51.5074, -0.1278],
            "zoom": 10,
            "width": 800,
            "height": 800,
            "isRounded": False,
            "markers": [],
        })
        self.page.screenshot.assert_called_once_with(type="png", omit_background=True)
        self.browser.close.assert_called_once()
        self.playwright.stop.assert_called_once()

    def test_browser_launch_settings(self):
        """Test the browser is launched once with the sandbox flags"""
        self.page.screenshot.return_value = b"png"

        take_map_screenshot({"center": (0, 0)}, **FAST)

        self.playwright.chromium.launch.assert_called_once()
        kwargs = self.playwright.chromium.launch.call_args.kwargs
        self.assertIn("--no-sandbox", kwargs["args"])
        self.assertIn("--disable-setuid-sandbox", kwargs["args"])
        self.browser.new_page.assert_called_once_with(device_scale_factor=1)

        url = self.page.goto.call_args.args[0]
        self.assertTrue(url.startswith("file://"))
        self.assertTrue(url.endswith("map.html"))

    def test_batch_preserves_order(self):
        """Test one session serves every request in input order"""
        self.page.screenshot.side_effect = [b"first", b"second", b"third"]

        results = take_map_screenshots([
            {"center": (1, 1), "width": 100, "height": 100},
            {"center": (2, 2), "width": 200, "height": 150},
            {"center": (3, 3)},
        ], **FAST)

        self.assertEqual(results, [b"first", b"second", b"third"])
        self.assertEqual(self.page.set_viewport_size.call_args_list, [
            call({"width": 100, "height": 100}),
            call({"width": 200, "height": 150}),
            call({"width": 800, "height": 800}),
        ])
        centers = [c.args[1]["center"] for c in self.page.evaluate.call_args_list]
        self.assertEqual(centers, [[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        self.playwright.chromium.launch.assert_called_once()
        self.page.goto.assert_called_once()

    def test_failure_aborts_batch(self):
        """Test a failing request aborts the batch and still closes the browser"""
        self.page.screenshot.side_effect = [b"first", PlaywrightError("target closed"), b"third"]

        with self.assertRaises(CaptureError) as ctx:
            take_map_screenshots([{"center": (1, 1)}, {"center": (2, 2)}, {"center": (3, 3)}], **FAST)

        self.assertEqual(ctx.exception.index, 2)
        self.assertEqual(ctx.exception.total, 3)
        self.assertIn("Failed to capture map 2 of 3", str(ctx.exception))
        self.assertIn("target closed", str(ctx.exception))
        self.assertEqual(self.page.screenshot.call_count, 2)
        self.browser.close.assert_called_once()

    def test_empty_batch(self):
        """Test an empty batch is rejected before launching a browser"""
        with self.assertRaises(ValidationError):
            take_map_screenshots([], **FAST)
        self.mock_sync_playwright.assert_not_called()

    def test_invalid_request_rejected_before_launch(self):
        """Test validation happens before any browser work"""
        with self.assertRaises(ValidationError):
            take_map_screenshots([{"center": (1, 1)}, {"zoom": 3}], **FAST)
        self.mock_sync_playwright.assert_not_called()

    def test_launch_failure(self):
        """Test a browser that cannot start"""
        self.playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with self.assertRaises(SessionAcquisitionError) as ctx:
            take_map_screenshot({"center": (0, 0)}, **FAST)

        self.assertIn("Executable doesn't exist", str(ctx.exception))
        self.playwright.stop.assert_called_once()

    def test_missing_map_page(self):
        """Test a map page that does not exist"""
        with self.assertRaises(PageLoadError):
            take_map_screenshot({"center": (0, 0)}, map_html="/nonexistent/map.html", **FAST)
        self.browser.close.assert_called_once()

    def test_page_load_failure(self):
        """Test a map page that fails to load"""
        self.page.goto.side_effect = PlaywrightError("net::ERR_FAILED")

        with self.assertRaises(PageLoadError):
            take_map_screenshot({"center": (0, 0)}, **FAST)
        self.browser.close.assert_called_once()

    def test_map_ready_strategy(self):
        """Test the map-ready strategy waits for the page's ready flag"""
        self.page.screenshot.return_value = b"png"

        take_map_screenshot({"center": (0, 0)}, ready_strategy="map-ready", **FAST)

        self.page.wait_for_function.assert_called_once()
        self.assertEqual(self.page.wait_for_function.call_args.args[0], READY_CHECK_JS)

    def test_network_idle_strategy_skips_ready_flag(self):
        """Test the default strategy does not wait for the ready flag"""
        self.page.screenshot.return_value = b"png"

        take_map_screenshot({"center": (0, 0)}, **FAST)

        self.page.wait_for_function.assert_not_called()

    def test_unknown_strategy(self):
        """Test an unknown readiness strategy"""
        with self.assertRaises(ValidationError):
            MapSession(ready_strategy="eventually")

    def test_unknown_setting(self):
        """Test an override that is not a capture setting"""
        with self.assertRaises(KeyError):
            MapSession(colour="blue")

    def test_close_is_idempotent(self):
        """Test closing a session twice"""
        session = MapSession(**FAST)
        session.open()
        session.close()
        session.close()
        self.browser.close.assert_called_once()
        self.assertIsNone(session.page)

    def test_capture_on_closed_session(self):
        """Test capturing without an open session"""
        from mapshot.core.normalizer import with_defaults

        with self.assertRaises(CaptureError):
            MapSession(**FAST).capture(with_defaults({"center": (0, 0)}))


class TestNetworkIdleWatcher(unittest.TestCase):
    """Test cases for the network idle wait"""

    def setUp(self):
        self.page = MagicMock()
        self.clock = FakeClock()
        # Each poll advances the clock by the poll interval
        self.page.wait_for_timeout.side_effect = lambda ms: setattr(self.clock, "now", self.clock.now + ms / 1000)

    def test_listeners_attached_and_removed(self):
        """Test the watcher subscribes to request events only while active"""
        with NetworkIdleWatcher(self.page, idle_ms=0, timeout_ms=1000, clock=self.clock):
            events = [c.args[0] for c in self.page.on.call_args_list]
            self.assertEqual(events, ["request", "requestfinished", "requestfailed"])
        removed = [c.args[0] for c in self.page.remove_listener.call_args_list]
        self.assertEqual(removed, ["request", "requestfinished", "requestfailed"])

    def test_waits_for_quiet_period(self):
        """Test the wait lasts at least the idle period"""
        with NetworkIdleWatcher(self.page, idle_ms=250, timeout_ms=5000, clock=self.clock) as watcher:
            watcher.wait()
        self.assertGreaterEqual(self.clock.now, 0.24)
        self.assertLess(self.clock.now, 0.5)

    def test_waits_for_inflight_requests(self):
        """Test pending requests keep the wait going until they finish"""
        with NetworkIdleWatcher(self.page, idle_ms=100, timeout_ms=5000, clock=self.clock) as watcher:
            on_request = self.page.on.call_args_list[0].args[1]
            on_finished = self.page.on.call_args_list[1].args[1]
            tile = object()
            on_request(tile)
            self.assertEqual(watcher.pending, 1)

            polls = {"count": 0}

            def advance(ms):
                self.clock.now += ms / 1000
                polls["count"] += 1
                if polls["count"] == 10:
                    on_finished(tile)

            self.page.wait_for_timeout.side_effect = advance
            watcher.wait()

        self.assertEqual(watcher.pending, 0)
        # Finished at 0.5s, then a further 100ms of quiet
        self.assertGreaterEqual(self.clock.now, 0.59)

    def test_timeout(self):
        """Test a request that never finishes"""
        with NetworkIdleWatcher(self.page, idle_ms=100, timeout_ms=1000, clock=self.clock) as watcher:
            on_request = self.page.on.call_args_list[0].args[1]
            on_request(object())
            with self.assertRaises(CaptureError) as ctx:
                watcher.wait()
        self.assertIn("1 request(s) still pending", str(ctx.exception))


class TestBundledMapPage(unittest.TestCase):
    """Test cases for the bundled map page contract"""

    def setUp(self):
        self.html = BUNDLED_MAP_HTML.read_text(encoding="utf-8")

    def test_listens_for_configure_event(self):
        """Test the page handles the configure event and sets the ready flag"""
        self.assertIn(f"addEventListener('{CONFIGURE_EVENT}'", self.html)
        self.assertIn(f"window.{READY_FLAG} = true", self.html)

    def test_popups_do_not_pan_the_map(self):
        """Test opening a marker popup keeps the requested center"""
        self.assertIn("autoPan: false", self.html)


if __name__ == "__main__":
    unittest.main()
