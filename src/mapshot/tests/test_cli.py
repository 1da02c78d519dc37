#!/usr/bin/env python3
"""
Unit tests for cli/cli.py
"""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from typer.testing import CliRunner

from mapshot.cli.cli import app
from mapshot.core.errors import SessionAcquisitionError

runner = CliRunner()


class TestSnapCommand(unittest.TestCase):
    """Test cases for the snap command"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.output = os.path.join(self.tmp.name, "maps", "out.png")

        patcher = patch('mapshot.cli.cli.take_map_screenshot', return_value=b"\x89PNG-test")
        self.mock_capture = patcher.start()
        self.addCleanup(patcher.stop)

    def test_snap_success(self):
        """Test a screenshot is written to the output path"""
        result = runner.invoke(app, ["snap", "-c", "37.7749,-122.4194", "-z", "12", "-o", self.output])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(Path(self.output).read_bytes(), b"\x89PNG-test")
        self.assertIn("Map Screenshot Saved", result.output)

        options = self.mock_capture.call_args.args[0]
        self.assertEqual(options.center, (37.7749, -122.4194))
        self.assertEqual(options.zoom, 12)
        self.assertEqual(options.width, 800)
        self.assertEqual(options.height, 800)
        self.assertFalse(options.is_rounded)

    def test_snap_all_options(self):
        """Test every option reaches the capture request"""
        markers = '[{"position": [51.5074, -0.1278], "popupText": "London"}]'
        result = runner.invoke(app, [
            "snap", "--center", "[51.5074, -0.1278]", "--width", "640", "-h", "480",
            "--rounded", "-m", markers, "--output", self.output
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        options = self.mock_capture.call_args.args[0]
        self.assertEqual((options.width, options.height), (640, 480))
        self.assertTrue(options.is_rounded)
        self.assertEqual(options.markers[0].popup_text, "London")

    def test_snap_json_output(self):
        """Test --json prints a success envelope"""
        result = runner.invoke(app, ["--json", "snap", "-c", "0,0", "-o", self.output])

        self.assertEqual(result.exit_code, 0, result.output)
        response = json.loads(result.stdout)
        self.assertTrue(response["success"])
        self.assertEqual(response["data"]["file"], os.path.abspath(self.output))
        self.assertEqual(response["data"]["details"]["Zoom Level"], "14")

    def test_invalid_center(self):
        """Test an out of range center exits with code 1"""
        result = runner.invoke(app, ["snap", "-c", "999,999", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Latitude must be between -90 and 90", result.output)
        self.mock_capture.assert_not_called()
        self.assertFalse(os.path.exists(self.output))

    def test_missing_center(self):
        """Test the center option is required"""
        result = runner.invoke(app, ["snap", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("--center", result.output)
        self.mock_capture.assert_not_called()

    def test_invalid_center_json(self):
        """Test --json reports option errors as an error envelope"""
        result = runner.invoke(app, ["--json", "snap", "-c", "999,999", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        response = json.loads(result.stdout)
        self.assertFalse(response["success"])
        self.assertEqual(response["error"], "Invalid --center: Latitude must be between -90 and 90")
        self.mock_capture.assert_not_called()

    def test_missing_center_json(self):
        """Test --json reports a missing center as an error envelope"""
        result = runner.invoke(app, ["--json", "snap", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        response = json.loads(result.stdout)
        self.assertFalse(response["success"])
        self.assertIn("--center", response["error"])

    def test_invalid_markers_json(self):
        """Test --json reports marker errors as an error envelope"""
        result = runner.invoke(app, ["--json", "snap", "-c", "0,0", "-m", "not json"])

        self.assertEqual(result.exit_code, 1)
        response = json.loads(result.stdout)
        self.assertTrue(response["error"].startswith("Invalid --markers: Invalid JSON format for markers"))

    def test_invalid_zoom(self):
        """Test an out of range zoom exits with code 1"""
        result = runner.invoke(app, ["snap", "-c", "0,0", "-z", "25"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Zoom level must be at most 18", result.output)
        self.mock_capture.assert_not_called()

    def test_invalid_markers(self):
        """Test malformed markers exit with code 1"""
        result = runner.invoke(app, ["snap", "-c", "0,0", "-m", '{"position": [0, 0]}'])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Markers must be an array", result.output)
        self.mock_capture.assert_not_called()

    def test_file_option_warns(self):
        """Test --file is accepted but ignored"""
        result = runner.invoke(app, ["snap", "-c", "0,0", "--file", "photo.jpg", "-o", self.output])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("File processing not yet implemented", result.output)
        self.assertTrue(os.path.exists(self.output))

    def test_capture_failure(self):
        """Test a capture error exits with code 1"""
        self.mock_capture.side_effect = SessionAcquisitionError("Failed to start browser session: no chromium")

        result = runner.invoke(app, ["snap", "-c", "0,0", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("no chromium", result.output)
        self.assertFalse(os.path.exists(self.output))

    def test_capture_failure_json(self):
        """Test a capture error in --json mode prints an error envelope"""
        self.mock_capture.side_effect = SessionAcquisitionError("no chromium")

        result = runner.invoke(app, ["--json", "snap", "-c", "0,0", "-o", self.output])

        self.assertEqual(result.exit_code, 1)
        response = json.loads(result.stdout)
        self.assertFalse(response["success"])
        self.assertEqual(response["error"], "no chromium")


class TestToolsCommands(unittest.TestCase):
    """Test cases for the tools command group"""

    def test_version_json(self):
        """Test version output"""
        result = runner.invoke(app, ["--json", "tools", "version"])

        self.assertEqual(result.exit_code, 0, result.output)
        response = json.loads(result.stdout)
        self.assertEqual(response["data"]["version"], "1.0.0")

    def test_schema_json(self):
        """Test the CLI schema lists the commands and snap options"""
        result = runner.invoke(app, ["tools", "schema", "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        schema = json.loads(result.stdout)["data"]["schema"]
        self.assertIn("snap", schema["commands"])
        self.assertIn("mcp", schema["commands"])
        parameters = schema["commands"]["snap"]["parameters"]
        self.assertIn("-c", parameters["center"]["flags"])
        self.assertEqual(parameters["zoom"]["default"], "14")

    def test_schema_human(self):
        """Test the human-readable schema lists the commands"""
        result = runner.invoke(app, ["tools", "schema"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("snap", result.output)
        self.assertIn("--center", result.output)
        self.assertIn("version", result.output)

    def test_schema_mcp(self):
        """Test the tool schema uses camelCase names"""
        result = runner.invoke(app, ["tools", "schema", "--format", "mcp"])

        self.assertEqual(result.exit_code, 0, result.output)
        schema = json.loads(result.stdout)["data"]["schema"]
        self.assertIn("outputPath", schema["properties"])
        self.assertIn("options", schema["properties"])

    def test_schema_unknown_format(self):
        """Test an unknown schema format"""
        result = runner.invoke(app, ["tools", "schema", "--format", "yaml"])

        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
