"""
Tests for output manager.

This module tests asset naming and campaign report persistence.
"""

import os
import json
import tempfile
import pytest
from unittest.mock import patch

from adcraft.pipeline.models import AssetError, PipelineResult, PipelineSummary
from adcraft.pipeline.output_manager import OutputManager, REPORT_FILENAME, generate_asset_filename


class TestGenerateAssetFilename:
    """
    Tests for the generate_asset_filename function.
    """

    def test_path_convention(self):
        """
        Test the campaign/product/size_timestamp path.
        """
        path = generate_asset_filename("summer-2025", "p1", "9:16", timestamp=1700000000123)

        assert path == "summer-2025/p1/9x16_1700000000123.png"

    def test_default_timestamp(self):
        """
        Test that the timestamp defaults to the current time in milliseconds.
        """
        with patch("adcraft.pipeline.output_manager.current_millis", return_value=42):
            path = generate_asset_filename("c1", "p1", "1:1", extension="jpg")

        assert path == "c1/p1/1x1_42.jpg"

    def test_unsafe_ids_are_sanitized(self):
        """
        Test that ids cannot introduce extra path segments.
        """
        path = generate_asset_filename("a/b", "p:1", "16:9", timestamp=1)

        assert path == "a_b/p_1/16x9_1.png"


class TestOutputManager:
    """
    Tests for the OutputManager class.
    """

    def setup_method(self):
        """
        Set up test environment.
        """
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_manager = OutputManager(self.temp_dir.name)
        self.result = PipelineResult(
            campaign_id="c1",
            errors=[AssetError("p2", "1:1", "boom")],
            summary=PipelineSummary(total_assets=2, success_count=1, error_count=1, duration=10),
        )

    def teardown_method(self):
        """
        Clean up test environment.
        """
        self.temp_dir.cleanup()

    def test_save_report(self):
        """
        Test writing the report under the campaign directory.
        """
        path = self.output_manager.save_report(self.result)

        assert path == os.path.join(self.temp_dir.name, "c1", REPORT_FILENAME)
        with open(path, "r") as f:
            data = json.load(f)
        assert data["campaignId"] == "c1"
        assert data["summary"]["errorCount"] == 1

    def test_load_report(self):
        """
        Test loading a report by campaign id and by path.
        """
        path = self.output_manager.save_report(self.result)

        assert self.output_manager.load_report("c1") == self.result
        assert self.output_manager.load_report(path) == self.result

    def test_load_missing_report(self):
        """
        Test loading a report that does not exist.
        """
        with pytest.raises(FileNotFoundError):
            self.output_manager.load_report("unknown")

    def test_load_invalid_report(self):
        """
        Test loading a report that is not valid JSON.
        """
        path = os.path.join(self.temp_dir.name, "broken.json")
        with open(path, "w") as f:
            f.write("{not json")

        with pytest.raises(ValueError):
            self.output_manager.load_report(path)
