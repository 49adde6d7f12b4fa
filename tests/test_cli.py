"""
Tests for the CLI module.
"""

import io
import os
import json
import tempfile
import pytest
from unittest.mock import patch, MagicMock
from click.testing import CliRunner
from PIL import Image

from adcraft import __version__
from adcraft.cli import main
from adcraft.pipeline.models import AssetError, PipelineResult, PipelineSummary


class TestCLI:
    """
    Tests for the CLI module.
    """

    @pytest.fixture
    def runner(self):
        """
        Click CLI test runner.
        """
        return CliRunner()

    @pytest.fixture
    def temp_dir(self):
        """
        Temporary working directory.
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            yield temp_dir

    @pytest.fixture
    def sample_campaign_brief(self, temp_dir):
        """
        Create a sample campaign brief file for testing.
        """
        campaign_brief = {
            "campaignId": "test-campaign",
            "products": [
                {"id": "p1", "name": "Sparkling Water", "description": "Lemon and lime"},
                {"id": "p2", "name": "Cold Brew", "description": "Vanilla cold brew"}
            ],
            "targetRegion": "North America",
            "targetAudience": "Young professionals",
            "message": "Stay refreshed",
            "brandAssets": {"primaryColor": "#0B3D91"}
        }

        path = os.path.join(temp_dir, "campaign_brief.json")
        with open(path, "w") as f:
            json.dump(campaign_brief, f)

        return path

    @pytest.fixture
    def sample_image(self, temp_dir):
        """
        Create a sample image file for testing.
        """
        path = os.path.join(temp_dir, "photo.png")
        Image.new("RGB", (400, 300), "skyblue").save(path)
        return path

    def test_version(self, runner):
        """
        Test the --version option.
        """
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_validate_valid_brief(self, runner, sample_campaign_brief):
        """
        Test validating a valid campaign brief.
        """
        result = runner.invoke(main, ["validate", sample_campaign_brief])

        assert result.exit_code == 0
        assert "Campaign brief is valid: test-campaign" in result.output
        assert "Products: 2" in result.output
        assert "Target: Young professionals in North America" in result.output

    def test_validate_invalid_brief(self, runner, temp_dir):
        """
        Test validating a brief with a single product.
        """
        path = os.path.join(temp_dir, "bad_brief.json")
        with open(path, "w") as f:
            json.dump({
                "campaignId": "bad",
                "products": [{"id": "p1", "name": "Only"}],
                "targetRegion": "EU",
                "targetAudience": "All",
                "message": "Hi"
            }, f)

        result = runner.invoke(main, ["validate", path])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_validate_missing_file(self, runner):
        """
        Test validating a brief that does not exist.
        """
        result = runner.invoke(main, ["validate", "does_not_exist.json"])

        assert result.exit_code != 0

    def test_generate_with_local_provider(self, runner, sample_campaign_brief, temp_dir):
        """
        Test a full offline run writing assets and a report.
        """
        output_dir = os.path.join(temp_dir, "out")

        result = runner.invoke(main, [
            "generate", sample_campaign_brief,
            "-o", output_dir,
            "--provider", "local",
            "--seed", "7"
        ])

        assert result.exit_code == 0, result.output
        assert "Campaign: test-campaign" in result.output
        assert "Total assets: 6" in result.output
        assert "Errors: 0" in result.output

        report_path = os.path.join(output_dir, "test-campaign", "summary.json")
        with open(report_path, "r") as f:
            report = json.load(f)

        assert report["summary"]["successCount"] == 6
        for asset in report["assets"]:
            assert os.path.isfile(os.path.join(output_dir, asset["path"]))

    def test_generate_exits_with_error_on_failed_variants(self, runner, sample_campaign_brief, temp_dir):
        """
        Test that a run with failed variants exits with status 1.
        """
        failed = PipelineResult(
            campaign_id="test-campaign",
            errors=[AssetError("p2", "1:1", "Failed to process product Cold Brew: boom")],
            summary=PipelineSummary(total_assets=6, success_count=5, error_count=1, duration=100),
        )

        with patch("adcraft.pipeline.pipeline_runner.CreativePipeline.execute", return_value=failed):
            result = runner.invoke(main, [
                "generate", sample_campaign_brief,
                "-o", temp_dir,
                "--provider", "local"
            ])

        assert result.exit_code == 1
        assert "Errors: 1" in result.output
        assert os.path.isfile(os.path.join(temp_dir, "test-campaign", "summary.json"))

    def test_generate_pipeline_exception(self, runner, sample_campaign_brief, temp_dir):
        """
        Test that an unexpected pipeline failure exits with status 1.
        """
        with patch("adcraft.pipeline.pipeline_runner.CreativePipeline.execute",
                   side_effect=RuntimeError("storage offline")):
            result = runner.invoke(main, [
                "generate", sample_campaign_brief,
                "-o", temp_dir,
                "--provider", "local"
            ])

        assert result.exit_code == 1
        assert "Error: storage offline" in result.output

    def test_overlay(self, runner, sample_image, temp_dir):
        """
        Test applying a text overlay to an image.
        """
        output_path = os.path.join(temp_dir, "nested", "out.png")

        result = runner.invoke(main, [
            "overlay", sample_image, output_path,
            "--text", "Summer Sale",
            "--position", "bottom",
            "--seed", "3"
        ])

        assert result.exit_code == 0, result.output
        assert "Text overlay applied to" in result.output
        with Image.open(output_path) as img:
            assert img.format == "PNG"
            assert img.size == (400, 300)

    def test_overlay_requires_text(self, runner, sample_image, temp_dir):
        """
        Test that the overlay command requires --text.
        """
        result = runner.invoke(main, ["overlay", sample_image, os.path.join(temp_dir, "out.png")])

        assert result.exit_code != 0
        assert "--text" in result.output
