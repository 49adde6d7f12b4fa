"""
Tests for pipeline result and progress event models.
"""

import pytest

from adcraft.pipeline.models import (
    COMPLETE,
    ERROR,
    PROGRESS,
    AssetError,
    AssetMetadata,
    GeneratedAsset,
    PipelineResult,
    PipelineSummary,
    ProgressEvent,
)


def make_asset(prompt="A bottle on a beach"):
    return GeneratedAsset(
        product_id="p1",
        product_name="Water",
        aspect_ratio="9:16",
        path="c1/p1/9x16_1700000000000.png",
        metadata=AssetMetadata(
            generated_at="2025-06-01T12:00:00+00:00",
            aspect_ratio="9:16",
            width=1080,
            height=1920,
            prompt=prompt,
        ),
    )


class TestPipelineResult:
    """
    Tests for the PipelineResult model.
    """

    def test_to_dict_uses_camel_case(self):
        """
        Test the serialized report shape.
        """
        result = PipelineResult(
            campaign_id="c1",
            assets=[make_asset()],
            errors=[AssetError("p2", "1:1", "Failed to process product Coffee: boom")],
            summary=PipelineSummary(total_assets=2, success_count=1, error_count=1, duration=1234),
        )

        data = result.to_dict()

        assert data["campaignId"] == "c1"
        assert data["assets"][0]["productId"] == "p1"
        assert data["assets"][0]["metadata"]["dimensions"] == {"width": 1080, "height": 1920}
        assert data["assets"][0]["metadata"]["prompt"] == "A bottle on a beach"
        assert data["errors"] == [
            {"productId": "p2", "aspectRatio": "1:1", "error": "Failed to process product Coffee: boom"}
        ]
        assert data["summary"] == {"totalAssets": 2, "successCount": 1, "errorCount": 1, "duration": 1234}

    def test_from_dict_restores_result(self):
        """
        Test loading a report back into a result.
        """
        original = PipelineResult(
            campaign_id="c1",
            assets=[make_asset(prompt=None)],
            errors=[AssetError("p2", "16:9", "boom")],
            summary=PipelineSummary(2, 1, 1, 50),
        )

        restored = PipelineResult.from_dict(original.to_dict())

        assert restored == original
        assert restored.has_errors
        assert "prompt" not in original.to_dict()["assets"][0]["metadata"]

    def test_has_errors(self):
        """
        Test has_errors on a clean result.
        """
        assert not PipelineResult(campaign_id="c1").has_errors


class TestProgressEvent:
    """
    Tests for the ProgressEvent model.
    """

    def test_unset_fields_are_omitted(self):
        """
        Test that optional fields only appear when set.
        """
        event = ProgressEvent(type=COMPLETE, campaign_id="c1", message="done")

        assert event.to_dict() == {"type": "complete", "campaignId": "c1", "message": "done"}

    def test_success_event(self):
        """
        Test serializing a completed variant event.
        """
        event = ProgressEvent(
            type=PROGRESS,
            campaign_id="c1",
            message="Created 9:16 variant for Water",
            product_id="p1",
            aspect_ratio="9:16",
            asset=make_asset(),
            completed=True,
        )

        data = event.to_dict()

        assert data["completed"] is True
        assert data["asset"]["path"].endswith(".png")
        assert event.is_terminal
        assert ProgressEvent.from_dict(data) == event

    @pytest.mark.parametrize("event_type,aspect_ratio,completed,expected", [
        (PROGRESS, "1:1", None, False),
        (PROGRESS, "1:1", True, True),
        (ERROR, "1:1", None, True),
        (ERROR, None, None, False),
        (COMPLETE, None, None, False),
    ])
    def test_is_terminal(self, event_type, aspect_ratio, completed, expected):
        """
        Test which events end a (product, aspect ratio) variant.
        """
        event = ProgressEvent(
            type=event_type,
            campaign_id="c1",
            message="m",
            product_id="p1",
            aspect_ratio=aspect_ratio,
            completed=completed,
        )

        assert event.is_terminal is expected

    def test_unknown_type_is_rejected(self):
        """
        Test that an unknown event type raises ValueError.
        """
        with pytest.raises(ValueError):
            ProgressEvent(type="paused", campaign_id="c1", message="m")
