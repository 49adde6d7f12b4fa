"""
Output manager module.

This module owns the naming of generated assets and the reading and writing
of campaign result reports.
"""

import json
import os
from typing import Optional

from adcraft.core.constants import DEFAULT_FILE_EXTENSION
from adcraft.core.logging_config import get_logger
from adcraft.core.utils import current_millis, load_json_file, sanitize_path_component, save_json_file
from adcraft.pipeline.models import PipelineResult

# Initialize logger
logger = get_logger(__name__)

REPORT_FILENAME = "summary.json"


def generate_asset_filename(
    campaign_id: str,
    product_id: str,
    aspect_ratio: str,
    extension: str = DEFAULT_FILE_EXTENSION,
    timestamp: Optional[int] = None
) -> str:
    """
    Build the storage path of one asset.

    The path is ``{campaign_id}/{product_id}/{size_label}_{timestamp}.{extension}``
    where ``size_label`` is the aspect ratio label with ``:`` replaced by
    ``x`` (``9:16`` gives ``9x16``) and ``timestamp`` is in milliseconds
    since the epoch.

    Args:
        campaign_id: ID of the campaign.
        product_id: ID of the product.
        aspect_ratio: Aspect ratio label, e.g. ``9:16``.
        extension: File extension without the dot.
        timestamp: Milliseconds since the epoch. Defaults to now.

    Returns:
        Relative storage path.
    """
    if timestamp is None:
        timestamp = current_millis()

    campaign_id = sanitize_path_component(campaign_id)
    product_id = sanitize_path_component(product_id)

    size_label = aspect_ratio.replace(":", "x")

    return f"{campaign_id}/{product_id}/{size_label}_{timestamp}.{extension}"


class OutputManager:
    """
    Class for managing campaign reports on disk.

    Args:
        base_output_dir: Base directory for outputs. If not provided,
                         ``output`` in the current working directory is used.
    """

    def __init__(self, base_output_dir: Optional[str] = None):
        self.base_output_dir = base_output_dir or os.path.join(os.getcwd(), "output")

    def report_path(self, campaign_id: str) -> str:
        return os.path.join(self.base_output_dir, sanitize_path_component(campaign_id), REPORT_FILENAME)

    def save_report(self, result: PipelineResult) -> str:
        """
        Save a pipeline result as ``{base}/{campaign_id}/summary.json``.

        Returns:
            Path to the written report.
        """
        path = self.report_path(result.campaign_id)
        save_json_file(result.to_dict(), path)

        logger.info(f"Saved campaign report to {path}")

        return path

    def load_report(self, path_or_campaign_id: str) -> PipelineResult:
        """
        Load a pipeline result from a report path or a campaign id.

        Raises:
            FileNotFoundError: If the report does not exist.
            ValueError: If the report is not valid JSON.
        """
        path = path_or_campaign_id
        if not path.endswith(".json"):
            path = self.report_path(path_or_campaign_id)

        if not os.path.isfile(path):
            raise FileNotFoundError(f"Report not found: {path}")

        try:
            data = load_json_file(path)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid report {path}: {e}") from e

        return PipelineResult.from_dict(data)
