"""
Campaign brief loading and validation.

This module turns external input (a JSON or YAML file, or an already parsed
dictionary) into an immutable CampaignBrief. Raw input is validated against
the bundled JSON schema before any model object is built, and the brand logo
is resolved to bytes here so the pipeline never has to touch the filesystem
for it.
"""

import os
import json
from typing import Any, Dict, Optional

import yaml
import jsonschema

from adcraft.campaign.models import CampaignBrief
from adcraft.core.error_handler import ValidationError
from adcraft.core.logging_config import get_logger
from adcraft.core.utils import is_valid_image_file
from adcraft.schemas import CAMPAIGN_BRIEF, load_schema

# Initialize logger
logger = get_logger(__name__)

class InputValidator:
    """
    Validates campaign briefs and builds CampaignBrief objects.
    """

    def __init__(self):
        self.campaign_brief_schema = load_schema(CAMPAIGN_BRIEF)
        logger.debug("Loaded campaign brief schema")

    def load_campaign_brief(self, brief_path: str, load_logo: bool = True) -> CampaignBrief:
        """
        Load and validate a campaign brief file.

        Files ending in ``.yml``/``.yaml`` are parsed as YAML, anything else as JSON.
        When ``load_logo`` is set and the brief references a logo, the logo is
        read relative to the brief's directory and attached to the brief.

        Args:
            brief_path (str): Path to the campaign brief file
            load_logo (bool): Whether to resolve the brand logo into bytes

        Returns:
            CampaignBrief: The validated campaign brief

        Raises:
            FileNotFoundError: If the brief file does not exist
            ValidationError: If the brief cannot be parsed or is invalid
        """
        logger.info(f"Loading campaign brief from: {brief_path}")

        if not os.path.isfile(brief_path):
            error_msg = f"Campaign brief file not found: {brief_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        try:
            with open(brief_path, 'r', encoding='utf-8') as f:
                if brief_path.lower().endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            error_msg = f"Could not parse campaign brief: {e}"
            logger.error(error_msg)
            raise ValidationError(error_msg) from e

        brief = self.validate_campaign_brief(data)

        if load_logo:
            base_dir = os.path.dirname(os.path.abspath(brief_path))
            brief = brief.with_logo(self.load_logo(brief, base_dir))

        return brief

    def validate_campaign_brief(self, data: Any) -> CampaignBrief:
        """
        Validate a parsed campaign brief and build the model object.

        Args:
            data: Parsed brief document

        Returns:
            CampaignBrief: The validated campaign brief

        Raises:
            ValidationError: If the brief does not conform to the schema or
                repeats a product id
        """
        if not isinstance(data, dict):
            raise ValidationError("Campaign brief must be an object", value=data)

        try:
            jsonschema.validate(instance=data, schema=self.campaign_brief_schema)
        except jsonschema.exceptions.ValidationError as e:
            field = ".".join(str(p) for p in e.absolute_path) or None
            error_msg = f"Invalid campaign brief: {e.message}"
            logger.error(error_msg)
            raise ValidationError(error_msg, field=field, value=e.instance) from e

        seen = set()
        for product in data["products"]:
            if product["id"] in seen:
                raise ValidationError(
                    f"Duplicate product id: {product['id']}",
                    field="products",
                    value=product["id"]
                )
            seen.add(product["id"])

        brief = CampaignBrief.from_dict(data)
        logger.info(f"Campaign brief validated successfully: {brief.campaign_id}")
        return brief

    def load_logo(self, brief: CampaignBrief, base_dir: Optional[str] = None) -> Optional[bytes]:
        """
        Read the brand logo referenced by a brief.

        A missing or unreadable logo is logged and skipped; the campaign then
        renders without a logo.

        Args:
            brief: The campaign brief
            base_dir: Directory relative logo paths are resolved against

        Returns:
            Optional[bytes]: Logo bytes, or None if the brief has no usable logo
        """
        if not brief.brand_assets or not brief.brand_assets.logo:
            return None

        logo_path = brief.brand_assets.logo
        if base_dir and not os.path.isabs(logo_path):
            logo_path = os.path.join(base_dir, logo_path)

        if not is_valid_image_file(logo_path):
            logger.warning(f"Missing or invalid logo: {logo_path}")
            return None

        with open(logo_path, 'rb') as f:
            logo_bytes = f.read()

        logger.info(f"Loaded brand logo from {logo_path} ({len(logo_bytes)} bytes)")
        return logo_bytes

    def summarize(self, brief: CampaignBrief) -> Dict[str, Any]:
        """Short description of a brief, as reported by ``adcraft validate``."""
        return {
            "valid": True,
            "campaignId": brief.campaign_id,
            "productCount": len(brief.products),
            "targetAudience": brief.target_audience,
            "targetRegion": brief.target_region,
        }
