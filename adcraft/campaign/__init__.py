"""
Campaign brief model, loading and prompt construction.
"""

from adcraft.campaign.models import BrandAssets, CampaignBrief, Product
from adcraft.campaign.input_validator import InputValidator
from adcraft.campaign.prompt_builder import generate_image_prompt, generate_negative_prompt
