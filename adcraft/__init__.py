"""
adcraft - Creative generation pipeline for multi-format ad campaigns

Turns a campaign brief into ad images across several aspect ratios, using a
pluggable image generation and storage provider and a deterministic text
and logo composition engine.
"""

__version__ = "0.1.0"

# Import main components for easier access
from adcraft.campaign.input_validator import InputValidator
from adcraft.campaign.models import BrandAssets, CampaignBrief, Product
from adcraft.composition.aspect_ratio_handler import AspectRatio, AspectRatioHandler
from adcraft.composition.image_editor import ImageEditor, TextOverlayOptions
from adcraft.pipeline.pipeline_runner import CreativePipeline
from adcraft.pipeline.models import PipelineResult, ProgressEvent
from adcraft.providers.factory import create_provider
