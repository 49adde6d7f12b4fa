"""
Composition engine: aspect ratio resizing and text/logo overlays.
"""

from adcraft.composition.aspect_ratio_handler import (
    DEFAULT_ASPECT_RATIOS,
    AspectRatio,
    AspectRatioHandler,
    load_aspect_ratios,
)
from adcraft.composition.image_editor import ImageEditor, TextOverlayOptions
from adcraft.composition.styles import StyleSelector, contrast_text_color, logo_position_for_index
