"""
Image editor module.

This module renders the campaign message, and optionally a brand logo, on
top of a resized image using the Pillow library.
"""

import math
import os
import random
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from adcraft.composition.aspect_ratio_handler import encode_png, open_image
from adcraft.composition.styles import (
    LOGO_POSITIONS,
    TEXT_POSITIONS,
    OverlayStyle,
    StyleSelector,
    contrast_text_color,
    hex_to_rgba,
)
from adcraft.composition.text_layout import OverlayLayout, compute_layout
from adcraft.core.constants import DEFAULT_FONT_SIZE, DEFAULT_PADDING, LOGO_SPACING_FACTOR
from adcraft.core.error_handler import CompositionError
from adcraft.core.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)

# Tried after the family's own candidates
FALLBACK_FONTS = ("DejaVuSans-Bold.ttf", "DejaVuSans.ttf", "Arial.ttf", "FreeSans.ttf")

# Smallest size a line is shrunk to when its measured width overflows
MIN_RENDER_FONT_SIZE = 8


@dataclass(frozen=True)
class TextOverlayOptions:
    """
    Instructions for one text overlay.

    ``font_color`` and ``background_color`` are hex strings that, when set,
    take precedence over the selected style and brand colours.
    """
    text: str
    font_size: int = DEFAULT_FONT_SIZE
    position: Optional[str] = None
    logo: Optional[bytes] = None
    logo_position: str = "prefix"
    brand_colors: Optional[Dict[str, str]] = None
    padding: int = DEFAULT_PADDING
    font_color: Optional[str] = None
    background_color: Optional[str] = None


class ImageEditor:
    """
    Class for compositing text overlays onto images.

    Args:
        font_dir: Optional directory searched for font files before the
            system font paths.
        rng: Source of randomness for style selection.
    """

    def __init__(self, font_dir: Optional[str] = None, rng: Optional[random.Random] = None):
        self.font_dir = font_dir
        self.style_selector = StyleSelector(rng)

    def add_text_overlay(self, image_data: bytes, options: TextOverlayOptions) -> bytes:
        """
        Overlay wrapped text, and an optional logo, in a band on the image.

        Args:
            image_data: Encoded source image
            options: Overlay instructions

        Returns:
            PNG encoded image with the same dimensions as the input

        Raises:
            CompositionError: If the input, the options or the logo are invalid
        """
        self._validate_options(options)

        img = open_image(image_data, stage="overlay").convert("RGBA")
        width, height = img.size

        logo = self._load_logo(options.logo) if options.logo else None

        style = self.style_selector.select(options.position, options.brand_colors)
        background, text_color = self._resolve_colors(style, options)

        layout = compute_layout(
            options.text,
            width,
            height,
            options.font_size,
            style.position,
            padding=options.padding,
            logo=logo.size if logo else None,
            logo_position=options.logo_position,
        )

        logger.info(
            f"Overlaying {len(layout.lines)} line(s) at {style.position} "
            f"with {style.font_family} {options.font_size}px on {width}x{height} image"
        )

        band = Image.new("RGBA", img.size, (0, 0, 0, 0))
        ImageDraw.Draw(band).rectangle(
            (0, layout.band_y, width, layout.band_y + layout.band_height),
            fill=background
        )
        img = Image.alpha_composite(img, band)

        if logo and layout.logo_box:
            x, y, logo_w, logo_h = layout.logo_box
            resized = logo.resize((logo_w, logo_h), Image.LANCZOS)
            img.paste(resized, (x, y), resized)

        self._draw_lines(img, layout, style, options, text_color, width)

        return encode_png(img)

    def _validate_options(self, options: TextOverlayOptions) -> None:
        if not options.text or not options.text.strip():
            raise CompositionError("Overlay text must not be empty", stage="overlay")
        if options.font_size <= 0:
            raise CompositionError(f"Font size must be positive, got {options.font_size}", stage="overlay")
        if options.position is not None and options.position not in TEXT_POSITIONS:
            raise CompositionError(f"Unknown text position: {options.position}", stage="overlay")
        if options.logo_position not in LOGO_POSITIONS:
            raise CompositionError(f"Unknown logo position: {options.logo_position}", stage="overlay")

    def _resolve_colors(
        self,
        style: OverlayStyle,
        options: TextOverlayOptions
    ) -> Tuple[Tuple[int, int, int, int], Tuple[int, int, int, int]]:
        background, text_color = style.background, style.text_color

        try:
            if options.background_color:
                background = hex_to_rgba(options.background_color)
                text_color = contrast_text_color(options.background_color)
            if options.font_color:
                text_color = hex_to_rgba(options.font_color)
        except ValueError as e:
            raise CompositionError(str(e), stage="overlay") from e

        return background, text_color

    def _load_logo(self, logo_data: bytes) -> Image.Image:
        logo = open_image(logo_data, stage="logo")
        return logo.convert("RGBA")

    def _draw_lines(
        self,
        img: Image.Image,
        layout: OverlayLayout,
        style: OverlayStyle,
        options: TextOverlayOptions,
        text_color: Tuple[int, int, int, int],
        image_width: int
    ) -> None:
        draw = ImageDraw.Draw(img)
        font = self.get_font(style.font_files, options.font_size)

        if layout.logo_box is not None:
            logo_w = layout.logo_box[2]
            spacing = math.floor(options.font_size * LOGO_SPACING_FACTOR)
            max_width = image_width - logo_w - spacing - options.padding
        else:
            max_width = image_width - options.padding * 2
        max_width = max(1, max_width)

        for line, center_y in zip(layout.lines, layout.line_centers):
            line_font = self._fit_font(draw, line, font, style.font_files, options.font_size, max_width)
            half = draw.textlength(line, font=line_font) / 2

            low, high = half + options.padding, image_width - half - options.padding
            x = min(max(layout.text_x, low), high) if low <= high else image_width / 2

            draw.text((x, center_y), line, font=line_font, fill=text_color, anchor="mm")

    def _fit_font(
        self,
        draw: ImageDraw.ImageDraw,
        line: str,
        font: ImageFont.FreeTypeFont,
        font_files: Sequence[str],
        font_size: int,
        max_width: float
    ) -> ImageFont.FreeTypeFont:
        """
        Shrink the font for one line until its measured width fits.

        Line breaks are fixed by the layout; only the drawn size changes.
        """
        size = font_size
        while draw.textlength(line, font=font) > max_width and size > MIN_RENDER_FONT_SIZE:
            size = max(MIN_RENDER_FONT_SIZE, int(size * 0.9))
            font = self.get_font(font_files, size)
        return font

    def get_font(self, font_files: Sequence[str], font_size: int) -> ImageFont.FreeTypeFont:
        """
        Load the first available font for a typeface family.

        Candidates are looked up in ``font_dir`` first, then on the system
        font path, then the common fallbacks, then Pillow's built-in
        scalable font.

        Raises:
            CompositionError: If no font at all can be loaded
        """
        candidates = list(font_files) + [f for f in FALLBACK_FONTS if f not in font_files]

        if self.font_dir:
            for font_file in candidates:
                font_path = os.path.join(self.font_dir, font_file)
                if os.path.isfile(font_path):
                    try:
                        return ImageFont.truetype(font_path, font_size)
                    except OSError as e:
                        logger.warning(f"Failed to load font {font_path}: {e}")

        for font_file in candidates:
            try:
                return ImageFont.truetype(font_file, font_size)
            except OSError:
                continue

        logger.debug(f"No TrueType font found, using built-in font at {font_size}px")
        try:
            return ImageFont.load_default(size=font_size)
        except (OSError, TypeError, ImportError) as e:
            raise CompositionError(f"Could not load any font: {e}", stage="font") from e
