"""
Overlay style selection.

Every overlay picks a text position, a background/text colour pair and a
typeface family. Picks come from an injectable ``random.Random`` so a seeded
generator reproduces the exact same layout; production code uses an
unseeded one.
"""

import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from adcraft.core.error_handler import CompositionError
from adcraft.core.utils import parse_hex_color

RGBA = Tuple[int, int, int, int]

TEXT_POSITIONS = ("top", "center", "bottom")

LOGO_POSITIONS = ("prefix", "suffix")

# (background, text colour); all pairs keep a high contrast ratio
BACKGROUND_STYLES: Tuple[Tuple[RGBA, RGBA], ...] = (
    # Dark backgrounds
    ((0, 0, 0, 166), (255, 255, 255, 255)),
    ((0, 0, 0, 128), (255, 255, 255, 255)),
    ((0, 0, 0, 191), (255, 255, 255, 255)),
    ((20, 20, 30, 179), (255, 255, 255, 255)),
    # Light backgrounds
    ((255, 255, 255, 217), (0, 0, 0, 255)),
    ((255, 255, 255, 179), (26, 26, 26, 255)),
    ((250, 250, 250, 204), (34, 34, 34, 255)),
    # Brand-tinted backgrounds
    ((10, 10, 40, 191), (255, 255, 255, 255)),
    ((60, 60, 80, 179), (255, 255, 255, 255)),
    ((40, 40, 40, 204), (255, 255, 255, 255)),
)

# Typeface families and the font files that can render them, best match first
FONT_POOL: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Helvetica Neue", ("HelveticaNeue-Bold.ttf", "Helvetica-Bold.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf")),
    ("Futura", ("Futura-Bold.ttf", "TrebuchetMS-Bold.ttf", "Trebuchet MS Bold.ttf", "LiberationSans-Bold.ttf")),
    ("Gill Sans", ("GillSans-Bold.ttf", "Calibri Bold.ttf", "LiberationSans-Bold.ttf")),
    ("Avenir Next", ("AvenirNext-Bold.ttf", "CenturyGothic-Bold.ttf", "DejaVuSans-Bold.ttf")),
    ("Franklin Gothic", ("FranklinGothic-Medium.ttf", "ArialNarrow-Bold.ttf", "LiberationSansNarrow-Bold.ttf")),
    ("Garamond", ("Garamond-Bold.ttf", "Times New Roman Bold.ttf", "LiberationSerif-Bold.ttf")),
    ("Bodoni", ("BodoniMT-Bold.ttf", "Didot-Bold.ttf", "DejaVuSerif-Bold.ttf")),
    ("Georgia", ("Georgia-Bold.ttf", "Georgia Bold.ttf", "DejaVuSerif-Bold.ttf")),
    ("Palatino", ("Palatino-Bold.ttf", "PalatinoLinotype-Bold.ttf", "LiberationSerif-Bold.ttf")),
    ("Baskerville", ("Baskerville-Bold.ttf", "LibreBaskerville-Bold.ttf", "DejaVuSerif-Bold.ttf")),
)

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True)
class OverlayStyle:
    position: str
    background: RGBA
    text_color: RGBA
    font_family: str
    font_files: Tuple[str, ...]


def luminance(color: str) -> float:
    """Perceived luminance ``0.299R + 0.587G + 0.114B`` of a hex colour, 0-255."""
    r, g, b = parse_hex_color(color)
    return 0.299 * r + 0.587 * g + 0.114 * b


def is_color_dark(color: str) -> bool:
    return luminance(color) < 128


def contrast_text_color(background: str) -> RGBA:
    """White text on dark backgrounds, black text on light ones."""
    return WHITE if is_color_dark(background) else BLACK


def hex_to_rgba(color: str, alpha: int = 255) -> RGBA:
    r, g, b = parse_hex_color(color)
    return (r, g, b, alpha)


class StyleSelector:
    """
    Picks overlay styles from the fixed pools.

    Args:
        rng: Source of randomness. Pass ``random.Random(seed)`` for
            reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select(
        self,
        position: Optional[str] = None,
        brand_colors: Optional[Dict[str, str]] = None
    ) -> OverlayStyle:
        """
        Pick a style, honouring a pinned position and brand colours.

        Brand colours replace the drawn background: the primary colour when
        given, otherwise the secondary one, with black or white text chosen
        by the luminance of that background.
        """
        font_family, font_files = self.rng.choice(FONT_POOL)
        chosen_position = position or self.rng.choice(TEXT_POSITIONS)
        background, text_color = self.rng.choice(BACKGROUND_STYLES)

        brand_colors = brand_colors or {}
        brand_background = brand_colors.get("primary") or brand_colors.get("secondary")
        if brand_background:
            try:
                background = hex_to_rgba(brand_background)
                text_color = contrast_text_color(brand_background)
            except ValueError as e:
                raise CompositionError(f"Invalid brand color: {e}", stage="overlay") from e

        return OverlayStyle(
            position=chosen_position,
            background=background,
            text_color=text_color,
            font_family=font_family,
            font_files=font_files,
        )


def logo_position_for_index(index: int) -> str:
    """Alternate logo sides across aspect ratios: even index prefix, odd suffix."""
    return LOGO_POSITIONS[index % 2]
