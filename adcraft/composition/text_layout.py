"""
Text overlay layout.

Layout is computed entirely before anything is drawn: line breaks, the
overlay band, and the logo and text positions. Widths use the average glyph
width heuristic ``font_size * 0.6`` rather than real font metrics, so the
same text always breaks the same way whatever typeface is drawn.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from adcraft.core.constants import (
    BAND_EXTRA_PADDING_FACTOR,
    CHAR_WIDTH_FACTOR,
    LINE_HEIGHT_FACTOR,
    LOGO_HEIGHT_FACTOR,
    LOGO_SPACING_FACTOR,
    MIN_BAND_HEIGHT_FACTOR,
)


@dataclass(frozen=True)
class OverlayLayout:
    """
    Pixel geometry of one overlay.

    ``text_x`` is the horizontal centre of the text block and ``line_centers``
    the vertical centre of each wrapped line.
    """
    lines: Tuple[str, ...]
    chars_per_line: int
    line_height: float
    band_y: int
    band_height: int
    text_x: int
    line_centers: Tuple[int, ...]
    estimated_text_width: int
    logo_box: Optional[Tuple[int, int, int, int]] = None  # x, y, width, height


def chars_per_line(available_width: float, font_size: float) -> int:
    """Characters that fit on one line, never less than one."""
    return max(1, math.floor(available_width / (font_size * CHAR_WIDTH_FACTOR)))


def wrap_text(text: str, max_chars: int) -> List[str]:
    """
    Greedily pack words into lines of at most ``max_chars`` characters.

    A single word longer than a line is split across lines so no line
    exceeds the limit.
    """
    lines: List[str] = []
    current = ""

    for word in text.split():
        while len(word) > max_chars:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:max_chars])
            word = word[max_chars:]

        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
        else:
            lines.append(current)
            current = word

    if current:
        lines.append(current)

    return lines


def band_height(line_count: int, font_size: float, padding: int) -> float:
    text_height = line_count * font_size * LINE_HEIGHT_FACTOR
    return max(
        text_height + padding * 2 + font_size * BAND_EXTRA_PADDING_FACTOR,
        font_size * MIN_BAND_HEIGHT_FACTOR
    )


def band_top(position: str, image_height: int, height: int) -> int:
    if position == "bottom":
        y = image_height - height
    elif position == "center":
        y = (image_height - height) // 2
    else:
        y = 0
    return max(0, y)


def logo_size(logo_width: int, logo_height: int, font_size: float, max_width: int) -> Tuple[int, int]:
    """
    Scale a logo to ``1.5 * font_size`` high, keeping its aspect ratio.

    Logos too wide for ``max_width`` are scaled down further to fit.
    """
    aspect = (logo_width or 1) / (logo_height or 1)
    height = max(1, math.floor(font_size * LOGO_HEIGHT_FACTOR))
    width = max(1, math.floor(height * aspect))

    if width > max_width > 0:
        width = max_width
        height = max(1, math.floor(width / aspect))

    return width, height


def _clamp(value: float, low: float, high: float, fallback: float) -> float:
    if low > high:
        return fallback
    return max(low, min(value, high))


def compute_layout(
    text: str,
    image_width: int,
    image_height: int,
    font_size: float,
    position: str,
    padding: int = 20,
    logo: Optional[Tuple[int, int]] = None,
    logo_position: str = "prefix"
) -> OverlayLayout:
    """
    Lay out wrapped text, and an optional logo, inside an overlay band.

    Args:
        text: Text to lay out
        image_width: Image width in pixels
        image_height: Image height in pixels
        font_size: Font size in pixels
        position: Band anchor, one of top, center, bottom
        padding: Padding around the text block in pixels
        logo: Original (width, height) of the logo, if any
        logo_position: ``prefix`` puts the logo left of the text, ``suffix`` right

    Returns:
        OverlayLayout: The computed geometry
    """
    logo_w = logo_h = spacing = 0
    if logo:
        logo_w, logo_h = logo_size(logo[0], logo[1], font_size, image_width - padding * 2)
        spacing = math.floor(font_size * LOGO_SPACING_FACTOR)
        available_width = image_width - logo_w - spacing - padding
    else:
        available_width = image_width

    max_chars = chars_per_line(available_width, font_size)
    lines = wrap_text(text, max_chars)

    line_height = font_size * LINE_HEIGHT_FACTOR
    height = min(image_height, math.ceil(band_height(len(lines), font_size, padding)))
    y = band_top(position, image_height, height)

    text_block_top = y + (height - len(lines) * line_height) / 2
    line_centers = tuple(
        round(text_block_top + (i + 0.5) * line_height) for i in range(len(lines))
    )

    longest = max((len(line) for line in lines), default=0)
    text_width = math.floor(longest * font_size * CHAR_WIDTH_FACTOR)
    half = text_width / 2

    text_x = image_width / 2
    logo_box = None

    if logo:
        content_width = logo_w + spacing + text_width
        content_start = (image_width - content_width) // 2

        if logo_position == "prefix":
            logo_x = max(padding, content_start)
            text_x = logo_x + logo_w + spacing + half
        else:
            text_x = content_start + half
            logo_x = text_x + half + spacing

        logo_x = _clamp(logo_x, padding, image_width - logo_w - padding, (image_width - logo_w) / 2)
        logo_y = y + (height - logo_h) // 2
        logo_box = (int(logo_x), int(max(y, logo_y)), logo_w, logo_h)

    text_x = _clamp(text_x, half + padding, image_width - half - padding, image_width / 2)

    return OverlayLayout(
        lines=tuple(lines),
        chars_per_line=max_chars,
        line_height=line_height,
        band_y=y,
        band_height=height,
        text_x=int(text_x),
        line_centers=line_centers,
        estimated_text_width=text_width,
        logo_box=logo_box,
    )
