"""
Aspect ratio handling for different output formats.

This module defines the target output shapes of a campaign and the
crop-to-cover resize that turns one base image into each of them.
"""

import io
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from adcraft.core.error_handler import CompositionError, ValidationError
from adcraft.core.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class AspectRatio:
    """
    A named target output shape, e.g. ``AspectRatio(1080, 1920, "9:16")``.
    """
    width: int
    height: int
    label: str

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(
                f"Aspect ratio dimensions must be positive, got {self.width}x{self.height}",
                field="aspect_ratio",
                value=self.label
            )
        parse_aspect_ratio(self.label)

    @property
    def size_label(self) -> str:
        """The label with ``:`` replaced by ``x``, as used in asset filenames."""
        return self.label.replace(":", "x")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AspectRatio":
        return cls(width=int(data["width"]), height=int(data["height"]), label=data["label"])

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "width": self.width, "height": self.height}


def parse_aspect_ratio(aspect_ratio: str) -> Tuple[int, int]:
    """
    Parse an aspect ratio string into width and height ratios.

    Args:
        aspect_ratio (str): Aspect ratio string (e.g., "16:9", "1:1")

    Returns:
        Tuple[int, int]: (width_ratio, height_ratio)

    Raises:
        ValidationError: If the aspect ratio is invalid
    """
    try:
        width_ratio, height_ratio = map(int, aspect_ratio.split(":"))
    except (ValueError, AttributeError):
        raise ValidationError(f"Invalid aspect ratio: {aspect_ratio}", field="label", value=aspect_ratio)

    if width_ratio <= 0 or height_ratio <= 0:
        raise ValidationError(f"Invalid aspect ratio: {aspect_ratio}", field="label", value=aspect_ratio)

    return width_ratio, height_ratio


# Standard aspect ratios, in processing order
DEFAULT_ASPECT_RATIOS: Tuple[AspectRatio, ...] = (
    AspectRatio(1080, 1080, "1:1"),
    AspectRatio(1080, 1920, "9:16"),
    AspectRatio(1920, 1080, "16:9"),
)


def load_aspect_ratios(entries: Optional[Sequence[Dict[str, Any]]]) -> Tuple[AspectRatio, ...]:
    """
    Build the ordered aspect ratio list from configuration entries.

    Falls back to DEFAULT_ASPECT_RATIOS when no entries are configured.
    """
    if not entries:
        return DEFAULT_ASPECT_RATIOS
    return tuple(AspectRatio.from_dict(entry) for entry in entries)


class AspectRatioHandler:
    """
    Resizes images to aspect ratio targets.
    """

    def resize_image(self, image_data: bytes, width: int, height: int) -> bytes:
        """
        Resize an image so it covers a ``width`` x ``height`` box.

        The image is scaled until it fills the box and the overflow is cropped
        equally from both sides; there is never letterboxing. The result is
        PNG encoded and exactly ``width`` x ``height``.

        Args:
            image_data (bytes): Encoded source image
            width (int): Target width in pixels
            height (int): Target height in pixels

        Returns:
            bytes: PNG encoded resized image

        Raises:
            CompositionError: If the target has no area or the input cannot be decoded
        """
        if width <= 0 or height <= 0:
            raise CompositionError(f"Target dimensions must be positive, got {width}x{height}", stage="resize")

        logger.info(f"Resizing image to {width}x{height}")

        img = open_image(image_data, stage="resize")
        img = self._resize_and_crop(img, width, height)
        return encode_png(img)

    def resize_to(self, image_data: bytes, aspect_ratio: AspectRatio) -> bytes:
        return self.resize_image(image_data, aspect_ratio.width, aspect_ratio.height)

    def _resize_and_crop(self, img: Image.Image, target_width: int, target_height: int) -> Image.Image:
        """
        Crop the source to the target ratio around its centre, then scale.
        """
        target_ratio = target_width / target_height

        width, height = img.size
        img_ratio = width / height

        if img_ratio > target_ratio:
            # Image is wider than target, crop width
            new_width = max(1, round(height * target_ratio))
            left = (width - new_width) // 2
            img = img.crop((left, 0, left + new_width, height))
        elif img_ratio < target_ratio:
            # Image is taller than target, crop height
            new_height = max(1, round(width / target_ratio))
            top = (height - new_height) // 2
            img = img.crop((0, top, width, top + new_height))

        return img.resize((target_width, target_height), Image.LANCZOS)


def open_image(image_data: bytes, stage: str) -> Image.Image:
    """
    Decode image bytes into a fully loaded RGB or RGBA image.

    Raises:
        CompositionError: If the bytes are empty or not a decodable image
    """
    if not image_data:
        raise CompositionError("Empty image buffer", stage=stage)

    try:
        img = Image.open(io.BytesIO(image_data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise CompositionError(f"Could not decode image: {e}", stage=stage) from e

    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")

    return img


def encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
