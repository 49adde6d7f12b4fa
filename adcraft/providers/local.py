"""
Offline provider.

Generates placeholder images without any network access, so campaigns can
be run end to end in development and tests. The gradient colours are
derived from the prompt, so the same prompt always yields the same image.
"""

import hashlib
import io
from typing import Optional

import numpy as np
from PIL import Image

from adcraft.core.constants import BASE_IMAGE_HEIGHT, BASE_IMAGE_WIDTH
from adcraft.core.error_handler import ProviderError
from adcraft.core.logging_config import get_logger
from adcraft.providers.base import CloudProvider, StorageBackend

# Initialize logger
logger = get_logger(__name__)


def gradient_image(width: int, height: int, seed: str) -> np.ndarray:
    """
    Diagonal two-colour gradient as an ``(height, width, 3)`` uint8 array.
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    start = np.array(list(digest[0:3]), dtype=np.float32)
    end = np.array(list(digest[3:6]), dtype=np.float32)

    ys = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]
    xs = np.linspace(0.0, 1.0, width, dtype=np.float32)[None, :]
    t = ((xs + ys) / 2.0)[:, :, None]

    pixels = start * (1.0 - t) + end * t
    return pixels.clip(0, 255).astype(np.uint8)


class LocalProvider(CloudProvider):
    """
    Placeholder provider: gradient images and echoed text.
    """

    name = "local"

    def __init__(self, storage: StorageBackend):
        super().__init__(storage)
        logger.info("Initialized offline placeholder provider")

    def generate_image(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        width: int = BASE_IMAGE_WIDTH,
        height: int = BASE_IMAGE_HEIGHT,
        text: Optional[str] = None
    ) -> bytes:
        if width <= 0 or height <= 0:
            raise ProviderError(
                f"Invalid image size {width}x{height}",
                provider=self.name,
                operation="generate_image",
                retryable=False
            )

        logger.info(f"Generating {width}x{height} placeholder image")
        img = Image.fromarray(gradient_image(width, height, prompt))

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def generate_text(self, prompt: str) -> str:
        return prompt
