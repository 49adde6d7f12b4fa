"""
OpenAI provider.

This module generates images with the OpenAI Images API and text with the
Chat Completions API through the official ``openai`` SDK.
"""

import base64
from typing import Optional

import openai
from openai import OpenAI

from adcraft.core.constants import (
    BASE_IMAGE_HEIGHT,
    BASE_IMAGE_WIDTH,
    DEFAULT_OPENAI_IMAGE_MODEL,
    DEFAULT_OPENAI_TEXT_MODEL,
    DEFAULT_PROVIDER_TIMEOUT,
)
from adcraft.core.credentials import get_api_key
from adcraft.core.error_handler import ConfigurationError, ProviderError, validate_configuration
from adcraft.core.logging_config import get_logger
from adcraft.providers.base import CloudProvider, StorageBackend

# Initialize logger
logger = get_logger(__name__)

# Sizes accepted by the Images API, by orientation
SQUARE_SIZE = "1024x1024"
PORTRAIT_SIZE = "1024x1792"
LANDSCAPE_SIZE = "1792x1024"


def image_size_for(width: int, height: int) -> str:
    """Closest Images API size for the requested dimensions."""
    if width > height:
        return LANDSCAPE_SIZE
    if height > width:
        return PORTRAIT_SIZE
    return SQUARE_SIZE


class OpenAIProvider(CloudProvider):
    """
    Provider backed by the OpenAI API.

    Args:
        storage: Storage backend for assets
        api_key: OpenAI API key. If not provided, read from OPENAI_API_KEY.
        image_model: Images API model
        text_model: Chat model used for text and image analysis
        timeout: Per-request timeout in seconds
        client: Optional preconfigured ``OpenAI`` client, mainly for tests
    """

    name = "openai"

    def __init__(
        self,
        storage: StorageBackend,
        api_key: Optional[str] = None,
        image_model: str = DEFAULT_OPENAI_IMAGE_MODEL,
        text_model: str = DEFAULT_OPENAI_TEXT_MODEL,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        client: Optional[OpenAI] = None
    ):
        super().__init__(storage)

        validate_configuration(
            {"image_model": image_model, "text_model": text_model},
            ["image_model", "text_model"],
            component=self.name
        )

        if client is None:
            try:
                api_key = api_key or get_api_key("openai")
            except ValueError as e:
                raise ConfigurationError(str(e), component=self.name, missing_keys=["OPENAI_API_KEY"]) from e
            # Retries are handled by the pipeline
            client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

        self.client = client
        self.image_model = image_model
        self.text_model = text_model
        self.timeout = timeout

        logger.info(f"Initialized {self.__class__.__name__} with image model {self.image_model}")

    def generate_image(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        width: int = BASE_IMAGE_WIDTH,
        height: int = BASE_IMAGE_HEIGHT,
        text: Optional[str] = None
    ) -> bytes:
        full_prompt = prompt
        if negative_prompt:
            full_prompt += f"\nAvoid: {negative_prompt}"
        if text:
            full_prompt += f'\nInclude the text "{text}" in the image.'

        size = image_size_for(width, height)
        logger.info(f"Requesting {size} image from {self.image_model}")

        try:
            response = self.client.images.generate(
                model=self.image_model,
                prompt=full_prompt,
                size=size,
                n=1,
                response_format="b64_json",
            )
        except openai.OpenAIError as e:
            raise self._wrap_error(e, "generate_image") from e

        b64 = response.data[0].b64_json if response.data else None
        if not b64:
            raise ProviderError(
                "Images API returned no image data",
                provider=self.name,
                operation="generate_image",
                retryable=False
            )

        return base64.b64decode(b64)

    def generate_text(self, prompt: str) -> str:
        return self._chat([{"role": "user", "content": prompt}], "generate_text")

    def analyze_image(self, image_data: bytes, prompt: str) -> str:
        encoded = base64.b64encode(image_data).decode("ascii")
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": f"data:image/png;base64,{encoded}"}},
            ],
        }]
        return self._chat(messages, "analyze_image")

    def _chat(self, messages, operation: str) -> str:
        try:
            response = self.client.chat.completions.create(model=self.text_model, messages=messages)
        except openai.OpenAIError as e:
            raise self._wrap_error(e, operation) from e

        return (response.choices[0].message.content or "").strip()

    def _wrap_error(self, error: Exception, operation: str) -> ProviderError:
        if isinstance(error, openai.APITimeoutError):
            return ProviderError(f"Request timed out after {self.timeout}s", provider=self.name, operation=operation)

        if isinstance(error, openai.APIStatusError):
            status = error.status_code
            return ProviderError(
                str(error),
                provider=self.name,
                operation=operation,
                status_code=status,
                retryable=status == 429 or status >= 500
            )

        return ProviderError(str(error), provider=self.name, operation=operation)
