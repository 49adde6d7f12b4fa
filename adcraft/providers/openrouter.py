"""
OpenRouter provider.

This module generates images and text through OpenRouter's chat completions
endpoint. Image models (Google Gemini 2.5 Flash Image by default) return the
image as a base64 data URL, or occasionally as a plain URL, inside the
assistant message.
"""

import base64
import json
from typing import Any, Dict, List, Optional

import requests

from adcraft.core.constants import (
    BASE_IMAGE_HEIGHT,
    BASE_IMAGE_WIDTH,
    DEFAULT_OPENROUTER_IMAGE_MODEL,
    DEFAULT_OPENROUTER_TEXT_MODEL,
    DEFAULT_PROVIDER_TIMEOUT,
    OPENROUTER_API_ENDPOINT,
)
from adcraft.core.credentials import get_api_key
from adcraft.core.error_handler import ConfigurationError, ProviderError, validate_configuration
from adcraft.core.logging_config import get_logger, redact_sensitive_data
from adcraft.providers.base import CloudProvider, StorageBackend

# Initialize logger
logger = get_logger(__name__)


def _is_retryable_status(status_code: Optional[int]) -> bool:
    return status_code is None or status_code == 429 or status_code >= 500


class OpenRouterProvider(CloudProvider):
    """
    Provider backed by OpenRouter.ai models.

    Args:
        storage: Storage backend for assets
        api_key: OpenRouter API key. If not provided, read from OPENROUTER_API_KEY.
        image_model: Model used for image generation
        text_model: Model used for text generation and image analysis
        timeout: Per-request timeout in seconds
        session: Optional ``requests.Session``, mainly for tests
    """

    name = "openrouter"

    def __init__(
        self,
        storage: StorageBackend,
        api_key: Optional[str] = None,
        image_model: str = DEFAULT_OPENROUTER_IMAGE_MODEL,
        text_model: str = DEFAULT_OPENROUTER_TEXT_MODEL,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        super().__init__(storage)

        try:
            self.api_key = api_key or get_api_key("openrouter")
        except ValueError as e:
            raise ConfigurationError(str(e), component=self.name, missing_keys=["OPENROUTER_API_KEY"]) from e

        validate_configuration(
            {"image_model": image_model, "text_model": text_model},
            ["image_model", "text_model"],
            component=self.name
        )

        self.image_model = image_model
        self.text_model = text_model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.endpoint = f"{OPENROUTER_API_ENDPOINT}/chat/completions"

        logger.info(f"Initialized {self.__class__.__name__} with image model {self.image_model}")

    def generate_image(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        width: int = BASE_IMAGE_WIDTH,
        height: int = BASE_IMAGE_HEIGHT,
        text: Optional[str] = None
    ) -> bytes:
        full_prompt = (
            f"{prompt}\nPlease generate this image with dimensions {width}x{height} pixels "
            f"and aspect ratio {width}:{height}."
        )
        if text:
            full_prompt += f'\nInclude the text "{text}" in the image.'

        content: List[Dict[str, Any]] = [{"type": "text", "text": full_prompt}]
        if negative_prompt:
            content.append({"type": "text", "text": f"Negative prompt: {negative_prompt}"})

        payload = {
            "model": self.image_model,
            "messages": [{"role": "user", "content": content}],
            "modalities": ["image", "text"],
        }

        result = self._post(payload, operation="generate_image")
        image_url = self._extract_image_url(result)
        if not image_url:
            raise ProviderError(
                "No image found in response",
                provider=self.name,
                operation="generate_image",
                retryable=False
            )

        return self._fetch_image(image_url)

    def generate_text(self, prompt: str) -> str:
        payload = {
            "model": self.text_model,
            "messages": [{"role": "user", "content": prompt}],
        }
        return self._message_text(self._post(payload, operation="generate_text"), "generate_text")

    def analyze_image(self, image_data: bytes, prompt: str) -> str:
        encoded = base64.b64encode(image_data).decode("ascii")
        payload = {
            "model": self.text_model,
            "messages": [{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": f"data:image/png;base64,{encoded}"}},
                ],
            }],
        }
        return self._message_text(self._post(payload, operation="analyze_image"), "analyze_image")

    def _post(self, payload: Dict[str, Any], operation: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Making API request to {self.endpoint} ({operation}, model {payload['model']})")
        logger.debug(f"Request headers: {redact_sensitive_data(headers)}")

        try:
            response = self.session.post(self.endpoint, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ProviderError(
                f"Request timed out after {self.timeout}s",
                provider=self.name,
                operation=operation
            ) from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Request failed: {e}", provider=self.name, operation=operation) from e

        logger.info(f"API request completed with status code {response.status_code}")

        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.text[:200]}",
                provider=self.name,
                operation=operation,
                status_code=response.status_code,
                retryable=_is_retryable_status(response.status_code)
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError("Response is not valid JSON", provider=self.name, operation=operation) from e

    def _message_text(self, result: Dict[str, Any], operation: str) -> str:
        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Unexpected response format", provider=self.name, operation=operation) from e

        if isinstance(content, list):
            content = "".join(part.get("text", "") for part in content if isinstance(part, dict))

        return (content or "").strip()

    def _extract_image_url(self, result: Dict[str, Any]) -> Optional[str]:
        """
        Find the first image URL in a chat completions response.

        Gemini style responses put images in ``message.images``; other models
        return a JSON object with ``image_url`` or ``url`` in the content.
        """
        for choice in result.get("choices", []):
            message = choice.get("message") or {}

            for image in message.get("images") or []:
                url = (image.get("image_url") or {}).get("url")
                if url:
                    return url

            content = message.get("content")
            if isinstance(content, str):
                if content.startswith("data:image/"):
                    return content
                try:
                    content_json = json.loads(content)
                except ValueError:
                    continue
                if isinstance(content_json, dict):
                    url = content_json.get("image_url") or content_json.get("url")
                    if url:
                        return url

        return None

    def _fetch_image(self, image_url: str) -> bytes:
        if image_url.startswith("data:image/"):
            logger.debug("Decoding base64 data URL")
            try:
                _, encoded = image_url.split(",", 1)
                data = base64.b64decode(encoded)
            except (ValueError, TypeError) as e:
                raise ProviderError(
                    f"Invalid image data URL: {e}",
                    provider=self.name,
                    operation="generate_image",
                    retryable=False
                ) from e
        else:
            logger.info(f"Downloading image from {image_url[:60]}")
            try:
                response = self.session.get(image_url, timeout=self.timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException as e:
                raise ProviderError(
                    f"Failed to download generated image: {e}",
                    provider=self.name,
                    operation="generate_image"
                ) from e
            data = response.content

        if not data:
            raise ProviderError("Generated image is empty", provider=self.name, operation="generate_image")

        return data
