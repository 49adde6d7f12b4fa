"""
Constants for the adcraft package.

This module provides constants used throughout the adcraft package.
These constants can be easily changed in one place.
"""

# Image Generation Models
DEFAULT_OPENROUTER_IMAGE_MODEL = "google/gemini-2.5-flash-image"
DEFAULT_OPENROUTER_TEXT_MODEL = "anthropic/claude-haiku-4.5"
DEFAULT_OPENAI_IMAGE_MODEL = "dall-e-3"
DEFAULT_OPENAI_TEXT_MODEL = "gpt-4o-mini"

# API Endpoints
OPENROUTER_API_ENDPOINT = "https://openrouter.ai/api/v1"

# Providers
DEFAULT_PROVIDER = "local"
DEFAULT_STORAGE_PATH = "output"

# Base image size requested from the generation backend
BASE_IMAGE_WIDTH = 1024
BASE_IMAGE_HEIGHT = 1024

# Output
DEFAULT_FILE_EXTENSION = "png"
DEFAULT_CONTENT_TYPE = "image/png"

# Provider call policy
DEFAULT_PROVIDER_TIMEOUT = 120  # seconds
DEFAULT_PROVIDER_MAX_RETRIES = 2
DEFAULT_PROVIDER_RETRY_DELAY = 1  # seconds, doubled on each retry

# Composition heuristics
CHAR_WIDTH_FACTOR = 0.6
LINE_HEIGHT_FACTOR = 1.4
MIN_BAND_HEIGHT_FACTOR = 2.5
BAND_EXTRA_PADDING_FACTOR = 0.5
LOGO_HEIGHT_FACTOR = 1.5
LOGO_SPACING_FACTOR = 0.8
DEFAULT_FONT_SIZE = 48
DEFAULT_PADDING = 20

NEGATIVE_PROMPT = (
    "blurry, low quality, distorted, deformed, ugly, bad anatomy, watermark, "
    "text, signature, amateur"
)
