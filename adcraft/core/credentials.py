"""
Credential management for provider API keys.

Credentials are read from environment variables; a ``.env`` file in the
working directory is loaded on import.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from adcraft.core.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables from .env file if it exists
load_dotenv()

# Map API names to environment variable names
ENV_VAR_MAP = {
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
}

def get_api_key(api_name: str, required: bool = True) -> Optional[str]:
    """
    Get API key for a specific API.

    Args:
        api_name (str): API name (e.g., 'openrouter', 'openai')
        required (bool): Whether a missing key is an error

    Returns:
        Optional[str]: API key, or None when not required and not set

    Raises:
        ValueError: If the API is unknown, or the key is required and not set
    """
    env_var = ENV_VAR_MAP.get(api_name.lower())
    if not env_var:
        raise ValueError(f"Unknown API: {api_name}")

    value = os.environ.get(env_var)
    if not value and required:
        logger.error(f"{env_var} environment variable is not set")
        raise ValueError(f"{env_var} environment variable is required but not set")

    return value
