"""
Core utilities and configuration for the adcraft package.
"""

from adcraft.core.config import get_config, get_config_value
from adcraft.core.credentials import get_api_key
from adcraft.core.logging_config import get_logger, configure_logging
from adcraft.core.utils import is_valid_image_file
from adcraft.core.error_handler import (
    ProviderError,
    ValidationError,
    ConfigurationError,
    CompositionError
)
