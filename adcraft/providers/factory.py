"""
Provider construction from configuration.
"""

from enum import Enum
from typing import Any, Dict, Optional

from adcraft.core.config import get_config
from adcraft.core.constants import DEFAULT_PROVIDER, DEFAULT_PROVIDER_TIMEOUT, DEFAULT_STORAGE_PATH
from adcraft.core.error_handler import ConfigurationError
from adcraft.core.logging_config import get_logger
from adcraft.providers.base import CloudProvider
from adcraft.providers.local import LocalProvider
from adcraft.providers.storage import LocalStorage

# Initialize logger
logger = get_logger(__name__)


class ProviderKind(str, Enum):
    """The supported provider backends."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    LOCAL = "local"


def create_provider(
    config: Optional[Dict[str, Any]] = None,
    kind: Optional[str] = None,
    storage_path: Optional[str] = None
) -> CloudProvider:
    """
    Build the provider selected by configuration.

    Args:
        config: Full configuration dictionary. Defaults to ``get_config()``.
        kind: Provider kind, overriding ``providers.kind``
        storage_path: Storage root, overriding ``storage.path``

    Returns:
        CloudProvider: The configured provider

    Raises:
        ConfigurationError: If the kind is unknown or its credentials are missing
    """
    config = config if config is not None else get_config()
    providers = config.get("providers", {})

    kind = kind or providers.get("kind") or DEFAULT_PROVIDER
    try:
        provider_kind = ProviderKind(kind.lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown provider '{kind}'. Expected one of: {', '.join(k.value for k in ProviderKind)}",
            component="providers"
        )

    storage = LocalStorage(storage_path or config.get("storage", {}).get("path") or DEFAULT_STORAGE_PATH)
    timeout = providers.get("timeout", DEFAULT_PROVIDER_TIMEOUT)
    models = providers.get(provider_kind.value, {})

    logger.info(f"Creating {provider_kind.value} provider")

    if provider_kind is ProviderKind.OPENROUTER:
        from adcraft.providers.openrouter import OpenRouterProvider
        return OpenRouterProvider(storage, timeout=timeout, **_model_kwargs(models))

    if provider_kind is ProviderKind.OPENAI:
        from adcraft.providers.openai_provider import OpenAIProvider
        return OpenAIProvider(storage, timeout=timeout, **_model_kwargs(models))

    return LocalProvider(storage)


def _model_kwargs(models: Dict[str, Any]) -> Dict[str, str]:
    return {key: models[key] for key in ("image_model", "text_model") if models.get(key)}
