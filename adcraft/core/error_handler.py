"""
Error handling module.

This module defines the exception types raised across adcraft and helpers for
consistent error reporting and retrying provider calls.
"""

import time
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """
    Exception raised when a cloud capability provider call fails.

    Attributes:
        message: Error message.
        provider: Name of the provider that failed.
        operation: Provider operation (generate_image, upload, ...).
        status_code: HTTP status code, when the provider talks HTTP.
        retryable: Whether retrying the call may succeed.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        retryable: bool = True
    ):
        self.message = message
        self.provider = provider
        self.operation = operation
        self.status_code = status_code
        self.retryable = retryable

        detailed_message = f"Provider Error: {message}"
        if provider:
            detailed_message += f" (Provider: {provider})"
        if operation:
            detailed_message += f" (Operation: {operation})"
        if status_code:
            detailed_message += f" (Status Code: {status_code})"

        super().__init__(detailed_message)


class ValidationError(Exception):
    """
    Exception raised for validation errors.

    Attributes:
        message: Error message.
        field: Field that failed validation.
        value: Value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        self.message = message
        self.field = field
        self.value = value

        detailed_message = f"Validation Error: {message}"
        if field:
            detailed_message += f" (Field: {field})"

        super().__init__(detailed_message)


class ConfigurationError(Exception):
    """
    Exception raised for configuration errors.

    Attributes:
        message: Error message.
        component: Component that has a configuration error.
        missing_keys: Keys that are missing from the configuration.
    """

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        missing_keys: Optional[list] = None
    ):
        self.message = message
        self.component = component
        self.missing_keys = missing_keys or []

        detailed_message = f"Configuration Error: {message}"
        if component:
            detailed_message += f" (Component: {component})"
        if missing_keys:
            detailed_message += f" (Missing Keys: {', '.join(missing_keys)})"

        super().__init__(detailed_message)


class CompositionError(Exception):
    """
    Exception raised when resizing or overlaying an image fails.

    Attributes:
        message: Error message.
        stage: Composition stage (resize, overlay, logo, font).
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        self.message = message
        self.stage = stage

        detailed_message = f"Composition Error: {message}"
        if stage:
            detailed_message += f" (Stage: {stage})"

        super().__init__(detailed_message)


def validate_configuration(
    config: Dict[str, Any],
    required_keys: list,
    component: str = "Unknown"
) -> None:
    """
    Validate that required keys are present and non-empty in the configuration.

    Args:
        config: Configuration to validate.
        required_keys: List of required key names.
        component: Component name for error reporting.

    Raises:
        ConfigurationError: If a required key is missing.
    """
    missing_keys = [key for key in required_keys if not config.get(key)]

    if missing_keys:
        raise ConfigurationError(
            message="Missing required configuration keys",
            component=component,
            missing_keys=missing_keys
        )


def retry_call(
    func: Callable,
    *args,
    max_retries: int = 2,
    retry_delay: float = 1,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs
) -> Any:
    """
    Call a provider function, retrying transient failures with exponential backoff.

    Only ``ProviderError`` with ``retryable`` set is retried; any other
    exception propagates immediately. The call is attempted at most
    ``max_retries + 1`` times.

    Args:
        func: Function to call.
        *args: Positional arguments for the function.
        max_retries: Maximum number of retries after the first attempt.
        retry_delay: Initial delay between retries in seconds.
        sleep: Sleep function, injectable for tests.
        **kwargs: Keyword arguments for the function.

    Returns:
        The function's return value.

    Raises:
        ProviderError: If the call still fails after all retries.
    """
    attempt = 0

    while True:
        try:
            return func(*args, **kwargs)
        except ProviderError as e:
            if not e.retryable or attempt >= max_retries:
                if attempt:
                    logger.error(f"Provider call failed after {attempt + 1} attempts: {e}")
                raise

            delay = retry_delay * (2 ** attempt)
            attempt += 1
            logger.warning(f"Provider call failed, retrying in {delay} seconds (attempt {attempt}/{max_retries}): {e}")
            sleep(delay)
