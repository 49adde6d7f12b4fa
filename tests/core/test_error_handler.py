"""
Tests for error handler.

This module tests the exception types and the provider retry helper.
"""

import pytest
from unittest.mock import MagicMock

from adcraft.core.error_handler import (
    CompositionError,
    ConfigurationError,
    ProviderError,
    ValidationError,
    retry_call,
    validate_configuration,
)

class TestErrorHandler:
    """
    Tests for the error handler module.
    """

    def test_provider_error(self):
        """
        Test ProviderError exception.
        """
        error = ProviderError("Test error")

        assert str(error) == "Provider Error: Test error"
        assert error.provider is None
        assert error.retryable is True

        error = ProviderError(
            message="Test error",
            provider="openrouter",
            operation="generate_image",
            status_code=503
        )

        assert "(Provider: openrouter)" in str(error)
        assert "(Operation: generate_image)" in str(error)
        assert "(Status Code: 503)" in str(error)
        assert error.status_code == 503

    def test_validation_error(self):
        """
        Test ValidationError exception.
        """
        error = ValidationError("Invalid value", field="products", value=[])

        assert str(error) == "Validation Error: Invalid value (Field: products)"
        assert error.field == "products"
        assert error.value == []

    def test_configuration_error(self):
        """
        Test ConfigurationError exception.
        """
        error = ConfigurationError("Missing keys", component="openai", missing_keys=["OPENAI_API_KEY"])

        assert "Configuration Error: Missing keys" in str(error)
        assert "(Component: openai)" in str(error)
        assert "(Missing Keys: OPENAI_API_KEY)" in str(error)

    def test_composition_error(self):
        """
        Test CompositionError exception.
        """
        error = CompositionError("Empty image buffer", stage="resize")

        assert str(error) == "Composition Error: Empty image buffer (Stage: resize)"
        assert error.stage == "resize"

    def test_validate_configuration(self):
        """
        Test configuration validation.
        """
        validate_configuration({"api_key": "x", "model": "m"}, ["api_key", "model"], "test")

        with pytest.raises(ConfigurationError) as excinfo:
            validate_configuration({"api_key": ""}, ["api_key", "model"], "test")

        assert excinfo.value.missing_keys == ["api_key", "model"]


class TestRetryCall:
    """
    Tests for retry_call.
    """

    def setup_method(self):
        """
        Set up test environment.
        """
        self.sleep = MagicMock()

    def test_returns_first_success(self):
        """
        Test that a successful call is not retried.
        """
        func = MagicMock(return_value="ok")

        assert retry_call(func, 1, key="v", sleep=self.sleep) == "ok"

        func.assert_called_once_with(1, key="v")
        self.sleep.assert_not_called()

    def test_retries_with_exponential_backoff(self):
        """
        Test that transient failures are retried with doubling delays.
        """
        func = MagicMock(side_effect=[ProviderError("busy"), ProviderError("busy"), "ok"])

        result = retry_call(func, max_retries=2, retry_delay=1, sleep=self.sleep)

        assert result == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in self.sleep.call_args_list] == [1, 2]

    def test_gives_up_after_max_retries(self):
        """
        Test that the last error propagates once retries are exhausted.
        """
        func = MagicMock(side_effect=ProviderError("down"))

        with pytest.raises(ProviderError):
            retry_call(func, max_retries=2, retry_delay=0.5, sleep=self.sleep)

        assert func.call_count == 3

    def test_non_retryable_error_is_not_retried(self):
        """
        Test that non-retryable provider errors fail immediately.
        """
        func = MagicMock(side_effect=ProviderError("bad request", status_code=400, retryable=False))

        with pytest.raises(ProviderError):
            retry_call(func, sleep=self.sleep)

        func.assert_called_once()
        self.sleep.assert_not_called()

    def test_other_exceptions_propagate(self):
        """
        Test that exceptions other than ProviderError are not retried.
        """
        func = MagicMock(side_effect=ValueError("boom"))

        with pytest.raises(ValueError):
            retry_call(func, sleep=self.sleep)

        func.assert_called_once()
