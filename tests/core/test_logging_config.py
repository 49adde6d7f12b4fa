"""
Tests for logging configuration.
"""

import os
import logging
import tempfile

from adcraft.core.logging_config import (
    PACKAGE_LOGGER,
    REDACTED,
    configure_logging,
    redact_sensitive_data,
    setup_campaign_logging,
    teardown_campaign_logging,
)


class TestLoggingConfig:
    """
    Tests for the logging configuration helpers.
    """

    def setup_method(self):
        """
        Set up test environment.
        """
        self.temp_dir = tempfile.TemporaryDirectory()
        self.package_logger = logging.getLogger(PACKAGE_LOGGER)
        self.original_handlers = self.package_logger.handlers[:]
        self.original_level = self.package_logger.level

    def teardown_method(self):
        """
        Clean up test environment.
        """
        for handler in self.package_logger.handlers[:]:
            if handler not in self.original_handlers:
                self.package_logger.removeHandler(handler)
                handler.close()
        for handler in self.original_handlers:
            if handler not in self.package_logger.handlers:
                self.package_logger.addHandler(handler)
        self.package_logger.setLevel(self.original_level)
        self.temp_dir.cleanup()

    def test_configure_logging_replaces_handlers(self):
        """
        Test that configuring twice does not duplicate handlers.
        """
        log_file = os.path.join(self.temp_dir.name, "logs", "adcraft.log")

        configure_logging(level="debug", log_file=log_file)
        configure_logging(level="WARNING", log_file=log_file)

        ours = [h for h in self.package_logger.handlers if getattr(h, "_adcraft_global", False)]
        assert len(ours) == 2
        assert self.package_logger.level == logging.WARNING
        assert os.path.isdir(os.path.dirname(log_file))

    def test_unknown_level_falls_back_to_info(self):
        """
        Test configuring an unknown level name.
        """
        configure_logging(level="chatty", log_file="", log_to_console=False)

        assert self.package_logger.level == logging.INFO

    def test_campaign_logging(self):
        """
        Test that a campaign log captures package records until torn down.
        """
        handler = setup_campaign_logging("summer/2025", self.temp_dir.name)
        logging.getLogger("adcraft.pipeline").warning("variant failed")
        teardown_campaign_logging(handler)
        logging.getLogger("adcraft.pipeline").warning("after teardown")

        log_file = os.path.join(self.temp_dir.name, "summer_2025.log")
        with open(log_file, "r") as f:
            content = f.read()

        assert "variant failed" in content
        assert "after teardown" not in content
        assert handler not in self.package_logger.handlers


class TestRedactSensitiveData:
    """
    Tests for the redact_sensitive_data function.
    """

    def test_masks_credentials(self):
        """
        Test that credential headers are masked and other values kept.
        """
        headers = {
            "Authorization": "Bearer sk-123",
            "Content-Type": "application/json",
            "X-Title": "adcraft",
        }

        redacted = redact_sensitive_data(headers)

        assert redacted["Authorization"] == REDACTED
        assert redacted["Content-Type"] == "application/json"
        assert headers["Authorization"] == "Bearer sk-123"

    def test_nested(self):
        """
        Test redacting nested dictionaries.
        """
        data = {"provider": {"api_key": "secret-value", "model": "dall-e-3"}}

        assert redact_sensitive_data(data) == {"provider": {"api_key": REDACTED, "model": "dall-e-3"}}
