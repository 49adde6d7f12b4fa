"""
Logging configuration for the adcraft package.

Handlers are attached to the ``adcraft`` package logger rather than the root
logger, so embedding applications keep their own logging setup:
- Level, format and log file from configuration
- Rotating log file
- One extra log file per campaign run
- Redaction of credentials before request details are logged
"""

import os
import sys
import logging
import logging.handlers
from typing import Any, Dict, Optional

from adcraft.core.utils import sanitize_path_component

PACKAGE_LOGGER = "adcraft"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REDACTED = "********"

# Substrings of keys whose values are never logged
SENSITIVE_KEYS = ("api_key", "apikey", "authorization", "secret", "password", "token", "credential")


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    log_to_console: bool = True,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level (str, optional): Level name; defaults to ``logging.level``
        log_file (str, optional): Rotating log file; defaults to ``logging.file``.
            A null ``logging.file`` disables file logging.
        log_format (str, optional): Record format; defaults to ``logging.format``
        log_to_console (bool): Whether to log to stderr
        max_bytes (int): Size at which the log file is rotated
        backup_count (int): Rotated files to keep

    Returns:
        logging.Logger: The configured package logger
    """
    from adcraft.core.config import get_config_value

    level = level or get_config_value("logging.level", "INFO")
    if log_file is None:
        log_file = get_config_value("logging.file")
    log_format = log_format or get_config_value("logging.format", DEFAULT_LOG_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = logging.getLevelName(level.upper())
    package_logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    for handler in package_logger.handlers[:]:
        if getattr(handler, "_adcraft_global", False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(log_format)
    handlers = []

    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._adcraft_global = True
        package_logger.addHandler(handler)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def redact_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``data`` with credential values masked.

    Nested dictionaries, such as request headers inside a request
    description, are redacted as well.
    """
    redacted = {}

    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_KEYS):
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = redact_sensitive_data(value)
        else:
            redacted[key] = value

    return redacted


def setup_campaign_logging(campaign_id: str, output_dir: str) -> logging.Handler:
    """
    Capture the log of one campaign run in ``{output_dir}/{campaign_id}.log``.

    Args:
        campaign_id (str): Campaign ID
        output_dir (str): Output directory for the log file

    Returns:
        logging.Handler: The attached handler, to pass to
        ``teardown_campaign_logging`` when the run is over
    """
    os.makedirs(output_dir, exist_ok=True)
    log_file = os.path.join(output_dir, f"{sanitize_path_component(campaign_id)}.log")

    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    logging.getLogger(PACKAGE_LOGGER).addHandler(handler)

    return handler


def teardown_campaign_logging(handler: logging.Handler) -> None:
    """Detach and close a handler from ``setup_campaign_logging``."""
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
    handler.close()
