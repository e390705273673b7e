#!/usr/bin/env python3
"""
Centralized logging configuration.

Provides bootstrap_logging(), which configures logging from an INI file using
Python's native format, and a filter that masks registered secret values in
every formatted record.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional, Set

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
MASK = '***'

# Values registered through mask_secret(); shared by every SecretMaskFilter
_masked_values: Set[str] = set()


class SecretMaskFilter(logging.Filter):
    """Replaces registered secret values with *** in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not _masked_values:
            return True
        message = record.getMessage()
        masked = _mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def _mask(text: str) -> str:
    # Longest first so a secret containing another secret is fully hidden
    for value in sorted(_masked_values, key=len, reverse=True):
        text = text.replace(value, MASK)
    return text


def mask_secret(value: str) -> None:
    """Register a value that must never appear in log output."""
    if value and value.strip():
        _masked_values.add(value)


def mask_text(text: str) -> str:
    """Apply the registered masks to an arbitrary string."""
    return _mask(text) if _masked_values else text


def clear_masks() -> None:
    """Forget every registered value."""
    _masked_values.clear()


def _find_logging_config() -> Path:
    """
    Find the logging configuration file.

    Uses the file named by INFISICAL_ACTION_LOGGING_CONFIG when set, otherwise
    the copy shipped with the package. The working directory is the user's
    workspace and is never searched.
    """
    override = os.environ.get('INFISICAL_ACTION_LOGGING_CONFIG', '').strip()
    if override:
        return Path(override)

    return Path(__file__).parent / 'logging.ini'


def _setup_environment_variables():
    """
    Set LOG_LEVEL for INI substitution.

    RUNNER_DEBUG=1 (step debug logging in GitHub Actions) selects DEBUG when
    LOG_LEVEL is not set explicitly.
    """
    if 'LOG_LEVEL' not in os.environ:
        os.environ['LOG_LEVEL'] = 'DEBUG' if os.environ.get('RUNNER_DEBUG') == '1' else 'INFO'

    log_level = os.environ['LOG_LEVEL'].strip().upper()
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        log_level = 'INFO'
    os.environ['LOG_LEVEL'] = log_level


def _install_mask_filter():
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if not any(isinstance(f, SecretMaskFilter) for f in handler.filters):
            handler.addFilter(SecretMaskFilter())


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration for the action.

    This function:
    1. Sets up LOG_LEVEL for INI file substitution
    2. Loads logging.ini using logging.config.fileConfig()
    3. Applies the LOG_LEVEL override to the root logger and its handlers
    4. Attaches the secret mask filter to every root handler

    Args:
        name: Optional name for the logger reporting the configuration
    """
    _setup_environment_variables()
    env_level = os.environ['LOG_LEVEL']

    config_path = _find_logging_config()

    try:
        logging.config.fileConfig(
            str(config_path),
            defaults={'log_level': env_level},
            disable_existing_loggers=False
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, env_level))
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setLevel(getattr(logging, env_level))

    except Exception as e:
        # Fallback to basic configuration if INI file is missing or invalid
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        print("Using basic logging configuration", file=sys.stderr)
        logging.basicConfig(
            level=getattr(logging, env_level),
            format='%(levelname)s: %(name)s: %(message)s',
            stream=sys.stderr
        )

    _install_mask_filter()

    logger = logging.getLogger(name) if name else logging.getLogger()
    logger.debug(f"Logging configured from {config_path} at {env_level}")

