"""
Configuration module for dsa-cli.

This module provides type-safe, validated configuration using Pydantic BaseSettings.

Usage:
    from dsa_cli.config import get_config

    config = get_config()
    logger.info("Configuration loaded", log_level=config.logging.level, seed=config.dice.seed)
"""

import sys
import threading
from functools import lru_cache
from os import getenv

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import AppConfig

__all__ = ["get_config", "reset_config", "AppConfig"]

_config_instance = None
_config_lock = threading.Lock()


def _is_test_mode() -> bool:
    """
    Detect if running in test environment.

    Returns:
        bool: True if running under pytest, False otherwise
    """
    if "pytest" in sys.modules:
        return True
    return bool(getenv("PYTEST_CURRENT_TEST"))


def _create_config_instance() -> AppConfig:
    """
    Create a new AppConfig instance from current environment.

    Raises:
        ConfigurationError: If a setting fails validation
    """
    try:
        return AppConfig()
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": [str(error["msg"]) for error in exc.errors()]},
            user_friendly=f"invalid configuration: {exc.errors()[0]['msg']}",
        ) from exc


@lru_cache(maxsize=1)
def _get_config_cached() -> AppConfig:
    """Production config loader with caching."""
    global _config_instance  # pylint: disable=global-statement
    with _config_lock:
        if _config_instance is None:
            _config_instance = _create_config_instance()
    return _config_instance


def get_config() -> AppConfig:
    """
    Get application configuration (singleton in production, fresh in tests).

    Configuration is loaded from environment variables and .env file.

    Returns:
        AppConfig: The application configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if _is_test_mode():
        return _create_config_instance()
    return _get_config_cached()


def reset_config() -> None:
    """
    Reset the configuration cache.

    Forces the next get_config() call to reload from the environment.
    """
    global _config_instance  # pylint: disable=global-statement
    with _config_lock:
        _get_config_cached.cache_clear()
        _config_instance = None
