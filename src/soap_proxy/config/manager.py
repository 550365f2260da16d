"""Configuration manager for loading and managing configuration.

This module provides configuration loading from JSON files with environment
variable overrides and validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from soap_proxy.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from soap_proxy.config.schema import Config
from soap_proxy.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "SOAP_PROXY_"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (SOAP_PROXY_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> config.service.wsdl_url
        'http://example.com/Service?wsdl'
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if not config_path.exists():
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Deep copy so callers cannot mutate the defaults
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file must contain a JSON object: {config_path}"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with SOAP_PROXY_ prefix.

    Supported variables: SOAP_PROXY_WSDL_URL, SOAP_PROXY_VERIFY_TLS,
    SOAP_PROXY_LOG_LEVEL, SOAP_PROXY_LOG_FILE.
    """
    if wsdl_url := os.getenv(f"{ENV_PREFIX}WSDL_URL"):
        config_dict.setdefault("service", {})["wsdl_url"] = wsdl_url
        logger.debug("Override: wsdl_url from environment")

    if verify_tls := os.getenv(f"{ENV_PREFIX}VERIFY_TLS"):
        config_dict.setdefault("transport", {})["verify_tls"] = _parse_bool(verify_tls)
        logger.debug("Override: verify_tls from environment")

    if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = log_level
        logger.debug("Override: log_level from environment")

    if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config_dict.setdefault("logging", {})["log_file"] = log_file
        logger.debug("Override: log_file from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


def get_wsdl_url(config: Config, override: Optional[str] = None) -> str:
    """Resolve the WSDL URL, preferring an explicit override.

    Args:
        config: Configuration instance
        override: WSDL URL given on the command line, if any

    Returns:
        WSDL URL string

    Raises:
        ConfigurationError: If neither override nor config provides a URL

    Example:
        >>> config = load_config()
        >>> wsdl_url = get_wsdl_url(config)
    """
    wsdl_url = override or config.service.wsdl_url
    if not wsdl_url:
        raise ConfigurationError(
            "No WSDL URL given. Pass it on the command line, set service.wsdl_url "
            f"in the config file, or set {ENV_PREFIX}WSDL_URL."
        )
    return wsdl_url
