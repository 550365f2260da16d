"""Config module.

This module provides configuration management functionality.
"""

from soap_proxy.config.manager import get_wsdl_url, load_config
from soap_proxy.config.schema import (
    Config,
    LoggingConfig,
    ServiceConfig,
    TransportConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_wsdl_url",
    # Configuration models
    "Config",
    "LoggingConfig",
    "ServiceConfig",
    "TransportConfig",
]
