"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "service": {
        # No default service - must be given in config, environment or CLI
        "wsdl_url": None,
    },
    "transport": {
        # Verify TLS certificates by default for security
        "verify_tls": True,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/soap-proxy.log",
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
