"""Utilities module.

This module provides the exception hierarchy shared across the package.
"""

from soap_proxy.utils.exceptions import (
    ConfigurationError,
    InvalidEndpointError,
    MalformedResponseError,
    SoapProxyError,
    TransportError,
    UnknownOperationError,
    ValidationError,
    WsdlError,
)

__all__ = [
    "ConfigurationError",
    "InvalidEndpointError",
    "MalformedResponseError",
    "SoapProxyError",
    "TransportError",
    "UnknownOperationError",
    "ValidationError",
    "WsdlError",
]
