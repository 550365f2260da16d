"""Models module.

This module provides data models and dataclasses for the application.
"""

from soap_proxy.models.http import HttpResponse

__all__ = [
    "HttpResponse",
]
