"""SOAP module.

This module provides the service proxy, envelope builder and response wrapper.
"""

from soap_proxy.soap.envelope import EnvelopeBuilder
from soap_proxy.soap.response import Response
from soap_proxy.soap.service import Service
from soap_proxy.soap.xml_mapping import AttributeDict

__all__ = [
    "AttributeDict",
    "EnvelopeBuilder",
    "Response",
    "Service",
]
