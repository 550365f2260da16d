"""WSDL module.

This module provides WSDL retrieval and inspection.
"""

from soap_proxy.wsdl.descriptor import NS_WSDL, NS_XSD, WsdlDescriptor

__all__ = [
    "NS_WSDL",
    "NS_XSD",
    "WsdlDescriptor",
]
