"""soap-proxy - a minimal SOAP client.

Exposes the operations declared by a WSDL as method calls:

    >>> from soap_proxy import Service
    >>> service = Service("http://example.com/Service?wsdl")
    >>> service.findById(id=123).to_dict()
"""

from soap_proxy.soap.response import Response
from soap_proxy.soap.service import Service

__version__ = "0.1.0"

__all__ = [
    "Response",
    "Service",
    "__version__",
]
