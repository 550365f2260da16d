"""WSDL descriptor.

Fetches a WSDL 1.1 document once and exposes what the service proxy needs to
build requests:
- operation names (from wsdl:binding, falling back to wsdl:portType)
- targetNamespace
- elements declared inside xs:choice blocks
"""

import logging
import threading
from typing import List, Optional, Protocol
from urllib.parse import SplitResult, urlsplit

from lxml import etree

from soap_proxy.models.http import HttpResponse
from soap_proxy.utils.exceptions import WsdlError

logger = logging.getLogger(__name__)

# WSDL / XML Schema namespaces
NS_WSDL = "http://schemas.xmlsoap.org/wsdl/"
NS_XSD = "http://www.w3.org/2001/XMLSchema"

NAMESPACES = {"wsdl": NS_WSDL, "xs": NS_XSD}


class WsdlTransport(Protocol):
    """Transport capability needed to fetch a WSDL document."""

    def get(self, path: str, headers=None) -> HttpResponse:
        ...


class WsdlDescriptor:
    """Read-only view of a WSDL document.

    The document is fetched on first access of any property and cached.

    Attributes:
        endpoint: Parsed endpoint URI (None when built from a string)

    Example:
        >>> wsdl = WsdlDescriptor("http://example.com/Service?wsdl", transport)
        >>> wsdl.operations
        ['findById', 'findByName']
        >>> wsdl.namespace_uri
        'urn:example'
    """

    def __init__(
        self,
        endpoint: str | SplitResult | None,
        transport: Optional[WsdlTransport] = None
    ) -> None:
        if isinstance(endpoint, str):
            endpoint = urlsplit(endpoint)
        self.endpoint = endpoint
        self._transport = transport
        self._document: Optional[etree._Element] = None
        self._lock = threading.Lock()

    @classmethod
    def from_string(cls, wsdl_xml: str | bytes) -> "WsdlDescriptor":
        """Build a descriptor from a WSDL document already in memory.

        Args:
            wsdl_xml: WSDL document

        Returns:
            Loaded WsdlDescriptor

        Raises:
            WsdlError: If the document is malformed
        """
        descriptor = cls(None)
        descriptor._document = _parse_wsdl(wsdl_xml)
        return descriptor

    @property
    def document(self) -> etree._Element:
        """Root element of the WSDL, fetched on first access."""
        with self._lock:
            if self._document is None:
                self._document = self._fetch()
            return self._document

    @property
    def operations(self) -> List[str]:
        """Operation names declared by the WSDL, in document order."""
        names = self.document.xpath(
            "wsdl:binding/wsdl:operation/@name", namespaces=NAMESPACES
        )
        if not names:
            names = self.document.xpath(
                "wsdl:portType/wsdl:operation/@name", namespaces=NAMESPACES
            )
        return list(dict.fromkeys(str(name) for name in names))

    @property
    def namespace_uri(self) -> str:
        """targetNamespace of the WSDL definitions element.

        Raises:
            WsdlError: If the WSDL declares no targetNamespace
        """
        namespace = self.document.get("targetNamespace")
        if not namespace:
            raise WsdlError("WSDL does not declare a targetNamespace")
        return namespace

    @property
    def choice_elements(self) -> List[str]:
        """Names of schema elements declared inside xs:choice blocks."""
        names = []
        for element in self.document.xpath(
            "//xs:choice//xs:element", namespaces=NAMESPACES
        ):
            name = element.get("name") or element.get("ref", "").rpartition(":")[2]
            if name:
                names.append(name)
        return list(dict.fromkeys(names))

    def _fetch(self) -> etree._Element:
        if self._transport is None or self.endpoint is None:
            raise WsdlError("No endpoint/transport available to fetch the WSDL")

        path = self.endpoint.path or "/"
        if self.endpoint.query:
            path = f"{path}?{self.endpoint.query}"

        logger.info(f"Fetching WSDL from {self.endpoint.geturl()}")
        response = self._transport.get(path)

        if not response.is_success:
            raise WsdlError(
                f"Failed to fetch WSDL from {self.endpoint.geturl()}: "
                f"HTTP {response.status_code}"
            )

        document = _parse_wsdl(response.content)
        logger.debug(f"WSDL loaded (targetNamespace={document.get('targetNamespace')})")
        return document


def _parse_wsdl(wsdl_xml: str | bytes) -> etree._Element:
    if isinstance(wsdl_xml, str):
        wsdl_xml = wsdl_xml.encode("utf-8")
    try:
        root = etree.fromstring(wsdl_xml)
    except etree.XMLSyntaxError as e:
        raise WsdlError(f"Malformed WSDL document: {e}") from e

    if etree.QName(root).localname != "definitions":
        raise WsdlError(
            f"Not a WSDL 1.1 document: root element is '{etree.QName(root).localname}'"
        )
    return root
