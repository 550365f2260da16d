"""SOAP response wrapper.

Wraps one completed HTTP exchange and offers text, mapping and
attribute-mapping views of its body. XML parsing happens on the first
structured access, never at construction.
"""

import logging
from typing import Any, Mapping, Optional

from lxml import etree

from soap_proxy.models.http import HttpResponse
from soap_proxy.soap.xml_mapping import (
    document_to_dict,
    element_value,
    to_attribute_dict,
)
from soap_proxy.utils.exceptions import MalformedResponseError, ValidationError

logger = logging.getLogger(__name__)


class Response:
    """Result of a SOAP operation call.

    Example:
        >>> response = service.findById(id=123)
        >>> response.text
        '<result><name>Alice</name></result>'
        >>> response.to_dict()
        {'result': {'name': 'Alice'}}
        >>> response.to_dict("/result/name")
        'Alice'
        >>> response.to_attr_dict().result.name
        'Alice'
    """

    def __init__(self, http_response: HttpResponse) -> None:
        self._http_response = http_response
        self._document: Optional[etree._Element] = None

    @property
    def http_response(self) -> HttpResponse:
        """Underlying HTTP exchange."""
        return self._http_response

    @property
    def status_code(self) -> int:
        """HTTP status code of the response."""
        return self._http_response.status_code

    @property
    def text(self) -> str:
        """Raw response body, unchanged."""
        return self._http_response.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"

    def to_dict(
        self,
        xpath: Optional[str] = None,
        namespaces: Optional[Mapping[str, str]] = None
    ) -> Any:
        """Parse the body into a nested mapping.

        Args:
            xpath: Optional XPath selecting the root node(s) of the result.
                When omitted the whole document is returned as
                {root_name: value}.
            namespaces: Prefix to URI mapping used by the XPath expression

        Returns:
            Without xpath: dict keyed by the document root's local name.
            With xpath: value of the single matching element, a list for
            several matches, the raw result for string/number expressions,
            or None when nothing matches.

        Raises:
            MalformedResponseError: If the body is not well-formed XML
            ValidationError: If the XPath expression is invalid
        """
        document = self._parse()
        if xpath is None:
            return document_to_dict(document)

        try:
            result = document.xpath(xpath, namespaces=dict(namespaces or {}))
        except etree.XPathError as e:
            raise ValidationError(f"Invalid XPath expression '{xpath}': {e}") from e

        if not isinstance(result, list):
            return result

        values = [
            element_value(node) if isinstance(node, etree._Element) else str(node)
            for node in result
        ]
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return values

    def to_attr_dict(
        self,
        xpath: Optional[str] = None,
        namespaces: Optional[Mapping[str, str]] = None
    ) -> Any:
        """Same as to_dict, with mappings supporting attribute access.

        Raises:
            MalformedResponseError: If the body is not well-formed XML
            ValidationError: If the XPath expression is invalid
        """
        return to_attribute_dict(self.to_dict(xpath, namespaces))

    def _parse(self) -> etree._Element:
        if self._document is None:
            try:
                self._document = etree.fromstring(self._http_response.content)
            except etree.XMLSyntaxError as e:
                logger.debug(f"Response body is not well-formed XML: {e}")
                raise MalformedResponseError(
                    f"Response body is not well-formed XML: {e}",
                    raw_response=self.text,
                ) from e
        return self._document
