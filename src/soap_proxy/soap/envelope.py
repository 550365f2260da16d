"""SOAP 1.1 envelope construction.

Builds request envelopes from an operation name and a mapping of arguments
using lxml. Argument keys become element names; keys listed in
nodes_to_namespace are qualified with the operation namespace.
"""

from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from lxml import etree

from soap_proxy.utils.exceptions import ValidationError

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENV_PREFIX = "env"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class EnvelopeBuilder:
    """Builds SOAP 1.1 request envelopes.

    Attributes:
        nodes_to_namespace: Argument keys to qualify with the operation namespace
        node_namespace: Prefix bound to the operation namespace

    Example:
        >>> builder = EnvelopeBuilder(nodes_to_namespace=["name"])
        >>> builder.build("urn:example", "findById", {"id": 123})
        '<?xml version="1.0" encoding="UTF-8"?>\\n<env:Envelope ...'
    """

    def __init__(
        self,
        nodes_to_namespace: Iterable[str] = (),
        node_namespace: str = "wsdl"
    ) -> None:
        self.nodes_to_namespace = frozenset(nodes_to_namespace)
        self.node_namespace = node_namespace

    def build(
        self,
        namespace_uri: str,
        operation: str,
        arguments: Optional[Mapping[str, Any]] = None
    ) -> str:
        """Build a SOAP envelope for one operation call.

        The body contains a single element <prefix:operation> declaring
        xmlns:prefix="namespace_uri", with one child per argument.

        Args:
            namespace_uri: Target namespace of the service
            operation: Operation name
            arguments: Argument mapping (nested mappings and lists allowed)

        Returns:
            Envelope XML string with XML declaration

        Raises:
            ValidationError: If an argument key is not a valid XML name
        """
        envelope = etree.Element(
            f"{{{SOAP_ENV_NS}}}Envelope", nsmap={SOAP_ENV_PREFIX: SOAP_ENV_NS}
        )
        body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
        operation_element = etree.SubElement(
            body,
            self._tag(namespace_uri, operation),
            nsmap={self.node_namespace: namespace_uri},
        )

        self._append_children(operation_element, namespace_uri, arguments or {})

        return XML_DECLARATION + etree.tostring(envelope, encoding="unicode")

    def _append_children(
        self,
        parent: etree._Element,
        namespace_uri: str,
        arguments: Mapping[str, Any]
    ) -> None:
        for key, value in arguments.items():
            tag = str(key)
            if tag in self.nodes_to_namespace:
                tag = self._tag(namespace_uri, tag)

            # Lists become repeated sibling elements
            values = value if isinstance(value, (list, tuple)) else [value]
            for item in values:
                self._append_value(parent, tag, namespace_uri, item)

    def _append_value(
        self,
        parent: etree._Element,
        tag: str,
        namespace_uri: str,
        value: Any
    ) -> None:
        try:
            element = etree.SubElement(parent, tag)
        except ValueError as e:
            raise ValidationError(f"Invalid argument name '{tag}': {e}") from e

        if isinstance(value, Mapping):
            self._append_children(element, namespace_uri, value)
        elif value is not None:
            try:
                element.text = _format_value(value)
            except ValueError as e:
                raise ValidationError(f"Invalid value for '{tag}': {e}") from e

    @staticmethod
    def _tag(namespace_uri: str, name: str) -> str:
        return f"{{{namespace_uri}}}{name}"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
