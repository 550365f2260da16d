"""SOAP service proxy.

This module provides Service, a client that exposes the operations declared
by a WSDL as method calls:

    service = Service("http://example.com/ExampleService?wsdl")
    response = service.findExampleById(id=123)

    service.wsdl.operations
    # ['findExampleById', 'findExampleByName']

    response.text                    # raw XML
    response.to_dict()               # nested dict
    response.to_dict("//item")       # dict rooted at an XPath
    response.to_attr_dict()          # attribute-accessible dict
"""

import functools
import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlsplit

from soap_proxy.soap.envelope import EnvelopeBuilder
from soap_proxy.soap.response import Response
from soap_proxy.transport.http_client import HttpTransport
from soap_proxy.utils.exceptions import InvalidEndpointError, UnknownOperationError
from soap_proxy.wsdl.descriptor import WsdlDescriptor

if TYPE_CHECKING:
    from soap_proxy.config.schema import Config

CONTENT_TYPE = "text/xml; charset=utf-8"
NODE_NAMESPACE = "wsdl"


class Service:
    """Proxy for a SOAP service described by a WSDL.

    Any public attribute that is not defined on the class resolves to a
    callable invoking the remote operation of the same name.

    Attributes:
        endpoint: Parsed WSDL endpoint URI
        logger: Logger receiving request/response details

    Example:
        >>> service = Service("http://example.com/Service?wsdl")
        >>> response = service.invoke("findById", {"id": 123})
        >>> response = service.findById(id=123)
        >>> response.to_dict()
        {'result': {'name': 'Alice'}}
    """

    def __init__(
        self,
        endpoint: str,
        transport: Optional[Any] = None,
        logger: Optional[logging.Logger] = None,
        verify_tls: bool = True
    ) -> None:
        """Bind the proxy to a WSDL endpoint.

        No network I/O happens here and the endpoint is not validated; an
        endpoint without a scheme fails on first network use.

        Args:
            endpoint: WSDL endpoint URI (e.g. http://host/Service?wsdl)
            transport: Transport handle with get()/post(); an HttpTransport
                for the endpoint's host is created lazily when omitted
            logger: Logger for request/response details (module logger
                when omitted)
            verify_tls: Whether the default transport verifies TLS certificates
        """
        self.endpoint = urlsplit(endpoint)
        self.logger = logger or logging.getLogger(__name__)
        self._verify_tls = verify_tls
        self._transport = transport
        self._wsdl: Optional[WsdlDescriptor] = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: "Config", **kwargs: Any) -> "Service":
        """Create a Service from loaded configuration.

        Args:
            config: Configuration with service.wsdl_url set
            **kwargs: Extra keyword arguments for the constructor

        Raises:
            InvalidEndpointError: If no WSDL URL is configured
        """
        if not config.service.wsdl_url:
            raise InvalidEndpointError(
                "No WSDL URL configured. Set service.wsdl_url in the config file "
                "or the SOAP_PROXY_WSDL_URL environment variable."
            )
        kwargs.setdefault("verify_tls", config.transport.verify_tls)
        return cls(config.service.wsdl_url, **kwargs)

    @property
    def transport(self) -> Any:
        """Transport handle, created from the endpoint on first use.

        Raises:
            InvalidEndpointError: If the endpoint has no URI scheme or an
                unparseable port
        """
        with self._lock:
            if self._transport is None:
                if not self.endpoint.scheme:
                    raise InvalidEndpointError(
                        f"Invalid endpoint URI: {self.endpoint.geturl()}"
                    )
                try:
                    port = self.endpoint.port
                except ValueError as e:
                    raise InvalidEndpointError(
                        f"Invalid endpoint URI: {self.endpoint.geturl()}: {e}"
                    ) from e
                self._transport = HttpTransport(
                    self.endpoint.hostname or "",
                    port,
                    self.endpoint.scheme,
                    verify_tls=self._verify_tls,
                )
            return self._transport

    @transport.setter
    def transport(self, transport: Any) -> None:
        self._transport = transport

    @property
    def wsdl(self) -> WsdlDescriptor:
        """WSDL descriptor, created on first access and cached."""
        with self._lock:
            if self._wsdl is None:
                self._wsdl = WsdlDescriptor(self.endpoint, self.transport)
            return self._wsdl

    @property
    def operations(self) -> list[str]:
        """Operation names declared by the WSDL."""
        return self.wsdl.operations

    def invoke(
        self,
        operation: str,
        arguments: Optional[Mapping[str, Any]] = None
    ) -> Response:
        """Call a remote operation.

        Args:
            operation: Operation name, as declared by the WSDL
            arguments: Mapping of argument names to values (nested
                mappings and lists allowed)

        Returns:
            Response wrapping the HTTP result, whatever its status code

        Raises:
            UnknownOperationError: If the WSDL does not declare the operation.
                No request is sent.
            InvalidEndpointError: If the endpoint has no URI scheme
            TransportError: If the HTTP request fails at network level
            WsdlError: If the WSDL cannot be fetched or parsed
        """
        arguments = dict(arguments or {})
        self._validate_operation(operation)
        return self._call_service(operation, arguments)

    def __getattr__(self, name: str) -> Callable[..., Response]:
        if name.startswith("_"):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return functools.partial(_dispatch, self, name)

    def __repr__(self) -> str:
        return f"<Service {self.endpoint.geturl()}>"

    def _validate_operation(self, operation: str) -> None:
        operations = self.wsdl.operations
        if operation not in operations:
            raise UnknownOperationError(operation, operations)

    def _call_service(self, operation: str, arguments: Dict[str, Any]) -> Response:
        headers = {"Content-Type": CONTENT_TYPE, "SOAPAction": operation}

        builder = EnvelopeBuilder(
            nodes_to_namespace=self.wsdl.choice_elements,
            node_namespace=NODE_NAMESPACE,
        )
        body = builder.build(self.wsdl.namespace_uri, operation, arguments)

        self.logger.info(f"Request: {self.endpoint.geturl()}")
        self.logger.debug("\n".join(f"{key}: {value}" for key, value in headers.items()))
        self.logger.debug(body)

        http_response = self.transport.post(self.endpoint.path or "/", body, headers)

        self.logger.info(f"Response (Status {http_response.status_code}):")
        self.logger.debug(http_response.text)

        return Response(http_response)


def _dispatch(service: Service, operation: str, *args: Any, **kwargs: Any) -> Response:
    # service.op({"id": 1}) and service.op(id=1) are equivalent; both may be combined
    if len(args) > 1:
        raise TypeError(
            f"{operation}() takes at most 1 positional argument ({len(args)} given)"
        )
    arguments = dict(args[0] or {}) if args else {}
    arguments.update(kwargs)
    return service.invoke(operation, arguments)
