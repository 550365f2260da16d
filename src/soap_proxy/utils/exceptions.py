"""Custom exception classes for soap-proxy.

All exceptions inherit from SoapProxyError to allow catching all custom exceptions.
"""


class SoapProxyError(Exception):
    """Base exception for all soap-proxy custom exceptions."""

    pass


class ValidationError(SoapProxyError):
    """Raised when caller-supplied data fails validation.

    Examples:
        - Argument keys that are not valid XML element names
        - Invalid XPath expressions
    """

    pass


class InvalidEndpointError(ValidationError):
    """Raised when the endpoint URI cannot be used for network calls.

    Raised lazily, when the default transport is first constructed, not when
    the Service is created.

    Examples:
        - Endpoint without a URI scheme ("example.com/Service?wsdl")
    """

    pass


class UnknownOperationError(ValidationError):
    """Raised when an operation is not declared by the WSDL.

    Raised before any request for the operation is sent.

    Attributes:
        operation: Requested operation name
        available: Operation names declared by the WSDL
    """

    def __init__(self, operation: str, available: list[str]) -> None:
        self.operation = operation
        self.available = list(available)
        super().__init__(
            f"Invalid service method '{operation}'. "
            f"Available operations: {', '.join(self.available) or 'none'}"
        )


class TransportError(SoapProxyError):
    """Raised when network/transport issues occur.

    The underlying requests exception is chained as __cause__.

    Examples:
        - Connection refused
        - Network unreachable
        - TLS handshake failure
    """

    pass


class WsdlError(SoapProxyError):
    """Raised when the WSDL document cannot be fetched or understood.

    Examples:
        - Non-2xx status when fetching the WSDL
        - Malformed WSDL XML
        - Missing targetNamespace
    """

    pass


class MalformedResponseError(SoapProxyError):
    """Raised when a response body cannot be parsed as XML.

    Only raised by the structured accessors of Response, never by
    Response.text.

    Attributes:
        raw_response: Response body that failed to parse
    """

    def __init__(self, message: str, raw_response: str | None = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class ConfigurationError(SoapProxyError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Invalid WSDL URL in configuration
    """

    pass
