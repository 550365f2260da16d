"""HTTP transport for SOAP requests and WSDL retrieval.

This module provides a thin wrapper around a requests session bound to a
single scheme/host/port. It performs exactly one round-trip per call: no
retries, no timeouts and no connection-pool tuning are configured. Bodies whose
Content-Type carries no charset are decoded the way an XML parser would.
"""

import logging
import re
import ssl
from typing import Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

from soap_proxy.models.http import HttpResponse
from soap_proxy.utils.exceptions import InvalidEndpointError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}

XML_ENCODING_DECLARATION = re.compile(
    rb"\s*<\?xml[^>]*?encoding\s*=\s*[\"']([A-Za-z][A-Za-z0-9._-]*)[\"']"
)


class TLS12Adapter(HTTPAdapter):
    """Force TLS 1.2+ for HTTPS connections.

    Example:
        >>> session = requests.Session()
        >>> session.mount('https://', TLS12Adapter())
    """

    def init_poolmanager(self, *args, **kwargs):
        context = create_urllib3_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        kwargs['ssl_context'] = context
        return super().init_poolmanager(*args, **kwargs)


class HttpTransport:
    """HTTP transport bound to one host.

    Attributes:
        scheme: URI scheme (http or https)
        host: Host name
        port: Port number
        session: requests session used for all calls

    Example:
        >>> transport = HttpTransport("example.com", 80)
        >>> response = transport.post("/Service", body, {"SOAPAction": "findById"})
        >>> response.status_code
        200
    """

    def __init__(
        self,
        host: str,
        port: Optional[int] = None,
        scheme: str = "http",
        verify_tls: bool = True
    ) -> None:
        """Initialize transport.

        Args:
            host: Host name to connect to
            port: Port number (scheme default if not provided)
            scheme: http or https
            verify_tls: Whether to verify TLS certificates

        Raises:
            InvalidEndpointError: If scheme is not http/https or host is empty
        """
        scheme = (scheme or "").lower()
        if scheme not in DEFAULT_PORTS:
            raise InvalidEndpointError(
                f"Unsupported URI scheme: '{scheme}'. Must be http or https"
            )
        if not host:
            raise InvalidEndpointError("Invalid endpoint URI: missing host")

        self.scheme = scheme
        self.host = host
        self.port = port or DEFAULT_PORTS[scheme]

        self.session = requests.Session()
        self.session.mount('https://', TLS12Adapter())
        self.session.verify = verify_tls

        if not verify_tls:
            logger.warning(
                "TLS certificate verification is DISABLED. "
                "This should only be used for development with self-signed certificates."
            )

        logger.debug(f"HTTP transport created for {self.base_url}")

    @classmethod
    def from_url(cls, url: str, verify_tls: bool = True) -> "HttpTransport":
        """Create a transport for the scheme/host/port of a URL.

        Args:
            url: Any URL on the target host
            verify_tls: Whether to verify TLS certificates

        Returns:
            HttpTransport bound to the URL's host

        Raises:
            InvalidEndpointError: If the URL has no scheme or host
        """
        parts = urlsplit(url)
        if not parts.scheme:
            raise InvalidEndpointError(f"Invalid endpoint URI: {url}")
        try:
            port = parts.port
        except ValueError as e:
            raise InvalidEndpointError(f"Invalid endpoint URI: {url}: {e}") from e
        return cls(parts.hostname or "", port, parts.scheme, verify_tls)

    @property
    def base_url(self) -> str:
        """Scheme, host and port as a URL prefix."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"

    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        """Perform an HTTP GET.

        Args:
            path: Request path including any query string
            headers: Optional request headers

        Returns:
            HttpResponse with status code and body

        Raises:
            TransportError: On any network-level failure
        """
        return self._request("GET", path, headers=headers)

    def post(
        self,
        path: str,
        body: str,
        headers: Optional[Dict[str, str]] = None
    ) -> HttpResponse:
        """Perform an HTTP POST with a UTF-8 encoded body.

        Args:
            path: Request path
            body: Request body
            headers: Optional request headers

        Returns:
            HttpResponse with status code and body. Non-2xx responses are
            returned, not raised.

        Raises:
            TransportError: On any network-level failure
        """
        return self._request("POST", path, data=body.encode("utf-8"), headers=headers)

    def _request(self, method: str, path: str, **kwargs) -> HttpResponse:
        url = f"{self.base_url}{path or '/'}"
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = _xml_encoding(response.content)

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            text=response.text,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying session and release connections."""
        self.session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _xml_encoding(content: bytes) -> str:
    # XML is UTF-8 unless its declaration names another encoding
    match = XML_ENCODING_DECLARATION.match(content)
    return match.group(1).decode("ascii") if match else "utf-8"
