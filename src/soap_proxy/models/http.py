"""HTTP exchange data models.

This module defines the transport-neutral result of one HTTP request, as
returned by HttpTransport and consumed by WsdlDescriptor and Response.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class HttpResponse:
    """Result of a completed HTTP exchange.

    Attributes:
        status_code: HTTP status code
        content: Raw response body bytes
        text: Decoded response body
        headers: Response headers

    Example:
        >>> response = HttpResponse.from_text(200, "<result/>")
        >>> response.is_success
        True
    """

    status_code: int
    content: bytes
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_text(
        cls,
        status_code: int,
        text: str,
        headers: Optional[Dict[str, str]] = None
    ) -> "HttpResponse":
        """Build a response from a decoded body (UTF-8 encoded for content)."""
        return cls(
            status_code=status_code,
            content=text.encode("utf-8"),
            text=text,
            headers=dict(headers or {}),
        )

    @property
    def is_success(self) -> bool:
        """Check if the status code is 2xx.

        Returns:
            True if 200 <= status_code < 300
        """
        return 200 <= self.status_code < 300
