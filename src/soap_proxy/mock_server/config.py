"""Configuration management for the mock SOAP server."""

from pydantic import BaseModel, Field, field_validator


class MockServerConfig(BaseModel):
    """Mock SOAP server configuration.

    Attributes:
        host: Server host address
        http_port: HTTP server port
        service_path: Path serving both the WSDL (GET ?wsdl) and SOAP calls (POST)
        namespace: targetNamespace declared by the served WSDL
        log_level: Log level for the mock server logger
    """

    host: str = Field(default="127.0.0.1", description="Server host address")
    http_port: int = Field(default=8080, description="HTTP server port")
    service_path: str = Field(default="/Service", description="SOAP service path")
    namespace: str = Field(default="urn:example", description="WSDL targetNamespace")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("http_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v

    @field_validator("service_path")
    @classmethod
    def validate_service_path(cls, v: str) -> str:
        """Validate service path is absolute."""
        if not v.startswith("/"):
            raise ValueError(f"Service path must start with '/', got {v}")
        return v

    @property
    def base_url(self) -> str:
        """URL of the service endpoint."""
        return f"http://{self.host}:{self.http_port}{self.service_path}"

    @property
    def wsdl_url(self) -> str:
        """URL of the served WSDL."""
        return f"{self.base_url}?wsdl"
