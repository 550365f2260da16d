"""Integration tests for Service against the mock SOAP server."""

import json
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from soap_proxy import Service
from soap_proxy.cli.main import cli
from soap_proxy.utils.exceptions import (
    InvalidEndpointError,
    TransportError,
    UnknownOperationError,
    WsdlError,
)


pytestmark = pytest.mark.integration


class TestServiceAgainstMockServer:
    """End-to-end calls over HTTP."""

    def test_operations(self, mock_server):
        """Test that operations are read from the served WSDL."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act & Assert
        assert service.operations == ["findById", "echo", "ping"]
        assert service.wsdl.namespace_uri == "urn:example"

    def test_find_by_id(self, mock_server):
        """Test a lookup returning a record."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act
        response = service.findById(id=123)

        # Assert
        assert response.status_code == 200
        assert response.to_dict("//return") == {"id": "123", "name": "Alice"}
        assert response.to_attr_dict("//return").name == "Alice"

    def test_find_by_choice_element(self, mock_server):
        """Test that the namespace-qualified choice member reaches the server."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act
        response = service.invoke("findById", {"name": "Bob"})

        # Assert
        assert response.to_dict("//return/id") == "456"

    def test_fault_returned_as_response(self, mock_server):
        """Test that SOAP faults come back as HTTP 500 responses."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act
        response = service.findById(id=999)

        # Assert
        assert response.status_code == 500
        assert response.to_dict("//faultstring") == "No matching record found"

    def test_echo_round_trip(self, mock_server):
        """Test nested and repeated arguments."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act
        response = service.echo(user={"name": "Alice", "tags": ["a", "b"]}, active=True)

        # Assert
        assert response.to_dict("//return") == {
            "user": {"name": "Alice", "tags": ["a", "b"]},
            "active": "true",
        }

    def test_unknown_operation(self, mock_server):
        """Test that undeclared operations fail locally."""
        # Arrange
        service = Service(mock_server.wsdl_url)

        # Act & Assert
        with pytest.raises(UnknownOperationError):
            service.dropTables()

    def test_logs_request_and_status(self, mock_server, caplog):
        """Test that the endpoint and status code are logged."""
        # Arrange
        caplog.set_level(logging.DEBUG, logger="soap_proxy")
        service = Service(mock_server.wsdl_url)

        # Act
        service.ping()

        # Assert
        assert f"Request: {mock_server.wsdl_url}" in caplog.text
        assert "Response (Status 200):" in caplog.text
        assert "<return>pong</return>" in caplog.text

    def test_wrong_path_raises_wsdl_error(self, mock_server):
        """Test that a missing WSDL surfaces as WsdlError."""
        # Arrange
        service = Service(
            f"http://{mock_server.host}:{mock_server.http_port}/Missing?wsdl"
        )

        # Act & Assert
        with pytest.raises(WsdlError, match="HTTP 404"):
            service.operations


class TestServiceFailures:
    """Failures without a reachable WSDL."""

    def test_connection_refused(self, unused_port):
        """Test that an unreachable host raises TransportError."""
        # Arrange
        service = Service(f"http://127.0.0.1:{unused_port}/Service?wsdl")

        # Act & Assert
        with pytest.raises(TransportError, match="GET http://127.0.0.1"):
            service.findById(id=1)

    def test_endpoint_without_scheme(self):
        """Test that a scheme-less endpoint fails on first call."""
        # Arrange
        service = Service("127.0.0.1/Service?wsdl")

        # Act & Assert
        with pytest.raises(InvalidEndpointError):
            service.findById(id=1)


class TestCliAgainstMockServer:
    """CLI commands over HTTP."""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self, isolated_env):
        with patch("soap_proxy.cli.main.configure_logging"):
            yield

    def test_operations_command(self, mock_server):
        """Test listing operations from the live WSDL."""
        # Arrange
        runner = CliRunner()

        # Act
        result = runner.invoke(cli, ["operations", mock_server.wsdl_url])

        # Assert
        assert result.exit_code == 0
        assert "Operations (3):" in result.output
        assert "  ping" in result.output

    def test_call_command(self, mock_server):
        """Test calling an operation and printing the mapping."""
        # Arrange
        runner = CliRunner()

        # Act
        result = runner.invoke(
            cli,
            [
                "call", "findById",
                "--wsdl", mock_server.wsdl_url,
                "-a", "id=123",
                "--format", "dict",
                "--xpath", "//return/name",
            ],
        )

        # Assert
        assert result.exit_code == 0
        assert json.loads(result.output) == "Alice"
