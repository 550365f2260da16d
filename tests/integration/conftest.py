"""Integration test fixtures and configuration.

This module provides fixtures for integration tests, including a mock SOAP
service running in a background thread for tests that need real HTTP.
"""

import logging
import socket
import threading
import time
from typing import Iterator

import pytest
import requests

from soap_proxy.mock_server.app import make_mock_server
from soap_proxy.mock_server.config import MockServerConfig


logger = logging.getLogger(__name__)


def find_free_port() -> int:
    """Find an available port on localhost.

    Returns:
        int: An available port number.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen(1)
        port = s.getsockname()[1]
    return port


def wait_for_server(url: str, timeout: float = 10.0, interval: float = 0.1) -> bool:
    """Wait for server to become available.

    Args:
        url: URL to check (e.g., health endpoint).
        timeout: Maximum time to wait in seconds.
        interval: Time between checks in seconds.

    Returns:
        bool: True if server is available, False if timeout.
    """
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            if requests.get(url, timeout=1).status_code == 200:
                return True
        except requests.RequestException:
            pass
        time.sleep(interval)
    return False


@pytest.fixture(scope="module")
def mock_server_config() -> MockServerConfig:
    """Mock server configuration on a free port."""
    return MockServerConfig(host="127.0.0.1", http_port=find_free_port())


@pytest.fixture(scope="module")
def mock_server(mock_server_config: MockServerConfig) -> Iterator[MockServerConfig]:
    """Start the mock SOAP service in a background thread.

    Yields:
        MockServerConfig: Configuration of the running server.
    """
    server = make_mock_server(mock_server_config)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    health_url = f"http://{mock_server_config.host}:{mock_server_config.http_port}/health"
    if not wait_for_server(health_url):
        server.shutdown()
        pytest.fail(f"Mock server did not start on port {mock_server_config.http_port}")

    logger.info(f"Mock server running at {mock_server_config.base_url}")
    yield mock_server_config

    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def unused_port() -> int:
    """A port with nothing listening on it."""
    return find_free_port()
