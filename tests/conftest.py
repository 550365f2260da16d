"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from soap_proxy.models.http import HttpResponse


SAMPLE_WSDL = """<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
                  xmlns:xs="http://www.w3.org/2001/XMLSchema"
                  xmlns:tns="urn:example"
                  targetNamespace="urn:example">
  <wsdl:types>
    <xs:schema targetNamespace="urn:example">
      <xs:element name="findById">
        <xs:complexType>
          <xs:sequence>
            <xs:element name="id" type="xs:int"/>
          </xs:sequence>
        </xs:complexType>
      </xs:element>
      <xs:element name="findByContact">
        <xs:complexType>
          <xs:choice>
            <xs:element name="email" type="xs:string"/>
            <xs:element ref="tns:phone"/>
          </xs:choice>
        </xs:complexType>
      </xs:element>
      <xs:element name="phone" type="xs:string"/>
    </xs:schema>
  </wsdl:types>
  <wsdl:portType name="ExamplePortType">
    <wsdl:operation name="findById"/>
    <wsdl:operation name="findByContact"/>
  </wsdl:portType>
  <wsdl:binding name="ExampleBinding" type="tns:ExamplePortType">
    <soap:binding style="document" transport="http://schemas.xmlsoap.org/soap/http"/>
    <wsdl:operation name="findById"><soap:operation soapAction="findById"/></wsdl:operation>
    <wsdl:operation name="findByContact"><soap:operation soapAction="findByContact"/></wsdl:operation>
  </wsdl:binding>
</wsdl:definitions>
"""

ALICE_RESPONSE = "<result><name>Alice</name></result>"


class RecordingTransport:
    """Transport spy recording every call and returning canned responses.

    Attributes:
        get_calls: (path, headers) of each GET
        post_calls: (path, body, headers) of each POST
        response: HttpResponse returned by post()
    """

    def __init__(
        self,
        wsdl: str = SAMPLE_WSDL,
        response: Optional[HttpResponse] = None,
        wsdl_status: int = 200,
    ) -> None:
        self.wsdl = wsdl
        self.wsdl_status = wsdl_status
        self.response = response or HttpResponse.from_text(200, ALICE_RESPONSE)
        self.get_calls: List[tuple] = []
        self.post_calls: List[tuple] = []

    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        self.get_calls.append((path, headers))
        return HttpResponse.from_text(self.wsdl_status, self.wsdl)

    def post(
        self, path: str, body: str, headers: Optional[Dict[str, str]] = None
    ) -> HttpResponse:
        self.post_calls.append((path, body, headers))
        return self.response


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def sample_wsdl() -> str:
    """
    Return a WSDL declaring findById and findByContact in urn:example.

    Returns:
        str: WSDL document.
    """
    return SAMPLE_WSDL


@pytest.fixture
def transport() -> RecordingTransport:
    """
    Return a transport spy serving the sample WSDL.

    Returns:
        RecordingTransport: Spy answering POSTs with the Alice response.
    """
    return RecordingTransport()


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run in an empty working directory without SOAP_PROXY_* variables.

    Returns:
        Path: Temporary working directory.
    """
    for name in ("SOAP_PROXY_WSDL_URL", "SOAP_PROXY_VERIFY_TLS",
                 "SOAP_PROXY_LOG_LEVEL", "SOAP_PROXY_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def transport_factory():
    """
    Return the RecordingTransport class for tests needing custom WSDLs or responses.

    Returns:
        type: RecordingTransport
    """
    return RecordingTransport
