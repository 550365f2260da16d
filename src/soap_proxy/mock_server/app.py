"""Flask application for a mock SOAP service.

Serves a WSDL at GET <service_path>?wsdl and answers SOAP 1.1 calls at
POST <service_path>, dispatching on the SOAPAction header:

- findById: looks up a person by <id> or <name>; SOAP fault when not found
- echo: returns the request arguments unchanged
- ping: returns "pong"

Unknown actions get a SOAP fault with HTTP 500.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from flask import Flask, Response, jsonify, request
from lxml import etree
from werkzeug.serving import make_server

from soap_proxy.mock_server.config import MockServerConfig

logger = logging.getLogger("soap_proxy.mock_server")

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"

PEOPLE: Dict[str, str] = {
    "123": "Alice",
    "456": "Bob",
}

WSDL_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
                  xmlns:xs="http://www.w3.org/2001/XMLSchema"
                  xmlns:tns="{namespace}"
                  name="MockService"
                  targetNamespace="{namespace}">
  <wsdl:types>
    <xs:schema targetNamespace="{namespace}" elementFormDefault="unqualified">
      <xs:element name="findById">
        <xs:complexType>
          <xs:choice>
            <xs:element name="id" type="xs:string"/>
            <xs:element name="name" type="xs:string"/>
          </xs:choice>
        </xs:complexType>
      </xs:element>
      <xs:element name="echo">
        <xs:complexType>
          <xs:sequence>
            <xs:any minOccurs="0" maxOccurs="unbounded" processContents="skip"/>
          </xs:sequence>
        </xs:complexType>
      </xs:element>
      <xs:element name="ping">
        <xs:complexType/>
      </xs:element>
    </xs:schema>
  </wsdl:types>
  <wsdl:message name="findByIdRequest"><wsdl:part name="parameters" element="tns:findById"/></wsdl:message>
  <wsdl:message name="echoRequest"><wsdl:part name="parameters" element="tns:echo"/></wsdl:message>
  <wsdl:message name="pingRequest"><wsdl:part name="parameters" element="tns:ping"/></wsdl:message>
  <wsdl:portType name="MockPortType">
    <wsdl:operation name="findById"><wsdl:input message="tns:findByIdRequest"/></wsdl:operation>
    <wsdl:operation name="echo"><wsdl:input message="tns:echoRequest"/></wsdl:operation>
    <wsdl:operation name="ping"><wsdl:input message="tns:pingRequest"/></wsdl:operation>
  </wsdl:portType>
  <wsdl:binding name="MockBinding" type="tns:MockPortType">
    <soap:binding style="document" transport="http://schemas.xmlsoap.org/soap/http"/>
    <wsdl:operation name="findById"><soap:operation soapAction="findById"/></wsdl:operation>
    <wsdl:operation name="echo"><soap:operation soapAction="echo"/></wsdl:operation>
    <wsdl:operation name="ping"><soap:operation soapAction="ping"/></wsdl:operation>
  </wsdl:binding>
  <wsdl:service name="MockService">
    <wsdl:port name="MockPort" binding="tns:MockBinding">
      <soap:address location="{location}"/>
    </wsdl:port>
  </wsdl:service>
</wsdl:definitions>
"""


def generate_soap_fault(
    faultcode: str,
    faultstring: str,
    http_status: int = 500
) -> tuple[Response, int]:
    """Generate SOAP 1.1 fault response.

    Args:
        faultcode: SOAP fault code (e.g., 'soap:Client', 'soap:Server')
        faultstring: Human-readable fault description
        http_status: HTTP status code (default: 500)

    Returns:
        Tuple of (Response object, HTTP status code)
    """
    envelope = etree.Element(f"{{{SOAP_ENV_NS}}}Envelope", nsmap={"soap": SOAP_ENV_NS})
    body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    fault = etree.SubElement(body, f"{{{SOAP_ENV_NS}}}Fault")
    etree.SubElement(fault, "faultcode").text = faultcode
    etree.SubElement(fault, "faultstring").text = faultstring

    logger.warning(f"SOAP Fault generated: {faultcode} - {faultstring}")

    response = Response(
        etree.tostring(envelope, xml_declaration=True, encoding="UTF-8"),
        mimetype="text/xml",
    )
    return response, http_status


def _soap_response(namespace: str, operation: str, result: etree._Element) -> Response:
    envelope = etree.Element(f"{{{SOAP_ENV_NS}}}Envelope", nsmap={"soap": SOAP_ENV_NS})
    body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    wrapper = etree.SubElement(
        body, f"{{{namespace}}}{operation}Response", nsmap={"tns": namespace}
    )
    wrapper.append(result)
    return Response(
        etree.tostring(envelope, xml_declaration=True, encoding="UTF-8"),
        mimetype="text/xml",
    )


def _find_by_id(arguments: etree._Element) -> Optional[etree._Element]:
    person_id = arguments.findtext("{*}id")
    name = arguments.findtext("{*}name")

    if person_id is None and name is not None:
        person_id = next((key for key, value in PEOPLE.items() if value == name), None)
    if person_id not in PEOPLE:
        return None

    result = etree.Element("return")
    etree.SubElement(result, "id").text = person_id
    etree.SubElement(result, "name").text = PEOPLE[person_id]
    return result


def _echo(arguments: etree._Element) -> etree._Element:
    result = etree.Element("return")
    for child in arguments:
        result.append(child)
    return result


def _ping(arguments: etree._Element) -> etree._Element:
    result = etree.Element("return")
    result.text = "pong"
    return result


OPERATIONS: Dict[str, Callable[[etree._Element], Optional[etree._Element]]] = {
    "findById": _find_by_id,
    "echo": _echo,
    "ping": _ping,
}


def create_app(config: Optional[MockServerConfig] = None) -> Flask:
    """Create the mock SOAP service Flask application.

    Args:
        config: Mock server configuration (defaults when omitted)

    Returns:
        Configured Flask application
    """
    config = config or MockServerConfig()
    logger.setLevel(config.log_level)

    app = Flask(__name__)
    app.config["MOCK_SERVER"] = config
    app.config["REQUEST_COUNT"] = 0
    started = datetime.now(timezone.utc)

    @app.before_request
    def log_request():
        app.config["REQUEST_COUNT"] += 1
        logger.info(
            f"Request #{app.config['REQUEST_COUNT']}: {request.method} {request.full_path}"
        )
        if request.data and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Request body: {request.get_data(as_text=True)}")

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({
            "status": "healthy",
            "service_path": config.service_path,
            "operations": list(OPERATIONS),
            "request_count": app.config["REQUEST_COUNT"],
            "uptime_seconds": int((datetime.now(timezone.utc) - started).total_seconds()),
        }), 200

    @app.route(config.service_path, methods=["GET"])
    def wsdl():
        if "wsdl" not in request.args:
            return generate_soap_fault(
                "soap:Client", "Append ?wsdl to retrieve the service description", 404
            )
        location = f"{request.host_url.rstrip('/')}{config.service_path}"
        return Response(
            WSDL_TEMPLATE.format(namespace=config.namespace, location=location),
            mimetype="text/xml",
        )

    @app.route(config.service_path, methods=["POST"])
    def soap_call():
        action = request.headers.get("SOAPAction", "").strip('"')
        handler = OPERATIONS.get(action)
        if handler is None:
            return generate_soap_fault("soap:Client", f"Unknown operation '{action}'")

        try:
            envelope = etree.fromstring(request.get_data())
        except etree.XMLSyntaxError as e:
            return generate_soap_fault("soap:Client", f"Malformed request: {e}", 400)

        arguments = envelope.find(f"{{{SOAP_ENV_NS}}}Body/{{{config.namespace}}}{action}")
        if arguments is None:
            return generate_soap_fault(
                "soap:Client", f"Body does not contain {{{config.namespace}}}{action}", 400
            )

        result = handler(arguments)
        if result is None:
            return generate_soap_fault("soap:Server", "No matching record found")
        return _soap_response(config.namespace, action, result)

    return app


def make_mock_server(config: MockServerConfig):
    """Create a WSGI server for the mock app without starting it.

    Returns:
        werkzeug BaseWSGIServer; call serve_forever() / shutdown()
    """
    return make_server(config.host, config.http_port, create_app(config), threaded=True)


def run_server(config: Optional[MockServerConfig] = None) -> None:
    """Run the mock SOAP server until interrupted."""
    config = config or MockServerConfig()
    server = make_mock_server(config)
    logger.info(f"Mock SOAP service listening on {config.base_url}")
    logger.info(f"WSDL available at {config.wsdl_url}")
    try:
        server.serve_forever()
    finally:
        server.server_close()
