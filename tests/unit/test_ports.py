"""Tests for port and protocol normalization."""

import pytest

from k8sconv.calico.models import Port, Protocol
from k8sconv.conversion.ports import (
    DEFAULT_PROTOCOL,
    normalize_port,
    parse_port,
    parse_protocol,
)
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import NetworkPolicyPort


def test_default_protocol_is_tcp():
    assert DEFAULT_PROTOCOL is Protocol.TCP


def test_no_port_info():
    assert normalize_port(None) == (None, ())
    assert normalize_port(NetworkPolicyPort()) == (None, ())


def test_port_without_protocol_defaults_to_tcp():
    protocol, ports = normalize_port(NetworkPolicyPort(port=80))
    assert protocol is Protocol.TCP
    assert ports == (Port(80, 80),)


def test_explicit_protocol_overrides_default():
    protocol, ports = normalize_port(NetworkPolicyPort(port=53, protocol="UDP"))
    assert protocol is Protocol.UDP
    assert str(ports[0]) == "53"


def test_protocol_without_port():
    assert normalize_port(NetworkPolicyPort(protocol="SCTP")) == (Protocol.SCTP, ())


def test_named_port_passed_through():
    protocol, ports = normalize_port(NetworkPolicyPort(port="http"))
    assert protocol is Protocol.TCP
    assert ports == (Port(name="http"),)


def test_numeric_string_port():
    assert parse_port("8080") == Port(8080, 8080)


def test_port_range():
    port = parse_port("8000:8080")
    assert (port.min_port, port.max_port) == (8000, 8080)
    assert str(port) == "8000:8080"


@pytest.mark.parametrize("value", [0, 70000, "9000:80", "bad_name", "-http", ""])
def test_invalid_ports_raise(value):
    with pytest.raises(MalformedInputError):
        parse_port(value)


def test_protocol_case_insensitive():
    assert parse_protocol("tCp") is Protocol.TCP


def test_unknown_protocol_raises():
    with pytest.raises(MalformedInputError, match="protocol"):
        normalize_port(NetworkPolicyPort(port=80, protocol="GRE"))
