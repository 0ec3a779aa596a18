"""Port and protocol normalization for NetworkPolicy ports."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from k8sconv.calico.models import Port, Protocol
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import NetworkPolicyPort

logger = logging.getLogger(__name__)

# Kubernetes treats TCP as the implicit protocol of a port. The policy model
# needs the protocol spelled out whenever a port is matched, so the converter
# always emits it.
DEFAULT_PROTOCOL = Protocol.TCP

MIN_PORT = 1
MAX_PORT = 65535

# IANA service name: letters, digits and non-consecutive hyphens, at least one letter.
_PORT_NAME_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9]|-(?=[a-z0-9]))*$", re.IGNORECASE)
_MAX_PORT_NAME_LENGTH = 15


class PortFields(NamedTuple):
    """Protocol and destination ports for one rule."""

    protocol: Protocol | None
    ports: tuple[Port, ...]


def parse_protocol(value: str) -> Protocol:
    """Map a protocol name (any case) onto the Protocol enumeration."""
    try:
        return Protocol(str(value).lower())
    except ValueError as exc:
        logger.error("Failed to parse protocol %r", value)
        raise MalformedInputError(f"Invalid protocol: {value!r}") from exc


def parse_port(value: int | str) -> Port:
    """Parse a port number, ``min:max`` range, or named port."""
    if isinstance(value, bool):
        raise MalformedInputError(f"Invalid port: {value!r}")
    if isinstance(value, int):
        return _numeric_port(value, value)

    text = str(value).strip()
    if text.isdigit():
        n = int(text)
        return _numeric_port(n, n)
    if ":" in text:
        low, _, high = text.partition(":")
        if low.isdigit() and high.isdigit():
            return _numeric_port(int(low), int(high))
        raise MalformedInputError(f"Invalid port range: {value!r}")
    if (
        len(text) <= _MAX_PORT_NAME_LENGTH
        and _PORT_NAME_PATTERN.match(text)
        and any(c.isalpha() for c in text)
    ):
        return Port(name=text)
    raise MalformedInputError(f"Invalid port: {value!r}")


def _numeric_port(low: int, high: int) -> Port:
    if not (MIN_PORT <= low <= MAX_PORT and MIN_PORT <= high <= MAX_PORT):
        raise MalformedInputError(
            f"Port {low}:{high} out of range ({MIN_PORT}-{MAX_PORT})"
        )
    if low > high:
        raise MalformedInputError(f"Port range {low}:{high} is inverted")
    return Port(min_port=low, max_port=high)


def normalize_port(port: NetworkPolicyPort | None) -> PortFields:
    """Convert a NetworkPolicy port into ``(protocol, ports)``.

    No port information at all means any protocol on any port. A port without
    a protocol gets DEFAULT_PROTOCOL. Named ports are kept symbolic; they are
    resolved against endpoint ports by the policy engine, not here.
    """
    if port is None:
        return PortFields(None, ())

    protocol: Protocol | None = None
    ports: tuple[Port, ...] = ()
    if port.port is not None:
        ports = (parse_port(port.port),)
        protocol = DEFAULT_PROTOCOL
    if port.protocol is not None:
        protocol = parse_protocol(port.protocol)
    return PortFields(protocol, ports)
