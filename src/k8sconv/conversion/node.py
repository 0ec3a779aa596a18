"""Round-trip per-node BGP settings through Kubernetes Node annotations.

The BGP address is stored in interface form (``10.0.0.5/24``) so both the
host address and the network mask survive a round trip. Deriving the network
from the address alone, or writing the masked network back, loses the host
bits.
"""

from __future__ import annotations

import ipaddress
import logging

from k8sconv.calico.models import BGPNode
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import Node, ObjectMeta

logger = logging.getLogger(__name__)

ANNOTATION_IPV4_ADDRESS = "projectcalico.org/IPv4Address"
ANNOTATION_AS_NUMBER = "projectcalico.org/ASNumber"

_MAX_AS_NUMBER = 2**32 - 1
_MAX_AS_DOT_PART = 2**16 - 1


def parse_as_number(value: str) -> int:
    """Parse an AS number in plain (``64512``) or asdot (``1.10``) notation."""
    text = value.strip()
    high, dot, low = text.partition(".")
    try:
        if dot:
            hi, lo = int(high), int(low)
            if not (0 <= hi <= _MAX_AS_DOT_PART and 0 <= lo <= _MAX_AS_DOT_PART):
                raise ValueError("asdot component out of range")
            number = (hi << 16) + lo
        else:
            if not text.isdigit():
                raise ValueError("not a number")
            number = int(text)
    except ValueError as exc:
        logger.error("Failed to parse AS number %r", value)
        raise MalformedInputError(f"Invalid AS number: {value!r}") from exc
    if number > _MAX_AS_NUMBER:
        raise MalformedInputError(f"AS number out of range: {value!r}")
    return number


def k8s_node_to_calico(node: Node) -> BGPNode:
    """Read the BGP settings of a node from its annotations."""
    annotations = node.metadata.annotations

    address: ipaddress.IPv4Address | None = None
    network: ipaddress.IPv4Network | None = None
    raw_address = annotations.get(ANNOTATION_IPV4_ADDRESS, "")
    if raw_address:
        try:
            iface = ipaddress.IPv4Interface(raw_address.strip())
        except ValueError as exc:
            logger.error(
                "Failed to parse %s %r on node %s",
                ANNOTATION_IPV4_ADDRESS,
                raw_address,
                node.metadata.name,
            )
            raise MalformedInputError(f"Invalid IPv4 address: {raw_address!r}") from exc
        address, network = iface.ip, iface.network

    as_number: int | None = None
    raw_asn = annotations.get(ANNOTATION_AS_NUMBER, "")
    if raw_asn:
        as_number = parse_as_number(raw_asn)

    logger.debug("Node %s has BGP address %s", node.metadata.name, address)
    return BGPNode(
        hostname=node.metadata.name,
        labels=dict(node.metadata.labels),
        ipv4_address=address,
        ipv4_network=network,
        as_number=as_number,
        revision=node.metadata.resource_version,
    )


def bgp_annotations(bgp: BGPNode) -> dict[str, str]:
    """Render the tracked BGP fields as annotations. Unset fields are omitted."""
    annotations: dict[str, str] = {}
    # The address keeps its host bits; only the mask comes from the network.
    if bgp.ipv4_interface is not None:
        annotations[ANNOTATION_IPV4_ADDRESS] = str(bgp.ipv4_interface)
    if bgp.as_number is not None:
        annotations[ANNOTATION_AS_NUMBER] = str(bgp.as_number)
    return annotations


def calico_to_k8s_node(bgp: BGPNode, existing: Node | None = None) -> Node:
    """Write the BGP settings into a Node.

    Fields and annotations of ``existing`` that are not tracked here are
    carried over; tracked annotations that are now unset are removed.
    """
    if existing is not None:
        meta = existing.metadata
        annotations = {
            k: v
            for k, v in meta.annotations.items()
            if k not in (ANNOTATION_IPV4_ADDRESS, ANNOTATION_AS_NUMBER)
        }
    else:
        meta = ObjectMeta(name=bgp.hostname)
        annotations = {}
    annotations.update(bgp_annotations(bgp))

    return Node(
        metadata=ObjectMeta(
            name=bgp.hostname,
            namespace=meta.namespace,
            labels=dict(bgp.labels),
            annotations=annotations,
            uid=meta.uid,
            creation_timestamp=meta.creation_timestamp,
            resource_version=meta.resource_version,
        )
    )
