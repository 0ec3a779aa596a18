"""Calico v2 data models — the target side of every conversion."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field

from k8sconv.errors import MalformedInputError

KIND_NETWORK_POLICY = "NetworkPolicy"
KIND_WORKLOAD_ENDPOINT = "WorkloadEndpoint"
KIND_PROFILE = "Profile"
KIND_NODE = "Node"


class Action(enum.Enum):
    """What a rule does with matching traffic."""

    ALLOW = "allow"
    DENY = "deny"
    LOG = "log"
    PASS = "pass"


class Protocol(enum.Enum):
    """Protocols understood by the policy engine."""

    TCP = "tcp"
    UDP = "udp"
    SCTP = "sctp"
    ICMP = "icmp"
    ICMPV6 = "icmpv6"
    UDPLITE = "udplite"


class PolicyType(enum.Enum):
    """Traffic direction a policy applies to."""

    INGRESS = "Ingress"
    EGRESS = "Egress"


@dataclass(frozen=True)
class Port:
    """A single port, a port range, or a named port."""

    min_port: int = 0
    max_port: int = 0
    name: str = ""

    def __str__(self) -> str:
        if self.name:
            return self.name
        if self.min_port == self.max_port:
            return str(self.min_port)
        return f"{self.min_port}:{self.max_port}"


@dataclass(frozen=True)
class EntityRule:
    """Source or destination match criteria. Empty fields match anything."""

    selector: str = ""
    namespace_selector: str = ""
    nets: tuple[str, ...] = ()
    not_nets: tuple[str, ...] = ()
    ports: tuple[Port, ...] = ()


@dataclass(frozen=True)
class Rule:
    action: Action
    protocol: Protocol | None = None
    source: EntityRule = field(default_factory=EntityRule)
    destination: EntityRule = field(default_factory=EntityRule)


ALLOW_ALL_RULE = Rule(action=Action.ALLOW)


@dataclass(frozen=True)
class NetworkPolicy:
    """A namespaced policy produced from a Kubernetes NetworkPolicy."""

    name: str
    namespace: str
    order: float
    selector: str
    ingress_rules: tuple[Rule, ...] = ()
    egress_rules: tuple[Rule, ...] = ()
    types: tuple[PolicyType, ...] = (PolicyType.INGRESS,)
    uid: str = ""
    creation_timestamp: str = ""
    revision: str = ""


@dataclass(frozen=True)
class EndpointPort:
    """A named port exposed by a workload endpoint."""

    name: str
    protocol: Protocol
    port: int


@dataclass(frozen=True)
class WorkloadEndpoint:
    """The network interface of a pod."""

    name: str
    namespace: str
    node: str
    pod: str
    endpoint: str
    interface_name: str
    orchestrator: str = "k8s"
    labels: dict[str, str] = field(default_factory=dict)
    profiles: tuple[str, ...] = ()
    ip_networks: tuple[str, ...] = ()
    ports: tuple[EndpointPort, ...] = ()
    uid: str = ""
    creation_timestamp: str = ""
    revision: str = ""


@dataclass(frozen=True)
class Profile:
    """Default rules and inherited labels for the endpoints of a namespace."""

    name: str
    ingress_rules: tuple[Rule, ...] = (ALLOW_ALL_RULE,)
    egress_rules: tuple[Rule, ...] = (ALLOW_ALL_RULE,)
    labels_to_apply: dict[str, str] = field(default_factory=dict)
    uid: str = ""
    creation_timestamp: str = ""
    revision: str = ""


@dataclass(frozen=True)
class BGPNode:
    """Per-node BGP configuration.

    ``ipv4_address`` keeps its host bits; ``ipv4_network`` carries the mask.
    The two are stored separately and recombined on write.
    """

    hostname: str
    labels: dict[str, str] = field(default_factory=dict)
    ipv4_address: ipaddress.IPv4Address | None = None
    ipv4_network: ipaddress.IPv4Network | None = None
    as_number: int | None = None
    revision: str = ""

    def __post_init__(self) -> None:
        if self.ipv4_network is not None and self.ipv4_address is None:
            raise MalformedInputError(
                f"Node {self.hostname} has an IPv4 network but no IPv4 address"
            )

    @property
    def ipv4_interface(self) -> ipaddress.IPv4Interface | None:
        """The address recombined with the tracked mask (/32 without one)."""
        if self.ipv4_address is None:
            return None
        prefix = self.ipv4_network.prefixlen if self.ipv4_network is not None else 32
        return ipaddress.IPv4Interface(f"{self.ipv4_address}/{prefix}")
