"""Kubernetes resource models — the subset of fields the converters read.

Immutable dataclasses; mappings are copied on construction so a model never
shares state with the dict it was built from.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

from k8sconv.errors import MalformedInputError

_LABEL_NAME_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?\Z")
_DNS_SUBDOMAIN_RE = re.compile(
    r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*\Z"
)
_MAX_LABEL_NAME = 63
_MAX_LABEL_PREFIX = 253


class SelectorOperator(enum.Enum):
    """Set operators allowed in a label selector expression."""

    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


def validate_label_key(key: str) -> str:
    """Check ``key`` is a qualified label name (``[prefix/]name``)."""
    prefix, slash, name = key.rpartition("/")
    valid = (
        0 < len(name) <= _MAX_LABEL_NAME
        and _LABEL_NAME_RE.match(name) is not None
        and (
            not slash
            or (
                0 < len(prefix) <= _MAX_LABEL_PREFIX
                and _DNS_SUBDOMAIN_RE.match(prefix) is not None
            )
        )
    )
    if not valid:
        raise MalformedInputError(f"Invalid label key: {key!r}")
    return key


def validate_label_value(value: str) -> str:
    """Check ``value`` is a label value (empty, or a name of up to 63 chars)."""
    if len(value) > _MAX_LABEL_NAME or _LABEL_NAME_RE.match(value) is None:
        raise MalformedInputError(f"Invalid label value: {value!r}")
    return value


@dataclass(frozen=True)
class ObjectMeta:
    """Standard object metadata."""

    name: str
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    uid: str = ""
    creation_timestamp: str = ""
    resource_version: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", dict(self.labels))
        object.__setattr__(self, "annotations", dict(self.annotations))


@dataclass(frozen=True)
class LabelSelectorRequirement:
    """A single ``(key, operator, values)`` selector expression."""

    key: str
    operator: SelectorOperator
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        validate_label_key(self.key)
        for value in self.values:
            validate_label_value(value)


@dataclass(frozen=True)
class LabelSelector:
    """Exact-match labels plus set-operator expressions.

    Keys and values are checked against label syntax on construction; they
    are later spliced into selector expressions verbatim.
    """

    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: tuple[LabelSelectorRequirement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "match_labels", dict(self.match_labels))
        for key, value in self.match_labels.items():
            validate_label_key(key)
            validate_label_value(value)


@dataclass(frozen=True)
class IPBlock:
    """A CIDR with optional excluded sub-ranges."""

    cidr: str
    except_: tuple[str, ...] = ()


@dataclass(frozen=True)
class NetworkPolicyPeer:
    """One ``from``/``to`` entry. At most one field may be set."""

    pod_selector: LabelSelector | None = None
    namespace_selector: LabelSelector | None = None
    ip_block: IPBlock | None = None

    def __post_init__(self) -> None:
        populated = [
            f
            for f in (self.pod_selector, self.namespace_selector, self.ip_block)
            if f is not None
        ]
        if len(populated) > 1:
            raise MalformedInputError(
                "NetworkPolicyPeer may set only one of podSelector, "
                "namespaceSelector or ipBlock"
            )


@dataclass(frozen=True)
class NetworkPolicyPort:
    """A port (number or name) and protocol; both optional."""

    port: int | str | None = None
    protocol: str | None = None


@dataclass(frozen=True)
class NetworkPolicyIngressRule:
    from_: tuple[NetworkPolicyPeer, ...] = ()
    ports: tuple[NetworkPolicyPort, ...] = ()


@dataclass(frozen=True)
class NetworkPolicyEgressRule:
    to: tuple[NetworkPolicyPeer, ...] = ()
    ports: tuple[NetworkPolicyPort, ...] = ()


@dataclass(frozen=True)
class NetworkPolicy:
    """A namespaced NetworkPolicy."""

    metadata: ObjectMeta
    pod_selector: LabelSelector = field(default_factory=LabelSelector)
    ingress: tuple[NetworkPolicyIngressRule, ...] = ()
    egress: tuple[NetworkPolicyEgressRule, ...] = ()
    # Empty on API versions that predate the policyTypes field.
    policy_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContainerPort:
    container_port: int
    name: str = ""
    protocol: str = ""


@dataclass(frozen=True)
class Container:
    name: str
    ports: tuple[ContainerPort, ...] = ()


@dataclass(frozen=True)
class Pod:
    """A pod with the spec and status fields needed for endpoint synthesis."""

    metadata: ObjectMeta
    node_name: str = ""
    host_network: bool = False
    pod_ip: str = ""
    containers: tuple[Container, ...] = ()


@dataclass(frozen=True)
class Namespace:
    metadata: ObjectMeta


@dataclass(frozen=True)
class Node:
    """A cluster node. BGP settings are carried in annotations."""

    metadata: ObjectMeta
