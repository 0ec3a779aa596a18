"""Load Kubernetes manifests from YAML into resource models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml

from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import (
    Container,
    ContainerPort,
    IPBlock,
    LabelSelector,
    LabelSelectorRequirement,
    Namespace,
    NetworkPolicy,
    NetworkPolicyEgressRule,
    NetworkPolicyIngressRule,
    NetworkPolicyPeer,
    NetworkPolicyPort,
    Node,
    ObjectMeta,
    Pod,
    SelectorOperator,
)

K8sObject = Union[NetworkPolicy, Pod, Namespace, Node]


def load_manifests(path: str | Path) -> list[K8sObject]:
    """Load every resource from a (possibly multi-document) YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    return load_manifests_from_string(text)


def load_manifests_from_string(text: str) -> list[K8sObject]:
    """Parse a YAML string into resource models. ``List`` kinds are flattened."""
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise MalformedInputError(f"Invalid YAML: {exc}") from exc

    objects: list[K8sObject] = []
    for doc in documents:
        if doc is None:
            continue
        if not isinstance(doc, dict):
            raise MalformedInputError("Manifest YAML must be a mapping")
        if str(doc.get("kind") or "").endswith("List"):
            for item in doc.get("items") or []:
                objects.append(parse_object(item))
        else:
            objects.append(parse_object(doc))
    return objects


def parse_object(data: dict) -> K8sObject:
    """Build a resource model from a decoded manifest, dispatching on kind."""
    if not isinstance(data, dict):
        raise MalformedInputError("Manifest must be a mapping")
    kind = data.get("kind")
    parser = _PARSERS.get(kind)  # type: ignore[arg-type]
    if parser is None:
        raise MalformedInputError(f"Unsupported kind: {kind!r}")
    return parser(data)


def parse_network_policy(data: dict) -> NetworkPolicy:
    spec = _mapping(data.get("spec"), "spec")
    ingress = tuple(
        NetworkPolicyIngressRule(
            from_=_parse_peers(r.get("from")),
            ports=_parse_ports(r.get("ports")),
        )
        for r in _rule_list(spec.get("ingress"), "ingress")
    )
    egress = tuple(
        NetworkPolicyEgressRule(
            to=_parse_peers(r.get("to")),
            ports=_parse_ports(r.get("ports")),
        )
        for r in _rule_list(spec.get("egress"), "egress")
    )
    return NetworkPolicy(
        metadata=_parse_metadata(data),
        pod_selector=_parse_selector(spec.get("podSelector")) or LabelSelector(),
        ingress=ingress,
        egress=egress,
        policy_types=tuple(str(t) for t in spec.get("policyTypes") or ()),
    )


def parse_pod(data: dict) -> Pod:
    spec = _mapping(data.get("spec"), "spec")
    status = _mapping(data.get("status"), "status")

    containers: list[Container] = []
    for c in spec.get("containers") or []:
        c = _mapping(c, "container")
        ports: list[ContainerPort] = []
        for p in c.get("ports") or []:
            p = _mapping(p, "containerPort")
            ports.append(
                ContainerPort(
                    container_port=_as_int(p.get("containerPort", 0), "containerPort"),
                    name=p.get("name", "") or "",
                    protocol=p.get("protocol", "") or "",
                )
            )
        containers.append(Container(name=c.get("name", ""), ports=tuple(ports)))

    return Pod(
        metadata=_parse_metadata(data),
        node_name=spec.get("nodeName", "") or "",
        host_network=bool(spec.get("hostNetwork", False)),
        pod_ip=status.get("podIP", "") or "",
        containers=tuple(containers),
    )


def parse_namespace(data: dict) -> Namespace:
    return Namespace(metadata=_parse_metadata(data))


def parse_node(data: dict) -> Node:
    return Node(metadata=_parse_metadata(data))


_PARSERS = {
    "NetworkPolicy": parse_network_policy,
    "Pod": parse_pod,
    "Namespace": parse_namespace,
    "Node": parse_node,
}


def _parse_metadata(data: dict) -> ObjectMeta:
    meta = _mapping(data.get("metadata"), "metadata")
    if not meta.get("name"):
        raise MalformedInputError(f"{data.get('kind', 'Object')} has no metadata.name")
    return ObjectMeta(
        name=meta["name"],
        namespace=meta.get("namespace", "") or "",
        labels={str(k): str(v) for k, v in (meta.get("labels") or {}).items()},
        annotations={
            str(k): str(v) for k, v in (meta.get("annotations") or {}).items()
        },
        uid=meta.get("uid", "") or "",
        creation_timestamp=str(meta.get("creationTimestamp", "") or ""),
        resource_version=str(meta.get("resourceVersion", "") or ""),
    )


def _parse_selector(data: Any) -> LabelSelector | None:
    if data is None:
        return None
    data = _mapping(data, "label selector")

    expressions: list[LabelSelectorRequirement] = []
    for e in data.get("matchExpressions") or []:
        e = _mapping(e, "matchExpression")
        if not e.get("key"):
            raise MalformedInputError("matchExpression has no key")
        try:
            operator = SelectorOperator(e.get("operator"))
        except ValueError as exc:
            raise MalformedInputError(
                f"Unknown selector operator: {e.get('operator')!r}"
            ) from exc
        expressions.append(
            LabelSelectorRequirement(
                key=str(e["key"]),
                operator=operator,
                values=tuple(str(v) for v in e.get("values") or ()),
            )
        )

    return LabelSelector(
        match_labels={
            str(k): str(v) for k, v in (data.get("matchLabels") or {}).items()
        },
        match_expressions=tuple(expressions),
    )


def _parse_peers(data: Any) -> tuple[NetworkPolicyPeer, ...]:
    peers: list[NetworkPolicyPeer] = []
    for p in data or []:
        p = _mapping(p, "peer")
        ip_block = None
        if p.get("ipBlock") is not None:
            block = _mapping(p["ipBlock"], "ipBlock")
            ip_block = IPBlock(
                cidr=str(block.get("cidr", "")),
                except_=tuple(str(c) for c in block.get("except") or ()),
            )
        peers.append(
            NetworkPolicyPeer(
                pod_selector=_parse_selector(p.get("podSelector")),
                namespace_selector=_parse_selector(p.get("namespaceSelector")),
                ip_block=ip_block,
            )
        )
    return tuple(peers)


def _parse_ports(data: Any) -> tuple[NetworkPolicyPort, ...]:
    ports: list[NetworkPolicyPort] = []
    for p in data or []:
        p = _mapping(p, "port")
        ports.append(
            NetworkPolicyPort(port=p.get("port"), protocol=p.get("protocol"))
        )
    return tuple(ports)


def _rule_list(data: Any, what: str) -> list[dict]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise MalformedInputError(f"{what} must be a list")
    # An empty rule (``- {}``) decodes as None in some manifests.
    return [_mapping(r, f"{what} rule") for r in data]


def _mapping(data: Any, what: str) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedInputError(f"{what} must be a mapping")
    return data


def _as_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid {what}: {value!r}") from exc
