"""Serialize converted resources to Calico v2 manifests."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import yaml

from k8sconv.calico.models import (
    KIND_NETWORK_POLICY,
    KIND_NODE,
    KIND_PROFILE,
    KIND_WORKLOAD_ENDPOINT,
    BGPNode,
    EntityRule,
    NetworkPolicy,
    Profile,
    Rule,
    WorkloadEndpoint,
)
from k8sconv.k8s.models import Node, ObjectMeta

API_VERSION = "projectcalico.org/v2"


def _sorted(mapping: dict[str, str]) -> dict[str, str]:
    # Key order must not depend on how the input was built.
    return dict(sorted(mapping.items()))


def _metadata(
    name: str,
    namespace: str = "",
    labels: dict[str, str] | None = None,
    uid: str = "",
    creation_timestamp: str = "",
    revision: str = "",
) -> dict:
    meta: dict[str, Any] = {"name": name}
    if namespace:
        meta["namespace"] = namespace
    if labels:
        meta["labels"] = _sorted(labels)
    if uid:
        meta["uid"] = uid
    if creation_timestamp:
        meta["creationTimestamp"] = creation_timestamp
    if revision:
        meta["resourceVersion"] = revision
    return meta


def entity_rule_to_dict(entity: EntityRule) -> dict:
    data: dict[str, Any] = {}
    if entity.selector:
        data["selector"] = entity.selector
    if entity.namespace_selector:
        data["namespaceSelector"] = entity.namespace_selector
    if entity.nets:
        data["nets"] = list(entity.nets)
    if entity.not_nets:
        data["notNets"] = list(entity.not_nets)
    if entity.ports:
        data["ports"] = [
            p.name or _port_value(p.min_port, p.max_port) for p in entity.ports
        ]
    return data


def _port_value(low: int, high: int) -> int | str:
    return low if low == high else f"{low}:{high}"


def rule_to_dict(rule: Rule) -> dict:
    data: dict[str, Any] = {"action": rule.action.value}
    if rule.protocol is not None:
        data["protocol"] = rule.protocol.value
    source = entity_rule_to_dict(rule.source)
    if source:
        data["source"] = source
    destination = entity_rule_to_dict(rule.destination)
    if destination:
        data["destination"] = destination
    return data


def network_policy_to_dict(policy: NetworkPolicy) -> dict:
    spec: dict[str, Any] = {
        "order": policy.order,
        "selector": policy.selector,
        "types": [t.value for t in policy.types],
    }
    if policy.ingress_rules:
        spec["ingress"] = [rule_to_dict(r) for r in policy.ingress_rules]
    if policy.egress_rules:
        spec["egress"] = [rule_to_dict(r) for r in policy.egress_rules]
    return {
        "apiVersion": API_VERSION,
        "kind": KIND_NETWORK_POLICY,
        "metadata": _metadata(
            policy.name,
            policy.namespace,
            uid=policy.uid,
            creation_timestamp=policy.creation_timestamp,
            revision=policy.revision,
        ),
        "spec": spec,
    }


def workload_endpoint_to_dict(wep: WorkloadEndpoint) -> dict:
    spec: dict[str, Any] = {
        "orchestrator": wep.orchestrator,
        "node": wep.node,
        "pod": wep.pod,
        "endpoint": wep.endpoint,
        "interfaceName": wep.interface_name,
        "profiles": list(wep.profiles),
        "ipNetworks": list(wep.ip_networks),
    }
    if wep.ports:
        spec["ports"] = [
            {"name": p.name, "protocol": p.protocol.value, "port": p.port}
            for p in wep.ports
        ]
    return {
        "apiVersion": API_VERSION,
        "kind": KIND_WORKLOAD_ENDPOINT,
        "metadata": _metadata(
            wep.name,
            wep.namespace,
            labels=wep.labels,
            uid=wep.uid,
            creation_timestamp=wep.creation_timestamp,
            revision=wep.revision,
        ),
        "spec": spec,
    }


def profile_to_dict(profile: Profile) -> dict:
    spec: dict[str, Any] = {
        "ingress": [rule_to_dict(r) for r in profile.ingress_rules],
        "egress": [rule_to_dict(r) for r in profile.egress_rules],
    }
    if profile.labels_to_apply:
        spec["labelsToApply"] = _sorted(profile.labels_to_apply)
    return {
        "apiVersion": API_VERSION,
        "kind": KIND_PROFILE,
        "metadata": _metadata(
            profile.name,
            uid=profile.uid,
            creation_timestamp=profile.creation_timestamp,
            revision=profile.revision,
        ),
        "spec": spec,
    }


def bgp_node_to_dict(bgp: BGPNode) -> dict:
    bgp_spec: dict[str, Any] = {}
    if bgp.ipv4_interface is not None:
        bgp_spec["ipv4Address"] = str(bgp.ipv4_interface)
    if bgp.as_number is not None:
        bgp_spec["asNumber"] = bgp.as_number
    spec: dict[str, Any] = {}
    if bgp_spec:
        spec["bgp"] = bgp_spec
    return {
        "apiVersion": API_VERSION,
        "kind": KIND_NODE,
        "metadata": _metadata(bgp.hostname, labels=bgp.labels, revision=bgp.revision),
        "spec": spec,
    }


def k8s_node_to_dict(node: Node) -> dict:
    """Render a Kubernetes Node (as written back by the node converter)."""
    meta: ObjectMeta = node.metadata
    metadata = _metadata(
        meta.name,
        labels=meta.labels,
        uid=meta.uid,
        creation_timestamp=meta.creation_timestamp,
        revision=meta.resource_version,
    )
    if meta.annotations:
        metadata["annotations"] = _sorted(meta.annotations)
    return {"apiVersion": "v1", "kind": "Node", "metadata": metadata}


_SERIALIZERS = {
    NetworkPolicy: network_policy_to_dict,
    WorkloadEndpoint: workload_endpoint_to_dict,
    Profile: profile_to_dict,
    BGPNode: bgp_node_to_dict,
    Node: k8s_node_to_dict,
}


def to_dict(obj: object) -> dict:
    """Render any converted resource as a manifest mapping."""
    serializer = _SERIALIZERS.get(type(obj))
    if serializer is None:
        raise TypeError(f"Cannot serialize {type(obj).__name__}")
    return serializer(obj)  # type: ignore[operator]


def dump(objects: Iterable[object], fmt: str = "yaml") -> str:
    """Serialize resources as a YAML multi-document stream or a JSON list."""
    data = [to_dict(o) for o in objects]
    if fmt == "json":
        return json.dumps(data, indent=2)
    if fmt != "yaml":
        raise ValueError(f"Unsupported output format: {fmt}")
    result: str = yaml.safe_dump_all(data, default_flow_style=False, sort_keys=False)
    return result
