"""Converter facade — one entry point for every supported resource kind."""

from __future__ import annotations

from typing import Union

from k8sconv.calico.models import BGPNode, NetworkPolicy, Profile, WorkloadEndpoint
from k8sconv.config import ConverterConfig
from k8sconv.conversion.namespace import namespace_to_profile
from k8sconv.conversion.node import k8s_node_to_calico
from k8sconv.conversion.policy import network_policy_to_calico
from k8sconv.conversion.workload import (
    is_valid_workload_endpoint,
    pod_to_workload_endpoint,
)
from k8sconv.errors import ConversionError
from k8sconv.k8s import models as k8s

CalicoObject = Union[NetworkPolicy, WorkloadEndpoint, Profile, BGPNode]


class Converter:
    """Converts Kubernetes resources into their Calico equivalents.

    Stateless apart from its configuration, so one instance can be shared
    across threads.
    """

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()

    def network_policy(self, np: k8s.NetworkPolicy) -> NetworkPolicy:
        return network_policy_to_calico(
            np, tolerate_malformed=self.config.tolerate_malformed_peers
        )

    def pod(self, pod: k8s.Pod) -> WorkloadEndpoint | None:
        """Convert a pod, or return None if it is not a workload endpoint."""
        if not is_valid_workload_endpoint(pod):
            return None
        return pod_to_workload_endpoint(pod)

    def namespace(self, ns: k8s.Namespace) -> Profile:
        return namespace_to_profile(ns)

    def node(self, node: k8s.Node) -> BGPNode:
        return k8s_node_to_calico(node)

    def convert(self, obj: object) -> CalicoObject | None:
        """Dispatch on the resource type."""
        if isinstance(obj, k8s.NetworkPolicy):
            return self.network_policy(obj)
        if isinstance(obj, k8s.Pod):
            return self.pod(obj)
        if isinstance(obj, k8s.Namespace):
            return self.namespace(obj)
        if isinstance(obj, k8s.Node):
            return self.node(obj)
        raise ConversionError(f"Cannot convert {type(obj).__name__}")
