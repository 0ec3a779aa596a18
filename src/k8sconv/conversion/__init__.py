"""Kubernetes to Calico conversion."""

from k8sconv.conversion.converter import Converter
from k8sconv.conversion.namespace import namespace_to_profile, profile_name_to_namespace
from k8sconv.conversion.node import calico_to_k8s_node, k8s_node_to_calico
from k8sconv.conversion.policy import network_policy_to_calico
from k8sconv.conversion.selector import SelectorKind, compile_selector
from k8sconv.conversion.workload import (
    is_ready_pod,
    is_valid_workload_endpoint,
    pod_to_workload_endpoint,
)

__all__ = [
    "Converter",
    "SelectorKind",
    "calico_to_k8s_node",
    "compile_selector",
    "is_ready_pod",
    "is_valid_workload_endpoint",
    "k8s_node_to_calico",
    "namespace_to_profile",
    "network_policy_to_calico",
    "pod_to_workload_endpoint",
    "profile_name_to_namespace",
]
