"""Convert pods into workload endpoints."""

from __future__ import annotations

import ipaddress
import logging

from k8sconv.calico.models import EndpointPort, Protocol, WorkloadEndpoint
from k8sconv.conversion.constants import (
    DEFAULT_ENDPOINT,
    LABEL_NAMESPACE,
    LABEL_ORCHESTRATOR,
    NAMESPACE_PROFILE_NAME_PREFIX,
    ORCHESTRATOR_KUBERNETES,
)
from k8sconv.conversion.names import WorkloadEndpointIdentifiers, veth_name_for_workload
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import Pod

logger = logging.getLogger(__name__)

# Container port protocols that can back a named port. Unset means TCP.
_NAMED_PORT_PROTOCOLS = {
    "UDP": Protocol.UDP,
    "TCP": Protocol.TCP,
    "": Protocol.TCP,
}


def is_host_networked(pod: Pod) -> bool:
    return pod.host_network


def is_scheduled(pod: Pod) -> bool:
    return pod.node_name != ""


def has_ip_address(pod: Pod) -> bool:
    return pod.pod_ip != ""


def is_valid_workload_endpoint(pod: Pod) -> bool:
    """True if the pod should appear as a workload endpoint.

    Host-networked pods and pods not yet scheduled to a node are excluded.
    """
    if is_host_networked(pod):
        logger.debug("Pod %s is host networked", pod.metadata.name)
        return False
    if not is_scheduled(pod):
        logger.debug("Pod %s is not scheduled", pod.metadata.name)
        return False
    return True


def is_ready_pod(pod: Pod) -> bool:
    """True if the pod is a valid workload endpoint with an IP assigned."""
    if not is_valid_workload_endpoint(pod):
        return False
    if not has_ip_address(pod):
        logger.debug("Pod %s does not have an IP address", pod.metadata.name)
        return False
    return True


def workload_endpoint_name(pod: Pod) -> str:
    return WorkloadEndpointIdentifiers(
        node=pod.node_name,
        orchestrator=ORCHESTRATOR_KUBERNETES,
        pod=pod.metadata.name,
        endpoint=DEFAULT_ENDPOINT,
    ).calculate_name()


def pod_to_workload_endpoint(pod: Pod) -> WorkloadEndpoint:
    """Convert a pod into a workload endpoint.

    The caller is expected to have checked is_valid_workload_endpoint(). The
    pod must have a name and node name. A pod without an IP converts with no
    ip_networks; IPs are unassigned while a pod starts up or is torn down.
    """
    name = workload_endpoint_name(pod)

    ip_networks: tuple[str, ...] = ()
    if has_ip_address(pod):
        ip_networks = (_pod_ip_network(pod),)

    labels = dict(pod.metadata.labels)
    labels[LABEL_NAMESPACE] = pod.metadata.namespace
    labels[LABEL_ORCHESTRATOR] = ORCHESTRATOR_KUBERNETES

    return WorkloadEndpoint(
        name=name,
        namespace=pod.metadata.namespace,
        node=pod.node_name,
        pod=pod.metadata.name,
        endpoint=DEFAULT_ENDPOINT,
        interface_name=veth_name_for_workload(name),
        orchestrator=ORCHESTRATOR_KUBERNETES,
        labels=labels,
        profiles=(NAMESPACE_PROFILE_NAME_PREFIX + pod.metadata.namespace,),
        ip_networks=ip_networks,
        ports=named_ports(pod),
        uid=pod.metadata.uid,
        creation_timestamp=pod.metadata.creation_timestamp,
        revision=pod.metadata.resource_version,
    )


def _pod_ip_network(pod: Pod) -> str:
    try:
        return ipaddress.ip_interface(pod.pod_ip.strip()).with_prefixlen
    except ValueError as exc:
        logger.error("Failed to parse IP %r of pod %s", pod.pod_ip, pod.metadata.name)
        raise MalformedInputError(f"Invalid pod IP: {pod.pod_ip!r}") from exc


def named_ports(pod: Pod) -> tuple[EndpointPort, ...]:
    """Collect the named container ports of a pod, in container order."""
    ports: list[EndpointPort] = []
    for container in pod.containers:
        for cp in container.ports:
            if not cp.name or cp.container_port == 0:
                continue
            protocol = _NAMED_PORT_PROTOCOLS.get(cp.protocol)
            if protocol is None:
                logger.debug(
                    "Ignoring named port %s of pod %s with unknown protocol %r",
                    cp.name,
                    pod.metadata.name,
                    cp.protocol,
                )
                continue
            ports.append(
                EndpointPort(name=cp.name, protocol=protocol, port=cp.container_port)
            )
    return tuple(ports)
