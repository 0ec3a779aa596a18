"""Workload endpoint naming.

An endpoint name is ``<node>-<orchestrator>-<pod>-<endpoint>``. Dashes inside
a component are doubled so the name can be split back into its parts.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from k8sconv.conversion.constants import (
    DEFAULT_ENDPOINT,
    ORCHESTRATOR_KUBERNETES,
    VETH_HASH_LENGTH,
    VETH_NAME_PREFIX,
)
from k8sconv.errors import MalformedInputError

SEPARATOR = "-"


@dataclass(frozen=True)
class WorkloadEndpointIdentifiers:
    """The components a workload endpoint name is built from."""

    node: str
    pod: str
    orchestrator: str = ORCHESTRATOR_KUBERNETES
    endpoint: str = DEFAULT_ENDPOINT

    def calculate_name(self) -> str:
        """Return the endpoint name. Every component must be non-empty."""
        parts = (self.node, self.orchestrator, self.pod, self.endpoint)
        missing = [
            label
            for label, value in zip(("node", "orchestrator", "pod", "endpoint"), parts)
            if not value
        ]
        if missing:
            raise MalformedInputError(
                f"Cannot name workload endpoint, missing: {', '.join(missing)}"
            )
        return SEPARATOR.join(_escape(p) for p in parts)


def _escape(part: str) -> str:
    return part.replace(SEPARATOR, SEPARATOR * 2)


def _split(name: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(name):
        if name[i] == SEPARATOR:
            if name[i + 1 : i + 2] == SEPARATOR:
                current.append(SEPARATOR)
                i += 2
                continue
            parts.append("".join(current))
            current = []
        else:
            current.append(name[i])
        i += 1
    parts.append("".join(current))
    return parts


def parse_workload_endpoint_name(name: str) -> WorkloadEndpointIdentifiers:
    """Split an endpoint name back into its identifiers."""
    parts = _split(name)
    if len(parts) != 4 or not all(parts):
        raise MalformedInputError(f"Not a workload endpoint name: {name!r}")
    node, orchestrator, pod, endpoint = parts
    return WorkloadEndpointIdentifiers(
        node=node, orchestrator=orchestrator, pod=pod, endpoint=endpoint
    )


def veth_name_for_workload(workload: str) -> str:
    """Return the deterministic host-side interface name for an endpoint.

    Must match the name the CNI plugin computes for the same endpoint.
    """
    digest = hashlib.sha1(workload.encode("utf-8")).hexdigest()
    return VETH_NAME_PREFIX + digest[:VETH_HASH_LENGTH]
