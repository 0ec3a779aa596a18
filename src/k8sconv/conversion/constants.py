"""Well-known names shared by the converters and their consumers."""

from __future__ import annotations

ORCHESTRATOR_KUBERNETES = "k8s"

# Labels added to every workload endpoint.
LABEL_NAMESPACE = "projectcalico.org/namespace"
LABEL_ORCHESTRATOR = "projectcalico.org/orchestrator"

# Selector clause that limits a match to Kubernetes-managed endpoints.
ORCHESTRATOR_SELECTOR = f"{LABEL_ORCHESTRATOR} == '{ORCHESTRATOR_KUBERNETES}'"

NETWORK_POLICY_NAME_PREFIX = "knp.default."
NAMESPACE_PROFILE_NAME_PREFIX = "kns."
NAMESPACE_LABEL_PREFIX = "pcns."

# Every converted NetworkPolicy is inserted at this order.
POLICY_ORDER = 1000.0

DEFAULT_ENDPOINT = "eth0"

# The CNI plugin creates host-side veths with the same prefix and hash length.
VETH_NAME_PREFIX = "cali"
VETH_HASH_LENGTH = 11
