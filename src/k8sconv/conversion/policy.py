"""Convert Kubernetes NetworkPolicies into Calico NetworkPolicies."""

from __future__ import annotations

import logging

from k8sconv.calico.models import NetworkPolicy, PolicyType, Rule
from k8sconv.conversion.constants import NETWORK_POLICY_NAME_PREFIX, POLICY_ORDER
from k8sconv.conversion.rules import Direction, expand_rules
from k8sconv.conversion.selector import SelectorKind, compile_selector
from k8sconv.k8s import models as k8s

logger = logging.getLogger(__name__)

# Clusters whose API predates policyTypes send no type information. Such a
# policy only ever governed ingress, so egress must not be switched on for it.
DEFAULT_POLICY_TYPES = (PolicyType.INGRESS,)


def policy_name(name: str) -> str:
    return NETWORK_POLICY_NAME_PREFIX + name


def network_policy_to_calico(
    np: k8s.NetworkPolicy,
    *,
    tolerate_malformed: bool = False,
) -> NetworkPolicy:
    """Convert a NetworkPolicy.

    Raises MalformedInputError if any peer or port cannot be parsed; no
    partially converted policy is ever returned.
    """
    namespace = np.metadata.namespace

    ingress_rules: list[Rule] = []
    for r in np.ingress:
        ingress_rules.extend(
            expand_rules(
                r.from_,
                r.ports,
                namespace,
                Direction.INGRESS,
                tolerate_malformed=tolerate_malformed,
            )
        )

    egress_rules: list[Rule] = []
    for r in np.egress:
        egress_rules.extend(
            expand_rules(
                r.to,
                r.ports,
                namespace,
                Direction.EGRESS,
                tolerate_malformed=tolerate_malformed,
            )
        )

    return NetworkPolicy(
        name=policy_name(np.metadata.name),
        namespace=namespace,
        order=POLICY_ORDER,
        selector=compile_selector(np.pod_selector, SelectorKind.POD),
        ingress_rules=tuple(ingress_rules),
        egress_rules=tuple(egress_rules),
        types=policy_types(np, has_egress_rules=bool(egress_rules)),
        uid=np.metadata.uid,
        creation_timestamp=np.metadata.creation_timestamp,
        revision=np.metadata.resource_version,
    )


def policy_types(
    np: k8s.NetworkPolicy, has_egress_rules: bool = False
) -> tuple[PolicyType, ...]:
    """Work out the policy types, Ingress first."""
    ingress = False
    egress = False
    for policy_type in np.policy_types:
        if policy_type == PolicyType.INGRESS.value:
            ingress = True
        elif policy_type == PolicyType.EGRESS.value:
            egress = True
        else:
            logger.warning(
                "Ignoring unknown policy type %r in NetworkPolicy %s/%s",
                policy_type,
                np.metadata.namespace,
                np.metadata.name,
            )

    types: list[PolicyType] = []
    if ingress:
        types.append(PolicyType.INGRESS)
    if egress:
        types.append(PolicyType.EGRESS)
    elif has_egress_rules:
        # policyTypes arrived together with egress rules, so this should not
        # happen. Egress is never added against the declared types.
        logger.warning(
            "NetworkPolicy %s/%s has egress rules but its policyTypes do not "
            "include Egress",
            np.metadata.namespace,
            np.metadata.name,
        )

    if not types:
        logger.info(
            "NetworkPolicy %s/%s has no policyTypes; applying to Ingress only",
            np.metadata.namespace,
            np.metadata.name,
        )
        return DEFAULT_POLICY_TYPES
    return tuple(types)
