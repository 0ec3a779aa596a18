"""Expand NetworkPolicy ingress/egress blocks into primitive allow rules."""

from __future__ import annotations

import enum
from collections.abc import Sequence

from k8sconv.calico.models import Action, EntityRule, Rule
from k8sconv.conversion.peers import classify_peer
from k8sconv.conversion.ports import normalize_port
from k8sconv.k8s.models import NetworkPolicyPeer, NetworkPolicyPort


class Direction(enum.Enum):
    INGRESS = "ingress"
    EGRESS = "egress"


def expand_rules(
    peers: Sequence[NetworkPolicyPeer],
    ports: Sequence[NetworkPolicyPort],
    namespace: str,
    direction: Direction,
    *,
    tolerate_malformed: bool = False,
) -> tuple[Rule, ...]:
    """Build one rule per (port, peer) pair of a single ingress or egress block.

    A Calico rule holds one selector set and one port set, so a block with
    ``p`` ports and ``q`` peers becomes ``p * q`` rules, ordered by port then
    peer. A missing dimension counts as a single "match anything" entry.
    Rules are not merged or deduplicated.
    """
    peer_list: list[NetworkPolicyPeer | None] = list(peers) or [None]
    port_list: list[NetworkPolicyPort | None] = list(ports) or [None]

    rules: list[Rule] = []
    for port in port_list:
        for peer in peer_list:
            protocol, dst_ports = normalize_port(port)
            selector, ns_selector, nets, not_nets = classify_peer(
                peer, namespace, tolerate_malformed=tolerate_malformed
            )
            if direction is Direction.INGRESS:
                rules.append(
                    Rule(
                        action=Action.ALLOW,
                        protocol=protocol,
                        source=EntityRule(
                            selector=selector,
                            namespace_selector=ns_selector,
                            nets=nets,
                            not_nets=not_nets,
                        ),
                        destination=EntityRule(ports=dst_ports),
                    )
                )
            else:
                rules.append(
                    Rule(
                        action=Action.ALLOW,
                        protocol=protocol,
                        destination=EntityRule(
                            selector=selector,
                            namespace_selector=ns_selector,
                            nets=nets,
                            not_nets=not_nets,
                            ports=dst_ports,
                        ),
                    )
                )
    return tuple(rules)
