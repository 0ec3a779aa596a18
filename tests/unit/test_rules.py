"""Tests for rule expansion."""

import pytest

from k8sconv.calico.models import Action, Port, Protocol
from k8sconv.conversion.rules import Direction, expand_rules
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import IPBlock, LabelSelector, NetworkPolicyPeer, NetworkPolicyPort


def _pod_peer(app: str) -> NetworkPolicyPeer:
    return NetworkPolicyPeer(pod_selector=LabelSelector(match_labels={"app": app}))


def test_no_peers_no_ports_yields_one_permissive_rule():
    rules = expand_rules((), (), "default", Direction.INGRESS)
    assert len(rules) == 1
    rule = rules[0]
    assert rule.action is Action.ALLOW
    assert rule.protocol is None
    assert rule.source.selector == ""
    assert rule.destination.ports == ()


def test_cross_product_size():
    peers = (_pod_peer("a"), _pod_peer("b"), _pod_peer("c"))
    ports = (NetworkPolicyPort(port=80), NetworkPolicyPort(port=443))
    rules = expand_rules(peers, ports, "default", Direction.INGRESS)
    assert len(rules) == 6


def test_missing_dimension_counts_as_one():
    peers = (_pod_peer("a"), _pod_peer("b"))
    assert len(expand_rules(peers, (), "default", Direction.EGRESS)) == 2
    ports = (NetworkPolicyPort(port=80), NetworkPolicyPort(port=81))
    assert len(expand_rules((), ports, "default", Direction.EGRESS)) == 2


def test_ordering_ports_outer_peers_inner():
    peers = (_pod_peer("a"), _pod_peer("b"))
    ports = (NetworkPolicyPort(port=80), NetworkPolicyPort(port=443))
    rules = expand_rules(peers, ports, "default", Direction.INGRESS)
    order = [
        (r.destination.ports[0].min_port, r.source.selector.rsplit("'", 2)[-2])
        for r in rules
    ]
    assert order == [(80, "a"), (80, "b"), (443, "a"), (443, "b")]


def test_ingress_populates_source_and_destination_ports():
    rules = expand_rules(
        (_pod_peer("web"),), (NetworkPolicyPort(port=80),), "default", Direction.INGRESS
    )
    rule = rules[0]
    assert "app == 'web'" in rule.source.selector
    assert rule.destination.selector == ""
    assert rule.destination.ports == (Port(80, 80),)
    assert rule.protocol is Protocol.TCP


def test_egress_populates_destination_only():
    peer = NetworkPolicyPeer(
        ip_block=IPBlock(cidr="10.0.0.0/8", except_=("10.1.0.0/16",))
    )
    rules = expand_rules(
        (peer,), (NetworkPolicyPort(port=53, protocol="UDP"),), "default", Direction.EGRESS
    )
    rule = rules[0]
    assert rule.source.nets == ()
    assert rule.destination.nets == ("10.0.0.0/8",)
    assert rule.destination.not_nets == ("10.1.0.0/16",)
    assert rule.destination.ports == (Port(53, 53),)
    assert rule.protocol is Protocol.UDP


def test_duplicates_are_kept():
    peers = (_pod_peer("a"), _pod_peer("a"))
    rules = expand_rules(peers, (), "default", Direction.INGRESS)
    assert len(rules) == 2
    assert rules[0] == rules[1]


def test_parse_failure_propagates():
    peer = NetworkPolicyPeer(ip_block=IPBlock(cidr="bogus/8"))
    with pytest.raises(MalformedInputError):
        expand_rules((peer,), (), "default", Direction.INGRESS)
