"""Tests for workload endpoint naming."""

import pytest

from k8sconv.conversion.names import (
    WorkloadEndpointIdentifiers,
    parse_workload_endpoint_name,
    veth_name_for_workload,
)
from k8sconv.errors import MalformedInputError


def test_simple_name():
    ids = WorkloadEndpointIdentifiers(node="node1", pod="web")
    assert ids.calculate_name() == "node1-k8s-web-eth0"


def test_dashes_escaped():
    ids = WorkloadEndpointIdentifiers(node="node-1", pod="web-abc-1")
    assert ids.calculate_name() == "node--1-k8s-web--abc--1-eth0"


def test_missing_component_raises():
    with pytest.raises(MalformedInputError, match="pod"):
        WorkloadEndpointIdentifiers(node="node1", pod="").calculate_name()


def test_parse_round_trip():
    ids = WorkloadEndpointIdentifiers(node="node-1", pod="web-abc-1", endpoint="eth0")
    assert parse_workload_endpoint_name(ids.calculate_name()) == ids


@pytest.mark.parametrize("name", ["node1-k8s-web", "a-b-c-d-e", "a--k8s-b-", ""])
def test_parse_rejects_other_shapes(name):
    with pytest.raises(MalformedInputError):
        parse_workload_endpoint_name(name)


def test_veth_name_known_value():
    assert veth_name_for_workload("node1-k8s-web-eth0").startswith("cali")
    assert veth_name_for_workload("x") == "cali11f6ad8ec52"


def test_veth_name_deterministic():
    assert veth_name_for_workload("abc") == veth_name_for_workload("abc")
    assert veth_name_for_workload("abc") != veth_name_for_workload("abd")
