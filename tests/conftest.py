"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from k8sconv.k8s.models import (
    Container,
    ContainerPort,
    LabelSelector,
    Namespace,
    NetworkPolicy,
    NetworkPolicyIngressRule,
    NetworkPolicyPeer,
    NetworkPolicyPort,
    ObjectMeta,
    Pod,
)


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def policy_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "policy.yaml"


@pytest.fixture
def cluster_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "cluster.yaml"


@pytest.fixture
def bad_cidr_policy_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "bad_cidr_policy.yaml"


@pytest.fixture
def web_policy() -> NetworkPolicy:
    """Ingress from app=web on port 80, no policyTypes."""
    return NetworkPolicy(
        metadata=ObjectMeta(name="allow-web", namespace="default"),
        pod_selector=LabelSelector(match_labels={"role": "db"}),
        ingress=(
            NetworkPolicyIngressRule(
                from_=(
                    NetworkPolicyPeer(
                        pod_selector=LabelSelector(match_labels={"app": "web"})
                    ),
                ),
                ports=(NetworkPolicyPort(port=80),),
            ),
        ),
    )


@pytest.fixture
def web_pod() -> Pod:
    return Pod(
        metadata=ObjectMeta(
            name="web-1",
            namespace="billing",
            labels={"app": "web"},
            uid="uid-1",
            resource_version="42",
        ),
        node_name="node-a",
        pod_ip="192.168.1.10",
        containers=(
            Container(
                name="web",
                ports=(
                    ContainerPort(container_port=8080, name="http"),
                    ContainerPort(container_port=9090, name="metrics", protocol="UDP"),
                ),
            ),
        ),
    )


@pytest.fixture
def billing_namespace() -> Namespace:
    return Namespace(
        metadata=ObjectMeta(name="billing", labels={"team": "finance"})
    )
