"""Tests for Calico manifest serialization."""

import json

import pytest
import yaml

from k8sconv.calico.export import dump, to_dict
from k8sconv.conversion.namespace import namespace_to_profile
from k8sconv.conversion.policy import network_policy_to_calico
from k8sconv.conversion.workload import pod_to_workload_endpoint
from k8sconv.k8s.models import Namespace, NetworkPolicy, Node, ObjectMeta, Pod


def test_network_policy_dict(web_policy: NetworkPolicy):
    data = to_dict(network_policy_to_calico(web_policy))
    assert data["apiVersion"] == "projectcalico.org/v2"
    assert data["kind"] == "NetworkPolicy"
    assert data["metadata"] == {"name": "knp.default.allow-web", "namespace": "default"}
    assert data["spec"]["order"] == 1000.0
    assert data["spec"]["types"] == ["Ingress"]
    assert "egress" not in data["spec"]
    assert data["spec"]["ingress"] == [
        {
            "action": "allow",
            "protocol": "tcp",
            "source": {
                "selector": "projectcalico.org/orchestrator == 'k8s' && app == 'web'"
            },
            "destination": {"ports": [80]},
        }
    ]


def test_workload_endpoint_dict(web_pod: Pod):
    data = to_dict(pod_to_workload_endpoint(web_pod))
    assert data["kind"] == "WorkloadEndpoint"
    assert data["metadata"]["labels"]["projectcalico.org/orchestrator"] == "k8s"
    assert data["spec"]["ipNetworks"] == ["192.168.1.10/32"]
    assert data["spec"]["ports"][1] == {"name": "metrics", "protocol": "udp", "port": 9090}


def test_profile_dict(billing_namespace: Namespace):
    data = to_dict(namespace_to_profile(billing_namespace))
    assert data["spec"] == {
        "ingress": [{"action": "allow"}],
        "egress": [{"action": "allow"}],
        "labelsToApply": {"pcns.team": "finance"},
    }


def test_dump_yaml_round_trips(web_policy: NetworkPolicy, billing_namespace: Namespace):
    text = dump([network_policy_to_calico(web_policy), namespace_to_profile(billing_namespace)])
    docs = list(yaml.safe_load_all(text))
    assert [d["kind"] for d in docs] == ["NetworkPolicy", "Profile"]


def test_dump_json(billing_namespace: Namespace):
    data = json.loads(dump([namespace_to_profile(billing_namespace)], "json"))
    assert data[0]["metadata"]["name"] == "kns.billing"


def test_dump_is_deterministic(web_policy: NetworkPolicy):
    assert dump([network_policy_to_calico(web_policy)]) == dump(
        [network_policy_to_calico(web_policy)]
    )


def _namespace(labels: dict) -> Namespace:
    return Namespace(metadata=ObjectMeta(name="billing", labels=labels))


@pytest.mark.parametrize("fmt", ["yaml", "json"])
def test_label_order_does_not_change_output(fmt):
    a = namespace_to_profile(_namespace({"team": "finance", "env": "prod"}))
    b = namespace_to_profile(_namespace({"env": "prod", "team": "finance"}))
    assert a == b
    assert dump([a], fmt) == dump([b], fmt)


def test_endpoint_labels_and_node_annotations_sorted():
    pod = Pod(
        metadata=ObjectMeta(
            name="web-1", namespace="billing", labels={"zone": "a", "app": "web"}
        ),
        node_name="node-a",
    )
    labels = to_dict(pod_to_workload_endpoint(pod))["metadata"]["labels"]
    assert list(labels) == sorted(labels)

    node = Node(metadata=ObjectMeta(name="n", annotations={"z": "1", "a": "2"}))
    assert list(to_dict(node)["metadata"]["annotations"]) == ["a", "z"]


def test_unknown_format_raises(billing_namespace: Namespace):
    with pytest.raises(ValueError, match="format"):
        dump([namespace_to_profile(billing_namespace)], "xml")


def test_unknown_object_raises():
    with pytest.raises(TypeError):
        to_dict(object())
