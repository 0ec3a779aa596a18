"""Tests for namespace to profile conversion."""

import pytest

from k8sconv.calico.models import Action, Rule
from k8sconv.conversion.namespace import namespace_to_profile, profile_name_to_namespace
from k8sconv.errors import ConversionError
from k8sconv.k8s.models import Namespace, ObjectMeta


def test_billing_namespace(billing_namespace: Namespace):
    profile = namespace_to_profile(billing_namespace)
    assert profile.name == "kns.billing"
    assert profile.labels_to_apply == {"pcns.team": "finance"}
    assert profile.ingress_rules == (Rule(action=Action.ALLOW),)
    assert profile.egress_rules == (Rule(action=Action.ALLOW),)


def test_namespace_without_labels():
    profile = namespace_to_profile(Namespace(metadata=ObjectMeta(name="empty")))
    assert profile.labels_to_apply == {}


def test_labels_not_aliased(billing_namespace: Namespace):
    profile = namespace_to_profile(billing_namespace)
    profile.labels_to_apply["pcns.extra"] = "x"
    assert billing_namespace.metadata.labels == {"team": "finance"}


def test_profile_name_to_namespace():
    assert profile_name_to_namespace("kns.billing") == "billing"


def test_profile_not_backed_by_namespace():
    with pytest.raises(ConversionError, match="not backed"):
        profile_name_to_namespace("custom-profile")
