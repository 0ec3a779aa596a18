"""Convert namespaces into profiles."""

from __future__ import annotations

from k8sconv.calico.models import ALLOW_ALL_RULE, Profile
from k8sconv.conversion.constants import (
    NAMESPACE_LABEL_PREFIX,
    NAMESPACE_PROFILE_NAME_PREFIX,
)
from k8sconv.errors import ConversionError
from k8sconv.k8s.models import Namespace


def namespace_to_profile(ns: Namespace) -> Profile:
    """Build the default-allow profile for a namespace.

    The namespace labels are prefixed so endpoints that inherit them can be
    told apart from their own pod labels.
    """
    labels = {NAMESPACE_LABEL_PREFIX + k: v for k, v in ns.metadata.labels.items()}
    return Profile(
        name=NAMESPACE_PROFILE_NAME_PREFIX + ns.metadata.name,
        ingress_rules=(ALLOW_ALL_RULE,),
        egress_rules=(ALLOW_ALL_RULE,),
        labels_to_apply=labels,
        uid=ns.metadata.uid,
        creation_timestamp=ns.metadata.creation_timestamp,
        revision=ns.metadata.resource_version,
    )


def profile_name_to_namespace(profile_name: str) -> str:
    """Return the namespace a profile was generated from."""
    if not profile_name.startswith(NAMESPACE_PROFILE_NAME_PREFIX):
        raise ConversionError(f"Profile {profile_name} is not backed by a Namespace")
    return profile_name[len(NAMESPACE_PROFILE_NAME_PREFIX) :]
