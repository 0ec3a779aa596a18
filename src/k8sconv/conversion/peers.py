"""Classify NetworkPolicy peers into selector and CIDR match fields."""

from __future__ import annotations

import ipaddress
import logging
from typing import NamedTuple

from k8sconv.conversion.constants import ORCHESTRATOR_SELECTOR
from k8sconv.conversion.selector import SelectorKind, compile_selector
from k8sconv.errors import MalformedInputError
from k8sconv.k8s.models import IPBlock, NetworkPolicyPeer

logger = logging.getLogger(__name__)


class PeerFields(NamedTuple):
    """Match fields derived from one peer. All empty means any peer."""

    selector: str = ""
    namespace_selector: str = ""
    nets: tuple[str, ...] = ()
    not_nets: tuple[str, ...] = ()


UNRESTRICTED = PeerFields()


def normalize_cidr(cidr: str) -> str:
    """Return the canonical network form of a CIDR, masking host bits."""
    if "/" not in cidr:
        logger.error("Failed to parse CIDR %r: missing prefix length", cidr)
        raise MalformedInputError(f"Invalid CIDR: {cidr!r}")
    try:
        return str(ipaddress.ip_network(cidr.strip(), strict=False))
    except ValueError as exc:
        logger.error("Failed to parse CIDR %r: %s", cidr, exc)
        raise MalformedInputError(f"Invalid CIDR: {cidr!r}") from exc


def classify_peer(
    peer: NetworkPolicyPeer | None,
    namespace: str,
    *,
    tolerate_malformed: bool = False,
) -> PeerFields:
    """Convert one peer into ``(selector, namespace_selector, nets, not_nets)``.

    ``namespace`` is the namespace of the enclosing policy. A malformed CIDR
    raises MalformedInputError unless ``tolerate_malformed`` is set, in which
    case the peer is logged and treated as unrestricted.
    """
    if peer is None:
        return UNRESTRICTED

    if peer.pod_selector is not None:
        return PeerFields(
            selector=compile_selector(peer.pod_selector, SelectorKind.POD)
        )

    if peer.namespace_selector is not None:
        # Still only match Kubernetes endpoints inside the selected namespaces.
        return PeerFields(
            selector=ORCHESTRATOR_SELECTOR,
            namespace_selector=compile_selector(
                peer.namespace_selector, SelectorKind.NAMESPACE
            ),
        )

    if peer.ip_block is not None:
        try:
            return _ip_block_fields(peer.ip_block)
        except MalformedInputError:
            if not tolerate_malformed:
                raise
            logger.warning(
                "Treating peer with malformed ipBlock %s in namespace %s as unrestricted",
                peer.ip_block.cidr,
                namespace,
            )
            return UNRESTRICTED

    return UNRESTRICTED


def _ip_block_fields(block: IPBlock) -> PeerFields:
    nets = (normalize_cidr(block.cidr),)
    not_nets = tuple(normalize_cidr(c) for c in block.except_)
    return PeerFields(nets=nets, not_nets=not_nets)
