"""Build the owned-kind -> owning-kinds map from instance ownerReferences."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from crdorder.graph.models import OwnershipEdge
from crdorder.models.resources import Instance

_log = structlog.get_logger(component="graph.ownership")


def iter_edges(instances: Iterable[Instance], known_groups: frozenset[str]) -> Iterator[OwnershipEdge]:
    """Yield one edge per ownerReference whose owner group is a known CRD group.

    References without a ``/`` in their apiVersion belong to the core group
    and are skipped before the membership check.
    """
    for instance in instances:
        for ref in instance.owner_references:
            if "/" not in ref.api_version:
                continue
            group = ref.group
            if group in known_groups:
                yield OwnershipEdge(owned=instance.kind, owner=ref.kind, owner_group=group)


def build_ownership_map(
    instances: Iterable[Instance],
    known_groups: frozenset[str],
) -> dict[str, frozenset[str]]:
    """Collapse ownership edges into owned kind -> set of distinct owning kinds.

    Kinds with no known-group owner do not appear as keys.
    """
    owners: dict[str, set[str]] = {}
    edges = 0
    for edge in iter_edges(instances, known_groups):
        owners.setdefault(edge.owned, set()).add(edge.owner)
        edges += 1

    ownership = {kind: frozenset(kind_owners) for kind, kind_owners in owners.items()}
    _log.info("ownership map built", owned_kinds=len(ownership), edges=edges)
    return ownership
