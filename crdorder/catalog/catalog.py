"""CRD catalog: every discovered CRD keyed by definition name."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from crdorder.catalog.resolver import resolve_identity
from crdorder.models.resources import ResourceIdentity

_log = structlog.get_logger(component="catalog")


@dataclass(frozen=True)
class CRDCatalog:
    """Resolved CRDs and the indexes derived from them.

    Built once per run by :func:`build_catalog` and only read afterwards.
    """

    entries: Mapping[str, ResourceIdentity] = field(default_factory=dict)
    ignored: tuple[str, ...] = ()

    @property
    def identities(self) -> list[ResourceIdentity]:
        return list(self.entries.values())

    @property
    def known_groups(self) -> frozenset[str]:
        """Groups whose kinds count as owners in the ownership graph."""
        return frozenset(identity.group for identity in self.entries.values())

    @property
    def kind_to_crd_name(self) -> dict[str, str]:
        """Reverse index from kind to CRD name; the later CRD wins on duplicates."""
        return {identity.kind: name for name, identity in self.entries.items()}

    def __len__(self) -> int:
        return len(self.entries)


def build_catalog(
    crds: Iterable[Mapping[str, Any]],
    ignored_groups: Iterable[str] = (),
) -> CRDCatalog:
    """Resolve every CRD and drop those in *ignored_groups*.

    Exclusion happens here, before any ownership work, so ignored groups
    never reach ``known_groups`` and their kinds are never owners.

    Raises:
        MalformedCRDError: any CRD cannot be resolved.
    """
    ignored_set = frozenset(ignored_groups)
    entries: dict[str, ResourceIdentity] = {}
    ignored: list[str] = []
    kinds: dict[str, str] = {}

    for crd in crds:
        identity = resolve_identity(crd)
        if identity.group in ignored_set:
            ignored.append(identity.crd_name)
            _log.debug("crd ignored", crd=identity.crd_name, group=identity.group)
            continue
        previous = kinds.get(identity.kind)
        if previous is not None and previous != identity.crd_name:
            _log.warning(
                "duplicate kind across crds; last one wins",
                kind=identity.kind,
                previous=previous,
                crd=identity.crd_name,
            )
        kinds[identity.kind] = identity.crd_name
        entries[identity.crd_name] = identity

    catalog = CRDCatalog(entries=entries, ignored=tuple(ignored))
    _log.info(
        "crd catalog built",
        crds=len(catalog),
        groups=sorted(catalog.known_groups),
        ignored=len(ignored),
    )
    return catalog
