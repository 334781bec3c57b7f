"""End-to-end restore-order computation.

list CRDs -> catalog -> enumerate instances -> ownership map -> order kinds
-> project CRD names.

Only instance enumeration tolerates per-type failures. Every other stage
propagates its first error: a wrong or incomplete order is worse than none.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from crdorder.catalog import CRDCatalog, build_catalog
from crdorder.collector.enumerator import InstanceEnumerator
from crdorder.collector.source import ResourceSource
from crdorder.errors import IncompleteDiscoveryError
from crdorder.graph import build_ownership_map, order_kinds
from crdorder.models.config import OrderingConfig
from crdorder.models.resources import InstanceListFailure
from crdorder.output.projection import project_crd_names

_log = structlog.get_logger(component="pipeline")


@dataclass(frozen=True)
class RestoreOrder:
    """Everything one run computed."""

    catalog: CRDCatalog
    instance_count: int
    ownership: dict[str, frozenset[str]]
    ordered_kinds: list[str]
    crd_names: list[str]
    failures: list[InstanceListFailure] = field(default_factory=list)


async def compute_restore_order(
    source: ResourceSource,
    ordering: OrderingConfig | None = None,
) -> RestoreOrder:
    """Run discovery and ordering against *source*.

    Raises:
        MalformedCRDError:        a CRD could not be resolved.
        IncompleteDiscoveryError: instance listing failed for some type and
                                  ``ordering.fail_on_list_errors`` is set.
    """
    ordering = ordering or OrderingConfig()

    crds = await source.list_crds()
    _log.info("crds listed", count=len(crds))
    catalog = build_catalog(crds, ignored_groups=ordering.ignored_groups)

    enumerator = InstanceEnumerator(source, max_concurrency=ordering.max_concurrency)
    enumeration = await enumerator.enumerate(catalog.identities)
    if enumeration.failures and ordering.fail_on_list_errors:
        raise IncompleteDiscoveryError(enumeration.failures)

    ownership = build_ownership_map(enumeration.instances, catalog.known_groups)
    kinds = order_kinds(
        ownership,
        deterministic_tie_break=ordering.deterministic_tie_break,
        direction=ordering.direction,
    )
    crd_names = project_crd_names(
        kinds,
        catalog.kind_to_crd_name,
        default_order=ordering.default_order,
        include_unowned=ordering.include_unowned,
    )
    _log.info("restore order computed", kinds=len(kinds), crd_names=len(crd_names))

    return RestoreOrder(
        catalog=catalog,
        instance_count=len(enumeration.instances),
        ownership=ownership,
        ordered_kinds=kinds,
        crd_names=crd_names,
        failures=enumeration.failures,
    )
