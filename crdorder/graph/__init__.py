"""Kind-level ownership graph and level ordering.

Built from instance ownerReferences restricted to known CRD groups, then
collapsed into a total order of kinds by distinct-owner count.
"""

from crdorder.graph.models import OwnershipEdge, OwnershipMap, RankGroup
from crdorder.graph.ordering import compute_ranks, group_by_rank, order_kinds
from crdorder.graph.ownership import build_ownership_map, iter_edges

__all__ = [
    "OwnershipEdge",
    "OwnershipMap",
    "RankGroup",
    "build_ownership_map",
    "compute_ranks",
    "group_by_rank",
    "iter_edges",
    "order_kinds",
]
