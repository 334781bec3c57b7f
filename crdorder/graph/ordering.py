"""Level ordering of kinds by distinct-owner count.

The rank of a kind is how many distinct kinds own it, not how deep it sits
in an ownership chain. A kind owned by one deeply nested parent ranks the
same as a kind owned by one root. Consumers rely on this breadth ordering,
so it is not replaced with a longest-path sort.
"""

from __future__ import annotations

from collections.abc import Mapping

from crdorder.graph.models import OwnershipMap, RankGroup
from crdorder.models.config import OrderDirection


def compute_ranks(ownership: OwnershipMap) -> dict[str, int]:
    """Rank every owned kind by the number of distinct kinds that own it."""
    return {kind: len(owners) for kind, owners in ownership.items()}


def group_by_rank(ranks: Mapping[str, int], deterministic_tie_break: bool = True) -> list[RankGroup]:
    """Group kinds by rank, ascending by rank.

    With *deterministic_tie_break* the kinds in each group are sorted by
    name; otherwise they keep the enumeration order of *ranks*.
    """
    groups: dict[int, RankGroup] = {}
    for kind, rank in ranks.items():
        groups.setdefault(rank, RankGroup(rank=rank)).kinds.append(kind)

    ordered = [groups[rank] for rank in sorted(groups)]
    if deterministic_tie_break:
        for group in ordered:
            group.kinds.sort()
    return ordered


def order_kinds(
    ownership: OwnershipMap,
    deterministic_tie_break: bool = True,
    direction: OrderDirection = OrderDirection.MOST_DEPENDENT_FIRST,
) -> list[str]:
    """Emit every owned kind of *ownership* exactly once, grouped by rank.

    ``MOST_DEPENDENT_FIRST`` lists the kinds with the most distinct owners
    first and the fewest last. ``LEAST_DEPENDENT_FIRST`` is the opposite.
    Kinds that never appear as owned keys are not emitted.
    """
    groups = group_by_rank(compute_ranks(ownership), deterministic_tie_break=deterministic_tie_break)

    if direction is OrderDirection.LEAST_DEPENDENT_FIRST:
        return [kind for group in groups for kind in group.kinds]

    if deterministic_tie_break:
        # Highest rank first, names A-Z within a group.
        return [kind for group in reversed(groups) for kind in group.kinds]

    ascending = [kind for group in groups for kind in group.kinds]
    ascending.reverse()
    return ascending
