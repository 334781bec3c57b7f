"""Data structures for the kind-level ownership graph."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

# owned kind -> distinct owning kinds
OwnershipMap = Mapping[str, frozenset[str]]


@dataclass(frozen=True)
class OwnershipEdge:
    """``owned`` kind has at least one instance owned by an ``owner`` kind."""

    owned: str
    owner: str
    owner_group: str


@dataclass
class RankGroup:
    """Kinds sharing the same distinct-owner count."""

    rank: int
    kinds: list[str] = field(default_factory=list)
