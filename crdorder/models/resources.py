"""Resource identity and instance data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResourceIdentity:
    """Canonical type identity of one CRD.

    ``resource`` is the plural lowercase name used to address the API;
    ``kind`` is the PascalCase name that appears in ownerReferences.
    """

    group: str
    version: str
    resource: str
    kind: str
    namespaced: bool
    crd_name: str = ""

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}/{self.version}"


@dataclass(frozen=True)
class OwnerReference:
    """The subset of an ownerReference entry we read."""

    api_version: str
    kind: str
    name: str = ""

    @property
    def group(self) -> str:
        """API group of the owner; empty for the core group (``v1``)."""
        if "/" not in self.api_version:
            return ""
        return self.api_version.split("/", 1)[0]


@dataclass(frozen=True)
class Instance:
    """A live custom resource, reduced to what the ownership graph needs."""

    kind: str
    name: str
    namespace: str = ""
    owner_references: tuple[OwnerReference, ...] = ()

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Instance:
        """Parse a raw API object.

        Raises:
            ValueError: the object has no kind or an ownerReference entry
                lacks a non-empty ``apiVersion`` or ``kind``.
        """
        kind = raw.get("kind")
        if not isinstance(kind, str) or not kind:
            raise ValueError("object has no kind")
        metadata = raw.get("metadata") or {}
        name = str(metadata.get("name", ""))
        refs: list[OwnerReference] = []
        for i, ref in enumerate(metadata.get("ownerReferences") or []):
            api_version = ref.get("apiVersion") if isinstance(ref, dict) else None
            ref_kind = ref.get("kind") if isinstance(ref, dict) else None
            if not isinstance(api_version, str) or not api_version or not isinstance(ref_kind, str) or not ref_kind:
                raise ValueError(f"{kind}/{name}: ownerReferences[{i}] needs non-empty apiVersion and kind")
            refs.append(OwnerReference(api_version=api_version, kind=ref_kind, name=str(ref.get("name", ""))))
        return cls(
            kind=kind,
            name=name,
            namespace=str(metadata.get("namespace", "")),
            owner_references=tuple(refs),
        )


@dataclass(frozen=True)
class InstanceListFailure:
    """One resource type whose instances could not be listed."""

    identity: ResourceIdentity
    error: str
