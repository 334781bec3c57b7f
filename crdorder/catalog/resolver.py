"""Resolve a CustomResourceDefinition object to its canonical identity.

Every field read here is required. A missing group, version or plural
would make the enumerator list the wrong endpoint and silently drop a
type from the ordering, so any gap is a hard ``MalformedCRDError``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from crdorder.errors import MalformedCRDError
from crdorder.models.resources import ResourceIdentity

CRD_KIND = "CustomResourceDefinition"

_SCOPE_NAMESPACED = "Namespaced"
_SCOPE_CLUSTER = "Cluster"


def _require_mapping(obj: Any, path: str, crd_name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise MalformedCRDError("expected an object", crd_name=crd_name, field=path)
    return obj


def _require_str(parent: Mapping[str, Any], key: str, path: str, crd_name: str) -> str:
    value = parent.get(key)
    if value is None:
        raise MalformedCRDError("missing", crd_name=crd_name, field=path)
    if not isinstance(value, str) or not value:
        raise MalformedCRDError(f"expected a non-empty string, got {value!r}", crd_name=crd_name, field=path)
    return value


def _version_names(spec: Mapping[str, Any], crd_name: str) -> list[str]:
    versions = spec.get("versions")
    if versions is None:
        raise MalformedCRDError("missing", crd_name=crd_name, field="spec.versions")
    if isinstance(versions, str | bytes) or not isinstance(versions, Sequence):
        raise MalformedCRDError("expected a list", crd_name=crd_name, field="spec.versions")
    if not versions:
        raise MalformedCRDError("no versions declared", crd_name=crd_name, field="spec.versions")

    names = []
    for i, entry in enumerate(versions):
        path = f"spec.versions[{i}]"
        entry = _require_mapping(entry, path, crd_name)
        names.append(_require_str(entry, "name", f"{path}.name", crd_name))
    return names


def resolve_identity(crd: Mapping[str, Any] | None) -> ResourceIdentity:
    """Derive the ResourceIdentity of one CRD object.

    The version is the last entry of ``spec.versions``: declaration order
    is treated as oldest to newest.

    Raises:
        MalformedCRDError: *crd* is None, not a CRD, or lacks a required field.
    """
    if crd is None:
        raise MalformedCRDError("cannot resolve a resource from a nil object")
    if not isinstance(crd, Mapping):
        raise MalformedCRDError(f"expected an object, got {type(crd).__name__}")

    metadata = crd.get("metadata")
    crd_name = metadata.get("name", "") if isinstance(metadata, Mapping) else ""
    crd_name = crd_name if isinstance(crd_name, str) else ""

    kind = crd.get("kind")
    if kind != CRD_KIND:
        raise MalformedCRDError(
            f"cannot resolve a resource from non-CRD object {kind!r}",
            crd_name=crd_name,
            field="kind",
        )

    metadata = _require_mapping(metadata, "metadata", crd_name)
    crd_name = _require_str(metadata, "name", "metadata.name", crd_name)

    spec = _require_mapping(crd.get("spec"), "spec", crd_name)
    group = _require_str(spec, "group", "spec.group", crd_name)
    names = _require_mapping(spec.get("names"), "spec.names", crd_name)
    plural = _require_str(names, "plural", "spec.names.plural", crd_name)
    type_kind = _require_str(names, "kind", "spec.names.kind", crd_name)
    versions = _version_names(spec, crd_name)

    scope = _require_str(spec, "scope", "spec.scope", crd_name)
    if scope not in (_SCOPE_NAMESPACED, _SCOPE_CLUSTER):
        raise MalformedCRDError(
            f"expected {_SCOPE_NAMESPACED!r} or {_SCOPE_CLUSTER!r}, got {scope!r}",
            crd_name=crd_name,
            field="spec.scope",
        )

    return ResourceIdentity(
        group=group,
        version=versions[-1],
        resource=plural,
        kind=type_kind,
        namespaced=scope == _SCOPE_NAMESPACED,
        crd_name=crd_name,
    )
