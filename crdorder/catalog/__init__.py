"""CRD discovery: identity resolution and the catalog built from it."""

from crdorder.catalog.catalog import CRDCatalog, build_catalog
from crdorder.catalog.resolver import CRD_KIND, resolve_identity

__all__ = [
    "CRD_KIND",
    "CRDCatalog",
    "build_catalog",
    "resolve_identity",
]
