"""Exception hierarchy for crdorder.

CRDOrderError          -- Base class; the CLI turns any subclass into exit code 1.
MalformedCRDError      -- A CRD object is missing or mis-types a field we read.
ResourceNotFoundError  -- A resource type has no serving path (HTTP 404).
ConnectivityError      -- Cluster unreachable or client setup failed.
IncompleteDiscoveryError -- Instance listing failed for some types and the
                            caller asked for an all-or-nothing run.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crdorder.models.resources import InstanceListFailure


class CRDOrderError(Exception):
    """Base class for every error raised by crdorder."""


class MalformedCRDError(CRDOrderError):
    """Raised when a CustomResourceDefinition cannot be resolved to an identity."""

    def __init__(self, reason: str, crd_name: str = "", field: str = "") -> None:
        where = f" (field {field})" if field else ""
        name = crd_name or "<unknown>"
        super().__init__(f"Malformed CRD {name}{where}: {reason}")
        self.crd_name = crd_name
        self.field = field
        self.reason = reason


class ResourceNotFoundError(CRDOrderError):
    """Raised by a source when a resource type cannot be listed (404)."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"Resource not found: {resource}")
        self.resource = resource


class ConnectivityError(CRDOrderError):
    """Raised when the cluster cannot be reached or credentials are unusable."""


class IncompleteDiscoveryError(CRDOrderError):
    """Raised when instance listing failed and partial results are not accepted."""

    def __init__(self, failures: Sequence[InstanceListFailure]) -> None:
        names = ", ".join(sorted(f.identity.crd_name for f in failures))
        super().__init__(f"Instance listing failed for {len(failures)} resource type(s): {names}")
        self.failures = list(failures)
