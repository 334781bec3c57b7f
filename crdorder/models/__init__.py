"""Core data structures for crdorder."""

from crdorder.models.config import (
    CRDOrderConfig,
    KubeConfig,
    LogConfig,
    LogFormat,
    OrderDirection,
    OrderingConfig,
    OutputConfig,
)
from crdorder.models.resources import (
    Instance,
    InstanceListFailure,
    OwnerReference,
    ResourceIdentity,
)

__all__ = [
    "CRDOrderConfig",
    "Instance",
    "InstanceListFailure",
    "KubeConfig",
    "LogConfig",
    "LogFormat",
    "OrderDirection",
    "OrderingConfig",
    "OutputConfig",
    "OwnerReference",
    "ResourceIdentity",
]
