"""Collector package for crdorder.

Lists CRDs and their live instances from the cluster.

Submodules
----------
source     -- ResourceSource protocol and the kubernetes-asyncio implementation.
enumerator -- InstanceEnumerator: one task per resource type, fan-in merge.
"""

from crdorder.collector.enumerator import EnumerationResult, InstanceEnumerator, enumerate_instances
from crdorder.collector.source import KubernetesResourceSource, ResourceSource, build_api_client

__all__ = [
    "EnumerationResult",
    "InstanceEnumerator",
    "KubernetesResourceSource",
    "ResourceSource",
    "build_api_client",
    "enumerate_instances",
]
