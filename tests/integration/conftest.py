"""Shared fixtures for crdorder integration tests.

Provides CRD / instance factories and an in-memory ResourceSource so the
enumerator and the full pipeline can be exercised without a cluster.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from crdorder.errors import ResourceNotFoundError
from crdorder.models.resources import ResourceIdentity

# ---------------------------------------------------------------------------
# Object factories
# ---------------------------------------------------------------------------


def make_crd(
    kind: str,
    group: str = "eks.example.com",
    plural: str | None = None,
    versions: tuple[str, ...] = ("v1alpha1", "v1"),
    scope: str = "Namespaced",
) -> dict[str, Any]:
    """Create a CustomResourceDefinition object as the API returns it."""
    plural = plural or f"{kind.lower()}s"
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": f"{plural}.{group}"},
        "spec": {
            "group": group,
            "names": {"kind": kind, "plural": plural, "singular": kind.lower(), "listKind": f"{kind}List"},
            "scope": scope,
            "versions": [{"name": v, "served": True, "storage": v == versions[-1]} for v in versions],
        },
    }


def make_instance(
    kind: str,
    name: str,
    namespace: str = "default",
    owners: list[tuple[str, str]] | None = None,
    api_version: str = "eks.example.com/v1",
) -> dict[str, Any]:
    """Create a custom resource instance; *owners* are (apiVersion, kind) pairs."""
    metadata: dict[str, Any] = {"name": name, "namespace": namespace}
    if owners:
        metadata["ownerReferences"] = [
            {"apiVersion": av, "kind": k, "name": f"{k.lower()}-owner", "uid": f"uid-{k}-{i}"}
            for i, (av, k) in enumerate(owners)
        ]
    return {"apiVersion": api_version, "kind": kind, "metadata": metadata}


# ---------------------------------------------------------------------------
# Fake source
# ---------------------------------------------------------------------------


class FakeSource:
    """In-memory ResourceSource.

    ``responses`` maps a CRD name to either a list of raw instances or an
    exception to raise. CRDs without an entry return no instances.
    """

    def __init__(
        self,
        crds: list[dict[str, Any]] | None = None,
        responses: dict[str, list[dict[str, Any]] | Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.crds = crds or []
        self.responses = responses or {}
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_crds(self) -> list[dict[str, Any]]:
        return list(self.crds)

    async def list_instances(self, identity: ResourceIdentity) -> list[dict[str, Any]]:
        self.calls.append(identity.crd_name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responses.get(identity.crd_name, [])
            if isinstance(response, Exception):
                raise response
            return list(response)
        finally:
            self.in_flight -= 1


def not_found(crd_name: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(crd_name)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def nodegroup_crds() -> list[dict[str, Any]]:
    """NodegroupDeployment -> Nodegroup -> IAMRole, plus an unrelated Bucket."""
    return [
        make_crd("NodegroupDeployment"),
        make_crd("Nodegroup"),
        make_crd("IAMRole", group="iam.example.com", scope="Cluster"),
        make_crd("Bucket", group="storage.example.com"),
    ]


@pytest.fixture
def nodegroup_source(nodegroup_crds: list[dict[str, Any]]) -> FakeSource:
    return FakeSource(
        crds=nodegroup_crds,
        responses={
            "nodegroupdeployments.eks.example.com": [make_instance("NodegroupDeployment", "ngd-a")],
            "nodegroups.eks.example.com": [
                make_instance("Nodegroup", "ng-a", owners=[("eks.example.com/v1", "NodegroupDeployment")]),
                make_instance("Nodegroup", "ng-b", owners=[("eks.example.com/v1", "NodegroupDeployment")]),
            ],
            "iamroles.iam.example.com": [
                make_instance(
                    "IAMRole",
                    "role-a",
                    namespace="",
                    owners=[("eks.example.com/v1", "Nodegroup"), ("v1", "ServiceAccount")],
                    api_version="iam.example.com/v1",
                ),
            ],
            "buckets.storage.example.com": [
                make_instance("Bucket", "b", owners=[("apps/v1", "Deployment")], api_version="storage.example.com/v1"),
            ],
        },
    )
