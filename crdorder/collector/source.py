"""Object sources the collector lists CRDs and instances from.

ResourceSource           -- Protocol consumed by the pipeline.
KubernetesResourceSource -- kubernetes-asyncio implementation using the
                            CustomObjectsApi, which serves any
                            group/version/plural as plain dicts.
build_api_client         -- ApiClient factory: kubeconfig or in-cluster
                            config, plus impersonation headers.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Protocol

import structlog
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from crdorder.errors import ConnectivityError, ResourceNotFoundError

if TYPE_CHECKING:
    from crdorder.models.config import KubeConfig
    from crdorder.models.resources import ResourceIdentity

_log = structlog.get_logger(component="collector.source")

CRD_GROUP = "apiextensions.k8s.io"
CRD_VERSION = "v1"
CRD_PLURAL = "customresourcedefinitions"


class ResourceSource(Protocol):
    """Read-only access to the cluster object store."""

    async def list_crds(self) -> list[dict[str, Any]]:
        """Return every CustomResourceDefinition object."""
        ...

    async def list_instances(self, identity: ResourceIdentity) -> list[dict[str, Any]]:
        """Return every instance of *identity*, across all namespaces.

        Raises:
            ResourceNotFoundError: the type has no serving path.
        """
        ...


class KubernetesResourceSource:
    """ResourceSource backed by a kubernetes-asyncio ApiClient."""

    def __init__(
        self,
        api_client: k8s_client.ApiClient,
        page_size: int = 500,
        request_timeout: int = 60,
    ) -> None:
        self._api = k8s_client.CustomObjectsApi(api_client)
        self._page_size = page_size
        self._request_timeout = request_timeout

    async def list_crds(self) -> list[dict[str, Any]]:
        try:
            return await self._list_all(CRD_GROUP, CRD_VERSION, CRD_PLURAL)
        except ResourceNotFoundError as exc:
            raise ConnectivityError(f"CRD API {CRD_GROUP}/{CRD_VERSION} is not served") from exc
        except ApiException as exc:
            raise ConnectivityError(f"cannot list CRDs: {exc.status} {exc.reason}") from exc
        except (OSError, TimeoutError) as exc:
            raise ConnectivityError(f"cannot reach the cluster: {exc}") from exc

    async def list_instances(self, identity: ResourceIdentity) -> list[dict[str, Any]]:
        # The cluster-wide list endpoint also serves namespaced types across
        # all namespaces, so both scopes share one call.
        return await self._list_all(identity.group, identity.version, identity.resource)

    async def _list_all(self, group: str, version: str, plural: str) -> list[dict[str, Any]]:
        """List every page of group/version/plural, following continue tokens."""
        items: list[dict[str, Any]] = []
        token = ""
        while True:
            kwargs: dict[str, Any] = {"limit": self._page_size, "_request_timeout": self._request_timeout}
            if token:
                kwargs["_continue"] = token
            try:
                page = await self._api.list_cluster_custom_object(group, version, plural, **kwargs)
            except ApiException as exc:
                if exc.status == 404:
                    raise ResourceNotFoundError(f"{plural}.{group}/{version}") from exc
                raise
            items.extend(_with_type_meta(page))
            token = (page.get("metadata") or {}).get("continue") or ""
            if not token:
                return items


def _with_type_meta(page: dict[str, Any]) -> list[dict[str, Any]]:
    """Fill in apiVersion and kind on list items that omit them.

    List responses carry the type once (``FooList``); items inherit ``Foo``.
    """
    list_kind = str(page.get("kind", ""))
    item_kind = list_kind[: -len("List")] if list_kind.endswith("List") else ""
    api_version = page.get("apiVersion", "")
    items = []
    for item in page.get("items") or []:
        if item_kind and not item.get("kind"):
            item = {**item, "kind": item_kind}
        if api_version and not item.get("apiVersion"):
            item = {**item, "apiVersion": api_version}
        items.append(item)
    return items


async def build_api_client(kube: KubeConfig) -> k8s_client.ApiClient:
    """Create an ApiClient from kubeconfig (or in-cluster config) with impersonation.

    Raises:
        ConnectivityError: no usable configuration could be loaded.
    """
    configuration = k8s_client.Configuration()
    if kube.kubeconfig and not os.path.exists(kube.kubeconfig) and (kube.kubeconfig_explicit or kube.context):
        raise ConnectivityError(f"kubeconfig {kube.kubeconfig} does not exist")

    try:
        if kube.kubeconfig and os.path.exists(kube.kubeconfig):
            await k8s_config.load_kube_config(
                config_file=kube.kubeconfig,
                context=kube.context or None,
                client_configuration=configuration,
            )
            _log.info("k8s client configured from kubeconfig", path=kube.kubeconfig, context=kube.context or None)
        else:
            k8s_config.load_incluster_config(client_configuration=configuration)
            _log.info("k8s client configured from in-cluster service account")
    except k8s_config.ConfigException as exc:
        raise ConnectivityError(f"cannot load cluster configuration: {exc}") from exc

    api_client = k8s_client.ApiClient(configuration=configuration)
    if kube.impersonate_user:
        api_client.set_default_header("Impersonate-User", kube.impersonate_user)
    if kube.impersonate_group:
        api_client.set_default_header("Impersonate-Group", kube.impersonate_group)
    if kube.impersonate_user or kube.impersonate_group:
        _log.info(
            "impersonation enabled",
            user=kube.impersonate_user or None,
            group=kube.impersonate_group or None,
        )
    return api_client
