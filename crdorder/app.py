"""Application bootstrap for crdorder.

Wires components in dependency order for a single run:
    config → logging → K8s client → source → pipeline

Teardown closes the API client whether the run succeeded, failed or was
cancelled. SIGTERM and SIGINT cancel the run; a cancelled run produces no
order.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from crdorder.collector.source import KubernetesResourceSource, build_api_client
from crdorder.errors import ConnectivityError
from crdorder.observability.logging import get_logger, setup_logging
from crdorder.pipeline import RestoreOrder, compute_restore_order

if TYPE_CHECKING:
    import structlog
    from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

    from crdorder.models.config import CRDOrderConfig


class _ComponentError(ConnectivityError):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


class CRDOrderApp:
    """Owns the API client for one run and coordinates its lifecycle.

    ``stop()`` is safe to call on an app that was never started.
    """

    def __init__(self, config: CRDOrderConfig) -> None:
        self.config = config
        self._api_client: k8s_client.ApiClient | None = None
        self._source: KubernetesResourceSource | None = None
        self._log: structlog.stdlib.BoundLogger | None = None

    async def start(self) -> None:
        """Configure logging and connect to the cluster.

        Raises _ComponentError if the client cannot be built.
        """
        setup_logging(self.config.log.level, self.config.log.format)
        self._log = get_logger("app")
        self._log.info("crdorder starting", version=_crdorder_version())
        await self._start_k8s_client()

    async def _start_k8s_client(self) -> None:
        assert self._log is not None
        self._log.debug("starting k8s client")
        kube = self.config.kube
        try:
            self._api_client = await build_api_client(kube)
        except Exception as exc:
            raise _ComponentError("k8s_client", exc) from exc
        self._source = KubernetesResourceSource(
            self._api_client,
            page_size=kube.page_size,
            request_timeout=kube.request_timeout_seconds,
        )

    async def run(self) -> RestoreOrder:
        """Compute the restore order. The app must be started."""
        assert self._source is not None, "start() must be called before run()"
        return await compute_restore_order(self._source, self.config.ordering)

    async def stop(self) -> None:
        """Close the ApiClient connection pool."""
        if self._api_client is None:
            return
        log = self._log or get_logger("app")
        try:
            await self._api_client.close()
        except Exception as exc:
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
        finally:
            self._api_client = None
            self._source = None


def _crdorder_version() -> str:
    from crdorder import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main(config: CRDOrderConfig) -> RestoreOrder:
    """Start the app, compute the order, always tear down.

    SIGTERM/SIGINT cancel the running task so in-flight list calls stop.
    """
    app = CRDOrderApp(config)
    loop = asyncio.get_running_loop()
    current = asyncio.current_task()

    def _request_cancel() -> None:
        if current is not None and not current.done():
            current.cancel()

    installed: list[signal.Signals] = []
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _request_cancel)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            # Not supported off the main thread or on some platforms.
            pass

    try:
        await app.start()
        return await app.run()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        await app.stop()
