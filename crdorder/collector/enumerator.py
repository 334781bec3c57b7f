"""Concurrent enumeration of every instance of every catalogued resource type.

One asyncio task per resource type. Each task collects into its own list;
the lists are merged only after the TaskGroup has joined every task, so no
collection is shared while tasks are running.

Per-type failures are isolated at the task boundary: a 404 means "no
instances", anything else is logged and recorded, and neither stops the
other types. Cancellation is not caught and tears the whole group down.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from crdorder.collector.source import ResourceSource
from crdorder.errors import ResourceNotFoundError
from crdorder.models.resources import Instance, InstanceListFailure, ResourceIdentity

_log = structlog.get_logger(component="collector.enumerator")


@dataclass
class _TypeResult:
    identity: ResourceIdentity
    instances: list[Instance] = field(default_factory=list)
    not_found: bool = False
    failure: InstanceListFailure | None = None


@dataclass
class EnumerationResult:
    """Merged output of one enumeration run."""

    instances: list[Instance] = field(default_factory=list)
    failures: list[InstanceListFailure] = field(default_factory=list)
    empty: list[ResourceIdentity] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


class InstanceEnumerator:
    """Lists all instances of a set of resource types concurrently.

    Args:
        source:          Where instances are listed from.
        max_concurrency: Upper bound on in-flight list calls; 0 means
                         every type is requested at once.
    """

    def __init__(self, source: ResourceSource, max_concurrency: int = 0) -> None:
        if max_concurrency < 0:
            raise ValueError(f"max_concurrency must be >= 0, got {max_concurrency}")
        self._source = source
        self._max_concurrency = max_concurrency

    async def enumerate(self, identities: Iterable[ResourceIdentity]) -> EnumerationResult:
        """Fetch every instance of every identity and merge the results."""
        identities = list(identities)
        limiter = asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None
        start = time.monotonic()

        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(self._list_one(identity, limiter), name=f"list-{identity.crd_name}")
                for identity in identities
            ]

        # Fan-in: every task has finished once the TaskGroup exits.
        result = EnumerationResult()
        for task in tasks:
            type_result = task.result()
            result.instances.extend(type_result.instances)
            if type_result.not_found:
                result.empty.append(type_result.identity)
            if type_result.failure is not None:
                result.failures.append(type_result.failure)

        _log.info(
            "instances enumerated",
            types=len(identities),
            instances=len(result.instances),
            not_found=len(result.empty),
            failed=len(result.failures),
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return result

    async def _list_one(
        self,
        identity: ResourceIdentity,
        limiter: asyncio.Semaphore | None,
    ) -> _TypeResult:
        result = _TypeResult(identity=identity)
        try:
            async with limiter if limiter is not None else contextlib.nullcontext():
                _log.debug(
                    "listing instances",
                    crd=identity.crd_name,
                    resource=str(identity),
                    namespaced=identity.namespaced,
                )
                raw_items = await self._source.list_instances(identity)
            result.instances = [Instance.from_raw(raw) for raw in raw_items]
        except ResourceNotFoundError:
            _log.debug("no instances", crd=identity.crd_name, resource=str(identity))
            result.not_found = True
        except Exception as exc:
            _log.error(
                "cannot list instances",
                crd=identity.crd_name,
                resource=str(identity),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            result.failure = InstanceListFailure(identity=identity, error=str(exc))
        return result


async def enumerate_instances(
    source: ResourceSource,
    identities: Iterable[ResourceIdentity],
    max_concurrency: int = 0,
) -> EnumerationResult:
    """Convenience wrapper around :class:`InstanceEnumerator`."""
    return await InstanceEnumerator(source, max_concurrency=max_concurrency).enumerate(identities)
