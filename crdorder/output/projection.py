"""Project an ordered kind list onto CRD definition names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import structlog

_log = structlog.get_logger(component="output.projection")


def project_crd_names(
    ordered_kinds: Iterable[str],
    kind_to_crd_name: Mapping[str, str],
    default_order: Sequence[str] = (),
    include_unowned: bool = False,
) -> list[str]:
    """Return ``default_order`` followed by the CRD name of each ordered kind.

    Kinds without a CRD (built-in types, or kinds of ignored groups) are
    dropped. With *include_unowned*, CRD names of catalogued kinds that are
    not in *ordered_kinds* are appended in name order.
    """
    ordered_kinds = list(ordered_kinds)
    projected: list[str] = []
    dropped: list[str] = []
    for kind in ordered_kinds:
        crd_name = kind_to_crd_name.get(kind)
        if crd_name is None:
            dropped.append(kind)
            continue
        projected.append(crd_name)

    if dropped:
        _log.debug("kinds without a crd dropped", kinds=dropped)

    if include_unowned:
        seen = set(ordered_kinds)
        projected.extend(sorted(name for kind, name in kind_to_crd_name.items() if kind not in seen))

    return [*default_order, *projected]
