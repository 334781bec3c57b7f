"""Render an ordered name list as a single output line."""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_FLAG_NAME = "restore-resource-priorities"


def format_order(names: Iterable[str], separator: str = ",", flag_name: str | None = None) -> str:
    """Join *names* with *separator*, optionally as ``--flag_name=<joined>``."""
    joined = separator.join(names)
    if not flag_name:
        return joined
    flag = flag_name if flag_name.startswith("--") else f"--{flag_name}"
    return f"{flag}={joined}"
