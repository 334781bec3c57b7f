"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class OrderDirection(StrEnum):
    """Which end of the rank scale is emitted first."""

    MOST_DEPENDENT_FIRST = "most-dependent-first"
    LEAST_DEPENDENT_FIRST = "least-dependent-first"


class LogFormat(StrEnum):
    """Rendering of log lines on stderr."""

    JSON = "json"
    CONSOLE = "console"


@dataclass
class KubeConfig:
    """Cluster connection configuration."""

    kubeconfig: str = ""
    kubeconfig_explicit: bool = False
    context: str = ""
    impersonate_user: str = ""
    impersonate_group: str = ""
    request_timeout_seconds: int = 60
    page_size: int = 500


@dataclass
class OrderingConfig:
    """Discovery and ordering configuration."""

    ignored_groups: frozenset[str] = frozenset()
    default_order: tuple[str, ...] = ()
    deterministic_tie_break: bool = True
    direction: OrderDirection = OrderDirection.MOST_DEPENDENT_FIRST
    include_unowned: bool = False
    fail_on_list_errors: bool = False
    max_concurrency: int = 0


@dataclass
class OutputConfig:
    """Result formatting configuration."""

    separator: str = ","
    flag_name: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: LogFormat = LogFormat.JSON


@dataclass
class CRDOrderConfig:
    """Top-level crdorder configuration."""

    kube: KubeConfig = field(default_factory=KubeConfig)
    ordering: OrderingConfig = field(default_factory=OrderingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
