"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from crdorder.models.config import (
    CRDOrderConfig,
    KubeConfig,
    LogConfig,
    LogFormat,
    OrderDirection,
    OrderingConfig,
    OutputConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CRDORDER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_list(key: str) -> tuple[str, ...]:
    return split_list(_env(key, ""))


def split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated value, dropping blanks and surrounding spaces."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _default_kubeconfig() -> str:
    # KUBECONFIG may hold several paths; the first one is the primary file
    kubeconfig = os.environ.get("KUBECONFIG", "")
    if kubeconfig:
        return kubeconfig.split(os.pathsep)[0]
    return os.path.join(os.path.expanduser("~"), ".kube", "config")


def validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def validate_direction(value: str) -> OrderDirection:
    try:
        return OrderDirection(value.lower())
    except ValueError:
        valid = [d.value for d in OrderDirection]
        raise ValueError(f"Invalid direction: {value}. Must be one of {valid}") from None


def _validate_log_format(value: str) -> LogFormat:
    try:
        return LogFormat(value.lower())
    except ValueError:
        valid = [f.value for f in LogFormat]
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}") from None


def _validate_separator(value: str) -> str:
    if not value:
        raise ValueError("Output separator must not be empty")
    return value


def load_config() -> CRDOrderConfig:
    """Load configuration from CRDORDER_* environment variables."""
    explicit_kubeconfig = _env("KUBECONFIG", "") or os.environ.get("KUBECONFIG", "")
    return CRDOrderConfig(
        kube=KubeConfig(
            kubeconfig=_env("KUBECONFIG", "") or _default_kubeconfig(),
            kubeconfig_explicit=bool(explicit_kubeconfig),
            context=_env("CONTEXT", ""),
            impersonate_user=_env("IMPERSONATE_USER", ""),
            impersonate_group=_env("IMPERSONATE_GROUP", ""),
            request_timeout_seconds=_env_int("REQUEST_TIMEOUT", 60, min_val=5, max_val=600),
            page_size=_env_int("PAGE_SIZE", 500, min_val=1, max_val=5000),
        ),
        ordering=OrderingConfig(
            ignored_groups=frozenset(_env_list("IGNORED_GROUPS")),
            default_order=_env_list("DEFAULT_ORDER"),
            deterministic_tie_break=_env_bool("DETERMINISTIC_TIE_BREAK", True),
            direction=validate_direction(_env("DIRECTION", OrderDirection.MOST_DEPENDENT_FIRST.value)),
            include_unowned=_env_bool("INCLUDE_UNOWNED", False),
            fail_on_list_errors=_env_bool("FAIL_ON_LIST_ERRORS", False),
            max_concurrency=_env_int("MAX_CONCURRENCY", 0, min_val=0),
        ),
        output=OutputConfig(
            separator=_validate_separator(_env("SEPARATOR", ",")),
            flag_name=_env("FLAG_NAME", ""),
        ),
        log=LogConfig(
            level=validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
