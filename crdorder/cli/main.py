"""Click command line for crdorder.

    crdorder [--kubeconfig PATH] [--as USER] [--as-group GROUP] order
    crdorder crds --default-order namespaces,serviceaccounts

Options override the CRDORDER_* environment configuration. The result is
printed as one line on stdout; logs go to stderr.
"""

from __future__ import annotations

import asyncio
import dataclasses
import functools
from collections.abc import Callable
from typing import Any

import click

from crdorder.app import main as run_app
from crdorder.config import load_config, split_list, validate_direction, validate_log_level
from crdorder.errors import CRDOrderError
from crdorder.models.config import CRDOrderConfig, LogFormat, OrderDirection
from crdorder.observability.logging import get_logger
from crdorder.output import DEFAULT_FLAG_NAME, format_order
from crdorder.pipeline import RestoreOrder

_EXIT_FATAL = 1
_EXIT_CANCELLED = 130


@click.group()
@click.option("--kubeconfig", type=click.Path(dir_okay=False), default=None, help="Path to the kubeconfig file.")
@click.option("--context", default=None, help="Kubeconfig context to use.")
@click.option("--as", "impersonate_user", default=None, help="User to impersonate.")
@click.option("--as-group", "impersonate_group", default=None, help="Group to impersonate.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
)
@click.option("--log-format", type=click.Choice([f.value for f in LogFormat]), default=None)
@click.pass_context
def cli(
    ctx: click.Context,
    kubeconfig: str | None,
    context: str | None,
    impersonate_user: str | None,
    impersonate_group: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """Compute a restore order for custom resources from their ownerReferences."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(f"invalid environment configuration: {exc}") from exc

    kube = config.kube
    config.kube = dataclasses.replace(
        kube,
        kubeconfig=kubeconfig if kubeconfig is not None else kube.kubeconfig,
        kubeconfig_explicit=kube.kubeconfig_explicit or kubeconfig is not None,
        context=context if context is not None else kube.context,
        impersonate_user=impersonate_user if impersonate_user is not None else kube.impersonate_user,
        impersonate_group=impersonate_group if impersonate_group is not None else kube.impersonate_group,
    )
    if log_level is not None:
        config.log.level = validate_log_level(log_level)
    if log_format is not None:
        config.log.format = LogFormat(log_format)
    ctx.obj = config


def _ordering_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that computes an order."""

    @click.option(
        "--ignore-group",
        "ignore_groups",
        multiple=True,
        help="CRD group to exclude from discovery and ownership (repeatable).",
    )
    @click.option(
        "--direction",
        type=click.Choice([d.value for d in OrderDirection]),
        default=None,
        help="Emit the most or the least dependent kinds first.",
    )
    @click.option("--no-tie-break", is_flag=True, default=False, help="Keep kinds of equal rank in discovery order.")
    @click.option("--separator", default=None, help="Separator between names (default ',').")
    @click.option("--max-concurrency", type=click.IntRange(min=0), default=None, help="0 lists every type at once.")
    @click.option(
        "--fail-on-list-errors",
        is_flag=True,
        default=False,
        help="Fail instead of ordering when some type cannot be listed.",
    )
    @functools.wraps(fn)
    def wrapper(
        *args: Any,
        ignore_groups: tuple[str, ...],
        direction: str | None,
        no_tie_break: bool,
        separator: str | None,
        max_concurrency: int | None,
        fail_on_list_errors: bool,
        **kwargs: Any,
    ) -> Any:
        config: CRDOrderConfig = click.get_current_context().obj
        ordering = config.ordering
        if ignore_groups:
            groups = {g for value in ignore_groups for g in split_list(value)}
            ordering.ignored_groups = ordering.ignored_groups | groups
        if direction is not None:
            ordering.direction = validate_direction(direction)
        if no_tie_break:
            ordering.deterministic_tie_break = False
        if max_concurrency is not None:
            ordering.max_concurrency = max_concurrency
        if fail_on_list_errors:
            ordering.fail_on_list_errors = True
        if separator is not None:
            if not separator:
                raise click.BadParameter("must not be empty", param_hint="--separator")
            config.output.separator = separator
        return fn(*args, **kwargs)

    return wrapper


def _compute(config: CRDOrderConfig) -> RestoreOrder:
    """Run the async app, mapping failures to exit codes.

    Logging is configured by the app on start, so errors are logged with
    the same renderer as the run itself.
    """
    try:
        return asyncio.run(run_app(config))
    except CRDOrderError as exc:
        get_logger("cli").critical("fatal error", error=str(exc), error_type=type(exc).__name__)
        raise SystemExit(_EXIT_FATAL) from exc
    except (KeyboardInterrupt, asyncio.CancelledError) as exc:
        get_logger("cli").warning("cancelled; no order produced")
        raise SystemExit(_EXIT_CANCELLED) from exc


@cli.command("order")
@click.option("--flag-name", default=None, help="Print as --FLAG-NAME=<list>.")
@_ordering_options
@click.pass_obj
def order_cmd(config: CRDOrderConfig, flag_name: str | None) -> None:
    """Print custom resource kinds, most dependent first."""
    result = _compute(config)
    flag = flag_name if flag_name is not None else config.output.flag_name
    click.echo(format_order(result.ordered_kinds, separator=config.output.separator, flag_name=flag or None))


@cli.command("crds")
@click.option("--default-order", default=None, help="Comma-separated names always printed first.")
@click.option("--include-unowned", is_flag=True, default=False, help="Append CRDs that have no tracked owner.")
@click.option("--flag-name", default=None, help=f"Flag to print the list as (default {DEFAULT_FLAG_NAME}).")
@click.option("--no-flag", is_flag=True, default=False, help="Print the bare list.")
@_ordering_options
@click.pass_obj
def crds_cmd(
    config: CRDOrderConfig,
    default_order: str | None,
    include_unowned: bool,
    flag_name: str | None,
    no_flag: bool,
) -> None:
    """Print CRD names in restore order, ready for --restore-resource-priorities."""
    if default_order is not None:
        config.ordering.default_order = split_list(default_order)
    if include_unowned:
        config.ordering.include_unowned = True

    result = _compute(config)

    if no_flag:
        flag = None
    elif flag_name is not None:
        flag = flag_name
    else:
        flag = config.output.flag_name or DEFAULT_FLAG_NAME
    click.echo(format_order(result.crd_names, separator=config.output.separator, flag_name=flag))
