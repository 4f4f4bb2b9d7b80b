"""``valuetrack`` command line entry point."""

from __future__ import annotations

import asyncio
import dataclasses
import math
from collections.abc import Callable

import click

from valuetrack import __version__
from valuetrack.config import load_config, load_context, validate_branch_name, validate_key

_ParamCallback = Callable[[click.Context, click.Parameter, str | None], str | None]


def _checked(validator: Callable[[str], str]) -> _ParamCallback:
    def callback(_ctx: click.Context, _param: click.Parameter, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return validator(value)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc

    return callback


# Negative values such as "-5" look like short options to click; pass them through as VALUE.
@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("value", type=float)
@click.option("--branch", callback=_checked(validate_branch_name), help="Storage branch holding ledgers and graphs.")
@click.option(
    "--default-branch",
    callback=_checked(validate_branch_name),
    help="Branch whose evolution is charted. Queried from the repository when omitted.",
)
@click.option("--key", callback=_checked(validate_key), help="Namespace for this metric. Defaults to 'value'.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Overrides VALUETRACK_LOG_LEVEL.",
)
@click.version_option(__version__, prog_name="valuetrack")
def cli(
    value: float,
    branch: str | None,
    default_branch: str | None,
    key: str | None,
    log_level: str | None,
) -> None:
    """Record VALUE for the current commit and refresh its chart or badge.

    Repository, ref and commit are read from the GITHUB_* variables set by
    the Actions runner.
    """
    if not math.isfinite(value):
        raise click.BadParameter(f"must be finite, got {value}", param_hint="VALUE")

    try:
        config = load_config()
        context = load_context()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    config.run = dataclasses.replace(
        config.run,
        branch=branch or config.run.branch,
        default_branch=default_branch or config.run.default_branch,
        key=key or config.run.key,
    )
    if log_level:
        config.log.level = log_level.lower()
    if not config.run.branch:
        raise click.UsageError("a storage branch is required (--branch or VALUETRACK_BRANCH)")

    from valuetrack.app import main

    raise SystemExit(asyncio.run(main(value, config, context)))
