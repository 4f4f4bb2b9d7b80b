"""Application bootstrap for valuetrack.

Wires config -> logging -> GitHub client -> notices -> orchestrator, runs a
single invocation and closes the HTTP client.
"""

from __future__ import annotations

import sys

from valuetrack import __version__
from valuetrack.errors import ValueTrackError
from valuetrack.layout import StorageLayout
from valuetrack.models.config import ValueTrackConfig
from valuetrack.models.notices import NoticeLevel
from valuetrack.models.run import RunContext, RunResult
from valuetrack.notices import build_notice_dispatcher
from valuetrack.notices.workflow import format_command
from valuetrack.observability.logging import get_logger, setup_logging
from valuetrack.orchestrator import Orchestrator
from valuetrack.store.github import GitHubContentStore, build_github_client


async def track(value: float, config: ValueTrackConfig, context: RunContext) -> RunResult:
    """Record *value* for *context* using the GitHub REST API."""
    async with build_github_client(config.github) as client:
        store = GitHubContentStore(client, owner=context.owner, repo=context.repo)
        orchestrator = Orchestrator(
            store=store,
            metadata=store,
            notices=build_notice_dispatcher(),
            config=config.run,
            context=context,
            layout=StorageLayout.from_config(config.storage),
            server_url=config.github.server_url,
        )
        return await orchestrator.run(value)


async def main(value: float, config: ValueTrackConfig, context: RunContext) -> int:
    """Run one invocation and return the process exit code.

    valuetrack errors are logged, surfaced as a workflow ``::error`` line and
    mapped to exit code 1.  Anything else propagates.
    """
    setup_logging(config.log.level)
    log = get_logger("app")
    log.info(
        "valuetrack starting",
        version=__version__,
        repository=context.slug,
        branch=context.current_branch,
        storage_branch=config.run.branch,
    )

    try:
        result = await track(value, config, context)
    except ValueTrackError as exc:
        log.critical("run failed", error_type=type(exc).__name__, error=str(exc))
        sys.stdout.write(format_command(NoticeLevel.ERROR, str(exc), title="valuetrack") + "\n")
        return 1

    log.info(
        "valuetrack finished",
        mode=result.mode.value,
        ledger=result.ledger_path,
        artifact=result.artifact_path,
    )
    return 0
