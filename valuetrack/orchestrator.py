"""Orchestrator: one value-tracking invocation from start to finish.

Sequence: resolve default branch -> ensure storage branch -> load ledger ->
resolve commit date -> append and persist -> terminal mode.

A run ends in exactly one of two terminal modes:

    DefaultBranchRun -- the triggering branch is the default branch; the
                        evolution chart is regenerated from the updated ledger.
    FeatureBranchRun -- any other branch; the default branch's ledger is read
                        fresh and a comparison badge is rendered against its
                        newest entry, or skipped when it is empty.

Every store call is awaited in order; nothing runs concurrently.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

from valuetrack.artifacts import ArtifactWriter
from valuetrack.layout import StorageLayout
from valuetrack.ledger.manager import LedgerManager
from valuetrack.models.config import RunConfig
from valuetrack.models.ledger import LoadedLedger, ValueEntry
from valuetrack.models.notices import Notice
from valuetrack.models.run import RunContext, RunMode, RunResult
from valuetrack.notices.manager import NoticeDispatcher
from valuetrack.render.comparison import render_comparison
from valuetrack.render.evolution import render_evolution
from valuetrack.store.ports import ContentStore, RepositoryMetadata

_log = structlog.get_logger(component="orchestrator")


@dataclass(frozen=True)
class WrittenArtifact:
    """An artifact persisted by a terminal mode."""

    title: str
    path: str
    permalink: str


@dataclass(frozen=True)
class _Targets:
    """Names resolved once per run and shared by both modes."""

    storage_branch: str
    default_branch: str
    current_branch: str
    key: str


class TerminalMode(ABC):
    """Post-write step that ends a run."""

    mode: RunMode

    def __init__(
        self,
        targets: _Targets,
        layout: StorageLayout,
        ledgers: LedgerManager,
        artifacts: ArtifactWriter,
    ) -> None:
        self._targets = targets
        self._layout = layout
        self._ledgers = ledgers
        self._artifacts = artifacts

    @abstractmethod
    async def finish(self, entry: ValueEntry, ledger: LoadedLedger) -> WrittenArtifact | None:
        """Render and persist this mode's artifact, if any."""


class DefaultBranchRun(TerminalMode):
    """Regenerates the default branch's evolution chart."""

    mode = RunMode.DEFAULT_BRANCH

    async def finish(self, entry: ValueEntry, ledger: LoadedLedger) -> WrittenArtifact | None:
        key = self._targets.key
        path = self._layout.evolution_path(key, self._targets.default_branch)
        svg = render_evolution(ledger.entries)
        link = await self._artifacts.write(path, svg, f"Update {key} evolution graph")
        return WrittenArtifact(title="Evolution graph", path=path, permalink=link)


class FeatureBranchRun(TerminalMode):
    """Compares the new value against the default branch's latest value."""

    mode = RunMode.FEATURE_BRANCH

    async def finish(self, entry: ValueEntry, ledger: LoadedLedger) -> WrittenArtifact | None:
        key = self._targets.key
        reference = await self._ledgers.load_ledger(
            self._targets.storage_branch,
            self._layout.ledger_path(key, self._targets.default_branch),
        )
        svg = render_comparison(key, entry, reference.entries)
        if svg is None:
            _log.info("comparison_skipped", reason="reference ledger is empty", reference=reference.path)
            return None

        path = self._layout.comparison_path(key, self._targets.current_branch)
        link = await self._artifacts.write(path, svg, f"Update {key} comparison graph")
        return WrittenArtifact(title="Comparison graph", path=path, permalink=link)


class Orchestrator:
    """Runs one invocation against explicitly supplied collaborators.

    Args:
        store:      Content store holding the storage branch.
        metadata:   Repository metadata, queried only when the default
                    branch is not configured.
        notices:    Dispatcher for the permalink notice.
        config:     Storage branch, optional default branch and key.
        context:    Facts about the triggering workflow run.
        layout:     Paths on the storage branch.
        server_url: Web root used to build permalinks.
    """

    def __init__(
        self,
        store: ContentStore,
        metadata: RepositoryMetadata,
        notices: NoticeDispatcher,
        config: RunConfig,
        context: RunContext,
        layout: StorageLayout | None = None,
        server_url: str = "https://github.com",
    ) -> None:
        if not config.branch:
            raise ValueError("storage branch must not be empty")
        self._store = store
        self._metadata = metadata
        self._notices = notices
        self._config = config
        self._context = context
        self._layout = layout or StorageLayout()
        self._ledgers = LedgerManager(store)
        self._artifacts = ArtifactWriter(
            store,
            branch=config.branch,
            blob_base=f"{server_url.rstrip('/')}/{context.slug}/blob",
        )

    async def run(self, value: float) -> RunResult:
        """Record *value* for the current commit and refresh the matching artifact."""
        if not math.isfinite(value):
            raise ValueError(f"value must be finite, got {value!r}")

        config = self._config
        context = self._context
        with structlog.contextvars.bound_contextvars(repository=context.slug, key=config.key):
            default_branch = await self._resolve_default_branch()
            await self._ledgers.ensure_branch(config.branch, default_branch)

            path = self._layout.ledger_path(config.key, context.current_branch)
            ledger = await self._ledgers.load_ledger(config.branch, path)

            date = await self._store.get_commit_timestamp(context.sha)
            entry = ValueEntry(value=value, sha=context.sha, date=date)
            updated = await self._ledgers.append_and_persist(
                config.branch,
                ledger,
                entry,
                f"Add {config.key} to {path}",
            )

            mode = self._select_mode(default_branch)
            _log.info("run_mode_selected", mode=mode.mode.value, branch=context.current_branch)
            artifact = await mode.finish(entry, updated)

            result = RunResult(
                mode=mode.mode,
                default_branch=default_branch,
                entry=entry,
                ledger_path=path,
                ledger_hash=updated.content_hash or "",
            )
            if artifact is not None:
                result.artifact_path = artifact.path
                result.permalink = artifact.permalink
                await self._notices.publish(
                    Notice(title=artifact.title, message=f"{artifact.title} permalink", url=artifact.permalink)
                )
            return result

    async def _resolve_default_branch(self) -> str:
        if self._config.default_branch:
            return self._config.default_branch
        default_branch = await self._metadata.get_default_branch()
        _log.debug("default_branch_queried", default_branch=default_branch)
        return default_branch

    def _select_mode(self, default_branch: str) -> TerminalMode:
        targets = _Targets(
            storage_branch=self._config.branch,
            default_branch=default_branch,
            current_branch=self._context.current_branch,
            key=self._config.key,
        )
        mode_cls = DefaultBranchRun if targets.current_branch == default_branch else FeatureBranchRun
        return mode_cls(targets, self._layout, self._ledgers, self._artifacts)
