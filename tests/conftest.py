"""Shared fixtures for valuetrack tests.

Provides an in-memory content store with GitHub-like optimistic concurrency
(content hashes are git blob SHAs) and a notice channel that records what
it was sent, so orchestrator runs can be exercised without network access.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable

import pytest

from valuetrack.errors import ConflictError, RefAlreadyExistsError, StoreError
from valuetrack.layout import StorageLayout
from valuetrack.models.config import RunConfig
from valuetrack.models.content import (
    EntryKind,
    FileLookup,
    Found,
    NotFound,
    RefHandle,
    RefLookup,
    RemoteFile,
)
from valuetrack.models.notices import Notice
from valuetrack.models.run import RunContext
from valuetrack.notices.manager import NoticeChannel, NoticeDispatcher
from valuetrack.orchestrator import Orchestrator
from valuetrack.store.ports import ContentStore, RepositoryMetadata

MAIN_HEAD = "0" * 40

# Commit SHAs used across tests, with committer dates in chronological order.
COMMITS = {
    "c1" * 20: "2024-01-15T10:00:00Z",
    "c2" * 20: "2024-01-16T10:00:00Z",
    "c3" * 20: "2024-01-17T10:00:00Z",
    "c4" * 20: "2024-01-18T10:00:00Z",
}


def blob_sha(content: bytes) -> str:
    """Git blob hash of *content*, the same hash GitHub reports for files."""
    return hashlib.sha1(b"blob %d\x00" % len(content) + content).hexdigest()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeContentStore(ContentStore, RepositoryMetadata):
    """In-memory store keyed by (branch, path)."""

    def __init__(self, default_branch: str = "main") -> None:
        self.default_branch = default_branch
        self.refs: dict[str, str] = {default_branch: MAIN_HEAD}
        self.files: dict[tuple[str, str], bytes] = {}
        self.dirs: set[tuple[str, str]] = set()
        self.commit_dates: dict[str, str] = dict(COMMITS)
        self.writes: list[tuple[str, str, str]] = []  # (branch, path, message)
        self.created_refs: list[str] = []
        self.default_branch_queries = 0

    async def get_default_branch(self) -> str:
        self.default_branch_queries += 1
        return self.default_branch

    async def get_ref(self, branch: str) -> RefLookup:
        if branch not in self.refs:
            return NotFound(f"refs/heads/{branch}")
        return Found(RefHandle(ref=f"refs/heads/{branch}", sha=self.refs[branch]))

    async def create_ref(self, branch: str, sha: str) -> RefHandle:
        if branch in self.refs:
            raise RefAlreadyExistsError(422, "Reference already exists")
        self.refs[branch] = sha
        self.created_refs.append(branch)
        return RefHandle(ref=f"refs/heads/{branch}", sha=sha)

    async def get_file_content(self, branch: str, path: str) -> FileLookup:
        if (branch, path) in self.dirs:
            return Found(RemoteFile(path=path, kind=EntryKind.DIR))
        content = self.files.get((branch, path))
        if content is None:
            return NotFound(path)
        return Found(RemoteFile(path=path, kind=EntryKind.FILE, content=content, sha=blob_sha(content)))

    async def put_file_content(
        self,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        sha: str | None,
    ) -> str:
        if branch not in self.refs:
            raise StoreError(404, "Branch not found")
        current = self.files.get((branch, path))
        current_sha = blob_sha(current) if current is not None else None
        if sha != current_sha:
            raise ConflictError(409, f"{path} does not match {sha}")
        self.files[(branch, path)] = content
        self.writes.append((branch, path, message))
        return blob_sha(content)

    async def get_commit_timestamp(self, sha: str) -> str:
        try:
            return self.commit_dates[sha]
        except KeyError:
            raise StoreError(404, "No commit found for SHA") from None


class RecordingChannel(NoticeChannel):
    """Notice channel that keeps every notice it receives."""

    def __init__(self) -> None:
        self.sent: list[Notice] = []

    @property
    def channel_name(self) -> str:
        return "recording"

    async def send(self, notice: Notice) -> bool:
        self.sent.append(notice)
        return True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture()
def recorder() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def dispatcher(recorder: RecordingChannel) -> NoticeDispatcher:
    return NoticeDispatcher(channels=[recorder])


@pytest.fixture()
def layout() -> StorageLayout:
    return StorageLayout()


@pytest.fixture()
def make_orchestrator(
    store: FakeContentStore,
    dispatcher: NoticeDispatcher,
    layout: StorageLayout,
) -> Callable[..., Orchestrator]:
    """Factory building an Orchestrator wired to the fake store."""

    def _make(
        current_branch: str = "main",
        sha: str = "c1" * 20,
        branch: str = "metrics",
        key: str = "bench-a",
        default_branch: str = "",
    ) -> Orchestrator:
        return Orchestrator(
            store=store,
            metadata=store,
            notices=dispatcher,
            config=RunConfig(branch=branch, default_branch=default_branch, key=key),
            context=RunContext(owner="acme", repo="widgets", current_branch=current_branch, sha=sha),
            layout=layout,
        )

    return _make
