"""Ports the orchestrator depends on.

ContentStore        -- branch-scoped key/value store with conflict detection.
RepositoryMetadata  -- read-only repository facts (default branch).

Implementations return ``NotFound`` for absent refs and paths and raise
for everything else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from valuetrack.models.content import FileLookup, RefHandle, RefLookup


class ContentStore(ABC):
    """Abstract content store keyed by (branch, path)."""

    @abstractmethod
    async def get_ref(self, branch: str) -> RefLookup:
        """Look up ``refs/heads/<branch>``."""

    @abstractmethod
    async def create_ref(self, branch: str, sha: str) -> RefHandle:
        """Create ``refs/heads/<branch>`` pointing at commit *sha*.

        Raises:
            RefAlreadyExistsError: the ref was created by someone else first.
        """

    @abstractmethod
    async def get_file_content(self, branch: str, path: str) -> FileLookup:
        """Read the entry at *path* on *branch*."""

    @abstractmethod
    async def put_file_content(
        self,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        sha: str | None,
    ) -> str:
        """Create or update *path* on *branch* and return the new content hash.

        *sha* must be the current content hash of the file, or None when
        creating it.

        Raises:
            ConflictError: *sha* no longer matches the stored file.
        """

    @abstractmethod
    async def get_commit_timestamp(self, sha: str) -> str:
        """Return the ISO-8601 committer date of commit *sha*."""


class RepositoryMetadata(ABC):
    """Repository-level facts."""

    @abstractmethod
    async def get_default_branch(self) -> str:
        """Return the repository's primary branch name."""
