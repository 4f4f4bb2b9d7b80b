"""Writes rendered artifacts to the storage branch."""

from __future__ import annotations

from urllib.parse import quote

import structlog

from valuetrack.errors import UnexpectedContentShapeError
from valuetrack.models.content import EntryKind, Found
from valuetrack.store.ports import ContentStore

_log = structlog.get_logger(component="artifacts")


class ArtifactWriter:
    """Overwrites derived files (charts, badges) on the storage branch.

    Args:
        store:      Content store holding the storage branch.
        branch:     Storage branch name.
        blob_base:  ``<server>/<owner>/<repo>/blob`` prefix for permalinks.
    """

    def __init__(self, store: ContentStore, branch: str, blob_base: str) -> None:
        self._store = store
        self._branch = branch
        self._blob_base = blob_base.rstrip("/")

    def permalink(self, path: str) -> str:
        return f"{self._blob_base}/{quote(self._branch)}/{quote(path)}"

    async def write(self, path: str, svg: str, message: str) -> str:
        """Write *svg* to *path* and return its permalink.

        The current content hash is fetched right before the write; artifacts
        are overwritten, never merged.
        """
        current = await self._store.get_file_content(self._branch, path)
        sha: str | None = None
        if isinstance(current, Found):
            if current.value.kind is not EntryKind.FILE:
                raise UnexpectedContentShapeError(path, str(current.value.kind))
            sha = current.value.sha

        await self._store.put_file_content(self._branch, path, svg.encode("utf-8"), message, sha)
        link = self.permalink(path)
        _log.info("artifact_written", branch=self._branch, path=path, permalink=link)
        return link
