"""Ledger Manager: storage branch bootstrap and ledger load/append.

All operations go through a ``ContentStore``; the manager adds the error
semantics on top of the store's tagged results.
"""

from __future__ import annotations

import structlog

from valuetrack.errors import BranchCreationError, RefAlreadyExistsError, UnexpectedContentShapeError
from valuetrack.ledger.codec import parse_ledger, serialize_ledger
from valuetrack.models.content import EntryKind, Found, RefHandle
from valuetrack.models.ledger import LoadedLedger, ValueEntry
from valuetrack.store.ports import ContentStore

_log = structlog.get_logger(component="ledger.manager")


class LedgerManager:
    """Reads and appends ledgers on the storage branch."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def ensure_branch(self, branch: str, fallback: str) -> RefHandle:
        """Return the storage branch ref, creating it from *fallback* if absent.

        Idempotent: an existing branch is returned untouched.

        Raises:
            BranchCreationError: *branch* is missing and so is *fallback*.
        """
        existing = await self._store.get_ref(branch)
        if isinstance(existing, Found):
            _log.debug("storage_branch_exists", branch=branch, sha=existing.value.sha)
            return existing.value

        source = await self._store.get_ref(fallback)
        if not isinstance(source, Found):
            raise BranchCreationError(branch, fallback)

        try:
            handle = await self._store.create_ref(branch, source.value.sha)
        except RefAlreadyExistsError:
            # Another run created it between our lookup and create.
            raced = await self._store.get_ref(branch)
            if not isinstance(raced, Found):
                raise
            _log.info("storage_branch_created_concurrently", branch=branch)
            return raced.value

        _log.info("storage_branch_created", branch=branch, fallback=fallback, sha=handle.sha)
        return handle

    async def load_ledger(self, branch: str, path: str) -> LoadedLedger:
        """Load the ledger at *path*; a missing file yields an empty ledger.

        Raises:
            UnexpectedContentShapeError: *path* is a directory or non-file entry.
            LedgerCorruptError: the file does not parse as a ledger.
        """
        lookup = await self._store.get_file_content(branch, path)
        if not isinstance(lookup, Found):
            _log.debug("ledger_absent", branch=branch, path=path)
            return LoadedLedger(path=path)

        remote = lookup.value
        if remote.kind is not EntryKind.FILE:
            raise UnexpectedContentShapeError(path, str(remote.kind))

        entries = parse_ledger(remote.content, path)
        _log.debug("ledger_loaded", branch=branch, path=path, entries=len(entries))
        return LoadedLedger(path=path, entries=entries, content_hash=remote.sha)

    async def append_and_persist(
        self,
        branch: str,
        ledger: LoadedLedger,
        entry: ValueEntry,
        message: str,
    ) -> LoadedLedger:
        """Append *entry* and write the ledger back using its content hash.

        *ledger* is left untouched; the returned ledger holds the appended
        entries and the new content hash.

        Raises:
            ConflictError: the stored file changed since *ledger* was loaded.
        """
        entries = [*ledger.entries, entry]
        new_hash = await self._store.put_file_content(
            branch,
            ledger.path,
            serialize_ledger(entries),
            message,
            ledger.content_hash,
        )
        _log.info("ledger_written", branch=branch, path=ledger.path, entries=len(entries))
        return LoadedLedger(path=ledger.path, entries=entries, content_hash=new_hash)
