"""Exception hierarchy for valuetrack.

Absence of a ref or file is not an error: store adapters return the
``NotFound`` tagged result for it.  Everything below is fatal to the
invocation and propagates to the CLI.
"""

from __future__ import annotations


class ValueTrackError(Exception):
    """Base class for every error raised by valuetrack itself."""


class StoreError(ValueTrackError):
    """The content store answered with an unexpected non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"content store returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ConflictError(StoreError):
    """A write was rejected because the content hash changed since it was read."""


class RefAlreadyExistsError(StoreError):
    """``create_ref`` lost a race against another run creating the same ref."""


class BranchCreationError(ValueTrackError):
    """Neither the storage branch nor its fallback ref exist."""

    def __init__(self, branch: str, fallback: str) -> None:
        super().__init__(f"cannot create branch {branch!r}: fallback ref {fallback!r} does not exist")
        self.branch = branch
        self.fallback = fallback


class UnexpectedContentShapeError(ValueTrackError):
    """A directory (or other non-file entry) was found where a file was expected."""

    def __init__(self, path: str, kind: str) -> None:
        super().__init__(f"expected file at {path!r}, got {kind}")
        self.path = path
        self.kind = kind


class LedgerCorruptError(ValueTrackError):
    """Stored ledger content does not parse as a sequence of value entries."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"ledger {path!r} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class ZeroReferenceError(ValueTrackError):
    """Percent change is undefined because the reference value is zero."""
