"""Core data structures for valuetrack."""

from valuetrack.models.config import ValueTrackConfig
from valuetrack.models.content import (
    EntryKind,
    FileLookup,
    Found,
    NotFound,
    RefHandle,
    RefLookup,
    RemoteFile,
)
from valuetrack.models.ledger import LoadedLedger, ValueEntry, sort_by_date
from valuetrack.models.notices import Notice, NoticeLevel
from valuetrack.models.run import RunContext, RunMode, RunResult

__all__ = [
    "EntryKind",
    "FileLookup",
    "Found",
    "LoadedLedger",
    "NotFound",
    "Notice",
    "NoticeLevel",
    "RefHandle",
    "RefLookup",
    "RemoteFile",
    "RunContext",
    "RunMode",
    "RunResult",
    "ValueEntry",
    "ValueTrackConfig",
    "sort_by_date",
]
