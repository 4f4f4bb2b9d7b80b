"""Ledger data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class ValueEntry:
    """One recorded value.

    Created once per invocation, appended to a ledger and never mutated
    afterwards.  Field order is the serialized key order.
    """

    value: float
    sha: str
    date: str  # ISO-8601, as reported by the commit's committer

    def timestamp(self) -> datetime:
        """Parse ``date`` into an aware datetime (naive values are taken as UTC)."""
        parsed = datetime.fromisoformat(self.date)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    def to_dict(self) -> dict[str, object]:
        return {"value": _json_number(self.value), "sha": self.sha, "date": self.date}


_MAX_EXACT_INT = 2**53


def _json_number(value: float) -> float | int:
    """Write integral floats as integers, so ``42.0`` is stored as ``42``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < _MAX_EXACT_INT:
        return int(value)
    return value


@dataclass
class LoadedLedger:
    """Entries read from one ledger path plus the hash needed to update it."""

    path: str
    entries: list[ValueEntry] = field(default_factory=list)
    content_hash: str | None = None  # None when the file does not exist yet

    @property
    def exists(self) -> bool:
        return self.content_hash is not None


def sort_by_date(entries: list[ValueEntry]) -> list[ValueEntry]:
    """Return *entries* ordered by timestamp, oldest first.

    ``sorted`` is stable, so entries with equal timestamps keep their
    append order.
    """
    return sorted(entries, key=lambda entry: entry.timestamp())
