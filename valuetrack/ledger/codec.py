"""Ledger (de)serialisation.

Ledgers are UTF-8 JSON arrays of ``{"value", "sha", "date"}`` objects,
tab-indented so that diffs on the storage branch stay reviewable.
"""

from __future__ import annotations

import json
import math

from valuetrack.errors import LedgerCorruptError
from valuetrack.models.ledger import ValueEntry


def serialize_ledger(entries: list[ValueEntry]) -> bytes:
    """Encode *entries* deterministically: fixed key order, tab indent."""
    return json.dumps([entry.to_dict() for entry in entries], indent="\t", ensure_ascii=False).encode("utf-8")


def parse_ledger(raw: bytes, path: str = "<memory>") -> list[ValueEntry]:
    """Decode ledger bytes, validating every element.

    Raises:
        LedgerCorruptError: content is not a JSON array of value entries.
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LedgerCorruptError(path, str(exc)) from exc

    if not isinstance(data, list):
        raise LedgerCorruptError(path, f"expected a JSON array, got {type(data).__name__}")

    return [_parse_entry(item, index, path) for index, item in enumerate(data)]


def _parse_entry(item: object, index: int, path: str) -> ValueEntry:
    if not isinstance(item, dict):
        raise LedgerCorruptError(path, f"entry {index} is not an object")

    value = item.get("value")
    # bool is an int subclass but never a valid metric
    if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
        raise LedgerCorruptError(path, f"entry {index} has no finite numeric 'value'")

    sha = item.get("sha")
    date = item.get("date")
    if not isinstance(sha, str) or not isinstance(date, str):
        raise LedgerCorruptError(path, f"entry {index} needs string 'sha' and 'date'")

    entry = ValueEntry(value=value, sha=sha, date=date)
    try:
        entry.timestamp()
    except ValueError as exc:
        raise LedgerCorruptError(path, f"entry {index} has unparseable date {date!r}") from exc
    return entry
