"""Append-only value ledgers stored on the storage branch.

Submodules:
    codec    -- Deterministic JSON encoding and strict decoding of ledgers.
    manager  -- LedgerManager: branch bootstrap, load, append-and-persist.
"""

from valuetrack.ledger.codec import parse_ledger, serialize_ledger
from valuetrack.ledger.manager import LedgerManager

__all__ = ["LedgerManager", "parse_ledger", "serialize_ledger"]
