"""Paths of ledgers and rendered artifacts on the storage branch."""

from __future__ import annotations

from dataclasses import dataclass

from valuetrack.models.config import StorageConfig


@dataclass(frozen=True)
class StorageLayout:
    """Maps (key, branch) pairs onto file paths under the storage root.

    Branch names may contain slashes (``feature/x``); they are kept as-is so
    the ledger for ``feature/x`` lives at ``.../<key>/feature/x.json``.
    """

    root: str = ".github/storage"
    ledger_dir: str = "value-tracking"

    @classmethod
    def from_config(cls, config: StorageConfig) -> StorageLayout:
        return cls(root=config.root.strip("/"), ledger_dir=config.ledger_dir.strip("/"))

    def ledger_path(self, key: str, branch: str) -> str:
        return f"{self.root}/{self.ledger_dir}/{key}/{branch}.json"

    def evolution_path(self, key: str, default_branch: str) -> str:
        return f"{self.root}/graphs/{key}/{default_branch}-evolution.svg"

    def comparison_path(self, key: str, branch: str) -> str:
        return f"{self.root}/graphs/{key}/{branch}-comparison-percent.svg"
