"""Per-invocation context and result structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from valuetrack.models.ledger import ValueEntry


class RunMode(StrEnum):
    """Terminal mode an invocation ends in."""

    DEFAULT_BRANCH = "default_branch"
    FEATURE_BRANCH = "feature_branch"


@dataclass(frozen=True)
class RunContext:
    """Ambient facts about the triggering workflow run."""

    owner: str
    repo: str
    current_branch: str
    sha: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class RunResult:
    """Outcome of one orchestrated invocation."""

    mode: RunMode
    default_branch: str
    entry: ValueEntry
    ledger_path: str
    ledger_hash: str
    artifact_path: str | None = None
    permalink: str | None = None  # None when no artifact was written
