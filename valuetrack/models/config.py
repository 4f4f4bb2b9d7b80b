"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RunConfig:
    """What to track and where to store it."""

    branch: str = ""
    default_branch: str = ""  # empty -> queried from repository metadata
    key: str = "value"


@dataclass
class StorageConfig:
    """Layout of files on the storage branch."""

    root: str = ".github/storage"
    ledger_dir: str = "value-tracking"


@dataclass
class GitHubConfig:
    """GitHub REST API connection settings."""

    token: str = ""
    api_url: str = "https://api.github.com"
    server_url: str = "https://github.com"
    timeout_seconds: int = 30


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ValueTrackConfig:
    """Top-level valuetrack configuration."""

    run: RunConfig = field(default_factory=RunConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    log: LogConfig = field(default_factory=LogConfig)
