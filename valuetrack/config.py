"""Configuration loading from environment variables.

valuetrack settings use the ``VALUETRACK_`` prefix.  When running as a
GitHub Action, the ``INPUT_*`` variables the runner sets for action inputs
are honoured as fallbacks, and run facts come from the ``GITHUB_*``
variables the runner always provides.
"""

from __future__ import annotations

import os
import re

from valuetrack.models.config import (
    GitHubConfig,
    LogConfig,
    RunConfig,
    StorageConfig,
    ValueTrackConfig,
)
from valuetrack.models.run import RunContext

_BRANCH_PREFIX = "refs/heads/"


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"VALUETRACK_{key}", default)


def _input(key: str, default: str = "") -> str:
    """Read VALUETRACK_<key>, falling back to the action input INPUT_<key>."""
    return _env(key) or os.environ.get(f"INPUT_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def validate_branch_name(value: str) -> str:
    """Reject names git would refuse as a ref component."""
    if not value:
        return value
    if ".." in value or value.startswith("/") or value.endswith("/") or re.search(r"[\s~^:?*\[\\]", value):
        raise ValueError(f"Invalid branch name: {value!r}")
    return value


def validate_key(value: str) -> str:
    if not value or "/" in value or value in {".", ".."}:
        raise ValueError(f"Invalid key: {value!r}. Must be a non-empty single path segment")
    return value


def load_config() -> ValueTrackConfig:
    """Load configuration from VALUETRACK_* (and INPUT_* / GITHUB_*) variables."""
    return ValueTrackConfig(
        run=RunConfig(
            branch=validate_branch_name(_input("BRANCH")),
            default_branch=validate_branch_name(_input("DEFAULT_BRANCH")),
            key=validate_key(_input("KEY", "value")),
        ),
        storage=StorageConfig(
            root=_env("STORAGE_ROOT", ".github/storage"),
            ledger_dir=_env("LEDGER_DIR", "value-tracking"),
        ),
        github=GitHubConfig(
            token=_env("TOKEN") or os.environ.get("GITHUB_TOKEN", ""),
            api_url=os.environ.get("GITHUB_API_URL", "https://api.github.com"),
            server_url=os.environ.get("GITHUB_SERVER_URL", "https://github.com"),
            timeout_seconds=_env_int("HTTP_TIMEOUT", 30, min_val=1, max_val=300),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )


def branch_from_ref(ref: str) -> str:
    """Turn ``refs/heads/<name>`` into ``<name>``."""
    if not ref.startswith(_BRANCH_PREFIX):
        raise ValueError(f"Triggering ref is not a branch: {ref!r}")
    return ref[len(_BRANCH_PREFIX) :]


def load_context() -> RunContext:
    """Build the RunContext from the GitHub Actions runner environment.

    For pull_request events GITHUB_REF points at the merge ref, so the head
    branch in GITHUB_HEAD_REF wins when set.
    """
    slug = os.environ.get("GITHUB_REPOSITORY", "")
    owner, sep, repo = slug.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"GITHUB_REPOSITORY must be 'owner/repo', got {slug!r}")

    sha = os.environ.get("GITHUB_SHA", "")
    if not sha:
        raise ValueError("GITHUB_SHA is not set")

    head_ref = os.environ.get("GITHUB_HEAD_REF", "")
    current_branch = head_ref or branch_from_ref(os.environ.get("GITHUB_REF", ""))
    return RunContext(owner=owner, repo=repo, current_branch=current_branch, sha=sha)
