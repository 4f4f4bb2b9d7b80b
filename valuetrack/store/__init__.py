"""Content store ports and their GitHub implementation."""

from valuetrack.store.github import GitHubContentStore, build_github_client
from valuetrack.store.ports import ContentStore, RepositoryMetadata

__all__ = [
    "ContentStore",
    "GitHubContentStore",
    "RepositoryMetadata",
    "build_github_client",
]
