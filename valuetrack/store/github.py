"""GitHub REST implementation of the content store and metadata ports.

All requests go through a single ``httpx.AsyncClient`` supplied by the
caller (see ``build_github_client``), so tests can inject a
``httpx.MockTransport``.
"""

from __future__ import annotations

import base64
from urllib.parse import quote

import httpx
import structlog

from valuetrack import __version__
from valuetrack.errors import ConflictError, RefAlreadyExistsError, StoreError
from valuetrack.models.config import GitHubConfig
from valuetrack.models.content import (
    EntryKind,
    FileLookup,
    Found,
    NotFound,
    RefHandle,
    RefLookup,
    RemoteFile,
)
from valuetrack.store.ports import ContentStore, RepositoryMetadata

_log = structlog.get_logger(component="store.github")

_API_VERSION = "2022-11-28"


def build_github_client(config: GitHubConfig) -> httpx.AsyncClient:
    """Create an AsyncClient preconfigured for the GitHub REST API."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": _API_VERSION,
        "User-Agent": f"valuetrack/{__version__}",
    }
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return httpx.AsyncClient(
        base_url=config.api_url.rstrip("/"),
        headers=headers,
        timeout=float(config.timeout_seconds),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("message", ""))
    return ""


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise StoreError(response.status_code, _error_message(response))


class GitHubContentStore(ContentStore, RepositoryMetadata):
    """Content store backed by one GitHub repository.

    Args:
        client: AsyncClient whose base_url is the REST API root.
        owner:  Repository owner (user or organisation).
        repo:   Repository name.
    """

    def __init__(self, client: httpx.AsyncClient, owner: str, repo: str) -> None:
        if not owner or not repo:
            raise ValueError("owner and repo must not be empty")
        self._client = client
        self._prefix = f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    # ------------------------------------------------------------------
    # Repository metadata
    # ------------------------------------------------------------------

    async def get_default_branch(self) -> str:
        response = await self._client.get(self._prefix)
        _raise_for_status(response)
        default_branch = str(response.json()["default_branch"])
        _log.debug("default_branch_resolved", default_branch=default_branch)
        return default_branch

    # ------------------------------------------------------------------
    # Refs
    # ------------------------------------------------------------------

    async def get_ref(self, branch: str) -> RefLookup:
        response = await self._client.get(f"{self._prefix}/git/ref/heads/{quote(branch)}")
        if response.status_code == 404:
            return NotFound(f"refs/heads/{branch}")
        _raise_for_status(response)
        data = response.json()
        return Found(RefHandle(ref=data["ref"], sha=data["object"]["sha"]))

    async def create_ref(self, branch: str, sha: str) -> RefHandle:
        response = await self._client.post(
            f"{self._prefix}/git/refs",
            json={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        if response.status_code == 422 and "already exists" in _error_message(response):
            raise RefAlreadyExistsError(response.status_code, _error_message(response))
        _raise_for_status(response)
        data = response.json()
        return RefHandle(ref=data["ref"], sha=data["object"]["sha"])

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    async def get_file_content(self, branch: str, path: str) -> FileLookup:
        response = await self._client.get(
            f"{self._prefix}/contents/{quote(path)}",
            params={"ref": branch},
        )
        if response.status_code == 404:
            return NotFound(path)
        _raise_for_status(response)
        data = response.json()

        # The contents API answers with a JSON array for directories.
        if isinstance(data, list):
            return Found(RemoteFile(path=path, kind=EntryKind.DIR))

        kind = EntryKind(data.get("type", "file"))
        if kind is not EntryKind.FILE:
            return Found(RemoteFile(path=path, kind=kind, sha=data.get("sha", "")))

        sha = data["sha"]
        if data.get("encoding") == "base64":
            content = base64.b64decode(data.get("content", ""))
        else:
            # Files over 1 MB come back without inline content.
            content = await self._get_blob(sha)
        return Found(RemoteFile(path=path, kind=kind, content=content, sha=sha))

    async def _get_blob(self, sha: str) -> bytes:
        response = await self._client.get(f"{self._prefix}/git/blobs/{sha}")
        _raise_for_status(response)
        data = response.json()
        return base64.b64decode(data["content"])

    async def put_file_content(
        self,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        sha: str | None,
    ) -> str:
        body: dict[str, str] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha

        response = await self._client.put(f"{self._prefix}/contents/{quote(path)}", json=body)
        if response.status_code == 409:
            raise ConflictError(response.status_code, _error_message(response))
        if response.status_code == 422 and "sha" in _error_message(response):
            # Raised when the file appeared after we read it as absent.
            raise ConflictError(response.status_code, _error_message(response))
        _raise_for_status(response)
        new_sha = str(response.json()["content"]["sha"])
        _log.debug("file_written", branch=branch, path=path, sha=new_sha)
        return new_sha

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    async def get_commit_timestamp(self, sha: str) -> str:
        response = await self._client.get(f"{self._prefix}/git/commits/{sha}")
        _raise_for_status(response)
        return str(response.json()["committer"]["date"])
