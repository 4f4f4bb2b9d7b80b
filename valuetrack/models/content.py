"""Tagged results returned by content store lookups.

A lookup either finds something (``Found``), finds nothing (``NotFound``)
or raises.  Keeping absence out of the exception path means a genuine
failure can never be mistaken for an empty state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class EntryKind(StrEnum):
    """Kind of repository entry found at a path."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


@dataclass(frozen=True)
class Found(Generic[T]):
    """The lookup succeeded."""

    value: T


@dataclass(frozen=True)
class NotFound:
    """The ref or path does not exist."""

    target: str


@dataclass(frozen=True)
class RefHandle:
    """A git ref and the commit it points at."""

    ref: str  # fully qualified, e.g. "refs/heads/metrics"
    sha: str


@dataclass(frozen=True)
class RemoteFile:
    """An entry read from the content store."""

    path: str
    kind: EntryKind
    content: bytes = b""
    sha: str = ""  # content hash used for optimistic concurrency


RefLookup = Found[RefHandle] | NotFound
FileLookup = Found[RemoteFile] | NotFound
