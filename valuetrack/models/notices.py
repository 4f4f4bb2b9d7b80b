"""Notice data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4


class NoticeLevel(StrEnum):
    """GitHub Actions annotation level."""

    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """User-visible message emitted after an artifact is written."""

    title: str
    message: str
    url: str = ""
    level: NoticeLevel = NoticeLevel.NOTICE
    notice_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
