"""Notice system for valuetrack.

Announces freshly written artifacts to one or more channels.

Exports:
    NoticeChannel          -- Abstract base for all channel implementations.
    NoticeDispatcher       -- Sends a notice to all registered channels.
    WorkflowCommandChannel -- ``::notice`` lines for the GitHub Actions runner.
    build_notice_dispatcher -- Factory used by the application bootstrap.
"""

from __future__ import annotations

from valuetrack.notices.manager import NoticeChannel, NoticeDispatcher
from valuetrack.notices.workflow import WorkflowCommandChannel

__all__ = [
    "NoticeChannel",
    "NoticeDispatcher",
    "WorkflowCommandChannel",
    "build_notice_dispatcher",
]


def build_notice_dispatcher() -> NoticeDispatcher:
    """Build the NoticeDispatcher used by a run: workflow commands on stdout."""
    return NoticeDispatcher(channels=[WorkflowCommandChannel()])
