"""GitHub Actions workflow-command channel.

Prints ``::notice title=...::message`` lines, which the Actions runner turns
into annotations on the run summary.
"""

from __future__ import annotations

import sys
from typing import TextIO

from valuetrack.models.notices import Notice, NoticeLevel
from valuetrack.notices.manager import NoticeChannel


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(level: NoticeLevel, message: str, title: str = "") -> str:
    """Build one workflow command line (without trailing newline)."""
    props = f" title={escape_property(title)}" if title else ""
    return f"::{level.value}{props}::{escape_data(message)}"


class WorkflowCommandChannel(NoticeChannel):
    """Writes notices as workflow commands to *stream* (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def channel_name(self) -> str:
        return "workflow_command"

    async def send(self, notice: Notice) -> bool:
        stream = self._stream or sys.stdout
        message = notice.url or notice.message
        stream.write(format_command(notice.level, message, notice.title) + "\n")
        stream.flush()
        return True
