"""Notice dispatcher for valuetrack.

NoticeChannel    -- ABC every channel must implement.
NoticeDispatcher -- Sends a notice to all registered channels; a failing
                    channel never fails the run that produced the notice.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import structlog

from valuetrack.models.notices import Notice

_log = structlog.get_logger(component="notices.manager")


class NoticeChannel(ABC):
    """Abstract base class for all notice channels.

    ``send`` should not raise; return ``False`` instead.
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier used in logs."""

    @abstractmethod
    async def send(self, notice: Notice) -> bool:
        """Deliver *notice* via this channel.

        Returns:
            True  -- delivered.
            False -- delivery failed (already logged inside implementation).
        """


class NoticeDispatcher:
    """Fan-out dispatcher that sends a notice to every registered channel."""

    def __init__(self, channels: list[NoticeChannel]) -> None:
        self._channels = channels

    @property
    def channels(self) -> list[NoticeChannel]:
        return list(self._channels)

    async def publish(self, notice: Notice) -> int:
        """Deliver *notice* to every channel concurrently.

        Returns the number of channels that accepted it.
        """
        results = await asyncio.gather(*(self._send_one(channel, notice) for channel in self._channels))
        return sum(results)

    async def _send_one(self, channel: NoticeChannel, notice: Notice) -> bool:
        try:
            success = await channel.send(notice)
        except Exception as exc:  # noqa: BLE001
            _log.error(
                "notice_channel_unexpected_error",
                channel=channel.channel_name,
                notice_id=notice.notice_id,
                error=str(exc),
            )
            success = False

        if success:
            _log.info("notice_sent", channel=channel.channel_name, title=notice.title, url=notice.url)
        else:
            _log.warning("notice_failed", channel=channel.channel_name, notice_id=notice.notice_id)
        return success
