# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# Copyright (C) 2026 HRDAG https://hrdag.org
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, see <https://www.gnu.org/licenses/>.
#
# ------
# raidar-status/src/raidar_status/monitor.py

"""Poll and connection state of a single monitored NAS.

The monitor reacts to events delivered by the network transport (device
discovered, reply received, connection lost) and keeps the last snapshot
that decoded cleanly. It never sleeps or does I/O itself; the transport
and its scheduler own all timing.
"""

from collections.abc import Callable
from enum import Enum
from typing import Final

from loguru import logger

from .parser import MalformedReply, Snapshot, decode
from .status import Status

# Reference cadence for the scheduler that calls poll()
POLL_INTERVAL_SECONDS: Final[int] = 6


class MonitorState(str, Enum):
    SEARCHING = "searching"
    DISCOVERED = "discovered"
    POLLING = "polling"
    CONNECTION_LOST = "connection_lost"


class DeviceMonitor:
    """Track one device across discovery, polling and connection loss."""

    def __init__(self,
                 request_status: Callable[[], None] | None = None,
                 dispose: Callable[[], None] | None = None):
        """
        Args:
            request_status: Asks the transport for a fresh reply
            dispose: Releases the transport's resources
        """
        self._request_status = request_status
        self._dispose = dispose
        self.state = MonitorState.SEARCHING
        self.snapshot: Snapshot | None = None
        self.connection_lost_message: str | None = None
        self.replies_decoded = 0
        self.replies_malformed = 0
        self.replies_ignored = 0

    def _transition(self, state: MonitorState) -> None:
        if state is not self.state:
            logger.info(f"Monitor state {self.state.value} -> {state.value}")
            self.state = state

    def _update(self, raw_reply: str) -> Snapshot | None:
        # Not a status reply
        if not raw_reply or '\t' not in raw_reply:
            self.replies_ignored += 1
            logger.debug("Ignoring empty or untabbed reply")
            return None

        try:
            snapshot = decode(raw_reply)
        except MalformedReply as e:
            # Keep showing the last good snapshot
            self.replies_malformed += 1
            logger.warning(f"Discarding malformed reply: {e}")
            return None

        self.replies_decoded += 1
        self.snapshot = snapshot
        self.connection_lost_message = None
        return snapshot

    def on_discovered(self, raw_reply: str = "") -> Snapshot | None:
        """Handle the discovery response and start polling."""
        self._transition(MonitorState.DISCOVERED)
        snapshot = self._update(raw_reply) if raw_reply else None
        self._transition(MonitorState.POLLING)
        return snapshot

    def on_reply(self, raw_reply: str) -> Snapshot | None:
        """Handle a poll reply; returns the new snapshot if it decoded."""
        snapshot = self._update(raw_reply)
        if snapshot is not None:
            self._transition(MonitorState.POLLING)
        return snapshot

    def on_connection_lost(self, message: str) -> None:
        """Handle the transport declaring the device unreachable."""
        self.connection_lost_message = message
        logger.warning(f"Connection lost: {message}")
        self._transition(MonitorState.CONNECTION_LOST)

    def component_status(self, status: Status) -> Status:
        """Status to present for a component given the connection state."""
        if self.state is MonitorState.CONNECTION_LOST:
            return Status.NAS_CONNECTION_LOST
        return status

    def poll(self) -> bool:
        """Request a fresh reply once a device has been discovered.

        Polling continues after a connection loss so the device can recover.

        Returns: True if a request was issued
        """
        if self.state is MonitorState.SEARCHING:
            return False
        if self._request_status is None:
            return False
        self._request_status()
        return True

    def dispose(self) -> None:
        """Stop monitoring and release the transport."""
        if self._dispose is not None:
            self._dispose()
            self._dispose = None
        self._transition(MonitorState.SEARCHING)
