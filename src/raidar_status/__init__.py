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
# raidar-status/src/raidar_status/__init__.py

"""ReadyNAS RAIDar status reply decoder.

Decode the tab-separated status replies sent by ReadyNAS appliances into
typed snapshots of temperatures, fans, UPS, volumes and disks.
"""

from .history import (
    CaptureSummary,
    analyze_capture_directory,
    decode_reply_file,
    disk_frame,
    summarize_disks,
)
from .monitor import POLL_INTERVAL_SECONDS, DeviceMonitor, MonitorState
from .parser import (
    Disk,
    Fan,
    MalformedReply,
    PowerBackup,
    Snapshot,
    Temperature,
    Volume,
    decode,
    payload_from_packet,
    split_records,
    split_reply,
)
from .status import Criticality, EntityKind, Status, classify, criticality

__version__ = "0.1.0"

__all__ = [
    "CaptureSummary",
    "Criticality",
    "DeviceMonitor",
    "Disk",
    "EntityKind",
    "Fan",
    "MalformedReply",
    "MonitorState",
    "POLL_INTERVAL_SECONDS",
    "PowerBackup",
    "Snapshot",
    "Status",
    "Temperature",
    "Volume",
    "analyze_capture_directory",
    "classify",
    "criticality",
    "decode",
    "decode_reply_file",
    "disk_frame",
    "payload_from_packet",
    "split_records",
    "split_reply",
    "summarize_disks",
]
