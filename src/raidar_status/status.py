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
# raidar-status/src/raidar_status/status.py

"""Status codes reported by the NAS and their criticality.

The classification table is built once at import and exposed read-only, so
it can be shared by decoders running in parallel threads.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final


class Status(str, Enum):
    """Health status of a device component, as written on the wire."""
    OK = "ok"
    NOT_OK = "not_ok"
    UNKNOWN = "unknown"
    RESYNC = "resync"
    WARN = "warn"
    LIFE_SUPPORT = "life_support"
    AWAITING_RECOVERY = "awaiting_recovery"
    SPARE_INACTIVE = "spare_inactive"
    NOT_PRESENT = "not_present"
    FAIL = "fail"
    DEAD = "dead"
    # Set by the connection watcher, never found in a reply
    NAS_CONNECTION_LOST = "nas_connection_lost"

    @classmethod
    def parse(cls, text: str) -> "Status":
        """Map a wire token to a Status, falling back to UNKNOWN."""
        try:
            status = cls(text)
        except ValueError:
            return cls.UNKNOWN
        if status is cls.NAS_CONNECTION_LOST:
            return cls.UNKNOWN
        return status


class Criticality(str, Enum):
    """Severity tier of a status."""
    NONE = "none"
    TEMPORARY = "temporary"
    VULNERABLE = "vulnerable"
    CRITICAL = "critical"
    FATAL = "fatal"


class EntityKind(str, Enum):
    """Kind of component a status belongs to; selects the message wording."""
    DEVICE = "device"
    TEMPERATURE = "temperature"
    FAN = "fan"
    POWER_BACKUP = "power_backup"
    VOLUME = "volume"
    DISK = "disk"


@dataclass(frozen=True)
class StatusInfo:
    """Human-readable information about a status code."""
    short: str
    description: str
    criticality: Criticality


NORMAL: Final[str] = "Normal"

_STATUS_TABLE: Final = MappingProxyType({
    Status.OK: StatusInfo(
        NORMAL, "Normal operating mode", Criticality.NONE
    ),
    Status.RESYNC: StatusInfo(
        "Awaiting resync", "Waiting to resync to the RAID volume",
        Criticality.TEMPORARY
    ),
    Status.WARN: StatusInfo(
        "Warning", "Device is in a state where it needs attention",
        Criticality.VULNERABLE
    ),
    Status.LIFE_SUPPORT: StatusInfo(
        "Life support mode", "Multiple disk failures detected",
        Criticality.CRITICAL
    ),
    Status.AWAITING_RECOVERY: StatusInfo(
        "Awaiting recovery", "Disk awaiting recovery", Criticality.CRITICAL
    ),
    Status.SPARE_INACTIVE: StatusInfo(
        "Inactive spare", "Disk is a spare disk on standby", Criticality.NONE
    ),
    Status.NOT_PRESENT: StatusInfo(
        "Not present", "No device attached", Criticality.NONE
    ),
    Status.FAIL: StatusInfo(
        "Dead", "Device has failed", Criticality.FATAL
    ),
    Status.DEAD: StatusInfo(
        "Dead", "Device has failed", Criticality.FATAL
    ),
    Status.NAS_CONNECTION_LOST: StatusInfo(
        "Connection lost", "Network connection with the NAS is lost",
        Criticality.NONE
    ),
})

# Statuses absent from the table (not_ok, unknown)
_UNLISTED_CRITICALITY: Final = Criticality.VULNERABLE

_NOT_OK_MESSAGES: Final = MappingProxyType({
    EntityKind.DEVICE: "Not ok",
    EntityKind.TEMPERATURE: "Temperature not ok",
    EntityKind.FAN: "Fan not ok",
    EntityKind.POWER_BACKUP: "UPS not ok",
    EntityKind.VOLUME: "Volume not ok",
    EntityKind.DISK: "Disk not ok",
})


def lookup(status: Status) -> StatusInfo | None:
    """Return the table entry for a status, or None if it is unlisted."""
    return _STATUS_TABLE.get(status)


def criticality(status: Status) -> Criticality:
    """Return the criticality tier of a status."""
    info = _STATUS_TABLE.get(status)
    if info is None:
        return _UNLISTED_CRITICALITY
    return info.criticality


def describe(status: Status) -> str:
    """Return the long description of a status."""
    info = _STATUS_TABLE.get(status)
    if info is None:
        if status is Status.UNKNOWN:
            return "Status could not be determined"
        return "Component reports a problem"
    return info.description


def classify(status: Status, kind: EntityKind = EntityKind.DEVICE) -> str:
    """Compose the status message shown for a component of the given kind.

    Disks and volumes get the table label with its criticality appended;
    the other kinds only distinguish ok from not ok. A status missing from
    the table yields the kind's generic "not ok" message.
    """
    not_ok = _NOT_OK_MESSAGES[kind]

    if kind in (EntityKind.DISK, EntityKind.VOLUME):
        info = _STATUS_TABLE.get(status)
        if info is None:
            return not_ok
        if info.criticality is Criticality.NONE:
            return info.short
        return f"{info.short} ({info.criticality.value})"
    elif kind is EntityKind.TEMPERATURE:
        message = NORMAL if status is Status.OK else not_ok
        return f"Temperature sensor\n{message}"
    elif kind is EntityKind.FAN:
        message = NORMAL if status is Status.OK else not_ok
        return f"Fan\n{message}"
    else:
        return NORMAL if status is Status.OK else not_ok
