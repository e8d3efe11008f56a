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
# raidar-status/src/raidar_status/parser.py

import re
from dataclasses import dataclass
from typing import Final

from loguru import logger

from .status import Status

# Reply header the transport strips before handing us the payload
HEADER_BYTE_COUNT: Final[int] = 28

# Tab-separated outer columns
MIN_COLUMNS: Final[int] = 5
COL_MAC: Final[int] = 0
COL_NAME: Final[int] = 1
COL_IP: Final[int] = 2
COL_FIELDS: Final[int] = 3
COL_FIRMWARE: Final[int] = 4
COL_BOOT_FLAG: Final[int] = 5

DEFAULT_DISK_STATE: Final[str] = "Active"
UNKNOWN_MODEL: Final[str] = "Unknown ReadyNAS model"
UNKNOWN_FIRMWARE: Final[str] = "Unknown NAS firmware"
UNKNOWN_VERSION: Final[str] = "Unknown version"

# Compiled once, shared by all decode calls
RECORD_RE: Final = re.compile(r"^([a-z]+)!!([0-9]+)!!(.*)$", re.DOTALL)
TEMPERATURE_RE: Final = re.compile(
    r"^status=([a-z_]+)::descr=([0-9.]+)C/([0-9.]+)F"
    r"::expected=([0-9]+)-([0-9]+)C/([0-9]+)-([0-9]+)F"
)
FAN_RE: Final = re.compile(
    r"^status=([a-z_]+)::descr=([0-9]+)RPM(?:::type=([a-zA-Z]+))?"
)
POWER_BACKUP_RE: Final = re.compile(r"^status=([a-z_]+)::descr=(.*)", re.DOTALL)
POWER_BACKUP_DESCR_RE: Final = re.compile(
    r"(.*)\sBattery\scharge:\s*([0-9]+)%,\s*(.*)", re.DOTALL
)
VOLUME_RE: Final = re.compile(
    r"^status=([a-z_]+)::descr=([\w\W]+):\s*([\w\W]+),\s*([\w\W]+);"
    r"\s*([0-9]+)[^0-9]+([0-9]+)[^0-9]+([0-9]+)"
)
DISK_RE: Final = re.compile(
    r"^status=([a-z_]+)::descr=([^:]+):[ ]*([^,]+),[ ]*"
    r"([0-9]+)[^0-9]+([0-9]+)[^0-9](?:[;\[]?([^\]\r\n]+))?"
)
MODEL_RE: Final = re.compile(r"mode=[a-z]+::descr=([^:]+)")
FIRMWARE_NAME_RE: Final = re.compile(r"^([a-zA-Z]+)")
FIRMWARE_VERSION_RE: Final = re.compile(r"version=([^,\s]+)")


class MalformedReply(ValueError):
    """Raised when a reply lacks the columns or records needed to decode it."""


@dataclass(frozen=True)
class Temperature:
    """Enclosure temperature sensor reading."""
    status: Status
    index: int
    celsius: float = 0.0
    fahrenheit: float = 0.0
    min_expected_celsius: int = 0
    max_expected_celsius: int = 0
    min_expected_fahrenheit: int = 0
    max_expected_fahrenheit: int = 0

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'status': self.status.value,
            'index': self.index,
            'celsius': self.celsius,
            'fahrenheit': self.fahrenheit,
            'expected': {
                'celsius': [self.min_expected_celsius,
                            self.max_expected_celsius],
                'fahrenheit': [self.min_expected_fahrenheit,
                               self.max_expected_fahrenheit],
            },
        }


@dataclass(frozen=True)
class Fan:
    """Fan speed reading. Speed is kept as the digits the device sent."""
    status: Status
    index: int
    speed: str = ""
    fan_type: str | None = None  # absent in older firmware

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'status': self.status.value,
            'index': self.index,
            'speed': self.speed,
            'fan_type': self.fan_type,
        }


@dataclass(frozen=True)
class PowerBackup:
    """UPS attached to the device."""
    status: Status
    index: int
    description: str = ""
    charge: str = ""
    time_left: str = ""

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'status': self.status.value,
            'index': self.index,
            'description': self.description,
            'charge': self.charge,
            'time_left': self.time_left,
        }


@dataclass(frozen=True)
class Volume:
    """RAID volume and its usage."""
    status: Status
    index: int
    name: str = ""
    raid_level: str = ""
    raid_status: str = ""
    gb_used: int = 0
    gb_total: int = 0

    @property
    def percent_used(self) -> float:
        """Used capacity as a percentage of the total."""
        if self.gb_total == 0:
            return 0.0
        return (self.gb_used / self.gb_total) * 100

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'status': self.status.value,
            'index': self.index,
            'name': self.name,
            'raid_level': self.raid_level,
            'raid_status': self.raid_status,
            'gb_used': self.gb_used,
            'gb_total': self.gb_total,
        }


@dataclass(frozen=True)
class Disk:
    """Physical disk in one of the device's bays."""
    status: Status
    index: int
    channel: str = ""
    disk_type: str = ""  # model and capacity, e.g. "ST3320620AS 298 GB"
    celsius: int = 0
    fahrenheit: int = 0
    state: str = ""

    @property
    def is_sleeping(self) -> bool:
        return self.state == "Sleeping"

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'status': self.status.value,
            'index': self.index,
            'channel': self.channel,
            'disk_type': self.disk_type,
            'celsius': self.celsius,
            'fahrenheit': self.fahrenheit,
            'state': self.state,
        }


# Statuses that do not call for operator attention
_QUIET_STATUSES: Final = frozenset({
    Status.OK, Status.NOT_PRESENT, Status.SPARE_INACTIVE,
})


@dataclass(frozen=True)
class Snapshot:
    """Decoded state of one device as of a single reply."""
    mac: str
    name: str
    ip: str
    model: str
    firmware_name: str
    firmware_version: str
    boot_flag: str
    temperatures: tuple[Temperature, ...] = ()
    fans: tuple[Fan, ...] = ()
    volumes: tuple[Volume, ...] = ()
    disks: tuple[Disk, ...] = ()
    power_backup: PowerBackup | None = None

    @property
    def disk_count(self) -> int:
        return len(self.disks)

    @property
    def has_alerts(self) -> bool:
        """True if any component reports a status needing attention."""
        entities = [*self.temperatures, *self.fans, *self.volumes,
                    *self.disks]
        if self.power_backup is not None:
            entities.append(self.power_backup)
        return any(e.status not in _QUIET_STATUSES for e in entities)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'device': {
                'mac': self.mac,
                'name': self.name,
                'ip': self.ip,
                'model': self.model,
                'boot_flag': self.boot_flag,
            },
            'firmware': {
                'name': self.firmware_name,
                'version': self.firmware_version,
            },
            'temperatures': [t.to_dict() for t in self.temperatures],
            'fans': [f.to_dict() for f in self.fans],
            'volumes': [v.to_dict() for v in self.volumes],
            'disks': [d.to_dict() for d in self.disks],
            'power_backup': (
                self.power_backup.to_dict() if self.power_backup else None
            ),
        }


@dataclass(frozen=True)
class ReplyColumns:
    """Outer tab-separated columns of a reply."""
    mac: str
    name: str
    ip: str
    fields: str
    firmware: str
    boot_flag: str


@dataclass(frozen=True)
class RawRecord:
    """One kind!!index!!payload record from the fields column."""
    kind: str
    index: int
    payload: str


def payload_from_packet(packet: bytes,
                        header_size: int = HEADER_BYTE_COUNT) -> str:
    """Strip the fixed reply header from a raw packet and decode the text."""
    if len(packet) < header_size:
        raise MalformedReply(
            f"Packet of {len(packet)} bytes is shorter than its header"
        )
    return packet[header_size:].decode("utf-8", errors="replace")


def split_reply(raw_reply: str) -> ReplyColumns:
    """Split a reply into its outer columns.

    Format: mac<TAB>name<TAB>ip<TAB>records<TAB>firmware<TAB>boot_flag[<TAB>...]

    Identity columns are passed through verbatim. A reply with exactly five
    columns has an empty boot flag.
    """
    columns = raw_reply.split('\t')
    if len(columns) < MIN_COLUMNS:
        raise MalformedReply(
            f"Expected at least {MIN_COLUMNS} tab-separated columns, "
            f"got {len(columns)}"
        )

    boot_flag = columns[COL_BOOT_FLAG] if len(columns) > COL_BOOT_FLAG else ""

    return ReplyColumns(
        mac=columns[COL_MAC],
        name=columns[COL_NAME],
        ip=columns[COL_IP],
        fields=columns[COL_FIELDS],
        firmware=columns[COL_FIRMWARE],
        boot_flag=boot_flag,
    )


def split_records(fields: str) -> list[RawRecord]:
    """Split the fields column into records, in the order they appear.

    Lines that do not look like kind!!index!!payload are dropped.
    """
    lines = [line.rstrip('\r') for line in fields.split('\n')
             if line.strip()]
    if not lines:
        raise MalformedReply("Reply contains no records")

    records = []
    for line in lines:
        match = RECORD_RE.match(line)
        if match is None:
            logger.debug(f"Dropping unrecognized record line: {line!r}")
            continue
        records.append(RawRecord(
            kind=match.group(1),
            index=int(match.group(2)),
            payload=match.group(3),
        ))
    return records


def decode_temperature(payload: str, index: int) -> Temperature:
    """Decode a temp record.

    Format: status=ok::descr=34.0C/93.2F::expected=0-60C/32-140F

    The whole pattern must match; otherwise the reading is reported with
    UNKNOWN status and zeroed values.
    """
    match = TEMPERATURE_RE.match(payload)
    if match is None:
        logger.debug(f"Temperature {index} not decoded: {payload!r}")
        return Temperature(status=Status.UNKNOWN, index=index)

    try:
        # float() ignores the locale, '.' is always the separator
        celsius = float(match.group(2))
        fahrenheit = float(match.group(3))
    except ValueError:
        logger.debug(f"Temperature {index} has a bad reading: {payload!r}")
        return Temperature(status=Status.UNKNOWN, index=index)

    return Temperature(
        status=Status.parse(match.group(1)),
        index=index,
        celsius=celsius,
        fahrenheit=fahrenheit,
        min_expected_celsius=int(match.group(4)),
        max_expected_celsius=int(match.group(5)),
        min_expected_fahrenheit=int(match.group(6)),
        max_expected_fahrenheit=int(match.group(7)),
    )


def decode_fan(payload: str, index: int) -> Fan:
    """Decode a fan record.

    Format: status=ok::descr=1985RPM[::type=CAS]
    """
    match = FAN_RE.match(payload)
    if match is None:
        logger.debug(f"Fan {index} not decoded: {payload!r}")
        return Fan(status=Status.UNKNOWN, index=index)

    return Fan(
        status=Status.parse(match.group(1)),
        index=index,
        speed=match.group(2),
        fan_type=match.group(3),
    )


def decode_power_backup(payload: str, index: int) -> PowerBackup:
    """Decode a ups record.

    Format: status=ok::descr=APC Back-UPS ES 700 Battery charge: 100%, 23 min

    A UPS that is not present carries no description. When the description
    cannot be split, the status is kept and the text fields stay empty.
    """
    match = POWER_BACKUP_RE.match(payload)
    if match is None:
        logger.debug(f"UPS {index} not decoded: {payload!r}")
        return PowerBackup(status=Status.UNKNOWN, index=index)

    status = Status.parse(match.group(1))
    if status is Status.NOT_PRESENT:
        return PowerBackup(status=status, index=index)

    descr = POWER_BACKUP_DESCR_RE.match(match.group(2))
    if descr is None:
        logger.debug(f"UPS {index} description not decoded: {payload!r}")
        return PowerBackup(status=status, index=index)

    return PowerBackup(
        status=status,
        index=index,
        description=descr.group(1),
        charge=descr.group(2),
        time_left=descr.group(3),
    )


def decode_volume(payload: str, index: int) -> Volume:
    """Decode a volume record.

    Format: status=ok::descr=Volume C: RAID Level X, Redundant;
            2432 GB (43%) of 5560 GB used

    The percentage between used and total is matched but not kept.
    """
    match = VOLUME_RE.match(payload)
    if match is None:
        logger.debug(f"Volume {index} not decoded: {payload!r}")
        return Volume(status=Status.UNKNOWN, index=index)

    return Volume(
        status=Status.parse(match.group(1)),
        index=index,
        name=match.group(2),
        raid_level=match.group(3),
        raid_status=match.group(4),
        gb_used=int(match.group(5)),
        gb_total=int(match.group(7)),
    )


def decode_disk(payload: str, index: int) -> Disk:
    """Decode a disk record.

    Formats seen in the field:
        status=ok::descr=Channel 1: ST3320620AS 298 GB, 39C/102F
        status=ok::descr=Channel 2: WDC WD20EARS 1863 GB, 42C/107F;10 ATA Errors
        status=ok::descr=Channel 1: WDC WD20EARS 1863 GB, 0C/32F[Sleeping]
    """
    match = DISK_RE.match(payload)
    if match is None:
        logger.debug(f"Disk {index} not decoded: {payload!r}")
        return Disk(status=Status.UNKNOWN, index=index)

    state = match.group(6)
    return Disk(
        status=Status.parse(match.group(1)),
        index=index,
        channel=match.group(2),
        disk_type=match.group(3),
        celsius=int(match.group(4)),
        fahrenheit=int(match.group(5)),
        state=state if state is not None else DEFAULT_DISK_STATE,
    )


def decode_model(payload: str) -> str:
    """Extract the product name from a model record.

    Format: mode=pro::descr=ReadyNAS NV::arch=nsp
    """
    match = MODEL_RE.search(payload)
    if match is None:
        logger.debug(f"Model not decoded: {payload!r}")
        return UNKNOWN_MODEL
    return match.group(1)


def decode_firmware(firmware: str) -> tuple[str, str]:
    """Extract firmware name and version from the firmware column.

    Format: RAIDiator!!version=4.1.8,time=1314924646

    Returns: (name, version)
    """
    name_match = FIRMWARE_NAME_RE.match(firmware)
    name = name_match.group(1) if name_match else UNKNOWN_FIRMWARE

    version_match = FIRMWARE_VERSION_RE.search(firmware)
    version = version_match.group(1) if version_match else UNKNOWN_VERSION

    return name, version


def decode(raw_reply: str) -> Snapshot:
    """Decode one status reply into a Snapshot.

    Args:
        raw_reply: Reply text with the packet header already removed

    Returns:
        A new Snapshot; nothing is carried over from earlier replies

    Raises:
        MalformedReply: if the reply has fewer than five columns or its
            fields column holds no records. Problems inside a single record
            never raise; that record decodes with UNKNOWN status instead.
    """
    columns = split_reply(raw_reply)
    records = split_records(columns.fields)

    temperatures: list[Temperature] = []
    fans: list[Fan] = []
    volumes: list[Volume] = []
    disks: list[Disk] = []
    power_backup: PowerBackup | None = None
    model = UNKNOWN_MODEL

    for record in records:
        if record.kind == "temp":
            temperatures.append(
                decode_temperature(record.payload, record.index)
            )
        elif record.kind == "fan":
            fans.append(decode_fan(record.payload, record.index))
        elif record.kind == "ups":
            power_backup = decode_power_backup(record.payload, record.index)
        elif record.kind == "volume":
            volumes.append(decode_volume(record.payload, record.index))
        elif record.kind == "disk":
            disks.append(decode_disk(record.payload, record.index))
        elif record.kind == "model":
            model = decode_model(record.payload)
        else:
            logger.debug(f"Ignoring record of unknown kind {record.kind!r}")

    firmware_name, firmware_version = decode_firmware(columns.firmware)

    return Snapshot(
        mac=columns.mac,
        name=columns.name,
        ip=columns.ip,
        model=model,
        firmware_name=firmware_name,
        firmware_version=firmware_version,
        boot_flag=columns.boot_flag,
        temperatures=tuple(temperatures),
        fans=tuple(fans),
        volumes=tuple(volumes),
        disks=tuple(disks),
        power_backup=power_backup,
    )
