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
# raidar-status/tests/conftest.py

import pytest

# Older firmware: no expected range on temp, no version in firmware column
BASIC_REPLY = (
    "00:0d:a2:01:09:bd\tNASgul\t192.168.1.5\t"
    "model!!0!!mode=pro::descr=ReadyNAS NV::arch=nsp\n"
    "fan!!0!!status=ok::descr=2352RPM\n"
    "temp!!0!!status=ok::descr=34.0C\n"
    "disk!!1!!status=ok::descr=Channel 1: ST3320620AS 298 GB, 39C/102F\n"
    "disk!!2!!status=ok::descr=Channel 2: ST3320620AS 298 GB, 39C/102F\n"
    "disk!!3!!status=ok::descr=Channel 3: ST3320620AS 298 GB, 39C/102F\n"
    "disk!!4!!status=ok::descr=Channel 4: ST3320620AS 298 GB, 39C/102F\n"
    "\tFS_CHECK\n"
    "\t66\t1\t1\n"
)

UPS_REPLY = (
    "00:0d:a2:01:d4:56\tRandom\t192.168.178.27\t"
    "temp!!1!!status=ok::descr=34.0C/93.2F::expected=0-60C/32-140F\n"
    "fan!!1!!status=ok::descr=2027RPM\n"
    "ups!!1!!status=ok::descr=APC Back-UPS ES 700 Battery charge: 100%, 23 min\n"
    "volume!!1!!status=ok::descr=Volume C: RAID Level X, Redundant; "
    "2432 GB (43%) of 5560 GB used\n"
    "disk!!1!!status=ok::descr=Channel 1: WDC WD20EARS-00S8B1 1863 GB, "
    "38C/100F;10 ATA Errors\n"
    "disk!!2!!status=ok::descr=Channel 2: WDC WD20EARS-00S8B1 1863 GB, 42C/107F\n"
    "model!!0!!mode=pro::descr=ReadyNAS NV+::arch=nsp\n"
    "\tRAIDiator!!version=4.1.9-T6,time=1331164301\n"
    "\t66"
)

# Six-bay unit reporting fans out of index order and two empty bays
PRO6_REPLY = (
    "00:1f:33:ea:b7:2e\tnas\t192.168.1.4\t"
    "temp!!1!!status=ok::descr=61.0C/141.8F::expected=0-65C/32-149F\n"
    "temp!!2!!status=ok::descr=45.5C/113.9F::expected=0-85C/32-185F\n"
    "fan!!3!!status=ok::descr=1985RPM::type=CAS\n"
    "fan!!2!!status=warn::descr=2280RPM::type=CPU\n"
    "fan!!1!!status=ok::descr=1280RPM::type=SYS\n"
    "ups!!1!!status=not_present::descr=\n"
    "volume!!1!!status=ok::descr=Volume C: RAID Level X2, Redundant; "
    "3433 GB (61%) of 5543 GB used\n"
    "disk!!1!!status=ok::descr=Channel 1: Seagate ST32000542AS 1863 GB, 44C/111F\n"
    "disk!!2!!status=ok::descr=Channel 2: Seagate ST32000542AS 1863 GB, 44C/111F\n"
    "disk!!5!!status=not_present::descr=Not present\n"
    "disk!!6!!status=not_present::descr=Not present\n"
    "model!!0!!mode=pro::descr=ReadyNAS Pro 6::arch=x86\n"
    "\tRAIDiator!!version=4.2.20,time=1333564262\n"
    "\t66"
)

SLEEPING_REPLY = (
    "00:1f:33:df:79:3f\tDaveyJones\t192.168.12.9\t"
    "fan!!1!!status=ok::descr=1339RPM\n"
    "ups!!1!!status=ok::descr=APC Back-UPS CS 500 Battery charge: 100%, 52 min\n"
    "volume!!1!!status=ok::descr=Volume C: RAID Level X, Redundant; "
    "443 GB (24%) of 1846 GB used\n"
    "disk!!1!!status=ok::descr=Channel 1: WDC WD20EARS-00S8B1 1863 GB, "
    "0C/32F[Sleeping]\n"
    "disk!!2!!status=warn::descr=Channel 2: WDC WD20EARS-00S8B1 1863 GB, "
    "45C/113F\n"
    "model!!0!!mode=home::descr=ReadyNAS Duo::arch=nsp\n"
    "\tRAIDiator!!version=4.1.8,time=1314924646\n"
    "\t66"
)

DUO_REPLY = (
    "00:1f:33:df:79:3f\tDaveyJones\t192.168.12.9\t"
    "fan!!1!!status=ok::descr=1666RPM\n"
    "disk!!1!!status=ok::descr=Channel 1: WDC WD20EARS-00S8B1 1863 GB, 39C/102F\n"
    "disk!!2!!status=ok::descr=Channel 2: WDC WD20EARS-00S8B1 1863 GB, 41C/105F\n"
    "model!!0!!mode=home::descr=ReadyNAS Duo::arch=nsp\n"
    "\tRAIDiator!!version=4.1.8,time=1314924646\n"
    "\t66"
)


@pytest.fixture
def basic_reply() -> str:
    return BASIC_REPLY


@pytest.fixture
def ups_reply() -> str:
    return UPS_REPLY


@pytest.fixture
def pro6_reply() -> str:
    return PRO6_REPLY


@pytest.fixture
def sleeping_reply() -> str:
    return SLEEPING_REPLY


@pytest.fixture
def duo_reply() -> str:
    return DUO_REPLY
