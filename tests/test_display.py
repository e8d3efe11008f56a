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
# raidar-status/tests/test_display.py

from io import StringIO

from rich.console import Console

from raidar_status import Status, analyze_capture_directory, decode
from raidar_status.display import (
    create_device_table,
    create_disks_table,
    create_volumes_table,
    display_capture_summary,
    display_snapshot,
    get_status_color,
    get_status_emoji,
)


def render(renderable) -> str:
    console = Console(file=StringIO(), width=200)
    console.print(renderable)
    return console.file.getvalue()


class TestDisplayHelpers:
    """Test display helper functions."""

    def test_status_color(self):
        """Test color selection by criticality."""
        assert get_status_color(Status.OK) == "green"
        assert get_status_color(Status.RESYNC) == "yellow"
        assert get_status_color(Status.WARN) == "orange1"
        assert get_status_color(Status.UNKNOWN) == "orange1"
        assert get_status_color(Status.LIFE_SUPPORT) == "red"
        assert get_status_color(Status.DEAD) == "bold red"
        assert get_status_color(Status.NOT_PRESENT) == "dim"
        assert get_status_color(Status.NAS_CONNECTION_LOST) == "dim"

    def test_status_emoji(self):
        assert get_status_emoji(Status.OK) == "🟢"
        assert get_status_emoji(Status.WARN) == "🟡"
        assert get_status_emoji(Status.RESYNC) == "🟡"
        assert get_status_emoji(Status.NOT_PRESENT) == "⚪"
        assert get_status_emoji(Status.FAIL) == "🔴"


class TestTableCreation:
    """Test table creation functions."""

    def test_device_table(self, ups_reply):
        snapshot = decode(ups_reply)

        table = create_device_table(snapshot)
        assert table.title == "Random (ReadyNAS NV+)"

        output = render(table)
        assert "192.168.178.27" in output
        assert "RAIDiator v4.1.9-T6" in output
        assert "2027 RPM" in output
        assert "34.0°C" in output
        assert "APC Back-UPS ES 700" in output

    def test_device_table_fan_types(self, pro6_reply):
        output = render(create_device_table(decode(pro6_reply)))

        assert "Fan 3 (CAS)" in output
        assert "Fan not ok" in output
        # UPS not present
        assert "UPS" not in output

    def test_unknown_temperature(self, basic_reply):
        output = render(create_device_table(decode(basic_reply)))
        assert "Temperature not ok" in output
        assert "N/A" in output

    def test_volumes_table(self, ups_reply):
        output = render(create_volumes_table(decode(ups_reply)))

        assert "Volume C" in output
        assert "RAID Level X, Redundant" in output
        assert "2,432 GB" in output
        assert "5,560 GB" in output
        assert "44%" in output

    def test_disks_table(self, sleeping_reply):
        table = create_disks_table(decode(sleeping_reply))
        assert table.title == "Disks"

        output = render(table)
        assert "Channel 1" in output
        assert "sleep" in output
        assert "45°C" in output
        assert "Warning (vulnerable)" in output

    def test_disks_table_empty_bay(self, pro6_reply):
        output = render(create_disks_table(decode(pro6_reply)))
        assert "Disk not ok" in output


class TestFullDisplay:
    """Test full display output."""

    def test_display_snapshot(self, ups_reply):
        console = Console(file=StringIO(), force_terminal=True, width=200)
        display_snapshot(decode(ups_reply), console)
        output = console.file.getvalue()

        assert "Volumes" in output
        assert "Disks" in output
        assert "Legend:" in output

    def test_display_without_volumes(self, duo_reply):
        console = Console(file=StringIO(), width=200)
        display_snapshot(decode(duo_reply), console)
        output = console.file.getvalue()

        assert "Volumes" not in output
        assert "Disks" in output

    def test_display_capture_summary(self, tmp_path, duo_reply,
                                     sleeping_reply):
        (tmp_path / "001.reply").write_text(duo_reply)
        (tmp_path / "002.reply").write_text(sleeping_reply)
        summary = analyze_capture_directory(tmp_path)

        console = Console(file=StringIO(), width=200)
        display_capture_summary(summary, console)
        output = console.file.getvalue()

        assert "Capture Summary" in output
        assert "Disk History" in output
        assert "Ignored" in output
        assert "43.0°C" in output
        assert "DaveyJones" in output
