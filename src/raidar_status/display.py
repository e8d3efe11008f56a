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
# raidar-status/src/raidar_status/display.py

"""Rich tabular display for decoded NAS snapshots."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .history import CaptureSummary
from .parser import Snapshot
from .status import Criticality, EntityKind, Status, classify, criticality

_TIER_COLORS = {
    Criticality.NONE: "green",
    Criticality.TEMPORARY: "yellow",
    Criticality.VULNERABLE: "orange1",
    Criticality.CRITICAL: "red",
    Criticality.FATAL: "bold red",
}


def get_status_color(status: Status) -> str:
    """Get color for a status based on its criticality."""
    if status is Status.NAS_CONNECTION_LOST:
        return "dim"
    if status in (Status.NOT_PRESENT, Status.SPARE_INACTIVE):
        return "dim"
    return _TIER_COLORS[criticality(status)]


def get_status_emoji(status: Status) -> str:
    """Get LED-style indicator for a status."""
    if status is Status.OK:
        return "🟢"
    elif status in (Status.WARN, Status.RESYNC):
        return "🟡"
    elif status in (Status.NOT_PRESENT, Status.SPARE_INACTIVE,
                    Status.NAS_CONNECTION_LOST):
        return "⚪"
    else:
        return "🔴"


def format_status(status: Status, kind: EntityKind) -> Text:
    """Format a status with its indicator and message on one line."""
    message = classify(status, kind).replace("\n", ": ")
    text = Text(f"{get_status_emoji(status)} ")
    text.append(message, style=get_status_color(status))
    return text


def create_device_table(snapshot: Snapshot) -> Table:
    """Create device summary table."""
    table = Table(title=f"{snapshot.name} ({snapshot.model})",
                  show_header=False)

    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("IP Address", snapshot.ip)
    table.add_row("MAC Address", snapshot.mac)
    table.add_row(
        "Firmware",
        f"{snapshot.firmware_name} v{snapshot.firmware_version}"
    )
    table.add_row("Boot Flag", snapshot.boot_flag or "-")
    table.add_section()

    for fan in snapshot.fans:
        label = f"Fan {fan.index}"
        if fan.fan_type:
            label += f" ({fan.fan_type})"
        speed = f"{fan.speed} RPM" if fan.speed else "N/A"
        value = Text(f"{speed}  ")
        value.append_text(format_status(fan.status, EntityKind.FAN))
        table.add_row(label, value)

    for temp in snapshot.temperatures:
        if temp.status is Status.UNKNOWN:
            reading = "N/A"
        else:
            reading = (
                f"{temp.celsius:.1f}°C "
                f"(expected {temp.min_expected_celsius}-"
                f"{temp.max_expected_celsius}°C)"
            )
        value = Text(f"{reading}  ")
        value.append_text(format_status(temp.status, EntityKind.TEMPERATURE))
        table.add_row(f"Temperature {temp.index}", value)

    ups = snapshot.power_backup
    if ups is not None and ups.status is not Status.NOT_PRESENT:
        value = Text(f"{ups.description} {ups.charge}% {ups.time_left}  ")
        value.append_text(format_status(ups.status, EntityKind.POWER_BACKUP))
        table.add_row("UPS", value)

    return table


def create_volumes_table(snapshot: Snapshot) -> Table:
    """Create volumes table."""
    table = Table(title="Volumes")

    table.add_column("Volume", style="cyan")
    table.add_column("RAID")
    table.add_column("Used", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Used %", justify="right")
    table.add_column("Status")

    for volume in snapshot.volumes:
        pct = volume.percent_used
        if pct >= 90:
            pct_style = "red"
        elif pct >= 80:
            pct_style = "yellow"
        else:
            pct_style = "green"

        table.add_row(
            volume.name or f"#{volume.index}",
            f"{volume.raid_level}, {volume.raid_status}".strip(", "),
            f"{volume.gb_used:,d} GB",
            f"{volume.gb_total:,d} GB",
            Text(f"{pct:.0f}%", style=pct_style),
            format_status(volume.status, EntityKind.VOLUME),
        )

    return table


def create_disks_table(snapshot: Snapshot) -> Table:
    """Create disks table. Rows follow the order the device reported."""
    table = Table(title="Disks")

    table.add_column("#", justify="right", style="dim")
    table.add_column("Channel", style="cyan")
    table.add_column("Disk")
    table.add_column("Temp", justify="right")
    table.add_column("State")
    table.add_column("Status")

    for disk in snapshot.disks:
        if disk.is_sleeping:
            temp = Text("sleep", style="dim")
        elif disk.status is Status.UNKNOWN and not disk.channel:
            temp = Text("N/A", style="dim")
        else:
            temp = Text(f"{disk.celsius}°C")

        row_style = "bold" if criticality(disk.status) in (
            Criticality.CRITICAL, Criticality.FATAL
        ) else None

        table.add_row(
            str(disk.index),
            disk.channel,
            disk.disk_type,
            temp,
            disk.state,
            format_status(disk.status, EntityKind.DISK),
            style=row_style
        )

    return table


def display_snapshot(snapshot: Snapshot, console: Console | None = None):
    """Display a snapshot using rich tables."""
    if console is None:
        console = Console()

    console.print(create_device_table(snapshot))
    console.print()

    if snapshot.volumes:
        console.print(create_volumes_table(snapshot))
        console.print()

    console.print(create_disks_table(snapshot))

    # Legend
    console.print("\n[dim]Legend:[/dim]")
    console.print("[dim]  Status: 🟢 Normal, 🟡 Warning, 🔴 Alert, "
                  "⚪ Not present[/dim]")


def create_capture_table(summary: CaptureSummary) -> Table:
    """Create per-disk aggregate table for a capture replay."""
    table = Table(title="Disk History")

    table.add_column("Channel", style="cyan")
    table.add_column("Polls", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Alerts", justify="right")
    table.add_column("Sleeping", justify="right")

    for row in summary.disks:
        max_c = row['max_celsius']
        mean_c = row['mean_celsius']
        alerts = row['alerts']
        table.add_row(
            row['channel'],
            str(row['polls']),
            f"{max_c}°C" if max_c is not None else "-",
            f"{mean_c:.1f}°C" if mean_c is not None else "-",
            Text(str(alerts), style="red bold" if alerts else "dim"),
            str(row['sleeping']),
        )

    return table


def display_capture_summary(summary: CaptureSummary,
                            console: Console | None = None):
    """Display a capture replay summary using rich tables."""
    if console is None:
        console = Console()

    counts = Table(title="Capture Summary", show_header=False)
    counts.add_column("Metric", style="cyan")
    counts.add_column("Value", justify="right")
    counts.add_row("Replies", str(summary.replies_total))
    counts.add_row("Decoded", Text(str(summary.replies_decoded),
                                   style="green"))
    counts.add_row(
        "Malformed",
        Text(str(summary.replies_malformed),
             style="red" if summary.replies_malformed else "dim")
    )
    counts.add_row("Ignored", Text(str(summary.replies_ignored),
                                   style="dim"))
    console.print(counts)
    console.print()

    if summary.disks:
        console.print(create_capture_table(summary))
        console.print()

    if summary.latest is not None:
        display_snapshot(summary.latest, console)
