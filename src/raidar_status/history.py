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
# raidar-status/src/raidar_status/history.py

"""Analysis of a directory of captured status replies.

Each file holds one reply payload, as logged by the poller. Files are
replayed in name order through a DeviceMonitor, so malformed replies are
skipped the same way they are during live polling.
"""

from dataclasses import dataclass
from pathlib import Path

import polars as pl
from loguru import logger

from .monitor import DeviceMonitor
from .parser import Snapshot, decode


@dataclass(frozen=True)
class CaptureSummary:
    """Result of replaying a capture directory."""
    replies_total: int
    replies_decoded: int
    replies_malformed: int
    replies_ignored: int
    latest: Snapshot | None
    disks: list[dict]

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'replies': {
                'total': self.replies_total,
                'decoded': self.replies_decoded,
                'malformed': self.replies_malformed,
                'ignored': self.replies_ignored,
            },
            'latest': self.latest.to_dict() if self.latest else None,
            'disks': self.disks,
        }


def _read_reply(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def decode_reply_file(reply_path: str | Path) -> Snapshot:
    """Decode a single captured reply file."""
    reply_path = Path(reply_path)
    if not reply_path.exists():
        raise FileNotFoundError(f"Reply file not found: {reply_path}")

    return decode(_read_reply(reply_path))


def disk_frame(snapshots: list[Snapshot]) -> pl.DataFrame:
    """Flatten the disks of successive snapshots into one row per disk per poll."""
    records = []
    for poll, snapshot in enumerate(snapshots):
        for disk in snapshot.disks:
            records.append({
                'poll': poll,
                'index': disk.index,
                'channel': disk.channel,
                'disk_type': disk.disk_type,
                'status': disk.status.value,
                'state': disk.state,
                'celsius': disk.celsius,
                'fahrenheit': disk.fahrenheit,
            })

    if not records:
        return pl.DataFrame()

    return pl.DataFrame(records)


def summarize_disks(df: pl.DataFrame) -> pl.DataFrame:
    """Aggregate per-channel temperature and alert counts.

    Sleeping disks report 0C, so those rows are left out of the
    temperature aggregates.
    """
    if df.is_empty():
        return pl.DataFrame()

    awake = pl.col('state') != "Sleeping"
    return df.group_by('channel', maintain_order=True).agg(
        pl.len().alias('polls'),
        pl.col('celsius').filter(awake).max().alias('max_celsius'),
        pl.col('celsius').filter(awake).mean().alias('mean_celsius'),
        (pl.col('status') != "ok").sum().alias('alerts'),
        (~awake).sum().alias('sleeping'),
    )


def analyze_capture_directory(capture_dir: str | Path,
                              pattern: str = "*.reply",
                              verbose: bool = False) -> CaptureSummary:
    """Replay every captured reply in a directory.

    Args:
        capture_dir: Directory of reply files, one payload per file
        pattern: Glob selecting the reply files
        verbose: If True, keep library logging enabled. Otherwise the
            raidar_status logger is disabled during the replay and
            enabled again on return, even if it was disabled before

    Returns:
        CaptureSummary with reply counts, the last good snapshot and
        per-disk aggregates over all decoded replies. Files that are not
        status replies at all count as ignored, so the decoded, malformed
        and ignored counts add up to the total
    """
    capture_dir = Path(capture_dir)
    if not capture_dir.is_dir():
        raise ValueError(f"Not a directory: {capture_dir}")

    if not verbose:
        logger.disable("raidar_status")

    try:
        reply_files = sorted(capture_dir.glob(pattern))
        logger.info(f"Replaying {len(reply_files)} replies from {capture_dir}")

        monitor = DeviceMonitor()
        if reply_files:
            monitor.on_discovered()

        snapshots = []
        for reply_file in reply_files:
            snapshot = monitor.on_reply(_read_reply(reply_file))

            if snapshot is None:
                logger.debug(f"No data from {reply_file.name}")
                continue
            snapshots.append(snapshot)

        disks = summarize_disks(disk_frame(snapshots))

        return CaptureSummary(
            replies_total=len(reply_files),
            replies_decoded=monitor.replies_decoded,
            replies_malformed=monitor.replies_malformed,
            replies_ignored=monitor.replies_ignored,
            latest=monitor.snapshot,
            disks=disks.to_dicts(),
        )
    finally:
        if not verbose:
            logger.enable("raidar_status")
