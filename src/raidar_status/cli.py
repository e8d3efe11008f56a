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
# raidar-status/src/raidar_status/cli.py

"""Command-line interface for decoding NAS status replies."""

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from .display import display_capture_summary, display_snapshot
from .history import analyze_capture_directory
from .parser import MalformedReply, decode, payload_from_packet

app = typer.Typer()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG")


def _read_input(source: str, packet: bool) -> str:
    """Read a reply from a file or stdin ('-')."""
    if source == "-":
        if packet:
            return payload_from_packet(sys.stdin.buffer.read())
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Reply file not found: {path}")
    if packet:
        return payload_from_packet(path.read_bytes())
    return path.read_text(encoding="utf-8", errors="replace")


@app.command("decode")
def decode_reply(
    source: str = typer.Argument(
        ...,
        help="File holding one status reply, or '-' for stdin"
    ),
    packet: bool = typer.Option(
        False,
        "--packet",
        help="Input is a raw packet that still carries its header"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output"
    ),
):
    """Decode a single status reply."""
    _configure_logging(verbose)

    try:
        raw_reply = _read_input(source, packet)
        logger.info(f"Decoding {len(raw_reply)} characters from {source}")
        snapshot = decode(raw_reply)
    except (MalformedReply, OSError) as e:
        logger.error(f"Decode failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(snapshot.to_dict(), indent=2))
    else:
        display_snapshot(snapshot, Console())


@app.command()
def analyze(
    capture_dir: Path = typer.Argument(
        ...,
        help="Directory of captured replies, one per file"
    ),
    pattern: str = typer.Option(
        "*.reply",
        "--pattern",
        help="Glob selecting reply files in the directory"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output"
    ),
):
    """Replay a directory of captured replies and summarize disk history."""
    _configure_logging(verbose)

    try:
        summary = analyze_capture_directory(
            capture_dir, pattern=pattern, verbose=verbose
        )
    except (ValueError, OSError) as e:
        logger.error(f"Analysis failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        display_capture_summary(summary, Console())


if __name__ == "__main__":
    app()
