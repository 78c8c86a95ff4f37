"""Console summary of a decoded capture.

The decoder never prints; callers choose a verbosity here instead.

Verbosity levels
----------------
0  nothing
1  date, time, record length, time per point, channel list (and warnings)
2  level 1 plus model, sample rate, time origin and file version
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from rigol_bin_reader.models.waveform import DecodedWaveformFile

QUIET = 0
NORMAL = 1
DETAILED = 2


def format_record_length(n_pts: int) -> str:
    n = int(n_pts)
    if n >= 1_000_000:
        return f"{n / 1e6:g}Meg"
    return f"{n / 1000:g}k"


def format_sample_interval(dx: float) -> str:
    """Human-readable time per point, e.g. ``'1.0 microseconds'``."""
    dx = float(dx)
    if dx <= 1e-6:
        return f"{dx / 1e-9:3.1f} nanoseconds"
    if dx <= 1e-3:
        return f"{dx / 1e-6:3.1f} microseconds"
    if dx <= 1.0:
        return f"{dx / 1e-3:3.1f} milliseconds"
    return f"{dx:3.1f} seconds"


def format_summary(decoded: DecodedWaveformFile, verbosity: int = NORMAL) -> str:
    if verbosity <= QUIET:
        return ""

    d = decoded.descriptor
    lines: List[str] = ["---"]
    if decoded.source is not None:
        lines.append(f"Filename: {decoded.source}")
    lines.append(f"File date: {d.date}")
    lines.append(f"File time: {d.time}")
    lines.append(f"Record length: {format_record_length(d.n_pts)}")
    lines.append(f"Time/pt: {format_sample_interval(d.x_increment)}")
    if verbosity >= DETAILED:
        lines.append(f"Model: {d.model}")
        lines.append(f"Sample rate: {d.sample_rate:.6g} Sa/s")
        lines.append(f"First sample at: {d.x_start:.6g} s")
        lines.append(f"File version: {decoded.file_header.version}")
    lines.append(f"Number of waveforms: {decoded.n_channels}")
    for ch in decoded.channels:
        lines.append(f"  - {ch.name}  : {ch.unit}")
    for w in decoded.warnings:
        lines.append(f"WARNING: {w}")
    return "\n".join(lines)


def print_summary(
    decoded: DecodedWaveformFile,
    verbosity: int = NORMAL,
    stream: Optional[TextIO] = None,
) -> None:
    text = format_summary(decoded, verbosity)
    if text:
        print(text, file=stream or sys.stdout)
