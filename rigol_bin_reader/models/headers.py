from __future__ import annotations

import math
from dataclasses import dataclass

from rigol_bin_reader.errors import FormatError, FormatErrorKind


UNIT_LABELS = (
    "Unknown",
    "Volts (V)",
    "Seconds (s)",
    "Constant",
    "Amps (A)",
    "Decibel (dB)",
    "Hertz (Hz)",
)

UNIT_SECONDS = 2


def unit_label(code: int, offset: int | None = None) -> str:
    """Map a unit code to its label. Codes outside the table are an error, never 'Unknown'."""
    code = int(code)
    if code < 0 or code >= len(UNIT_LABELS):
        raise FormatError(
            FormatErrorKind.UNKNOWN_UNIT_CODE,
            f"unit code {code} is outside 0..{len(UNIT_LABELS) - 1}",
            offset=offset,
        )
    return UNIT_LABELS[code]


@dataclass(frozen=True)
class FileHeader:
    """
    Fixed 16-byte header at the start of every .bin file.

    signature:
      Two-character tag, always "RG" for files that got this far.
    version:
      Two-character format version. Only the second character is checked.
    file_size:
      Total size in bytes as written by the instrument (informational).
    n_waveforms:
      Number of channel blocks that follow (>= 1).
    """
    signature: str
    version: str
    file_size: int
    n_waveforms: int
    expected_version_digit: str = "3"

    @property
    def version_ok(self) -> bool:
        return len(self.version) >= 2 and self.version[1] == self.expected_version_digit


@dataclass(frozen=True)
class CaptureDescriptor:
    """
    Capture-wide waveform header shared by all channels.

    Notes
    - n_pts and buffer_size are read once and apply to every channel.
    - buffer_size is stored once per file; channels with a different payload size
      are not representable.
    - date/time/model are NUL- and blank-trimmed ASCII.
    """
    header_size: int
    waveform_type: int
    n_buffers: int
    n_pts: int
    count: int
    x_range: float
    x_display_origin: float
    x_increment: float
    x_origin: float
    x_units: int
    y_units: int
    date: str
    time: str
    model: str

    # per-buffer layout (absolute offset 156)
    wfm_header_size: int
    buffer_type: int
    bytes_per_point: int
    buffer_size: int

    @property
    def x_start(self) -> float:
        """Time of the first sample."""
        return -self.x_origin

    @property
    def sample_rate(self) -> float:
        if not math.isfinite(self.x_increment) or self.x_increment <= 0:
            return float("nan")
        return 1.0 / self.x_increment

    @property
    def x_units_label(self) -> str:
        return unit_label(self.x_units)
