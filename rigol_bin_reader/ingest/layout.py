from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from rigol_bin_reader.models.headers import CaptureDescriptor


# All multi-byte fields are little-endian (instrument native order).
SIGNATURE_SIZE = 2

FILE_HEADER_DTYPE = np.dtype(
    [
        ("signature", "S2"),
        ("version", "S2"),
        ("file_size", "<u8"),
        ("n_waveforms", "<u4"),
    ]
)
FILE_HEADER_SIZE = FILE_HEADER_DTYPE.itemsize  # 16

# Waveform header, read sequentially right after the file header.
DESCRIPTOR_OFFSET = FILE_HEADER_SIZE
DESCRIPTOR_DTYPE = np.dtype(
    [
        ("header_size", "<u4"),
        ("waveform_type", "<u4"),
        ("n_buffers", "<u4"),
        ("n_pts", "<u4"),
        ("count", "<u4"),
        ("x_range", "<f4"),
        ("x_display_origin", "<f8"),
        ("x_increment", "<f8"),
        ("x_origin", "<f8"),
        ("x_units", "<u4"),
        ("y_units", "<u4"),
        ("date", "S16"),
        ("time", "S16"),
        ("model", "S24"),
    ]
)

# Per-buffer (data header) fields; a 16-byte channel name and 12 reserved bytes sit in between.
LAYOUT_OFFSET = 156
LAYOUT_DTYPE = np.dtype(
    [
        ("wfm_header_size", "<u4"),
        ("buffer_type", "<u2"),
        ("bytes_per_point", "<u2"),
        ("buffer_size", "<u8"),
    ]
)

# Channel block geometry. Each block is a 140-byte waveform header followed by a
# 16-byte data header and buffer_size payload bytes.
WAVEFORM_HEADER_SIZE = 140
DATA_HEADER_SIZE = 16
BLOCK_OVERHEAD = WAVEFORM_HEADER_SIZE + DATA_HEADER_SIZE  # 156

UNIT_BASE_OFFSET = 68
NAME_BASE_OFFSET = 128
DATA_BASE_OFFSET = DESCRIPTOR_OFFSET + BLOCK_OVERHEAD  # 172

UNIT_CODE_DTYPE = np.dtype("<u4")
NAME_SIZE = 16
SAMPLE_DTYPE = np.dtype("<f4")


@dataclass(frozen=True)
class ChannelOffsets:
    """Absolute byte offsets of one channel's unit code, name and sample payload."""
    unit: int
    name: int
    data: int


def block_stride(buffer_size: int) -> int:
    """Distance in bytes between consecutive channel blocks."""
    return BLOCK_OVERHEAD + int(buffer_size)


def channel_offsets(index: int, descriptor: CaptureDescriptor) -> ChannelOffsets:
    """Compute where channel ``index`` lives in the file.

    Pure function of the index and the capture-wide buffer_size; nothing is re-read per
    channel.
    """
    i = int(index)
    if i < 0:
        raise ValueError(f"channel index must be >= 0, got {i}")
    bs = int(descriptor.buffer_size)
    stride = block_stride(bs)
    return ChannelOffsets(
        unit=UNIT_BASE_OFFSET + i * stride,
        name=NAME_BASE_OFFSET + i * stride,
        data=DATA_BASE_OFFSET + i * BLOCK_OVERHEAD + i * bs,
    )


def decode_text(raw: bytes) -> str:
    """ASCII field -> str, cut at the first NUL and blank-trimmed."""
    raw = bytes(raw).split(b"\x00", 1)[0]
    return raw.decode("ascii", errors="replace").strip()
