"""Ingest package - Rigol .bin layout and decoder.

This package handles:
- The on-disk layout of the file header, waveform header and channel blocks
- Offset arithmetic for the variable-length channel blocks
- Decoding a whole file into a DecodedWaveformFile

Key classes:
- RigolBinReader: decodes one file (path or stream)
- RigolBinReaderConfig: signature/version expectations and threading

Design principle:
- Readers produce fully validated DecodedWaveformFile objects or raise
- No partial results are ever returned
"""

from .layout import ChannelOffsets, channel_offsets
from .readers_bin import (
    RigolBinReader,
    RigolBinReaderConfig,
    decode,
    read_capture_descriptor,
    read_channel,
    read_file_header,
)

__all__ = [
    "ChannelOffsets",
    "channel_offsets",
    "RigolBinReader",
    "RigolBinReaderConfig",
    "decode",
    "read_capture_descriptor",
    "read_channel",
    "read_file_header",
]
