"""Rigol bin reader -- Python tooling for Rigol DHO800-series binary waveform captures.

This package provides tools for:
- Decoding *.bin waveform files saved by the oscilloscope (memory or screen save)
- Reconstructing the time axis from the capture's sample spacing and origin
- Summarizing and plotting decoded channels
- Exporting decoded channels as a pandas DataFrame / CSV

Key principles:
- All-or-nothing decode: a truncated or malformed file raises, never returns partial data
- Version mismatches are reported as warnings on the result, not errors
- The decoded result is immutable and holds no open file

Main subpackages:
- ingest: File layout and the decoder
- models: Data models (FileHeader, CaptureDescriptor, ChannelRecord, DecodedWaveformFile)
- analysis: Time-axis reconstruction
- presentation: Console summary and matplotlib plots
"""

from .errors import (
    CompatibilityKind,
    CompatibilityWarning,
    FormatError,
    FormatErrorKind,
    IOErrorKind,
    RigolBinError,
    RigolBinIOError,
)
from .ingest import RigolBinReader, RigolBinReaderConfig, decode
from .models import CaptureDescriptor, ChannelRecord, DecodedWaveformFile, FileHeader

__all__ = [
    "CompatibilityKind",
    "CompatibilityWarning",
    "FormatError",
    "FormatErrorKind",
    "IOErrorKind",
    "RigolBinError",
    "RigolBinIOError",
    "RigolBinReader",
    "RigolBinReaderConfig",
    "decode",
    "CaptureDescriptor",
    "ChannelRecord",
    "DecodedWaveformFile",
    "FileHeader",
]
