from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from rigol_bin_reader.analysis.time_axis import build_time_axis
from rigol_bin_reader.errors import CompatibilityKind
from rigol_bin_reader.models.headers import CaptureDescriptor, FileHeader


@dataclass(frozen=True, eq=False)
class ChannelRecord:
    """
    One decoded channel.

    samples is a read-only float32 array of exactly ``descriptor.n_pts`` values.
    """
    index: int
    unit_code: int
    unit: str
    name: str
    samples: np.ndarray

    @property
    def n_samples(self) -> int:
        return int(self.samples.shape[0])


@dataclass(frozen=True, eq=False)
class DecodedWaveformFile:
    """
    Fully decoded .bin capture.

    Built once after every channel decoded successfully; nothing here refers back to
    an open file.

    warnings:
      Human-readable, non-fatal findings (version mismatch, unexpected x units, ...).
    """
    source: Optional[Path]
    file_header: FileHeader
    descriptor: CaptureDescriptor
    channels: Tuple[ChannelRecord, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def n_channels(self) -> int:
        return len(self.channels)

    @property
    def n_pts(self) -> int:
        return int(self.descriptor.n_pts)

    @property
    def channel_names(self) -> Tuple[str, ...]:
        return tuple(ch.name for ch in self.channels)

    @property
    def units(self) -> Tuple[str, ...]:
        return tuple(ch.unit for ch in self.channels)

    @property
    def date(self) -> str:
        return self.descriptor.date

    @property
    def time(self) -> str:
        return self.descriptor.time

    @property
    def model(self) -> str:
        return self.descriptor.model

    @property
    def compatibility_warning(self) -> bool:
        """True when the file version differs from the one this reader was checked against."""
        return any(w.startswith(CompatibilityKind.VERSION_MISMATCH.value) for w in self.warnings)

    @cached_property
    def time_axis(self) -> np.ndarray:
        d = self.descriptor
        return build_time_axis(d.x_origin, d.x_increment, d.n_pts)

    def channel(self, key: Union[int, str]) -> ChannelRecord:
        """Look up a channel by index or by name."""
        if isinstance(key, str):
            for ch in self.channels:
                if ch.name == key:
                    return ch
            raise KeyError(f"No channel named {key!r}; available: {list(self.channel_names)}")
        return self.channels[int(key)]

    def as_matrix(self) -> np.ndarray:
        """Samples stacked as ``(n_channels, n_pts)`` float32."""
        if not self.channels:
            return np.empty((0, self.n_pts), dtype=np.float32)
        return np.vstack([ch.samples for ch in self.channels])

    def info(self) -> Dict[str, Any]:
        d = self.descriptor
        return {
            "f_date": d.date,
            "f_time": d.time,
            "file_size": int(self.file_header.file_size),
            "n_waveforms": int(self.file_header.n_waveforms),
            "n_pts": int(d.n_pts),
            "model": d.model,
            "x_start": float(d.x_start),
            "dx": float(d.x_increment),
            "channel_names": list(self.channel_names),
            "y_units": list(self.units),
        }
