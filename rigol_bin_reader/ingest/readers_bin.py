from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

import numpy as np

from rigol_bin_reader.errors import (
    CompatibilityKind,
    CompatibilityWarning,
    FormatError,
    FormatErrorKind,
    IOErrorKind,
    RigolBinIOError,
)
from rigol_bin_reader.ingest.layout import (
    DESCRIPTOR_DTYPE,
    DESCRIPTOR_OFFSET,
    FILE_HEADER_DTYPE,
    FILE_HEADER_SIZE,
    LAYOUT_DTYPE,
    LAYOUT_OFFSET,
    NAME_SIZE,
    SAMPLE_DTYPE,
    SIGNATURE_SIZE,
    UNIT_CODE_DTYPE,
    channel_offsets,
    decode_text,
)
from rigol_bin_reader.models.headers import UNIT_SECONDS, CaptureDescriptor, FileHeader, unit_label
from rigol_bin_reader.models.waveform import ChannelRecord, DecodedWaveformFile

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", BinaryIO]


@dataclass(frozen=True)
class RigolBinReaderConfig:
    """
    Reader configuration for Rigol .bin waveform files.

    signature:
      Two-character tag every file must start with.
    version_digit:
      Expected second character of the version field. A mismatch only produces a
      compatibility warning on the result.
    check_file_size:
      Compare the header's file_size with the real source length and warn on mismatch.
    max_workers:
      >1 decodes channels on a thread pool, one file handle per worker. Only used when
      decoding from a path; streams are always read sequentially.
    """
    signature: str = "RG"
    version_digit: str = "3"
    check_file_size: bool = False
    max_workers: int = 1

    def __post_init__(self) -> None:
        if len(self.signature) != SIGNATURE_SIZE:
            raise ValueError(f"signature must be {SIGNATURE_SIZE} characters, got {self.signature!r}")
        if len(self.version_digit) != 1:
            raise ValueError(f"version_digit must be a single character, got {self.version_digit!r}")
        if int(self.max_workers) < 1:
            raise ValueError("max_workers must be >= 1")


def _read_exact(fh: BinaryIO, n: int, offset: int, what: str) -> bytes:
    raw = fh.read(n)
    if len(raw) != n:
        raise RigolBinIOError(
            IOErrorKind.TRUNCATED,
            f"{what}: wanted {n} bytes, got {len(raw)}",
            offset=offset,
        )
    return raw


def read_file_header(
    fh: BinaryIO,
    config: Optional[RigolBinReaderConfig] = None,
) -> Tuple[FileHeader, List[str]]:
    """
    Read the 16-byte file header from the current position (expected: start of file).

    Returns (header, warnings). A wrong signature fails before anything past the
    first two bytes is read.
    """
    cfg = config or RigolBinReaderConfig()
    warnings: List[str] = []

    sig_raw = _read_exact(fh, SIGNATURE_SIZE, 0, "file signature")
    expected = cfg.signature.encode("ascii")
    if sig_raw != expected:
        raise FormatError(
            FormatErrorKind.BAD_SIGNATURE,
            f"first two bytes are {sig_raw!r}, expected {expected!r}; not a Rigol waveform file",
            offset=0,
        )

    rest = _read_exact(fh, FILE_HEADER_SIZE - SIGNATURE_SIZE, SIGNATURE_SIZE, "file header")
    rec = np.frombuffer(sig_raw + rest, dtype=FILE_HEADER_DTYPE)[0]

    header = FileHeader(
        signature=decode_text(rec["signature"]),
        version=bytes(rec["version"]).decode("ascii", errors="replace"),
        file_size=int(rec["file_size"]),
        n_waveforms=int(rec["n_waveforms"]),
        expected_version_digit=cfg.version_digit,
    )

    if header.n_waveforms < 1:
        raise FormatError(
            FormatErrorKind.INVALID_DESCRIPTOR,
            "file declares 0 waveforms",
            offset=12,
        )

    if not header.version_ok:
        w = CompatibilityWarning(
            CompatibilityKind.VERSION_MISMATCH,
            f"file version {header.version!r}; reader tested on version digit "
            f"{cfg.version_digit!r}, decoded values may be incorrect",
        )
        logger.warning(str(w))
        warnings.append(str(w))

    logger.debug(
        f"file header: version={header.version!r} file_size={header.file_size} "
        f"n_waveforms={header.n_waveforms}"
    )
    return header, warnings


def read_capture_descriptor(fh: BinaryIO) -> CaptureDescriptor:
    """
    Read the capture-wide waveform header.

    The fixed fields are read from the current position (immediately after the file
    header); the per-buffer layout fields are then read from absolute offset 156.
    """
    raw = _read_exact(fh, DESCRIPTOR_DTYPE.itemsize, DESCRIPTOR_OFFSET, "waveform header")
    rec = np.frombuffer(raw, dtype=DESCRIPTOR_DTYPE)[0]

    fh.seek(LAYOUT_OFFSET)
    raw = _read_exact(fh, LAYOUT_DTYPE.itemsize, LAYOUT_OFFSET, "waveform data header")
    lay = np.frombuffer(raw, dtype=LAYOUT_DTYPE)[0]

    desc = CaptureDescriptor(
        header_size=int(rec["header_size"]),
        waveform_type=int(rec["waveform_type"]),
        n_buffers=int(rec["n_buffers"]),
        n_pts=int(rec["n_pts"]),
        count=int(rec["count"]),
        x_range=float(rec["x_range"]),
        x_display_origin=float(rec["x_display_origin"]),
        x_increment=float(rec["x_increment"]),
        x_origin=float(rec["x_origin"]),
        x_units=int(rec["x_units"]),
        y_units=int(rec["y_units"]),
        date=decode_text(rec["date"]),
        time=decode_text(rec["time"]),
        model=decode_text(rec["model"]),
        wfm_header_size=int(lay["wfm_header_size"]),
        buffer_type=int(lay["buffer_type"]),
        bytes_per_point=int(lay["bytes_per_point"]),
        buffer_size=int(lay["buffer_size"]),
    )

    if desc.n_pts <= 0:
        raise FormatError(FormatErrorKind.INVALID_DESCRIPTOR, "n_pts must be > 0", offset=28)
    if desc.buffer_size <= 0:
        raise FormatError(FormatErrorKind.INVALID_DESCRIPTOR, "buffer_size must be > 0", offset=164)
    if not math.isfinite(desc.x_increment) or desc.x_increment <= 0:
        raise FormatError(
            FormatErrorKind.INVALID_DESCRIPTOR,
            f"x_increment must be a positive number, got {desc.x_increment!r}",
            offset=48,
        )

    logger.debug(
        f"descriptor: n_pts={desc.n_pts} x_increment={desc.x_increment:.6g} "
        f"x_origin={desc.x_origin:.6g} buffer_size={desc.buffer_size} model={desc.model!r}"
    )
    return desc


def descriptor_warnings(desc: CaptureDescriptor) -> List[str]:
    """Non-fatal consistency findings on a descriptor that passed validation."""
    warnings: List[str] = []
    if desc.x_units != UNIT_SECONDS:
        warnings.append(f"x_units code {desc.x_units} is not Seconds; time axis assumes seconds")
    expected = desc.n_pts * desc.bytes_per_point
    if desc.buffer_size != expected:
        warnings.append(
            f"buffer_size {desc.buffer_size} != n_pts*bytes_per_point {expected}; "
            f"channel offsets use buffer_size"
        )
    for w in warnings:
        logger.warning(w)
    return warnings


def read_channel(fh: BinaryIO, index: int, descriptor: CaptureDescriptor) -> ChannelRecord:
    """Read unit, name and samples of one channel via three absolute seeks."""
    off = channel_offsets(index, descriptor)

    fh.seek(off.unit)
    raw = _read_exact(fh, UNIT_CODE_DTYPE.itemsize, off.unit, f"channel {index} unit code")
    code = int(np.frombuffer(raw, dtype=UNIT_CODE_DTYPE)[0])
    unit = unit_label(code, offset=off.unit)

    fh.seek(off.name)
    name = decode_text(_read_exact(fh, NAME_SIZE, off.name, f"channel {index} name"))

    fh.seek(off.data)
    n_pts = int(descriptor.n_pts)
    want = n_pts * SAMPLE_DTYPE.itemsize
    raw = fh.read(want)
    if len(raw) < want:
        raise FormatError(
            FormatErrorKind.TRUNCATED_CHANNEL_DATA,
            f"channel {index}: expected {n_pts} samples, file holds {len(raw) // SAMPLE_DTYPE.itemsize}",
            offset=off.data,
        )
    samples = np.frombuffer(raw, dtype=SAMPLE_DTYPE)

    logger.debug(f"channel {index}: name={name!r} unit={unit!r} data@{off.data}")
    return ChannelRecord(index=int(index), unit_code=code, unit=unit, name=name, samples=samples)


def _open_binary(path: Path) -> BinaryIO:
    try:
        return path.open("rb")
    except FileNotFoundError as e:
        raise RigolBinIOError(IOErrorKind.NOT_FOUND, f"file does not exist: {path}") from e
    except IsADirectoryError as e:
        raise RigolBinIOError(IOErrorKind.NOT_FOUND, f"not a file: {path}") from e
    except PermissionError as e:
        raise RigolBinIOError(IOErrorKind.PERMISSION_DENIED, f"cannot open {path} for reading") from e


class RigolBinReader:
    """
    Decoder for Rigol DHO800-series binary waveform files (*.bin).

    Contract:
      - file header -> capture descriptor -> channels 0..N-1 -> result, in that order.
      - any RigolBinIOError / FormatError aborts the decode; no partial results.
      - compatibility findings are attached to the result as warnings.
      - a path source is opened and closed here; a stream source is borrowed and left open.
    """

    def __init__(self, config: Optional[RigolBinReaderConfig] = None):
        self.config = config or RigolBinReaderConfig()

    def read(self, source: Source) -> DecodedWaveformFile:
        if isinstance(source, (str, os.PathLike)):
            path = Path(source).expanduser().resolve()
            logger.debug(f"decoding {path}")
            with _open_binary(path) as fh:
                return self._decode(fh, path)
        return self._decode(source, None)

    def _decode(self, fh: BinaryIO, path: Optional[Path]) -> DecodedWaveformFile:
        cfg = self.config
        fh.seek(0)

        header, warnings = read_file_header(fh, cfg)
        descriptor = read_capture_descriptor(fh)
        warnings.extend(descriptor_warnings(descriptor))

        if cfg.check_file_size:
            actual = fh.seek(0, os.SEEK_END)
            if actual != header.file_size:
                msg = f"header file_size {header.file_size} != actual size {actual}"
                logger.warning(msg)
                warnings.append(msg)

        channels = self._read_channels(fh, path, header.n_waveforms, descriptor)

        return DecodedWaveformFile(
            source=path,
            file_header=header,
            descriptor=descriptor,
            channels=tuple(channels),
            warnings=tuple(warnings),
        )

    def _read_channels(
        self,
        fh: BinaryIO,
        path: Optional[Path],
        n_channels: int,
        descriptor: CaptureDescriptor,
    ) -> List[ChannelRecord]:
        workers = min(int(self.config.max_workers), n_channels)
        if path is None or workers <= 1:
            return [read_channel(fh, i, descriptor) for i in range(n_channels)]

        def _worker(index: int) -> ChannelRecord:
            with _open_binary(path) as own:
                return read_channel(own, index, descriptor)

        logger.debug(f"decoding {n_channels} channels on {workers} threads")
        with ThreadPoolExecutor(max_workers=workers) as ex:
            # map() yields in submission order, so channel order follows the index.
            return list(ex.map(_worker, range(n_channels)))


def decode(source: Source, config: Optional[RigolBinReaderConfig] = None) -> DecodedWaveformFile:
    """Decode a Rigol .bin file from a path or a seekable binary stream."""
    return RigolBinReader(config).read(source)
