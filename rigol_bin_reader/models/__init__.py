from .headers import UNIT_LABELS, CaptureDescriptor, FileHeader, unit_label
from .waveform import ChannelRecord, DecodedWaveformFile

__all__ = [
    "UNIT_LABELS",
    "CaptureDescriptor",
    "FileHeader",
    "unit_label",
    "ChannelRecord",
    "DecodedWaveformFile",
]
