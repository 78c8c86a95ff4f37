from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from rigol_bin_reader.models.waveform import DecodedWaveformFile

logger = logging.getLogger(__name__)


def _column_names(decoded: DecodedWaveformFile) -> list[str]:
    """Channel names made unique; blank names fall back to CH<n>."""
    seen: dict[str, int] = {}
    out: list[str] = []
    for i, ch in enumerate(decoded.channels):
        name = ch.name or f"CH{i + 1}"
        if name in seen or name == "t":
            seen[name] = seen.get(name, 0) + 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        out.append(name)
    return out


def to_dataframe(decoded: DecodedWaveformFile) -> pd.DataFrame:
    """Column ``t`` (float64 seconds) plus one float64 column per channel, in channel order."""
    names = _column_names(decoded)
    data = {"t": np.asarray(decoded.time_axis, dtype=np.float64)}
    for name, ch in zip(names, decoded.channels, strict=True):
        data[name] = ch.samples.astype(np.float64)
    df = pd.DataFrame(data)
    df.attrs["units"] = {name: ch.unit for name, ch in zip(names, decoded.channels)}
    df.attrs["model"] = decoded.model
    return df


def write_csv(path: Path, decoded: DecodedWaveformFile) -> None:
    """Write the decoded channels as CSV. The file must not exist yet."""
    path = Path(path)
    if path.exists():
        raise FileExistsError(f"CSV file already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    df = to_dataframe(decoded)
    with path.open("x", newline="", encoding="utf-8") as f:
        df.to_csv(f, index=False)
    logger.info(f"wrote {len(df)} rows x {decoded.n_channels} channels to {path}")
