from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from rigol_bin_reader.models.waveform import DecodedWaveformFile


def plot_channels(decoded: DecodedWaveformFile, fig: Optional[Figure] = None) -> Figure:
    """One stacked subplot per channel, samples against the reconstructed time axis.

    A new figure sized to the channel count is created when ``fig`` is None; the caller
    decides whether to ``show()`` or ``savefig()`` it.
    """
    n = max(decoded.n_channels, 1)
    if fig is None:
        title = str(decoded.source.name) if decoded.source is not None else "Rigol capture"
        fig = plt.figure(figsize=(5.0, 2.5 * n))
        if fig.canvas.manager is not None:
            fig.canvas.manager.set_window_title(title)
    else:
        fig.clear()

    t = decoded.time_axis
    ax = None
    for i, ch in enumerate(decoded.channels):
        ax = fig.add_subplot(n, 1, i + 1, sharex=ax)
        ax.plot(t, ch.samples, ".-")
        ax.set_xlim(float(t[0]), float(t[-1]))
        ax.set_title(ch.name or f"CH{i + 1}")
        ax.set_ylabel(ch.unit)
        ax.grid(True)

    if ax is not None:
        ax.set_xlabel("Time (s)")
    fig.tight_layout()
    return fig
