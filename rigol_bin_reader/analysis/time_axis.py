from __future__ import annotations

import numpy as np


def build_time_axis(x_origin: float, x_increment: float, n_pts: int) -> np.ndarray:
    """Reconstruct the sample times of a capture.

    ``t[k] = -x_origin + x_increment * k`` for ``k = 0 .. n_pts-1``.

    The same formula holds for memory and screen saves; the instrument encodes the
    difference in the sign of ``x_origin``.

    Returns
    -------
    np.ndarray
        Read-only float64 array of shape ``(n_pts,)``.
    """
    n = int(n_pts)
    if n < 0:
        raise ValueError(f"n_pts must be >= 0, got {n}")
    t = -float(x_origin) + float(x_increment) * np.arange(n, dtype=np.float64)
    t.flags.writeable = False
    return t
