import numpy as np
import pytest

from rigol_bin_reader.analysis.time_axis import build_time_axis


@pytest.mark.parametrize(
    "x_origin,dx,n",
    [(-0.0005, 1e-6, 1000), (0.0025, 5e-9, 4096), (0.0, 1.0, 3), (1e-3, 2e-10, 10_000)],
)
def test_time_axis_is_affine(x_origin: float, dx: float, n: int) -> None:
    t = build_time_axis(x_origin, dx, n)
    assert t.shape == (n,)
    assert t.dtype == np.float64
    assert t[0] == pytest.approx(-x_origin, abs=1e-18)
    np.testing.assert_allclose(np.diff(t), dx, rtol=1e-6, atol=1e-18)


def test_screen_save_sign_convention() -> None:
    # screen saves store a negative origin, so the axis starts after zero
    t = build_time_axis(-0.0005, 1e-6, 1000)
    assert t[0] == pytest.approx(0.0005)
    assert t[-1] == pytest.approx(0.0005 + 999e-6)


def test_empty_and_invalid() -> None:
    assert build_time_axis(0.0, 1e-6, 0).shape == (0,)
    with pytest.raises(ValueError):
        build_time_axis(0.0, 1e-6, -1)


def test_read_only() -> None:
    t = build_time_axis(0.0, 1e-6, 4)
    with pytest.raises(ValueError):
        t[0] = 1.0
