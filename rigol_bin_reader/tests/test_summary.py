from __future__ import annotations

import io

import pytest

from rigol_bin_reader import decode
from rigol_bin_reader.presentation.summary import (
    DETAILED,
    NORMAL,
    QUIET,
    format_record_length,
    format_sample_interval,
    format_summary,
    print_summary,
)

from synth import make_bin


@pytest.mark.parametrize(
    "n,txt",
    [(1000, "1k"), (1500, "1.5k"), (999_999, "999.999k"), (1_000_000, "1Meg"), (25_000_000, "25Meg")],
)
def test_record_length(n: int, txt: str) -> None:
    assert format_record_length(n) == txt


@pytest.mark.parametrize(
    "dx,txt",
    [
        (1e-9, "1.0 nanoseconds"),
        (1e-6, "1000.0 nanoseconds"),
        (2e-6, "2.0 microseconds"),
        (1e-3, "1000.0 microseconds"),
        (0.5, "500.0 milliseconds"),
        (1.0, "1000.0 milliseconds"),
        (2.5, "2.5 seconds"),
    ],
)
def test_sample_interval(dx: float, txt: str) -> None:
    assert format_sample_interval(dx) == txt


def test_summary_lists_channels() -> None:
    out = decode(io.BytesIO(make_bin(2, 1000, names=["CH1", "CH2"], unit_codes=[1, 4])))
    txt = format_summary(out, NORMAL)
    assert "File date: 2024-01-23" in txt
    assert "File time: 10:11:12" in txt
    assert "Record length: 1k" in txt
    assert "Time/pt: 1000.0 nanoseconds" in txt
    assert "Number of waveforms: 2" in txt
    assert "  - CH1  : Volts (V)" in txt
    assert "  - CH2  : Amps (A)" in txt
    assert "Model:" not in txt


def test_summary_verbosity_levels(capsys) -> None:
    out = decode(io.BytesIO(make_bin(1, 10, version="04")))
    assert format_summary(out, QUIET) == ""

    detailed = format_summary(out, DETAILED)
    assert "Model: DHO804 DHO8A270000001" in detailed
    assert "File version: 04" in detailed
    assert "WARNING: VersionMismatch" in detailed

    print_summary(out, QUIET)
    assert capsys.readouterr().out == ""
    print_summary(out, NORMAL)
    assert "Number of waveforms: 1" in capsys.readouterr().out
