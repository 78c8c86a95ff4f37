from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from rigol_bin_reader.cli import main

from synth import make_bin


def test_prints_summary(write_bin, capsys) -> None:
    p = write_bin(n_channels=2, n_pts=1000)
    main([str(p)])
    out = capsys.readouterr().out
    assert "Number of waveforms: 2" in out
    assert "  - CH2  : Volts (V)" in out


def test_quiet_csv_and_png(write_bin, tmp_path, capsys) -> None:
    p = write_bin(n_channels=1, n_pts=100)
    csv_path = tmp_path / "out.csv"
    png_path = tmp_path / "out.png"
    main([str(p), "-q", "--csv", str(csv_path), "--png", str(png_path), "--no-show", "--workers", "2"])
    out = capsys.readouterr().out
    assert "Number of waveforms" not in out
    assert "Wrote CSV" in out
    assert csv_path.exists()
    assert png_path.exists()


def test_details(write_bin, capsys) -> None:
    p = write_bin(n_channels=1, n_pts=10)
    main([str(p), "--details"])
    assert "Model: DHO804" in capsys.readouterr().out


@pytest.mark.parametrize("argv_extra", [[], ["--workers", "0"]])
def test_errors_exit_2(tmp_path, capsys, argv_extra) -> None:
    bad = tmp_path / "bad.bin"
    data = bytearray(make_bin(1, 10))
    data[0:2] = b"XX"
    bad.write_bytes(bytes(data))

    with pytest.raises(SystemExit) as ei:
        main([str(bad), *argv_extra])
    assert ei.value.code == 2
    assert "ERROR:" in capsys.readouterr().err


def test_missing_file_exit_2(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        main([str(tmp_path / "missing.bin")])
    assert ei.value.code == 2
    assert "NotFound" in capsys.readouterr().err


def test_existing_csv_exit_2(write_bin, tmp_path, capsys) -> None:
    p = write_bin(n_channels=1, n_pts=10)
    csv_path = tmp_path / "exists.csv"
    csv_path.write_text("x")
    with pytest.raises(SystemExit) as ei:
        main([str(p), "-q", "--csv", str(csv_path)])
    assert ei.value.code == 2
