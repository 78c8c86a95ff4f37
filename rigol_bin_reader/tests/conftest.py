from __future__ import annotations

from pathlib import Path

import pytest

from synth import make_bin


@pytest.fixture()
def write_bin(tmp_path: Path):
    """Factory fixture: write a synthetic capture to disk and return its path."""

    def _write(name: str = "capture.bin", data: bytes | None = None, **kwargs) -> Path:
        p = tmp_path / name
        p.write_bytes(data if data is not None else make_bin(**kwargs))
        return p

    return _write
