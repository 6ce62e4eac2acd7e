from __future__ import annotations

import os

os.environ.setdefault("MPLBACKEND", "Agg")

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from suzu.ingest.readers_vibric import HEADER_DTYPE
from suzu.models.frames import VIBRIC_SIGNATURE


def write_vibric(
    path: Path,
    samples: np.ndarray,
    *,
    channels: int = 1,
    sample_size: int = 1000,
    freq_resolution: float = 1.0,
    block_time: float = 1.0,
    data_size: int | None = None,
    signature: bytes = VIBRIC_SIGNATURE,
    trailing: bytes = b"",
) -> Path:
    """Write a Vibric container with the given interleaved samples."""
    samples = np.asarray(samples, dtype="<f4")
    header = np.zeros(1, dtype=HEADER_DTYPE)
    header["signature"] = signature
    header["channels"] = channels
    header["sample_size"] = sample_size
    header["spectral_lines"] = sample_size // 2
    header["cutoff_freq"] = int(freq_resolution * sample_size) // 2
    header["freq_resolution"] = freq_resolution
    header["block_time"] = block_time
    header["total_time"] = 1
    header["blocks_set"] = 1
    header["data_size"] = samples.size if data_size is None else data_size
    header["blocks_received"] = 1
    if samples.size:
        header["max_value"] = float(samples.max())
        header["min_value"] = float(samples.min())
    with Path(path).open("wb") as fh:
        fh.write(header.tobytes())
        fh.write(samples.tobytes())
        fh.write(trailing)
    return Path(path)


@pytest.fixture
def vibric_file(tmp_path) -> Callable[..., Path]:
    """Factory: vibric_file(samples, name="signal.bin", **header_fields) -> Path."""

    def _make(samples, name: str = "signal.bin", **kwargs) -> Path:
        return write_vibric(tmp_path / name, samples, **kwargs)

    return _make


@pytest.fixture
def sine_file(vibric_file) -> Path:
    """Two channels: 50 Hz sine on ch0, constant 0.5 on ch1; 1 kHz, 1000 samples each."""
    t = np.arange(1000) / 1000.0
    ch0 = np.sin(2 * np.pi * 50.0 * t)
    ch1 = np.full_like(ch0, 0.5)
    inter = np.column_stack([ch0, ch1]).ravel()
    return vibric_file(inter, name="sine.bin", channels=2, sample_size=1000, freq_resolution=1.0, block_time=1.0)
