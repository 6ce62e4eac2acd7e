from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import numpy as np
import pandas as pd


VIBRIC_SIGNATURE = b"VBRC"


@dataclass(frozen=True)
class SignalHeader:
    """
    Fixed-layout prologue of a Vibric waveform container.

    Field order is the on-disk order. All integers are u32 and all reals f32,
    little-endian.

    channels: number of interleaved channels in the sample buffer
    sample_size: samples per acquisition block (per channel)
    freq_resolution: spectral resolution of the acquisition [Hz]
    block_time: duration of one block [s]
    data_size: number of f32 samples following the header (all channels)
    """
    signature: bytes
    channels: int
    sample_size: int
    spectral_lines: int
    cutoff_freq: int
    freq_resolution: float
    block_time: float
    total_time: int
    blocks_set: int
    data_size: int
    blocks_received: int
    max_value: float
    min_value: float

    @property
    def sample_rate(self) -> float:
        return float(self.freq_resolution) * float(self.sample_size)

    @property
    def dt(self) -> float:
        """Time step between two samples of the same channel."""
        if self.sample_size <= 0:
            raise ValueError("sample_size must be > 0 to derive dt")
        return float(self.block_time) / float(self.sample_size)

    @property
    def samples_per_channel(self) -> int:
        """Row count of the de-interleaved table (longest channel)."""
        if self.channels <= 0:
            return 0
        return -(-int(self.data_size) // int(self.channels))


@dataclass(frozen=True)
class SignalFrame:
    """
    In-memory representation of one decoded Vibric file.

    Notes
    - 'samples' is the raw interleaved buffer widened to float64.
    - df has column 't' and one column 'ch{k}' per channel; row r holds position r of
      every channel, with t = r * dt.
    - When data_size is not a multiple of channels, the trailing cells of the shorter
      channels are NaN. channel_points() trims them again.
    """
    source_path: Path
    header: SignalHeader
    samples: np.ndarray
    df: pd.DataFrame
    warnings: Tuple[str, ...] = ()

    @property
    def n_channels(self) -> int:
        return int(self.header.channels)

    @property
    def n_samples(self) -> int:
        return int(self.samples.size)

    @property
    def title(self) -> str:
        return self.source_path.stem

    def channel_column(self, channel: int) -> str:
        return f"ch{int(channel)}"

    def channel_points(self, channel: int) -> tuple[np.ndarray, np.ndarray]:
        """Return (t, y) of one channel, without NaN padding."""
        col = self.channel_column(channel)
        if col not in self.df.columns:
            raise KeyError(f"No column {col!r} in SignalFrame.df")
        n_valid = len(range(int(channel), self.n_samples, max(1, self.n_channels)))
        t = self.df["t"].to_numpy(dtype=np.float64)[:n_valid]
        y = self.df[col].to_numpy(dtype=np.float64)[:n_valid]
        return t, y
