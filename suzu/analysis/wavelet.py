from __future__ import annotations

from dataclasses import dataclass

import numpy as np


_INV_SQRT2 = 1.0 / np.sqrt(2.0)


@dataclass(frozen=True)
class HaarLevel:
    """One level of a forward Haar decomposition.

    Attributes
    ----------
    approx:
        Low-pass coefficients ``(y[2k] + y[2k+1]) / sqrt(2)``, length ``ceil(N/2)``.
    detail:
        High-pass coefficients ``(y[2k] - y[2k+1]) / sqrt(2)``, same length.
    """

    approx: np.ndarray
    detail: np.ndarray


def haar_step(signal: np.ndarray) -> HaarLevel:
    """Single-level forward Haar transform of an arbitrary-length signal.

    Odd lengths are padded by repeating the last sample, so the final pair yields
    ``approx = sqrt(2) * y[-1]`` and ``detail = 0``. Buffers are sized to the input.
    """
    y = np.asarray(signal, dtype=np.float64)
    if y.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {y.shape}")
    if y.size == 0:
        empty = np.zeros(0, dtype=np.float64)
        return HaarLevel(approx=empty, detail=empty.copy())

    if y.size % 2:
        y = np.concatenate([y, y[-1:]])
    even = y[0::2]
    odd = y[1::2]
    return HaarLevel(approx=(even + odd) * _INV_SQRT2, detail=(even - odd) * _INV_SQRT2)


def haar_chart_points(x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Approximation coefficients placed at the x of the first sample of each pair."""
    x = np.asarray(x, dtype=np.float64)
    level = haar_step(y)
    return x[0::2], level.approx
