"""FFT-based spectral views of a chart.

Provides the one-sided magnitude spectrum used for display and a short-time
power envelope.

Functions
---------
fft_spectrum
    Center-shifted FFT, normalized ``|X|/N * 2``, non-negative frequencies only.
stft_power
    Mean spectral power of successive Hann-windowed frames.
"""

from __future__ import annotations

import math

import numpy as np

from suzu.errors import StftFailure


# Upper bound on samples windowed and transformed at once by stft_power.
STFT_CHUNK_ELEMENTS = 1 << 20


def fft_spectrum(
    signal: np.ndarray,
    sample_rate: float,
    *,
    threshold: float = 0.1,
) -> tuple[np.ndarray, np.ndarray]:
    r"""Visualization-oriented one-sided amplitude spectrum.

    Parameters
    ----------
    signal:
        Real samples, shape ``(N,)``. Treated as complex with zero imaginary part.
    sample_rate:
        Sampling rate ``R`` of ``signal`` [Hz].
    threshold:
        Bins with normalized magnitude ``<= threshold`` are dropped.

    Returns
    -------
    (freq, mag)
        ``freq_i = (i - N//2) * R / N`` after ``fftshift``, ``mag = |X_i| / N * 2``,
        restricted to ``freq >= 0`` and ``mag > threshold``.

    Notes
    -----
    This is not a lossless transform: negative frequencies and near-silent bins are
    discarded, and DC is doubled like every other bin. Odd ``N`` is supported; the
    ``N//2`` shift matches ``np.fft.fftshift`` for both parities.
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {x.shape}")
    N = int(x.size)
    if N == 0:
        return np.zeros(0, dtype=np.float64), np.zeros(0, dtype=np.float64)

    spec = np.fft.fftshift(np.fft.fft(x.astype(np.complex128)))
    idx = np.arange(N, dtype=np.float64)
    freq = (idx - (N // 2)) * float(sample_rate) / float(N)
    mag = np.abs(spec) / float(N) * 2.0

    keep = (freq >= 0.0) & (mag > float(threshold))
    return freq[keep], mag[keep]


def stft_frame_count(n_samples: int, hop_size: int) -> int:
    return int(math.ceil(int(n_samples) / int(hop_size)))


def stft_power(
    signal: np.ndarray,
    window_size: int,
    hop_size: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Mean squared spectral magnitude per frame.

    Frames start at ``k * hop_size`` for ``k = 0 .. ceil(N / hop_size) - 1``. Each frame
    holds ``window_size`` samples (zero-padded past the end of the signal), is multiplied
    by a Hann window and transformed; the frame value is ``mean(|FFT|^2)``. Frames are
    transformed in blocks of about ``STFT_CHUNK_ELEMENTS`` samples, so working memory
    does not grow with ``N * window_size / hop_size``.

    Returns
    -------
    (frame_index, power)
        Both of length ``ceil(N / hop_size)``; ``frame_index`` is ``0, 1, 2, ...`` as float.

    Raises
    ------
    StftFailure
        Empty signal, ``window_size < 1``, ``hop_size < 1`` or ``window_size > N``.
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1D, got shape {x.shape}")
    N = int(x.size)
    W = int(window_size)
    H = int(hop_size)
    if N == 0 or W < 1 or H < 1 or W > N:
        raise StftFailure()

    n_frames = stft_frame_count(N, H)
    padded = np.zeros(max(N, (n_frames - 1) * H + W), dtype=np.float64)
    padded[:N] = x

    # (n_frames, W) strided view; nothing is copied until a chunk is windowed
    frames = np.lib.stride_tricks.sliding_window_view(padded, W)[::H][:n_frames]
    window = np.hanning(W)

    rows = max(1, STFT_CHUNK_ELEMENTS // W)
    power = np.empty(n_frames, dtype=np.float64)
    for start in range(0, n_frames, rows):
        stop = min(start + rows, n_frames)
        spec = np.fft.fft(frames[start:stop] * window[None, :], axis=1)
        power[start:stop] = np.mean(np.abs(spec) ** 2, axis=1)
    if not np.all(np.isfinite(power)):
        raise StftFailure()
    return np.arange(n_frames, dtype=np.float64), power
