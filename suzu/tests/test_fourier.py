"""Tests for the display spectrum and the STFT power envelope."""

from __future__ import annotations

import numpy as np
import pytest

from suzu.analysis import fourier
from suzu.analysis.fourier import fft_spectrum, stft_frame_count, stft_power
from suzu.errors import StftFailure


def _sine(freq: float, rate: float, n: int, amp: float = 1.0) -> np.ndarray:
    t = np.arange(n) / rate
    return amp * np.sin(2 * np.pi * freq * t)


class TestFftSpectrum:
    def test_pure_tone_single_bin(self):
        freq, mag = fft_spectrum(_sine(50.0, 1000.0, 1000), 1000.0)
        np.testing.assert_allclose(freq, [50.0])
        np.testing.assert_allclose(mag, [1.0], atol=1e-9)

    def test_peak_within_one_bin_for_odd_length(self):
        rate, n = 1000.0, 999
        freq, mag = fft_spectrum(_sine(50.0, rate, n), rate)
        peak = freq[np.argmax(mag)]
        assert abs(peak - 50.0) <= rate / n

    def test_only_non_negative_frequencies_above_threshold(self):
        x = _sine(50.0, 1000.0, 1000) + _sine(120.0, 1000.0, 1000, amp=0.05)
        freq, mag = fft_spectrum(x, 1000.0, threshold=0.1)
        assert np.all(freq >= 0.0)
        assert np.all(mag > 0.1)
        assert 120.0 not in freq

    def test_lower_threshold_keeps_weak_tone(self):
        x = _sine(50.0, 1000.0, 1000) + _sine(120.0, 1000.0, 1000, amp=0.05)
        freq, _ = fft_spectrum(x, 1000.0, threshold=0.01)
        np.testing.assert_allclose(freq, [50.0, 120.0])

    def test_dc_is_doubled(self):
        freq, mag = fft_spectrum(np.full(64, 0.5), 64.0)
        np.testing.assert_allclose(freq, [0.0])
        np.testing.assert_allclose(mag, [1.0])

    def test_empty_signal(self):
        freq, mag = fft_spectrum(np.zeros(0), 1000.0)
        assert freq.size == 0 and mag.size == 0


class TestStftPower:
    @pytest.mark.parametrize("n, hop, expected", [(8, 2, 4), (10, 3, 4), (9, 9, 1), (1, 1, 1)])
    def test_frame_count_is_ceil(self, n, hop, expected):
        assert stft_frame_count(n, hop) == expected
        frames, power = stft_power(np.ones(n), 1, hop)
        assert frames.size == power.size == expected
        np.testing.assert_array_equal(frames, np.arange(expected, dtype=float))

    def test_constant_signal_power(self):
        # hann(4) = [0, .75, .75, 0]; mean |FFT|^2 equals the windowed energy
        frames, power = stft_power(np.ones(8), 4, 2)
        np.testing.assert_allclose(power[0], 1.125)
        # last frame starts at 6 and is zero-padded: [1, 1, 0, 0]
        np.testing.assert_allclose(power[-1], 0.5625)

    def test_hop_larger_than_window(self):
        frames, power = stft_power(np.arange(10, dtype=float), 2, 5)
        assert frames.size == 2
        assert np.all(np.isfinite(power))

    @pytest.mark.parametrize(
        "signal, window, hop",
        [
            (np.zeros(0), 4, 2),
            (np.ones(8), 0, 2),
            (np.ones(8), 4, 0),
            (np.ones(8), 16, 2),
            (np.array([1.0, np.inf, 1.0, 1.0]), 2, 1),
        ],
    )
    def test_failures(self, signal, window, hop):
        with pytest.raises(StftFailure):
            stft_power(signal, window, hop)


class TestStftChunking:
    def test_blocks_match_single_pass(self, monkeypatch):
        x = np.random.default_rng(7).normal(size=101)
        _, whole = stft_power(x, 4, 3)
        monkeypatch.setattr(fourier, "STFT_CHUNK_ELEMENTS", 8)
        frames, chunked = stft_power(x, 4, 3)
        assert frames.size == stft_frame_count(101, 3)
        np.testing.assert_allclose(chunked, whole)

    def test_hop_one_transforms_bounded_blocks(self, monkeypatch):
        shapes = []
        real_fft = np.fft.fft

        def recording_fft(a, *args, **kwargs):
            shapes.append(a.shape)
            return real_fft(a, *args, **kwargs)

        monkeypatch.setattr(fourier, "STFT_CHUNK_ELEMENTS", 1024)
        monkeypatch.setattr(np.fft, "fft", recording_fft)
        frames, power = stft_power(np.ones(5000), 256, 1)

        assert frames.size == power.size == 5000
        assert max(rows * cols for rows, cols in shapes) <= 1024
        assert sum(rows for rows, _ in shapes) == 5000

    def test_window_larger_than_block_budget(self, monkeypatch):
        monkeypatch.setattr(fourier, "STFT_CHUNK_ELEMENTS", 2)
        frames, power = stft_power(np.ones(8), 4, 2)
        np.testing.assert_allclose(power[0], 1.125)
        assert frames.size == 4
