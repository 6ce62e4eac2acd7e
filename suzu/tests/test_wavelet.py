from __future__ import annotations

import numpy as np

from suzu.analysis.wavelet import haar_chart_points, haar_step


S2 = np.sqrt(2.0)


def test_even_length():
    level = haar_step(np.array([1.0, 3.0, 5.0, 7.0]))
    np.testing.assert_allclose(level.approx, [4.0 / S2, 12.0 / S2])
    np.testing.assert_allclose(level.detail, [-2.0 / S2, -2.0 / S2])


def test_odd_length_repeats_last_sample():
    level = haar_step(np.array([1.0, 3.0, 5.0]))
    np.testing.assert_allclose(level.approx, [4.0 / S2, 10.0 / S2])
    np.testing.assert_allclose(level.detail, [-2.0 / S2, 0.0])


def test_energy_preserved_for_even_length():
    y = np.random.default_rng(0).normal(size=128)
    level = haar_step(y)
    np.testing.assert_allclose(np.sum(level.approx**2) + np.sum(level.detail**2), np.sum(y**2))


def test_chart_points_use_first_x_of_each_pair():
    x = np.arange(5, dtype=float) * 0.1
    hx, hy = haar_chart_points(x, np.ones(5))
    np.testing.assert_allclose(hx, [0.0, 0.2, 0.4])
    np.testing.assert_allclose(hy, [S2, S2, S2])


def test_empty():
    hx, hy = haar_chart_points(np.zeros(0), np.zeros(0))
    assert hx.size == 0 and hy.size == 0
