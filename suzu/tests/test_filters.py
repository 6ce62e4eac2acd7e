from __future__ import annotations

import numpy as np
import pytest

from suzu.analysis.filters import BandPass, BandStop, HighPass, LowPass, apply_filter, filter_chart, filter_label
from suzu.errors import NotFrequencyDomain
from suzu.models.chart import Chart, ChartTransform


X = np.array([0.0, 10.0, 20.0, 30.0, 40.0, 50.0])
Y = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_low_pass_inclusive():
    x, y = apply_filter(X, Y, LowPass(20.0))
    np.testing.assert_array_equal(x, [0.0, 10.0, 20.0])
    np.testing.assert_array_equal(y, [1.0, 2.0, 3.0])


def test_high_pass_inclusive():
    x, _ = apply_filter(X, Y, HighPass(40.0))
    np.testing.assert_array_equal(x, [40.0, 50.0])


def test_band_pass_and_stop_share_edges():
    xp, _ = apply_filter(X, Y, BandPass(10.0, 30.0))
    xs, _ = apply_filter(X, Y, BandStop(10.0, 30.0))
    np.testing.assert_array_equal(xp, [10.0, 20.0, 30.0])
    np.testing.assert_array_equal(xs, [0.0, 10.0, 30.0, 40.0, 50.0])


def test_filter_keeps_order_and_subset():
    rng = np.random.default_rng(3)
    x = np.sort(rng.uniform(0, 100, 200))
    y = rng.normal(size=200)
    fx, fy = apply_filter(x, y, BandStop(25.0, 75.0))
    assert np.all(np.diff(fx) >= 0)
    assert set(fx).issubset(set(x))
    assert fx.size == fy.size


def test_band_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        BandPass(30.0, 10.0)
    with pytest.raises(ValueError):
        BandStop(30.0, 10.0)


def test_cutoff_must_be_finite():
    with pytest.raises(ValueError):
        LowPass(float("nan"))


def test_filter_chart_requires_frequency_domain():
    raw = Chart.create(X, Y, sample_rate=100.0, title="raw")
    with pytest.raises(NotFrequencyDomain):
        filter_chart(raw, LowPass(20.0))

    spectrum = raw.derive(X, Y, ChartTransform.FFT)
    x, _ = filter_chart(spectrum, LowPass(20.0))
    assert x.size == 3


def test_labels():
    assert filter_label(LowPass(100.0)) == "LowPass 100"
    assert filter_label(BandStop(1.5, 2.5)) == "BandStop 1.5-2.5"
