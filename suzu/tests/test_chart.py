"""Chart model: viewport fitting, validation and derived charts."""

from __future__ import annotations

import numpy as np
import pytest

from suzu.models.chart import Chart, ChartTransform, DisplayStyle, Point, Viewport


def test_fit_covers_points_with_margin():
    vp = Viewport.fit(np.array([0.0, 1.0, 2.0]), np.array([-1.0, 3.0, 2.0]), y_margin=0.07)
    assert (vp.x_min, vp.x_max) == (0.0, 2.0)
    assert vp.y_min == pytest.approx(-1.07)
    assert vp.y_max == pytest.approx(3.07)


def test_fit_ignores_non_finite_points():
    vp = Viewport.fit(np.array([0.0, 1.0, 2.0]), np.array([1.0, np.nan, np.inf]), y_margin=0.0)
    assert (vp.x_min, vp.x_max, vp.y_min, vp.y_max) == (0.0, 0.0, 1.0, 1.0)


def test_empty_chart_gets_placeholder_viewport():
    chart = Chart.create(np.zeros(0), np.zeros(0), sample_rate=1.0, title="empty")
    assert chart.viewport == Viewport.EMPTY
    assert chart.n_points == 0


@pytest.mark.parametrize(
    "bounds",
    [(1.0, 0.0, 0.0, 1.0), (0.0, 1.0, 1.0, 0.0), (np.nan, 1.0, 0.0, 1.0), (0.0, np.inf, 0.0, 1.0)],
)
def test_viewport_rejects_invalid_bounds(bounds):
    with pytest.raises(ValueError):
        Viewport(*bounds)


def test_chart_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Chart.create(np.arange(3), np.arange(4), sample_rate=1.0, title="bad")


def test_derive_titles_and_keeps_rate():
    raw = Chart.create(np.arange(4), np.arange(4), sample_rate=250.0, title="run1", display_style=DisplayStyle.SCATTER)
    fft = raw.derive(np.arange(2), np.ones(2), ChartTransform.FFT)
    stft = raw.derive(np.arange(2), np.ones(2), ChartTransform.STFT, suffix="STFT 4/2")
    assert fft.title == "run1 | FFT"
    assert stft.title == "run1 | STFT 4/2"
    assert fft.sample_rate == 250.0
    assert fft.metadata.display_style is DisplayStyle.SCATTER
    assert fft.metadata.description == "FFT"
    assert raw.n_points == 4


def test_points_and_visible_mask():
    chart = Chart.create([0.0, 1.0, 2.0], [5.0, 6.0, 7.0], sample_rate=1.0, title="p")
    assert chart.points[1] == Point(1.0, 6.0)
    chart.viewport = chart.with_viewport(x_min=0.5, x_max=2.0)
    np.testing.assert_array_equal(chart.visible_mask(), [False, True, True])
    chart.reset_viewport()
    assert chart.viewport.x_min == 0.0


def test_with_viewport_validates():
    chart = Chart.create([0.0, 1.0], [0.0, 1.0], sample_rate=1.0, title="v")
    with pytest.raises(ValueError):
        chart.with_viewport(x_min=5.0)


def test_frequency_domain_transforms():
    assert ChartTransform.FFT.is_frequency_domain
    assert ChartTransform.STFT.is_frequency_domain
    assert ChartTransform.FILTERED.is_frequency_domain
    assert not ChartTransform.STANDARD.is_frequency_domain
    assert not ChartTransform.HAAR.is_frequency_domain
