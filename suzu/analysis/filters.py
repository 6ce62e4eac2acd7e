"""Band filters on frequency-domain charts.

Filtering here is point selection: a point survives when its x coordinate
(a frequency) satisfies the cutoff predicate. Bounds are inclusive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

from suzu.errors import NotFrequencyDomain
from suzu.models.chart import Chart, ChartTransform


def _check_finite(*values: float) -> None:
    for v in values:
        if not math.isfinite(float(v)):
            raise ValueError(f"cutoff must be finite, got {v}")


@dataclass(frozen=True)
class LowPass:
    cutoff: float

    def __post_init__(self) -> None:
        _check_finite(self.cutoff)

    def keep(self, x: np.ndarray) -> np.ndarray:
        return x <= self.cutoff


@dataclass(frozen=True)
class HighPass:
    cutoff: float

    def __post_init__(self) -> None:
        _check_finite(self.cutoff)

    def keep(self, x: np.ndarray) -> np.ndarray:
        return x >= self.cutoff


@dataclass(frozen=True)
class BandPass:
    low: float
    high: float

    def __post_init__(self) -> None:
        _check_finite(self.low, self.high)
        if self.low > self.high:
            raise ValueError(f"band low={self.low} > high={self.high}")

    def keep(self, x: np.ndarray) -> np.ndarray:
        return (x >= self.low) & (x <= self.high)


@dataclass(frozen=True)
class BandStop:
    low: float
    high: float

    def __post_init__(self) -> None:
        _check_finite(self.low, self.high)
        if self.low > self.high:
            raise ValueError(f"band low={self.low} > high={self.high}")

    def keep(self, x: np.ndarray) -> np.ndarray:
        return (x <= self.low) | (x >= self.high)


FilterSpec = Union[LowPass, HighPass, BandPass, BandStop]


def apply_filter(x: np.ndarray, y: np.ndarray, spec: FilterSpec) -> tuple[np.ndarray, np.ndarray]:
    """Keep the points whose x satisfies ``spec``; order is preserved."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != y.shape:
        raise ValueError(f"x/y shape mismatch: {x.shape} != {y.shape}")
    mask = spec.keep(x)
    return x[mask], y[mask]


def filter_chart(chart: Chart, spec: FilterSpec) -> tuple[np.ndarray, np.ndarray]:
    """Filter a chart that is already in the frequency domain.

    Raises
    ------
    NotFrequencyDomain
        For raw (Standard) or Haar charts, whose x axis is time.
    """
    if not chart.transform.is_frequency_domain:
        raise NotFrequencyDomain()
    return apply_filter(chart.x, chart.y, spec)


def filter_label(spec: FilterSpec) -> str:
    if isinstance(spec, LowPass):
        return f"LowPass {spec.cutoff:g}"
    if isinstance(spec, HighPass):
        return f"HighPass {spec.cutoff:g}"
    if isinstance(spec, BandPass):
        return f"BandPass {spec.low:g}-{spec.high:g}"
    if isinstance(spec, BandStop):
        return f"BandStop {spec.low:g}-{spec.high:g}"
    return str(ChartTransform.FILTERED)
