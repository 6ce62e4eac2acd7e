from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, List, NamedTuple, Optional

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


class ChartTransform(Enum):
    """How a chart was produced. The value is the label shown to the operator."""

    STANDARD = "Standard"
    FFT = "FFT"
    STFT = "STFT"
    HAAR = "Haar"
    FILTERED = "Filtered"

    @property
    def is_frequency_domain(self) -> bool:
        return self in (ChartTransform.FFT, ChartTransform.STFT, ChartTransform.FILTERED)

    def __str__(self) -> str:
        return self.value


class DisplayStyle(Enum):
    LINE = "line"
    SCATTER = "scatter"


@dataclass(frozen=True)
class Viewport:
    """Visible X/Y rectangle of a chart.

    Invariant: all bounds finite, ``x_min <= x_max`` and ``y_min <= y_max``.
    The constructor enforces it, so a Viewport that exists is always drawable.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    EMPTY: ClassVar["Viewport"]

    def __post_init__(self) -> None:
        bounds = (self.x_min, self.x_max, self.y_min, self.y_max)
        if not all(math.isfinite(float(b)) for b in bounds):
            raise ValueError(f"Viewport bounds must be finite, got {bounds}")
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError(f"Viewport bounds reversed: {bounds}")

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def x_center(self) -> float:
        return (self.x_min + self.x_max) / 2.0

    @classmethod
    def fit(cls, x: np.ndarray, y: np.ndarray, *, y_margin: float = 0.07) -> "Viewport":
        """Bounds covering every finite point, y widened by ``y_margin`` on both sides.

        Charts without a finite point get :attr:`Viewport.EMPTY`.
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        ok = np.isfinite(x) & np.isfinite(y)
        if not np.any(ok):
            return cls.EMPTY
        xs = x[ok]
        ys = y[ok]
        return cls(
            x_min=float(xs.min()),
            x_max=float(xs.max()),
            y_min=float(ys.min()) - float(y_margin),
            y_max=float(ys.max()) + float(y_margin),
        )


Viewport.EMPTY = Viewport(0.0, 1.0, 0.0, 1.0)


@dataclass(frozen=True)
class ChartMetadata:
    title: str
    transform: ChartTransform = ChartTransform.STANDARD
    display_style: DisplayStyle = DisplayStyle.LINE

    @property
    def description(self) -> str:
        return str(self.transform)


@dataclass
class Chart:
    """
    One navigable time- or frequency-series.

    x and y are float64 arrays of equal length (x is time or frequency, y amplitude
    or magnitude). The arrays are treated as immutable once the chart exists; only the
    viewport changes while the chart lives in a session.
    """
    x: np.ndarray
    y: np.ndarray
    sample_rate: float
    metadata: ChartMetadata
    viewport: Viewport = field(default=Viewport.EMPTY)

    def __post_init__(self) -> None:
        self.x = np.asarray(self.x, dtype=np.float64)
        self.y = np.asarray(self.y, dtype=np.float64)
        if self.x.ndim != 1 or self.y.ndim != 1:
            raise ValueError(f"Chart data must be 1D, got x{self.x.shape} y{self.y.shape}")
        if self.x.size != self.y.size:
            raise ValueError(f"Chart x/y length mismatch: {self.x.size} != {self.y.size}")

    @classmethod
    def create(
        cls,
        x: np.ndarray,
        y: np.ndarray,
        *,
        sample_rate: float,
        title: str,
        transform: ChartTransform = ChartTransform.STANDARD,
        display_style: DisplayStyle = DisplayStyle.LINE,
        y_margin: float = 0.07,
    ) -> "Chart":
        chart = cls(
            x=x,
            y=y,
            sample_rate=float(sample_rate),
            metadata=ChartMetadata(title=title, transform=transform, display_style=display_style),
        )
        chart.viewport = Viewport.fit(chart.x, chart.y, y_margin=y_margin)
        return chart

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def transform(self) -> ChartTransform:
        return self.metadata.transform

    @property
    def n_points(self) -> int:
        return int(self.x.size)

    @property
    def points(self) -> List[Point]:
        return [Point(float(a), float(b)) for a, b in zip(self.x, self.y)]

    def derive(
        self,
        x: np.ndarray,
        y: np.ndarray,
        transform: ChartTransform,
        *,
        suffix: Optional[str] = None,
        y_margin: float = 0.07,
    ) -> "Chart":
        """New chart computed from this one; keeps sample rate and display style."""
        label = suffix if suffix is not None else str(transform)
        return Chart.create(
            x,
            y,
            sample_rate=self.sample_rate,
            title=f"{self.title} | {label}",
            transform=transform,
            display_style=self.metadata.display_style,
            y_margin=y_margin,
        )

    def visible_mask(self, viewport: Optional[Viewport] = None) -> np.ndarray:
        vp = viewport or self.viewport
        return (self.x >= vp.x_min) & (self.x <= vp.x_max)

    def reset_viewport(self, *, y_margin: float = 0.07) -> None:
        self.viewport = Viewport.fit(self.x, self.y, y_margin=y_margin)

    def with_viewport(self, **bounds: float) -> Viewport:
        """Candidate viewport with some bounds replaced (validated, not applied)."""
        return replace(self.viewport, **bounds)
