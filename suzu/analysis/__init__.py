"""Transform package.

Design principle:
  - Ingest produces raw :class:`~suzu.models.chart.Chart` objects.
  - Analysis maps one chart's samples onto new samples; it never touches the session
    and never attaches metadata (the dispatcher titles the derived chart).

Every function here is pure: inputs are read-only numpy arrays, outputs are new arrays.
"""

from .filters import BandPass, BandStop, FilterSpec, HighPass, LowPass, apply_filter, filter_chart
from .fourier import fft_spectrum, stft_power
from .wavelet import HaarLevel, haar_chart_points, haar_step

__all__ = [
    "BandPass",
    "BandStop",
    "FilterSpec",
    "HighPass",
    "LowPass",
    "apply_filter",
    "filter_chart",
    "fft_spectrum",
    "stft_power",
    "HaarLevel",
    "haar_chart_points",
    "haar_step",
]
