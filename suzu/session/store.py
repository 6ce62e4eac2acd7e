from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from suzu.errors import NoChart, SuzuError
from suzu.ingest.file_types import read_signal_file
from suzu.models.chart import Chart, Viewport
from suzu.models.profile import ViewerProfile

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Ordered charts of one working session plus the "current" selection.

    Contract:
      - Insertion order is creation order; add() makes the new chart current.
      - current_index is a valid index whenever the session is non-empty.
      - An empty session answers current() with None and never indexes out of range.
      - Viewport operations act on the current chart only and keep its bounds finite
        with x_min <= x_max and y_min <= y_max.

    The store has a single owner (the front-end loop). Handlers receive it for the
    duration of one input event; renderers only read current() and its viewport.
    """

    def __init__(self, profile: Optional[ViewerProfile] = None):
        self.profile = profile or ViewerProfile()
        self._charts: list[Chart] = []
        self._current = 0

    @classmethod
    def from_startup(
        cls,
        path: Optional[str | Path] = None,
        *,
        profile: Optional[ViewerProfile] = None,
    ) -> SessionStore:
        """Session preloaded with the channel-0 chart of ``path``, if it can be read.

        A missing path is not an error; a file that fails to decode is logged and the
        session starts empty.
        """
        store = cls(profile)
        if path is None:
            return store
        p = Path(path).expanduser()
        if not p.exists():
            logger.info("Startup file %s does not exist; starting with an empty session", p)
            return store
        try:
            store.open_file(p, store.profile.default_channel)
        except SuzuError as e:
            logger.warning("Could not preload %s: %s", p, e)
        return store

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._charts)

    @property
    def is_empty(self) -> bool:
        return not self._charts

    @property
    def charts(self) -> Tuple[Chart, ...]:
        return tuple(self._charts)

    @property
    def current_index(self) -> Optional[int]:
        """Index of the current chart, None when the session is empty."""
        if not self._charts:
            return None
        return self._current

    def current(self) -> Optional[Chart]:
        if not self._charts:
            return None
        return self._charts[self._current]

    def require_current(self) -> Chart:
        chart = self.current()
        if chart is None:
            raise NoChart()
        return chart

    def add(self, chart: Chart) -> int:
        self._charts.append(chart)
        self._current = len(self._charts) - 1
        logger.info("Added chart #%d %r (%s, %d points)", self._current, chart.title, chart.transform, chart.n_points)
        return self._current

    def open_file(self, path: str | Path, channel: Optional[int] = None) -> Chart:
        """Decode ``path`` and add the chart. Nothing is added if decoding fails."""
        ch = self.profile.default_channel if channel is None else int(channel)
        chart = read_signal_file(path, ch, profile=self.profile)
        self.add(chart)
        return chart

    def delete_current(self) -> Optional[Chart]:
        """Remove the current chart; the previous one (if any) becomes current.

        No-op on an empty session.
        """
        if not self._charts:
            return None
        removed = self._charts.pop(self._current)
        self._current = max(0, self._current - 1)
        logger.info("Closed chart %r; %d chart(s) left", removed.title, len(self._charts))
        return removed

    def switch(self, chart_id: int) -> int:
        """Make chart ``chart_id mod len`` current."""
        cid = int(chart_id)
        if cid < 0:
            raise ValueError(f"chart id must be >= 0, got {cid}")
        if not self._charts:
            raise NoChart()
        self._current = cid % len(self._charts)
        return self._current

    def advance(self, step: int = 1) -> Optional[int]:
        """Move the selection forward (+1) or backward (-1), wrapping around."""
        n = len(self._charts)
        if n == 0:
            return None
        if step >= 0:
            self._current = (self._current + 1) % n
        else:
            self._current = (self._current + n - 1) % n
        return self._current

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def scale(self, zoom_in: bool, multiplier: float) -> Viewport:
        """Rescale the x window around its center, then refit y to the visible points.

        x half-width becomes ``half * zoom_in_coefficient * multiplier`` (zoom in) or
        ``half * zoom_out_coefficient / multiplier`` (zoom out). The y-range is the
        min/max of the points inside the new x window, padded by ``y_scale_padding``;
        when no point is visible y is left unchanged. If the result would not be a
        finite viewport, nothing changes.
        """
        m = float(multiplier)
        if not math.isfinite(m) or m <= 0.0:
            raise ValueError(f"zoom multiplier must be finite and > 0, got {multiplier}")
        chart = self.require_current()
        vp = chart.viewport

        half = vp.width / 2.0
        if zoom_in:
            half = half * self.profile.zoom_in_coefficient * m
        else:
            half = half * self.profile.zoom_out_coefficient / m
        center = vp.x_center
        x_min = center - half
        x_max = center + half
        if not (math.isfinite(x_min) and math.isfinite(x_max)):
            logger.debug("scale(%s, %g) would overflow the x window; ignored", zoom_in, m)
            return vp

        y_min, y_max = vp.y_min, vp.y_max
        visible = (chart.x >= x_min) & (chart.x <= x_max) & np.isfinite(chart.y)
        if np.any(visible):
            ys = chart.y[visible]
            lo = float(ys.min())
            hi = float(ys.max())
            pad = (hi - lo) * self.profile.y_scale_padding
            if math.isfinite(lo - pad) and math.isfinite(hi + pad):
                y_min, y_max = lo - pad, hi + pad

        try:
            new_vp = Viewport(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
        except ValueError as e:
            logger.debug("scale(%s, %g) rejected: %s", zoom_in, m, e)
            return vp
        chart.viewport = new_vp
        logger.debug("scale(%s, %g): %s", zoom_in, m, new_vp)
        return new_vp

    def move(self, left: bool, steps: float) -> Viewport:
        """Shift the x window by ``steps`` tenths of a canvas grid cell; width and y unchanged."""
        s = float(steps)
        if not math.isfinite(s):
            raise ValueError(f"move steps must be finite, got {steps}")
        chart = self.require_current()
        vp = chart.viewport

        shift = s * (vp.width / float(self.profile.canvas_steps)) / 10.0
        if left:
            shift = -shift
        x_min = vp.x_min + shift
        x_max = vp.x_max + shift
        try:
            new_vp = chart.with_viewport(x_min=x_min, x_max=x_max)
        except ValueError as e:
            logger.debug("move(%s, %g) rejected: %s", left, s, e)
            return vp
        chart.viewport = new_vp
        logger.debug("move(%s, %g): %s", left, s, new_vp)
        return new_vp

    def reset_view(self) -> Viewport:
        """Fit the current chart's viewport to all of its points again."""
        chart = self.require_current()
        chart.reset_viewport(y_margin=self.profile.initial_y_margin)
        return chart.viewport
