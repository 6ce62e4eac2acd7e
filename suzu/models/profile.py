"""Viewer profile -- bundles every tunable of the session engine.

A ViewerProfile groups the constants that shape navigation and transforms
into one frozen dataclass.  It can be:

- Used as-is (defaults match the terminal viewer)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict, or loaded from a JSON file (``--profile``)
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class ViewerProfile:
    """Frozen configuration for navigation, transforms and command parsing.

    Viewport
    --------
    zoom_in_coefficient : float
        Factor applied to the x half-width on a zoom-in step (< 1 narrows).
    zoom_out_coefficient : float
        Factor applied to the x half-width on a zoom-out step (> 1 widens).
    canvas_steps : int
        Number of grid cells across the canvas; one pan step moves a tenth of a cell.
    default_move_steps : float
        Pan steps used by the direct key bindings.
    default_zoom_multiplier : float
        Multiplier used by the direct zoom key bindings.
    y_scale_padding : float
        Relative padding added around the visible y-range after a rescale.
    initial_y_margin : float
        Absolute margin added around the y-range when a chart is first fitted.

    Transforms
    ----------
    fft_magnitude_threshold : float
        Spectrum bins with a normalized magnitude at or below this are dropped.

    Commands
    --------
    command_prefix : str
        Leading character of a command line (``:``).
    default_channel : int
        Channel decoded by ``:of`` and ``-f`` when none is given.
    """

    zoom_in_coefficient: float = 0.9
    zoom_out_coefficient: float = 1.1
    canvas_steps: int = 17
    default_move_steps: float = 5.0
    default_zoom_multiplier: float = 1.0
    y_scale_padding: float = 0.05
    initial_y_margin: float = 0.07

    fft_magnitude_threshold: float = 0.1

    command_prefix: str = ":"
    default_channel: int = 0

    def __post_init__(self) -> None:
        if not (0.0 < self.zoom_in_coefficient < 1.0):
            raise ValueError(f"zoom_in_coefficient must be in (0, 1), got {self.zoom_in_coefficient}")
        if not (self.zoom_out_coefficient > 1.0):
            raise ValueError(f"zoom_out_coefficient must be > 1, got {self.zoom_out_coefficient}")
        if int(self.canvas_steps) < 1:
            raise ValueError(f"canvas_steps must be >= 1, got {self.canvas_steps}")
        if self.y_scale_padding < 0 or self.initial_y_margin < 0:
            raise ValueError("padding/margin must be >= 0")
        if self.default_zoom_multiplier <= 0:
            raise ValueError("default_zoom_multiplier must be > 0")
        if not self.command_prefix:
            raise ValueError("command_prefix must be non-empty")
        if int(self.default_channel) < 0:
            raise ValueError("default_channel must be >= 0")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ViewerProfile:
        """Reconstruct from a dict produced by :meth:`to_dict`.

        Unknown keys are rejected so that typos in a profile file surface immediately.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown ViewerProfile keys: {unknown}")
        return cls(**d)

    @classmethod
    def from_json(cls, path: str | Path) -> ViewerProfile:
        p = Path(path).expanduser()
        with p.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
        if not isinstance(payload, dict):
            raise ValueError(f"Profile file must hold a JSON object: {p}")
        return cls.from_dict(payload)
