from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from suzu import __version__
from suzu.analysis.filters import BandPass, BandStop, FilterSpec, HighPass, LowPass, filter_chart, filter_label
from suzu.analysis.fourier import fft_spectrum, stft_power
from suzu.analysis.wavelet import haar_chart_points
from suzu.commands.table import CommandSpec, Op, Surface, help_text, lookup
from suzu.errors import CommandSyntax, EmptyCommand, InvalidArguments, SuzuError
from suzu.models.chart import ChartTransform
from suzu.session.state import AppState
from suzu.session.store import SessionStore

logger = logging.getLogger(__name__)


ABOUT_TEXT = f"suzu v{__version__} -- vibration signal viewer (Vibric *.bin)"


def tokenize(line: str) -> List[str]:
    return line.split()


class CommandSurface:
    """
    One group of verbs (general, file, session, view, transform).

    handle() returns False for a verb this surface does not own, so the dispatcher can
    offer it to the next surface. For an owned verb the order of checks is fixed:
    arity, argument parsing, current-chart requirement, then the operation itself.
    """

    surface: Surface

    def __init__(self, store: SessionStore, state: AppState):
        self.store = store
        self.state = state

    def handle(self, verb: str, args: Sequence[str]) -> bool:
        spec = lookup(verb)
        if spec is None or spec.surface is not self.surface:
            return False
        values = spec.parse_args(args)
        if spec.needs_chart:
            self.store.require_current()
        self.execute(spec, values, tuple(args))
        return True

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        raise NotImplementedError


class GeneralCommands(CommandSurface):
    surface = Surface.GENERAL

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        if spec.op is Op.ABOUT:
            self.state.show_about = True
            self.state.message = ABOUT_TEXT
        elif spec.op is Op.HELP:
            self.state.show_help = True
            self.state.message = help_text()
        elif spec.op is Op.QUIT:
            self.state.quit()


class FileCommands(CommandSurface):
    surface = Surface.FILE

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        if spec.op is Op.OPEN_FILE:
            path: Path = values[0]
            channel = values[1] if len(values) > 1 else None
            if not path.is_file():
                raise InvalidArguments(raw[0])
            self.store.open_file(path, channel)


class SessionCommands(CommandSurface):
    surface = Surface.SESSION

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        if spec.op is Op.CLOSE_VIEW:
            self.store.delete_current()
        elif spec.op is Op.SWITCH_VIEW:
            self.store.switch(values[0])
        elif spec.op is Op.NEXT_VIEW:
            self.store.advance(+1)
        elif spec.op is Op.PREV_VIEW:
            self.store.advance(-1)
        elif spec.op is Op.LIST_VIEWS:
            self.state.message = self._list_views()

    def _list_views(self) -> str:
        if self.store.is_empty:
            return "No charts open"
        lines = []
        for i, chart in enumerate(self.store.charts):
            mark = "*" if i == self.store.current_index else " "
            lines.append(f"{mark} {i}: {chart.title} [{chart.metadata.description}] ({chart.n_points} points)")
        return "\n".join(lines)


class ViewCommands(CommandSurface):
    """
    Zoom and pan of the current chart.

    The zoom argument is a magnification factor: ``:zi 2`` narrows the x window twice
    as much as a single zoom-in step, ``:zo 2`` widens it twice as much as a single
    zoom-out step.
    """

    surface = Surface.VIEW

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        if spec.op in (Op.ZOOM_IN, Op.ZOOM_OUT):
            factor = 1.0 / values[0]
            if not math.isfinite(factor):
                raise InvalidArguments(raw[0])
            self.store.scale(spec.op is Op.ZOOM_IN, factor)
        elif spec.op is Op.MOVE_LEFT:
            self.store.move(True, values[0])
        elif spec.op is Op.MOVE_RIGHT:
            self.store.move(False, values[0])
        elif spec.op is Op.RESET_VIEW:
            self.store.reset_view()


class TransformCommands(CommandSurface):
    """Derive a new chart from the current one and make it current.

    The derived chart is fully computed before it is added, so a failing transform
    leaves the session untouched.
    """

    surface = Surface.TRANSFORM

    def execute(self, spec: CommandSpec, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> None:
        chart = self.store.require_current()
        margin = self.store.profile.initial_y_margin

        if spec.op is Op.FFT:
            freq, mag = fft_spectrum(chart.y, chart.sample_rate, threshold=self.store.profile.fft_magnitude_threshold)
            derived = chart.derive(freq, mag, ChartTransform.FFT, y_margin=margin)
        elif spec.op is Op.STFT:
            window_size, hop_size = values
            frames, power = stft_power(chart.y, window_size, hop_size)
            derived = chart.derive(
                frames, power, ChartTransform.STFT, suffix=f"STFT {window_size}/{hop_size}", y_margin=margin
            )
        elif spec.op is Op.HAAR:
            x, approx = haar_chart_points(chart.x, chart.y)
            derived = chart.derive(x, approx, ChartTransform.HAAR, y_margin=margin)
        else:
            filt = self._filter_spec(spec.op, values, raw)
            x, y = filter_chart(chart, filt)
            derived = chart.derive(x, y, ChartTransform.FILTERED, suffix=filter_label(filt), y_margin=margin)

        self.store.add(derived)

    @staticmethod
    def _filter_spec(op: Op, values: Tuple[Any, ...], raw: Tuple[str, ...]) -> FilterSpec:
        if op is Op.LOW_PASS:
            return LowPass(values[0])
        if op is Op.HIGH_PASS:
            return HighPass(values[0])
        low, high = values
        if low > high:
            raise InvalidArguments(raw[1])
        if op is Op.BAND_PASS:
            return BandPass(low, high)
        if op is Op.BAND_STOP:
            return BandStop(low, high)
        raise ValueError(f"Not a filter operation: {op}")


DEFAULT_SURFACES = (GeneralCommands, FileCommands, SessionCommands, ViewCommands, TransformCommands)


class CommandDispatcher:
    """
    Turns one command line into session operations.

    The line is offered to each surface in turn; the first surface that owns the verb
    runs it. A verb nobody owns is a CommandSyntax error carrying the full line.
    """

    def __init__(
        self,
        store: SessionStore,
        state: Optional[AppState] = None,
        surfaces: Optional[Sequence[type]] = None,
    ):
        self.store = store
        self.state = state if state is not None else AppState()
        classes = surfaces if surfaces is not None else DEFAULT_SURFACES
        self.surfaces: List[CommandSurface] = [cls(store, self.state) for cls in classes]

    @property
    def prefix(self) -> str:
        return self.store.profile.command_prefix

    def dispatch(self, command: str | Sequence[str]) -> None:
        """Run one command. Raises a SuzuError subclass on failure."""
        tokens = tokenize(command) if isinstance(command, str) else list(command)
        if not tokens or tokens[0] == self.prefix:
            raise EmptyCommand()

        head = tokens[0]
        if head.startswith(self.prefix):
            verb = head[len(self.prefix):]
            for surface in self.surfaces:
                if surface.handle(verb, tokens[1:]):
                    logger.debug("Command %r handled by %s", head, type(surface).__name__)
                    return
        line = command.strip() if isinstance(command, str) else " ".join(tokens)
        raise CommandSyntax(line)

    def run_pending(self) -> Optional[SuzuError]:
        """Consume the pending command exactly once and run it.

        The error, if any, is stored on the AppState for display and returned. The
        pending command is cleared whatever the outcome.
        """
        command = self.state.take_command()
        if command is None:
            return None
        try:
            self.dispatch(command)
        except SuzuError as e:
            logger.info("Command %r failed: %s", command, e)
            self.state.set_error(e)
            return e
        return None
