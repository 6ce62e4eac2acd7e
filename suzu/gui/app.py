from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import ipywidgets as w
import matplotlib.pyplot as plt

from suzu.commands.dispatcher import CommandDispatcher
from suzu.errors import SuzuError
from suzu.gui.log_view import HtmlLog
from suzu.models.chart import Chart, ChartTransform, DisplayStyle
from suzu.models.profile import ViewerProfile
from suzu.session.state import AppState
from suzu.session.store import SessionStore


# Keep a single active viewer per kernel to avoid duplicated callbacks / stacked widgets.
_ACTIVE_GUI: Optional[w.Widget] = None


def _close_all_figures() -> None:
    plt.close("all")


@dataclass
class ViewerController:
    """
    Input-event handling of the notebook viewer, independent of any widget.

    Every public method is one input event: it dismisses the previous error, mutates
    the session through the store or the dispatcher, reports errors/messages to the
    log and finally calls ``redraw``.
    """

    store: SessionStore
    state: AppState = field(default_factory=AppState)
    log: HtmlLog = field(default_factory=HtmlLog)
    redraw: Callable[[], None] = lambda: None

    def __post_init__(self) -> None:
        self.dispatcher = CommandDispatcher(self.store, self.state)

    def _begin_event(self) -> None:
        self.state.dismiss_error()
        self.state.message = None
        self.log.dismiss()

    def _end_event(self) -> None:
        if self.state.error is not None:
            self.log.show_error(self.state.error)
        if self.state.message:
            self.log.info(self.state.message)
        self.redraw()

    def submit(self, line: str) -> None:
        self._begin_event()
        self.state.submit(line)
        self.dispatcher.run_pending()
        self._end_event()

    def pan(self, left: bool) -> None:
        self._begin_event()
        try:
            self.store.move(left, self.store.profile.default_move_steps)
        except SuzuError as e:
            self.state.set_error(e)
        self._end_event()

    def zoom(self, zoom_in: bool) -> None:
        self._begin_event()
        try:
            self.store.scale(zoom_in, self.store.profile.default_zoom_multiplier)
        except SuzuError as e:
            self.state.set_error(e)
        self._end_event()


def _x_label(chart: Chart) -> str:
    if chart.transform is ChartTransform.STFT:
        return "frame"
    return "f [Hz]" if chart.transform.is_frequency_domain else "t [s]"


def _plot_current(store: SessionStore) -> None:
    chart = store.current()
    _close_all_figures()
    if chart is None:
        print("No chart loaded. Type ':of <path>' to open a Vibric file.")
        return

    vp = chart.viewport
    mask = chart.visible_mask()
    fig, ax = plt.subplots(figsize=(10, 4))
    if chart.metadata.display_style is DisplayStyle.SCATTER:
        ax.scatter(chart.x[mask], chart.y[mask], s=4)
    else:
        ax.plot(chart.x[mask], chart.y[mask], linewidth=0.8)
    if vp.x_max > vp.x_min:
        ax.set_xlim(vp.x_min, vp.x_max)
    if vp.y_max > vp.y_min:
        ax.set_ylim(vp.y_min, vp.y_max)
    ax.set_title(f"[{store.current_index}] {chart.title} ({chart.metadata.description})")
    ax.set_xlabel(_x_label(chart))
    ax.grid(True, alpha=0.3)
    plt.show()


def build_viewer(
    initial_path: Optional[str | Path] = None,
    *,
    profile: Optional[ViewerProfile] = None,
) -> w.Widget:
    """
    Notebook viewer (Jupyter / VSCode notebooks).

    Layout: navigation buttons, command box, message strip, plot area. The session is
    preloaded from ``initial_path`` when it points to a readable file.
    """
    global _ACTIVE_GUI

    if _ACTIVE_GUI is not None:
        _ACTIVE_GUI.close()
        _ACTIVE_GUI = None

    store = SessionStore.from_startup(initial_path, profile=profile)
    out_plot = w.Output(layout=w.Layout(border="1px solid #ddd", padding="8px"))
    lbl_chart = w.HTML()

    def _redraw() -> None:
        chart = store.current()
        if chart is None:
            lbl_chart.value = "<i>no chart</i>"
        else:
            lbl_chart.value = (
                f"<b>{store.current_index + 1}/{len(store)}</b> {chart.title} "
                f"&middot; {chart.metadata.description} &middot; {chart.n_points} points"
            )
        with out_plot:
            out_plot.clear_output(wait=True)
            _plot_current(store)

    ctl = ViewerController(store=store, redraw=_redraw)

    cmd = w.Text(placeholder=":h for help, e.g. :fft or :sft 256 64", layout=w.Layout(width="60%"))
    btn_run = w.Button(description="Run", button_style="primary", layout=w.Layout(width="80px"))
    btn_left = w.Button(description="◀", layout=w.Layout(width="48px"))
    btn_right = w.Button(description="▶", layout=w.Layout(width="48px"))
    btn_zin = w.Button(description="+", layout=w.Layout(width="48px"))
    btn_zout = w.Button(description="−", layout=w.Layout(width="48px"))
    btn_prev = w.Button(description="Prev", layout=w.Layout(width="64px"))
    btn_next = w.Button(description="Next", layout=w.Layout(width="64px"))

    def _on_run(_):
        line = cmd.value
        cmd.value = ""
        ctl.submit(line)

    btn_run.on_click(_on_run)
    btn_left.on_click(lambda _: ctl.pan(True))
    btn_right.on_click(lambda _: ctl.pan(False))
    btn_zin.on_click(lambda _: ctl.zoom(True))
    btn_zout.on_click(lambda _: ctl.zoom(False))
    btn_prev.on_click(lambda _: ctl.submit(f"{store.profile.command_prefix}pwv"))
    btn_next.on_click(lambda _: ctl.submit(f"{store.profile.command_prefix}nwv"))

    _redraw()

    gui = w.VBox(
        [
            w.HBox([btn_prev, btn_next, btn_left, btn_right, btn_zin, btn_zout, lbl_chart]),
            w.HBox([cmd, btn_run]),
            ctl.log.widget,
            out_plot,
        ]
    )
    gui.controller = ctl
    _ACTIVE_GUI = gui
    return gui
