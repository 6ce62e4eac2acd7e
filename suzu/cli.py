"""Console front-end: ``python -m suzu [-f FILE]``.

One input line is one input event. A line starting with the command prefix is
submitted as the pending command; a single navigation key pans or zooms the
current chart directly. Any error is shown once and dismissed by the next line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, TextIO

from suzu import __version__
from suzu.commands.dispatcher import CommandDispatcher
from suzu.errors import SuzuError
from suzu.models.profile import ViewerProfile
from suzu.session.state import AppState
from suzu.session.store import SessionStore

logger = logging.getLogger(__name__)


USAGE = """\
CLI usage: suzu [OPTIONS]
Options:
  <NONE>            Default open option
  -f <FILE>         Specify the input signal file
  --profile <JSON>  Viewer profile overrides
  --log-level LVL   Logging level (default WARNING)
  -h, --help        Display this help message
  -v, --version     Display the version"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="suzu", add_help=False)
    p.add_argument("-f", dest="file", default=None)
    p.add_argument("--profile", default=None)
    p.add_argument("--log-level", default="WARNING")
    p.add_argument("-h", "--help", action="store_true")
    p.add_argument("-v", "--version", action="store_true")
    return p


# -----------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------


def render(store: SessionStore, state: AppState) -> str:
    """Text frame: error (if any) in place of the chart header, then the chart summary."""
    lines = []
    if state.error is not None:
        lines.append(f"ERROR: {state.error}")
    if state.message:
        lines.append(state.message)

    chart = store.current()
    if chart is None:
        lines.append("(no chart) -- open one with :of <path>")
        return "\n".join(lines)

    vp = chart.viewport
    lines.append(
        f"[{store.current_index + 1}/{len(store)}] {chart.title} | {chart.metadata.description} | "
        f"{chart.n_points} points @ {chart.sample_rate:g} Hz"
    )
    n_vis = int(chart.visible_mask().sum())
    lines.append(
        f"x: [{vp.x_min:.4f}, {vp.x_max:.4f}]  y: [{vp.y_min:.4f}, {vp.y_max:.4f}]  visible: {n_vis}"
    )
    return "\n".join(lines)


# -----------------------------------------------------------------------
# Input handling
# -----------------------------------------------------------------------


def key_bindings(store: SessionStore) -> Dict[str, Callable[[], object]]:
    prof = store.profile
    return {
        "h": lambda: store.move(True, prof.default_move_steps),
        "l": lambda: store.move(False, prof.default_move_steps),
        "k": lambda: store.scale(True, prof.default_zoom_multiplier),
        "j": lambda: store.scale(False, prof.default_zoom_multiplier),
    }


def handle_line(line: str, store: SessionStore, state: AppState, dispatcher: CommandDispatcher) -> None:
    """Process one input line as one event."""
    state.dismiss_error()
    state.message = None
    state.show_help = False
    state.show_about = False

    key = line.strip()
    bindings = key_bindings(store)
    if key in bindings:
        try:
            bindings[key]()
        except SuzuError as e:
            state.set_error(e)
        return

    state.submit(line)
    dispatcher.run_pending()


def run_console(
    store: SessionStore,
    state: Optional[AppState] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    state = state if state is not None else AppState()
    dispatcher = CommandDispatcher(store, state)
    prompt = "> "

    while state.running:
        stdout.write(render(store, state) + "\n")
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        handle_line(line.rstrip("\n"), store, state, dispatcher)
    return 0


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    stdout = stdout or sys.stdout
    ns = build_parser().parse_args(list(argv) if argv is not None else None)

    if ns.version:
        stdout.write(f"suzu v{__version__}\n")
        return 0
    if ns.help:
        stdout.write(USAGE + "\n")
        return 0

    logging.basicConfig(
        level=getattr(logging, str(ns.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    profile = ViewerProfile.from_json(ns.profile) if ns.profile else ViewerProfile()
    logger.debug("Viewer profile: %s", profile.to_dict())
    initial = Path(ns.file).expanduser() if ns.file else None
    store = SessionStore.from_startup(initial, profile=profile)
    return run_console(store, stdin=stdin, stdout=stdout)


if __name__ == "__main__":
    raise SystemExit(main())
