"""Console front-end driven through in-memory streams."""

from __future__ import annotations

import io
import json

from suzu import __version__
from suzu.cli import handle_line, main, render, run_console
from suzu.commands.dispatcher import CommandDispatcher
from suzu.errors import CommandSyntax
from suzu.session.state import AppState
from suzu.session.store import SessionStore


def test_version_and_help():
    out = io.StringIO()
    assert main(["-v"], stdout=out) == 0
    assert out.getvalue().strip() == f"suzu v{__version__}"

    out = io.StringIO()
    assert main(["--help"], stdout=out) == 0
    assert "-f <FILE>" in out.getvalue()


def test_main_opens_file_and_quits(sine_file):
    out = io.StringIO()
    code = main(["-f", str(sine_file)], stdin=io.StringIO(":fft\n:q\n"), stdout=out)
    assert code == 0
    text = out.getvalue()
    assert "[1/1] sine | Standard" in text
    assert "[2/2] sine | FFT | FFT" in text


def test_main_with_profile(tmp_path):
    prof = tmp_path / "p.json"
    prof.write_text(json.dumps({"command_prefix": "/"}))
    out = io.StringIO()
    main(["--profile", str(prof)], stdin=io.StringIO("/h\n/q\n"), stdout=out)
    assert "Window size" in out.getvalue()


def test_console_ends_on_eof():
    out = io.StringIO()
    assert run_console(SessionStore(), stdin=io.StringIO(""), stdout=out) == 0
    assert "(no chart)" in out.getvalue()


def test_error_is_shown_once_then_dismissed():
    store = SessionStore()
    state = AppState()
    dispatcher = CommandDispatcher(store, state)

    handle_line(":nope", store, state, dispatcher)
    assert isinstance(state.error, CommandSyntax)
    assert render(store, state).startswith("ERROR: No such command: :nope")

    handle_line(":a", store, state, dispatcher)
    assert state.error is None
    assert "ERROR" not in render(store, state)


def test_navigation_keys(sine_file):
    store = SessionStore.from_startup(sine_file)
    state = AppState()
    dispatcher = CommandDispatcher(store, state)
    before = store.current().viewport

    handle_line("l", store, state, dispatcher)
    assert store.current().viewport.x_min > before.x_min
    handle_line("k", store, state, dispatcher)
    assert store.current().viewport.width < before.width
    assert state.error is None


def test_navigation_key_on_empty_session_sets_error():
    store = SessionStore()
    state = AppState()
    handle_line("h", store, state, CommandDispatcher(store, state))
    assert state.error is not None
