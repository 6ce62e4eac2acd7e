"""Command table: verb -> operation, surface, arity and argument parsers.

The table is the single source of truth for the command grammar. Each verb
belongs to exactly one surface; a surface only claims the verbs it owns, so an
unknown verb falls through the dispatcher chain instead of raising.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Sequence, Tuple

import pandas as pd

from suzu.errors import InvalidArguments, NotEnoughArguments


class Surface(Enum):
    GENERAL = "general"
    FILE = "file"
    SESSION = "session"
    VIEW = "view"
    TRANSFORM = "transform"


class Op(Enum):
    ABOUT = "about"
    HELP = "help"
    QUIT = "quit"

    OPEN_FILE = "open_file"

    CLOSE_VIEW = "close_view"
    SWITCH_VIEW = "switch_view"
    NEXT_VIEW = "next_view"
    PREV_VIEW = "prev_view"
    LIST_VIEWS = "list_views"

    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    RESET_VIEW = "reset_view"

    FFT = "fft"
    STFT = "stft"
    LOW_PASS = "low_pass"
    HIGH_PASS = "high_pass"
    BAND_PASS = "band_pass"
    BAND_STOP = "band_stop"
    HAAR = "haar"


# -----------------------------------------------------------------------
# Argument parsers: raw token -> value, InvalidArguments(token) on failure
# -----------------------------------------------------------------------

_UINT_RE = re.compile(r"^\+?\d+$")
_U32_MAX = 2**32 - 1


def parse_float(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise InvalidArguments(token) from None
    if not math.isfinite(value):
        raise InvalidArguments(token)
    return value


def parse_positive_float(token: str) -> float:
    value = parse_float(token)
    if value <= 0.0:
        raise InvalidArguments(token)
    return value


def parse_usize(token: str) -> int:
    if not _UINT_RE.match(token):
        raise InvalidArguments(token)
    return int(token)


def parse_u32(token: str) -> int:
    value = parse_usize(token)
    if value > _U32_MAX:
        raise InvalidArguments(token)
    return value


def parse_path(token: str) -> Path:
    if not token:
        raise InvalidArguments(token)
    return Path(token).expanduser()


@dataclass(frozen=True)
class ArgSpec:
    name: str
    parser: Callable[[str], Any]
    hint: str
    optional: bool = False


@dataclass(frozen=True)
class CommandSpec:
    verb: str
    op: Op
    surface: Surface
    args: Tuple[ArgSpec, ...] = ()
    needs_chart: bool = False
    description: str = ""

    @property
    def n_required(self) -> int:
        return sum(1 for a in self.args if not a.optional)

    @property
    def arguments_hint(self) -> str:
        if not self.args:
            return "-"
        parts = []
        for a in self.args:
            parts.append(f"[{a.hint}]" if a.optional else a.hint)
        return " ".join(parts)

    def parse_args(self, tokens: Sequence[str]) -> Tuple[Any, ...]:
        """Check arity, then parse each positional token in order.

        Extra tokens beyond the declared arguments are ignored.
        """
        if len(tokens) < self.n_required:
            raise NotEnoughArguments()
        values = []
        for spec, tok in zip(self.args, tokens):
            values.append(spec.parser(tok))
        return tuple(values)


_F64 = "Float"
_USIZE = "Int"

COMMAND_SPECS: Tuple[CommandSpec, ...] = (
    CommandSpec("a", Op.ABOUT, Surface.GENERAL, description="Show application about information"),
    CommandSpec("h", Op.HELP, Surface.GENERAL, description="Show commands table"),
    CommandSpec("q", Op.QUIT, Surface.GENERAL, description="Quit application"),
    CommandSpec(
        "of",
        Op.OPEN_FILE,
        Surface.FILE,
        args=(ArgSpec("path", parse_path, "File path (String)"), ArgSpec("channel", parse_usize, f"Channel ({_USIZE})", optional=True)),
        description="Open a signal file as a new chart",
    ),
    CommandSpec("cwv", Op.CLOSE_VIEW, Surface.SESSION, description="Close current chart view"),
    CommandSpec(
        "swv",
        Op.SWITCH_VIEW,
        Surface.SESSION,
        args=(ArgSpec("index", parse_u32, f"View index ({_USIZE})"),),
        needs_chart=True,
        description="Move to another chart view",
    ),
    CommandSpec("nwv", Op.NEXT_VIEW, Surface.SESSION, needs_chart=True, description="Move to the next chart view"),
    CommandSpec("pwv", Op.PREV_VIEW, Surface.SESSION, needs_chart=True, description="Move to the previous chart view"),
    CommandSpec("lwv", Op.LIST_VIEWS, Surface.SESSION, description="List chart views"),
    CommandSpec(
        "zi",
        Op.ZOOM_IN,
        Surface.VIEW,
        args=(ArgSpec("multiplier", parse_positive_float, f"Scale coefficient ({_F64})"),),
        needs_chart=True,
        description="Enlarge chart",
    ),
    CommandSpec(
        "zo",
        Op.ZOOM_OUT,
        Surface.VIEW,
        args=(ArgSpec("multiplier", parse_positive_float, f"Scale coefficient ({_F64})"),),
        needs_chart=True,
        description="Shrink chart",
    ),
    CommandSpec(
        "ml",
        Op.MOVE_LEFT,
        Surface.VIEW,
        args=(ArgSpec("steps", parse_float, f"Number of steps ({_F64})"),),
        needs_chart=True,
        description="Move chart left",
    ),
    CommandSpec(
        "mr",
        Op.MOVE_RIGHT,
        Surface.VIEW,
        args=(ArgSpec("steps", parse_float, f"Number of steps ({_F64})"),),
        needs_chart=True,
        description="Move chart right",
    ),
    CommandSpec("rv", Op.RESET_VIEW, Surface.VIEW, needs_chart=True, description="Fit view to the whole chart"),
    CommandSpec("fft", Op.FFT, Surface.TRANSFORM, needs_chart=True, description="Fast Fourier transform"),
    CommandSpec(
        "sft",
        Op.STFT,
        Surface.TRANSFORM,
        args=(
            ArgSpec("window_size", parse_usize, f"Window size ({_USIZE})"),
            ArgSpec("hop_size", parse_usize, f"Hop size ({_USIZE})"),
        ),
        needs_chart=True,
        description="Short-time Fourier transform (mean power per frame)",
    ),
    CommandSpec(
        "flp",
        Op.LOW_PASS,
        Surface.TRANSFORM,
        args=(ArgSpec("cutoff", parse_float, f"Cutoff frequency ({_F64})"),),
        needs_chart=True,
        description="Low-pass filter on a spectrum",
    ),
    CommandSpec(
        "fhp",
        Op.HIGH_PASS,
        Surface.TRANSFORM,
        args=(ArgSpec("cutoff", parse_float, f"Cutoff frequency ({_F64})"),),
        needs_chart=True,
        description="High-pass filter on a spectrum",
    ),
    CommandSpec(
        "fbp",
        Op.BAND_PASS,
        Surface.TRANSFORM,
        args=(ArgSpec("low", parse_float, f"Low band ({_F64})"), ArgSpec("high", parse_float, f"High band ({_F64})")),
        needs_chart=True,
        description="Band-pass filter on a spectrum",
    ),
    CommandSpec(
        "fbs",
        Op.BAND_STOP,
        Surface.TRANSFORM,
        args=(ArgSpec("low", parse_float, f"Low band ({_F64})"), ArgSpec("high", parse_float, f"High band ({_F64})")),
        needs_chart=True,
        description="Band-stop filter on a spectrum",
    ),
    CommandSpec("hwt", Op.HAAR, Surface.TRANSFORM, needs_chart=True, description="Haar wavelet transform (approximation)"),
)

COMMANDS: Dict[str, CommandSpec] = {spec.verb: spec for spec in COMMAND_SPECS}


def lookup(verb: str) -> CommandSpec | None:
    return COMMANDS.get(verb)


def command_table() -> pd.DataFrame:
    """Help table, one row per verb (as typed after the command prefix)."""
    rows = [(s.verb, s.arguments_hint, s.description) for s in COMMAND_SPECS]
    return pd.DataFrame(rows, columns=["Command", "Arguments", "Description"])


def help_text() -> str:
    return command_table().to_string(index=False)
