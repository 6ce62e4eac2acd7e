from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Literal

import ipywidgets as w

from suzu.errors import SuzuError


Level = Literal["info", "error"]


@dataclass
class _Entry:
    level: Level
    message: str
    count: int = 1


class HtmlLog:
    """
    Message strip of the notebook viewer, rendered into a single HTML widget.

    - errors in red, info (help table, chart list) in near-black monospace
    - consecutive identical messages are coalesced (shows xN)
    - bounded history (drops oldest entries beyond max_entries)
    - dismiss() clears the strip; the viewer calls it on every new input event so an
      error stays visible until the operator does something else
    """

    def __init__(self, *, height_px: int = 160, max_entries: int = 200) -> None:
        self._entries: List[_Entry] = []
        self._height_px = int(height_px)
        self._max_entries = int(max_entries)
        self.widget = w.HTML()
        self.dismiss()

    @property
    def entries(self) -> List[str]:
        return [e.message for e in self._entries]

    def dismiss(self) -> None:
        self._entries.clear()
        self._render()

    def info(self, message: str) -> None:
        self._add("info", message)

    def error(self, message: str) -> None:
        self._add("error", message)

    def show_error(self, err: SuzuError) -> None:
        self.error(f"{type(err).__name__}: {err}")

    def _add(self, level: Level, message: str) -> None:
        msg = "" if message is None else str(message)
        if self._entries and self._entries[-1].level == level and self._entries[-1].message == msg:
            self._entries[-1].count += 1
        else:
            self._entries.append(_Entry(level=level, message=msg))
            if len(self._entries) > self._max_entries:
                self._entries = self._entries[-self._max_entries :]
        self._render()

    def _render(self) -> None:
        rows = []
        for e in self._entries:
            color = "#b00020" if e.level == "error" else "#222222"
            suffix = f" (x{e.count})" if e.count > 1 else ""
            rows.append(
                f"<div style='color:{color}; white-space:pre; font-family:ui-monospace, Menlo, Consolas, monospace;'>"
                f"{html.escape(e.message)}{html.escape(suffix)}</div>"
            )
        inner = "".join(rows) if rows else "<div style='color:#666;'>Type :h for the command table.</div>"
        self.widget.value = (
            f"<div style='border:1px solid #ddd; padding:6px; max-height:{self._height_px}px; "
            f"overflow-y:auto; background:#fff;'>{inner}</div>"
        )
