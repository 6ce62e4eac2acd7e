"""Session package - the charts of one run and the shared front-end state.

- SessionStore: ordered charts, current selection, zoom/pan arithmetic
- AppState: pending command, last error, UI flags
"""

from .state import AppState
from .store import SessionStore

__all__ = ["AppState", "SessionStore"]
