from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from suzu.errors import ExtensionParseError, PathParseError, UnsupportedType
from suzu.ingest.readers_vibric import decode
from suzu.models.chart import Chart
from suzu.models.profile import ViewerProfile


class FileType(Enum):
    """Closed set of signal formats. The value is the file extension (no dot)."""

    VIBRIC = "bin"

    @classmethod
    def from_path(cls, path: str | Path) -> FileType:
        if path is None or str(path).strip() == "":
            raise PathParseError()
        try:
            p = Path(path)
        except TypeError as e:
            raise PathParseError(f"File path parse error: {path!r}") from e

        suffix = p.suffix
        if not suffix or suffix == ".":
            raise ExtensionParseError(f"File extension parse error: {p.name!r} has no extension")
        ext = suffix[1:].lower()
        for ft in cls:
            if ft.value == ext:
                return ft
        raise UnsupportedType(f"Unsupported file type: .{ext}")


def read_signal_file(
    path: str | Path,
    channel: int = 0,
    *,
    profile: Optional[ViewerProfile] = None,
) -> Chart:
    """Decode ``path`` with the reader of its file type and return one channel.

    Adding a format means adding a FileType member and a branch here.
    """
    file_type = FileType.from_path(path)
    if file_type is FileType.VIBRIC:
        return decode(path, channel, profile=profile)
    raise UnsupportedType(f"Unsupported file type: .{file_type.value}")
