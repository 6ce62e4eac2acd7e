"""Typed errors raised by the session engine.

Every error the operator can trigger derives from :class:`SuzuError`. The
dispatcher catches exactly this family and hands it to the front-end; anything
else is a bug and propagates.

Families
--------
DecodeError
    The Vibric container could not be decoded.
FileError
    The path could not be mapped onto a supported file type, or could not be read.
CommandError
    The command line is malformed or cannot apply to the session.
TransformError
    A transform rejected its input.
"""

from __future__ import annotations


class SuzuError(Exception):
    """Root of all operator-facing errors. ``str(err)`` is the display text."""

    message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


# -----------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------


class DecodeError(SuzuError):
    message = "Vibric file: decode error"


class BadSignature(DecodeError):
    message = "Vibric file: bad signature"


class Truncated(DecodeError):
    message = "Vibric file: unexpected end of data"


class InvalidChannel(DecodeError):
    def __init__(self, channel: int, channels: int) -> None:
        self.channel = int(channel)
        self.channels = int(channels)
        super().__init__(f"Vibric file: channel {self.channel} out of range (file has {self.channels})")


class InvalidHeader(DecodeError):
    message = "Vibric file: inconsistent header"


# -----------------------------------------------------------------------
# File types
# -----------------------------------------------------------------------


class FileError(SuzuError):
    message = "File error"


class UnsupportedType(FileError):
    message = "Unsupported file type"


class ExtensionParseError(FileError):
    message = "File extension parse error"


class PathParseError(FileError):
    message = "File path parse error"


class FileReadError(FileError):
    def __init__(self, path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or type(cause).__name__
        super().__init__(f"Cannot read file {path}: {reason}")


# -----------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------


class CommandError(SuzuError):
    message = "Command error, use :h for help"


class CommandSyntax(CommandError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"No such command: {line}, use :h for help")


class InvalidArguments(CommandError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid argument: {token}, use :h for help")


class NotEnoughArguments(CommandError):
    message = "Not enough arguments, use :h for help"


class EmptyCommand(CommandError):
    message = "Try some commands, use :h for help"


class NoChart(CommandError):
    message = "No chart selected, use :of to open a chart file"


# -----------------------------------------------------------------------
# Transforms
# -----------------------------------------------------------------------


class TransformError(SuzuError):
    message = "Transform error"


class StftFailure(TransformError):
    message = "STFT error. Try changing the window size or hop size."


class NotFrequencyDomain(TransformError):
    message = "Filters apply to frequency-domain charts only, run :fft first"
