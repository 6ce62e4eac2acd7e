"""Ingest package - signal file readers and file-type dispatch.

This package handles:
- Reading Vibric waveform containers (*.bin): fixed header + interleaved f32 samples
- De-interleaving one channel into a (time, amplitude) chart
- Mapping a path onto the reader of its file type

Key objects:
- VibricReader: Decodes a file into a SignalFrame
- decode: Path + channel -> Chart
- FileType / read_signal_file: closed extension dispatch

Design principle:
- Readers raise typed DecodeError/FileError, never return partial data
- The file is read once, fully, into memory
"""

from .file_types import FileType, read_signal_file
from .readers_vibric import VibricReader, VibricReaderConfig, chart_from_frame, decode, read_header

__all__ = [
    "FileType",
    "read_signal_file",
    "VibricReader",
    "VibricReaderConfig",
    "chart_from_frame",
    "decode",
    "read_header",
]
