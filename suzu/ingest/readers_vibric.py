from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

import numpy as np
import pandas as pd

from suzu.errors import BadSignature, FileReadError, InvalidChannel, InvalidHeader, Truncated
from suzu.models.chart import Chart, ChartTransform, DisplayStyle
from suzu.models.frames import VIBRIC_SIGNATURE, SignalFrame, SignalHeader
from suzu.models.profile import ViewerProfile

logger = logging.getLogger(__name__)


# On-disk layout of the prologue (little-endian, no padding).
HEADER_DTYPE = np.dtype(
    [
        ("signature", "S4"),
        ("channels", "<u4"),
        ("sample_size", "<u4"),
        ("spectral_lines", "<u4"),
        ("cutoff_freq", "<u4"),
        ("freq_resolution", "<f4"),
        ("block_time", "<f4"),
        ("total_time", "<u4"),
        ("blocks_set", "<u4"),
        ("data_size", "<u4"),
        ("blocks_received", "<u4"),
        ("max_value", "<f4"),
        ("min_value", "<f4"),
    ]
)
HEADER_SIZE = HEADER_DTYPE.itemsize  # 52 bytes
SAMPLE_DTYPE = np.dtype("<f4")


@dataclass(frozen=True)
class VibricReaderConfig:
    """
    Reader configuration for Vibric waveform containers (*.bin).

    strict_size:
      - True: trailing bytes after the declared data_size samples are reported as a warning.
      - False: trailing bytes are ignored silently.
    """
    strict_size: bool = True


def read_header(stream: BinaryIO) -> SignalHeader:
    """Read the fixed 52-byte prologue.

    The signature is checked before any other field is interpreted.
    """
    raw = stream.read(HEADER_SIZE)
    if len(raw) >= 4 and raw[:4] != VIBRIC_SIGNATURE:
        raise BadSignature()
    if len(raw) < HEADER_SIZE:
        raise Truncated(f"Vibric file: header truncated ({len(raw)} of {HEADER_SIZE} bytes)")

    rec = np.frombuffer(raw, dtype=HEADER_DTYPE, count=1)[0]
    return SignalHeader(
        signature=bytes(rec["signature"]),
        channels=int(rec["channels"]),
        sample_size=int(rec["sample_size"]),
        spectral_lines=int(rec["spectral_lines"]),
        cutoff_freq=int(rec["cutoff_freq"]),
        freq_resolution=float(rec["freq_resolution"]),
        block_time=float(rec["block_time"]),
        total_time=int(rec["total_time"]),
        blocks_set=int(rec["blocks_set"]),
        data_size=int(rec["data_size"]),
        blocks_received=int(rec["blocks_received"]),
        max_value=float(rec["max_value"]),
        min_value=float(rec["min_value"]),
    )


def _deinterleave(samples: np.ndarray, header: SignalHeader) -> pd.DataFrame:
    """Build the per-channel table: sample i -> column ch{i % C}, row i // C."""
    C = int(header.channels)
    n_rows = header.samples_per_channel
    padded = np.full(n_rows * C, np.nan, dtype=np.float64)
    padded[: samples.size] = samples
    mat = padded.reshape((n_rows, C))

    t = np.arange(n_rows, dtype=np.float64) * header.dt
    cols = {"t": t}
    for k in range(C):
        cols[f"ch{k}"] = mat[:, k]
    return pd.DataFrame(cols)


class VibricReader:
    """
    Reader for Vibric waveform containers.

    Contract:
      - The file starts with the 4-byte VIBRIC_SIGNATURE, otherwise BadSignature.
      - Exactly data_size f32 samples follow the header, otherwise Truncated.
      - channels and sample_size must be > 0, otherwise InvalidHeader.
      - The whole file is read at once; the handle is closed on return or error.
      - An OS-level failure while opening or reading becomes FileReadError.
    """

    def __init__(self, config: Optional[VibricReaderConfig] = None):
        self.config = config or VibricReaderConfig()

    def read(self, file_path: str | Path) -> SignalFrame:
        path = Path(file_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(str(path))

        warnings: list[str] = []
        try:
            with path.open("rb") as fh:
                header = read_header(fh)
                if header.channels <= 0:
                    raise InvalidHeader("Vibric file: header declares 0 channels")
                if header.sample_size <= 0:
                    raise InvalidHeader("Vibric file: header declares sample_size 0")

                n = int(header.data_size)
                raw = fh.read(n * SAMPLE_DTYPE.itemsize)
                if len(raw) < n * SAMPLE_DTYPE.itemsize:
                    got = len(raw) // SAMPLE_DTYPE.itemsize
                    raise Truncated(f"Vibric file: expected {n} samples, got {got}")
                if self.config.strict_size and fh.read(1):
                    warnings.append("trailing bytes after declared data_size were ignored")
        except OSError as e:
            raise FileReadError(path, e) from e

        if n:
            samples = np.frombuffer(raw, dtype=SAMPLE_DTYPE, count=n).astype(np.float64)
        else:
            samples = np.zeros(0, dtype=np.float64)

        rem = n % header.channels
        if rem:
            warnings.append(
                f"data_size={n} is not a multiple of channels={header.channels}; "
                f"last row holds {rem} channel(s)"
            )
        n_bad = int(np.count_nonzero(~np.isfinite(samples)))
        if n_bad:
            warnings.append(f"{n_bad} non-finite sample(s) in data")

        df = _deinterleave(samples, header)
        logger.info(
            "Decoded %s: channels=%d data_size=%d sample_rate=%.6g dt=%.6g",
            path.name,
            header.channels,
            n,
            header.sample_rate,
            header.dt,
        )
        for msg in warnings:
            logger.warning("%s: %s", path.name, msg)

        return SignalFrame(
            source_path=path,
            header=header,
            samples=samples,
            df=df,
            warnings=tuple(warnings),
        )


def chart_from_frame(
    frame: SignalFrame,
    channel: int,
    *,
    profile: Optional[ViewerProfile] = None,
) -> Chart:
    """Slice one channel of a decoded file into a raw (Standard) chart."""
    profile = profile or ViewerProfile()
    ch = int(channel)
    if not (0 <= ch < frame.n_channels):
        raise InvalidChannel(ch, frame.n_channels)

    t, y = frame.channel_points(ch)
    return Chart.create(
        t,
        y,
        sample_rate=frame.header.sample_rate,
        title=frame.title,
        transform=ChartTransform.STANDARD,
        display_style=DisplayStyle.LINE,
        y_margin=profile.initial_y_margin,
    )


def decode(
    file_path: str | Path,
    channel: int = 0,
    *,
    profile: Optional[ViewerProfile] = None,
    config: Optional[VibricReaderConfig] = None,
) -> Chart:
    """Decode a Vibric file and return one channel as a chart."""
    frame = VibricReader(config).read(file_path)
    return chart_from_frame(frame, channel, profile=profile)
