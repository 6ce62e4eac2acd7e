"""suzu -- interactive viewer for vibration/acoustic signal recordings.

This package provides tools for:
- Decoding Vibric binary waveform containers (*.bin) into typed headers and samples
- Slicing one channel into a navigable chart (time, amplitude)
- Deriving new charts through FFT, short-time FFT, band filters and Haar wavelets
- Keeping an ordered session of charts with a current selection
- Zooming and panning a chart viewport without ever producing NaN/inf bounds
- Dispatching ':verb arg ...' command lines onto the session

Key principles:
- The source file is read once, fully, into memory
- Transforms are pure: a failed command never leaves a half-applied session
- Every error is typed and surfaced to the front-end, never retried

Main subpackages:
- models: Data models (SignalHeader, SignalFrame, Chart, Viewport, ViewerProfile)
- ingest: Vibric reader and the file-type dispatch
- analysis: Spectral, filter and wavelet transforms
- session: SessionStore and the shared AppState
- commands: Command table and dispatcher (errors live in suzu.errors)
- gui: Notebook viewer (ipywidgets + matplotlib)
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
