from .chart import Chart, ChartMetadata, ChartTransform, DisplayStyle, Point, Viewport
from .frames import SignalFrame, SignalHeader
from .profile import ViewerProfile

__all__ = [
    "Chart",
    "ChartMetadata",
    "ChartTransform",
    "DisplayStyle",
    "Point",
    "Viewport",
    "SignalFrame",
    "SignalHeader",
    "ViewerProfile",
]
