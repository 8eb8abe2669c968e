"""Map rendering of tracking state onto an abstract drawable surface."""

from parceltrack.map.renderer import DEMO_MARKERS, MapRenderer, truncate_route
from parceltrack.map.surface import Bounds, MapSurface, Marker, MarkerKind, Polyline

__all__ = [
    "DEMO_MARKERS",
    "Bounds",
    "MapRenderer",
    "MapSurface",
    "Marker",
    "MarkerKind",
    "Polyline",
    "truncate_route",
]
