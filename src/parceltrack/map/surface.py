"""Drawable map surface contract and the objects placed on it.

Tile and basemap provisioning belong to the surface implementation; the
renderer only adds and removes layers and moves the camera.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol


class MarkerKind(enum.StrEnum):
    ORIGIN = "origin"
    CURRENT = "current"
    DESTINATION = "destination"


MARKER_LABELS: dict[MarkerKind, str] = {
    MarkerKind.ORIGIN: "Origin",
    MarkerKind.CURRENT: "Current Location",
    MarkerKind.DESTINATION: "Destination",
}

MARKER_COLORS: dict[MarkerKind, str] = {
    MarkerKind.ORIGIN: "green",
    MarkerKind.CURRENT: "blue",
    MarkerKind.DESTINATION: "red",
}


@dataclass(frozen=True, slots=True)
class Marker:
    kind: MarkerKind
    latitude: float
    longitude: float
    address: str = ""

    @property
    def label(self) -> str:
        return MARKER_LABELS[self.kind]

    @property
    def color(self) -> str:
        return MARKER_COLORS[self.kind]

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Polyline:
    points: tuple[tuple[float, float], ...]
    color: str = "#3b82f6"
    weight: int = 4
    opacity: float = 0.8


@dataclass(frozen=True, slots=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Bounds:
        pts = list(points)
        if not pts:
            raise ValueError("cannot build bounds from no points")
        lats = [lat for lat, _ in pts]
        lngs = [lng for _, lng in pts]
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    def pad(self, ratio: float) -> Bounds:
        """Grow each side by *ratio* of the span (Leaflet ``LatLngBounds.pad``)."""
        lat_pad = (self.north - self.south) * ratio
        lng_pad = (self.east - self.west) * ratio
        return Bounds(
            south=self.south - lat_pad,
            west=self.west - lng_pad,
            north=self.north + lat_pad,
            east=self.east + lng_pad,
        )

    def contains(self, point: tuple[float, float]) -> bool:
        lat, lng = point
        return self.south <= lat <= self.north and self.west <= lng <= self.east


class MapSurface(Protocol):
    """Abstract drawable map. Handles returned by ``add_*`` are opaque."""

    def add_marker(self, marker: Marker) -> Any:
        ...

    def add_polyline(self, polyline: Polyline) -> Any:
        ...

    def remove_layer(self, handle: Any) -> None:
        ...

    def fit_bounds(self, bounds: Bounds) -> None:
        ...

    def set_view(self, center: tuple[float, float], zoom: int) -> None:
        ...
