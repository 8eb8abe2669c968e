"""Keeps origin/current/destination markers and the route line on a map surface."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from parceltrack._constants import MAP_BOUNDS_PADDING, SINGLE_POINT_ZOOM
from parceltrack.ingestion.normalize import is_valid_coordinate
from parceltrack.map.surface import Bounds, MapSurface, Marker, MarkerKind, Polyline
from parceltrack.models._base import TrackingStatus
from parceltrack.models.state import Location, TrackingState
from parceltrack.synchronizer import TrackingSynchronizer, TrackingUpdate, UpdateSource

_logger = logging.getLogger(__name__)

#: Non-authoritative placeholder points (Chuka → Kenol → Westlands, Kenya)
#: shown when a state carries no plottable location at all.
DEMO_MARKERS: tuple[Marker, ...] = (
    Marker(MarkerKind.ORIGIN, -0.3346, 37.6359, "Chuka University, Chuka"),
    Marker(MarkerKind.CURRENT, -0.939239, 37.124696, "Kenol Township"),
    Marker(MarkerKind.DESTINATION, -1.2648, 36.8001, "Westlands, Nairobi"),
)


def _nearest_index(path: Sequence[tuple[float, float]], point: tuple[float, float]) -> int:
    lat, lng = point
    return min(range(len(path)), key=lambda i: (path[i][0] - lat) ** 2 + (path[i][1] - lng) ** 2)


def truncate_route(
    path: Sequence[tuple[float, float]],
    status: TrackingStatus,
    current: tuple[float, float] | None,
) -> tuple[tuple[float, float], ...]:
    """Cut *path* at the parcel's position unless it has been delivered.

    The cut point is the path point equal to *current*, or the nearest one
    when no point matches exactly. Without a plottable *current* the full
    path is kept.
    """
    points = tuple(p for p in path if is_valid_coordinate(*p))
    if status == TrackingStatus.DELIVERED or not points:
        return points
    if current is None or not is_valid_coordinate(*current):
        return points
    try:
        end = points.index(current)
    except ValueError:
        end = _nearest_index(points, current)
    return points[: end + 1]


class MapRenderer:
    """Renders :class:`TrackingState` values onto a :class:`MapSurface`.

    Markers are keyed by kind; each render replaces marker objects instead
    of mutating them. Invalid locations (``(0, 0)``, NaN, out of range) get
    no marker. When nothing is plottable the :data:`DEMO_MARKERS` are shown.
    """

    def __init__(
        self,
        surface: MapSurface,
        *,
        padding: float = MAP_BOUNDS_PADDING,
        single_point_zoom: int = SINGLE_POINT_ZOOM,
    ) -> None:
        self._surface = surface
        self._padding = padding
        self._single_point_zoom = single_point_zoom
        self._markers: dict[MarkerKind, tuple[Marker, Any]] = {}
        self._route: tuple[Polyline, Any] | None = None
        self._is_demo = False

    @property
    def markers(self) -> dict[MarkerKind, Marker]:
        return {kind: marker for kind, (marker, _) in self._markers.items()}

    @property
    def route(self) -> Polyline | None:
        return self._route[0] if self._route is not None else None

    @property
    def is_demo(self) -> bool:
        return self._is_demo

    # ------------------------------------------------------------------
    # Layer bookkeeping
    # ------------------------------------------------------------------

    def _remove_marker(self, kind: MarkerKind) -> None:
        existing = self._markers.pop(kind, None)
        if existing is not None:
            self._surface.remove_layer(existing[1])

    def _place_marker(self, marker: Marker) -> None:
        self._remove_marker(marker.kind)
        self._markers[marker.kind] = (marker, self._surface.add_marker(marker))

    def _remove_route(self) -> None:
        if self._route is not None:
            self._surface.remove_layer(self._route[1])
            self._route = None

    def _draw_route(self, points: tuple[tuple[float, float], ...]) -> None:
        self._remove_route()
        if len(points) < 2:
            return
        polyline = Polyline(points=points)
        self._route = (polyline, self._surface.add_polyline(polyline))

    def _fit(self) -> None:
        points = [marker.coordinates for marker, _ in self._markers.values()]
        if self._route is not None:
            points.extend(self._route[0].points)
        if not points:
            return
        if len(set(points)) == 1:
            self._surface.set_view(points[0], self._single_point_zoom)
            return
        self._surface.fit_bounds(Bounds.from_points(points).pad(self._padding))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, state: TrackingState, *, route: Sequence[tuple[float, float]] | None = None) -> None:
        """Replace all layers to match *state*.

        *route* overrides ``state.route``. The line is drawn only for paths
        of two or more points, truncated at the current position unless the
        parcel is delivered.
        """
        locations: dict[MarkerKind, Location] = {
            MarkerKind.ORIGIN: state.origin,
            MarkerKind.CURRENT: state.current,
            MarkerKind.DESTINATION: state.destination,
        }
        wanted = {
            kind: Marker(kind, loc.latitude, loc.longitude, loc.address)
            for kind, loc in locations.items()
            if loc.is_valid
        }
        self._is_demo = not wanted
        if self._is_demo:
            _logger.debug("No plottable location for %s; showing demo markers", state.tracking_number)
            wanted = {marker.kind: marker for marker in DEMO_MARKERS}

        for kind in MarkerKind:
            if kind in wanted:
                self._place_marker(wanted[kind])
            else:
                self._remove_marker(kind)

        current = wanted.get(MarkerKind.CURRENT)
        path = route if route is not None else state.route
        self._draw_route(truncate_route(path, state.status, current.coordinates if current else None))
        self._fit()

    def update_current(self, location: Location) -> None:
        """Replace only the current-location marker."""
        if location.is_valid:
            self._place_marker(Marker(MarkerKind.CURRENT, location.latitude, location.longitude, location.address))
        else:
            self._remove_marker(MarkerKind.CURRENT)

    def clear(self) -> None:
        for kind in list(self._markers):
            self._remove_marker(kind)
        self._remove_route()
        self._is_demo = False

    def attach(self, synchronizer: TrackingSynchronizer) -> Callable[[], None]:
        """Re-render on every state the synchronizer emits; returns an unsubscribe function."""

        def _on_update(update: TrackingUpdate) -> None:
            if update.source == UpdateSource.CLEARED:
                self.clear()
            elif update.state is not None:
                self.render(update.state)

        return synchronizer.subscribe(_on_update)
