"""Ingestion layer.

Turns raw backend tracking records into the derived, cache-ready
:class:`~parceltrack.models.TrackingState`: location resolution, timeline
normalization and summary fields.
"""

__all__: list[str] = []
