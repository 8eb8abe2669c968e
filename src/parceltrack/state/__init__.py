"""State layer.

In-memory tracking cache and persisted search history. Both are written
only by :class:`~parceltrack.TrackingSynchronizer`.
"""
