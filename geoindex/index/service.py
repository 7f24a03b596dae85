"""
Spatial index service: one published index, rebuilt as a whole, queried concurrently.

build() constructs the new tree outside any lock and then swaps the published
reference under a short-lived lock. Queries read the reference once and walk
an immutable tree, so they never see a partially built index.
"""
import logging
import time
from collections.abc import Sequence
from threading import Lock

from geoindex.data.geo import Coordinate
from geoindex.index.kdtree import (
    NearestResult,
    SpatialIndex,
    build_index,
    nearby,
    nearest,
    tree_height,
)
from geoindex.index.models import NearbyRequest, NearestRequest
from geoindex.monitoring.metrics import record_build, record_query

logger = logging.getLogger(__name__)

EMPTY_INDEX = SpatialIndex(root=None, size=0, well_formed=True)


class SpatialIndexService:
    """Owns the current SpatialIndex. Before the first build it answers as an empty index."""

    def __init__(self, slow_query_ms: float = 50.0):
        self.slow_query_ms = slow_query_ms
        self._index = EMPTY_INDEX
        self._swap_lock = Lock()

    @property
    def index(self) -> SpatialIndex:
        return self._index

    def build(self, points: Sequence[tuple[float, float]]) -> SpatialIndex:
        start = time.perf_counter()
        index = build_index(points)
        duration_ms = (time.perf_counter() - start) * 1000
        with self._swap_lock:
            self._index = index
        record_build(index.size)
        logger.info(
            "telemetry index_built size=%s height=%s well_formed=%s duration_ms=%.1f",
            index.size,
            tree_height(index.root),
            index.well_formed,
            duration_ms,
        )
        return index

    def nearest(self, lat: float, lng: float) -> NearestResult | None:
        req = NearestRequest(lat=lat, lng=lng)
        index = self._index
        start = time.perf_counter()
        result = nearest(index, (req.lat, req.lng))
        self._record("nearest", start, found=0 if result is None else 1)
        return result

    def nearby(self, lat: float, lng: float, radius_miles: float) -> set[Coordinate]:
        """Raises pydantic.ValidationError for a negative radius."""
        req = NearbyRequest(lat=lat, lng=lng, radius_miles=radius_miles)
        index = self._index
        start = time.perf_counter()
        result = nearby(index, (req.lat, req.lng), req.radius_miles)
        self._record("nearby", start, found=len(result))
        return result

    def stats(self) -> dict:
        index = self._index
        return {
            "size": index.size,
            "height": tree_height(index.root),
            "well_formed": index.well_formed,
        }

    def _record(self, kind: str, start: float, found: int) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        record_query(kind, duration_ms)
        if duration_ms > self.slow_query_ms:
            logger.warning("telemetry slow_query kind=%s found=%s duration_ms=%.1f", kind, found, duration_ms)
        else:
            logger.debug("telemetry query kind=%s found=%s duration_ms=%.1f", kind, found, duration_ms)
