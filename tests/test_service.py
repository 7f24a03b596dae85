"""Tests for SpatialIndexService: publish/swap, queries, validation and metrics."""
import logging
import threading

import pytest
from pydantic import ValidationError

from geoindex.data.geo import Coordinate
from geoindex.index.service import EMPTY_INDEX, SpatialIndexService
from geoindex.monitoring import get_metrics

CITIES = [(40.0, -75.0), (34.0, -118.0), (41.8, -87.6)]


def test_service_before_build_acts_empty():
    service = SpatialIndexService()
    assert service.index is EMPTY_INDEX
    assert service.nearest(40.0, -75.0) is None
    assert service.nearby(40.0, -75.0, 500) == set()
    assert service.stats() == {"size": 0, "height": 0, "well_formed": True}


def test_service_build_and_query():
    service = SpatialIndexService()
    index = service.build(CITIES)
    assert service.index is index
    assert service.nearest(40.7, -74.0).location == Coordinate(40.0, -75.0)
    assert service.nearby(40.7, -74.0, 100) == {Coordinate(40.0, -75.0)}
    assert service.stats() == {"size": 3, "height": 2, "well_formed": True}


def test_service_rebuild_replaces_index():
    service = SpatialIndexService()
    service.build(CITIES)
    service.build([(0.0, 0.0), (0.0, 1.0)])
    assert service.nearest(0.0, 0.1).location == Coordinate(0.0, 0.0)
    assert service.stats()["size"] == 2


def test_service_negative_radius_rejected():
    service = SpatialIndexService()
    service.build(CITIES)
    with pytest.raises(ValidationError):
        service.nearby(40.0, -75.0, -1)


def test_service_out_of_range_coordinates_accepted():
    service = SpatialIndexService()
    service.build([(95.0, 0.0), (10.0, 200.0)])
    assert service.stats()["well_formed"] is False
    assert service.nearest(0.0, 0.0) is not None


def test_service_records_metrics():
    service = SpatialIndexService()
    service.build(CITIES)
    service.nearest(40.7, -74.0)
    service.nearest(40.7, -74.0)
    service.nearby(40.7, -74.0, 100)
    m = get_metrics()
    assert m["builds_total"] == 1
    assert m["index_size"] == 3
    assert m["queries_nearest"] == 2
    assert m["queries_nearby"] == 1
    assert m["queries_total"] == 3


def test_service_logs_build(caplog):
    service = SpatialIndexService()
    with caplog.at_level(logging.INFO, logger="geoindex.index.service"):
        service.build(CITIES)
    assert "telemetry index_built size=3" in caplog.text


def test_service_logs_slow_query(caplog):
    service = SpatialIndexService(slow_query_ms=-1.0)
    service.build(CITIES)
    with caplog.at_level(logging.WARNING, logger="geoindex.index.service"):
        service.nearest(40.7, -74.0)
    assert "telemetry slow_query kind=nearest" in caplog.text


def test_service_concurrent_readers(random_points):
    service = SpatialIndexService()
    service.build(random_points)
    expected = service.nearby(10.0, 10.0, 1500)
    errors = []

    def reader():
        for _ in range(20):
            if service.nearby(10.0, 10.0, 1500) != expected:
                errors.append("mismatch")

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
