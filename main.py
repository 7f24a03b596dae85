#!/usr/bin/env python3
"""
Build a spatial index from a points CSV and answer one query.

  python main.py info
  python main.py nearest --lat 40.7 --lng -74.0
  python main.py nearby --lat 40.7 --lng -74.0 --radius 25
"""
import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from geoindex.data.geo import Coordinate, haversine
from geoindex.data.points_repo import SAMPLE_POINTS_CSV, load_points_csv
from geoindex.index.models import IndexInfoResponse, NearbyResponse, NearestResponse, PointInfo
from geoindex.index.service import SpatialIndexService
from settings import get_settings

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Nearest / nearby queries over a static set of coordinates")
    parser.add_argument("--points", type=Path, default=None, help="Points CSV (lat, lng) or GTFS stops.txt")
    parser.add_argument("--gtfs", action="store_true", default=None, help="CSV uses stop_lat, stop_lon")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Index size and height")

    p_nearest = sub.add_parser("nearest", help="Closest other point to a coordinate")
    p_nearest.add_argument("--lat", type=float, required=True)
    p_nearest.add_argument("--lng", type=float, required=True)

    p_nearby = sub.add_parser("nearby", help="Points strictly within a radius (miles)")
    p_nearby.add_argument("--lat", type=float, required=True)
    p_nearby.add_argument("--lng", type=float, required=True)
    p_nearby.add_argument("--radius", type=float, required=True, help="Radius in miles")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, service: SpatialIndexService) -> str:
    """Run the query in args against service; return the JSON to print."""
    if args.command == "info":
        return IndexInfoResponse(**service.stats()).model_dump_json()

    if args.command == "nearest":
        result = service.nearest(args.lat, args.lng)
        if result is None:
            return NearestResponse(point=None).model_dump_json()
        return NearestResponse(
            point=PointInfo(lat=result.location.lat, lng=result.location.lng),
            distance_miles=result.distance_miles,
        ).model_dump_json()

    found = service.nearby(args.lat, args.lng, args.radius)
    query = Coordinate(args.lat, args.lng)
    ordered = sorted(found, key=lambda p: (haversine(query, p), p))
    return NearbyResponse(points=[PointInfo(lat=p.lat, lng=p.lng) for p in ordered]).model_dump_json()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(levelname)s %(name)s %(message)s",
    )
    args = _parse_args(argv)

    points_path = args.points or (Path(settings.points_csv_path) if settings.points_csv_path else SAMPLE_POINTS_CSV)
    gtfs = settings.points_csv_gtfs if args.gtfs is None else args.gtfs

    try:
        points = load_points_csv(points_path, gtfs=gtfs)
    except (FileNotFoundError, ValueError) as e:
        logger.error("telemetry load_failed path=%s error=%s", points_path, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    service = SpatialIndexService(slow_query_ms=settings.slow_query_ms)
    service.build(points)
    try:
        print(run(args, service))
    except ValidationError as e:
        logger.error("telemetry invalid_query command=%s", args.command)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
