"""
Load coordinates for the spatial index from a CSV file.

CSV must have a header row with lat, lng columns, or GTFS stops.txt
columns stop_lat, stop_lon. Other columns are ignored.
"""
import csv
import logging
import math
from pathlib import Path

from geoindex.data.geo import Coordinate

logger = logging.getLogger(__name__)

# Sample points shipped with the package
SAMPLE_POINTS_CSV = Path(__file__).resolve().parent / "points.csv"


def _normalize_header(name: str) -> str:
    # strip BOM / spaces
    return name.lstrip("\ufeff").strip().lower()


def _pick_columns(fieldnames: list[str], gtfs: bool) -> tuple[str, str]:
    lat_col, lng_col = ("stop_lat", "stop_lon") if gtfs else ("lat", "lng")
    if lat_col in fieldnames and lng_col in fieldnames:
        return lat_col, lng_col
    # Fall back to the other naming
    for cols in (("stop_lat", "stop_lon"), ("lat", "lng"), ("latitude", "longitude")):
        if cols[0] in fieldnames and cols[1] in fieldnames:
            return cols
    raise ValueError(f"CSV must have lat/lng (or stop_lat/stop_lon) columns. Got: {fieldnames}")


def load_points_csv(path: str | Path, gtfs: bool = False) -> list[Coordinate]:
    """
    Return every parseable (lat, lng) row of the CSV in file order.
    Raises FileNotFoundError if path is missing, ValueError if the header has no coordinate columns.
    Rows with missing, non-numeric or non-finite values are skipped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Points CSV not found: {path}")

    points: list[Coordinate] = []
    skipped = 0
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise ValueError(f"Empty CSV: {path}")
        fieldnames = [_normalize_header(h) for h in reader.fieldnames]
        lat_col, lng_col = _pick_columns(fieldnames, gtfs)
        for row in reader:
            row = {_normalize_header(k): v for k, v in row.items() if k is not None}
            try:
                lat = float(row.get(lat_col))
                lng = float(row.get(lng_col))
            except (TypeError, ValueError):
                skipped += 1
                continue
            # float() accepts "nan" / "inf"
            if not (math.isfinite(lat) and math.isfinite(lng)):
                skipped += 1
                continue
            points.append(Coordinate(lat, lng))

    if skipped:
        logger.warning("telemetry points_skipped path=%s skipped=%s", path, skipped)
    logger.info("telemetry points_loaded path=%s count=%s", path, len(points))
    return points
