from geoindex.index.kdtree import NearestResult, Node, SpatialIndex, build_index, nearby, nearest
from geoindex.index.service import SpatialIndexService

__all__ = [
    "NearestResult",
    "Node",
    "SpatialIndex",
    "SpatialIndexService",
    "build_index",
    "nearby",
    "nearest",
]
