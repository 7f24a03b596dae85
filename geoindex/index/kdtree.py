"""
Balanced 2-d tree over (lat, lng) coordinates.

Built once from a complete point set by median split on alternating axes
(latitude at even depths, longitude at odd depths) and never mutated after.
Nearest-neighbor and nearby queries are read-only traversals measured in
haversine miles, so any number of them can run against one tree at once.
"""
from collections.abc import Iterator, Sequence
from typing import NamedTuple, Optional

from geoindex.data.geo import (
    MAX_DISTANCE_MILES,
    Coordinate,
    haversine,
    is_well_formed,
    plane_distance_miles,
)

_BOUND_SLACK_MILES = 1e-9


class Node(NamedTuple):
    location: Coordinate
    left: Optional["Node"] = None
    right: Optional["Node"] = None


class SpatialIndex(NamedTuple):
    root: Node | None
    size: int
    # Every point within lat [-90, 90] / lng [-180, 180]; pruning relies on it
    well_formed: bool


class NearestResult(NamedTuple):
    location: Coordinate
    distance_miles: float


def axis_for_depth(depth: int) -> int:
    return depth % 2


def _build(points: list[Coordinate], depth: int) -> Node | None:
    if not points:
        return None
    if len(points) == 1:
        return Node(points[0])
    axis = axis_for_depth(depth)
    # sorted() is stable, so equal keys keep input order
    ordered = sorted(points, key=lambda p: p[axis])
    median = len(ordered) // 2
    return Node(
        location=ordered[median],
        left=_build(ordered[:median], depth + 1),
        right=_build(ordered[median + 1:], depth + 1),
    )


def build_index(points: Sequence[tuple[float, float]]) -> SpatialIndex:
    """
    Build an immutable index from every point in points.
    Empty input gives an empty index; duplicates become separate nodes.
    """
    coords = [Coordinate(float(lat), float(lng)) for lat, lng in points]
    return SpatialIndex(
        root=_build(coords, 0),
        size=len(coords),
        well_formed=all(is_well_formed(c) for c in coords),
    )


def _split_bound(query: Coordinate, split: Coordinate, axis: int, prune: bool) -> float:
    # A zero bound never excludes a subtree
    if not prune:
        return 0.0
    # slack for rounding between the bound and haversine
    return max(0.0, plane_distance_miles(query, split, axis) - _BOUND_SLACK_MILES)


def _children(node: Node, query: Coordinate, axis: int) -> tuple[Node | None, Node | None]:
    """(near, far) children of node for query on axis."""
    if query[axis] < node.location[axis]:
        return node.left, node.right
    return node.right, node.left


def nearest(index: SpatialIndex, query: tuple[float, float]) -> NearestResult | None:
    """
    Closest indexed point to query that is not query itself, with its distance.
    Returns None for an empty index or when every point equals query.
    """
    if index.root is None:
        return None
    q = Coordinate(float(query[0]), float(query[1]))
    prune = index.well_formed and is_well_formed(q)

    def visit(node: Node | None, depth: int, best: Coordinate, best_dist: float) -> tuple[Coordinate, float]:
        if node is None:
            return best, best_dist
        # Bound on entry, before this node or its near side can tighten it
        bound = best_dist
        dist = haversine(q, node.location)
        if dist < best_dist and node.location != q:
            best, best_dist = node.location, dist

        axis = axis_for_depth(depth)
        near, far = _children(node, q, axis)
        best, best_dist = visit(near, depth + 1, best, best_dist)
        if far is not None and _split_bound(q, node.location, axis, prune) <= bound:
            best, best_dist = visit(far, depth + 1, best, best_dist)
        return best, best_dist

    best, best_dist = visit(index.root, 0, index.root.location, MAX_DISTANCE_MILES)
    if best_dist >= MAX_DISTANCE_MILES:
        return None
    return NearestResult(location=best, distance_miles=best_dist)


def nearby(index: SpatialIndex, query: tuple[float, float], radius_miles: float) -> set[Coordinate]:
    """
    All indexed points strictly closer than radius_miles to query, excluding
    query itself. Subtrees beyond the radius from a splitting line are skipped.
    """
    found: set[Coordinate] = set()
    if index.root is None:
        return found
    q = Coordinate(float(query[0]), float(query[1]))
    prune = index.well_formed and is_well_formed(q)

    def visit(node: Node | None, depth: int) -> None:
        if node is None:
            return
        if node.location != q and haversine(q, node.location) < radius_miles:
            found.add(node.location)
        axis = axis_for_depth(depth)
        near, far = _children(node, q, axis)
        visit(near, depth + 1)
        if far is not None and _split_bound(q, node.location, axis, prune) < radius_miles:
            visit(far, depth + 1)

    visit(index.root, 0)
    return found


def iter_locations(root: Node | None) -> Iterator[Coordinate]:
    """Pre-order walk of node locations."""
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node.location
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def node_count(root: Node | None) -> int:
    return sum(1 for _ in iter_locations(root))


def tree_height(root: Node | None) -> int:
    """Number of levels; 0 for an empty tree."""
    if root is None:
        return 0
    return 1 + max(tree_height(root.left), tree_height(root.right))

