"""In-memory index metrics: builds, query counts and query time per kind."""
import time
from collections.abc import MutableMapping
from threading import Lock

_start_time = time.monotonic()
_query_counts: MutableMapping[str, int] = {}
_query_ms: MutableMapping[str, float] = {}
_builds = 0
_index_size = 0
_lock = Lock()


def record_build(size: int) -> None:
    global _builds, _index_size
    with _lock:
        _builds += 1
        _index_size = size


def record_query(kind: str, duration_ms: float) -> None:
    with _lock:
        _query_counts[kind] = _query_counts.get(kind, 0) + 1
        _query_ms[kind] = _query_ms.get(kind, 0.0) + duration_ms


def get_metrics() -> dict:
    with _lock:
        counts = dict(_query_counts)
        total_ms = dict(_query_ms)
        builds = _builds
        size = _index_size
    uptime_seconds = time.monotonic() - _start_time
    return {
        "builds_total": builds,
        "index_size": size,
        "queries_total": sum(counts.values()),
        "queries_nearest": counts.get("nearest", 0),
        "queries_nearby": counts.get("nearby", 0),
        "query_ms_nearest": round(total_ms.get("nearest", 0.0), 3),
        "query_ms_nearby": round(total_ms.get("nearby", 0.0), 3),
        "uptime_seconds": round(uptime_seconds, 1),
    }


def reset_metrics() -> None:
    global _builds, _index_size
    with _lock:
        _query_counts.clear()
        _query_ms.clear()
        _builds = 0
        _index_size = 0
