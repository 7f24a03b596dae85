from geoindex.monitoring.metrics import get_metrics, record_build, record_query, reset_metrics

__all__ = ["get_metrics", "record_build", "record_query", "reset_metrics"]
