from src.monitoring.metrics import get_metrics, record_filter_run, record_request, reset_metrics

__all__ = ["get_metrics", "record_filter_run", "record_request", "reset_metrics"]
