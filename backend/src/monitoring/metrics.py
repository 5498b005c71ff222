"""In-process counters for the /metrics endpoint: HTTP status classes and geofilter runs."""
import time
from collections.abc import MutableMapping
from threading import Lock

_start_time = time.monotonic()
_counts: MutableMapping[str, int] = {}
_lock = Lock()


def _status_bucket(status_code: int) -> str:
    if 200 <= status_code < 300:
        return "2xx"
    if 400 <= status_code < 500:
        return "4xx"
    if status_code >= 500:
        return "5xx"
    return "other"


def _incr(key: str, amount: int = 1) -> None:
    with _lock:
        _counts[key] = _counts.get(key, 0) + amount


def record_request(status_code: int) -> None:
    _incr(f"requests_{_status_bucket(status_code)}")


def record_filter_run(parsed: int, retained: int, fault: str | None = None) -> None:
    """Count one pipeline run. fault is "parse", "unexpected" or None."""
    with _lock:
        for key, amount in (
            ("runs_total", 1),
            ("records_parsed", parsed),
            ("records_retained", retained),
        ):
            _counts[key] = _counts.get(key, 0) + amount
        if fault:
            key = f"{fault}_faults"
            _counts[key] = _counts.get(key, 0) + 1


def reset_metrics() -> None:
    with _lock:
        _counts.clear()


def get_metrics() -> dict:
    with _lock:
        counts = dict(_counts)
    requests_total = sum(v for k, v in counts.items() if k.startswith("requests_"))
    return {
        "requests_total": requests_total,
        "requests_2xx": counts.get("requests_2xx", 0),
        "requests_4xx": counts.get("requests_4xx", 0),
        "requests_5xx": counts.get("requests_5xx", 0),
        "geofilter": {
            "runs_total": counts.get("runs_total", 0),
            "parse_faults": counts.get("parse_faults", 0),
            "unexpected_faults": counts.get("unexpected_faults", 0),
            "records_parsed": counts.get("records_parsed", 0),
            "records_retained": counts.get("records_retained", 0),
        },
        "uptime_seconds": round(time.monotonic() - _start_time, 1),
    }
