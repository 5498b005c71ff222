"""
Customer geofilter pipeline: parse -> radius filter -> project and sort.
Stateless; every call owns its input stream and output list.
"""
import logging
from contextlib import closing
from typing import IO, Any, Iterable, Mapping, NamedTuple

from src.geofilter.coerce import parse_int_or_default
from src.geofilter.errors import ParseFault, UnexpectedFault
from src.geofilter.geo import GeoFilter, ReferencePoint
from src.geofilter.parser import iter_records
from src.monitoring.metrics import record_filter_run

logger = logging.getLogger(__name__)


class CustomerResult(NamedTuple):
    id: int
    name: str


def _name(raw_value: Any) -> str:
    if raw_value is None:
        return ""
    return raw_value if isinstance(raw_value, str) else str(raw_value)


def project_and_sort(records: Iterable[Mapping[str, Any]]) -> list[CustomerResult]:
    """
    Reduce records to (id, name) and order by id ascending.
    Equal ids keep their input order: position is part of the sort key.
    """
    projected = [
        (parse_int_or_default(r.get("user_id")), position, _name(r.get("name")))
        for position, r in enumerate(records)
    ]
    projected.sort(key=lambda item: (item[0], item[1]))
    return [CustomerResult(id=customer_id, name=name) for customer_id, _, name in projected]


def filter_customers(stream: IO[bytes] | IO[str], reference: ReferencePoint) -> list[CustomerResult]:
    """
    Return customers in stream within reference.radius_km of the reference point.

    The whole file is consumed before anything is returned. The stream is closed
    on every path. Raises ParseFault for a malformed line; any other failure is
    raised as UnexpectedFault with the original exception as its cause.
    """
    geofilter = GeoFilter(reference)
    parsed = 0
    try:
        with closing(stream):
            retained = []
            for record in iter_records(stream):
                parsed += 1
                if geofilter.contains(record):
                    retained.append(record)
        results = project_and_sort(retained)
    except ParseFault as e:
        logger.warning("telemetry geofilter_parse_fault line=%s reason=%s", e.line_number, e.reason)
        record_filter_run(parsed=parsed, retained=0, fault="parse")
        raise
    except Exception as e:
        record_filter_run(parsed=parsed, retained=0, fault="unexpected")
        raise UnexpectedFault(f"geofilter failed after {parsed} records: {e}") from e
    logger.info("telemetry geofilter_run parsed=%s retained=%s", parsed, len(results))
    record_filter_run(parsed=parsed, retained=len(results))
    return results
