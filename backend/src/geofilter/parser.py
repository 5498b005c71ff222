"""
JSON Lines parser: one customer object per non-blank line.
"""
import json
import sys
from typing import Any, IO, Iterator

from src.geofilter.errors import ParseFault

RawRecord = dict[str, Any]

_UTF8_BOM = "\ufeff"


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def _decode(line: bytes | str) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8")
    return line


def _reject_unencodable(value: Any, line_number: int) -> None:
    # json.loads accepts escaped lone surrogates ("\ud800"), which cannot be written back out as UTF-8
    try:
        json.dumps(value, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseFault(line_number, f"invalid unicode escape: {e.reason}") from e


def parse_line(line: str, line_number: int) -> RawRecord:
    """Parse one non-blank line into a record with interned keys."""
    try:
        value = json.loads(line, parse_constant=_reject_constant)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError subclass
        raise ParseFault(line_number, str(e)) from e
    if not isinstance(value, dict):
        raise ParseFault(line_number, f"expected a JSON object, got {type(value).__name__}")
    _reject_unencodable(value, line_number)
    return {sys.intern(key): item for key, item in value.items()}


def iter_records(stream: IO[bytes] | IO[str]) -> Iterator[RawRecord]:
    """
    Yield one record per non-blank line of stream.
    Stops at the first malformed line by raising ParseFault; blank lines are skipped.
    The caller owns the stream and is responsible for closing it.
    """
    lines = iter(stream)
    line_number = 0
    while True:
        line_number += 1
        # Text streams decode while reading, byte streams in _decode
        try:
            raw_line = next(lines)
            line = _decode(raw_line)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise ParseFault(line_number, f"invalid UTF-8: {e.reason}") from e
        if line_number == 1:
            line = line.removeprefix(_UTF8_BOM)
        if not line.strip():
            continue
        yield parse_line(line, line_number)
