"""
Permissive field coercion for customer records.

Values arrive as JSON numbers, JSON strings, or not at all. Strings are read by
their leading numeric prefix ("19.07abc" -> 19.07); anything that yields no
number falls back to the default. Missing coordinates therefore become 0.0 and
are evaluated as the point (0, 0) rather than being rejected.
"""
import math
import re
from typing import Any

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_numeric_or_default(raw_value: Any, default: float = 0.0) -> float:
    """Coerce a latitude/longitude value to float, or return default."""
    # bool is an int subclass; JSON true/false are not coordinates
    if isinstance(raw_value, bool):
        return default
    if isinstance(raw_value, (int, float)):
        value = float(raw_value)
        return value if math.isfinite(value) else default
    if isinstance(raw_value, str):
        match = _FLOAT_PREFIX.match(raw_value)
        if match is None:
            return default
        value = float(match.group(1))
        return value if math.isfinite(value) else default
    return default


def parse_int_or_default(raw_value: Any, default: int = 0) -> int:
    """Coerce a customer id to int. Floats truncate toward zero."""
    if isinstance(raw_value, bool):
        return default
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, float):
        return int(raw_value) if math.isfinite(raw_value) else default
    if isinstance(raw_value, str):
        match = _INT_PREFIX.match(raw_value)
        return int(match.group(1)) if match else default
    return default
