"""Tests for the JSON Lines parser: blank lines, fail-fast and key normalization."""
import io

import pytest

from src.geofilter.errors import ParseFault
from src.geofilter.parser import iter_records, parse_line


def test_parses_one_record_per_line():
    stream = io.StringIO('{"user_id": 1, "name": "A"}\n{"user_id": 2, "name": "B"}\n')
    records = list(iter_records(stream))
    assert records == [{"user_id": 1, "name": "A"}, {"user_id": 2, "name": "B"}]


def test_skips_blank_and_whitespace_lines():
    stream = io.StringIO('\n{"user_id": 1}\n   \n\t\n{"user_id": 2}\n\n')
    assert [r["user_id"] for r in iter_records(stream)] == [1, 2]


def test_accepts_bytes_stream_and_crlf():
    stream = io.BytesIO(b'{"user_id": 1, "name": "Jos\xc3\xa9"}\r\n\r\n{"user_id": 2}\r\n')
    records = list(iter_records(stream))
    assert records[0]["name"] == "José"
    assert records[1] == {"user_id": 2}


def test_strips_utf8_bom_on_first_line():
    stream = io.BytesIO(b'\xef\xbb\xbf{"user_id": 1}\n')
    assert list(iter_records(stream)) == [{"user_id": 1}]


def test_last_line_without_newline():
    stream = io.StringIO('{"user_id": 1}\n{"user_id": 2}')
    assert len(list(iter_records(stream))) == 2


def test_is_lazy_and_fails_at_malformed_line():
    stream = io.StringIO('{"user_id": 1}\n{not json}\n{"user_id": 3}\n')
    records = iter_records(stream)
    assert next(records) == {"user_id": 1}
    with pytest.raises(ParseFault) as excinfo:
        next(records)
    assert excinfo.value.line_number == 2


def test_line_number_counts_blank_lines():
    stream = io.StringIO('{"user_id": 1}\n\n\n[')
    with pytest.raises(ParseFault) as excinfo:
        list(iter_records(stream))
    assert excinfo.value.line_number == 4


@pytest.mark.parametrize("line", ["[1, 2]", '"text"', "42", "null", "true"])
def test_non_object_json_is_parse_fault(line):
    with pytest.raises(ParseFault) as excinfo:
        parse_line(line, 1)
    assert "expected a JSON object" in excinfo.value.reason


@pytest.mark.parametrize("line", ['{"latitude": NaN}', '{"latitude": Infinity}', '{"latitude": -Infinity}'])
def test_non_standard_constants_rejected(line):
    with pytest.raises(ParseFault):
        parse_line(line, 1)


def test_invalid_utf8_is_parse_fault():
    stream = io.BytesIO(b'{"user_id": 1}\n{"name": "\xff"}\n')
    with pytest.raises(ParseFault) as excinfo:
        list(iter_records(stream))
    assert excinfo.value.line_number == 2


def test_keys_are_interned():
    import sys
    record = parse_line('{"latitude": "1.0"}', 1)
    (key,) = record.keys()
    assert key is sys.intern("latitude")


def test_parse_fault_message_includes_line():
    with pytest.raises(ParseFault, match=r"^line 7: "):
        parse_line("{", 7)


def test_invalid_utf8_in_text_stream_is_parse_fault():
    stream = io.TextIOWrapper(io.BytesIO(b'{"user_id": 1}\n{"name": "\xff"}\n'), encoding="utf-8")
    with pytest.raises(ParseFault) as excinfo:
        list(iter_records(stream))
    assert "invalid UTF-8" in excinfo.value.reason


@pytest.mark.parametrize(
    "line",
    [
        '{"user_id": 1, "name": "\\ud800"}',
        '{"user_id": 1, "name": "ok", "tags": ["\\udfff"]}',
        '{"\\ud800": 1}',
    ],
)
def test_lone_surrogate_escape_is_parse_fault(line):
    with pytest.raises(ParseFault) as excinfo:
        parse_line(line, 3)
    assert excinfo.value.line_number == 3


def test_surrogate_pair_escape_is_accepted():
    record = parse_line('{"name": "\\ud83d\\ude00"}', 1)
    assert record["name"] == "\U0001F600"
