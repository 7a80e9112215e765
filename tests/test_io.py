import pytest

from json2csv.data.io import parse_ldjson, read_json_input, write_csv_text
from json2csv.errors import LineParseError


def test_parse_ldjson():
    rows = parse_ldjson('{"foo":"bar"}\n{"foo":"qux"}')
    assert rows == [{"foo": "bar"}, {"foo": "qux"}]


def test_parse_ldjson_skips_blank_lines():
    assert parse_ldjson('\n{"a":1}\n\n   \n{"a":2}\n') == [{"a": 1}, {"a": 2}]
    assert parse_ldjson("") == []


def test_parse_ldjson_reports_line_number():
    with pytest.raises(LineParseError) as exc:
        parse_ldjson('{"a":1}\n{"a":\n{"a":3}')
    assert exc.value.lineno == 2
    assert str(exc.value).startswith("line 2:")


def test_read_json_input(tmp_path):
    p = tmp_path / "in.json"
    p.write_text('[{"a": 1}]', encoding="utf-8")
    assert read_json_input(str(p)) == [{"a": 1}]

    nd = tmp_path / "in.ndjson"
    nd.write_text('{"a": 1}\n{"a": 2}\n', encoding="utf-8")
    assert read_json_input(str(nd), ndjson=True) == [{"a": 1}, {"a": 2}]

    with pytest.raises(FileNotFoundError):
        read_json_input(str(tmp_path / "missing.json"))


def test_write_csv_text_keeps_line_endings(tmp_path):
    out = tmp_path / "sub" / "out.csv"
    write_csv_text(str(out), '"a"\r\n1')
    assert out.read_bytes() == b'"a"\r\n1'
