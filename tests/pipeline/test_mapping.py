from copy import deepcopy

from json2csv.pipeline.mapping import flatten_row, get_at, parse_path, with_set
from json2csv.pipeline.types import MISSING


def test_parse_path_segments():
    assert parse_path("car.make") == ("car", "make")
    assert parse_path("colors[0].name") == ("colors", 0, "name")
    assert parse_path('meta["a.b"].c') == ("meta", "a.b", "c")
    assert parse_path("first not exist field") == ("first not exist field",)


def test_get_at_nested_and_missing():
    doc = {"car": {"make": "Audi", "ye": {"ar": 2013}}, "colors": ["red", "blue"]}
    assert get_at(doc, "car.make") == "Audi"
    assert get_at(doc, "car.ye.ar") == 2013
    assert get_at(doc, "colors[1]") == "blue"
    assert get_at(doc, "colors.0") == "red"
    # missing intermediate objects never raise
    assert get_at(doc, "car.model.name", "n/a") == "n/a"
    assert get_at(doc, "colors[5]", "n/a") == "n/a"
    assert get_at(None, "a.b", 1) == 1
    assert get_at("scalar", "a", 1) == 1


def test_get_at_keeps_null_and_maps_missing_to_default():
    assert get_at({"a": None}, "a", "d") is None
    assert get_at({"a": MISSING}, "a", "d") == "d"


def test_get_at_prefers_literal_dotted_key():
    flat = {"car.make": "Audi", "car": {"make": "BMW"}}
    assert get_at(flat, "car.make") == "Audi"


def test_with_set_is_copy_on_write():
    doc = {"id": 1, "car": {"make": "Audi", "model": "A3"}, "tags": ["x"]}
    before = deepcopy(doc)

    out = with_set(doc, "car.make", "BMW")

    assert out["car"]["make"] == "BMW"
    assert out["car"]["model"] == "A3"
    assert doc == before
    # untouched branches are shared, touched ones are new
    assert out["tags"] is doc["tags"]
    assert out["car"] is not doc["car"]


def test_with_set_creates_intermediates():
    assert with_set({}, "a.b.c", 1) == {"a": {"b": {"c": 1}}}
    assert with_set({}, "a[1]", "x") == {"a": [MISSING, "x"]}
    assert with_set({"a": [1, 2]}, "a[0]", 9) == {"a": [9, 2]}


def test_flatten_row_nested_objects_and_arrays():
    row = {"a": {"b": 1, "c": {"d": 2}}, "e": [10, {"f": 3}], "g": "x"}
    assert flatten_row(row) == {"a.b": 1, "a.c.d": 2, "e.0": 10, "e.1.f": 3, "g": "x"}
    assert list(flatten_row(row)) == ["a.b", "a.c.d", "e.0", "e.1.f", "g"]


def test_flatten_row_keeps_empty_containers_and_is_idempotent():
    row = {"a": {}, "b": [], "c": {"d": None}}
    flat = flatten_row(row)
    assert flat == {"a": {}, "b": [], "c.d": None}
    assert flatten_row(flat) == flat
    assert flatten_row({}) == {}
    assert flatten_row(None) is None
