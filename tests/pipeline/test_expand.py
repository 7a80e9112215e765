from json2csv.pipeline.expand import unwind_row, unwind_rows
from json2csv.pipeline.types import MISSING


def test_unwind_fans_out_in_array_order():
    row = {"id": 1, "colors": ["red", "blue"]}
    out = unwind_row(row, "colors")
    assert out == [{"id": 1, "colors": "red"}, {"id": 1, "colors": "blue"}]


def test_unwind_empty_array_yields_one_missing_row():
    out = unwind_row({"id": 1, "colors": []}, "colors")
    assert len(out) == 1
    assert out[0]["colors"] is MISSING
    assert out[0]["id"] == 1


def test_unwind_non_array_passes_through_unchanged():
    scalar = {"id": 1, "colors": "red"}
    absent = {"id": 2}
    assert unwind_row(scalar, "colors")[0] is scalar
    assert unwind_row(absent, "colors")[0] is absent
    assert unwind_rows([None], "colors") == [None]


def test_unwind_rows_are_deep_copies():
    src = {"id": 1, "meta": {"k": "v"}, "items": [{"n": 1}, {"n": 2}]}
    out = unwind_rows([src], "items")

    out[0]["meta"]["k"] = "changed"
    out[1]["items"]["n"] = 99

    assert src == {"id": 1, "meta": {"k": "v"}, "items": [{"n": 1}, {"n": 2}]}
    assert out[1]["meta"]["k"] == "v"


def test_unwind_keeps_rows_contiguous_and_ordered():
    rows = [
        {"id": "a", "xs": [1, 2]},
        {"id": "b", "xs": []},
        {"id": "c", "xs": [3]},
    ]
    out = unwind_rows(rows, "xs")
    assert [(r["id"], r["xs"]) for r in out] == [
        ("a", 1), ("a", 2), ("b", MISSING), ("c", 3),
    ]


def test_unwind_nested_path():
    row = {"order": {"lines": [{"sku": "x"}, {"sku": "y"}]}}
    out = unwind_rows([row], "order.lines")
    assert [r["order"]["lines"]["sku"] for r in out] == ["x", "y"]


def test_no_unwind_path_returns_rows():
    rows = [{"a": [1, 2]}]
    assert unwind_rows(rows, None) is rows
