from __future__ import annotations
import json, pathlib
from typing import Any, List

from json2csv.errors import LineParseError


def parse_ldjson(text: str) -> List[Any]:
    """Parse line-delimited JSON: one value per non-empty line."""
    rows = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            rows.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise LineParseError(lineno, e.msg) from e
    return rows


def read_json_input(path: str, ndjson: bool = False) -> Any:
    p = pathlib.Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    text = p.read_text(encoding="utf-8")
    if ndjson:
        return parse_ldjson(text)
    return json.loads(text)


def write_csv_text(path: str, text: str) -> None:
    p = pathlib.Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the document's own line terminators
    with p.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
