from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, List, Mapping
import json
import logging
import math
import re

from .mapping import get_at
from .params import NormalizedParams
from .types import MISSING, FieldSpec, PathField

logger = logging.getLogger(__name__)

# the two escapes json.dumps adds that are not part of the value's text
_QUOTE_OR_BACKSLASH_ESCAPE = re.compile(r'\\(["\\])')


# ============================================================================
# Value → literal
# ============================================================================

def _json_default(o: Any):
    if isinstance(o, (datetime, date, time)):
        return o.isoformat()
    if o is MISSING:
        return None
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def to_literal(val: Any) -> str:
    """JSON literal of `val`: compact, non-ASCII kept, dates as ISO strings.

    Integral floats print without a fraction (1.0 -> 1).
    """
    if isinstance(val, float):
        if not math.isfinite(val):
            return "null"
        if val.is_integer() and abs(val) < 1e21:
            return str(int(val))
    return json.dumps(val, ensure_ascii=False, separators=(",", ":"), default=_json_default)


def _is_object(val: Any) -> bool:
    return isinstance(val, (Mapping, list, tuple))


def _is_string_literal(literal: str) -> bool:
    return len(literal) >= 2 and literal[0] == '"' and literal[-1] == '"'


def literal_body(literal: str) -> str:
    """Text inside a JSON string literal, with only \\" and \\\\ undone.

    Other escapes (\\n, \\t, \\uXXXX) stay as written.
    """
    return _QUOTE_OR_BACKSLASH_ESCAPE.sub(r"\1", literal[1:-1])


def quote_text(text: str, params: NormalizedParams) -> str:
    """Wrap `text` in the quote char, doubling embedded quote chars."""
    if not params.quotes:
        return text
    return params.quotes + text.replace(params.quotes, params.double_quotes) + params.quotes


def render_cell(val: Any, params: NormalizedParams) -> str:
    """Render one defined value into its cell text.

    Objects and arrays are serialized twice so their JSON ends up as one
    quoted string cell. Numbers, booleans and null stay bare.
    """
    literal = to_literal(val)
    if _is_object(val):
        literal = json.dumps(literal, ensure_ascii=False)
    if not _is_string_literal(literal):
        return literal

    text = literal_body(literal)
    if params.excel_strings and isinstance(val, str):
        text = '="' + text.replace('"', '""') + '"'
    return quote_text(text, params)


# ============================================================================
# Rows
# ============================================================================

def field_default(field: FieldSpec, params: NormalizedParams) -> Any:
    return params.default_value if field.default is MISSING else field.default


def resolve_value(row: Any, field: FieldSpec, params: NormalizedParams, all_rows: List[Any]) -> Any:
    default = field_default(field, params)
    if isinstance(field, PathField):
        val = get_at(row, field.path, default)
    else:
        meta = {"label": field.label, "default": field.default}
        val = field.fn(row, meta, all_rows)
    if val is None or val is MISSING:
        val = default
    return val


def render_row(row: Any, params: NormalizedParams, all_rows: List[Any]) -> str:
    cells = []
    for field in params.fields:
        val = resolve_value(row, field, params, all_rows)
        # undefined leaves the cell bare; "" still renders as a quoted empty string
        cells.append("" if val is MISSING else render_cell(val, params))
    return params.delimiter.join(cells)


def render_header(params: NormalizedParams) -> str:
    return params.delimiter.join(
        quote_text(literal_body(to_literal(str(title))), params) for title in params.titles
    )


def is_renderable(row: Any, include_empty_rows: bool) -> bool:
    if row is None:
        return False
    if len(row) == 0:
        return include_empty_rows
    return True


# ============================================================================
# Document
# ============================================================================

def render_document(rows: List[Any], params: NormalizedParams, all_rows: List[Any]) -> str:
    """Assemble header and data lines.

    `rows` are the (unwound) rows to render; `all_rows` is what computed
    fields receive as their third argument.
    """
    lines: List[str] = []
    if params.has_csv_column_title and params.fields:
        lines.append(render_header(params))

    skipped = 0
    for row in rows:
        if not is_renderable(row, params.include_empty_rows):
            skipped += 1
            continue
        lines.append(render_row(row, params, all_rows))

    logger.debug("rendered %d line(s), skipped %d row(s)", len(lines), skipped)
    return params.new_line.join(line + params.eol for line in lines)
