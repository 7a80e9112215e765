from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Tuple
import logging

import yaml
from jinja2 import Template

from json2csv.errors import ConfigError
from .types import MISSING, ComputedField, FieldSpec, PathField

if TYPE_CHECKING:
    from json2csv.schemas.models import ConvertOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedParams:
    """Effective settings for one conversion, with every default filled in."""

    fields: Tuple[FieldSpec, ...]
    titles: Tuple[Any, ...]
    delimiter: str = ","
    default_value: Any = MISSING
    quotes: str = '"'
    double_quotes: str = '""'
    has_csv_column_title: bool = True
    eol: str = ""
    new_line: str = "\n"
    unwind_path: Optional[str] = None
    excel_strings: bool = False
    include_empty_rows: bool = False


# ============================================================================
# Field specs
# ============================================================================

def resolve_field(entry: Any) -> FieldSpec:
    """Turn one caller field entry into a PathField or ComputedField."""
    if isinstance(entry, (PathField, ComputedField)):
        if isinstance(entry, ComputedField) and not entry.label:
            raise ConfigError("Computed fields need an explicit label")
        return entry
    if isinstance(entry, str):
        return PathField(path=entry)
    if isinstance(entry, Mapping):
        if "value" not in entry:
            raise ConfigError(f"Field spec is missing 'value': {entry!r}")
        value = entry["value"]
        label = entry.get("label")
        default = entry["default"] if "default" in entry else MISSING
        if callable(value):
            if not label:
                raise ConfigError("Computed fields need an explicit label")
            return ComputedField(fn=value, label=label, default=default)
        if isinstance(value, str):
            return PathField(path=value, label=label, default=default)
        raise ConfigError(
            f"Field 'value' must be a path string or a callable; got {type(value).__name__}"
        )
    raise ConfigError(
        f"Field spec must be a string or a mapping; got {type(entry).__name__}"
    )


def infer_fields(rows: List[Any]) -> List[str]:
    """Union of top-level keys over all rows, in first-seen order."""
    records = [r for r in rows if isinstance(r, Mapping)]
    if not records:
        raise ConfigError(
            'params should include "fields" and/or non-empty "data" array of objects'
        )
    seen = {}
    for rec in records:
        for key in rec:
            seen.setdefault(key, None)
    return list(seen)


def _title(entry: Any, field: FieldSpec, field_names: Optional[List[Any]], i: int) -> Any:
    if field.label:
        return field.label
    if field_names is not None and isinstance(entry, str):
        return field_names[i]
    return field.path


def normalize_params(options: ConvertOptions, rows: List[Any]) -> NormalizedParams:
    entries = list(options.fields) if options.fields is not None else infer_fields(rows)

    if options.field_names is not None and len(options.field_names) != len(entries):
        raise ConfigError(
            "fieldNames and fields should be of the same length, if fieldNames is provided."
        )

    fields = [resolve_field(e) for e in entries]
    titles = [_title(e, f, options.field_names, i) for i, (e, f) in enumerate(zip(entries, fields))]

    double_quotes = options.double_quotes
    if double_quotes is None:
        double_quotes = options.quotes * 2

    logger.debug("resolved %d field(s): %s", len(fields), titles)
    return NormalizedParams(
        fields=tuple(fields),
        titles=tuple(titles),
        delimiter=options.delimiter,
        default_value=options.default_value,
        quotes=options.quotes,
        double_quotes=double_quotes,
        has_csv_column_title=options.has_csv_column_title,
        eol=options.eol,
        new_line=options.new_line,
        unwind_path=options.unwind_path or None,
        excel_strings=options.excel_strings,
        include_empty_rows=options.include_empty_rows,
    )


# ============================================================================
# YAML field-spec files
# ============================================================================

def expr_field(expr: str, label: str, default: Any = MISSING) -> ComputedField:
    """Build a computed field from a Jinja expression (without {{ }}).

    The expression sees `row`, `field` and `data`. An empty rendering, or
    "None", counts as a missing value.
    """
    template = Template("{{ " + expr + " }}")

    def _render(row, field, data):
        val = template.render(row=row, field=field, data=data)
        if val in ("", "None"):
            return MISSING
        return val

    return ComputedField(fn=_render, label=label, default=default)


def _field_from_yaml(entry: Any) -> Any:
    if isinstance(entry, Mapping) and "expr" in entry:
        label = entry.get("label")
        if not label:
            raise ConfigError(f"Expression field needs a 'label': {entry!r}")
        default = entry["default"] if "default" in entry else MISSING
        return expr_field(str(entry["expr"]), label=label, default=default)
    return entry


def load_field_specs(path: Path) -> List[Any]:
    """Read field specs from a YAML file.

    Accepts either a bare list or a mapping with a `fields` list:

      fields:
        - carModel
        - { label: Make, value: car.make }
        - { label: Price, value: price, default: 0 }
        - { label: Full name, expr: "row.first ~ ' ' ~ row.last" }
    """
    path = Path(path).expanduser()
    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f)

    entries = doc.get("fields") if isinstance(doc, Mapping) else doc
    if not isinstance(entries, list):
        raise ConfigError(f"{path}: expected a list of fields")
    return [_field_from_yaml(e) for e in entries]
