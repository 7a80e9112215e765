from __future__ import annotations

from typing import Any, Mapping, Optional
import logging

from pydantic import ValidationError

from json2csv.errors import ConfigError
from json2csv.schemas.models import ConvertOptions
from json2csv.pipeline.emit import render_document
from json2csv.pipeline.expand import unwind_rows
from json2csv.pipeline.loader import normalize_data
from json2csv.pipeline.params import normalize_params

logger = logging.getLogger(__name__)


def build_options(options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> ConvertOptions:
    """Validate caller options; keyword arguments override mapping entries.

    The caller's mapping is read, never modified.
    """
    if isinstance(options, ConvertOptions) and not kwargs:
        return options
    if isinstance(options, ConvertOptions):
        merged = options.model_dump(exclude_unset=True)
    else:
        merged = dict(options or {})
    merged.update(kwargs)

    unknown = sorted(k for k in merged if k not in ConvertOptions.option_names())
    if unknown:
        logger.warning("ignoring unknown option(s): %s", ", ".join(unknown))

    # an attribute name and its alias for the same option: the attribute name wins
    for name, info in ConvertOptions.model_fields.items():
        if info.alias and info.alias != name and name in merged and info.alias in merged:
            merged.pop(info.alias)

    try:
        return ConvertOptions.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid options: {e}") from e


def convert(data: Any, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> str:
    """Convert a JSON-like value (object or array of objects) to CSV text.

    Options use the documented names (``fields``, ``fieldNames``, ``del``,
    ``defaultValue``, ``quotes``, ``doubleQuotes``, ``hasCSVColumnTitle``,
    ``eol``, ``newLine``, ``flatten``, ``unwindPath``, ``excelStrings``,
    ``includeEmptyRows``) or their snake_case keyword forms
    (``delimiter=`` for ``del``).

    Raises TypeKindError for non object/array input and ConfigError when the
    fields cannot be resolved. Exceptions from computed fields propagate.
    """
    opts = build_options(options, **kwargs)

    rows = normalize_data(data, flatten=opts.flatten)
    params = normalize_params(opts, rows)
    expanded = unwind_rows(rows, params.unwind_path)
    return render_document(expanded, params, rows)
