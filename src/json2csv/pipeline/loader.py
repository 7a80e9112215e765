from __future__ import annotations
from typing import Any, List, Mapping
import logging

from json2csv.errors import TypeKindError
from .mapping import flatten_row

logger = logging.getLogger(__name__)


def normalize_data(data: Any, flatten: bool = False) -> List[Any]:
    """Coerce input into a list of rows.

    - a single mapping becomes a one-row list
    - None (JSON null) is an empty list
    - None entries are kept; they render as nothing
    - with `flatten`, nested rows are collapsed into dotted keys
    """
    if data is None:
        data = []
    elif isinstance(data, Mapping):
        data = [data]
    elif not isinstance(data, (list, tuple)):
        raise TypeKindError("Data needs to be an object or array")

    rows = list(data)
    for i, row in enumerate(rows):
        if row is not None and not isinstance(row, (Mapping, list, tuple)):
            raise TypeKindError(
                f"Row {i} needs to be an object or array, got {type(row).__name__}"
            )

    if flatten:
        rows = [flatten_row(r) for r in rows]

    logger.debug("normalized %d row(s) (flatten=%s)", len(rows), flatten)
    return rows
