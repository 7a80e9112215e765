from typing import Any, List, Optional
from copy import deepcopy
import logging

from .mapping import get_at, with_set
from .types import MISSING

logger = logging.getLogger(__name__)


def unwind_row(row: Any, path: str) -> List[Any]:
    vals = get_at(row, path, MISSING)
    if not isinstance(vals, (list, tuple)):
        return [row]
    if not vals:
        return [with_set(deepcopy(row), path, MISSING)]
    out = []
    for v in vals:
        out.append(with_set(deepcopy(row), path, deepcopy(v)))
    return out


def unwind_rows(rows: List[Any], path: Optional[str]) -> List[Any]:
    """Fan each row out over the array at `path` (one row per element)."""
    if not path:
        return rows
    out = []
    for row in rows:
        out.extend(unwind_row(row, path))
    logger.debug("unwind %r: %d row(s) -> %d row(s)", path, len(rows), len(out))
    return out
