from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union


class _Missing:
    """Marker for an undefined value; distinct from None (JSON null)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    # unwound rows are deep-copied; the marker must stay the same object
    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()

PathSegment = Union[str, int]
KeyPath = Tuple[PathSegment, ...]


@dataclass(frozen=True)
class PathField:
    path: str                   # dotted/bracket path, e.g. "car.make" or "colors[0]"
    label: Optional[str] = None
    default: Any = MISSING


@dataclass(frozen=True)
class ComputedField:
    fn: Callable[[Any, dict, List[Any]], Any]   # (row, {"label", "default"}, all_rows)
    label: str
    default: Any = MISSING


FieldSpec = Union[PathField, ComputedField]
