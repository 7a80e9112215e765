from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union
import re

from .types import MISSING, KeyPath, PathSegment

# tokens like "car", "[0]" or '["odd.key"]'
_TOKEN = re.compile(r"""[^.\[\]]+|\[(?:(\d+)|(["'])(.*?)\2)\]""")


def parse_path(path: str) -> KeyPath:
    """Split a dotted/bracket path into segments.

    Examples:
      parse_path("car.make")           -> ("car", "make")
      parse_path("colors[0].name")     -> ("colors", 0, "name")
      parse_path('meta["a.b"]')        -> ("meta", "a.b")
    """
    segs: List[PathSegment] = []
    for m in _TOKEN.finditer(path):
        index, _, quoted = m.groups()
        if index is not None:
            segs.append(int(index))
        elif quoted is not None:
            segs.append(quoted)
        else:
            segs.append(m.group(0))
    return tuple(segs)


def _as_path(path: Union[str, KeyPath]) -> KeyPath:
    return parse_path(path) if isinstance(path, str) else tuple(path)


def _is_seq(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def _as_index(seg: PathSegment):
    if isinstance(seg, int):
        return seg
    if seg.isdigit():
        return int(seg)
    return None


def _step(node: Any, seg: PathSegment):
    if isinstance(node, Mapping):
        if seg in node:
            return node[seg]
        if isinstance(seg, int) and str(seg) in node:
            return node[str(seg)]
        return MISSING
    if _is_seq(node):
        idx = _as_index(seg)
        if idx is not None and idx < len(node):
            return node[idx]
    return MISSING


def get_at(doc: Any, path: Union[str, KeyPath], default: Any = None) -> Any:
    """Read the value at `path`; return `default` when any segment is missing.

    A string path that is itself a key of `doc` wins over splitting it, so
    flattened rows ({"car.make": ...}) resolve the same way as nested ones.
    """
    if isinstance(path, str) and isinstance(doc, Mapping) and path in doc:
        cur = doc[path]
    else:
        cur = doc
        for seg in _as_path(path):
            cur = _step(cur, seg)
            if cur is MISSING:
                break
    return default if cur is MISSING else cur


def _set_in(node: Any, segs: KeyPath, value: Any) -> Any:
    head, rest = segs[0], segs[1:]

    if _is_seq(node) and _as_index(head) is not None:
        out: Any = list(node)
        idx = _as_index(head)
        if idx >= len(out):
            out.extend([MISSING] * (idx + 1 - len(out)))
        child = out[idx]
        out[idx] = _set_in(child, rest, value) if rest else value
        return out

    if isinstance(node, Mapping):
        out = dict(node)
    elif isinstance(head, int):
        # nothing to descend into; build the container the segment asks for
        return _set_in([], segs, value)
    else:
        out = {}

    key = str(head) if isinstance(head, int) else head
    child = out.get(key, MISSING)
    out[key] = _set_in(child, rest, value) if rest else value
    return out


def with_set(doc: Any, path: Union[str, KeyPath], value: Any) -> Any:
    """Return a copy of `doc` with `value` stored at `path` (copy-on-write).

    Only the containers along the path are copied; missing intermediate
    containers are created (a list for an index segment, else a dict).
    """
    if isinstance(path, str) and isinstance(doc, Mapping) and path in doc:
        out = dict(doc)
        out[path] = value
        return out
    segs = _as_path(path)
    if not segs:
        return value
    return _set_in(doc, segs, value)


def flatten_row(row: Any, sep: str = ".") -> Any:
    """Collapse nested dicts/lists into one level of `sep`-joined keys.

    Depth-first, insertion-ordered. Empty dicts and lists stay as leaf
    values, and an already-flat row comes back equal to itself.
    """
    if row is None:
        return None

    out: Dict[str, Any] = {}

    def _walk(value: Any, prefix: str) -> None:
        if isinstance(value, Mapping) and value:
            items = value.items()
        elif _is_seq(value) and value:
            items = enumerate(value)
        else:
            out[prefix] = value
            return
        for k, v in items:
            _walk(v, f"{prefix}{sep}{k}" if prefix else str(k))

    if isinstance(row, Mapping) or _is_seq(row):
        if row:
            _walk(row, "")
        return out
    return row
