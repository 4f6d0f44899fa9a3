from __future__ import annotations

from typing import Any, Sequence

import yaml

from relcheck.core.errors import InvalidPath, ParseError, UnexpectedType


Document = dict[str, Any]


def type_name(v: Any) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, int):
        return "integer"
    if isinstance(v, float):
        return "number"
    if isinstance(v, str):
        return "string"
    if isinstance(v, list):
        return "array"
    if isinstance(v, dict):
        return "object"
    return type(v).__name__


def parse_values(data: bytes, *, source: str = "<values>") -> Document | None:
    """Parse a YAML values/profile document into a plain dict tree.

    An empty document yields None. Anything but a mapping at the top level
    is rejected.
    """

    length = len(data)
    try:
        obj = yaml.safe_load(data)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        raise ParseError(
            source,
            length,
            str(e.problem or e.context or e),
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
        ) from e
    except yaml.YAMLError as e:
        raise ParseError(source, length, str(e)) from e

    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise ParseError(source, length, f"top-level value must be a mapping, got {type_name(obj)}")
    return obj


def resolve(document: Document | None, path: Sequence[str]) -> str | None:
    """Resolve a segmented path against an untyped map/list tree.

    A segment following a list is read as a zero-based index into that list;
    otherwise it is a map key. The first string reached is the result, even
    if segments remain. A missing key or an exhausted path yields None.
    """

    path = list(path)
    if not path:
        raise InvalidPath(None, path, "empty path")
    if document is None:
        raise InvalidPath(path[0], path, "path segment for null document")

    current: dict[Any, Any] = document
    pending: list[Any] | None = None
    for i, segment in enumerate(path):
        if pending is not None:
            if not (segment.isascii() and segment.isdigit()):
                raise InvalidPath(segment, path, "list requires integer path")
            index = int(segment)
            if index >= len(pending):
                raise InvalidPath(segment, path, f"list index out of range (len {len(pending)})")
            val = pending[index]
            pending = None
        else:
            if segment not in current:
                return None
            val = current[segment]

        if isinstance(val, str):
            return val
        if isinstance(val, dict):
            current = val
        elif isinstance(val, list):
            pending = val
        else:
            # Name the segment that cannot be applied: the next one, or this one at the end.
            offending = path[i + 1] if i + 1 < len(path) else segment
            raise UnexpectedType(offending, path, type_name(val))

    return None


def split_prefix(prefix: str, leaf: str) -> list[str]:
    """`"a.b"` + `"tag"` -> `["a", "b", "tag"]`; an empty prefix is just `[leaf]`."""

    if prefix == "":
        return [leaf]
    return prefix.split(".") + [leaf]
