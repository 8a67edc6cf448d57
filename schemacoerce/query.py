"""Path-based lookup, removal and insertion on JSON-like documents.

A path is either a ``/``-separated string (the empty string is the empty
path) or an iterable of key strings. Only JSON objects (``dict``) can be
descended into. Every operation leaves its input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Union

PathLike = Union[str, Iterable[str]]

__all__ = ["MISSING", "InsertError", "split_path", "lookup", "take", "insert"]


class _Missing:
    """Marks the absence of a value, which JSON ``null`` (``None``) cannot."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class InsertError(Exception):
    """Raised when a value cannot be placed under the requested path."""

    def __init__(self, insertee: Any, path: list[str]) -> None:
        super().__init__(
            f"cannot insert under {'/'.join(path)!r}: path crosses a non-object node"
        )
        self.insertee = insertee
        self.path = path


def split_path(path: PathLike) -> list[str]:
    """Return the components of *path*; the empty string yields no components."""
    if isinstance(path, str):
        return path.split("/") if path else []
    return list(path)


def lookup(value: Any, path: PathLike) -> Any:
    """Return the element of *value* under *path*.

    Raises ``KeyError`` when the path does not lead to an element.
    """
    components = split_path(path)
    node = value
    for depth, key in enumerate(components):
        if not isinstance(node, dict) or key not in node:
            raise KeyError("/".join(components[: depth + 1]))
        node = node[key]
    return node


def take(value: Any, path: PathLike) -> tuple[Any, Any]:
    """Split the element under *path* out of *value*.

    Returns ``(remainder, taken)``. Either may be ``MISSING``: the remainder
    when nothing is left (the whole value was taken, or an object on the way
    became empty), the taken element when the path leads nowhere.
    """
    return _take(value, split_path(path))


def _take(value: Any, components: list[str]) -> tuple[Any, Any]:
    if not components:
        return MISSING, value
    if not isinstance(value, dict):
        return value, MISSING
    key, rest = components[0], components[1:]
    if key not in value:
        return value, MISSING

    child_remainder, taken = _take(value[key], rest)
    fields = dict(value)
    if child_remainder is MISSING:
        del fields[key]
    else:
        fields[key] = child_remainder
    if not fields:
        return MISSING, taken
    return fields, taken


def insert(value: Any, path: PathLike, insertee: Any) -> Any:
    """Return a copy of *value* with *insertee* placed under *path*.

    Missing objects along the path are created. Raises ``InsertError`` when
    the path passes through a node that is not an object.
    """
    components = split_path(path)
    try:
        return _insert(value, components, insertee)
    except _Rejected:
        raise InsertError(insertee, components) from None


class _Rejected(Exception):
    pass


def _insert(value: Any, components: list[str], insertee: Any) -> Any:
    if not components:
        return insertee
    if not isinstance(value, dict):
        raise _Rejected
    key, rest = components[0], components[1:]
    fields = dict(value)
    fields[key] = _insert(fields.get(key, {}), rest, insertee)
    return fields