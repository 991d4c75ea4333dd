"""Deterministic value formatting shared by every diagnostic message."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence, Set as AbstractSet
from typing import Any


_ESCAPES = (
    ('"', '\\"'),
    ("\r", "\\r"),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\0", "\\0"),
)

ELLIPSIS = "..."


def type_name(t: type) -> str:
    """Qualified name of a type; builtins are left unqualified."""
    if t.__module__ == "builtins":
        return t.__qualname__
    return f"{t.__module__}.{t.__qualname__}"


def format_value(value: Any) -> str:
    """Format any value for display in a failure message.

    >>> format_value(None)
    'null'
    >>> format_value({"a": [1, True]})
    '{{ "a", [1, True] }}'
    """
    if value is None:
        return "null"

    if isinstance(value, str):
        for raw, escaped in _ESCAPES:
            value = value.replace(raw, escaped)
        return f'"{value}"'

    if isinstance(value, (bool, int)):
        return str(value)

    if isinstance(value, Mapping):
        entries = (f"{{ {format_value(k)}, {format_value(v)} }}" for k, v in value.items())
        return "{" + ", ".join(entries) + "}"

    if isinstance(value, BaseException):
        return f"[{type_name(type(value))}] {value}"

    if isinstance(value, AbstractSet):
        # Hash order varies between processes; sort by rendered text.
        return "[" + ", ".join(sorted(format_value(v) for v in value)) + "]"

    if isinstance(value, Iterable):
        return "[" + ", ".join(format_value(v) for v in value) + "]"

    return f"[{type_name(type(value))}] {value}"


def format_arguments(arguments: Sequence[Any] | None) -> str:
    if arguments is None:
        return "()"
    return "(" + ", ".join(format_value(v) for v in arguments) + ")"


def format_target(target: Any) -> str | None:
    """Describe a scope for the verbose trace, e.g. ``test adds``."""
    kind = getattr(target, "kind", None)
    name = getattr(target, "name", None)
    if kind is None or name is None:
        return None
    return f"{kind.value} {name}"


def count_common_prefix(a: str, b: str, ignore_case: bool = False) -> int:
    """Length of the longest common prefix of two strings."""
    i = 0
    limit = min(len(a), len(b))
    while i < limit:
        x, y = a[i], b[i]
        if ignore_case:
            x, y = x.upper(), y.upper()
        if x != y:
            break
        i += 1
    return i


def string_extract(s: str, offset: int) -> str:
    """Window of ``s`` around ``offset`` short enough to show on one line."""
    if offset > 15:
        s = ELLIPSIS + s[offset - 10 :]
    if len(s) > 30:
        s = s[:20] + ELLIPSIS
    return s


__all__ = [
    "count_common_prefix",
    "format_arguments",
    "format_target",
    "format_value",
    "string_extract",
    "type_name",
]
