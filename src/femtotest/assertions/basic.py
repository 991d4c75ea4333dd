"""Scalar, string, type and exception assertions."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, TypeVar

from femtotest.assertions._base import (
    AssertionFailedError,
    _pair_message,
    check,
    fail,
    values_equal,
)
from femtotest.formatting import count_common_prefix, format_value, string_extract, type_name


E = TypeVar("E", bound=BaseException)

# Width of the "  lhs: " label that precedes each extract.
_LABEL_WIDTH = 7


def is_true(test: bool) -> None:
    __tracebackhide__ = True
    check(bool(test), lambda: "Expression is not true")


def is_false(test: bool) -> None:
    __tracebackhide__ = True
    check(not test, lambda: "Expression is not false")


def are_same(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    check(a is b, lambda: "Object references are not the same")


def are_not_same(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    check(a is not b, lambda: "Object references are the same")


def _fold(s: str, ignore_case: bool) -> str:
    return s.upper() if ignore_case else s


def string_diff_message(a: str, b: str, ignore_case: bool = False) -> str:
    """Describe where two strings first differ, with a caret under the spot."""
    offset = count_common_prefix(a, b, ignore_case)
    xa = format_value(string_extract(a, offset))
    xb = format_value(string_extract(b, offset))
    caret = " " * (count_common_prefix(xa, xb, ignore_case) + _LABEL_WIDTH)
    return f"Strings are not equal at offset {offset}\n  lhs: {xa}\n  rhs: {xb}\n{caret}^"


def are_equal(
    a: Any,
    b: Any,
    *,
    within: float | None = None,
    ignore_case: bool = False,
) -> None:
    """Assert ``a`` equals ``b``.

    Args:
        within: Numeric tolerance; passes when ``abs(a - b) < within``.
        ignore_case: Compare two strings case-insensitively.
    """
    __tracebackhide__ = True
    if within is not None:
        check(abs(a - b) < within, lambda: _pair_message("Objects are not equal", a, b))
    elif isinstance(a, str) and isinstance(b, str):
        check(
            _fold(a, ignore_case) == _fold(b, ignore_case),
            lambda: string_diff_message(a, b, ignore_case),
        )
    else:
        check(values_equal(a, b), lambda: _pair_message("Objects are not equal", a, b))


def are_not_equal(
    a: Any,
    b: Any,
    *,
    within: float | None = None,
    ignore_case: bool = False,
) -> None:
    __tracebackhide__ = True
    if within is not None:
        check(not abs(a - b) < within, lambda: _pair_message("Objects are equal", a, b))
    elif isinstance(a, str) and isinstance(b, str):
        check(
            _fold(a, ignore_case) != _fold(b, ignore_case),
            lambda: _pair_message("Strings are equal", a, b),
        )
    else:
        check(not values_equal(a, b), lambda: _pair_message("Objects are equal", a, b))


def is_empty(value: Any) -> None:
    """Assert a string or collection is empty. None is not empty."""
    __tracebackhide__ = True
    if value is None or isinstance(value, str):
        check(value == "", lambda: f"String is not empty: {format_value(value)}")
        return
    items = list(value)
    check(not items, lambda: f"Collection is not empty\n  Items: {format_value(items)}")


def is_not_empty(value: Any) -> None:
    __tracebackhide__ = True
    if value is None or isinstance(value, str):
        check(bool(value), lambda: "String is empty")
        return
    check(bool(list(value)), lambda: "Collection is empty")


def is_none_or_empty(value: str | None) -> None:
    __tracebackhide__ = True
    check(not value, lambda: f"String is not empty: {format_value(value)}")


def is_not_none_or_empty(value: str | None) -> None:
    __tracebackhide__ = True
    check(bool(value), lambda: f"String is null or empty: {format_value(value)}")


def contains(container: Any, item: Any, *, ignore_case: bool = False) -> None:
    """Assert a collection holds ``item``, or a string holds a substring."""
    __tracebackhide__ = True
    if isinstance(container, str):
        check(
            _fold(item, ignore_case) in _fold(container, ignore_case),
            lambda: (
                "String doesn't contain substring\n"
                f"  expected: {format_value(item)}\n"
                f"  found:    {format_value(container)}"
            ),
        )
        return
    items = list(container)
    check(
        any(values_equal(x, item) for x in items),
        lambda: f"Collection doesn't contain {format_value(item)}\n  Items: {format_value(items)}",
    )


def does_not_contain(container: Any, item: Any, *, ignore_case: bool = False) -> None:
    __tracebackhide__ = True
    if isinstance(container, str):
        check(
            _fold(item, ignore_case) not in _fold(container, ignore_case),
            lambda: (
                "String does contain substring\n"
                f"  didn't expect: {format_value(item)}\n"
                f"  found:         {format_value(container)}"
            ),
        )
        return
    check(
        not any(values_equal(x, item) for x in container),
        lambda: f"Collection does contain {format_value(item)}",
    )


def matches(value: str, pattern: str, flags: int = 0) -> None:
    """Assert ``pattern`` matches somewhere in ``value`` (``re.search``)."""
    __tracebackhide__ = True
    check(
        re.search(pattern, value, flags) is not None,
        lambda: f'String doesn\'t match expression\n  regex: "{pattern}"\n  found: {format_value(value)}',
    )


def does_not_match(value: str, pattern: str, flags: int = 0) -> None:
    __tracebackhide__ = True
    check(
        re.search(pattern, value, flags) is None,
        lambda: f'String matches expression\n  regex: "{pattern}"\n  found: {format_value(value)}',
    )


def is_none(value: Any) -> None:
    __tracebackhide__ = True
    check(value is None, lambda: f"Object reference is not null - {format_value(value)}")


def is_not_none(value: Any) -> None:
    __tracebackhide__ = True
    check(value is not None, lambda: "Object reference is null")


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare(a: Any, b: Any, predicate: Callable[[int], bool], operator: str) -> None:
    """Assert ``predicate`` holds for the three-way comparison of a and b.

    ``operator`` is only used in the failure message and is shown verbatim.
    Operands that do not support ordering raise ``TypeError``.
    """
    __tracebackhide__ = True
    result = _three_way(a, b)
    check(
        predicate(result),
        lambda: f"Comparison failed: {format_value(a)} {operator} {format_value(b)}",
    )


def greater(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    compare(a, b, lambda r: r > 0, ">")


def greater_or_equal(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    compare(a, b, lambda r: r >= 0, ">=")


def less(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    compare(a, b, lambda r: r < 0, "<")


def less_or_equal(a: Any, b: Any) -> None:
    __tracebackhide__ = True
    compare(a, b, lambda r: r <= 0, "<=")


def is_instance_of(value: Any, expected: type) -> None:
    """Assert ``value``'s type is exactly ``expected`` (subclasses fail)."""
    __tracebackhide__ = True
    is_not_none(value)
    check(
        type(value) is expected,
        lambda: (
            f"Object type mismatch, expected {type_name(expected)} "
            f"found {type_name(type(value))}"
        ),
    )


def is_not_instance_of(value: Any, expected: type) -> None:
    __tracebackhide__ = True
    is_not_none(value)
    check(
        type(value) is not expected,
        lambda: f"Object type mismatch, should not be {type_name(expected)}",
    )


def is_assignable_to(value: Any, expected: type) -> None:
    """Assert ``value`` is an instance of ``expected`` or a subclass."""
    __tracebackhide__ = True
    is_not_none(value)
    check(
        isinstance(value, expected),
        lambda: (
            f"Object type mismatch, expected a type assignable to {type_name(expected)} "
            f"found {type_name(type(value))}"
        ),
    )


def is_not_assignable_to(value: Any, expected: type) -> None:
    __tracebackhide__ = True
    is_not_none(value)
    check(
        not isinstance(value, expected),
        lambda: (
            f"Object type mismatch, didn't expect a type assignable to {type_name(expected)} "
            f"found {type_name(type(value))}"
        ),
    )


def is_assignable_from(value: Any, source: type) -> None:
    """Assert an instance of ``source`` could stand in for ``value``'s type."""
    __tracebackhide__ = True
    is_not_none(value)
    check(
        issubclass(source, type(value)),
        lambda: (
            f"Object type mismatch, expected a type assignable from {type_name(source)} "
            f"found {type_name(type(value))}"
        ),
    )


def is_not_assignable_from(value: Any, source: type) -> None:
    __tracebackhide__ = True
    is_not_none(value)
    check(
        not issubclass(source, type(value)),
        lambda: (
            f"Object type mismatch, didn't expect a type assignable from {type_name(source)} "
            f"found {type_name(type(value))}"
        ),
    )


def throws(expected: type[E], action: Callable[[], Any]) -> E:
    """Assert ``action`` raises ``expected`` (or a subclass) and return it."""
    __tracebackhide__ = True
    try:
        action()
    except BaseException as exc:
        if isinstance(exc, expected):
            return exc
        if not isinstance(exc, Exception):
            raise
        msg = (
            f"Wrong exception type caught, expected {type_name(expected)} "
            f"received {format_value(exc)}"
        )
        raise AssertionFailedError(msg) from exc
    fail(f"Failed to throw exception of type {type_name(expected)}")


def does_not_throw(action: Callable[[], Any]) -> None:
    __tracebackhide__ = True
    try:
        action()
    except Exception as exc:
        raise AssertionFailedError(f"Unexpected exception {format_value(exc)}") from exc


__all__ = [
    "are_equal",
    "are_not_equal",
    "are_not_same",
    "are_same",
    "compare",
    "contains",
    "does_not_contain",
    "does_not_match",
    "does_not_throw",
    "greater",
    "greater_or_equal",
    "is_assignable_from",
    "is_assignable_to",
    "is_empty",
    "is_false",
    "is_instance_of",
    "is_none",
    "is_none_or_empty",
    "is_not_assignable_from",
    "is_not_assignable_to",
    "is_not_empty",
    "is_not_instance_of",
    "is_not_none",
    "is_not_none_or_empty",
    "is_true",
    "less",
    "less_or_equal",
    "matches",
    "string_diff_message",
    "throws",
]
