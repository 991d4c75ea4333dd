"""Collection assertions, including multiset (set-algebra) checks.

Every check that compares elements accepts an optional ``equal(x, y)``
predicate, where ``x`` comes from the first collection and ``y`` from the
second; it may compare values of different types. The default treats None as
equal only to None and otherwise uses ``==``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from femtotest.assertions._base import AssertionFailedError, check, fail, values_equal
from femtotest.formatting import format_value, type_name


A = TypeVar("A")
B = TypeVar("B")

Equality = Callable[[A, B], bool]

_MISSING = object()


def _describe(item: Any) -> str:
    return "<end of sequence>" if item is _MISSING else format_value(item)


def for_each(source: Iterable[A], action: Callable[[A], Any]) -> None:
    """Run ``action`` on every item; any failure is reported with its index."""
    __tracebackhide__ = True
    items = list(source)
    for index, item in enumerate(items):
        try:
            action(item)
        except Exception as exc:
            msg = (
                f"Collection assertion failed at item {index}\n"
                f"  Collection: {format_value(items)}\n"
                f"  Inner Exception: {exc}"
            )
            raise AssertionFailedError(msg) from exc


def all_items_are_not_none(collection: Iterable[Any]) -> None:
    __tracebackhide__ = True
    for index, item in enumerate(collection):
        if item is None:
            fail(f"Collection has a null item at index {index}")


def all_items_are_unique(
    collection: Iterable[A],
    equal: Equality[A, A] | None = None,
) -> None:
    """Pairwise scan; reports the first pair of equal items."""
    __tracebackhide__ = True
    equal = equal or values_equal
    items = list(collection)
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            if equal(items[i], items[j]):
                fail(
                    "Collection items are not unique\n"
                    f"  [{i}] = {format_value(items[i])}\n"
                    f"  [{j}] = {format_value(items[j])}"
                )


def all_items_are_equal(
    a: Iterable[A],
    b: Iterable[B],
    equal: Equality[A, B] | None = None,
) -> None:
    """Ordered equality of two iterables, walked in lock-step.

    The iterables may be lazy and of different lengths; running out on one
    side first fails at that index.
    """
    __tracebackhide__ = True
    equal = equal or values_equal
    it_a, it_b = iter(a), iter(b)
    index = 0
    while True:
        x = next(it_a, _MISSING)
        y = next(it_b, _MISSING)
        if x is _MISSING and y is _MISSING:
            return
        if x is _MISSING or y is _MISSING or not equal(x, y):
            fail(
                f"Collections are not equal at index {index}\n"
                f"  a[{index}] = {_describe(x)}\n"
                f"  b[{index}] = {_describe(y)}"
            )
        index += 1


def all_items_are_instances_of(collection: Iterable[Any], expected: type) -> None:
    """Every item's type must be exactly ``expected``."""
    __tracebackhide__ = True
    for index, item in enumerate(collection):
        if item is None or type(item) is not expected:
            found = "null" if item is None else type_name(type(item))
            fail(
                f"Collection item at index {index} is of the wrong type, "
                f"expected {type_name(expected)} but found {found}"
            )


def _index_of(item: A, items: list[B], equal: Equality[A, B]) -> int:
    for j, candidate in enumerate(items):
        if equal(item, candidate):
            return j
    return -1


def _subset_miss(subset: list[A], superset: list[B], equal: Equality[A, B]) -> int:
    """Index of the first subset item left without a partner, or -1.

    Each match consumes its superset item, so duplicates must be matched
    by as many copies.
    """
    remaining = list(superset)
    for index, item in enumerate(subset):
        pos = _index_of(item, remaining, equal)
        if pos < 0:
            return index
        del remaining[pos]
    return -1


def is_subset_of(
    subset: Iterable[A],
    superset: Iterable[B],
    equal: Equality[A, B] | None = None,
) -> None:
    __tracebackhide__ = True
    subset, superset = list(subset), list(superset)
    miss = _subset_miss(subset, superset, equal or values_equal)
    check(
        miss < 0,
        lambda: (
            f"Collection is not a subset (check subset index {miss})\n"
            f"  subset =   {format_value(subset)}\n"
            f"  superset = {format_value(superset)}"
        ),
    )


def is_not_subset_of(
    subset: Iterable[A],
    superset: Iterable[B],
    equal: Equality[A, B] | None = None,
) -> None:
    __tracebackhide__ = True
    subset, superset = list(subset), list(superset)
    check(
        _subset_miss(subset, superset, equal or values_equal) >= 0,
        lambda: (
            "Collection is a subset\n"
            f"  subset =   {format_value(subset)}\n"
            f"  superset = {format_value(superset)}"
        ),
    )


def _equivalent(a: list[A], b: list[B], equal: Equality[A, B]) -> bool:
    remaining = list(b)
    for item in a:
        pos = _index_of(item, remaining, equal)
        if pos < 0:
            return False
        del remaining[pos]
    return not remaining


def are_equivalent(
    a: Iterable[A],
    b: Iterable[B],
    equal: Equality[A, B] | None = None,
) -> None:
    """Multiset equality: same items, same multiplicities, any order."""
    __tracebackhide__ = True
    a, b = list(a), list(b)
    check(
        _equivalent(a, b, equal or values_equal),
        lambda: (
            "Collections are not equivalent\n"
            f"  lhs: {format_value(a)}\n"
            f"  rhs: {format_value(b)}"
        ),
    )


def are_not_equivalent(
    a: Iterable[A],
    b: Iterable[B],
    equal: Equality[A, B] | None = None,
) -> None:
    __tracebackhide__ = True
    a, b = list(a), list(b)
    check(
        not _equivalent(a, b, equal or values_equal),
        lambda: (
            "Collections are equivalent\n"
            f"  lhs: {format_value(a)}\n"
            f"  rhs: {format_value(b)}"
        ),
    )


__all__ = [
    "all_items_are_equal",
    "all_items_are_instances_of",
    "all_items_are_not_none",
    "all_items_are_unique",
    "are_equivalent",
    "are_not_equivalent",
    "for_each",
    "is_not_subset_of",
    "is_subset_of",
]
