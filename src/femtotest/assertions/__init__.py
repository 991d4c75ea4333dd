"""Assertion library.

Each function checks a predicate and raises :class:`AssertionFailedError`
with a diagnostic message when it does not hold:

    from femtotest import assertions as check

    check.are_equal(total, 10)
    check.are_equivalent(found, [1, 2, 2])
    err = check.throws(ValueError, lambda: parse("x"))
"""

from ._base import AssertionFailedError, check, fail, values_equal
from .basic import (
    are_equal,
    are_not_equal,
    are_not_same,
    are_same,
    compare,
    contains,
    does_not_contain,
    does_not_match,
    does_not_throw,
    greater,
    greater_or_equal,
    is_assignable_from,
    is_assignable_to,
    is_empty,
    is_false,
    is_instance_of,
    is_none,
    is_none_or_empty,
    is_not_assignable_from,
    is_not_assignable_to,
    is_not_empty,
    is_not_instance_of,
    is_not_none,
    is_not_none_or_empty,
    is_true,
    less,
    less_or_equal,
    matches,
    string_diff_message,
    throws,
)
from .collection import (
    all_items_are_equal,
    all_items_are_instances_of,
    all_items_are_not_none,
    all_items_are_unique,
    are_equivalent,
    are_not_equivalent,
    for_each,
    is_not_subset_of,
    is_subset_of,
)


__all__ = [
    "AssertionFailedError",
    "all_items_are_equal",
    "all_items_are_instances_of",
    "all_items_are_not_none",
    "all_items_are_unique",
    "are_equal",
    "are_equivalent",
    "are_not_equal",
    "are_not_equivalent",
    "are_not_same",
    "are_same",
    "check",
    "compare",
    "contains",
    "does_not_contain",
    "does_not_match",
    "does_not_throw",
    "fail",
    "for_each",
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
    "is_not_subset_of",
    "is_subset_of",
    "is_true",
    "less",
    "less_or_equal",
    "matches",
    "string_diff_message",
    "throws",
    "values_equal",
]
