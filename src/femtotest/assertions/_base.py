"""Failure type and the primitive every assertion is built on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn

from femtotest.formatting import format_value


class AssertionFailedError(AssertionError):
    """Raised when an assertion's predicate does not hold."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def check(condition: bool, message: Callable[[], str]) -> None:
    """Raise :class:`AssertionFailedError` unless ``condition`` holds.

    ``message`` is only called on the failing path.
    """
    __tracebackhide__ = True
    if not condition:
        raise AssertionFailedError(message())


def fail(message: str) -> NoReturn:
    __tracebackhide__ = True
    raise AssertionFailedError(message)


def values_equal(a: Any, b: Any) -> bool:
    """None equals only None; everything else compares with ``==``."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return bool(a == b)


def _pair_message(title: str, a: Any, b: Any) -> str:
    return f"{title}\n  lhs: {format_value(a)}\n  rhs: {format_value(b)}"
