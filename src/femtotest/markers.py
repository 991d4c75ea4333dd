"""Declarative markers for fixtures, tests and setup/teardown hooks.

Decorators in this module attach immutable marker records to classes and
functions. The engine never mutates them; discovery reads them once per run.

    @fixture()
    @fixture(10, active=True)
    class CalculatorTests:
        def __init__(self, start: int = 0):
            self.start = start

        @setup
        def reset(self): ...

        @test(1, 2, 3)
        @test(source="cases")
        def adds(self, a, b, expected): ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar


T = TypeVar("T")

_MARKERS_ATTR = "__femtotest_markers__"
_SETUP_ATTR = "__femtotest_setup__"


@dataclass(frozen=True)
class TestMarker:
    """Marks a method as a test case, optionally parameterized.

    Exactly one of ``arguments`` or ``source`` supplies the argument tuples:
    ``arguments`` is used literally, ``source`` names a zero-argument data
    provider returning a sequence of tuples.
    """

    __test__ = False

    arguments: tuple[Any, ...] = ()
    source: str | None = None
    active: bool = False


@dataclass(frozen=True)
class FixtureMarker(TestMarker):
    """Marks a class as a test fixture; arguments go to its constructor."""


class HookKind(Enum):
    """The four lifecycle hooks a method can be tagged as."""

    SETUP = "setup"
    TEARDOWN = "teardown"
    FIXTURE_SETUP = "fixture_setup"
    FIXTURE_TEARDOWN = "fixture_teardown"


@dataclass(frozen=True)
class SetupMarker:
    """Tags a method as a setup or teardown hook."""

    for_setup: bool
    for_fixture: bool

    @property
    def kind(self) -> HookKind:
        if self.for_fixture:
            return HookKind.FIXTURE_SETUP if self.for_setup else HookKind.FIXTURE_TEARDOWN
        return HookKind.SETUP if self.for_setup else HookKind.TEARDOWN


def _attach(target: Any, marker: TestMarker) -> None:
    # Read from the target's own namespace so subclasses do not inherit
    # fixture markers from a decorated base class.
    existing: tuple[TestMarker, ...] = vars(target).get(_MARKERS_ATTR, ())
    # Decorators apply bottom-up; prepend to keep source order.
    setattr(target, _MARKERS_ATTR, (marker, *existing))


def fixture(
    *arguments: Any,
    source: str | None = None,
    active: bool = False,
) -> Callable[[type[T]], type[T]]:
    """Mark a class as a fixture. May be stacked for several configurations."""
    marker = FixtureMarker(arguments=tuple(arguments), source=source, active=active)

    def decorator(cls: type[T]) -> type[T]:
        if not isinstance(cls, type):
            msg = f"@fixture can only decorate classes, got {cls!r}"
            raise TypeError(msg)
        _attach(cls, marker)
        return cls

    return decorator


def test(
    *arguments: Any,
    source: str | None = None,
    active: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method as a test. May be stacked for several argument sets."""
    marker = TestMarker(arguments=tuple(arguments), source=source, active=active)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        if isinstance(fn, type):
            msg = "@test decorates methods; use @fixture for classes"
            raise TypeError(msg)
        _attach(fn, marker)
        return fn

    return decorator


# Not collected by pytest when imported into a test module.
test.__test__ = False  # type: ignore[attr-defined]


def _hook(for_setup: bool, for_fixture: bool) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    marker = SetupMarker(for_setup=for_setup, for_fixture=for_fixture)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        existing: tuple[SetupMarker, ...] = getattr(fn, _SETUP_ATTR, ())
        setattr(fn, _SETUP_ATTR, (*existing, marker))
        return fn

    return decorator


setup = _hook(for_setup=True, for_fixture=False)
teardown = _hook(for_setup=False, for_fixture=False)
fixture_setup = _hook(for_setup=True, for_fixture=True)
fixture_teardown = _hook(for_setup=False, for_fixture=True)


def get_fixture_markers(cls: type) -> tuple[FixtureMarker, ...]:
    """Return the fixture markers declared directly on ``cls``."""
    markers = cls.__dict__.get(_MARKERS_ATTR, ())
    return tuple(m for m in markers if isinstance(m, FixtureMarker))


def get_test_markers(fn: Any) -> tuple[TestMarker, ...]:
    """Return the test markers attached to a function."""
    markers = getattr(fn, _MARKERS_ATTR, ())
    return tuple(m for m in markers if not isinstance(m, FixtureMarker))


def get_setup_markers(fn: Any) -> tuple[SetupMarker, ...]:
    return tuple(getattr(fn, _SETUP_ATTR, ()))


def is_active(markers: tuple[TestMarker, ...]) -> bool:
    """True if any of the markers opts into the active filter."""
    return any(marker.active for marker in markers)


__all__ = [
    "FixtureMarker",
    "HookKind",
    "SetupMarker",
    "TestMarker",
    "fixture",
    "fixture_setup",
    "fixture_teardown",
    "get_fixture_markers",
    "get_setup_markers",
    "get_test_markers",
    "is_active",
    "setup",
    "teardown",
    "test",
]
