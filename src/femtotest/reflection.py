"""Reflection bridge between the engine and Python's object model.

The engine only talks to a :class:`Reflector`. :class:`ModuleReflector` is the
implementation used in practice; tests may substitute an in-memory catalog.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Protocol

from femtotest.markers import (
    SetupMarker,
    TestMarker,
    get_fixture_markers,
    get_setup_markers,
    get_test_markers,
)


Marker = TestMarker | SetupMarker


@dataclass(frozen=True)
class Assembly:
    """A named group of modules searched for fixtures."""

    name: str
    modules: tuple[ModuleType, ...]
    # Files that failed to import; reported by the runner inside the assembly scope.
    load_errors: tuple[Exception, ...] = ()

    @classmethod
    def from_modules(cls, *modules: ModuleType, name: str | None = None) -> Assembly:
        if name is None:
            name = modules[0].__name__ if len(modules) == 1 else "tests"
        return cls(name=name, modules=tuple(modules))


class Reflector(Protocol):
    """Capabilities the engine needs from the runtime.

    Every operation may raise; callers are expected to catch.
    """

    def list_types(self, assembly: Assembly) -> Sequence[type]:
        """Concrete, non-abstract classes carrying a fixture marker."""
        ...

    def list_methods(self, fixture_type: type) -> Sequence[tuple[str, Callable[..., Any]]]:
        """(name, function) pairs for every method of a fixture type."""
        ...

    def list_markers(self, target: Any) -> Sequence[Marker]:
        """All markers declared on a class or function."""
        ...

    def parameter_count(self, method: Callable[..., Any]) -> int:
        """Number of declared parameters, excluding the instance."""
        ...

    def construct(self, fixture_type: type, arguments: tuple[Any, ...]) -> Any:
        ...

    def invoke(self, instance: Any, method: Callable[..., Any], arguments: tuple[Any, ...]) -> Any:
        ...


def is_test_fixture(obj: Any) -> bool:
    """True for concrete classes declaring at least one fixture marker."""
    return (
        inspect.isclass(obj)
        and not inspect.isabstract(obj)
        and bool(get_fixture_markers(obj))
    )


class ModuleReflector:
    """Reflector over imported Python modules."""

    def list_types(self, assembly: Assembly) -> list[type]:
        types: list[type] = []
        for module in assembly.modules:
            for _, obj in inspect.getmembers(module, is_test_fixture):
                # Skip fixtures imported from elsewhere; they are found in
                # their defining module.
                if obj.__module__ == module.__name__:
                    types.append(obj)
        return types

    def list_methods(self, fixture_type: type) -> list[tuple[str, Callable[..., Any]]]:
        return [
            (name, fn)
            for name, fn in inspect.getmembers(fixture_type, predicate=inspect.isfunction)
            if not isinstance(inspect.getattr_static(fixture_type, name), staticmethod)
        ]

    def list_markers(self, target: Any) -> list[Marker]:
        if inspect.isclass(target):
            return list(get_fixture_markers(target))
        return [*get_test_markers(target), *get_setup_markers(target)]

    def parameter_count(self, method: Callable[..., Any]) -> int:
        # Methods come off the class unbound; the first parameter is self.
        return max(len(inspect.signature(method).parameters) - 1, 0)

    def construct(self, fixture_type: type, arguments: tuple[Any, ...]) -> Any:
        return fixture_type(*arguments)

    def invoke(self, instance: Any, method: Callable[..., Any], arguments: tuple[Any, ...]) -> Any:
        return method(instance, *arguments)


__all__ = ["Assembly", "Marker", "ModuleReflector", "Reflector", "is_test_fixture"]
