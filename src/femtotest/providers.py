"""Named data providers for parameterized fixtures and tests.

A marker with ``source="name"`` gets its argument tuples from a zero-argument
callable. The callable is looked up on the owning class (fixture markers) or
on the fixture instance (test markers) first, then in this registry:

    @provider
    def small_primes():
        return [(2,), (3,), (5,)]

    @provider(name="pairs")
    def _pairs():
        yield 1, 2
        yield 3, 4
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from femtotest.errors import ProviderNotFoundError
from femtotest.markers import TestMarker


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[[], Iterable[Any]])

_provider_registry: dict[str, Callable[[], Iterable[Any]]] = {}


def provider(fn: F | None = None, *, name: str | None = None) -> F | Any:
    """Register a zero-argument callable as a named data provider.

    Can be used with or without arguments:

        @provider
        def cases(): ...

        @provider(name="cases")
        def build_cases(): ...
    """

    def decorator(fn: F) -> F:
        _provider_registry[name or fn.__name__] = fn
        return fn

    if fn is not None:
        return decorator(fn)
    return decorator


def get_provider_registry() -> dict[str, Callable[[], Iterable[Any]]]:
    """Get the global provider registry."""
    return _provider_registry


def clear_provider_registry() -> None:
    _provider_registry.clear()


def _lookup(name: str, owner: Any) -> Callable[[], Iterable[Any]]:
    member = getattr(owner, name, None) if owner is not None else None
    if callable(member):
        return member
    if name in _provider_registry:
        return _provider_registry[name]
    owner_name = getattr(owner, "__name__", type(owner).__name__) if owner is not None else None
    raise ProviderNotFoundError(name, owner_name)


def _as_tuple(item: Any) -> tuple[Any, ...]:
    if isinstance(item, (tuple, list)):
        return tuple(item)
    return (item,)


def resolve_arguments(marker: TestMarker, owner: Any = None) -> list[tuple[Any, ...]]:
    """Expand a marker into its argument tuples.

    Args:
        marker: The fixture or test marker to expand.
        owner: The fixture class (for fixture markers) or fixture instance
            (for test markers) on which a named provider is looked up.

    Returns:
        The literal arguments as a single tuple, or one tuple per item the
        provider yields. Non-sequence items become one-element tuples.

    Raises:
        ProviderNotFoundError: If ``marker.source`` names nothing callable.
    """
    if marker.source is None:
        return [marker.arguments]

    fn = _lookup(marker.source, owner)
    logger.debug("Resolving arguments from provider %s", marker.source)
    return [_as_tuple(item) for item in fn()]


__all__ = [
    "clear_provider_registry",
    "get_provider_registry",
    "provider",
    "resolve_arguments",
]
