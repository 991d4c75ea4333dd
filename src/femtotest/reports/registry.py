"""Reporter registry: look reporters up by name or import path."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from femtotest.reports.base import Reporter


T = TypeVar("T")

_reporter_registry: dict[str, type[Reporter]] = {}
_builtin_registry: dict[str, type[Reporter]] = {}


def reporter(cls: type[T] | None = None, *, name: str | None = None) -> type[T] | Any:
    """Register a Reporter class, as ``@reporter`` or ``@reporter(name=...)``.

    The registry key defaults to the class name.
    """

    def decorator(cls: type[T]) -> type[T]:
        _reporter_registry[name or cls.__name__] = cls  # type: ignore[assignment]
        return cls

    if cls is not None:
        return decorator(cls)
    return decorator


def register_builtin(name: str, cls: type[T]) -> type[T]:
    """Register a reporter that survives :func:`clear_reporter_registry`."""
    _reporter_registry[name] = cls  # type: ignore[assignment]
    _builtin_registry[name] = cls  # type: ignore[assignment]
    return cls


def get_reporter_registry() -> dict[str, type[Reporter]]:
    return _reporter_registry


def clear_reporter_registry() -> None:
    """Drop user-registered reporters, keeping built-ins."""
    _reporter_registry.clear()
    _reporter_registry.update(_builtin_registry)


def _import_reporter_class(import_path: str) -> type[Reporter]:
    if ":" in import_path:
        module_path, class_name = import_path.rsplit(":", 1)
    else:
        module_path, class_name = import_path.rsplit(".", 1)

    cls = getattr(importlib.import_module(module_path), class_name)
    if not isinstance(cls, type):
        msg = f"{import_path} is not a class"
        raise TypeError(msg)
    return cls


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    """Instantiate a reporter by registry name or ``module:Class`` path.

    Raises:
        ValueError: If the name is neither registered nor importable-looking.
    """
    if name in _reporter_registry:
        return _reporter_registry[name](**kwargs)

    if ":" in name or "." in name:
        return _import_reporter_class(name)(**kwargs)

    available = ", ".join(sorted(_reporter_registry))
    msg = f"Unknown reporter: {name}. Available: {available}"
    raise ValueError(msg)


__all__ = [
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
]
