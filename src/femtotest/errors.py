"""Framework error types."""

from __future__ import annotations

from pathlib import Path


class FemtotestError(Exception):
    """Base class for errors raised by the framework itself."""


class ProviderNotFoundError(FemtotestError, LookupError):
    """Raised when a marker names a data provider that cannot be found."""

    def __init__(self, name: str, owner: str | None = None) -> None:
        self.name = name
        self.owner = owner
        where = f" on {owner} or" if owner else ""
        super().__init__(f"Data provider '{name}' not found{where} in the provider registry")


class InvocationError(FemtotestError):
    """Wraps an exception raised by code invoked through a reflection bridge.

    The engine unwraps exactly one layer and reports ``__cause__``.
    """

    def __init__(self, target: str, cause: BaseException) -> None:
        self.target = target
        super().__init__(f"Invocation of {target} failed: {cause}")
        self.__cause__ = cause


class ModuleLoadError(FemtotestError):
    """Raised when a collected test file cannot be imported."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        super().__init__(f"Cannot import test module {path}: {type(cause).__name__}: {cause}")
        self.__cause__ = cause


class ConfigError(FemtotestError):
    """Raised when the [tool.femtotest] table is malformed."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Invalid femtotest configuration in {path}"
        if cause:
            message += f"\nCause: {cause}"
        super().__init__(message)


def unwrap(exc: BaseException) -> BaseException:
    """Strip one layer of :class:`InvocationError`, if present."""
    if isinstance(exc, InvocationError) and exc.__cause__ is not None:
        return exc.__cause__
    return exc


__all__ = [
    "ConfigError",
    "FemtotestError",
    "InvocationError",
    "ModuleLoadError",
    "ProviderNotFoundError",
    "unwrap",
]
