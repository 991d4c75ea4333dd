"""Discovery: build the immutable fixture tree for one run.

The tree is enumerated once through a :class:`~femtotest.reflection.Reflector`
and carries precomputed activeness, so the engine never re-queries markers
while it executes.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Any

from femtotest.errors import ModuleLoadError
from femtotest.markers import FixtureMarker, HookKind, SetupMarker, TestMarker, is_active
from femtotest.reflection import Assembly, ModuleReflector, Reflector


logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "test_*.py"


class ScopeKind(Enum):
    ASSEMBLY = "assembly"
    FIXTURE_TYPE = "testfixture"
    METHOD = "test"


@dataclass(frozen=True)
class MethodNode:
    """A test method and its markers."""

    name: str
    fn: Callable[..., Any]
    markers: tuple[TestMarker, ...]
    parameter_count: int
    active: bool

    kind = ScopeKind.METHOD

    @property
    def has_active(self) -> bool:
        return self.active


@dataclass(frozen=True)
class FixtureTypeNode:
    """A fixture class, its test methods and lifecycle hooks."""

    name: str
    cls: type
    markers: tuple[FixtureMarker, ...]
    methods: tuple[MethodNode, ...]
    hooks: dict[HookKind, tuple[Callable[..., Any], ...]] = field(default_factory=dict)
    active: bool = False
    has_active_methods: bool = False

    kind = ScopeKind.FIXTURE_TYPE

    @property
    def has_active(self) -> bool:
        return self.active or self.has_active_methods

    def hooks_for(self, kind: HookKind) -> tuple[Callable[..., Any], ...]:
        return self.hooks.get(kind, ())


@dataclass(frozen=True)
class AssemblyNode:
    """Root of the tree: every fixture type found in an assembly."""

    name: str
    fixtures: tuple[FixtureTypeNode, ...]
    has_active: bool = False

    kind = ScopeKind.ASSEMBLY


def discover_fixture(cls: type, reflector: Reflector) -> FixtureTypeNode:
    """Enumerate one fixture type's markers, tests and hooks."""
    markers = tuple(m for m in reflector.list_markers(cls) if isinstance(m, FixtureMarker))
    methods: list[MethodNode] = []
    hooks: dict[HookKind, list[Callable[..., Any]]] = {}

    for name, fn in reflector.list_methods(cls):
        fn_markers = reflector.list_markers(fn)
        test_markers = tuple(
            m for m in fn_markers if isinstance(m, TestMarker) and not isinstance(m, FixtureMarker)
        )
        for marker in fn_markers:
            if isinstance(marker, SetupMarker):
                hooks.setdefault(marker.kind, []).append(fn)
        if test_markers:
            methods.append(
                MethodNode(
                    name=name,
                    fn=fn,
                    markers=test_markers,
                    parameter_count=reflector.parameter_count(fn),
                    active=is_active(test_markers),
                )
            )

    return FixtureTypeNode(
        name=cls.__name__,
        cls=cls,
        markers=markers,
        methods=tuple(methods),
        hooks={kind: tuple(fns) for kind, fns in hooks.items()},
        active=is_active(markers),
        has_active_methods=any(m.active for m in methods),
    )


def discover(
    assembly: Assembly,
    reflector: Reflector | None = None,
    on_error: Callable[[type, Exception], None] | None = None,
) -> AssemblyNode:
    """Build the fixture tree for an assembly.

    Args:
        assembly: Modules to search.
        reflector: Bridge used to enumerate types and markers.
        on_error: Called with the class and exception when a fixture type
            cannot be enumerated; the type is then left out. Without it the
            exception propagates.
    """
    reflector = reflector or ModuleReflector()
    fixtures: list[FixtureTypeNode] = []
    for cls in reflector.list_types(assembly):
        try:
            fixtures.append(discover_fixture(cls, reflector))
        except Exception as exc:
            if on_error is None:
                raise
            on_error(cls, exc)

    logger.debug("Discovered %d fixture type(s) in %s", len(fixtures), assembly.name)
    return AssemblyNode(
        name=assembly.name,
        fixtures=tuple(fixtures),
        has_active=any(f.has_active for f in fixtures),
    )


# Directories never searched for test files.
_SKIPPED_DIRS = frozenset({"site-packages", "__pycache__", "node_modules"})


def module_name_for(path: Path) -> str:
    """Unique module name for a test file: its stem plus a digest of its path."""
    digest = hashlib.sha1(str(path).encode()).hexdigest()[:10]
    return f"{path.stem}_{digest}"


def load_module(path: Path) -> ModuleType:
    """Import a Python file under a name derived from its full path.

    Files sharing a stem in different directories, or named like an
    installed module, get distinct ``sys.modules`` entries.
    """
    module_name = module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    logger.debug("Loaded test module %s from %s", module_name, path)
    return module


def _is_searchable(path: Path, root: Path) -> bool:
    parts = path.relative_to(root).parts[:-1]
    return not any(part.startswith(".") or part in _SKIPPED_DIRS for part in parts)


def find_test_files(root: Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Files under ``root`` matching ``pattern``, skipping hidden and vendored directories."""
    return [p for p in sorted(root.rglob(pattern)) if _is_searchable(p, root)]


def collect(
    paths: Iterable[Path | str] | None = None,
    pattern: str = DEFAULT_PATTERN,
    name: str | None = None,
) -> Assembly:
    """Load test modules from files or directories into an assembly.

    Files are loaded as given; directories are searched recursively for
    files matching ``pattern``. Defaults to the current directory. A file
    that fails to import is kept on :attr:`Assembly.load_errors` and the
    remaining files still load.

    Raises:
        FileNotFoundError: If a given path does not exist.
    """
    files: list[Path] = []
    for raw in paths or [Path.cwd()]:
        path = Path(raw).resolve()
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(find_test_files(path, pattern))
        else:
            msg = f"No such file or directory: {raw}"
            raise FileNotFoundError(msg)

    modules: list[ModuleType] = []
    errors: list[Exception] = []
    for file_path in files:
        try:
            modules.append(load_module(file_path))
        except (Exception, SystemExit) as exc:
            logger.debug("Failed to import %s: %s", file_path, exc)
            errors.append(ModuleLoadError(file_path, exc))

    return Assembly(name=name or "tests", modules=tuple(modules), load_errors=tuple(errors))


__all__ = [
    "DEFAULT_PATTERN",
    "AssemblyNode",
    "FixtureTypeNode",
    "MethodNode",
    "ScopeKind",
    "collect",
    "discover",
    "discover_fixture",
    "find_test_files",
    "load_module",
    "module_name_for",
]
