"""Shared fixtures for unit tests."""

from __future__ import annotations

import types
from typing import Any

import pytest

from femtotest.formatting import format_target
from femtotest.reflection import Assembly
from femtotest.reports.base import Reporter
from femtotest.stats import Stats


class RecordingReporter(Reporter):
    """Reporter that keeps every event for later inspection."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self.events: list[tuple[Any, ...]] = []
        self.completed: tuple[Stats, float, float] | None = None

    def on_test_start(self, target, arguments) -> None:
        self.events.append(("start", format_target(target), arguments))

    def on_exception(self, exc) -> None:
        self.events.append(("exception", exc))

    def on_warning(self, text) -> None:
        self.events.append(("warning", text))

    def on_output(self, text) -> None:
        self.events.append(("output", text))

    def on_test_end(self, stats) -> None:
        self.events.append(("end", stats))

    def on_run_complete(self, stats, other_ms, total_ms) -> None:
        self.events.append(("complete", stats))
        self.completed = (stats, other_ms, total_ms)

    def of(self, kind: str) -> list[tuple[Any, ...]]:
        return [e for e in self.events if e[0] == kind]

    @property
    def exceptions(self) -> list[BaseException]:
        return [e[1] for e in self.of("exception")]

    @property
    def warnings(self) -> list[str]:
        return [e[1] for e in self.of("warning")]

    @property
    def started(self) -> list[tuple[str, tuple[Any, ...] | None]]:
        return [(e[1], e[2]) for e in self.of("start")]

    @property
    def tests_started(self) -> list[tuple[str, tuple[Any, ...] | None]]:
        return [s for s in self.started if s[0].startswith("test ")]


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def assembly_of():
    """Build an assembly holding the given classes in a synthetic module."""

    def factory(*classes: type, name: str = "sample") -> Assembly:
        module = types.ModuleType(name)
        for cls in classes:
            cls.__module__ = name
            setattr(module, cls.__name__, cls)
        return Assembly.from_modules(module)

    return factory
