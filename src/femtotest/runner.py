"""Selection and execution engine.

Walks the discovered tree depth-first: assembly, fixture type, fixture
instance, test method. Applies the active filter, sequences setup and
teardown hooks, expands argument tuples and aggregates :class:`Stats` per
scope. No exception raised by code under test escapes :meth:`Runner.run`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from femtotest.capture import OutputCapture, output_capture
from femtotest.discovery import AssemblyNode, FixtureTypeNode, MethodNode, discover
from femtotest.errors import unwrap
from femtotest.markers import HookKind, TestMarker
from femtotest.providers import resolve_arguments
from femtotest.reflection import Assembly, ModuleReflector, Reflector
from femtotest.reports.base import NullReporter, Reporter
from femtotest.stats import Stats, StatsStack, Stopwatch


logger = logging.getLogger(__name__)

# Test code may call sys.exit(); only interrupts end a run early.
_CAUGHT = (Exception, SystemExit)


@dataclass
class _RunState:
    """Mutable state owned by a single call to :meth:`Runner.run`."""

    reporter: Reporter
    reflector: Reflector
    capture: OutputCapture | None = None
    stats: StatsStack = field(default_factory=StatsStack)
    # Construction, setup and teardown time across the whole hierarchy.
    other_time: Stopwatch = field(default_factory=Stopwatch)


class Runner:
    """Runs every test in an assembly.

    Args:
        reporter: Receives every engine event. Defaults to a silent reporter.
        reflector: Bridge used for discovery and invocation.
        run_all: Ignore active markers and run everything.
        capture_output: Capture stdout/stderr written by fixtures and tests
            and hand it to the reporter instead of letting it through.
    """

    def __init__(
        self,
        reporter: Reporter | None = None,
        reflector: Reflector | None = None,
        *,
        run_all: bool = False,
        capture_output: bool = True,
    ) -> None:
        self.reporter = reporter or NullReporter()
        self.reflector = reflector or ModuleReflector()
        self.run_all = run_all
        self.capture_output = capture_output

    def run(self, assembly: Assembly) -> Stats:
        """Run all tests in ``assembly`` and return the aggregate stats."""
        state = _RunState(reporter=self.reporter, reflector=self.reflector)
        total = Stopwatch.start_new()

        with output_capture(self.capture_output) as capture:
            state.capture = capture
            self._run_assembly(state, assembly)
            self._flush_output(state)

        total.stop()
        root = state.stats.root
        logger.debug(
            "Run complete: %d passed, %d errors, %d warnings",
            root.passed,
            root.errors,
            root.warnings,
        )
        self.reporter.on_run_complete(root, state.other_time.elapsed_ms, total.elapsed_ms)
        return root

    # Scope bookkeeping

    def _flush_output(self, state: _RunState) -> None:
        if state.capture is None:
            return
        text = state.capture.read()
        if text:
            state.reporter.on_output(text)

    @contextmanager
    def _scope(
        self,
        state: _RunState,
        target: Any,
        arguments: tuple[Any, ...] | None,
    ) -> Iterator[Stats]:
        self._flush_output(state)
        stats = state.stats.push(target)
        state.reporter.on_test_start(target, arguments)
        try:
            yield stats
        finally:
            self._flush_output(state)
            state.stats.pop()
            state.reporter.on_test_end(stats)

    def _record_error(self, state: _RunState, exc: BaseException) -> None:
        exc = unwrap(exc)
        state.stats.current.errors += 1
        self._flush_output(state)
        state.reporter.on_exception(exc)

    def _record_warning(self, state: _RunState, text: str) -> None:
        state.stats.current.warnings += 1
        self._flush_output(state)
        state.reporter.on_warning(text)

    def _timed(self, state: _RunState, fn: Callable[..., Any], *args: Any) -> Any:
        state.other_time.start()
        try:
            return fn(*args)
        finally:
            state.other_time.stop()

    # Traversal

    def _run_assembly(self, state: _RunState, assembly: Assembly) -> None:
        failures: list[Exception] = []
        try:
            tree = discover(
                assembly,
                state.reflector,
                on_error=lambda cls, exc: failures.append(exc),
            )
        except _CAUGHT as exc:
            self._record_error(state, exc)
            return

        with self._scope(state, tree, None):
            for exc in (*assembly.load_errors, *failures):
                self._record_error(state, exc)

            run_all = self.run_all or not tree.has_active
            for fixture in tree.fixtures:
                if run_all or fixture.has_active:
                    self._run_fixture_type(state, fixture, run_all)

    def _run_fixture_type(self, state: _RunState, fixture: FixtureTypeNode, run_all: bool) -> None:
        # An active fixture marker narrows which configurations run; active
        # methods narrow which methods run within every configuration.
        run_all_instances = run_all or not fixture.active
        run_all_methods = run_all or not fixture.has_active_methods

        for marker in fixture.markers:
            if not (run_all_instances or marker.active):
                continue
            argument_sets = self._resolve(state, marker, fixture.cls)
            for arguments in argument_sets:
                self._run_fixture_instance(state, fixture, arguments, run_all_methods)

    def _resolve(self, state: _RunState, marker: TestMarker, owner: Any) -> list[tuple[Any, ...]]:
        try:
            return resolve_arguments(marker, owner)
        except _CAUGHT as exc:
            self._record_error(state, exc)
            return []

    def _run_fixture_instance(
        self,
        state: _RunState,
        fixture: FixtureTypeNode,
        arguments: tuple[Any, ...],
        run_all: bool,
    ) -> None:
        with self._scope(state, fixture, arguments):
            logger.debug("Entering fixture %s%r", fixture.name, arguments)
            try:
                instance = self._timed(state, state.reflector.construct, fixture.cls, arguments)
            except _CAUGHT as exc:
                self._record_error(state, exc)
                return

            if not self._run_hooks(state, fixture, instance, HookKind.FIXTURE_SETUP):
                return

            for method in fixture.methods:
                if run_all or method.active:
                    self._run_method(state, fixture, instance, method, run_all)

            self._run_hooks(state, fixture, instance, HookKind.FIXTURE_TEARDOWN)

    def _run_method(
        self,
        state: _RunState,
        fixture: FixtureTypeNode,
        instance: Any,
        method: MethodNode,
        run_all: bool,
    ) -> None:
        for marker in method.markers:
            if not (run_all or marker.active):
                continue
            for arguments in self._resolve(state, marker, instance):
                if len(arguments) != method.parameter_count:
                    self._record_warning(
                        state,
                        f"{type(marker).__name__} on {fixture.name}.{method.name} provided an "
                        f"incorrect number of arguments (expected {method.parameter_count} "
                        f"but found {len(arguments)}) - skipped",
                    )
                    continue
                self._run_test(state, fixture, instance, method, arguments)

    def _run_test(
        self,
        state: _RunState,
        fixture: FixtureTypeNode,
        instance: Any,
        method: MethodNode,
        arguments: tuple[Any, ...],
    ) -> None:
        with self._scope(state, method, arguments) as stats:
            if not self._run_hooks(state, fixture, instance, HookKind.SETUP):
                return

            failure: BaseException | None = None
            body = Stopwatch.start_new()
            try:
                state.reflector.invoke(instance, method.fn, arguments)
            except _CAUGHT as exc:
                failure = exc
            body.stop()
            stats.elapsed_ms = body.elapsed_ms

            if failure is None:
                stats.passed += 1
            else:
                self._record_error(state, failure)

            self._run_hooks(state, fixture, instance, HookKind.TEARDOWN)

    def _run_hooks(
        self,
        state: _RunState,
        fixture: FixtureTypeNode,
        instance: Any,
        kind: HookKind,
    ) -> bool:
        """Run every hook of one kind; stop at and record the first failure."""
        try:
            for hook in fixture.hooks_for(kind):
                self._timed(state, state.reflector.invoke, instance, hook, ())
        except _CAUGHT as exc:
            self._record_error(state, exc)
            return False
        return True


def run(
    assembly: Assembly,
    reporter: Reporter | None = None,
    *,
    run_all: bool = False,
    capture_output: bool = True,
) -> Stats:
    """Run an assembly with the default reflector."""
    return Runner(reporter, run_all=run_all, capture_output=capture_output).run(assembly)


__all__ = ["Runner", "run"]
