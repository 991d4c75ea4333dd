"""Console reporter built on rich."""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console
from rich.padding import Padding
from rich.text import Text

from femtotest.discovery import ScopeKind
from femtotest.formatting import format_arguments, format_target, type_name
from femtotest.reports.tracebacks import extract_lines, simplify_traceback
from femtotest.stats import Stats


_RULE_WIDTH = 40


def _indent_step(target: Any) -> int:
    return 2 if getattr(target, "kind", None) is ScopeKind.METHOD else 1


class ConsoleReporter:
    """Plain-text trace and summary.

    Errors, warnings and the summary are always shown. With ``verbose`` every
    scope is listed as it starts, indented under its parent, along with any
    output the code under test produced.
    """

    def __init__(self, console: Console | None = None, verbose: bool = False) -> None:
        # Bind the real stdout now; output capture swaps sys.stdout later.
        self.console = console or Console(file=sys.stdout, highlight=False)
        self.verbose = verbose
        self._depth = 0
        self._scopes: list[str] = []

    def _write(self, text: Text | str, style: str | None = None) -> None:
        if isinstance(text, str):
            text = Text(text, style=style or "")
        self.console.print(Padding(text, (0, 0, 0, self._depth * 2), expand=False))

    def on_test_start(self, target: Any, arguments: tuple[Any, ...] | None) -> None:
        label = f"{format_target(target)}{format_arguments(arguments)}"
        self._scopes.append(label)
        if self.verbose:
            self._write(label)
        self._depth += _indent_step(target)

    def on_test_end(self, stats: Stats) -> None:
        self._depth = max(self._depth - _indent_step(stats.target), 0)
        if self._scopes:
            self._scopes.pop()

    def on_exception(self, exc: BaseException) -> None:
        if isinstance(exc, AssertionError):
            headline = f"Assertion failed - {exc}"
        else:
            headline = f"Exception {type_name(type(exc))}: {exc}"

        self.console.print()
        if not self.verbose and self._scopes:
            self._write(" > ".join(self._scopes), style="bold")
        self._write(headline, style="red")
        self.console.print()

        frames = simplify_traceback(exc)
        for frame in frames:
            self._write(f"  {frame.name} - [{frame.filename}]({frame.lineno})")

        if frames:
            first = frames[0]
            self.console.print()
            for lineno, line in extract_lines(first.filename, first.lineno):
                marker = "->" if lineno == first.lineno else "  "
                self._write(f"  {lineno:05d}:{marker}{line}")

        self.console.print()

    def on_warning(self, text: str) -> None:
        self._write(text, style="yellow")

    def on_output(self, text: str) -> None:
        if self.verbose and text:
            self._write(text.rstrip("\n"), style="dim")

    def on_run_complete(self, stats: Stats, other_ms: float, total_ms: float) -> None:
        framework_ms = total_ms - (stats.elapsed_ms + other_ms)
        self.console.print()
        self.console.print(f"Test cases:     {stats.elapsed_ms:10,.0f}ms", markup=False)
        self.console.print(f"Setup/teardown: {other_ms:10,.0f}ms", markup=False)
        self.console.print(f"Test framework: {framework_ms:10,.0f}ms", markup=False)

        if stats.success:
            rule = "-" * _RULE_WIDTH
            summary = f"All {stats.passed} tests passed"
            style = "green"
        else:
            rule = "*" * _RULE_WIDTH
            summary = f"{stats.errors} Errors, {stats.warnings} Warnings, {stats.passed} passed"
            style = "bold red"

        self.console.print()
        self.console.print(rule, style=style, markup=False)
        self.console.print(summary, style=style, markup=False)
        self.console.print(rule, style=style, markup=False)
        self.console.print()


__all__ = ["ConsoleReporter"]
