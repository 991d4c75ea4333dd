"""Per-scope counters and the timers used by the engine."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Stats:
    """Outcome counters for one scope.

    ``elapsed_ms`` only ever accumulates time spent inside test bodies.
    """

    target: Any = None
    errors: int = 0
    warnings: int = 0
    passed: int = 0
    elapsed_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.errors == 0 and self.warnings == 0

    def add(self, other: Stats) -> None:
        self.errors += other.errors
        self.warnings += other.warnings
        self.passed += other.passed
        self.elapsed_ms += other.elapsed_ms


class StatsStack:
    """LIFO of :class:`Stats`, one entry per active scope.

    The bottom entry is the run root and is never popped by :meth:`pop`.
    """

    def __init__(self) -> None:
        self._stack: list[Stats] = [Stats()]

    @property
    def current(self) -> Stats:
        return self._stack[-1]

    @property
    def root(self) -> Stats:
        return self._stack[0]

    def push(self, target: Any) -> Stats:
        stats = Stats(target=target)
        self._stack.append(stats)
        return stats

    def pop(self) -> Stats:
        """Close the current scope and merge it into its parent."""
        if len(self._stack) == 1:
            msg = "Cannot pop the root stats"
            raise IndexError(msg)
        stats = self._stack.pop()
        self.current.add(stats)
        return stats


@dataclass
class Stopwatch:
    """Accumulating timer; may be started and stopped repeatedly."""

    _elapsed: float = 0.0
    _started_at: float | None = field(default=None, repr=False)

    @classmethod
    def start_new(cls) -> Stopwatch:
        sw = cls()
        sw.start()
        return sw

    @property
    def elapsed_ms(self) -> float:
        elapsed = self._elapsed
        if self._started_at is not None:
            elapsed += time.perf_counter() - self._started_at
        return elapsed * 1000

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = time.perf_counter()

    def stop(self) -> None:
        if self._started_at is not None:
            self._elapsed += time.perf_counter() - self._started_at
            self._started_at = None


__all__ = ["Stats", "StatsStack", "Stopwatch"]
