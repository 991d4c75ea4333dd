"""Reporter protocol: the events the engine emits during a run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from femtotest.stats import Stats


class Reporter(Protocol):
    """Receives every engine event, in order.

    Implementations may choose not to render an event, but the engine always
    makes the call. Reporters resolved by name are constructed with a single
    ``verbose`` keyword argument.
    """

    def on_test_start(self, target: Any, arguments: tuple[Any, ...] | None) -> None:
        """Called when any scope is entered, whether or not it ends up executing."""
        ...

    def on_exception(self, exc: BaseException) -> None:
        """Called for every caught error (assertion or otherwise)."""
        ...

    def on_warning(self, text: str) -> None:
        """Called when an argument tuple is skipped."""
        ...

    def on_output(self, text: str) -> None:
        """Called with output captured while fixture or test code ran."""
        ...

    def on_test_end(self, stats: Stats) -> None:
        """Called when a scope is left, with its final stats."""
        ...

    def on_run_complete(self, stats: Stats, other_ms: float, total_ms: float) -> None:
        """Called once at the end of the run with the root stats."""
        ...


class NullReporter(Reporter):
    """Silent reporter."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def on_test_start(self, target: Any, arguments: tuple[Any, ...] | None) -> None:
        pass

    def on_exception(self, exc: BaseException) -> None:
        pass

    def on_warning(self, text: str) -> None:
        pass

    def on_output(self, text: str) -> None:
        pass

    def on_test_end(self, stats: Stats) -> None:
        pass

    def on_run_complete(self, stats: Stats, other_ms: float, total_ms: float) -> None:
        pass
