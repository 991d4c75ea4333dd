"""Capture of ambient output written while fixtures and tests execute.

Redirects Python-level ``sys.stdout``/``sys.stderr`` writes into a buffer so
the reporter can decide whether to show them. Output written directly to
file descriptors 1/2 (subprocesses, C extensions) is not captured.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class OutputBuffer:
    """Interleaved stdout/stderr text captured since the last read."""

    _text: io.StringIO = field(default_factory=io.StringIO)

    def write(self, s: str) -> None:
        self._text.write(s)

    def read(self) -> str:
        """Return and clear the captured text."""
        out = self._text.getvalue()
        self._text.seek(0)
        self._text.truncate()
        return out


class _StreamRedirect(io.TextIOBase):
    """Stand-in for sys.stdout/stderr that writes into an OutputBuffer."""

    def __init__(self, original: TextIO, buffer: OutputBuffer) -> None:
        self._original = original
        self._buffer = buffer

    def write(self, s: str) -> int:
        self._buffer.write(s)
        return len(s)

    def flush(self) -> None:
        self._original.flush()

    @property
    def encoding(self) -> str:
        return getattr(self._original, "encoding", "utf-8")

    def fileno(self) -> int:
        return self._original.fileno()

    def isatty(self) -> bool:
        return False


class OutputCapture:
    """Installs and removes the stream redirects for one run."""

    def __init__(self) -> None:
        self.buffer = OutputBuffer()
        self._original_stdout: TextIO | None = None
        self._original_stderr: TextIO | None = None

    def install(self) -> None:
        self._original_stdout = sys.stdout
        self._original_stderr = sys.stderr
        sys.stdout = _StreamRedirect(self._original_stdout, self.buffer)
        sys.stderr = _StreamRedirect(self._original_stderr, self.buffer)

    def uninstall(self) -> None:
        if self._original_stdout is not None:
            sys.stdout = self._original_stdout
        if self._original_stderr is not None:
            sys.stderr = self._original_stderr
        self._original_stdout = None
        self._original_stderr = None

    def read(self) -> str:
        return self.buffer.read()


@contextmanager
def output_capture(enabled: bool = True) -> Iterator[OutputCapture | None]:
    """Capture output for the duration of the block.

    Yields None when ``enabled`` is False so callers can leave output live.
    """
    if not enabled:
        yield None
        return
    capture = OutputCapture()
    capture.install()
    try:
        yield capture
    finally:
        capture.uninstall()


__all__ = ["OutputBuffer", "OutputCapture", "output_capture"]
