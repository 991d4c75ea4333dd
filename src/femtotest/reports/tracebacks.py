"""Traceback simplification and source extracts for failure display."""

from __future__ import annotations

import linecache
import traceback
from dataclasses import dataclass
from types import FrameType


@dataclass(frozen=True)
class Frame:
    name: str
    filename: str
    lineno: int


def _is_hidden(frame: FrameType) -> bool:
    if frame.f_locals.get("__tracebackhide__") or frame.f_globals.get("__tracebackhide__"):
        return True
    module = frame.f_globals.get("__name__", "")
    return module == "femtotest" or module.startswith("femtotest.")


def simplify_traceback(exc: BaseException) -> list[Frame]:
    """Frames of ``exc``'s traceback that belong to the code under test.

    Drops framework frames, frames of functions that set
    ``__tracebackhide__`` and frames without a source file.
    """
    frames: list[Frame] = []
    for frame, lineno in traceback.walk_tb(exc.__traceback__):
        filename = frame.f_code.co_filename
        if _is_hidden(frame) or filename.startswith("<"):
            continue
        frames.append(Frame(name=frame.f_code.co_name, filename=filename, lineno=lineno))
    return frames


def extract_lines(filename: str, lineno: int, extra: int = 2) -> list[tuple[int, str]]:
    """Up to ``2 * extra + 1`` source lines centred on ``lineno``.

    Near the top of the file the window slides down instead of shrinking.
    Returns an empty list when the source is unavailable.
    """
    lineno = max(lineno, extra + 1)
    lines: list[tuple[int, str]] = []
    for n in range(lineno - extra, lineno + extra + 1):
        text = linecache.getline(filename, n)
        if not text:
            break
        lines.append((n, text.rstrip("\n")))
    return lines
