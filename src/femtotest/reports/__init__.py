"""Reporting module for femtotest output."""

from femtotest.reports.base import NullReporter, Reporter
from femtotest.reports.console import ConsoleReporter
from femtotest.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
)


register_builtin("console", ConsoleReporter)
register_builtin("null", NullReporter)

__all__ = [
    "ConsoleReporter",
    "NullReporter",
    "Reporter",
    "clear_reporter_registry",
    "get_reporter_registry",
    "reporter",
    "resolve_reporter",
]
