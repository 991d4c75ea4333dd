"""femtotest - a small declarative test framework."""

from . import assertions
from .assertions import AssertionFailedError
from .cli import run_main
from .discovery import collect, discover
from .markers import fixture, fixture_setup, fixture_teardown, setup, teardown, test
from .providers import provider
from .reflection import Assembly, ModuleReflector, Reflector
from .reports import ConsoleReporter, NullReporter, Reporter, reporter
from .runner import Runner, run
from .stats import Stats
from .version import __version__


__all__ = [
    # Markers
    "fixture",
    "fixture_setup",
    "fixture_teardown",
    "provider",
    "setup",
    "teardown",
    "test",
    # Running
    "Assembly",
    "ModuleReflector",
    "Reflector",
    "Runner",
    "Stats",
    "collect",
    "discover",
    "run",
    "run_main",
    # Assertions
    "AssertionFailedError",
    "assertions",
    # Reporting
    "ConsoleReporter",
    "NullReporter",
    "Reporter",
    "reporter",
]
