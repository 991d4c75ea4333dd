"""Command-line entry points."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from types import ModuleType

from rich.console import Console
from rich.logging import RichHandler

from femtotest.config import DEFAULT_CONFIG, FemtoConfig, load_config
from femtotest.discovery import collect
from femtotest.errors import ConfigError
from femtotest.reflection import Assembly
from femtotest.reports import resolve_reporter
from femtotest.runner import Runner
from femtotest.stats import Stats


def main() -> None:
    """Entry point for the ``femtotest`` console script."""
    raise SystemExit(_run(None, None))


def run_main(argv: Sequence[str] | None = None, module: ModuleType | None = None) -> int:
    """Run tests and return the process exit status.

    Called without ``module`` from a test file, it runs the fixtures in
    ``__main__``:

        if __name__ == "__main__":
            raise SystemExit(femtotest.run_main())

    Paths given on the command line take precedence over ``module``.
    """
    if module is None:
        module = sys.modules["__main__"]
    return _run(argv, module)


def _run(argv: Sequence[str] | None, module: ModuleType | None) -> int:
    console = Console(file=sys.stdout, highlight=False)
    try:
        config = load_config()
    except ConfigError as exc:
        console.print(f"Warning: {exc}\nUsing default configuration", markup=False, soft_wrap=True)
        config = DEFAULT_CONFIG

    parser = _build_parser()
    raw = list(sys.argv[1:] if argv is None else argv)
    args, unknown = parser.parse_known_args([*config.addopts, *raw])

    for flag in unknown:
        console.print(f"Warning: Unknown switch '{flag}' ignored", markup=False, soft_wrap=True)
    if args.help:
        console.print(parser.format_help(), markup=False)

    verbose = args.verbose or config.verbose
    _configure_logging(verbose)
    try:
        reporter = resolve_reporter(config.reporter, verbose=verbose)
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        console.print(f"Warning: {exc}; using the console reporter", markup=False, soft_wrap=True)
        reporter = resolve_reporter(DEFAULT_CONFIG.reporter, verbose=verbose)
    runner = Runner(
        reporter,
        run_all=args.run_all or config.run_all,
        capture_output=not (args.show_output or config.show_output),
    )

    try:
        assembly = _resolve_assembly(args.paths, module, config)
    except Exception as exc:
        stats = Stats(errors=1)
        reporter.on_exception(exc)
        reporter.on_run_complete(stats, 0.0, 0.0)
        return _exit_code(stats, config)

    stats = runner.run(assembly)
    return _exit_code(stats, config)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="femtotest",
        description="Run femtotest fixtures",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", help="Test files or directories")
    parser.add_argument(
        "-d",
        "--show-output",
        action="store_true",
        help="Show test output in the console while the test runs",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show the name of each test as it runs",
    )
    parser.add_argument(
        "-a",
        "--run-all",
        action="store_true",
        help="Run all tests even if one or more are marked as active",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show help")
    return parser


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("femtotest")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        # Bind stderr now; output capture replaces sys.stderr during the run.
        logger.addHandler(RichHandler(console=Console(file=sys.stderr), show_path=False))
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def _resolve_assembly(
    paths: Sequence[str],
    module: ModuleType | None,
    config: FemtoConfig,
) -> Assembly:
    if paths:
        return collect(paths, config.pattern)
    if module is not None:
        return Assembly.from_modules(module)
    return collect(config.test_paths, config.pattern)


def _exit_code(stats: Stats, config: FemtoConfig) -> int:
    if config.fail_on_error and not stats.success:
        return 1
    return 0


__all__ = ["main", "run_main"]
