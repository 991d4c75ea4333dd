"""Project configuration read from ``[tool.femtotest]`` in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from femtotest.discovery import DEFAULT_PATTERN
from femtotest.errors import ConfigError


logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"


class FemtoConfig(BaseModel):
    """Settings shared by the CLI and :func:`femtotest.run_main`.

    Attributes:
        test_paths: Files or directories searched when none are given on the
            command line.
        pattern: Glob matched against file names when searching directories.
        run_all: Ignore active markers (same as ``-a``).
        verbose: Per-test trace (same as ``-v``).
        show_output: Let test output through live instead of capturing it
            (same as ``-d``).
        reporter: Registry name or ``module:Class`` import path of the reporter.
        fail_on_error: Exit with status 1 when a run has errors or warnings.
            Off by default: the exit status is 0 whatever the outcome.
        addopts: Extra command-line flags prepended to ``sys.argv``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    test_paths: list[str] = Field(default_factory=lambda: ["."])
    pattern: str = DEFAULT_PATTERN
    run_all: bool = False
    verbose: bool = False
    show_output: bool = False
    reporter: str = "console"
    fail_on_error: bool = False
    addopts: list[str] = Field(default_factory=list)


DEFAULT_CONFIG = FemtoConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Nearest pyproject.toml at or above ``start`` (default: cwd)."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> FemtoConfig:
    """Load configuration, falling back to defaults when there is none.

    Raises:
        ConfigError: If the table exists but is invalid.
    """
    path = path or find_pyproject()
    if path is None:
        return DEFAULT_CONFIG

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return DEFAULT_CONFIG

    table = data.get("tool", {}).get("femtotest")
    if table is None:
        return DEFAULT_CONFIG

    try:
        config = FemtoConfig.model_validate(table)
    except ValidationError as exc:
        raise ConfigError(path, exc) from exc

    logger.debug("Loaded configuration from %s", path)
    return config


__all__ = ["DEFAULT_CONFIG", "FemtoConfig", "find_pyproject", "load_config"]
