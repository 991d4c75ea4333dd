"""End-to-end tests for the command-line entry points."""

import textwrap
import types

import pytest

import femtotest as ft
from femtotest.cli import run_main


PASSING = """
import femtotest as ft
from femtotest import assertions as a


@ft.fixture()
class Arithmetic:
    @ft.test(2, 3, 5)
    @ft.test(0, 0, 0)
    def adds(self, x, y, total):
        print("adding", x, y)
        a.are_equal(x + y, total)
"""

FAILING = """
import femtotest as ft
from femtotest import assertions as a


@ft.fixture()
class Strings:
    @ft.test()
    def greets(self):
        a.are_equal("hello world", "hello there")
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_suite(directory, name, body):
    path = directory / name
    path.write_text(textwrap.dedent(body))
    return path


def test_passing_run_prints_summary(workdir, capsys):
    path = write_suite(workdir, "test_cli_passing_suite.py", PASSING)

    assert run_main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "All 2 tests passed" in out
    assert "adding" not in out


def test_verbose_run_traces_tests_and_output(workdir, capsys):
    path = write_suite(workdir, "test_cli_verbose_suite.py", PASSING)

    run_main(["-v", str(path)])

    out = capsys.readouterr().out
    assert "testfixture Arithmetic()" in out
    assert "test adds(2, 3, 5)" in out
    assert "adding 2 3" in out


def test_show_output_lets_prints_through(workdir, capsys):
    path = write_suite(workdir, "test_cli_show_output_suite.py", PASSING)

    run_main(["-d", str(path)])

    assert "adding 0 0" in capsys.readouterr().out


def test_failures_are_reported_but_exit_zero_by_default(workdir, capsys):
    path = write_suite(workdir, "test_cli_failing_suite.py", FAILING)

    assert run_main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "Strings are not equal at offset 6" in out
    assert "1 Errors, 0 Warnings, 0 passed" in out


def test_fail_on_error_sets_exit_status(workdir):
    write_suite(workdir, "pyproject.toml", "[tool.femtotest]\nfail_on_error = true\n")
    path = write_suite(workdir, "test_cli_strict_suite.py", FAILING)

    assert run_main([str(path)]) == 1


def test_unknown_switches_warn_and_help_continues(workdir, capsys):
    path = write_suite(workdir, "test_cli_switches_suite.py", PASSING)

    assert run_main(["--bogus", "-h", str(path)]) == 0

    out = capsys.readouterr().out
    assert "Warning: Unknown switch '--bogus' ignored" in out
    assert "--run-all" in out
    assert "All 2 tests passed" in out


def test_missing_path_is_reported_as_error(workdir, capsys):
    assert run_main(["does_not_exist.py"]) == 0

    out = capsys.readouterr().out
    assert "No such file or directory" in out
    assert "1 Errors" in out


def test_run_main_uses_given_module(workdir, capsys):
    module = types.ModuleType("cli_inline_module")

    @ft.fixture()
    class Inline:
        @ft.test()
        def works(self):
            pass

    Inline.__module__ = module.__name__
    module.Inline = Inline

    assert run_main([], module) == 0
    assert "All 1 tests passed" in capsys.readouterr().out


def test_invalid_config_warns_and_runs_with_defaults(workdir, capsys):
    write_suite(workdir, "pyproject.toml", "[tool.femtotest]\nbogus = 1\n")
    path = write_suite(workdir, "test_cli_bad_config_suite.py", PASSING)

    assert run_main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "Warning: Invalid femtotest configuration" in out
    assert "Using default configuration" in out
    assert "All 2 tests passed" in out


def test_unknown_reporter_falls_back_to_console(workdir, capsys):
    write_suite(workdir, "pyproject.toml", '[tool.femtotest]\nreporter = "nonexistent"\n')
    path = write_suite(workdir, "test_cli_bad_reporter_suite.py", PASSING)

    assert run_main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "Unknown reporter: nonexistent" in out
    assert "using the console reporter" in out
    assert "All 2 tests passed" in out


def test_broken_file_does_not_stop_the_others(workdir, capsys):
    suite = workdir / "suite"
    suite.mkdir()
    write_suite(suite, "test_cli_good_suite.py", PASSING)
    write_suite(suite, "test_cli_broken_suite.py", "import does_not_exist_xyz\n")

    assert run_main([str(suite)]) == 0

    out = capsys.readouterr().out
    assert "Cannot import test module" in out
    assert "1 Errors, 0 Warnings, 2 passed" in out
