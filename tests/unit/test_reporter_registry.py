"""Tests for femtotest.reports.registry module."""

import pytest

from femtotest.reports import ConsoleReporter, NullReporter
from femtotest.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
)


@pytest.fixture(autouse=True)
def clean_registry():
    """Clear the reporter registry before and after each test."""
    clear_reporter_registry()
    yield
    clear_reporter_registry()


class DummyReporter(NullReporter):
    """Minimal reporter for testing."""


class TestReporterDecorator:
    def test_registers_class(self):
        @reporter
        class MyReporter(DummyReporter):
            pass

        registry = get_reporter_registry()
        assert registry["MyReporter"] is MyReporter

    def test_registers_with_custom_name(self):
        @reporter(name="custom")
        class MyReporter(DummyReporter):
            pass

        registry = get_reporter_registry()
        assert "MyReporter" not in registry
        assert registry["custom"] is MyReporter

    def test_returns_original_class(self):
        @reporter
        class MyReporter(DummyReporter):
            pass

        assert MyReporter.__name__ == "MyReporter"
        assert isinstance(MyReporter(), DummyReporter)


class TestResolveReporter:
    def test_resolve_from_registry_with_verbose(self):
        @reporter
        class TestReporter(DummyReporter):
            pass

        instance = resolve_reporter("TestReporter", verbose=True)
        assert isinstance(instance, TestReporter)
        assert instance.verbose

    def test_resolve_builtins(self):
        assert isinstance(resolve_reporter("console"), ConsoleReporter)
        assert isinstance(resolve_reporter("null"), NullReporter)

    def test_resolve_import_string_colon(self):
        instance = resolve_reporter("femtotest.reports.console:ConsoleReporter")

        assert isinstance(instance, ConsoleReporter)

    def test_resolve_import_string_dot(self):
        instance = resolve_reporter("femtotest.reports.base.NullReporter")

        assert isinstance(instance, NullReporter)

    def test_resolve_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown reporter: NonExistent. Available: console, null"):
            resolve_reporter("NonExistent")

    def test_resolve_invalid_import_raises(self):
        with pytest.raises(ModuleNotFoundError):
            resolve_reporter("nonexistent.module:Reporter")

    def test_resolve_non_class_raises(self):
        with pytest.raises(TypeError, match="is not a class"):
            resolve_reporter("femtotest.reports.registry:resolve_reporter")


class TestBuiltinRegistration:
    def test_builtin_persists_after_clear(self):
        register_builtin("builtin-test", DummyReporter)
        try:
            clear_reporter_registry()
            assert get_reporter_registry()["builtin-test"] is DummyReporter
        finally:
            from femtotest.reports import registry

            registry._builtin_registry.pop("builtin-test")

    def test_user_reporters_are_dropped_on_clear(self):
        @reporter
        class Temporary(DummyReporter):
            pass

        clear_reporter_registry()
        assert "Temporary" not in get_reporter_registry()
