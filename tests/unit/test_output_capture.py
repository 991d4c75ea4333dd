"""Tests for sys-level output capture."""

import sys

from femtotest.capture import OutputBuffer, OutputCapture, output_capture


class TestOutputBuffer:
    def test_read_returns_and_clears_text(self):
        buf = OutputBuffer()
        buf.write("hello")

        assert buf.read() == "hello"
        assert buf.read() == ""


class TestOutputCapture:
    def test_install_replaces_sys_streams(self):
        original_stdout = sys.stdout
        original_stderr = sys.stderr
        capture = OutputCapture()

        capture.install()

        assert sys.stdout is not original_stdout
        assert sys.stderr is not original_stderr

        capture.uninstall()

        assert sys.stdout is original_stdout
        assert sys.stderr is original_stderr

    def test_stdout_and_stderr_are_interleaved(self, capsys):
        with output_capture() as capture:
            print("one")
            sys.stderr.write("two\n")
            print("three")

        assert capture.read() == "one\ntwo\nthree\n"
        out, err = capsys.readouterr()
        assert out == ""
        assert err == ""

    def test_disabled_capture_yields_none(self, capsys):
        with output_capture(enabled=False) as capture:
            print("live")

        assert capture is None
        assert capsys.readouterr().out == "live\n"
