"""Tests for logs.py module."""

import io
import logging
from datetime import timedelta

from dep_ensure.logs import Emitter, format_duration


class TestFormatDuration:
    """Tests for format_duration function."""

    def test_zero(self):
        """Zero duration should render as 0s."""
        assert format_duration(timedelta(0)) == "0s"

    def test_fractional_seconds(self):
        """Should keep significant fractional digits."""
        assert format_duration(timedelta(seconds=1.5)) == "1.5s"

    def test_whole_seconds(self):
        """Should drop a zero fraction."""
        assert format_duration(timedelta(seconds=10)) == "10s"

    def test_minutes(self):
        """Should split out whole minutes."""
        assert format_duration(timedelta(minutes=2, seconds=3.25)) == "2m3.25s"

    def test_negative_clamped(self):
        """Negative durations should clamp to zero."""
        assert format_duration(timedelta(seconds=-5)) == "0s"


class TestEmitter:
    """Tests for Emitter class."""

    def test_indentation_levels(self):
        """Each method should indent by its level."""
        stream = io.StringIO()
        emitter = Emitter(stream)

        emitter.title("Title")
        emitter.process("Process")
        emitter.subprocess("Sub")
        emitter.action("Action")

        assert stream.getvalue().splitlines() == [
            "Title",
            "  Process",
            "    Sub",
            "    Action",
        ]

    def test_detail_splits_lines(self):
        """detail should write each input line separately."""
        stream = io.StringIO()
        Emitter(stream).detail("one\ntwo\n")

        assert stream.getvalue() == "      one\n      two\n"

    def test_break(self):
        """break_ should write an empty line."""
        stream = io.StringIO()
        Emitter(stream).break_()
        assert stream.getvalue() == "\n"

    def test_mirrors_to_logging(self, caplog):
        """Emitted lines should also reach the logger at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="dep_ensure.logs"):
            Emitter(io.StringIO()).title("Some Buildpack 1.0.0")

        assert "Some Buildpack 1.0.0" in caplog.text

    def test_defaults_to_stdout(self, capsys):
        """Without a stream the emitter should write to stdout."""
        Emitter().title("hello")
        assert capsys.readouterr().out == "hello\n"
