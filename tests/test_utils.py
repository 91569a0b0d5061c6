"""Unit tests for utility modules."""

import json
from datetime import datetime, timezone

import pytest

from codec import hex as hexcodec
from core.errors import InvalidArgument, KsuidError
from core.ksuid import Ksuid
from internal.logging import LogLevel, StructuredLogger
from utils.timestamp import GREGORIAN_CYCLE_SECONDS, format_clock_time, format_timestamp, now_micros, to_datetime


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert ts.endswith("Z")

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        ts = format_timestamp()
        decimal_part = ts.split(".")[1].split("Z")[0]
        assert len(decimal_part) == 6

    def test_now_micros_reasonable_value(self):
        """now_micros returns reasonable timestamp."""
        micros = now_micros()
        assert isinstance(micros, int)
        assert micros > 1577836808000000  # 2020-01-01

    def test_format_clock_time_utc(self):
        """Clock time uses the Go reference layout."""
        assert format_clock_time(244388072, timezone.utc) == "1977-09-29 13:34:32 +0000 UTC"

    def test_format_clock_time_past_year_9999(self):
        """Years beyond datetime's range shift by whole 400-year cycles."""
        seconds = 244388072 + 25 * GREGORIAN_CYCLE_SECONDS
        assert format_clock_time(seconds, timezone.utc) == "11977-09-29 13:34:32 +0000 UTC"

    def test_format_clock_time_cycle_boundary(self):
        """Rendering is continuous across the shift threshold."""
        start = int(datetime(9000, 1, 1, tzinfo=timezone.utc).timestamp())
        assert format_clock_time(start - 1, timezone.utc) == "8999-12-31 23:59:59 +0000 UTC"
        assert format_clock_time(start, timezone.utc) == "9000-01-01 00:00:00 +0000 UTC"

    def test_to_datetime_local_is_aware(self):
        """Local conversion yields an aware datetime."""
        assert to_datetime(0).tzinfo is not None


class TestHex:
    """Tests for the hex codec."""

    def test_encode_uppercase(self):
        """Hex output is uppercase."""
        text = b"The quick brown fox jumps over the lazy dog"
        assert hexcodec.encode(text) == (
            "54686520717569636B2062726F776E20666F78206A756D7073206F76657220746865206C617A7920646F67"
        )

    def test_encode_empty(self):
        """Empty input gives empty output."""
        assert hexcodec.encode(b"") == ""


class TestErrors:
    """Tests for error types."""

    def test_invalid_argument_context(self):
        """Expected and actual land in the context."""
        err = InvalidArgument("bad length", expected=16, actual=3)
        assert err.context == {"expected": 16, "actual": 3}
        assert str(err) == "bad length"

    def test_invalid_argument_hierarchy(self):
        """InvalidArgument is a KsuidError and a ValueError."""
        err = InvalidArgument("bad")
        assert isinstance(err, KsuidError)
        assert isinstance(err, ValueError)

    def test_error_timestamp(self):
        """Errors record when they were raised."""
        assert KsuidError("boom").timestamp.endswith("Z")


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_emits_json(self, capsys):
        """Records are JSON lines on stderr."""
        StructuredLogger(LogLevel.INFO).info("hello", count=2)
        record = json.loads(capsys.readouterr().err)
        assert record["msg"] == "hello"
        assert record["level"] == "INFO"
        assert record["count"] == 2

    def test_level_filter(self, capsys):
        """Records below the level are dropped."""
        StructuredLogger(LogLevel.WARN).debug("quiet")
        assert capsys.readouterr().err == ""

    def test_error_field(self, capsys):
        """Errors are rendered as strings."""
        StructuredLogger(LogLevel.INFO).warn("parse failed", error=InvalidArgument("bad"))
        assert json.loads(capsys.readouterr().err)["err"] == "bad"

    def test_parse_level(self):
        """Level names are case-insensitive."""
        assert LogLevel.parse("warn") == LogLevel.WARN
        assert LogLevel.parse("ERROR") == LogLevel.ERROR

    def test_parse_unknown_level(self):
        """Unknown level names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.parse("loud")

    def test_component_and_bound_fields(self, capsys):
        """Child loggers stamp their component and bound fields on each record."""
        log = StructuredLogger(LogLevel.INFO).bind("generator", supplier="urandom")
        log.info("ready", count=1)
        record = json.loads(capsys.readouterr().err)
        assert record["component"] == "generator"
        assert record["supplier"] == "urandom"
        assert record["count"] == 1

    def test_bind_keeps_level(self, capsys):
        """Children inherit the parent's threshold."""
        StructuredLogger(LogLevel.WARN).bind("cli").info("quiet")
        assert capsys.readouterr().err == ""

    def test_ksuid_values_are_strings(self, capsys):
        """Non-JSON values such as a Ksuid are written with str()."""
        value = Ksuid.from_parts(0, bytes(16))
        StructuredLogger(LogLevel.INFO).info("parsed", ksuid=value)
        assert json.loads(capsys.readouterr().err)["ksuid"] == str(value)


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils import crash
        original = crash._crash_log

        crash.configure("/tmp/test_crash.log")
        assert crash._crash_log == "/tmp/test_crash.log"

        # Restore
        crash.configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        import sys
        from utils.crash import install_crash_handler, log_crash

        original_hook = sys.excepthook
        install_crash_handler()

        assert sys.excepthook == log_crash

        # Restore
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        """Crashes are tagged with a KSUID and appended to the file."""
        from utils import crash
        original = crash._crash_log
        crash_file = tmp_path / "logs" / "crash.log"
        crash.configure(str(crash_file))
        try:
            crash.log_crash(RuntimeError, RuntimeError("boom"), None)
        finally:
            crash.configure(original)

        record = json.loads(crash_file.read_text().splitlines()[0])
        assert record["type"] == "RuntimeError"
        assert record["msg"] == "boom"
        assert len(record["id"]) == 29
        assert f"CRASH [{record['id']}]" in capsys.readouterr().err

    def test_crash_record_is_keyed_by_ksuid(self):
        """The record id is a KSUID whose rendered time matches the record."""
        from utils.crash import crash_record

        record = crash_record(ValueError, ValueError("bad"), None, argv=["-f", "time"])
        crash_id = Ksuid.from_string(record["id"])
        assert record["time"] == crash_id.time()
        assert record["argv"] == ["-f", "time"]
        assert record["type"] == "ValueError"
        assert record["traceback"].strip().endswith("ValueError: bad")
