"""Tests for gifascii.error_handling."""

import logging

import pytest

from gifascii.error_handling import (
    CacheBuildError,
    ConfigurationError,
    DecodeError,
    ErrorLevel,
    ExportError,
    GifAsciiError,
    LockContention,
    NoMediaLoaded,
    NotCached,
    error_context,
    format_context,
    handle_error,
    log_info_with_context,
    log_warning_with_context,
)


class TestErrorTypes:
    @pytest.mark.parametrize(
        "error_type", [DecodeError, CacheBuildError, LockContention, NotCached, ExportError, ConfigurationError]
    )
    def test_all_are_gifascii_errors(self, error_type):
        assert issubclass(error_type, GifAsciiError)

    def test_no_media_loaded_is_not_cached(self):
        assert issubclass(NoMediaLoaded, NotCached)

    def test_str_includes_cause(self):
        error = DecodeError("Cannot decode", cause=ValueError("bad header"))
        assert str(error) == "Cannot decode (caused by: bad header)"

    def test_str_without_cause(self):
        error = NotCached("Width 5 not cached", context={"cached_widths": "20-250"})
        assert str(error) == "Width 5 not cached"
        assert error.context == {"cached_widths": "20-250"}


class TestHandleError:
    def test_reraises_transformed(self):
        original = OSError("disk full")

        with pytest.raises(ExportError) as exc_info:
            handle_error(original, "write frames", ExportError, context={"path": "x.txt"})

        error = exc_info.value
        assert "Failed to write frames: disk full" in str(error)
        assert error.cause is original
        assert error.__cause__ is original
        assert error.context["path"] == "x.txt"
        assert error.context["original_error_type"] == "OSError"

    def test_returns_when_not_reraising(self, caplog):
        with caplog.at_level(logging.WARNING):
            error = handle_error(
                ValueError("x"), "parse", DecodeError, level=ErrorLevel.WARNING, reraise=False
            )

        assert isinstance(error, DecodeError)
        assert "Parse failed: x" in caplog.text


class TestErrorContext:
    def test_wraps_foreign_exceptions(self):
        with pytest.raises(CacheBuildError, match="Failed to build widths"):
            with error_context("build widths", CacheBuildError):
                raise MemoryError("out of memory")

    def test_passes_gifascii_errors_through(self):
        with pytest.raises(DecodeError, match="already typed"):
            with error_context("build widths", CacheBuildError):
                raise DecodeError("already typed")

    def test_no_error(self):
        with error_context("noop"):
            value = 1
        assert value == 1


class TestLogHelpers:
    def test_warning_with_context(self, caplog):
        with caplog.at_level(logging.WARNING):
            log_warning_with_context("Slow build", {"width": 250})
        assert "Slow build (context: width=250)" in caplog.text

    def test_info_without_context(self, caplog):
        with caplog.at_level(logging.INFO):
            log_info_with_context("Loaded")
        assert "Loaded" in caplog.text


class TestFormatContext:
    def test_pairs(self):
        assert format_context({"file": "a.gif", "frames": 3}) == " (context: file=a.gif, frames=3)"

    def test_empty(self):
        assert format_context(None) == ""
        assert format_context({"operation": "x"}, skip=("operation",)) == ""


class TestErrorLevels:
    def test_levels_map_to_logging(self):
        assert [level.value for level in ErrorLevel] == [logging.WARNING, logging.ERROR]

    def test_error_level_record(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="gifascii.tests"):
            handle_error(
                KeyError("k"),
                "look up width",
                NotCached,
                context={"width": 19},
                logger=logging.getLogger("gifascii.tests"),
                reraise=False,
            )

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Look up width failed" in errors[0].message
        assert "width=19" in errors[0].message
        assert "operation=" not in errors[0].message
