"""Tests for exception capture (from_unsafe, wrap) and its configuration."""

from __future__ import annotations

import io

import orjson
import pytest

from resultkit import Failure, Result, Success, from_unsafe, get_settings, wrap
from resultkit.config import clear_settings_cache
from resultkit.logging import configure_logging


def unsafely_get_string() -> str:
    return "Hello world!"


def length(s: str) -> int:
    """Length of a non-empty string."""
    if not s:
        raise ValueError("empty string")
    return len(s)


# ═════════════════════════════════════════════════════════════════════════════
# from_unsafe
# ═════════════════════════════════════════════════════════════════════════════


def test_from_unsafe_success() -> None:
    assert from_unsafe(unsafely_get_string).unwrap() == "Hello world!"
    assert Result.from_unsafe(unsafely_get_string) == Success("Hello world!")


def test_from_unsafe_failure_captures_exception() -> None:
    error = OSError("unreachable")

    def fail() -> str:
        raise error

    result = from_unsafe(fail)

    assert result.error_or_none() is error
    with pytest.raises(OSError) as info:
        result.unwrap()
    assert info.value is error


def test_from_unsafe_runs_exactly_once() -> None:
    calls: list[int] = []

    result = from_unsafe(lambda: calls.append(1) or len(calls))

    assert calls == [1]
    result.map(str)
    result.unwrap()
    assert calls == [1]


def test_from_unsafe_narrowed_exceptions() -> None:
    assert from_unsafe(lambda: {}["k"], exceptions=(KeyError,)).is_failure()

    with pytest.raises(ZeroDivisionError):
        from_unsafe(lambda: 1 / 0, exceptions=(KeyError,))


def test_from_unsafe_lets_base_exceptions_through_by_default() -> None:
    def interrupt() -> None:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        from_unsafe(interrupt)


def test_from_unsafe_captures_base_exceptions_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_CAPTURE_BASE_EXCEPTIONS", "true")
    clear_settings_cache()

    def interrupt() -> None:
        raise KeyboardInterrupt

    result = from_unsafe(interrupt)

    assert isinstance(result.error_or_none(), KeyboardInterrupt)


def test_end_to_end_length() -> None:
    result = from_unsafe(unsafely_get_string)

    shown: list[str] = []
    result.for_each(shown.append)

    assert shown == ["Hello world!"]
    assert result.map(len) == Success(12)


# ═════════════════════════════════════════════════════════════════════════════
# wrap
# ═════════════════════════════════════════════════════════════════════════════


def test_wrap_adapter() -> None:
    safe_length = wrap(length)

    assert safe_length("abc") == Success(3)
    failure = safe_length("")
    assert isinstance(failure, Failure)
    assert isinstance(failure.error, ValueError)


def test_wrap_preserves_metadata() -> None:
    safe_length = Result.wrap(length)

    assert safe_length.__name__ == "length"
    assert safe_length.__doc__ == "Length of a non-empty string."


def test_wrap_as_decorator_with_exceptions() -> None:
    @wrap(exceptions=(KeyError,))
    def lookup(key: str) -> int:
        return {"a": 1}[key]

    assert lookup("a") == Success(1)
    assert lookup(key="b").is_failure()


def test_wrap_composes_with_flat_map() -> None:
    parse = wrap(lambda raw: int(raw))

    assert Success("7").flat_map(parse).map(lambda n: n * 6) == Success(42)
    assert Success("x").flat_map(parse).is_failure()


# ═════════════════════════════════════════════════════════════════════════════
# Configuration & Logging
# ═════════════════════════════════════════════════════════════════════════════


def test_default_settings() -> None:
    settings = get_settings()

    assert settings.capture_base_exceptions is False
    assert settings.log_captures is False
    assert settings.capture_types == (Exception,)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("RESULTKIT_LOG_FORMAT", "json")
    clear_settings_cache()

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_capture_not_logged_by_default(log_stream: io.StringIO) -> None:
    from_unsafe(lambda: 1 / 0)

    assert log_stream.getvalue() == ""


def test_capture_logged_when_enabled(monkeypatch: pytest.MonkeyPatch, log_stream: io.StringIO) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_CAPTURES", "1")
    clear_settings_cache()

    from_unsafe(lambda: 1 / 0)

    line = log_stream.getvalue()
    assert "[debug] result.captured" in line
    assert 'error_type="ZeroDivisionError"' in line
    assert 'error="division by zero"' in line


def test_capture_logged_as_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_CAPTURES", "true")
    clear_settings_cache()
    stream = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=stream)

    from_unsafe(lambda: {}["missing"])

    entry = orjson.loads(stream.getvalue())
    assert entry["event"] == "result.captured"
    assert entry["level"] == "debug"
    assert entry["error_type"] == "KeyError"
    assert entry["logger"] == "resultkit.result"


def test_capture_below_level_is_dropped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_CAPTURES", "true")
    clear_settings_cache()
    stream = io.StringIO()
    configure_logging(format="console", level="WARNING", output=stream)

    from_unsafe(lambda: 1 / 0)

    assert stream.getvalue() == ""


def test_configure_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


def test_lowercase_log_level_does_not_break_capture(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_LEVEL", "debug")
    clear_settings_cache()

    assert from_unsafe(lambda: "ok") == Success("ok")
    assert get_settings().log_level == "DEBUG"


def test_text_log_format_alias_does_not_break_wrap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_FORMAT", "Text")
    clear_settings_cache()

    assert wrap(len)("abc") == Success(3)
    assert get_settings().log_format == "console"
