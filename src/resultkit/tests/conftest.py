"""Shared fixtures: isolate settings and logging state between tests."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from resultkit.config import clear_settings_cache
from resultkit.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop RESULTKIT_* env vars and cached settings around each test."""
    for var in ("CAPTURE_BASE_EXCEPTIONS", "LOG_CAPTURES", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"RESULTKIT_{var}", raising=False)
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def log_stream() -> io.StringIO:
    """Console logging at DEBUG level into an in-memory stream."""
    stream = io.StringIO()
    configure_logging(format="console", level="DEBUG", output=stream)
    return stream
