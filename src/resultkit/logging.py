"""Structured logging with bound context.

Human-readable console output for development, JSON Lines for production.
Levels follow the stdlib ``logging`` constants.

Quick Start:
    >>> from resultkit.logging import configure_logging, get_logger
    >>>
    >>> # Configure (once at startup)
    >>> configure_logging(format="console", level="DEBUG")
    >>>
    >>> log = get_logger("payments", region="eu")
    >>> log.info("charge settled", amount=12)
    # => 10:30:45.123 [info] charge settled amount=12 logger="payments" region="eu"

Defaults come from ``ResultSettings`` (``RESULTKIT_LOG_FORMAT``,
``RESULTKIT_LOG_LEVEL``) when ``configure_logging`` is never called.
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, TypeAlias, runtime_checkable

import orjson

from .config import get_settings

JsonValue: TypeAlias = "str | int | float | bool | None | list[JsonValue] | dict[str, JsonValue]"
JsonDict: TypeAlias = "dict[str, JsonValue]"


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class LogEntry:
    """Single log record with merged context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger.

    A logger without an explicit level follows the globally configured one,
    so module-level loggers pick up later ``configure_logging`` calls.

    Example:
        >>> log = BoundLogger(context={"component": "loader"})
        >>> log.bind(path="/etc/app.toml").warning("missing file")
        # => 10:30:45.123 [warning] missing file component="loader" path="/etc/app.toml"
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: JsonValue) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(
            context={k: v for k, v in self.context.items() if k not in keys},
            _renderer=self._renderer,
            _level=self._level,
        )

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self._level if self._level is not None else _current_level())

    def _log(self, level: int, event: str, **kw: JsonValue) -> None:
        if not self.is_enabled_for(level):
            return
        entry = LogEntry(
            timestamp=time.time(),
            level=logging.getLevelName(level).lower(),
            event=event,
            context={**self.context, **kw},
        )
        (self._renderer or _current_renderer()).render(entry)

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.INFO, event, **kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.WARNING, event, **kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.ERROR, event, **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output: ``timestamp [level] event key=value``."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        parts: list[str] = []
        if self.show_timestamp:
            parts.append(entry.ts_human)
        parts.append(f"[{entry.level}]")
        parts.append(entry.event)
        parts.extend(f"{k}={_format_value(v)}" for k, v in sorted(entry.context.items()))
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        data = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(data, default=str, option=orjson.OPT_NON_STR_KEYS).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────

_renderer: ContextVar[LogRenderer | None] = ContextVar("resultkit_log_renderer", default=None)
_level: ContextVar[int | None] = ContextVar("resultkit_log_level", default=None)


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Configure global structured logging.

    Args:
        format: "console" (human), "json" (machine) or "none". Defaults to settings.
        level: Minimum level name. Defaults to settings.
        output: Output stream (default: stderr for console, stdout for json)

    Returns:
        Configured renderer instance

    Raises:
        ValueError: On unknown format or level name
    """
    settings = get_settings()
    fmt = (format or settings.log_format).lower()
    level_name = (level or settings.log_level).upper()
    level_int = logging.getLevelName(level_name)
    if not isinstance(level_int, int):
        raise ValueError(f"Unknown level: {level_name}")

    renderer: LogRenderer
    if fmt == "console":
        renderer = ConsoleRenderer(output=output or sys.stderr)
    elif fmt == "json":
        renderer = JsonRenderer(output=output or sys.stdout)
    elif fmt == "none":
        renderer = NoOpRenderer()
    else:
        raise ValueError(f"Unknown format: {fmt}. Use 'console', 'json', or 'none'")

    _level.set(level_int)
    _renderer.set(renderer)
    return renderer


def reset_logging() -> None:
    """Drop configured renderer and level so settings apply again."""
    _renderer.set(None)
    _level.set(None)


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Get a structured logger with optional initial context.

    Args:
        name: Logger name (added to context as 'logger')
        **initial_context: Initial bound key-value pairs
    """
    ctx: JsonDict = dict(initial_context)
    if name:
        ctx["logger"] = name
    return BoundLogger(context=ctx)


def _current_level() -> int:
    configured = _level.get()
    if configured is not None:
        return configured
    return logging.getLevelName(get_settings().log_level)


def _current_renderer() -> LogRenderer:
    renderer = _renderer.get()
    if renderer is None:
        renderer = configure_logging()
    return renderer


def _format_value(v: object) -> str:
    if isinstance(v, str):
        return f'"{v}"'
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, dict):
        return f"{{{len(v)} items}}"
    if isinstance(v, (list, tuple)):
        return f"[{len(v)} items]"
    return repr(v)
