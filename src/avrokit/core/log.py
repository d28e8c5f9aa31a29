from __future__ import annotations

"""
avrokit.core.log
================

Structured logging for the schema builders, on top of stdlib `logging`:
- Context propagation via contextvars (schema, field, ...).
- JSON formatter for machines; human formatter for local debugging.
- LoggerAdapter that accepts arbitrary keyword fields.
- The library logger is silent until an application or test enables output.
"""

import contextvars
import json
import logging
import os
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, ClassVar, Final

__all__ = [
    "bind_context",
    "configure_from_env",
    "disable_stdout_logging",
    "enable_stdout_logging",
    "get_logger",
    "log_context",
    "set_level",
]

# ---------- Context ----------

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("avrokit_log_ctx", default=None)


def _ctx_copy() -> dict[str, Any]:
    ctx = _log_context.get()
    return dict(ctx) if ctx else {}


def bind_context(**fields: Any) -> None:
    """Merge fields into the current structured log context."""
    ctx = _ctx_copy()
    ctx.update({k: v for k, v in fields.items() if v is not None})
    _log_context.set(ctx)


@contextmanager
def log_context(**fields: Any):
    """
    Temporarily add fields to the structured log context.
    Restores the previous context on exit.
    """
    token = _log_context.set({**_ctx_copy(), **{k: v for k, v in fields.items() if v is not None}})
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------- Formatters ----------

_STD_ATTRS: Final[frozenset[str]] = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "asctime",
    }
)

# context keys shown inline by HumanFormatter
_HUMAN_KEYS: Final[tuple[str, ...]] = ("schema", "field", "node_type")


def _iso_utc_ms(ts: float) -> str:
    dt = datetime.fromtimestamp(ts, tz=UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _exc_tuple(exc_info: Any) -> tuple | None:
    if not exc_info:
        return None
    if isinstance(exc_info, BaseException):
        return (type(exc_info), exc_info, exc_info.__traceback__)
    if exc_info is True:
        return sys.exc_info()
    if isinstance(exc_info, tuple):
        return exc_info
    return None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record: ts, level, logger, message, the current log
    context, any extra fields and, when present, an `error` object.
    """

    def __init__(self, *, include_stack: bool = False) -> None:
        super().__init__()
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": _iso_utc_ms(record.created),
            "level": record.levelname,
            "logger": record.name,
        }

        msg = record.getMessage()
        if msg:
            out["message"] = msg

        ctx = _log_context.get()
        if ctx:
            out.update(ctx)

        for k, v in record.__dict__.items():
            if k in _STD_ATTRS or k in out:
                continue
            out[k] = v

        exc = _exc_tuple(record.exc_info)
        if exc:
            err = out.setdefault("error", {})
            err["type"] = exc[0].__name__ if exc[0] else "Exception"
            err["message"] = str(exc[1]) if exc[1] else None
            if self.include_stack:
                err["stack"] = self.formatException(exc)
        elif record.exc_text:
            out.setdefault("error", {})["stack"] = record.exc_text

        return json.dumps(out, ensure_ascii=False, separators=(",", ":"), default=str)


class HumanFormatter(logging.Formatter):
    """Compact human-friendly formatter for local debugging."""

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d"

    def format(self, record: logging.LogRecord) -> str:
        s = f"{self.formatTime(record)} {record.levelname:<5} {record.name}: {record.getMessage()}"
        event = record.__dict__.get("event")
        if event and event != record.getMessage():
            s += f" ({event})"
        ctx = _log_context.get()
        if ctx:
            compact = {k: ctx[k] for k in _HUMAN_KEYS if ctx.get(k) is not None}
            if compact:
                s += "  [" + ", ".join(f"{k}={v}" for k, v in compact.items()) + "]"
        exc = _exc_tuple(record.exc_info)
        if exc:
            s += "\n" + self.formatException(exc)
        return s


# ---------- Filters / adapter ----------


class ContextFilter(logging.Filter):
    """Copy the current log context onto the record for downstream handlers."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _log_context.get()
        if ctx:
            for k, v in ctx.items():
                record.__dict__.setdefault(k, v)
        return True


class _LevelRangeFilter(logging.Filter):
    def __init__(self, min_level: int = logging.NOTSET, max_level: int = logging.CRITICAL) -> None:
        super().__init__()
        self.min_level = min_level
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return self.min_level <= record.levelno <= self.max_level


class _KwExtraAdapter(logging.LoggerAdapter):
    """
    Logger adapter that moves unknown kwargs into `extra={...}`:

        log.debug("field rejected", event="schema.record.field_rejected", field="id")
    """

    _allowed_passthrough: ClassVar[frozenset[str]] = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        for k in [k for k in kwargs if k not in self._allowed_passthrough]:
            v = kwargs.pop(k)
            key = f"field_{k}" if k in _STD_ATTRS else k
            extra.setdefault(key, v)
        kwargs["extra"] = extra
        return msg, kwargs


# ---------- Public configuration API ----------

_AVROKIT_LOGGER_NAME = "avrokit"
_configured = False
_stdout_handler_key = "_avrokit_stdout_handler"
_stderr_handler_key = "_avrokit_stderr_handler"


def _bootstrap_minimal() -> None:
    """Install a NullHandler and a context filter to keep the library silent by default."""
    global _configured
    if _configured:
        return
    lg = logging.getLogger(_AVROKIT_LOGGER_NAME)
    lg.setLevel(logging.DEBUG)
    if not any(isinstance(h, logging.NullHandler) for h in lg.handlers):
        lg.addHandler(logging.NullHandler())
    if not any(isinstance(f, ContextFilter) for f in lg.filters):
        lg.addFilter(ContextFilter())
    _configured = True


def get_logger(name: str | None = None) -> logging.LoggerAdapter:
    """Return a logger adapter under the `avrokit` namespace."""
    _bootstrap_minimal()
    base = logging.getLogger(_AVROKIT_LOGGER_NAME)
    target = base.getChild(name) if name else base
    return _KwExtraAdapter(target, {})


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    val = getattr(logging, str(level).upper(), None)
    if isinstance(val, int):
        return val
    raise ValueError(f"invalid log level: {level!r}")


def set_level(level: int | str) -> None:
    """Change the library logger level (affects all children)."""
    logging.getLogger(_AVROKIT_LOGGER_NAME).setLevel(_resolve_level(level))


def enable_stdout_logging(
    *,
    level: int | str = logging.DEBUG,
    json_output: bool = True,
    include_stack: bool = False,
    pretty: bool = False,
    route_errors_to_stderr: bool = False,
) -> None:
    """
    Attach stream handlers for tests and local tools.

    - pretty=True -> HumanFormatter; json_output=True -> JsonFormatter
    - route_errors_to_stderr=True -> ERROR+ to stderr, the rest to stdout
    """
    lvl = _resolve_level(level)
    _bootstrap_minimal()
    lg = logging.getLogger(_AVROKIT_LOGGER_NAME)

    disable_stdout_logging()

    fmt: logging.Formatter
    if pretty:
        fmt = HumanFormatter()
    elif json_output:
        fmt = JsonFormatter(include_stack=include_stack)
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    if route_errors_to_stderr:
        h_out = logging.StreamHandler(sys.stdout)
        h_out.set_name(_stdout_handler_key)
        h_out.setLevel(lvl)
        h_out.addFilter(_LevelRangeFilter(max_level=logging.WARNING))
        h_out.setFormatter(fmt)
        lg.addHandler(h_out)

        h_err = logging.StreamHandler(sys.stderr)
        h_err.set_name(_stderr_handler_key)
        h_err.setLevel(max(lvl, logging.ERROR))
        h_err.setFormatter(fmt)
        lg.addHandler(h_err)
    else:
        h = logging.StreamHandler(sys.stdout)
        h.set_name(_stdout_handler_key)
        h.setLevel(lvl)
        h.setFormatter(fmt)
        lg.addHandler(h)


def disable_stdout_logging() -> None:
    """Detach handlers installed by enable_stdout_logging, if present."""
    lg = logging.getLogger(_AVROKIT_LOGGER_NAME)
    for h in list(lg.handlers):
        if h.get_name() in (_stdout_handler_key, _stderr_handler_key):
            lg.removeHandler(h)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def configure_from_env() -> None:
    """
    Env:
      - AVROKIT_LOG_STDOUT=1|true
      - AVROKIT_LOG_LEVEL=DEBUG|INFO|...
      - AVROKIT_LOG_PRETTY=1
      - AVROKIT_LOG_STACK=1
    """
    level = os.getenv("AVROKIT_LOG_LEVEL", "DEBUG")
    pretty = _env_flag("AVROKIT_LOG_PRETTY")

    _bootstrap_minimal()
    set_level(level)

    if _env_flag("AVROKIT_LOG_STDOUT"):
        enable_stdout_logging(
            level=level,
            json_output=not pretty,
            include_stack=_env_flag("AVROKIT_LOG_STACK"),
            pretty=pretty,
        )
    else:
        disable_stdout_logging()


_bootstrap_minimal()
