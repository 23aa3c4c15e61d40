"""
Structured JSON logging for the payroll kernel.

Every record under the ``payroll_kernel`` logger namespace is rendered as one
JSON object per line:

    {"ts": "...", "level": "INFO", "logger": "payroll_kernel.services.payment",
     "message": "payment_created", "payment_id": 12, "amount": "250.00", ...}

Keys come from three places, in this precedence order:

    1. the fixed header (ts, level, logger, message),
    2. the request-scoped ``LogContext`` (correlation_id, actor_id, ...),
    3. the ``extra={...}`` mapping passed to the logging call.

A later source never overwrites an earlier one.  When the record carries an
exception, its type, message and ``code`` are added as ``exc_*`` keys, along
with the public attributes of PayrollKernelError subclasses
(``exc_agent_id``, ``exc_reason``, ...).
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping
from uuid import UUID

_LOGGER_PREFIX = "payroll_kernel"

# ---------------------------------------------------------------------------
# Request-scoped context
# ---------------------------------------------------------------------------

_CONTEXT_FIELDS = frozenset(
    {"correlation_id", "actor_id", "agent_id", "department_id", "payment_id"}
)

_EMPTY: Mapping[str, str] = MappingProxyType({})
_context: ContextVar[Mapping[str, str]] = ContextVar("payroll_log_context", default=_EMPTY)


def _check_fields(fields: Mapping[str, Any]) -> None:
    unknown = set(fields) - _CONTEXT_FIELDS
    if unknown:
        raise TypeError(f"Unknown log context field(s): {', '.join(sorted(unknown))}")


class LogContext:
    """
    Log fields shared by every record emitted in the current context.

    Backed by a single ContextVar holding a read-only mapping, so threads and
    asyncio tasks each see their own fields.  Only the names in
    ``_CONTEXT_FIELDS`` are accepted; ``None`` values are ignored.
    """

    @staticmethod
    def set(**fields: Any) -> None:
        """Merge non-None fields into the current context."""
        _check_fields(fields)
        merged = dict(_context.get())
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        _context.set(MappingProxyType(merged))

    @staticmethod
    def get_all() -> dict[str, str]:
        return dict(_context.get())

    @staticmethod
    def clear() -> None:
        _context.set(_EMPTY)

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore."""
        _check_fields(fields)
        merged = dict(_context.get())
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        token = _context.set(MappingProxyType(merged))
        try:
            yield LogContext
        finally:
            _context.reset(token)


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------

# Attributes every LogRecord has; anything else on a record came from extra=.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _jsonable(value: Any) -> Any:
    """Fallback for json.dumps: kernel value types become strings."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return sorted(value, key=str)
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_"):
            fields.setdefault(f"exc_{name}", value)
    return fields


class StructuredFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in _context.get().items():
            payload.setdefault(key, value)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_jsonable)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Return ``payroll_kernel.<name>``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the ``payroll_kernel`` logger.

    Only the first call has any effect; later calls return immediately so
    that the engine, the config bridge and the test harness can all call it.
    Records do not propagate to the root logger.

    Args:
        level: Logging level as an int or a name such as ``"DEBUG"``.
        stream: Stream for the default StreamHandler (stderr if omitted).
        handler: Use this handler instead of a StreamHandler.
    """
    global _configured
    resolved = _resolve_level(level)
    with _lock:
        if _configured:
            return
        _configured = True

    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    kernel_logger.setLevel(resolved)
    kernel_logger.propagate = False

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    kernel_logger.addHandler(handler)


def reset_logging() -> None:
    """Undo configure_logging(). Test harness only."""
    global _configured
    with _lock:
        _configured = False
    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    for handler in list(kernel_logger.handlers):
        kernel_logger.removeHandler(handler)
    kernel_logger.setLevel(logging.WARNING)
