"""JSON-lines logging in the Go slog layout.

Each record is written to stdout as one JSON object:
{"time":"2026-10-18T14:06:20.829529+00:00","level":"INFO","logger":"vision_chat","source":{"function":"format_response","file":"messages.py","line":72},"msg":"response formatted","blocks":3}

Fields bound with `log_context` are added to every record written inside the
`with` block, e.g. the request id set by the HTTP middleware.
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator

_bound_fields: ContextVar[dict[str, Any]] = ContextVar("bound_fields", default={})

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def parse_level(level: str | int) -> int:
    """Resolve a level name such as "info" or a logging level number.

    Raises:
        ValueError: If the name is not one of DEBUG, INFO, WARN(ING), ERROR.
    """
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


class StructuredFormatter(logging.Formatter):
    """Renders a LogRecord as a single slog-style JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "source": {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            },
            "msg": record.getMessage(),
            **_bound_fields.get(),
            **getattr(record, "fields", {}),
        }
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        # Rendered math stays readable in the output
        return json.dumps(entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Thin wrapper over `logging` that takes structured keyword fields."""

    def __init__(self, name: str = "app", level: str | int = DEFAULT_LOG_LEVEL):
        self._logger = logging.getLogger(name)
        self._logger.setLevel(parse_level(level))
        self._logger.propagate = False

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        self._logger.handlers[:] = [handler]

    def set_level(self, level: str | int) -> None:
        self._logger.setLevel(parse_level(level))

    def _emit(self, level: int, msg: str, fields: dict[str, Any], exc_info=None) -> None:
        # stacklevel 3 points source at the caller of debug()/info()/...
        self._logger.log(
            level, msg, exc_info=exc_info, stacklevel=3, extra={"fields": fields}
        )

    def debug(self, msg: str, **fields: Any) -> None:
        self._emit(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._emit(logging.INFO, msg, fields)

    def warn(self, msg: str, **fields: Any) -> None:
        self._emit(logging.WARNING, msg, fields)

    def error(self, msg: str, exc_info: bool = False, **fields: Any) -> None:
        """Log at ERROR; pass exc_info=True inside an except block to add the traceback."""
        self._emit(logging.ERROR, msg, fields, exc_info=exc_info)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind `fields` to every record logged inside the block.

    Example:
        with log_context(request_id="abc-123"):
            logger.info("response formatted")  # carries request_id
    """
    token = _bound_fields.set({**_bound_fields.get(), **fields})
    try:
        yield
    finally:
        _bound_fields.reset(token)


def get_context() -> dict[str, Any]:
    """Fields currently bound by enclosing `log_context` blocks."""
    return dict(_bound_fields.get())


logger = StructuredLogger("vision_chat")
