"""Logging setup and call-logging decorators for the calculation layer."""

from __future__ import annotations

import functools
import logging
import time
from pathlib import Path
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "rfms_trip"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_calc_logger = logging.getLogger(f"{LOGGER_NAME}.calc")
_batch_logger = logging.getLogger(f"{LOGGER_NAME}.batch")


def configure_logging(
    log_file: Path | str | None = None,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """Attach a handler to the package logger and set its level.

    Logs go to *log_file* when given, otherwise to stderr. Calling this
    again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in logger.handlers[:]:
        if getattr(handler, "_rfms_trip_handler", False):
            logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._rfms_trip_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def _short_repr(value: Any) -> str:
    # event lists would flood the log
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"<{type(value).__name__} len={len(value)}>"
    return repr(value)


def _describe_args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # skip 'self'
    parts = [_short_repr(a) for a in args[1:]]
    parts += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
    return ", ".join(parts)


def log_calculation(fn: F) -> F:
    """Decorator that logs calculator method calls and their results."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_str = _describe_args(args, kwargs)
        _calc_logger.debug("CALC: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            _calc_logger.error(
                "CALC FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        summary = f"{result:.3f}" if isinstance(result, float) else type(result).__name__
        _calc_logger.debug(
            "CALC OK: %s -> %s (%.3fs)", fn.__qualname__, summary, elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_batch_call(fn: F) -> F:
    """Decorator that logs batch driver entry, exit and failures."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        _batch_logger.info("BATCH START: %s", fn.__qualname__)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            _batch_logger.error(
                "BATCH FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        _batch_logger.info("BATCH DONE: %s -> %r (%.3fs)", fn.__qualname__, result, elapsed)
        return result

    return wrapper  # type: ignore[return-value]
