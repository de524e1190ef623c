"""Base structured logging utilities for crux_abortable.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across modules.

All package loggers are children of the shared ``abortable`` logger, which
owns a single managed stderr handler. Level and formatter follow
``get_settings()`` (``ABORTABLE_LOG_LEVEL`` / ``ABORTABLE_LOG_JSON``) unless
reconfigured through :func:`configure_logger`.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from ..config.defaults import ABORTABLE_LOGGER_NAME
from .log_support import JsonFormatter, LogContext
from .settings import get_settings

_BASE_LOGGER_ATTR = "_abortable_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_abortable_console_handler"
_FILE_HANDLER_ATTR = "_abortable_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _console_handler(level: int, json_mode: bool) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger() -> logging.Logger:
    """Initialize and return the shared ``abortable`` logger."""
    settings = get_settings()
    logger = logging.getLogger(ABORTABLE_LOGGER_NAME)
    desired_level = _parse_level(settings.log_level)

    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # setStream() would flush the dead stream first
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(desired_level, settings.log_json))
                continue
            existing.setLevel(desired_level)
            # Follow stream swaps (pytest capsys replaces sys.stderr per test).
            if isinstance(existing, logging.StreamHandler) and stream_obj is not sys.stderr:
                with contextlib.suppress(Exception):
                    existing.setStream(sys.stderr)
            if settings.log_json != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_make_formatter(settings.log_json))
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(desired_level, settings.log_json)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = ABORTABLE_LOGGER_NAME) -> logging.Logger:
    """Return ``name`` as a child of the shared, configured package logger."""
    base_logger = _ensure_base_logger()
    if name == ABORTABLE_LOGGER_NAME:
        return base_logger
    if not name.startswith(ABORTABLE_LOGGER_NAME + "."):
        name = f"{ABORTABLE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared package logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (or reused). When ``None``, any previously attached managed
        file handler is removed.
    json_mode: bool
        Formatter used for the managed file handler.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    logger = _ensure_base_logger()

    if level is not None:
        if isinstance(level, str):
            logger.setLevel(_parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed:
            logger.removeHandler(h)
            h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if isinstance(h, logging.FileHandler) and h.baseFilename == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            h.close()

    if existing is None:
        # 10MB x 5 backups
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_make_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Builds a single JSON payload ``{"event": event, **ctx, **fields}`` and
    logs it at ``level``. Keys whose values are ``None`` are dropped unless
    ``keep_none`` is set. Nothing is serialized when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr))


def close_managed_handlers() -> None:
    """Close handlers owned by this module (used by test teardown)."""
    logger = logging.getLogger(ABORTABLE_LOGGER_NAME)
    for h in list(logger.handlers):
        if getattr(h, _FILE_HANDLER_ATTR, False):
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "close_managed_handlers",
]
