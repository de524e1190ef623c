"""Configuration constants and environment helpers for crux_abortable."""

from .defaults import (
    ABORT_ERROR_DEFAULT_MESSAGE,
    ABORT_ERROR_NAME,
    ABORTABLE_DEFAULT_LOG_JSON,
    ABORTABLE_DEFAULT_LOG_LEVEL,
    ABORTABLE_DEFAULT_MAX_LISTENERS,
    ABORTABLE_LOGGER_NAME,
)
from .env import ENV_LOG_JSON, ENV_LOG_LEVEL, ENV_MAX_LISTENERS, ENV_VARS

__all__ = [
    "ABORT_ERROR_DEFAULT_MESSAGE",
    "ABORT_ERROR_NAME",
    "ABORTABLE_DEFAULT_LOG_JSON",
    "ABORTABLE_DEFAULT_LOG_LEVEL",
    "ABORTABLE_DEFAULT_MAX_LISTENERS",
    "ABORTABLE_LOGGER_NAME",
    "ENV_LOG_JSON",
    "ENV_LOG_LEVEL",
    "ENV_MAX_LISTENERS",
    "ENV_VARS",
]
