"""crux_abortable.config.defaults
=============================

Central place for small, stable default values used across the
crux_abortable package. These defaults can be overridden via environment
variables (see ``crux_abortable.config.env``) but provide sensible fallbacks
for local development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Abort error ----

# Name exposed by ``AbortError.name`` so callers can match it structurally.
ABORT_ERROR_NAME = "AbortError"
# Message used when a signal is aborted without an explicit reason.
ABORT_ERROR_DEFAULT_MESSAGE = "The signal has been aborted"


# ---- Logging ----

# Name of the shared package logger; children hang off it.
ABORTABLE_LOGGER_NAME = "abortable"
ABORTABLE_DEFAULT_LOG_LEVEL = "INFO"
ABORTABLE_DEFAULT_LOG_JSON = True


# ---- Leak detection ----

# Listener count on a single signal above which a warning event is logged.
# Each race registers one listener and releases it on settle, so a steadily
# growing count points at a leaked subscription. ``0`` disables the check.
ABORTABLE_DEFAULT_MAX_LISTENERS = 100
