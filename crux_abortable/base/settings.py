"""Process-cached runtime settings for crux_abortable.

Key Components
--------------
AbortableSettings
    Frozen dataclass capturing normalized configuration values.

get_settings()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when one of the package variables changes.
    Supported environment variables (all optional):
        ABORTABLE_LOG_LEVEL
        ABORTABLE_LOG_JSON
        ABORTABLE_MAX_LISTENERS

Design Constraints
------------------
1. No per-call env parsing on hot paths (every race reads the settings).
2. Side-effect free access apart from the first load, for deterministic tests.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..config.defaults import (
    ABORTABLE_DEFAULT_LOG_JSON,
    ABORTABLE_DEFAULT_LOG_LEVEL,
    ABORTABLE_DEFAULT_MAX_LISTENERS,
)
from ..config.env import (
    ENV_LOG_JSON,
    ENV_LOG_LEVEL,
    ENV_MAX_LISTENERS,
    env_fingerprint,
    read_bool,
    read_int,
    read_str,
)


@dataclass(frozen=True)
class AbortableSettings:
    """Container for normalized settings.

    Attributes:
        log_level: Level name applied to the shared ``abortable`` logger.
        log_json: Whether console output uses the JSON formatter.
        max_listeners: Listener count per signal above which a leak warning
            is logged. ``0`` disables the check.
    """

    log_level: str = ABORTABLE_DEFAULT_LOG_LEVEL
    log_json: bool = ABORTABLE_DEFAULT_LOG_JSON
    max_listeners: int = ABORTABLE_DEFAULT_MAX_LISTENERS


_CACHED: AbortableSettings | None = None
_ENV_GUARD: str | None = None


def get_settings() -> AbortableSettings:
    """Return the process-cached :class:`AbortableSettings` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    guard = env_fingerprint()
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    _CACHED = AbortableSettings(
        log_level=(read_str(ENV_LOG_LEVEL, ABORTABLE_DEFAULT_LOG_LEVEL) or ABORTABLE_DEFAULT_LOG_LEVEL).upper(),
        log_json=read_bool(ENV_LOG_JSON, ABORTABLE_DEFAULT_LOG_JSON),
        max_listeners=read_int(ENV_MAX_LISTENERS, ABORTABLE_DEFAULT_MAX_LISTENERS),
    )
    _ENV_GUARD = guard
    return _CACHED


def reset_settings_cache() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603
    _CACHED = None
    _ENV_GUARD = None


__all__ = ["AbortableSettings", "get_settings", "reset_settings_cache"]
