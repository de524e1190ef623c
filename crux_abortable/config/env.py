"""crux_abortable.config.env
=========================

Centralized environment variable names and small parsing helpers.

Design Notes
------------
- Every variable the package reads is named here so that documentation,
  settings parsing and tests share one source of truth.
- Helpers never raise on unset or malformed values; they fall back to the
  supplied default and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

ENV_LOG_LEVEL = "ABORTABLE_LOG_LEVEL"
ENV_LOG_JSON = "ABORTABLE_LOG_JSON"
ENV_MAX_LISTENERS = "ABORTABLE_MAX_LISTENERS"

ENV_VARS: Dict[str, str] = {
    "log_level": ENV_LOG_LEVEL,
    "log_json": ENV_LOG_JSON,
    "max_listeners": ENV_MAX_LISTENERS,
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def read_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return the stripped value of ``name`` or ``default`` when unset/blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def read_bool(name: str, default: bool) -> bool:
    """Parse ``name`` as a boolean flag.

    Accepts ``1/true/yes/on`` and ``0/false/no/off`` case-insensitively. Any
    other value yields ``default``.
    """
    raw = read_str(name)
    if raw is None:
        return default
    v = raw.lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def read_int(name: str, default: int, *, minimum: int = 0) -> int:
    """Parse ``name`` as an integer not lower than ``minimum``.

    Returns ``default`` when unset, not an integer, or below ``minimum``.
    """
    raw = read_str(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= minimum else default


def env_fingerprint() -> str:
    """Return a string that changes whenever any package env var changes."""
    return "/".join(os.getenv(name, "") for name in ENV_VARS.values())


__all__ = [
    "ENV_LOG_LEVEL",
    "ENV_LOG_JSON",
    "ENV_MAX_LISTENERS",
    "ENV_VARS",
    "read_str",
    "read_bool",
    "read_int",
    "env_fingerprint",
]
