"""Environment-driven settings parsing and caching."""
from __future__ import annotations

from crux_abortable.base.settings import AbortableSettings, get_settings
from crux_abortable.config.env import read_bool, read_int


def test_defaults_when_env_is_empty(monkeypatch):
    for name in ("ABORTABLE_LOG_LEVEL", "ABORTABLE_LOG_JSON", "ABORTABLE_MAX_LISTENERS"):
        monkeypatch.delenv(name, raising=False)
    assert get_settings() == AbortableSettings()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ABORTABLE_LOG_LEVEL", "debug")
    monkeypatch.setenv("ABORTABLE_LOG_JSON", "off")
    monkeypatch.setenv("ABORTABLE_MAX_LISTENERS", "0")
    s = get_settings()
    assert s.log_level == "DEBUG"
    assert s.log_json is False
    assert s.max_listeners == 0


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("ABORTABLE_LOG_JSON", "sometimes")
    monkeypatch.setenv("ABORTABLE_MAX_LISTENERS", "-3")
    s = get_settings()
    assert s.log_json is True
    assert s.max_listeners == 100


def test_cache_is_reused_until_env_changes(monkeypatch):
    monkeypatch.delenv("ABORTABLE_MAX_LISTENERS", raising=False)
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("ABORTABLE_MAX_LISTENERS", "7")
    second = get_settings()
    assert second is not first and second.max_listeners == 7


def test_read_helpers(monkeypatch):
    monkeypatch.setenv("X_FLAG", " YES ")
    monkeypatch.setenv("X_NUM", "abc")
    assert read_bool("X_FLAG", False) is True
    assert read_int("X_NUM", 5) == 5
    assert read_int("X_MISSING", 9) == 9
