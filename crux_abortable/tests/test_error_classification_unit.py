from __future__ import annotations

import asyncio

from crux_abortable.base.errors import AbortError, ErrorCode, classify_exception


def test_abort_and_cancellation_classify_as_cancelled():
    assert classify_exception(AbortError()) is ErrorCode.CANCELLED
    assert classify_exception(asyncio.CancelledError()) is ErrorCode.CANCELLED


def test_timeouts_and_validation():
    assert classify_exception(TimeoutError("t")) is ErrorCode.TIMEOUT
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(ValueError("bad")) is ErrorCode.VALIDATION
    assert classify_exception(TypeError("bad")) is ErrorCode.VALIDATION


def test_unknown_fallback():
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN
    assert classify_exception(KeyError("k")) is ErrorCode.UNKNOWN


def test_error_code_values_are_stable_strings():
    assert ErrorCode.CANCELLED.value == "cancelled"
    assert ErrorCode("timeout") is ErrorCode.TIMEOUT
