"""Focused tests for RaceCounters behavior.

Covers lifecycle counters, latency aggregation, failure code bucketing and
snapshot reset semantics.
"""
from __future__ import annotations

from crux_abortable.base.metrics import RaceCounters, default_counters


def test_counters_lifecycle_and_latency_aggregation():
    c = RaceCounters(scope="unit")

    c.record_start()
    c.record_start()
    c.record_start()

    c.record_fulfilled(latency_ms=120)
    c.record_failed("timeout", latency_ms=80)
    c.record_aborted()

    snap = c.snapshot(reset=False)
    assert snap.scope == "unit"
    assert snap.total == 3
    assert snap.fulfilled == 1
    assert snap.failed == 1
    assert snap.aborted == 1
    assert snap.in_flight == 0
    assert snap.failure_by_code == {"timeout": 1}

    lat = snap.latency
    assert lat.count == 2 and lat.total_ms == 200
    assert lat.min_ms == 80 and lat.max_ms == 120
    assert abs((lat.avg_ms or 0) - 100.0) < 1e-9


def test_snapshot_reset_zeroes_counters_but_preserves_inflight():
    c = RaceCounters()
    c.record_start()
    snap = c.snapshot(reset=True)
    assert snap.total == 1 and snap.in_flight == 1

    after = c.snapshot()
    assert after.total == 0
    assert after.in_flight == 1
    assert after.latency.avg_ms is None


def test_negative_latency_is_ignored_and_dict_export():
    c = RaceCounters()
    c.record_start()
    c.record_fulfilled(latency_ms=-5)
    data = c.as_dict()
    assert data["fulfilled"] == 1
    assert data["latency"]["count"] == 0


def test_default_counters_is_shared():
    assert default_counters() is default_counters()
