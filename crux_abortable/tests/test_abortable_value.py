"""Race tests for single awaitables.

Covers the four orderings (already aborted, aborted while waiting, work
first, work first with a later abort), reason propagation, listener cleanup,
orphaned work handling, the same-tick tie-break and aborting from a thread.
"""
from __future__ import annotations

import asyncio
import inspect
import threading

import pytest

from crux_abortable import AbortController, AbortError, abortable, abortable_awaitable
from crux_abortable.base.abort_signal import SubscriptionState
from crux_abortable.base.abortable import orphan_count, settle
from crux_abortable.base.metrics import RaceCounters
from crux_abortable.tests.helpers import CallbackCountingFuture, RecordingSignal, resolve_later


@pytest.mark.asyncio
async def test_resolves_with_work_value():
    controller = AbortController()
    fut, _ = resolve_later("Hello", 0.1)
    result = await abortable(fut, controller.signal)
    assert result == "Hello"
    assert controller.signal.listener_count == 0


@pytest.mark.asyncio
async def test_abort_after_delay_raises_abort_error():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    fut, timer = resolve_later("Hello", 0.1)
    loop.call_later(0.05, controller.abort)
    with pytest.raises(AbortError, match="The signal has been aborted") as info:
        await abortable(fut, controller.signal)
    assert info.value.name == "AbortError"
    assert str(info.value) == "The signal has been aborted"
    assert controller.signal.listener_count == 0
    timer.cancel()


@pytest.mark.asyncio
async def test_abort_after_delay_with_reason_raises_that_reason():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    fut, timer = resolve_later("Hello", 0.1)
    reason = Exception("This is my reason")
    loop.call_later(0.05, controller.abort, reason)
    with pytest.raises(Exception, match="This is my reason") as info:
        await abortable(fut, controller.signal)
    assert info.value is reason
    timer.cancel()


@pytest.mark.asyncio
async def test_already_aborted_signal_skips_work():
    controller = AbortController()
    controller.abort()
    started = []

    async def work():
        started.append(True)
        return "Hello"

    coro = work()
    with pytest.raises(AbortError) as info:
        await abortable(coro, controller.signal)
    assert info.value.name == "AbortError"
    assert started == []
    # closed rather than left dangling as a never-awaited coroutine
    assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED


@pytest.mark.asyncio
async def test_already_aborted_signal_with_reason():
    controller = AbortController()
    reason = Exception("This is my reason")
    controller.abort(reason)
    fut, timer = resolve_later("Hello", 0.1)
    with pytest.raises(Exception, match="This is my reason") as info:
        await abortable(fut, controller.signal)
    assert info.value is reason
    assert not fut.done()
    timer.cancel()


@pytest.mark.asyncio
async def test_later_abort_has_no_effect_on_settled_result():
    controller = AbortController()

    async def work():
        await asyncio.sleep(0.01)
        return 42

    assert await abortable_awaitable(work(), controller.signal) == 42
    controller.abort()
    await asyncio.sleep(0)
    assert controller.signal.listener_count == 0


@pytest.mark.asyncio
async def test_work_error_propagates_unchanged():
    controller = AbortController()
    boom = ValueError("boom")

    async def work():
        await asyncio.sleep(0)
        raise boom

    with pytest.raises(ValueError) as info:
        await abortable(work(), controller.signal)
    assert info.value is boom
    assert controller.signal.listener_count == 0
    assert not controller.signal.aborted


@pytest.mark.asyncio
@pytest.mark.slow
async def test_never_settling_work_aborts_at_delay_not_before():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    never = loop.create_future()
    loop.call_later(0.05, controller.abort)
    started = loop.time()
    with pytest.raises(AbortError):
        await abortable(never, controller.signal)
    elapsed = loop.time() - started
    assert elapsed >= 0.04
    assert elapsed < 1.0
    never.cancel()


@pytest.mark.asyncio
async def test_released_listener_cannot_settle_again():
    signal = RecordingSignal()
    fut, _ = resolve_later("v", 0.01)
    assert await abortable(fut, signal) == "v"

    assert len(signal.handles) == 1
    handle = signal.handles[0]
    assert handle.state is SubscriptionState.RELEASED
    assert handle.fire(AbortError()) is False
    # invoking the raw listener after settlement is a silent no-op
    signal.listeners[0](AbortError())
    signal.controller.abort()
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_listener_released_after_abort_win():
    signal = RecordingSignal()
    loop = asyncio.get_running_loop()
    never = loop.create_future()
    loop.call_later(0.01, signal.controller.abort)
    with pytest.raises(AbortError):
        await abortable(never, signal)
    assert signal.handles[0].state is SubscriptionState.FIRED
    signal.listeners[0](AbortError("again"))
    never.cancel()


@pytest.mark.asyncio
async def test_losing_work_keeps_running_and_its_error_is_discarded():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    finished = []

    async def slow():
        await asyncio.sleep(0.05)
        finished.append(True)
        raise ValueError("late failure")

    baseline = orphan_count()
    loop.call_later(0.01, controller.abort)
    with pytest.raises(AbortError):
        await abortable(slow(), controller.signal)
    assert orphan_count() == baseline + 1
    await asyncio.sleep(0.1)
    assert finished == [True]
    assert orphan_count() == baseline


@pytest.mark.asyncio
async def test_same_tick_abort_before_delivery_wins():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    fut = loop.create_future()
    task = asyncio.ensure_future(abortable(fut, controller.signal))
    await asyncio.sleep(0)

    fut.set_result("value")
    controller.abort()
    with pytest.raises(AbortError):
        await task


@pytest.mark.asyncio
async def test_delivered_completion_beats_later_abort():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    fut = loop.create_future()
    task = asyncio.ensure_future(abortable(fut, controller.signal))
    await asyncio.sleep(0)

    fut.set_result("value")
    await asyncio.sleep(0)
    controller.abort()
    assert await task == "value"


@pytest.mark.asyncio
async def test_abort_from_another_thread():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    never = loop.create_future()
    timer = threading.Timer(0.02, controller.abort)
    timer.start()
    try:
        with pytest.raises(AbortError):
            await abortable(never, controller.signal)
    finally:
        timer.join()
        never.cancel()
    assert controller.signal.listener_count == 0


@pytest.mark.asyncio
async def test_cancelling_the_caller_releases_the_listener():
    controller = AbortController()
    loop = asyncio.get_running_loop()
    never = loop.create_future()
    task = asyncio.ensure_future(abortable(never, controller.signal))
    await asyncio.sleep(0)
    assert controller.signal.listener_count == 1

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert controller.signal.listener_count == 0
    assert not never.cancelled()
    never.cancel()


@pytest.mark.asyncio
async def test_settle_records_outcomes_in_counters():
    counters = RaceCounters(scope="test")
    controller = AbortController()

    async def ok():
        return 1

    async def fail():
        raise TimeoutError("slow")

    await settle(ok(), controller.signal, counters=counters)
    await settle(fail(), controller.signal, counters=counters)
    controller.abort()
    await settle(ok(), controller.signal, counters=counters)

    snap = counters.snapshot()
    assert snap.total == 3
    assert snap.fulfilled == 1
    assert snap.failed == 1
    assert snap.aborted == 1
    assert snap.in_flight == 0
    assert snap.failure_by_code == {"timeout": 1}


@pytest.mark.asyncio
async def test_race_settled_event_is_logged(log_capture):
    controller = AbortController()
    fut, _ = resolve_later("x", 0)
    await abortable(fut, controller.signal)
    events = [r.getMessage() for r in log_capture if r.name == "abortable.race"]
    assert any('"abort.race.settled"' in m and '"outcome": "value"' in m for m in events)


@pytest.mark.asyncio
async def test_shared_future_is_not_listened_to_after_aborted_races():
    shared = CallbackCountingFuture()
    baseline = orphan_count()
    for _ in range(50):
        controller = AbortController()
        asyncio.get_running_loop().call_soon(controller.abort)
        with pytest.raises(AbortError):
            await abortable(shared, controller.signal)
    assert shared.live_callbacks == 0
    assert orphan_count() == baseline
    assert not shared.done()

    # the shared future still works for its owner
    shared.set_result("late")
    assert await abortable(shared, AbortController().signal) == "late"
