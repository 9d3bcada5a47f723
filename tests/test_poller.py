import asyncio
import logging
import time

import pytest
from openshift_mcp.core.poller import (
    PollState,
    PollStatus,
    host_of,
    wait_for_accessible,
    wait_for_accessible_async,
)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


@pytest.mark.parametrize(
    "target, host",
    [
        ("http://app-ns.rhcloud.com/", "app-ns.rhcloud.com"),
        ("https://app-ns.rhcloud.com:8443/health", "app-ns.rhcloud.com"),
        ("app-ns.rhcloud.com", "app-ns.rhcloud.com"),
        ("app-ns.rhcloud.com:80/x", "app-ns.rhcloud.com"),
    ],
)
def test_host_of(target, host):
    assert host_of(target) == host


def test_poll_state_times_out_only_after_deadline():
    clock = FakeClock()
    state = PollState(timeout=2.0, interval=1.0, clock=clock)

    assert state.record(False) is PollStatus.WAITING
    assert state.next_delay() == 1.0
    clock.sleep(1.5)
    assert state.record(False) is PollStatus.WAITING
    # never sleeps past the deadline
    assert state.next_delay() == pytest.approx(0.5)
    clock.sleep(0.5)
    assert state.record(False) is PollStatus.TIMED_OUT
    assert state.attempts == 3
    assert state.done


def test_poll_state_success_is_final():
    state = PollState(timeout=1.0, clock=FakeClock())
    assert state.record(True) is PollStatus.SUCCEEDED
    assert state.record(False) is PollStatus.SUCCEEDED
    state.cancel()
    assert state.status is PollStatus.SUCCEEDED
    assert state.attempts == 1


def test_poll_state_rejects_negative_values():
    with pytest.raises(ValueError):
        PollState(timeout=-1.0)
    with pytest.raises(ValueError):
        PollState(timeout=1.0, interval=-0.1)


def test_zero_timeout_probes_once():
    clock = FakeClock()
    probes = []

    def probe(host):
        probes.append(host)
        return False

    assert not wait_for_accessible("h", 0.0, probe=probe, sleep=clock.sleep, clock=clock)
    assert probes == ["h"]


def test_unreachable_host_waits_at_least_timeout():
    start = time.monotonic()

    result = wait_for_accessible(
        "http://never.invalid/", 2.0, probe=lambda host: False, interval=0.5
    )

    assert result is False
    assert time.monotonic() - start >= 2.0


def test_reachable_host_returns_without_sleeping():
    sleeps = []
    assert wait_for_accessible(
        "http://app-ns.rhcloud.com/", 30.0, probe=lambda host: True, sleep=sleeps.append
    )
    assert sleeps == []


def test_becomes_reachable_after_some_attempts(caplog):
    caplog.set_level(logging.INFO, logger="openshift_mcp.core.poller")
    clock = FakeClock()
    answers = iter([False, False, True])

    result = wait_for_accessible(
        "app-ns.rhcloud.com", 10.0, probe=lambda host: next(answers), sleep=clock.sleep, clock=clock
    )

    assert result is True
    record = next(r for r in caplog.records if r.getMessage() == "poll_finished")
    assert record.outcome == "succeeded"
    assert record.attempts == 3
    assert record.host == "app-ns.rhcloud.com"


@pytest.mark.asyncio
async def test_async_poll_resolves_to_true():
    async def probe(host):
        return True

    task = wait_for_accessible_async("http://app-ns.rhcloud.com/", 5.0, probe=probe)

    assert isinstance(task, asyncio.Task)
    assert await task is True


@pytest.mark.asyncio
async def test_async_poll_times_out():
    async def probe(host):
        return False

    start = time.monotonic()
    result = await wait_for_accessible_async("h", 0.3, probe=probe, interval=0.1)

    assert result is False
    assert time.monotonic() - start >= 0.3


@pytest.mark.asyncio
async def test_cancelled_poll_stops_probing(caplog):
    caplog.set_level(logging.INFO, logger="openshift_mcp.core.poller")
    probes = []

    async def probe(host):
        probes.append(host)
        return False

    task = wait_for_accessible_async("h", 60.0, probe=probe, interval=0.05)
    await asyncio.sleep(0.12)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    count = len(probes)
    await asyncio.sleep(0.15)

    assert task.cancelled()
    assert len(probes) == count
    record = next(r for r in caplog.records if r.getMessage() == "poll_finished")
    assert record.outcome == "cancelled"


def test_async_poll_needs_running_loop():
    async def probe(host):
        return True

    with pytest.raises(RuntimeError):
        wait_for_accessible_async("h", 1.0, probe=probe)
