"""
Bounded polling until a host becomes reachable.

One state machine (PollState) is driven either by a blocking loop
(wait_for_accessible) or by an asyncio task (wait_for_accessible_async).
"""

from __future__ import annotations

import asyncio
import logging
import socket
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional
from urllib.parse import urlparse

from .observability import log_event

log = logging.getLogger("openshift_mcp.core.poller")

DEFAULT_POLL_INTERVAL_SECONDS = 1.0

Probe = Callable[[str], bool]
AsyncProbe = Callable[[str], Awaitable[bool]]
Sleep = Callable[[float], None]
AsyncSleep = Callable[[float], Awaitable[None]]


class PollStatus(str, Enum):
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass
class PollState:
    timeout: float
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    clock: Callable[[], float] = time.monotonic
    start_time: float = field(init=False)
    status: PollStatus = field(init=False, default=PollStatus.WAITING)
    last_result: Optional[bool] = field(init=False, default=None)
    attempts: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")
        if self.interval < 0:
            raise ValueError("interval must be >= 0")
        self.start_time = self.clock()

    @property
    def elapsed(self) -> float:
        return self.clock() - self.start_time

    @property
    def done(self) -> bool:
        return self.status is not PollStatus.WAITING

    def record(self, reachable: bool) -> PollStatus:
        """Feed one probe result; returns the resulting status."""
        if self.done:
            return self.status
        self.attempts += 1
        self.last_result = reachable
        if reachable:
            self.status = PollStatus.SUCCEEDED
        elif self.elapsed >= self.timeout:
            self.status = PollStatus.TIMED_OUT
        return self.status

    def next_delay(self) -> float:
        # Never sleep past the deadline; the last probe happens at or after it.
        return max(0.0, min(self.interval, self.timeout - self.elapsed))

    def cancel(self) -> None:
        if not self.done:
            self.status = PollStatus.CANCELLED


def host_of(url_or_host: str) -> str:
    """'http://app-ns.rhcloud.com/' -> 'app-ns.rhcloud.com'"""
    if "://" in url_or_host:
        return urlparse(url_or_host).hostname or ""
    return url_or_host.split("/", 1)[0].split(":", 1)[0]


def can_resolve(host: str) -> bool:
    try:
        socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError):
        return False
    return True


async def can_resolve_async(host: str) -> bool:
    loop = asyncio.get_running_loop()
    try:
        await loop.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError):
        return False
    return True


def _report(state: PollState, host: str) -> None:
    log_event(
        "poll_finished",
        log,
        host=host,
        outcome=state.status.value,
        attempts=state.attempts,
        duration_ms=int(state.elapsed * 1000),
    )


def wait_for_accessible(
    target: str,
    timeout: float,
    *,
    probe: Probe = can_resolve,
    sleep: Sleep = time.sleep,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Block until `target` is reachable or `timeout` seconds have elapsed.
    Returns False only once at least `timeout` seconds have passed.
    """
    host = host_of(target)
    state = PollState(timeout=timeout, interval=interval, clock=clock)
    while state.record(probe(host)) is PollStatus.WAITING:
        sleep(state.next_delay())
    _report(state, host)
    return state.status is PollStatus.SUCCEEDED


async def _poll_async(
    state: PollState, host: str, probe: AsyncProbe, sleep: AsyncSleep
) -> bool:
    try:
        while state.record(await probe(host)) is PollStatus.WAITING:
            await sleep(state.next_delay())
    except asyncio.CancelledError:
        state.cancel()
        _report(state, host)
        raise
    _report(state, host)
    return state.status is PollStatus.SUCCEEDED


def wait_for_accessible_async(
    target: str,
    timeout: float,
    *,
    probe: AsyncProbe = can_resolve_async,
    sleep: AsyncSleep = asyncio.sleep,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    clock: Callable[[], float] = time.monotonic,
) -> "asyncio.Task[bool]":
    """
    Start polling on the running event loop and return the task.
    Await it for the result, cancel() it to stop probing.
    Must be called from within a running loop.
    """
    loop = asyncio.get_running_loop()
    host = host_of(target)
    state = PollState(timeout=timeout, interval=interval, clock=clock)
    return loop.create_task(_poll_async(state, host, probe, sleep))


__all__ = [
    "PollStatus",
    "PollState",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "host_of",
    "can_resolve",
    "can_resolve_async",
    "wait_for_accessible",
    "wait_for_accessible_async",
]
