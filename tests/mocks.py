"""
Test Doubles for devcomms

Mock implementations of Protocol interfaces for unit testing.
These allow testing UpdateLoop and related components without
a real remote host or wall-clock waits.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from devcomms_core.exceptions import TransportError


@dataclass
class FakeClock:
    """
    Manually advanced monotonic clock (seconds).

    Injected as UpdateLoop(clock=...) so tests control time.
    """

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@dataclass
class MockTransport:
    """
    Test double for Transport protocol.

    Records every payload. Each send() stays pending until the test
    calls respond() or fail(), so in-flight behaviour can be asserted.
    """

    payloads: list[str] = field(default_factory=list)
    closed: bool = False
    _pending: list[asyncio.Future[str]] = field(default_factory=list)

    async def send(self, payload: str) -> str:
        self.payloads.append(payload)
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    async def close(self) -> None:
        self.closed = True

    @property
    def in_flight(self) -> int:
        """Number of sends still waiting for a response"""
        return sum(1 for f in self._pending if not f.done())

    def respond(self, text: str = "") -> None:
        """Complete the oldest pending send with text."""
        self._next_pending().set_result(text)

    def fail(self, error: Exception | None = None) -> None:
        """Fail the oldest pending send."""
        self._next_pending().set_exception(error or TransportError("connection refused"))

    def _next_pending(self) -> asyncio.Future[str]:
        for future in self._pending:
            if not future.done():
                return future
        raise AssertionError("No pending send to complete")

    def reset(self) -> None:
        """Reset all recorded state for next test."""
        self.payloads.clear()
        self._pending.clear()


@dataclass
class EchoTransport:
    """
    Transport that answers immediately with a fixed response.

    Used for timer-driven tests that run against the real clock.
    """

    response: str = "OK\r"
    payloads: list[str] = field(default_factory=list)
    closed: bool = False

    async def send(self, payload: str) -> str:
        self.payloads.append(payload)
        return self.response

    async def close(self) -> None:
        self.closed = True


@dataclass(eq=False)
class RecordingListener:
    """Listener that records every payload it receives."""

    name: str = "listener"
    received: list[str] = field(default_factory=list)
    log: list[str] | None = None  # shared call-order log

    def __call__(self, payload: str) -> None:
        self.received.append(payload)
        if self.log is not None:
            self.log.append(self.name)


async def settle(rounds: int = 5) -> None:
    """Let spawned exchange tasks run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)
