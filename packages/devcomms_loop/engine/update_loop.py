"""
Devcomms Update Loop

Fixed-rate polling scheduler that:
- Queues one-off commands in a single pending buffer
- Fires interval-bucketed recurring commands when due
- Sends one batched payload per tick through the Transport
- Dispatches non-empty responses to the ListenerBus

At most one batch is in flight at a time. A batch that has gone
unanswered for STALE_RESPONSE_MS is treated as lost and the next
tick sends again.

Dependencies are injected via constructor for testability.
Use create_update_loop() factory for production instances.
"""

from __future__ import annotations

import asyncio
import logging
import time
import traceback
from collections.abc import Callable
from typing import Any

from devcomms_core.exceptions import TransportError
from devcomms_core.protocols import Listener, Transport

from ..state import SchedulerState
from .listener_bus import ListenerBus
from .recurring import RecurringRegistry

logger = logging.getLogger(__name__)


class UpdateLoop:
    """
    Command aggregation and transport scheduler.

    Per-tick state machine: Armed → Sending → Awaiting → Armed.
    All mutation happens on the event loop thread, either from
    caller-invoked methods or from the timer/exchange tasks.
    """

    DEFAULT_MIN_UPDATE_MS: float = 1000 / 30  # ~30 polls per second

    # A response missing for longer than this is considered lost
    STALE_RESPONSE_MS: float = 3000.0

    def __init__(
        self,
        transport: Transport,
        min_update_ms: float = DEFAULT_MIN_UPDATE_MS,
        stale_response_ms: float = STALE_RESPONSE_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize UpdateLoop with injected dependencies.

        Args:
            transport: Transport adapter (HttpTransport or mock)
            min_update_ms: Tick period, also the floor for recurring intervals
            stale_response_ms: Resend after this long without a response
            clock: Clock returning seconds for send timestamps and due
                checks (injectable for tests). The tick timer always
                runs on time.monotonic.
        """
        self._transport = transport
        self._min_update_ms = float(min_update_ms)
        self._stale_response_ms = float(stale_response_ms)
        self._clock = clock

        self.state = SchedulerState(min_interval_ms=self._min_update_ms)

        # Pending one-off commands (cleared when included in a batch)
        self._one_off = ""
        self._recurring = RecurringRegistry()
        self._listeners = ListenerBus()

        # Owned tasks
        self._timer_task: asyncio.Task[None] | None = None
        self._exchanges: set[asyncio.Task[None]] = set()
        self._stopped = asyncio.Event()

        self._stats: dict[str, int] = {
            "ticks": 0,
            "batches_sent": 0,
            "responses_received": 0,
            "transport_failures": 0,
            "stale_resends": 0,
            "catch_up_ticks": 0,
        }

    # ================================================================
    # Properties
    # ================================================================

    @property
    def running(self) -> bool:
        """Whether the tick timer is armed"""
        return self.state.running

    @property
    def min_update_time(self) -> float:
        """Tick period in milliseconds (fixed at construction)"""
        return self._min_update_ms

    @property
    def pending_commands(self) -> str:
        """One-off commands waiting for the next batch"""
        return self._one_off

    @property
    def recurring(self) -> RecurringRegistry:
        return self._recurring

    @property
    def transport(self) -> Transport:
        return self._transport

    # ================================================================
    # Lifecycle
    # ================================================================

    def start(self) -> None:
        """
        Start polling if not already running.

        Must be called from within a running event loop.
        """
        if self.state.running:
            return

        loop = asyncio.get_running_loop()
        self.state.reset(self._now_ms())
        self._stopped.clear()
        self._timer_task = loop.create_task(self._timer_loop())

        logger.info(f"Update loop started (tick every {self._min_update_ms:.1f}ms)")

    def stop(self) -> None:
        """
        Stop polling if running.

        In-flight exchanges are left alone; their responses are
        still delivered to listeners.
        """
        if not self.state.running:
            return

        self.state.running = False
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None
        self._stopped.set()

        logger.info("Update loop stopped")

    async def run(self) -> None:
        """Start the loop and wait until stop() is called"""
        self.start()
        await self._stopped.wait()

    async def aclose(self) -> None:
        """
        Stop, let in-flight exchanges settle, and close the transport.

        Exchanges still pending after STALE_RESPONSE_MS are cancelled.
        """
        self.stop()

        if self._exchanges:
            done, pending = await asyncio.wait(
                set(self._exchanges),
                timeout=self._stale_response_ms / 1000.0,
            )
            for task in pending:
                task.cancel()
            if pending:
                logger.warning(f"Cancelled {len(pending)} unanswered exchange(s) on close")

        await self._transport.close()

    # ================================================================
    # Command API
    # ================================================================

    def send_command(self, command: str) -> None:
        """
        Queue a command, or several concatenated commands, to be sent once.

        Args:
            command: Command text. Empty text is ignored.
        """
        if command:
            self._one_off += command

    def add_recurring_message(self, command: str, interval_ms: float | None = None) -> None:
        """
        Send a command every interval_ms.

        Commands sharing an interval are merged into one bucket.

        Args:
            command: Command text. Empty text is ignored.
            interval_ms: Spacing between sends (default and floor: min_update_time)
        """
        if interval_ms is None:
            interval_ms = self._min_update_ms
        elif interval_ms < self._min_update_ms:
            logger.debug(
                f"Recurring interval {interval_ms}ms raised to minimum {self._min_update_ms:.1f}ms"
            )
            interval_ms = self._min_update_ms

        self._recurring.add(command, interval_ms)

    def remove_recurring_message(self, command: str) -> None:
        """
        Stop sending a previously added recurring command.

        Args:
            command: The exact text passed to add_recurring_message()
        """
        self._recurring.remove(command)

    def register_listener(self, listener: Listener) -> None:
        """Invoke listener with every non-empty response"""
        self._listeners.register(listener)

    def unregister_listener(self, listener: Listener) -> None:
        """Remove a previously registered listener"""
        self._listeners.unregister(listener)

    # ================================================================
    # Main Loop
    # ================================================================

    async def _timer_loop(self) -> None:
        """
        Fixed-rate tick timer with anchor-based drift correction.

        If the loop falls more than one period behind, the anchor is
        reset instead of firing a burst of missed ticks. Sleeps are
        scheduled on time.monotonic; the injected clock only stamps
        sends and due checks.
        """
        period = self._min_update_ms / 1000.0
        anchor = time.monotonic()
        count = 0

        while self.state.running:
            count += 1
            wait_time = anchor + count * period - time.monotonic()
            if wait_time < -period:
                logger.debug(f"Tick timer {-wait_time * 1000:.1f}ms behind, re-anchoring")
                anchor = time.monotonic()
                count = 1
                wait_time = period
            await asyncio.sleep(max(0.0, wait_time))

            if not self.state.running:
                break
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Tick error: {e}\n{traceback.format_exc()}")

    def tick(self) -> None:
        """
        Assemble and send one batch if allowed.

        A send is allowed when running, not already assembling a batch,
        and either the previous response arrived or it is stale.
        """
        self._stats["ticks"] += 1
        now = self._now_ms()
        state = self.state

        if not state.running or state.sending:
            return

        if not state.response_received:
            if not state.is_stale(now, self._stale_response_ms):
                return
            self._stats["stale_resends"] += 1
            logger.warning(
                f"No response for {now - state.last_send_at_ms:.0f}ms, resending"
            )

        state.sending = True
        try:
            state.last_send_at_ms = now
            batch = self._one_off + self._recurring.collect_due(now)

            if batch:
                self._one_off = ""
                state.response_received = False
                self._dispatch(batch)
        finally:
            state.sending = False

    def _dispatch(self, batch: str) -> None:
        """Spawn the exchange task for a batch"""
        self._stats["batches_sent"] += 1
        logger.debug(f"Sending batch ({len(batch)} chars)")

        task = asyncio.get_running_loop().create_task(self._exchange(batch))
        self._exchanges.add(task)
        task.add_done_callback(self._exchanges.discard)

    async def _exchange(self, batch: str) -> None:
        """
        Run one request/response exchange.

        Failures are logged only; the stale-response rule recovers.
        """
        try:
            response = await self._transport.send(batch)
        except TransportError as e:
            self._stats["transport_failures"] += 1
            logger.warning(f"Transport failure: {e}")
            return
        except Exception as e:
            self._stats["transport_failures"] += 1
            logger.error(f"Unexpected transport error: {e}\n{traceback.format_exc()}")
            return

        self._handle_response(response)

    def _handle_response(self, response: str) -> None:
        """
        Handle a completed exchange.

        Notifies listeners with non-empty responses. If such a round trip
        took longer than one tick period, ticks once immediately to
        catch up instead of waiting for the timer. Empty responses only
        re-arm the loop.
        """
        self.state.response_received = True
        self._stats["responses_received"] += 1

        if not response:
            return

        self._listeners.notify_all(response)

        elapsed = self._now_ms() - self.state.last_send_at_ms
        if self.state.running and elapsed > self._min_update_ms:
            self._stats["catch_up_ticks"] += 1
            logger.debug(f"Response took {elapsed:.1f}ms, catching up")
            self.tick()

    # ================================================================
    # Helpers
    # ================================================================

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def get_stats(self) -> dict[str, Any]:
        """
        Get scheduler statistics for monitoring.

        Returns:
            Dictionary with counters plus current registry and
            listener sizes and the scheduler state.
        """
        return {
            **self._stats,
            "recurring_entries": len(self._recurring),
            "listeners": len(self._listeners),
            "state": self.state.to_dict(),
        }
