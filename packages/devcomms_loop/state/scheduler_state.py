"""
Devcomms Loop Scheduler State

Mutable per-loop state for send gating and response tracking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class SchedulerState:
    """
    Runtime state of the update loop.

    - running: tick timer is armed
    - sending: a batch is being assembled (overlap guard)
    - response_received: the last batch has been answered, a new send may go out
    - last_send_at_ms: time the last batch was assembled
    """

    min_interval_ms: float
    running: bool = False
    sending: bool = False
    response_received: bool = False
    last_send_at_ms: float = 0.0

    def reset(self, now_ms: float) -> None:
        """Initialize for a fresh start at now_ms"""
        self.last_send_at_ms = now_ms - 1
        self.response_received = True
        self.sending = False
        self.running = True

    def is_stale(self, now_ms: float, stale_after_ms: float) -> bool:
        """Check whether the last send has gone unanswered too long"""
        return now_ms - self.last_send_at_ms > stale_after_ms

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for status reporting"""
        return {
            "running": self.running,
            "sending": self.sending,
            "response_received": self.response_received,
            "last_send_at_ms": self.last_send_at_ms,
            "min_interval_ms": self.min_interval_ms,
        }
