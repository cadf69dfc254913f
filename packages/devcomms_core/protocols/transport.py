"""
Transport Protocols

Abstract interfaces between the update loop and the remote host.

Data Flow:
    callers                 devcomms_loop                remote host
    ───────                 ─────────────                ───────────
    send_command  ───►   UpdateLoop ── Transport ───►   polling endpoint
    Listener      ◄───   ListenerBus ◄── response ───
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

# Receives the raw response payload of one exchange
Listener = Callable[[str], None]


@runtime_checkable
class Transport(Protocol):
    """
    Request/response interface (Loop → Host).

    The payload is opaque to the transport as well: one batch in,
    one response text out.

    Implementations:
        - HttpTransport: Real HTTP polling via httpx
        - MockTransport: Test double for unit tests
    """

    async def send(self, payload: str) -> str:
        """
        Perform a single exchange with the remote host.

        Args:
            payload: Batched command text

        Returns:
            Response text (may be empty)

        Raises:
            TransportError: If the exchange failed
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the transport."""
        ...
