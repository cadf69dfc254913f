"""
Listener Bus

Fan-out of response payloads to registered listeners.
"""

from __future__ import annotations

import logging

from devcomms_core.protocols import Listener

logger = logging.getLogger(__name__)


def _same_listener(a: Listener, b: Listener) -> bool:
    """Identity match; bound methods match on their instance and function."""
    if a is b:
        return True
    a_self = getattr(a, "__self__", None)
    a_func = getattr(a, "__func__", None)
    if a_self is None or a_func is None:
        return False
    return a_self is getattr(b, "__self__", None) and a_func is getattr(b, "__func__", None)


class ListenerBus:
    """
    Ordered registry of response listeners.

    Listeners are matched by identity, never by equality, so unhashable
    callables can register and equal-but-distinct listeners are kept
    apart. The same bound method fetched twice maps to one registration.

    Usage:
        >>> bus = ListenerBus()
        >>> bus.register(print)
        >>> bus.notify_all("Bat 3\\r")
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def _index(self, listener: object) -> int:
        for i, registered in enumerate(self._listeners):
            if _same_listener(registered, listener):
                return i
        return -1

    def register(self, listener: Listener) -> None:
        """Add a listener. Registering twice is a no-op."""
        if self._index(listener) < 0:
            self._listeners.append(listener)

    def unregister(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        i = self._index(listener)
        if i >= 0:
            del self._listeners[i]

    def notify_all(self, payload: str) -> None:
        """
        Invoke every listener with the same payload, in registration order.

        A failing listener is logged and skipped; the remaining listeners
        are still invoked.

        Args:
            payload: Raw response text
        """
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed: {e}", exc_info=True)

    def __contains__(self, listener: object) -> bool:
        return self._index(listener) >= 0

    def __len__(self) -> int:
        return len(self._listeners)
