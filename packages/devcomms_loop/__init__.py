"""
Devcomms Loop Service

Batched command polling of a remote controllable host.
"""

__version__ = "0.1.0"

from .engine import ListenerBus, RecurringEntry, RecurringRegistry, UpdateLoop
from .factory import create_update_loop
from .transport import HttpTransport

__all__ = [
    "create_update_loop",
    "UpdateLoop",
    "RecurringEntry",
    "RecurringRegistry",
    "ListenerBus",
    "HttpTransport",
]
