"""
Devcomms Loop Engine Components

Components:
- UpdateLoop: Tick timer, batch assembly and response dispatch
- RecurringRegistry: Interval-bucketed recurring commands
- ListenerBus: Ordered response listeners
"""

from .listener_bus import ListenerBus
from .recurring import RecurringEntry, RecurringRegistry
from .update_loop import UpdateLoop

__all__ = ["UpdateLoop", "RecurringEntry", "RecurringRegistry", "ListenerBus"]
