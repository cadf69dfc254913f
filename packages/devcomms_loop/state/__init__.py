"""Scheduler state for the update loop."""

from .scheduler_state import SchedulerState

__all__ = ["SchedulerState"]
