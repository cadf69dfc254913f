"""
Recurring Registry

Interval-bucketed recurring commands.
Each distinct interval owns exactly one entry whose text is the
concatenation of every command added with that interval.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RecurringEntry:
    """One interval bucket of recurring commands"""
    command_text: str
    interval_ms: float
    last_fired_at: float | None = None  # None fires on the next eligible tick

    def is_due(self, now_ms: float) -> bool:
        """Check whether this bucket should be included in a batch at now_ms"""
        if self.last_fired_at is None:
            return True
        return now_ms - self.last_fired_at >= self.interval_ms

    def reset(self) -> None:
        """Make the bucket eligible to fire immediately"""
        self.last_fired_at = None


class RecurringRegistry:
    """
    Ordered collection of RecurringEntry buckets.

    Design:
    - Buckets are matched by exact interval equality
    - New commands are prepended to the bucket text
    - Removal splices the first textual occurrence out of each bucket

    Usage:
        >>> registry = RecurringRegistry()
        >>> registry.add("Bat\\r", 1000)
        >>> registry.add("RF\\r", 1000)
        >>> registry.get(1000).command_text
        'RF\\rBat\\r'
    """

    def __init__(self) -> None:
        self._entries: list[RecurringEntry] = []

    @property
    def entries(self) -> tuple[RecurringEntry, ...]:
        """Snapshot of the current buckets in registry order"""
        return tuple(self._entries)

    def get(self, interval_ms: float) -> RecurringEntry | None:
        """Get the bucket for an interval, if any"""
        for entry in self._entries:
            if entry.interval_ms == interval_ms:
                return entry
        return None

    def add(self, command: str, interval_ms: float) -> None:
        """
        Add a recurring command.

        Args:
            command: Command text to send every interval_ms
            interval_ms: Minimum spacing between sends of this bucket
        """
        if not command:
            return

        entry = self.get(interval_ms)
        if entry is not None:
            entry.command_text = command + entry.command_text
            entry.reset()
            logger.debug(f"Merged recurring command into {interval_ms}ms bucket")
        else:
            self._entries.append(RecurringEntry(command, interval_ms))
            logger.debug(f"Created {interval_ms}ms recurring bucket")

    def remove(self, command: str) -> None:
        """
        Remove a recurring command from every bucket containing it.

        Matching is by substring: the caller must pass the same text
        fragment that was added. Buckets left empty are deleted.

        Args:
            command: Command text previously passed to add()
        """
        if not command:
            return

        kept: list[RecurringEntry] = []
        for entry in self._entries:
            if command in entry.command_text:
                entry.command_text = entry.command_text.replace(command, "", 1)
                if not entry.command_text:
                    logger.debug(f"Removed {entry.interval_ms}ms recurring bucket")
                    continue
                entry.reset()
            kept.append(entry)
        self._entries = kept

    def collect_due(self, now_ms: float) -> str:
        """
        Concatenate the text of every due bucket and mark them fired.

        Args:
            now_ms: Current tick time in milliseconds

        Returns:
            Due command text in registry order (empty if nothing is due)
        """
        parts: list[str] = []
        for entry in self._entries:
            if entry.is_due(now_ms):
                parts.append(entry.command_text)
                entry.last_fired_at = now_ms
        return "".join(parts)

    def clear(self) -> None:
        """Remove every bucket"""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
