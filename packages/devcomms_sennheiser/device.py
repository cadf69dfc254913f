"""
Sennheiser Device

Thin facade that feeds encoder output into an UpdateLoop.
Holds no scheduling state of its own.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from . import encoders
from .encoders import DeviceType

if TYPE_CHECKING:
    from devcomms_loop.engine import UpdateLoop

logger = logging.getLogger(__name__)


class SennheiserDevice:
    """
    Sennheiser EM/SR receiver driven through an UpdateLoop.

    Usage:
        >>> device = SennheiserDevice(update_loop, DeviceType.EM)
        >>> device.request(encoders.firmware_version())
        >>> device.watch_battery(interval_ms=5000)
    """

    def __init__(self, update_loop: UpdateLoop, device_type: DeviceType = DeviceType.EM):
        self._loop = update_loop
        self._device_type = device_type

    @property
    def device_type(self) -> DeviceType:
        return self._device_type

    @property
    def update_loop(self) -> UpdateLoop:
        return self._loop

    def request(self, command: str) -> None:
        """Send a query once"""
        self._loop.send_command(command)

    def watch(self, command: str, interval_ms: float | None = None) -> None:
        """Send a query every interval_ms"""
        self._loop.add_recurring_message(command, interval_ms)
        logger.debug(f"Watching {command.strip()!r} every {interval_ms or 'tick'}ms")

    def unwatch(self, command: str) -> None:
        """Stop a query started with watch()"""
        self._loop.remove_recurring_message(command)

    # ================================================================
    # Convenience queries
    # ================================================================

    def request_bank(self, bank_num: int) -> None:
        self.request(encoders.bank(bank_num))

    def request_user_bank(self, bank_num: int) -> None:
        self.request(encoders.user_bank(bank_num))

    def request_squelch(self) -> None:
        self.request(encoders.squelch(self._device_type))

    def request_af_output_level(self) -> None:
        self.request(encoders.af_output_level(self._device_type))

    def watch_battery(self, interval_ms: float | None = None) -> None:
        self.watch(encoders.battery_status(), interval_ms)

    def watch_rf_state(self, interval_ms: float | None = None) -> None:
        self.watch(encoders.summed_rf_state(), interval_ms)

    def watch_af_state(self, interval_ms: float | None = None) -> None:
        self.watch(encoders.summed_af_state(), interval_ms)
