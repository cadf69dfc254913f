"""
Sennheiser Command Encoders

Pure functions mapping a logical query to the receiver's command text.
Every command is a keyword terminated by a carriage return.
"""

from __future__ import annotations

from enum import Enum

from devcomms_core.exceptions import InvalidArgumentError

TERMINATOR = "\r"

BANK_RANGE = (1, 20)
USER_BANK_RANGE = (1, 6)
USER_BANK_OFFSET = 20  # user banks follow the 20 factory banks


class DeviceType(Enum):
    """Receiver family"""
    EM = 0  # stationary receiver
    SR = 1  # stationary transmitter


class EqualizerConfig(Enum):
    """Equalizer presets reported by the receiver"""
    FLAT = 0
    LOW_CUT = 1
    LOW_CUT_HIGH_BOOST = 2
    HIGH_BOOST = 3


def _command(keyword: str) -> str:
    return keyword + TERMINATOR


def _bank_list(bank_num: int) -> str:
    return _command(f"BankList {bank_num}")


def _require_em(device_type: DeviceType, name: str) -> None:
    if device_type == DeviceType.SR:
        raise InvalidArgumentError(f"{name} is not valid for SR devices")


def bank(bank_num: int) -> str:
    """
    Query the channel list of a factory bank.

    Args:
        bank_num: Bank number 1-20

    Raises:
        InvalidArgumentError: If bank_num is out of range
    """
    low, high = BANK_RANGE
    if not low <= bank_num <= high:
        raise InvalidArgumentError(f"Invalid bank number: {bank_num} (expected {low}-{high})")
    return _bank_list(bank_num)


def user_bank(bank_num: int) -> str:
    """
    Query the channel list of a user bank.

    Args:
        bank_num: User bank number 1-6

    Raises:
        InvalidArgumentError: If bank_num is out of range
    """
    low, high = USER_BANK_RANGE
    if not low <= bank_num <= high:
        raise InvalidArgumentError(
            f"Invalid user bank number: {bank_num} (expected {low}-{high})"
        )
    return _bank_list(bank_num + USER_BANK_OFFSET)


def frequency() -> str:
    return _command("Frequency")


def rf_config() -> str:
    return _command("RfConfig")


def name() -> str:
    return _command("Name")


def mute() -> str:
    return _command("Mute")


def firmware_version() -> str:
    return _command("FirmwareRevision")


def squelch(device_type: DeviceType = DeviceType.EM) -> str:
    """Query the squelch level (EM receivers only)"""
    _require_em(device_type, "Squelch")
    return _command("Squelch")


def af_output_level(device_type: DeviceType = DeviceType.EM) -> str:
    """Query the AF output level (EM receivers only)"""
    _require_em(device_type, "AF output level")
    return _command("AfOut")


def equalizer() -> str:
    return _command("Equalizer")


def rf_antenna1() -> str:
    return _command("RF1")


def rf_antenna2_state() -> str:
    return _command("RF2")


def summed_rf_state() -> str:
    return _command("RF")


def summed_af_state() -> str:
    return _command("AF")


def battery_status() -> str:
    return _command("Bat")


def sensitivity() -> str:
    return _command("Sensitivity")
