"""
Devcomms Sennheiser

Command encoders for Sennheiser EM/SR wireless receivers.
"""

from . import encoders
from .device import SennheiserDevice
from .encoders import DeviceType, EqualizerConfig

__all__ = [
    "encoders",
    "SennheiserDevice",
    "DeviceType",
    "EqualizerConfig",
]
