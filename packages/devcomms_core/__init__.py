"""
Devcomms Core

Shared protocols and exceptions for the device communication packages.
"""

from .exceptions import DevCommsError, InvalidArgumentError, TransportError
from .protocols import Listener, Transport

__all__ = [
    "DevCommsError",
    "InvalidArgumentError",
    "TransportError",
    "Listener",
    "Transport",
]
