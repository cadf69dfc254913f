"""
Devcomms Protocols

Interfaces the scheduler consumes (Transport) and produces (Listener).
"""

from .transport import Listener, Transport

__all__ = [
    "Listener",
    "Transport",
]
