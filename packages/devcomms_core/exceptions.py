"""Custom exceptions for devcomms"""


class DevCommsError(Exception):
    """Base exception for all devcomms errors"""
    pass


class InvalidArgumentError(DevCommsError, ValueError):
    """Caller passed an argument outside the accepted range"""
    pass


class TransportError(DevCommsError):
    """Request/response exchange with the remote host failed"""
    pass
