"""Transport adapters for devcomms_loop"""

from .http_transport import HttpTransport

__all__ = ["HttpTransport"]
