"""
Devcomms Loop Factory

Factory functions for creating production UpdateLoop instances.
Separates object creation from scheduling logic (DI pattern).
"""

from __future__ import annotations

from devcomms_core.protocols import Transport

from .config import Settings
from .config import settings as default_settings
from .engine import UpdateLoop
from .transport import HttpTransport


def create_update_loop(
    base_url: str | None = None,
    min_update_ms: float | None = None,
    transport: Transport | None = None,
    settings: Settings | None = None,
) -> UpdateLoop:
    """
    Create a production UpdateLoop with real I/O dependencies.

    Explicit arguments take precedence over settings.

    Args:
        base_url: Remote host base URL (default: settings.base_url)
        min_update_ms: Tick period in ms (default: settings.min_update_ms)
        transport: Transport implementation (default: HttpTransport)
        settings: Settings instance (default: environment settings)

    Returns:
        Configured UpdateLoop instance
    """
    cfg = settings if settings is not None else default_settings

    if transport is None:
        transport = HttpTransport(
            base_url=base_url or cfg.base_url,
            path_prefix=cfg.path_prefix,
            timeout=cfg.request_timeout,
        )

    return UpdateLoop(
        transport=transport,
        min_update_ms=min_update_ms if min_update_ms is not None else cfg.min_update_ms,
        stale_response_ms=cfg.stale_response_ms,
    )
