"""
Pytest fixtures for devcomms tests.

Provides mock dependencies and test loop configurations.
"""

from __future__ import annotations

import pytest

from devcomms_loop.engine import UpdateLoop
from mocks import FakeClock, MockTransport

# Tick period used by unit tests (ms)
TEST_MIN_UPDATE_MS = 100.0


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a FakeClock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create a fresh MockTransport for testing."""
    return MockTransport()


@pytest.fixture
def update_loop(mock_transport: MockTransport, fake_clock: FakeClock) -> UpdateLoop:
    """
    Create an UpdateLoop with mock transport and fake clock.

    The tick timer is not armed; tests drive tick() directly.
    """
    return UpdateLoop(
        transport=mock_transport,
        min_update_ms=TEST_MIN_UPDATE_MS,
        clock=fake_clock,
    )


@pytest.fixture
def running_loop(update_loop: UpdateLoop, fake_clock: FakeClock) -> UpdateLoop:
    """
    UpdateLoop in the running state without a timer task.

    Mirrors what start() initializes so tick() can be driven by hand.
    """
    update_loop.state.reset(fake_clock() * 1000.0)
    return update_loop
