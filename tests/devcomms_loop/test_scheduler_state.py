"""Tests for SchedulerState."""

from devcomms_loop.state import SchedulerState


class TestSchedulerState:
    """Tests for SchedulerState dataclass."""

    def test_initial(self):
        state = SchedulerState(min_interval_ms=100.0)

        assert state.running is False
        assert state.sending is False
        assert state.response_received is False

    def test_reset(self):
        """reset() primes a fresh start one ms in the past."""
        state = SchedulerState(min_interval_ms=100.0, sending=True)

        state.reset(5000.0)

        assert state.running is True
        assert state.sending is False
        assert state.response_received is True
        assert state.last_send_at_ms == 4999.0

    def test_is_stale_is_strict(self):
        """Exactly the threshold is not yet stale."""
        state = SchedulerState(min_interval_ms=100.0, last_send_at_ms=1000.0)

        assert not state.is_stale(4000.0, 3000.0)
        assert state.is_stale(4000.5, 3000.0)

    def test_to_dict(self):
        state = SchedulerState(min_interval_ms=100.0)
        assert state.to_dict() == {
            "running": False,
            "sending": False,
            "response_received": False,
            "last_send_at_ms": 0.0,
            "min_interval_ms": 100.0,
        }
