# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_keepalive.py
# -----------------------------------------------------------------------------
from datetime import datetime, timedelta

from utility.keepalive import KeepAliveState


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class PingDb:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.pings = 0

    def ping(self) -> bool:
        self.pings += 1
        if self.fail:
            raise RuntimeError("connection refused")
        return True


def test_first_call_pings_then_waits_for_interval():
    clock = Clock(datetime(2026, 10, 1, 12, 0))
    state = KeepAliveState(interval_days=5, clock=clock)
    db = PingDb()

    assert state.status()["last_ping"] is None

    first = state.ping_database(db)
    assert first == {"success": True, "pinged": True, "message": "Database ping successful"}

    clock.now += timedelta(days=2)
    second = state.ping_database(db)
    assert second["pinged"] is False
    assert second["success"] is True
    assert "2 days ago" in second["message"]
    assert state.status()["days_until_next_ping"] == 3

    clock.now += timedelta(days=3)
    assert state.ping_database(db)["pinged"] is True
    assert db.pings == 2


def test_failed_ping_is_not_recorded():
    state = KeepAliveState(interval_days=5, clock=Clock(datetime(2026, 10, 1)))

    result = state.ping_database(PingDb(fail=True))

    assert result["success"] is False
    assert result["pinged"] is False
    assert state.last_ping is None
