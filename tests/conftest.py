"""Shared test fixtures for tablestate."""

import pytest

from tablestate.state import TableState

FIXED_NOW_MS = 1_700_000_000_000


@pytest.fixture
def clock():
    """Deterministic clock for action history timestamps."""
    return lambda: FIXED_NOW_MS


@pytest.fixture
def table(clock):
    return TableState(clock=clock)


@pytest.fixture
def hero_table(table):
    """Table where hero 'hero' sits in seat 2 and two opponents are seated."""
    table.apply_event({"type": "UserTokenReq", "data": {"userId": "hero"}})
    table.apply_event({"type": "SeatOccupiedMsg", "data": {"seatNum": 0, "userId": "u0", "nickName": "alice", "coin": 1000}})
    table.apply_event({"type": "SeatOccupiedMsg", "data": {"seatNum": 1, "userId": "u1", "nickName": "bob", "coin": 1000}})
    table.apply_event({"type": "SeatOccupiedMsg", "data": {"seatNum": 2, "userId": "hero", "nickName": "me", "coin": 1000}})
    return table
