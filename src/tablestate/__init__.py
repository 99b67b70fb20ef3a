"""Poker table state tracker.

Usage:
    from tablestate import TableState

    table = TableState()
    table.apply_event({"type": "DealerPosMsg", "data": {"dealerPos": 3, "sbPos": 4, "bbPos": 5}})
    table.apply_proto_event({"ns": "holdem", "topic": "NeedActionMsg", "data": {"seatNum": 5}})
    table.is_hero_turn
"""

__version__ = "0.1.0"

from tablestate.models import ActionHistoryEntry, ActionRequest, Phase, Seat
from tablestate.state import ApplyResult, TableState

__all__ = [
    "TableState",
    "ApplyResult",
    "Phase",
    "Seat",
    "ActionRequest",
    "ActionHistoryEntry",
    "__version__",
]
