"""Table model types: phases, seats, pending actions and the action log.

Field names are the Python spelling of the protocol's camelCase keys
(``deskCoin`` -> ``desk_coin``). Card payloads stay opaque: nothing here
decodes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Phase",
    "Seat",
    "ActionRequest",
    "ActionHistoryEntry",
    "INACTIVE_SEAT_STATE",
    "DEFAULT_COUNTDOWN",
    "phase_from_room_state",
    "phase_from_board_state",
]

# Seat status code meaning "sitting out"; excluded from active counts.
INACTIVE_SEAT_STATE = 4

# Seconds assumed for a decision when the server omits the countdown.
DEFAULT_COUNTDOWN = 30


class Phase(Enum):
    """Stage of the current hand."""

    IDLE = "idle"
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


# Room state codes as reported in a room snapshot; keys are ints, so a
# string code such as "3" is not a known state and reads as idle
_ROOM_STATE_PHASES = {
    1: Phase.PREFLOP,
    2: Phase.FLOP,
    3: Phase.TURN,
    4: Phase.RIVER,
    5: Phase.SHOWDOWN,
}

# Board deals only ever move the hand onto a community street
_BOARD_STATE_PHASES = {
    2: Phase.FLOP,
    3: Phase.TURN,
    4: Phase.RIVER,
}


def phase_from_room_state(state) -> Phase:
    """Map a snapshot ``state`` code to a phase; unknown codes are idle."""
    try:
        return _ROOM_STATE_PHASES.get(state, Phase.IDLE)
    except TypeError:  # unhashable junk from the wire
        return Phase.IDLE


def phase_from_board_state(room_state) -> Phase | None:
    """Map a board deal's ``roomState`` to a street, or None to keep the phase."""
    try:
        return _BOARD_STATE_PHASES.get(room_state)
    except TypeError:
        return None


@dataclass
class Seat:
    """An occupied table position."""

    seat_num: int
    user_id: str | None = None
    nick_name: str = ""
    desk_coin: int = 0
    left_coin: int = 0
    state: int = 0

    def is_active(self, inactive_state: int = INACTIVE_SEAT_STATE) -> bool:
        return self.state != inactive_state


@dataclass(frozen=True)
class ActionRequest:
    """The decision currently awaited from a seat.

    Replaced wholesale by each new request; ``count_down`` is copied from
    the server and never enforced here.
    """

    seat_num: int | None
    opt_action: int | None = None
    opt_coin: int = 0
    min_bet_coin: int = 0
    max_bet_coin: int = 0
    count_down: int = DEFAULT_COUNTDOWN
    desk_coin: int = 0


@dataclass(frozen=True)
class ActionHistoryEntry:
    """One player action as observed during the current hand."""

    timestamp: int  # epoch milliseconds
    seat_num: int | None
    action: int | None
    coin: int | None
