"""Typed table events.

Every recognized protocol message has one frozen dataclass here, built from
the decoded ``data`` payload by its ``from_data`` classmethod. The set is
closed: ``parse_event`` returns an :class:`Ignored` for any type name it does
not know, so the dispatcher never has to fall through.

Payload keys keep the protocol's camelCase spelling; attributes are
snake_case. A key that is absent or ``None`` is carried as ``None`` and the
state layer decides what "absent" means for that field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tablestate.models import Phase, phase_from_board_state, phase_from_room_state

__all__ = [
    "TableEvent",
    "UserTokenReq",
    "SitDownRes",
    "EnterRoomRes",
    "SeatInfo",
    "RoomSnapshotMsg",
    "SeatCoin",
    "DealerPosMsg",
    "HoleCardsMsg",
    "BoardCardsMsg",
    "NeedActionMsg",
    "PotsMsg",
    "PlayerActionMsg",
    "SeatOccupiedMsg",
    "SeatEmptyMsg",
    "PlayerLeaveMsg",
    "PlayerStateMsg",
    "ShowdownMsg",
    "PlayerResult",
    "RoundResultMsg",
    "Ignored",
    "EVENT_TYPES",
    "parse_event",
]


def _records(value: Any) -> tuple[Mapping, ...] | None:
    """Return the mapping entries of a list payload, or None if not a list."""
    if not isinstance(value, (list, tuple)):
        return None
    return tuple(item for item in value if isinstance(item, Mapping))


class TableEvent:
    """Base for all event variants."""

    @classmethod
    def from_data(cls, data: Mapping) -> TableEvent:
        return cls()


# ------------------------------------------------------------------
# Identity / room entry
# ------------------------------------------------------------------

@dataclass(frozen=True)
class UserTokenReq(TableEvent):
    user_id: Any = None

    @classmethod
    def from_data(cls, data: Mapping) -> UserTokenReq:
        return cls(user_id=data.get("userId"))


@dataclass(frozen=True)
class SitDownRes(TableEvent):
    """Acknowledgement of a sit-down request; carries nothing we track."""


@dataclass(frozen=True)
class EnterRoomRes(TableEvent):
    code: Any = None
    room_id: Any = None
    bb: int | None = None
    sb: int | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0

    @classmethod
    def from_data(cls, data: Mapping) -> EnterRoomRes:
        return cls(
            code=data.get("code"),
            room_id=data.get("roomId"),
            bb=data.get("bb"),
            sb=data.get("sb"),
        )


# ------------------------------------------------------------------
# Room snapshot / hand boundary
# ------------------------------------------------------------------

@dataclass(frozen=True)
class SeatInfo:
    """One player entry of a room snapshot."""

    seat_num: Any
    user_id: Any = None
    nick_name: str | None = None
    desk_coin: int | None = None
    left_coin: int | None = None
    state: int | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> SeatInfo:
        return cls(
            seat_num=data.get("seatNum"),
            user_id=data.get("userId"),
            nick_name=data.get("nickName"),
            desk_coin=data.get("deskCoin"),
            left_coin=data.get("leftCoin"),
            state=data.get("state"),
        )


@dataclass(frozen=True)
class RoomSnapshotMsg(TableEvent):
    """Full room state, sent on (re)join.

    ``phase`` is None when the payload has no ``state`` key at all; a key
    with an unrecognized code maps to idle.
    """

    room_id: Any = None
    dealer_pos: int | None = None
    sb_pos: int | None = None
    bb_pos: int | None = None
    pots: tuple | None = None
    phase: Phase | None = None
    players: tuple[SeatInfo, ...] | None = None
    curr_act: Mapping | None = None
    board_cards: Any = None
    hole_cards: Any = None

    @classmethod
    def from_data(cls, data: Mapping) -> RoomSnapshotMsg:
        pots = data.get("pots")
        players = _records(data.get("players"))
        curr_act = data.get("currAct")
        return cls(
            room_id=data.get("roomId"),
            dealer_pos=data.get("dealerPos"),
            sb_pos=data.get("sbPos"),
            bb_pos=data.get("bbPos"),
            pots=tuple(pots) if isinstance(pots, (list, tuple)) else None,
            phase=phase_from_room_state(data["state"]) if "state" in data else None,
            players=None if players is None else tuple(SeatInfo.from_data(p) for p in players),
            curr_act=curr_act if isinstance(curr_act, Mapping) else None,
            board_cards=data.get("boardCards"),
            hole_cards=data.get("holeCards"),
        )


@dataclass(frozen=True)
class SeatCoin:
    seat_num: Any
    coin: int | None = None


@dataclass(frozen=True)
class DealerPosMsg(TableEvent):
    """Start of a new hand: button and blind positions, refreshed stacks."""

    dealer_pos: int | None = None
    sb_pos: int | None = None
    bb_pos: int | None = None
    seats: tuple[SeatCoin, ...] | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> DealerPosMsg:
        seats = _records(data.get("seats"))
        return cls(
            dealer_pos=data.get("dealerPos"),
            sb_pos=data.get("sbPos"),
            bb_pos=data.get("bbPos"),
            seats=None if seats is None else tuple(
                SeatCoin(seat_num=s.get("seatNum"), coin=s.get("coin")) for s in seats
            ),
        )


# ------------------------------------------------------------------
# Cards
# ------------------------------------------------------------------

@dataclass(frozen=True)
class HoleCardsMsg(TableEvent):
    user_id: Any = None
    cards: Any = None

    @classmethod
    def from_data(cls, data: Mapping) -> HoleCardsMsg:
        return cls(user_id=data.get("userId"), cards=data.get("cards"))


@dataclass(frozen=True)
class BoardCardsMsg(TableEvent):
    cards: Any = None
    room_state: Any = None

    @property
    def phase(self) -> Phase | None:
        return phase_from_board_state(self.room_state)

    @classmethod
    def from_data(cls, data: Mapping) -> BoardCardsMsg:
        return cls(cards=data.get("cards"), room_state=data.get("roomState"))


# ------------------------------------------------------------------
# Actions and pots
# ------------------------------------------------------------------

@dataclass(frozen=True)
class NeedActionMsg(TableEvent):
    seat_num: Any = None
    opt_action: int | None = None
    opt_coin: int | None = None
    min_bet_coin: int | None = None
    max_bet_coin: int | None = None
    count_down: int | None = None
    desk_coin: int | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> NeedActionMsg:
        return cls(
            seat_num=data.get("seatNum"),
            opt_action=data.get("optAction"),
            opt_coin=data.get("optCoin"),
            min_bet_coin=data.get("minBetCoin"),
            max_bet_coin=data.get("maxBetCoin"),
            count_down=data.get("countDown"),
            desk_coin=data.get("deskCoin"),
        )


@dataclass(frozen=True)
class PotsMsg(TableEvent):
    pots: tuple | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> PotsMsg:
        pots = data.get("pots")
        return cls(pots=tuple(pots) if isinstance(pots, (list, tuple)) else None)


@dataclass(frozen=True)
class PlayerActionMsg(TableEvent):
    seat_num: Any = None
    action: int | None = None
    desk_coin: int | None = None
    left_coin: int | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> PlayerActionMsg:
        return cls(
            seat_num=data.get("seatNum"),
            action=data.get("action"),
            desk_coin=data.get("deskCoin"),
            left_coin=data.get("leftCoin"),
        )


# ------------------------------------------------------------------
# Seat occupancy
# ------------------------------------------------------------------

@dataclass(frozen=True)
class SeatOccupiedMsg(TableEvent):
    seat_num: Any = None
    user_id: Any = None
    nick_name: str | None = None
    coin: int | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> SeatOccupiedMsg:
        return cls(
            seat_num=data.get("seatNum"),
            user_id=data.get("userId"),
            nick_name=data.get("nickName"),
            coin=data.get("coin"),
        )


@dataclass(frozen=True)
class SeatEmptyMsg(TableEvent):
    seat_num: Any = None

    @classmethod
    def from_data(cls, data: Mapping) -> SeatEmptyMsg:
        return cls(seat_num=data.get("seatNum"))


@dataclass(frozen=True)
class PlayerLeaveMsg(TableEvent):
    seat_num: Any = None

    @classmethod
    def from_data(cls, data: Mapping) -> PlayerLeaveMsg:
        return cls(seat_num=data.get("seatNum"))


@dataclass(frozen=True)
class PlayerStateMsg(TableEvent):
    seat_num: Any = None
    state: int | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> PlayerStateMsg:
        return cls(seat_num=data.get("seatNum"), state=data.get("state"))


# ------------------------------------------------------------------
# Hand end
# ------------------------------------------------------------------

@dataclass(frozen=True)
class ShowdownMsg(TableEvent):
    pass


@dataclass(frozen=True)
class PlayerResult:
    seat_num: Any
    profit: int | None = None


@dataclass(frozen=True)
class RoundResultMsg(TableEvent):
    players: tuple[PlayerResult, ...] | None = None

    @classmethod
    def from_data(cls, data: Mapping) -> RoundResultMsg:
        players = _records(data.get("players"))
        return cls(
            players=None if players is None else tuple(
                PlayerResult(seat_num=p.get("seatNum"), profit=p.get("profit"))
                for p in players
            ),
        )


@dataclass(frozen=True)
class Ignored(TableEvent):
    """Any event type the tracker does not recognize."""

    type: str = ""


EVENT_TYPES: dict[str, type[TableEvent]] = {
    cls.__name__: cls
    for cls in (
        UserTokenReq,
        SitDownRes,
        EnterRoomRes,
        RoomSnapshotMsg,
        DealerPosMsg,
        HoleCardsMsg,
        BoardCardsMsg,
        NeedActionMsg,
        PotsMsg,
        PlayerActionMsg,
        SeatOccupiedMsg,
        SeatEmptyMsg,
        PlayerLeaveMsg,
        PlayerStateMsg,
        ShowdownMsg,
        RoundResultMsg,
    )
}


def parse_event(type_name: str, data: Mapping | None = None) -> TableEvent:
    """Build the typed event for ``type_name`` from its decoded payload."""
    cls = EVENT_TYPES.get(type_name)
    if cls is None:
        return Ignored(type=type_name)
    return cls.from_data(data or {})
