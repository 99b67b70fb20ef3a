"""TableState: event-driven aggregate for a single poker table.

Folds a stream of decoded table events into one mutable record:
- Identity: which seat belongs to the observing player (hero)
- Seat registry: occupancy, stacks and status per seat
- Hand lifecycle: phase, hand counter, pots, per-hand reset
- Action tracking: the pending decision and the hand's action log
- Projection: derived totals and a plain-data snapshot

The dispatcher never raises. Malformed envelopes and unknown event types
are ignored; a transition that fails midway is dropped and whatever it
already mutated stays mutated.
"""

from __future__ import annotations

import copy
import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, dataclass

from tablestate.config import TrackerConfig
from tablestate.core.schemas import EVENT_ENVELOPE, PROTO_ENVELOPE, check_envelope
from tablestate.events import (
    BoardCardsMsg,
    DealerPosMsg,
    EnterRoomRes,
    HoleCardsMsg,
    Ignored,
    NeedActionMsg,
    PlayerActionMsg,
    PlayerLeaveMsg,
    PlayerStateMsg,
    PotsMsg,
    RoomSnapshotMsg,
    RoundResultMsg,
    SeatEmptyMsg,
    SeatOccupiedMsg,
    ShowdownMsg,
    SitDownRes,
    TableEvent,
    UserTokenReq,
    parse_event,
)
from tablestate.models import ActionHistoryEntry, ActionRequest, Phase, Seat

__all__ = ["TableState", "ApplyResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of applying one envelope.

    Informational only: ``error`` is never raised and callers are free to
    discard the whole result.
    """

    applied: bool
    event_type: str | None = None
    error: str | None = None


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


def _keep(value, current):
    """Take ``value`` unless it is absent (None); zero is a real value."""
    return current if value is None else value


def _clean_pots(pots) -> list[int]:
    return [int(p or 0) for p in pots]


def _json_default(value):
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    return str(value)


class TableState:
    """Aggregate state of one tracked table.

    Parameters
    ----------
    config : TrackerConfig | None
        Tracker settings (inactive seat code, default countdown, optional
        pre-seeded hero id). Defaults are used when omitted.
    clock : callable | None
        Returns epoch milliseconds for action history timestamps.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config or TrackerConfig()
        self._clock = clock or _wall_clock_ms
        self._transitions: dict[type[TableEvent], Callable] = {
            UserTokenReq: self._on_user_token,
            SitDownRes: self._on_sit_down,
            EnterRoomRes: self._on_enter_room,
            RoomSnapshotMsg: self._on_room_snapshot,
            DealerPosMsg: self._on_dealer_pos,
            HoleCardsMsg: self._on_hole_cards,
            BoardCardsMsg: self._on_board_cards,
            NeedActionMsg: self._on_need_action,
            PotsMsg: self._on_pots,
            PlayerActionMsg: self._on_player_action,
            SeatOccupiedMsg: self._on_seat_occupied,
            SeatEmptyMsg: self._on_seat_vacated,
            PlayerLeaveMsg: self._on_seat_vacated,
            PlayerStateMsg: self._on_player_state,
            ShowdownMsg: self._on_showdown,
            RoundResultMsg: self._on_round_result,
        }
        self.reset()

    @property
    def config(self) -> TrackerConfig:
        return self._config

    def reset(self) -> None:
        """Return every field, session stats included, to its initial value."""
        self.room_id = None
        self.bb: int = 0
        self.sb: int = 0

        self.hero_user_id = self._config.hero_user_id
        self.hero_seat: int | None = None

        self.phase: Phase = Phase.IDLE
        self.hand_number: int = 0
        self.dealer_pos: int = -1
        self.sb_pos: int = -1
        self.bb_pos: int = -1
        self.pots: list[int] = [0]
        self.current_act: ActionRequest | None = None

        # Filled by an external card decoder, if the consumer has one
        self.hole_card_strings: list[str] = []
        self.board_card_strings: list[str] = []

        self.hole_card_bytes = None
        self.board_card_bytes = None

        self.seats: dict[int, Seat] = {}
        self.action_history: list[ActionHistoryEntry] = []

        self.hands_played: int = 0
        self.hands_won: int = 0
        self.net_profit: int = 0

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def apply_event(self, evt) -> ApplyResult:
        """Apply a ``{"type": ..., "data": ...}`` envelope."""
        check = check_envelope(evt, EVENT_ENVELOPE)
        if not check.valid:
            logger.debug("Ignoring malformed envelope: %s", check.error)
            return ApplyResult(applied=False, error=check.error)

        event_type = evt["type"]
        try:
            event = parse_event(event_type, evt.get("data") or {})
            if isinstance(event, Ignored):
                logger.debug("Ignoring unrecognized event type %r", event_type)
                return ApplyResult(applied=False, event_type=event_type)
            self._transitions[type(event)](event)
        except Exception as exc:
            logger.warning("Dropped %s after failed transition: %s", event_type, exc)
            return ApplyResult(applied=False, event_type=event_type, error=str(exc))
        return ApplyResult(applied=True, event_type=event_type)

    def apply_proto_event(self, evt) -> ApplyResult:
        """Apply a ``{"ns", "topic", "data"}`` envelope; ``ns`` is unused."""
        check = check_envelope(evt, PROTO_ENVELOPE)
        if not check.valid:
            logger.debug("Ignoring malformed proto envelope: %s", check.error)
            return ApplyResult(applied=False, error=check.error)
        return self.apply_event({"type": evt["topic"], "data": evt.get("data") or {}})

    def apply_events(self, events: Iterable, proto: bool = False) -> int:
        """Apply envelopes in order and return how many were applied."""
        apply = self.apply_proto_event if proto else self.apply_event
        return sum(1 for evt in events if apply(evt).applied)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def _on_user_token(self, e: UserTokenReq) -> None:
        if e.user_id:
            self.hero_user_id = e.user_id

    def _on_hole_cards(self, e: HoleCardsMsg) -> None:
        # Only hero's own cards are expected; anyone else's are dropped
        if self.hero_user_id and e.user_id and e.user_id != self.hero_user_id:
            return
        self.hole_card_bytes = e.cards
        if not self.hero_user_id and e.user_id:
            self.hero_user_id = e.user_id

    def _match_hero(self, seat_num, user_id) -> None:
        if self.hero_user_id and user_id == self.hero_user_id:
            self.hero_seat = seat_num

    # ------------------------------------------------------------------
    # Room entry and snapshots
    # ------------------------------------------------------------------

    def _on_sit_down(self, e: SitDownRes) -> None:
        pass

    def _on_enter_room(self, e: EnterRoomRes) -> None:
        if not e.ok:
            return
        self.room_id = _keep(e.room_id, self.room_id)
        self.bb = _keep(e.bb, self.bb)
        self.sb = _keep(e.sb, self.sb)

    def _on_room_snapshot(self, e: RoomSnapshotMsg) -> None:
        self.room_id = _keep(e.room_id, self.room_id)
        self.dealer_pos = _keep(e.dealer_pos, self.dealer_pos)
        self.sb_pos = _keep(e.sb_pos, self.sb_pos)
        self.bb_pos = _keep(e.bb_pos, self.bb_pos)
        if e.pots:
            self.pots = _clean_pots(e.pots)
        if e.phase is not None:
            self.phase = e.phase

        for p in e.players or ():
            if p.seat_num is None:
                continue
            self.seats[p.seat_num] = Seat(
                seat_num=p.seat_num,
                user_id=p.user_id,
                nick_name=p.nick_name or "",
                desk_coin=_keep(p.desk_coin, 0),
                left_coin=_keep(p.left_coin, 0),
                state=_keep(p.state, 0),
            )
            self._match_hero(p.seat_num, p.user_id)

        if e.curr_act is not None:
            self.current_act = self._normalize_act(e.curr_act)
        if e.board_cards:
            self.board_card_bytes = e.board_cards
        if e.hole_cards:
            self.hole_card_bytes = e.hole_cards

    def _normalize_act(self, a: Mapping) -> ActionRequest:
        """Build an action request from a snapshot's ``currAct``.

        Snapshots report the remaining countdown rather than the full one;
        a zero remaining falls back to the total, then to the default.
        """
        return ActionRequest(
            seat_num=a.get("seatNum"),
            opt_action=_keep(a.get("optAction"), 0),
            opt_coin=_keep(a.get("optCoin"), 0),
            min_bet_coin=_keep(a.get("minBetCoin"), 0),
            max_bet_coin=_keep(a.get("maxBetCoin"), 0),
            count_down=(
                a.get("countdownLeft")
                or a.get("countdownTotal")
                or self._config.default_countdown
            ),
            desk_coin=0,
        )

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def _on_dealer_pos(self, e: DealerPosMsg) -> None:
        self.dealer_pos = _keep(e.dealer_pos, self.dealer_pos)
        self.sb_pos = _keep(e.sb_pos, self.sb_pos)
        self.bb_pos = _keep(e.bb_pos, self.bb_pos)
        self.phase = Phase.PREFLOP
        self.hole_card_strings = []
        self.board_card_strings = []
        self.hole_card_bytes = None
        self.board_card_bytes = None
        self.current_act = None
        self.action_history = []
        self.pots = [0]
        self.hand_number += 1

        for s in e.seats or ():
            seat = self._seat(s.seat_num)
            if seat is not None:
                seat.desk_coin = _keep(s.coin, seat.desk_coin)

    def _on_board_cards(self, e: BoardCardsMsg) -> None:
        self.board_card_bytes = e.cards
        phase = e.phase
        if phase is not None:
            self.phase = phase

    def _on_showdown(self, e: ShowdownMsg) -> None:
        self.phase = Phase.SHOWDOWN

    def _on_round_result(self, e: RoundResultMsg) -> None:
        self.phase = Phase.IDLE
        self.current_act = None
        self.hands_played += 1

        if not e.players or self.hero_seat is None:
            return
        hero_result = next((p for p in e.players if p.seat_num == self.hero_seat), None)
        if hero_result is None:
            return
        profit = _keep(hero_result.profit, 0)
        self.net_profit += profit
        if profit > 0:
            self.hands_won += 1

    # ------------------------------------------------------------------
    # Actions and pots
    # ------------------------------------------------------------------

    def _on_need_action(self, e: NeedActionMsg) -> None:
        self.current_act = ActionRequest(
            seat_num=e.seat_num,
            opt_action=e.opt_action,
            opt_coin=_keep(e.opt_coin, 0),
            min_bet_coin=_keep(e.min_bet_coin, 0),
            max_bet_coin=_keep(e.max_bet_coin, 0),
            count_down=_keep(e.count_down, self._config.default_countdown),
            desk_coin=_keep(e.desk_coin, 0),
        )

    def _on_pots(self, e: PotsMsg) -> None:
        if e.pots:
            self.pots = _clean_pots(e.pots)

    def _on_player_action(self, e: PlayerActionMsg) -> None:
        seat = self._seat(e.seat_num)
        if seat is not None:
            seat.desk_coin = _keep(e.desk_coin, seat.desk_coin)
            seat.left_coin = _keep(e.left_coin, seat.left_coin)
        # Logged even when the seat is unknown to us
        self.action_history.append(ActionHistoryEntry(
            timestamp=self._clock(),
            seat_num=e.seat_num,
            action=e.action,
            coin=e.desk_coin,
        ))

    # ------------------------------------------------------------------
    # Seat registry
    # ------------------------------------------------------------------

    def _seat(self, seat_num) -> Seat | None:
        if seat_num is None:
            return None
        return self.seats.get(seat_num)

    def _on_seat_occupied(self, e: SeatOccupiedMsg) -> None:
        if e.seat_num is None:
            return
        self.seats[e.seat_num] = Seat(
            seat_num=e.seat_num,
            user_id=e.user_id,
            nick_name=e.nick_name or "",
            desk_coin=_keep(e.coin, 0),
            left_coin=0,
            state=0,
        )
        self._match_hero(e.seat_num, e.user_id)

    def _on_seat_vacated(self, e: SeatEmptyMsg | PlayerLeaveMsg) -> None:
        # hero_seat is deliberately left pointing at the vacated seat
        self.seats.pop(e.seat_num, None)

    def _on_player_state(self, e: PlayerStateMsg) -> None:
        seat = self._seat(e.seat_num)
        if seat is not None and e.state is not None:
            seat.state = e.state

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def is_hero_turn(self) -> bool:
        return (
            self.current_act is not None
            and self.hero_seat is not None
            and self.current_act.seat_num == self.hero_seat
        )

    @property
    def total_pot(self) -> int:
        return sum(p or 0 for p in self.pots)

    @property
    def hero_stack(self) -> int:
        seat = self._seat(self.hero_seat)
        if seat is None:
            return 0
        return seat.desk_coin or 0

    @property
    def active_seat_count(self) -> int:
        inactive = self._config.inactive_seat_state
        return sum(1 for seat in self.seats.values() if seat.is_active(inactive))

    def get_state_snapshot(self) -> dict:
        """Return a serializable snapshot of the table.

        Containers are copies; mutating the snapshot never touches the
        aggregate and later events never change an earlier snapshot.
        """
        return {
            "room_id": self.room_id,
            "hero_seat": self.hero_seat,
            "hero_user_id": self.hero_user_id,
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "hole_cards": list(self.hole_card_strings),
            "board_cards": list(self.board_card_strings),
            "hole_card_bytes": copy.deepcopy(self.hole_card_bytes),
            "board_card_bytes": copy.deepcopy(self.board_card_bytes),
            "pots": list(self.pots),
            "total_pot": self.total_pot,
            "dealer_pos": self.dealer_pos,
            "sb_pos": self.sb_pos,
            "bb_pos": self.bb_pos,
            "bb": self.bb,
            "sb": self.sb,
            "seats": {num: asdict(seat) for num, seat in self.seats.items()},
            "current_act": asdict(self.current_act) if self.current_act else None,
            "is_hero_turn": self.is_hero_turn,
            "hero_stack": self.hero_stack,
            "active_players": self.active_seat_count,
            "action_history": [asdict(entry) for entry in self.action_history],
            "stats": {
                "hands_played": self.hands_played,
                "hands_won": self.hands_won,
                "net_profit": self.net_profit,
            },
        }

    def to_json(self) -> str:
        """Snapshot as a JSON string; byte card payloads become hex."""
        return json.dumps(self.get_state_snapshot(), default=_json_default)
