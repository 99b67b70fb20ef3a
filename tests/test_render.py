"""Tests for rich snapshot rendering."""

import pytest
from rich.console import Console

from tablestate.reporting.render import make_phase_label, render
from tablestate.state import TableState


def _evt(type_name: str, **data) -> dict:
    return {"type": type_name, "data": data}


def _render_text(snap: dict, **kwargs) -> str:
    console = Console(record=True, width=120)
    console.print(render(snap, **kwargs))
    return console.export_text()


class TestRender:
    def test_empty_table(self):
        text = _render_text(TableState().get_state_snapshot())
        assert "No seats occupied" in text
        assert "Hero seat unresolved" in text
        assert "No actions this hand" in text
        assert "IDLE" in text

    def test_hero_turn(self, hero_table):
        hero_table.apply_event(_evt("DealerPosMsg", dealerPos=0, sbPos=1, bbPos=2))
        hero_table.apply_event(_evt("PotsMsg", pots=[30, 10]))
        hero_table.apply_event(_evt("NeedActionMsg", seatNum=2, minBetCoin=20, maxBetCoin=1000))
        text = _render_text(hero_table.get_state_snapshot())
        assert "YOUR TURN" in text
        assert "PREFLOP" in text
        assert "Pot: 40" in text
        assert "alice" in text
        assert "<- to act" in text

    def test_action_history_and_losses(self, hero_table):
        hero_table.apply_event(_evt("DealerPosMsg"))
        hero_table.apply_event(_evt("PlayerActionMsg", seatNum=1, action=3, deskCoin=950))
        hero_table.apply_event(_evt("RoundResultMsg", players=[{"seatNum": 2, "profit": -25}]))
        text = _render_text(hero_table.get_state_snapshot())
        assert "seat 1" in text
        assert "stack 950" in text
        assert "Net -25" in text


@pytest.mark.parametrize("phase", ["idle", "preflop", "flop", "turn", "river", "showdown"])
def test_phase_label(phase):
    assert make_phase_label(phase).plain == phase.upper()
