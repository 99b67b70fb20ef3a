"""Rich rendering of a table snapshot.

Works on the plain dict from ``TableState.get_state_snapshot()`` so it can
render snapshots loaded from anywhere, not just a live tracker.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tablestate.models import INACTIVE_SEAT_STATE

PHASE_COLORS = {
    "idle": "dim",
    "preflop": "yellow",
    "flop": "green",
    "turn": "blue",
    "river": "red",
    "showdown": "bold white",
}

MAX_HISTORY_LINES = 12


def make_phase_label(phase: str) -> Text:
    """Colorized phase label."""
    return Text(phase.upper(), style=PHASE_COLORS.get(phase, "white"))


def build_header(snap: dict) -> Panel:
    title = Text()
    title.append("TABLE  ", style="bold white")
    title.append(str(snap.get("room_id") or "?"), style="bold cyan")

    sub = Text()
    sub.append(f"Hand {snap['hand_number']}", style="bold")
    sub.append("  |  ", style="dim")
    sub.append_text(make_phase_label(snap["phase"]))
    sub.append("  |  ", style="dim")
    sub.append(f"Pot: {snap['total_pot']}", style="bold yellow")
    if len(snap["pots"]) > 1:
        sub.append(f" ({' / '.join(str(p) for p in snap['pots'])})", style="yellow")
    sub.append("  |  ", style="dim")
    sub.append(f"Blinds: {snap['sb']}/{snap['bb']}", style="bold white")

    return Panel(Group(Align.center(title), Align.center(sub)), border_style="bright_white", padding=(0, 1))


def _seat_order(item) -> tuple:
    seat_num = item[0]
    if isinstance(seat_num, int):
        return (0, seat_num, "")
    return (1, 0, str(seat_num))


def _seat_label(snap: dict, seat_num) -> Text:
    label = Text()
    markers = (
        ("D", snap["dealer_pos"], "bold yellow"),
        ("SB", snap["sb_pos"], "cyan"),
        ("BB", snap["bb_pos"], "magenta"),
    )
    for marker, pos, style in markers:
        if pos == seat_num:
            label.append(f"{marker} ", style=style)
    return label


def build_seats_panel(snap: dict, inactive_state: int = INACTIVE_SEAT_STATE) -> Panel:
    """One row per occupied seat; hero highlighted, sitting-out dimmed."""
    table = Table(show_edge=False, pad_edge=False, expand=True)
    table.add_column("Seat", width=5, no_wrap=True)
    table.add_column("", width=8, no_wrap=True)
    table.add_column("Player", ratio=1)
    table.add_column("Stack", justify="right")
    table.add_column("Behind", justify="right")

    act = snap.get("current_act") or {}
    for seat_num, seat in sorted(snap["seats"].items(), key=_seat_order):
        style = ""
        if seat_num == snap["hero_seat"]:
            style = "bold green"
        elif seat["state"] == inactive_state:
            style = "dim"
        name = Text(seat["nick_name"] or str(seat["user_id"]), style=style)
        if act.get("seat_num") == seat_num:
            name.append("  <- to act", style="bold yellow")
        table.add_row(
            str(seat_num),
            _seat_label(snap, seat_num),
            name,
            str(seat["desk_coin"]),
            str(seat["left_coin"]),
        )

    if not snap["seats"]:
        table.add_row("", "", Text("No seats occupied", style="dim italic"), "", "")

    return Panel(table, title="[bold]Seats[/bold]", border_style="green", padding=(0, 1))


def build_hero_panel(snap: dict) -> Panel:
    text = Text()
    if snap["hero_seat"] is None:
        text.append("Hero seat unresolved", style="dim italic")
    else:
        text.append(f"Seat {snap['hero_seat']}", style="bold green")
        text.append(f"  Stack {snap['hero_stack']}", style="bold")
        if snap["is_hero_turn"]:
            act = snap["current_act"]
            text.append("  YOUR TURN", style="bold yellow")
            text.append(
                f"  (bet {act['min_bet_coin']}-{act['max_bet_coin']}, {act['count_down']}s)",
                style="yellow",
            )

    stats = snap["stats"]
    text.append("\n")
    text.append(f"Hands {stats['hands_played']}  Won {stats['hands_won']}  ", style="dim")
    net = stats["net_profit"]
    text.append(f"Net {net:+}", style="bold green" if net >= 0 else "bold red")
    return Panel(text, title="[bold]Hero[/bold]", border_style="cyan", padding=(0, 1))


def build_action_panel(snap: dict) -> Panel:
    lines: list[Text] = []
    history = snap["action_history"][-MAX_HISTORY_LINES:]
    if not history:
        lines.append(Text("  No actions this hand", style="dim italic"))
    for entry in history:
        line = Text()
        line.append(f"  seat {entry['seat_num']}", style="bold")
        line.append(f"  action {entry['action']}")
        if entry["coin"] is not None:
            line.append(f"  stack {entry['coin']}", style="dim")
        lines.append(line)
    return Panel(Group(*lines), title="[bold]Actions[/bold]", border_style="yellow", padding=(0, 1))


def render(snap: dict, inactive_state: int = INACTIVE_SEAT_STATE) -> Group:
    """Build the full display."""
    return Group(
        build_header(snap),
        build_hero_panel(snap),
        build_seats_panel(snap, inactive_state=inactive_state),
        build_action_panel(snap),
    )
