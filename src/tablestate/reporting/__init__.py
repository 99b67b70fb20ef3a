"""Table state reporting module.

Usage:
    from tablestate.reporting import EventLog, render

    table = EventLog.from_file("path/to/events.jsonl").replay()
    console.print(render(table.get_state_snapshot()))
"""

from .reader import EventLog
from .render import render

__all__ = [
    "EventLog",
    "render",
]
