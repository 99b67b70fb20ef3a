"""Event log reader: loads captured JSONL event streams for replay.

Usage:
    log = EventLog.from_file("captures/session.jsonl")
    print(len(log.events))       # 1432
    print(log.skipped)           # lines that were not JSON objects
    table = log.replay()         # TableState with every event folded in
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from tablestate.config import TrackerConfig
from tablestate.state import TableState

logger = logging.getLogger(__name__)


@dataclass
class EventLog:
    """Envelopes read from one capture file, in file order."""

    file_path: Path
    events: list[dict] = field(default_factory=list)
    skipped: int = 0

    @classmethod
    def from_file(cls, path: str | Path) -> EventLog:
        path = Path(path)
        events: list[dict] = []
        skipped = 0

        with open(path, "rb") as f:
            for line_no, raw in enumerate(f, 1):
                if not raw.strip():
                    continue
                try:
                    record = json.loads(raw.decode("utf-8"))
                except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                    logger.debug("%s:%d: skipping undecodable line: %s", path, line_no, exc)
                    skipped += 1
                    continue
                if not isinstance(record, dict):
                    logger.debug("%s:%d: skipping non-object line", path, line_no)
                    skipped += 1
                    continue
                events.append(record)

        return cls(file_path=path, events=events, skipped=skipped)

    def replay(
        self,
        config: TrackerConfig | None = None,
        proto: bool = False,
        table: TableState | None = None,
    ) -> TableState:
        """Fold every envelope into ``table`` (a fresh one by default)."""
        if table is None:
            table = TableState(config=config)
        applied = table.apply_events(self.events, proto=proto)
        logger.info(
            "Replayed %s: %d/%d events applied", self.file_path.name, applied, len(self.events)
        )
        return table
