"""Tracker configuration loader."""

import yaml
from dataclasses import dataclass, field
from pathlib import Path

from tablestate.models import DEFAULT_COUNTDOWN, INACTIVE_SEAT_STATE


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class TrackerConfig:
    inactive_seat_state: int = INACTIVE_SEAT_STATE
    default_countdown: int = DEFAULT_COUNTDOWN
    hero_user_id: str | None = None  # pre-seeded hero identity
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Path) -> TrackerConfig:
    """Load tracker config from YAML file.

    Every key is optional; an empty file yields the defaults.
    """
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    t = raw.get("tracker") or {}
    log = raw.get("logging") or {}

    return TrackerConfig(
        inactive_seat_state=int(t.get("inactive_seat_state", INACTIVE_SEAT_STATE)),
        default_countdown=int(t.get("default_countdown", DEFAULT_COUNTDOWN)),
        hero_user_id=t.get("hero_user_id"),
        logging=LoggingConfig(level=str(log.get("level", "WARNING")).upper()),
    )
