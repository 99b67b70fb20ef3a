"""CLI entry point: python -m tablestate <events.jsonl>"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console

from tablestate.config import TrackerConfig, load_config
from tablestate.reporting import EventLog, render


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="tablestate",
        description="Replay a captured table event log and print the final table state",
    )
    parser.add_argument(
        "events",
        type=Path,
        help="Path to a JSONL file with one event envelope per line",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=os.environ.get("TABLESTATE_CONFIG"),
        help="Tracker YAML config (default: $TABLESTATE_CONFIG)",
    )
    parser.add_argument(
        "--proto",
        action="store_true",
        default=False,
        help="Lines are {ns, topic, data} envelopes instead of {type, data}",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=False,
        help="Render the snapshot as tables instead of JSON",
    )
    args = parser.parse_args(argv)

    if not args.events.exists():
        print(f"Error: event log not found: {args.events}", file=sys.stderr)
        return 1

    config = TrackerConfig()
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        config = load_config(config_path)

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    log = EventLog.from_file(args.events)
    table = log.replay(config=config, proto=args.proto)

    if args.pretty:
        Console().print(render(table.get_state_snapshot(), config.inactive_seat_state))
    else:
        print(table.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
