"""Command-line driver: feed a key script (or random keys) through a match."""

import argparse
import json
import sys

from infra.logger import configure_logging, get_logger
from infra.settings import get_settings
from inputs import RandomInputSource, ScriptedInputSource
from tactics import create_arena_scenario

from game_runner import GameRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a grid tactics match from scripted input.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--keys",
        default="",
        help="Comma/space separated keys, e.g. 'down,down,right,space' (default: none)",
    )
    source.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Press N random keys instead of a script",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument("--max-events", type=int, default=None, help="Cap on processed events")
    parser.add_argument("--history", action="store_true", help="Print every frame, not just the last")
    parser.add_argument("--log-level", default=None, help="Override TACTICS_LOG_LEVEL")
    parser.add_argument(
        "--json-logs",
        dest="json_logs",
        action="store_true",
        default=None,
        help="Emit JSON log lines (default: TACTICS_LOG_JSON)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    # Configure logging once at startup (console + optional file).
    configure_logging(
        level=args.log_level or settings.log_level,
        json=settings.log_json if args.json_logs is None else args.json_logs,
        log_file=settings.log_file,
    )
    log = get_logger(__name__)

    if args.random is not None:
        source = RandomInputSource(seed=args.seed, limit=args.random)
    else:
        source = ScriptedInputSource.from_keys(args.keys)

    runner = GameRunner(create_arena_scenario(), source=source)
    log.info("Running %s with %s", runner.scenario, source)

    max_events = args.max_events or settings.max_events
    output = runner.run(max_events=max_events, include_history=args.history)
    if args.history:
        payload = [runner.get_initial_frame().to_dict()] if not output else [f.to_dict() for f in output]
    else:
        payload = output.to_dict()

    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    log.info("Processed %s events, turn %s", runner.events_handled, runner.turn)
    return 0


if __name__ == "__main__":
    sys.exit(main())
