"""
Command-line demo for the statekit engines.

Runs the player controller or the game flow engine, either from a scripted
list of commands or interactively from the console.

    python -m statekit.demo --machine game --inputs start pause resume die
    python -m statekit.demo --machine player --interactive
"""

import argparse
import asyncio
import logging

from statekit.adapters import CLIAdapter, DummyAdapter
from statekit.engine import GameFlowEngine, PlayerControllerEngine

ENGINES = {
    "player": PlayerControllerEngine,
    "game": GameFlowEngine,
}

# Extra ticks after the script so timed states (jumps) can finish
SETTLE_TICKS = 5


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Drive a statekit state machine.")
    parser.add_argument(
        "-m",
        "--machine",
        choices=sorted(ENGINES),
        default="player",
        help="which engine to run (default: player)",
    )
    parser.add_argument(
        "-i",
        "--inputs",
        nargs="*",
        default=[],
        help="commands to feed, one per tick (use '-' for an empty tick)",
    )
    parser.add_argument(
        "-t",
        "--ticks",
        type=int,
        default=None,
        help="maximum number of ticks (default: script length plus a few)",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="read commands from the console instead of --inputs",
    )
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=None,
        help="seconds between ticks (default: 0 scripted, 0.05 interactive)",
    )
    parser.add_argument(
        "--transcript",
        default=None,
        help="append state changes to this file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print every rendered state"
    )
    return parser.parse_args(argv)


def build_engine(args):
    """Create the adapter and engine described by the parsed arguments."""
    if args.interactive:
        adapter = CLIAdapter()
        tick_interval = 0.05 if args.tick_interval is None else args.tick_interval
        max_ticks = args.ticks
    else:
        script = [None if cmd == "-" else cmd for cmd in args.inputs]
        adapter = DummyAdapter(scripted_inputs=script, verbose=args.verbose)
        tick_interval = args.tick_interval or 0.0
        max_ticks = args.ticks if args.ticks is not None else len(script) + SETTLE_TICKS

    config = {
        "tick_interval": tick_interval,
        "max_ticks": max_ticks,
        "transcript_path": args.transcript,
    }
    return ENGINES[args.machine](adapter, config)


async def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    engine = build_engine(args)
    await engine.initialize()
    try:
        await engine.run()
    finally:
        await engine.shutdown()

    snapshot = engine.snapshot()
    print(f"Final state: {snapshot['state']} after {engine.tick_count} ticks")
    return snapshot


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
