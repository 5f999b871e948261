#!/usr/bin/env python3
"""
Build the bot and play it against itself under the halite engine.

With no arguments this is exactly:

    cargo build --release
    ./halite --replay-directory replays/ -vvv --width 32 --height 32 \
        "RUST_BACKTRACE=1 ./target/release/my_bot" "RUST_BACKTRACE=1 ./target/release/my_bot"

and stops at the first command that fails, exiting with its status.
"""
from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, Sequence
import sys

# Support running both as a module (`python -m selfplay.run_game`) and as a script
if __package__ is None or __package__ == "":
    _REPO_ROOT = Path(__file__).resolve().parents[1]
    if str(_REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(_REPO_ROOT))
    from selfplay.runner.constants import (
        DEFAULT_BOT_NAME, DEFAULT_HEIGHT, DEFAULT_REPLAY_DIR, DEFAULT_VERBOSITY, DEFAULT_WIDTH, HALITE_BIN,
    )
    from selfplay.runner.exec import run_from_args
else:
    from .runner.constants import (
        DEFAULT_BOT_NAME, DEFAULT_HEIGHT, DEFAULT_REPLAY_DIR, DEFAULT_VERBOSITY, DEFAULT_WIDTH, HALITE_BIN,
    )
    from .runner.exec import run_from_args


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Build the bot and run a halite self-play match.")
    p.add_argument("--project-root", type=Path, default=Path("."),
                   help="Cargo project directory; both commands run from here")
    p.add_argument("--halite", default=HALITE_BIN, help="Engine binary (relative to the project root)")
    # Build
    p.add_argument("--skip-build", action="store_true", help="Do not run cargo; play with existing binaries")
    p.add_argument("--debug", action="store_true", help="Debug build (target/debug) instead of --release")
    p.add_argument("--bin", help="cargo --bin target to build")
    p.add_argument("--cargo-arg", action="append", default=[],
                   help="Extra argument for cargo build (repeatable). Example: --cargo-arg=--locked")
    # Bots
    p.add_argument("--bot-name", default=DEFAULT_BOT_NAME, help="Binary name under target/<profile>/")
    p.add_argument("--players", type=int, default=2, choices=[2, 4],
                   help="Number of copies of the bot when --bot is not given")
    p.add_argument("--bot", action="append",
                   help="Bot binary path (repeatable); replaces the self-play copies")
    p.add_argument("--env", action="append",
                   help="Environment for every bot, KEY=VALUE (repeatable); replaces RUST_BACKTRACE=1")
    p.add_argument("--check-binaries", action="store_true",
                   help="Fail before starting the engine if a bot binary is missing")
    # Match
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    p.add_argument("--verbosity", type=int, default=DEFAULT_VERBOSITY, help="Number of -v flags")
    p.add_argument("--replay-directory", default=DEFAULT_REPLAY_DIR)
    p.add_argument("--seed", type=int, help="Map seed; default lets the engine choose")
    p.add_argument("--turn-limit", type=int)
    p.add_argument("--no-logs", action="store_true")
    p.add_argument("--no-timeout", action="store_true")
    p.add_argument("--no-replay", action="store_true")
    p.add_argument("--no-compression", action="store_true")
    p.add_argument("--results-as-json", action="store_true",
                   help="Ask the engine for JSON results; recorded and summarized with --out")
    p.add_argument("--match-param", action="append", default=[],
                   help="Override a MatchParams field, key=value (repeatable). Example: --match-param turn_limit=100")
    # Series
    p.add_argument("--games", type=int, default=1, help="Number of games to play after one build")
    p.add_argument("--seeds", help="One game per seed: CSV (1,2,3) or range (1..10[:step])")
    p.add_argument("--name", default="selfplay", help="Series name used for the --out subdirectory")
    # Recording
    p.add_argument("--out", type=Path, help="Record commands and results under this directory")
    p.add_argument("--auto-plot", action="store_true", help="Plot scores after a recorded series")
    p.add_argument("--dry-run", action="store_true", help="Print the planned commands and exit")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run_from_args(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
