from __future__ import annotations
import json
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .constants import COMMAND_NOT_FOUND
from .types import BotSpec, MatchParams
from .utils import shell_status, write_cmd


def bot_command(bot: BotSpec) -> str:
    """Render a bot as the single command string the engine runs, e.g.
    'RUST_BACKTRACE=1 ./target/release/my_bot'."""
    parts = [f"{k}={shlex.quote(str(v))}" for k, v in bot.env.items()]
    parts.append(bot.binary)
    return " ".join(parts)


def halite_command(halite_bin: str, params: MatchParams, bots: Sequence[BotSpec]) -> List[str]:
    if params.verbosity < 0:
        raise ValueError(f"verbosity must be >= 0, got {params.verbosity}")
    if params.width <= 0 or params.height <= 0:
        raise ValueError(f"Invalid board size {params.width}x{params.height}")
    cmd: List[str] = [halite_bin, "--replay-directory", params.replay_directory]
    if params.verbosity:
        cmd.append("-" + "v" * params.verbosity)
    cmd += ["--width", str(params.width), "--height", str(params.height)]
    if params.seed is not None:
        cmd += ["--seed", str(int(params.seed))]
    if params.turn_limit is not None:
        cmd += ["--turn-limit", str(int(params.turn_limit))]
    if params.no_logs:
        cmd.append("--no-logs")
    if params.no_timeout:
        cmd.append("--no-timeout")
    if params.no_replay:
        cmd.append("--no-replay")
    if params.no_compression:
        cmd.append("--no-compression")
    if params.results_as_json:
        cmd.append("--results-as-json")
    cmd += [bot_command(b) for b in bots]
    return cmd


def parse_results(text: str) -> Optional[Dict[str, Any]]:
    """Parse the engine's --results-as-json output. Returns None if no JSON object is found."""
    s = text.strip()
    if not s:
        return None
    # Verbose runs may print before the JSON document; it starts on its own line
    start = s.find("{") if s.startswith("{") else s.find("\n{")
    if start < 0:
        return None
    try:
        data = json.loads(s[start:])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def run_match(project_root: Path, halite_bin: str, params: MatchParams, bots: Sequence[BotSpec],
              record_dir: Optional[Path] = None, tag: str = "game") -> Tuple[int, Optional[Dict[str, Any]]]:
    """Run one match; returns (exit status, parsed results or None).

    stdout is only captured when results are requested and a record_dir is
    given; the JSON document then lands in <record_dir>/<tag>.json.
    """
    cmd = halite_command(halite_bin, params, bots)
    capture = params.results_as_json and record_dir is not None
    if record_dir is not None:
        write_cmd(record_dir / f"{tag}.cmd", cmd)
    try:
        if not capture:
            return shell_status(subprocess.call(cmd, cwd=str(project_root))), None
        out_file = record_dir / f"{tag}.json"
        with out_file.open("w") as out:
            rc = shell_status(subprocess.call(cmd, stdout=out, cwd=str(project_root)))
    except FileNotFoundError:
        print(f"{halite_bin}: command not found", file=sys.stderr)
        return COMMAND_NOT_FOUND, None
    return rc, parse_results(out_file.read_text())
