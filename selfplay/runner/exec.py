from __future__ import annotations
import dataclasses as dc
import json
import sys
import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .build import cargo_build_command, ensure_bot_binary, run_build
from .config import apply_matchparams_overrides, parse_key_values
from .match import halite_command, run_match
from .types import BotSpec, BuildParams, GameResult, MatchParams, Plan, default_bot_binary
from .utils import parse_seed_list, quote_cmd
from .plotting import run_plot


def ts_utc_compact() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")


def summarize(results: List[GameResult]) -> Dict[str, Any]:
    """Wins and mean score per player over the games that produced stats."""
    wins: Dict[str, int] = {}
    scores: Dict[str, List[int]] = {}
    for r in results:
        for pid, st in r.stats.items():
            wins.setdefault(pid, 0)
            if "score" in st:
                scores.setdefault(pid, []).append(int(st["score"]))
        w = r.winner
        if w is not None:
            wins[w] = wins.get(w, 0) + 1
    return {
        "games": len(results),
        "wins": wins,
        "mean_score": {pid: sum(v) / len(v) for pid, v in scores.items() if v},
        "games_detail": [dc.asdict(r) for r in results],
    }


class Runner:
    def __init__(self,
                 project_root: Path,
                 halite_bin: str,
                 out_root: Optional[Path] = None,
                 check_binaries: bool = False):
        self.project_root = project_root
        self.halite_bin = halite_bin
        self.out_root = out_root
        # Only meaningful after a build; the engine reports missing bots itself otherwise
        self.check_binaries = check_binaries
        self.results: List[GameResult] = []
        self.run_dir: Optional[Path] = None

    def _prepare_run_dir(self, plan: Plan, cli_args: Optional[argparse.Namespace]) -> Optional[Path]:
        if self.out_root is None:
            return None
        run_dir = self.out_root / f"{plan.name}_{ts_utc_compact()}"
        run_dir.mkdir(parents=True, exist_ok=True)
        if cli_args:
            (run_dir / "cli_args.json").write_text(json.dumps(vars(cli_args), indent=2, default=str))
        (run_dir / "plan.json").write_text(json.dumps(dc.asdict(plan), indent=2))
        return run_dir

    def run(self, plan: Plan, cli_args: Optional[argparse.Namespace] = None) -> int:
        """Build once, then play every game of the plan.

        Stops at the first non-zero exit status and returns it; otherwise
        returns the status of the last engine invocation.
        """
        self.results = []
        self.run_dir = self._prepare_run_dir(plan, cli_args)

        if not plan.skip_build:
            print(f"Build: {quote_cmd(cargo_build_command(plan.build))}")
            rc = run_build(self.project_root, plan.build, record_dir=self.run_dir)
            if rc != 0:
                print(f"Build exited with {rc}; not starting any game", file=sys.stderr)
                return rc
        if self.check_binaries:
            for bot in plan.bots:
                ensure_bot_binary(self.project_root, bot)

        seeds = plan.game_seeds()
        rc = 0
        for idx, seed in enumerate(seeds, start=1):
            params = dc.replace(plan.match, seed=seed)
            tag = f"game_{idx}"
            if len(seeds) > 1:
                print(f"Game {idx}/{len(seeds)}: seed={'engine' if seed is None else seed}")
            rc, data = run_match(self.project_root, self.halite_bin, params, plan.bots,
                                 record_dir=self.run_dir, tag=tag)
            result = GameResult(index=idx, seed=seed, returncode=rc)
            if data:
                result.stats = {str(k): dict(v) for k, v in (data.get("stats") or {}).items()}
                result.replay = data.get("replay")
                if result.seed is None and data.get("map_seed") is not None:
                    result.seed = int(data["map_seed"])
            self.results.append(result)
            if rc != 0:
                print(f"halite exited with {rc} in {tag}", file=sys.stderr)
                break

        if self.run_dir is not None and plan.match.results_as_json:
            summary = summarize(self.results)
            (self.run_dir / "results.json").write_text(json.dumps(summary, indent=2))
            print("Wins: " + ", ".join(f"player {pid}={n}" for pid, n in sorted(summary["wins"].items())))
        if self.run_dir is not None:
            print(f"Series '{plan.name}' finished: {self.run_dir}")
        return rc


def plan_from_args(args) -> Plan:
    build = BuildParams(
        release=not getattr(args, "debug", False),
        bin_name=getattr(args, "bin", None),
        extra_args=list(getattr(args, "cargo_arg", []) or []),
    )

    match = MatchParams(
        width=args.width,
        height=args.height,
        verbosity=args.verbosity,
        replay_directory=args.replay_directory,
        seed=getattr(args, "seed", None),
        turn_limit=getattr(args, "turn_limit", None),
        no_logs=getattr(args, "no_logs", False),
        no_timeout=getattr(args, "no_timeout", False),
        no_replay=getattr(args, "no_replay", False),
        no_compression=getattr(args, "no_compression", False),
        results_as_json=getattr(args, "results_as_json", False),
    )
    apply_matchparams_overrides(match, getattr(args, "match_param", None))

    env = parse_key_values(getattr(args, "env", None), "--env") or None
    if env is None and getattr(args, "env", None):
        print("No usable --env items; bots keep the default environment", file=sys.stderr)
    bot_binaries = list(getattr(args, "bot", None) or [])
    if not bot_binaries:
        default = default_bot_binary(build, args.bot_name)
        bot_binaries = [default] * int(args.players)
    bots = [BotSpec(binary=b, env=dict(env)) if env is not None else BotSpec(binary=b) for b in bot_binaries]

    seeds: List[int] = parse_seed_list(args.seeds) if getattr(args, "seeds", None) else []
    if seeds and match.seed is not None:
        raise ValueError("--seed and --seeds are mutually exclusive")
    games = int(getattr(args, "games", 1))
    if games < 1:
        raise ValueError(f"--games must be >= 1, got {games}")

    return Plan(
        name=getattr(args, "name", "selfplay"),
        build=build,
        skip_build=getattr(args, "skip_build", False),
        match=match,
        bots=bots,
        games=games,
        seeds=seeds,
    )


def run_from_args(args) -> int:
    plan = plan_from_args(args)

    if getattr(args, "dry_run", False):
        print("Planned run:")
        print(json.dumps(dc.asdict(plan), indent=2))
        if not plan.skip_build:
            print("Build:", quote_cmd(cargo_build_command(plan.build)))
        for idx, seed in enumerate(plan.game_seeds(), start=1):
            cmd = halite_command(args.halite, dc.replace(plan.match, seed=seed), plan.bots)
            print(f"Game {idx}:", quote_cmd(cmd))
        return 0

    out_root = getattr(args, "out", None)
    if out_root is not None:
        out_root.mkdir(parents=True, exist_ok=True)

    runner = Runner(
        project_root=args.project_root,
        halite_bin=args.halite,
        out_root=out_root,
        check_binaries=getattr(args, "check_binaries", False),
    )
    rc = runner.run(plan, cli_args=args)

    if rc == 0 and getattr(args, "auto_plot", False):
        if runner.run_dir is None or not plan.match.results_as_json:
            print("--auto-plot needs --out and --results-as-json; skipping plot", file=sys.stderr)
        else:
            prc = run_plot(runner.run_dir)
            if prc != 0:
                print(f"Plot exited with {prc}; no chart for {runner.run_dir}", file=sys.stderr)
    return rc
