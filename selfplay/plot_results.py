#!/usr/bin/env python3
"""
Plot per-player scores of a recorded self-play series.

Features
- Reads <run-dir>/results.json written by run_game.py --out ... --results-as-json
- Without --run-dir, picks the most recent series under --results-dir
- Draws grouped bars (one group per game, one bar per player) and marks the winner

Examples
- python3 -m selfplay.plot_results --results-dir results
- python3 -m selfplay.plot_results --run-dir results/selfplay_2024-01-01T00-00-00Z
"""
from __future__ import annotations
import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional


# Tableau 10 Palette, same order matplotlib uses by default.
COLOR_LIST = [
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
]


def find_latest_run(results_dir: Path) -> Optional[Path]:
    runs = [p.parent for p in results_dir.glob("*/results.json")]
    if not runs:
        return None
    return max(runs, key=lambda p: p.stat().st_mtime)


def load_scores(run_dir: Path) -> Dict[str, Dict[int, int]]:
    """Return {player_id: {game_index: score}} from a series' results.json."""
    data = json.loads((run_dir / "results.json").read_text())
    scores: Dict[str, Dict[int, int]] = {}
    for game in data.get("games_detail", []):
        for pid, st in (game.get("stats") or {}).items():
            if "score" in st:
                scores.setdefault(str(pid), {})[int(game["index"])] = int(st["score"])
    return scores


def plot_scores(run_dir: Path, scores: Dict[str, Dict[int, int]], output: Optional[Path] = None,
                hide_title: bool = False) -> Optional[Path]:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    players = sorted(scores.keys(), key=lambda p: int(p) if p.isdigit() else p)
    games: List[int] = sorted({g for per in scores.values() for g in per})
    if not players or not games:
        return None

    n_players = len(players)
    width = 0.8 / n_players
    fig, ax = plt.subplots(figsize=(max(6, len(games) * 1.2), 4))
    centers = list(range(len(games)))
    for idx, pid in enumerate(players):
        offs = (idx - (n_players - 1) / 2.0) * width
        xs = [c + offs for c in centers]
        ys = [scores[pid].get(g, 0) for g in games]
        ax.bar(xs, ys, width=width, label=f"player {pid}", color=COLOR_LIST[idx % len(COLOR_LIST)])

    # Star above the best score of each game
    for c, g in zip(centers, games):
        best = max(players, key=lambda p: scores[p].get(g, -1))
        b_idx = players.index(best)
        offs = (b_idx - (n_players - 1) / 2.0) * width
        ax.annotate("*", (c + offs, scores[best].get(g, 0)), ha="center", va="bottom", fontsize=12)

    ax.set_xticks(centers)
    ax.set_xticklabels([f"game {g}" for g in games])
    ax.set_ylabel("Halite collected")
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    ax.legend(loc="best")
    if not hide_title:
        fig.suptitle(f"Self-play scores: {run_dir.name}", fontsize=14)
    fig.tight_layout()

    out_file = output or (run_dir / "scores.svg")
    fig.savefig(out_file, format=out_file.suffix.lstrip(".") or "svg")
    plt.close(fig)
    return out_file


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    ap.add_argument("--run-dir", type=Path, help="Series directory (results/<name>_<ts>); default is the latest")
    ap.add_argument("--output", type=Path, help="Output file; default <run-dir>/scores.svg")
    ap.add_argument("--no-title", action="store_true", help="Hide the title on the plot")
    args = ap.parse_args(argv)

    run_dir = args.run_dir or find_latest_run(args.results_dir)
    if run_dir is None or not (run_dir / "results.json").exists():
        print(f"No results found under {args.run_dir or args.results_dir}")
        return 1

    scores = load_scores(run_dir)
    out = plot_scores(run_dir, scores, output=args.output, hide_title=args.no_title)
    if out is None:
        print(f"No scores recorded in {run_dir / 'results.json'}")
        return 1
    print("Wrote:")
    print("   ", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
