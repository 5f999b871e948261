from __future__ import annotations
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional

# Run by path so the plot works without selfplay being importable from the project root
PLOT_SCRIPT = Path(__file__).resolve().parents[1] / "plot_results.py"


def run_plot(run_dir: Path, output: Optional[Path] = None, no_title: bool = False) -> int:
    cmd = [sys.executable, str(PLOT_SCRIPT), "--run-dir", str(run_dir)]
    if output is not None:
        cmd += ["--output", str(output)]
    if no_title:
        cmd += ["--no-title"]
    print(f"Auto-plot: {' '.join(shlex.quote(c) for c in cmd)}")
    return subprocess.call(cmd)
