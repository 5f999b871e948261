from __future__ import annotations
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .constants import CARGO_BIN, COMMAND_NOT_FOUND
from .types import BotSpec, BuildParams
from .utils import has_flag_or_kv, shell_status, write_cmd


def cargo_build_command(params: BuildParams) -> List[str]:
    cmd: List[str] = [CARGO_BIN, "build"]
    extra = list(params.extra_args or [])
    if params.release and not has_flag_or_kv(extra, "--release"):
        cmd.append("--release")
    if params.bin_name and not has_flag_or_kv(extra, "--bin"):
        cmd += ["--bin", params.bin_name]
    return cmd + extra


def run_build(project_root: Path, params: BuildParams, record_dir: Optional[Path] = None) -> int:
    """Compile the bot; returns cargo's exit status.

    Output is not captured. Statuses follow the shell: a missing cargo
    executable yields 127, death by signal N yields 128 + N.
    """
    cmd = cargo_build_command(params)
    if record_dir is not None:
        write_cmd(record_dir / "build.cmd", cmd)
    try:
        return shell_status(subprocess.call(cmd, cwd=str(project_root)))
    except FileNotFoundError:
        print(f"{CARGO_BIN}: command not found", file=sys.stderr)
        return COMMAND_NOT_FOUND


def ensure_bot_binary(project_root: Path, bot: BotSpec) -> None:
    path = Path(bot.binary)
    if not path.is_absolute():
        path = project_root / path
    if not path.exists():
        raise FileNotFoundError(f"Missing bot binary: {path}. Check --project-root and --bot.")
