from __future__ import annotations
from typing import Iterable, List, Sequence
import re
import shlex
from pathlib import Path

from .constants import SIGNAL_EXIT_BASE


def has_flag_or_kv(tokens: Iterable[str], flag: str) -> bool:
    """True if `flag` is passed bare or as `flag=value`."""
    return any(tok == flag or tok.startswith(flag + "=") for tok in tokens or [])


def shell_status(rc: int) -> int:
    """Map a subprocess return code to the status a shell would report.

    subprocess gives -N for a child killed by signal N; sh gives 128 + N.
    """
    return SIGNAL_EXIT_BASE - rc if rc < 0 else rc


def quote_cmd(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(c) for c in cmd)


def write_cmd(path: Path, cmd: Sequence[str]) -> None:
    path.write_text(quote_cmd(cmd))


# --- Seed list parsing ---

_SEED_RANGE = re.compile(r"^(-?\d+)\.\.(-?\d+)(?::(-?\d+))?$")


def parse_seed_list(text: str) -> List[int]:
    """Parse '7', '1,2,3' or 'start..end[:step]' (inclusive) into a list of seeds."""
    s = "".join(text.split())
    if not s:
        return []
    m = _SEED_RANGE.match(s)
    if m:
        start, end = int(m.group(1)), int(m.group(2))
        step = int(m.group(3)) if m.group(3) else (1 if end >= start else -1)
        if step == 0:
            raise ValueError("Range step cannot be 0")
        return list(range(start, end + (1 if step > 0 else -1), step))
    try:
        return [int(x) for x in s.split(",") if x]
    except ValueError:
        raise ValueError(f"Invalid seed list: {text}") from None
