from __future__ import annotations
import dataclasses as dc
from typing import Any, Dict, List, Optional, Sequence

from .constants import (
    BOT_ENV,
    DEFAULT_BOT_NAME,
    DEFAULT_HEIGHT,
    DEFAULT_REPLAY_DIR,
    DEFAULT_VERBOSITY,
    DEFAULT_WIDTH,
    PROFILE_DIR,
)


@dc.dataclass
class MatchParams:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    verbosity: int = DEFAULT_VERBOSITY  # number of -v flags
    replay_directory: str = DEFAULT_REPLAY_DIR
    # None lets the engine pick its own seed
    seed: Optional[int] = None
    turn_limit: Optional[int] = None
    no_logs: bool = False
    no_timeout: bool = False
    no_replay: bool = False
    no_compression: bool = False
    results_as_json: bool = False


@dc.dataclass
class BuildParams:
    release: bool = True
    # cargo --bin target; None builds the package default
    bin_name: Optional[str] = None
    extra_args: List[str] = dc.field(default_factory=list)

    @property
    def profile(self) -> str:
        return "release" if self.release else "debug"


def default_bot_binary(build: Optional[BuildParams] = None, bot_name: str = DEFAULT_BOT_NAME) -> str:
    profile = (build or BuildParams()).profile
    return "./" + (PROFILE_DIR[profile] / bot_name).as_posix()


@dc.dataclass
class BotSpec:
    binary: str = dc.field(default_factory=default_bot_binary)
    # Prefixed to the command string handed to the engine
    env: Dict[str, str] = dc.field(default_factory=lambda: dict(BOT_ENV))


@dc.dataclass
class GameResult:
    index: int
    seed: Optional[int]
    returncode: int
    replay: Optional[str] = None
    # player id -> {"rank": int, "score": int}
    stats: Dict[str, Dict[str, Any]] = dc.field(default_factory=dict)

    @property
    def winner(self) -> Optional[str]:
        for pid, st in self.stats.items():
            if st.get("rank") == 1:
                return pid
        return None


@dc.dataclass
class Plan:
    """One build followed by one or more games.

    With an empty `seeds` the plan plays `games` matches and leaves seeding
    to the engine; otherwise it plays one match per seed.
    """
    name: str = "selfplay"
    build: BuildParams = dc.field(default_factory=BuildParams)
    skip_build: bool = False
    match: MatchParams = dc.field(default_factory=MatchParams)
    bots: List[BotSpec] = dc.field(default_factory=lambda: [BotSpec(), BotSpec()])
    games: int = 1
    seeds: Sequence[int] = ()

    def game_seeds(self) -> List[Optional[int]]:
        if self.seeds:
            return [int(s) for s in self.seeds]
        return [self.match.seed] * max(int(self.games), 0)
