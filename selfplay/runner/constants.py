from pathlib import Path

CARGO_BIN = "cargo"

# Engine binary, relative to the project root
HALITE_BIN = "./halite"

DEFAULT_BOT_NAME = "my_bot"

# Cargo profile -> output directory under target/
PROFILE_DIR = {
    "release": Path("target") / "release",
    "debug": Path("target") / "debug",
}

DEFAULT_REPLAY_DIR = "replays/"
DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 32
DEFAULT_VERBOSITY = 3

# Set per bot subprocess, never in our own environment
BOT_ENV = {"RUST_BACKTRACE": "1"}

# Exit status a shell reports for a command it cannot find
COMMAND_NOT_FOUND = 127

# A shell reports death by signal N as 128 + N
SIGNAL_EXIT_BASE = 128
