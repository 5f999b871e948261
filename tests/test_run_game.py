from pathlib import Path

from selfplay.run_game import main

BOT = "RUST_BACKTRACE=1 ./target/release/my_bot"
DEFAULT_MATCH = [
    "./halite", "--replay-directory", "replays/", "-vvv", "--width", "32", "--height", "32", BOT, BOT,
]


def test_default_run_builds_then_plays_one_selfplay_match(recorder):
    rec = recorder()
    assert main([]) == 0
    assert [c["cmd"] for c in rec.calls] == [["cargo", "build", "--release"], DEFAULT_MATCH]


def test_both_bots_reference_the_same_binary(recorder):
    rec = recorder()
    main([])
    (halite,) = rec.of("./halite")
    assert halite[-1] == halite[-2] == BOT


def test_failed_build_never_starts_the_engine(recorder):
    rec = recorder({"cargo": 101})
    assert main([]) == 101
    assert rec.tools() == ["cargo"]


def test_missing_cargo_exits_like_a_shell(recorder, capsys):
    rec = recorder({"cargo": FileNotFoundError("cargo")})
    assert main([]) == 127
    assert rec.tools() == ["cargo"]
    assert "cargo: command not found" in capsys.readouterr().err


def test_exit_status_is_that_of_the_engine(recorder):
    recorder({"./halite": 3})
    assert main([]) == 3


def test_missing_engine_exits_127(recorder):
    recorder({"./halite": FileNotFoundError("halite")})
    assert main([]) == 127


def test_commands_run_from_the_project_root(recorder, tmp_path):
    rec = recorder()
    main(["--project-root", str(tmp_path)])
    assert {c["cwd"] for c in rec.calls} == {str(tmp_path)}


def test_rerunning_plays_again(recorder):
    rec = recorder()
    main([])
    main([])
    assert rec.of("./halite") == [DEFAULT_MATCH, DEFAULT_MATCH]


def test_skip_build(recorder):
    rec = recorder()
    assert main(["--skip-build"]) == 0
    assert rec.tools() == ["./halite"]


def test_dry_run_executes_nothing(recorder, capsys):
    rec = recorder()
    assert main(["--dry-run", "--seeds", "1,2"]) == 0
    assert rec.calls == []
    out = capsys.readouterr().out
    assert "Build: cargo build --release" in out
    assert "--seed 1" in out and "--seed 2" in out


def test_series_stops_at_first_failing_game(recorder):
    rec = recorder({"./halite": [0, 5, 0]})
    assert main(["--seeds", "10..12"]) == 5
    seeds = [cmd[cmd.index("--seed") + 1] for cmd in rec.of("./halite")]
    assert seeds == ["10", "11"]


def test_series_builds_once(recorder):
    rec = recorder()
    assert main(["--games", "3"]) == 0
    assert rec.tools() == ["cargo", "./halite", "./halite", "./halite"]


def test_explicit_bots_and_env(recorder):
    rec = recorder()
    main(["--bot", "./target/release/my_bot", "--bot", "./bots/old", "--env", "RUST_LOG=debug"])
    (halite,) = rec.of("./halite")
    assert halite[-2:] == ["RUST_LOG=debug ./target/release/my_bot", "RUST_LOG=debug ./bots/old"]


def test_debug_build_targets_debug_binary(recorder):
    rec = recorder()
    main(["--debug", "--bot-name", "other"])
    assert rec.of("cargo") == [["cargo", "build"]]
    assert rec.of("./halite")[0][-1] == "RUST_BACKTRACE=1 ./target/debug/other"


def test_invalid_seed_list_is_a_usage_error(recorder, capsys):
    rec = recorder()
    assert main(["--seeds", "a..b"]) == 2
    assert rec.calls == []
    assert "Invalid seed list" in capsys.readouterr().err


def test_check_binaries_fails_before_engine(recorder, tmp_path):
    rec = recorder()
    assert main(["--project-root", str(tmp_path), "--check-binaries"]) == 2
    assert rec.tools() == ["cargo"]


def test_check_binaries_passes_when_present(recorder, tmp_path):
    binary = tmp_path / "target" / "release" / "my_bot"
    binary.parent.mkdir(parents=True)
    binary.write_text("")
    rec = recorder()
    assert main(["--project-root", str(tmp_path), "--check-binaries"]) == 0
    assert rec.tools() == ["cargo", "./halite"]


def test_engine_killed_by_signal_exits_like_a_shell(recorder):
    recorder({"./halite": -9})
    assert main([]) == 137


def test_build_killed_by_signal_never_starts_the_engine(recorder):
    rec = recorder({"cargo": -11})
    assert main([]) == 139
    assert rec.tools() == ["cargo"]


def test_unusable_env_keeps_default_backtrace(recorder, capsys):
    rec = recorder()
    main(["--env", "RUST_BACKTRACE"])
    (halite,) = rec.of("./halite")
    assert halite[-2:] == [BOT, BOT]
    assert "default environment" in capsys.readouterr().err
