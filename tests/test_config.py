import pytest

from selfplay.runner.config import apply_matchparams_overrides, parse_key_values
from selfplay.runner.types import MatchParams
from selfplay.runner.utils import has_flag_or_kv, parse_seed_list, shell_status


def test_overrides_are_coerced_to_field_types():
    p = apply_matchparams_overrides(MatchParams(), ["width=64", "no_logs=yes", "replay_directory=out/", "seed=42"])
    assert p.width == 64
    assert p.no_logs is True
    assert p.replay_directory == "out/"
    assert p.seed == 42


def test_optional_field_can_be_cleared():
    p = apply_matchparams_overrides(MatchParams(seed=3), ["seed=none"])
    assert p.seed is None


def test_unknown_and_malformed_overrides_are_skipped(capsys):
    p = apply_matchparams_overrides(MatchParams(), ["bogus=1", "width"])
    assert p == MatchParams()
    err = capsys.readouterr().err
    assert "bogus" in err
    assert "without '='" in err


def test_bad_override_value_raises():
    with pytest.raises(ValueError):
        apply_matchparams_overrides(MatchParams(), ["no_timeout=maybe"])


def test_parse_key_values_keeps_equals_in_value():
    assert parse_key_values(["A=b=c"], "--env") == {"A": "b=c"}


@pytest.mark.parametrize("text,expected", [
    ("7", [7]),
    ("1,2, 5", [1, 2, 5]),
    ("1..4", [1, 2, 3, 4]),
    ("10..0:-5", [10, 5, 0]),
    ("4..1", [4, 3, 2, 1]),
    ("", []),
])
def test_parse_seed_list(text, expected):
    assert parse_seed_list(text) == expected


@pytest.mark.parametrize("text", ["1..5:0", "x", "1,a"])
def test_parse_seed_list_rejects(text):
    with pytest.raises(ValueError):
        parse_seed_list(text)


def test_has_flag_or_kv():
    assert has_flag_or_kv(["--bin=x"], "--bin")
    assert has_flag_or_kv(["--release"], "--release")
    assert not has_flag_or_kv(["--binary"], "--bin")


@pytest.mark.parametrize("rc,expected", [(0, 0), (101, 101), (-9, 137), (-15, 143)])
def test_shell_status(rc, expected):
    assert shell_status(rc) == expected
