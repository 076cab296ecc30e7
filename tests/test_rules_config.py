import pytest

from pyauction.config import get_rules, iter_rules, resolve_rules


def test_get_rules_is_case_insensitive():
    rules = get_rules("standard")
    assert rules.name == "STANDARD"
    assert rules.max_round == 3
    assert rules.min_per_player == 1_000_000


def test_final_round_defaults_to_last_round():
    assert get_rules("STANDARD").final_round == 3
    assert get_rules("SINGLE_ROUND").final_round == 1


def test_iter_rules_lists_presets():
    names = {rules.name for rules in iter_rules()}
    assert {"STANDARD", "SINGLE_ROUND"} <= names


def test_get_rules_missing_raises():
    with pytest.raises(KeyError):
        get_rules("DUTCH")


def test_resolve_rules_applies_env_overrides():
    rules = resolve_rules("STANDARD", env={"PYAUCTION_MAX_ROUND": "4", "PYAUCTION_MIN_PER_PLAYER": "500_000"})
    assert rules.max_round == 4
    assert rules.final_round == 4
    assert rules.min_per_player == 500_000


def test_resolve_rules_ignores_invalid_env(caplog):
    with caplog.at_level("WARNING"):
        rules = resolve_rules("STANDARD", env={"PYAUCTION_MAX_ROUND": "many"})
    assert rules == get_rules("STANDARD")
    assert "PYAUCTION_MAX_ROUND" in caplog.text


def test_resolve_rules_without_overrides_returns_preset():
    assert resolve_rules("STANDARD", env={}) is get_rules("STANDARD")
