import json
from pathlib import Path

import pytest

from pyauction.cli import EXIT_REJECTED, EXIT_UNKNOWN_ID, main


@pytest.fixture
def auction_files(tmp_path: Path, monkeypatch):
    teams_path = tmp_path / "teams.json"
    players_path = tmp_path / "players.csv"
    teams_path.write_text(
        json.dumps([
            {"teamId": "t1", "teamName": "Strikers", "maxBudget": "10M", "maxPlayers": 3, "captainName": "Asha"},
            {"teamId": "t2", "teamName": "Titans", "maxBudget": "10M", "maxPlayers": 3, "minPlayers": 2},
        ]),
        encoding="utf-8",
    )
    players_path.write_text(
        "playerId,playerName,basePrice,round3BasePrice,availabilityPercentage,availabilityComments\n"
        "p1,Arjun,1M,,100,\n"
        "p2,Bela,1.5M,,80,Misses May\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PYAUCTION_DB_PATH", str(tmp_path / "auction.sqlite"))
    monkeypatch.delenv("PYAUCTION_MAX_ROUND", raising=False)
    monkeypatch.delenv("PYAUCTION_MIN_PER_PLAYER", raising=False)
    return ["--teams", str(teams_path), "--players", str(players_path), "--seed", "3"]


def test_bid_persists_between_invocations(auction_files, capsys):
    assert main([*auction_files, "bid", "p2", "t1", "1.5M"]) == 0
    assert "Sold to Strikers for $1.50M" in capsys.readouterr().out

    assert main([*auction_files, "status"]) == 0
    out = capsys.readouterr().out
    assert "Round 1/3: 1 pending" in out
    assert "Strikers: 1/3 players, remaining purse $8.50M" in out
    assert "Titans: 0/3 players, remaining purse $10.00M (below minimum)" in out
    assert "- Bela $1.50M" in out


def test_rejected_bid_exit_code(auction_files, capsys):
    assert main([*auction_files, "bid", "p1", "t1", "8500000"]) == EXIT_REJECTED
    assert "Rejected (insufficient_reserve)" in capsys.readouterr().out


def test_unparseable_amount(auction_files, capsys):
    assert main([*auction_files, "bid", "p1", "t1", "plenty"]) == EXIT_REJECTED
    assert "not a currency value" in capsys.readouterr().out


def test_unknown_ids_exit_code(auction_files, capsys):
    assert main([*auction_files, "bid", "p1", "ghosts", "1M"]) == EXIT_UNKNOWN_ID
    assert "Unknown team: ghosts" in capsys.readouterr().out
    assert main([*auction_files, "skip", "ghost"]) == EXIT_UNKNOWN_ID
    assert "Unknown player: ghost" in capsys.readouterr().out


def test_next_skip_advance_flow(auction_files, capsys):
    assert main([*auction_files, "next"]) == 0
    out = capsys.readouterr().out
    assert "base price $" in out

    assert main([*auction_files, "advance"]) == EXIT_REJECTED
    assert "Rejected (round_incomplete)" in capsys.readouterr().out

    main([*auction_files, "skip", "p1"])
    main([*auction_files, "skip", "p2"])
    capsys.readouterr()
    assert main([*auction_files, "advance"]) == 0
    assert "Round 2 started." in capsys.readouterr().out


def test_next_reports_empty_pool(auction_files, capsys):
    main([*auction_files, "bid", "p1", "t1", "1M"])
    main([*auction_files, "bid", "p2", "t2", "1.5M"])
    capsys.readouterr()

    assert main([*auction_files, "next"]) == 0
    assert "All available players are sold or skipped!" in capsys.readouterr().out


def test_reset_and_export(auction_files, tmp_path: Path, capsys):
    main([*auction_files, "bid", "p1", "t1", "1M"])
    output = tmp_path / "rosters.csv"

    assert main([*auction_files, "export", "--output", str(output)]) == 0
    assert "Arjun" in output.read_text(encoding="utf-8")

    assert main([*auction_files, "reset", "t1"]) == 0
    assert "Reset Strikers; released 1 players." in capsys.readouterr().out
    main([*auction_files, "export"])
    assert "Arjun" not in capsys.readouterr().out


def test_profile_round_trip(auction_files, tmp_path: Path, capsys):
    profile = tmp_path / "profile.json"
    assert main([*auction_files, "--save-profile", str(profile), "status"]) == 0
    capsys.readouterr()

    assert main(["--load-profile", str(profile), "status"]) == 0
    assert "Round 1/3" in capsys.readouterr().out


def test_missing_inputs_exit(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PYAUCTION_DB_PATH", str(tmp_path / "auction.sqlite"))
    with pytest.raises(SystemExit):
        main(["status"])


def test_db_flag_overrides_env(auction_files, tmp_path: Path, capsys):
    chosen = tmp_path / "chosen.sqlite"

    assert main([*auction_files, "--db", str(chosen), "bid", "p1", "t1", "1M"]) == 0
    assert chosen.exists()
    capsys.readouterr()

    main([*auction_files, "status"])
    assert "Sold 0/2 players" in capsys.readouterr().out
    main([*auction_files, "--db", str(chosen), "status"])
    assert "Sold 1/2 players" in capsys.readouterr().out
