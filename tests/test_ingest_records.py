import json
from pathlib import Path

import pytest

from pyauction.ingest import (
    PlayerRow,
    TeamRow,
    load_players,
    load_teams,
    parse_money,
    rows_to_players,
    rows_to_teams,
)
from pyauction.ingest.records import DEFAULT_PLAYER_MAPPING, DEFAULT_TEAM_MAPPING


def _team_row(**kwargs):
    return TeamRow.from_mapping(kwargs, DEFAULT_TEAM_MAPPING)


def _player_row(**kwargs):
    return PlayerRow.from_mapping(kwargs, DEFAULT_PLAYER_MAPPING)


def test_parse_money_formats():
    assert parse_money("1500000") == 1_500_000
    assert parse_money("1,500,000") == 1_500_000
    assert parse_money("$1.5M") == 1_500_000
    assert parse_money("750K") == 750_000
    assert parse_money("  ") is None
    assert parse_money(None) is None
    with pytest.raises(ValueError):
        parse_money("lots")


def test_rows_to_teams_skips_invalid_and_duplicates(caplog):
    rows = [
        _team_row(teamId="t1", teamName="Strikers", maxBudget="10,000,000", maxPlayers="3", captainName="Asha"),
        _team_row(teamId="t1", teamName="Again", maxBudget="1000", maxPlayers="1"),
        _team_row(teamId="t2", teamName="Broke", maxBudget="", maxPlayers="3"),
        _team_row(teamId="t3", teamName="Odd", maxBudget="5M", maxPlayers="2", minPlayers="4"),
    ]

    with caplog.at_level("WARNING"):
        teams, report = rows_to_teams(rows)

    assert [team.team_id for team in teams] == ["t1"]
    assert teams[0].captain_name == "Asha"
    assert teams[0].max_budget == 10_000_000
    assert report.total_rows == 4
    assert report.loaded == 1
    assert report.duplicates == ["t1"]
    assert report.skipped == ["t2", "t3"]
    assert "Skipping team t2" in caplog.text


def test_rows_to_players_parses_optional_fields():
    rows = [
        _player_row(
            playerId="p1",
            playerName="Arjun",
            basePrice="1M",
            round3BasePrice="500K",
            availabilityPercentage="80%",
            availabilityComments="Away in May",
            WNBOStatus="Available",
        ),
        _player_row(playerId="p2", playerName="Bela", basePrice="1500000"),
        _player_row(playerId="p3", playerName="Nobody", basePrice="0"),
        _player_row(playerId="p4", playerName="Cloudy", basePrice="1M", availabilityPercentage="often"),
    ]

    players, report = rows_to_players(rows)

    assert [player.player_id for player in players] == ["p1", "p2"]
    first = players[0]
    assert first.round3_base_price == 500_000
    assert first.availability_percentage == pytest.approx(80.0)
    assert first.availability_comments == "Away in May"
    assert first.availability_status == "Available"
    assert players[1].round3_base_price is None
    assert report.skipped == ["p3", "p4"]


def test_load_teams_from_json(tmp_path: Path):
    path = tmp_path / "teams.json"
    path.write_text(
        json.dumps([
            {"teamId": "t1", "teamName": "Strikers", "maxBudget": 10_000_000, "maxPlayers": 3},
            {"teamId": "t2", "teamName": "Titans", "maxBudget": "10M", "maxPlayers": 3, "minPlayers": 2},
            "not a row",
        ]),
        encoding="utf-8",
    )

    teams = load_teams(path)

    assert [team.team_id for team in teams] == ["t1", "t2"]
    assert teams[1].min_players == 2


def test_load_players_from_csv(tmp_path: Path):
    path = tmp_path / "players.csv"
    path.write_text(
        "playerId,playerName,basePrice,round3BasePrice,availabilityPercentage\n"
        'p1,Arjun,"1,000,000",,100\n'
        "p2,Bela,1.5M,750K,\n",
        encoding="utf-8",
    )

    players = load_players(path)

    assert [player.player_id for player in players] == ["p1", "p2"]
    assert players[0].base_price == 1_000_000
    assert players[0].round3_base_price is None
    assert players[1].round3_base_price == 750_000
    assert players[1].availability_percentage is None


def test_custom_column_mapping(tmp_path: Path):
    path = tmp_path / "players.csv"
    path.write_text("id,name,price\np9,Zed,2M\n", encoding="utf-8")

    players = load_players(path, mapping={"player_id": "id", "player_name": "name", "base_price": "price"})

    assert players[0].player_id == "p9"
    assert players[0].base_price == 2_000_000


def test_unsupported_file_type(tmp_path: Path):
    path = tmp_path / "teams.xlsx"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_teams(path)


def test_rows_to_teams_skips_non_whole_roster_sizes(caplog):
    rows = [
        _team_row(teamId="t1", teamName="Endless", maxBudget="10M", maxPlayers="inf"),
        _team_row(teamId="t2", teamName="Fraction", maxBudget="10M", maxPlayers="3.7"),
        _team_row(teamId="t3", teamName="Padded", maxBudget="10M", maxPlayers="3.0", minPlayers="nan"),
        _team_row(teamId="t4", teamName="Titans", maxBudget="10M", maxPlayers="4.0"),
    ]

    with caplog.at_level("WARNING"):
        teams, report = rows_to_teams(rows)

    assert [team.team_id for team in teams] == ["t4"]
    assert teams[0].max_players == 4
    assert report.skipped == ["t1", "t2", "t3"]
    assert "not a whole number" in caplog.text
