"""Input adapters that normalize raw team and player data."""

from .records import (
    DEFAULT_PLAYER_MAPPING,
    DEFAULT_TEAM_MAPPING,
    IngestReport,
    PlayerRow,
    TeamRow,
    load_player_rows,
    load_players,
    load_team_rows,
    load_teams,
    parse_money,
    rows_to_players,
    rows_to_teams,
)

__all__ = [
    "DEFAULT_PLAYER_MAPPING",
    "DEFAULT_TEAM_MAPPING",
    "IngestReport",
    "PlayerRow",
    "TeamRow",
    "load_player_rows",
    "load_players",
    "load_team_rows",
    "load_teams",
    "parse_money",
    "rows_to_players",
    "rows_to_teams",
]
