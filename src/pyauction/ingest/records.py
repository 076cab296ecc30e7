"""Helpers to load team and player files and emit canonical records."""

from __future__ import annotations

import csv
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from pyauction.models import Player, Team


logger = logging.getLogger(__name__)


DEFAULT_TEAM_MAPPING = {
    "team_id": "teamId",
    "team_name": "teamName",
    "max_budget": "maxBudget",
    "max_players": "maxPlayers",
    "min_players": "minPlayers",
    "captain_name": "captainName",
    "banner_url": "bannerUrl",
}

DEFAULT_PLAYER_MAPPING = {
    "player_id": "playerId",
    "player_name": "playerName",
    "base_price": "basePrice",
    "round3_base_price": "round3BasePrice",
    "availability_percentage": "availabilityPercentage",
    "availability_comments": "availabilityComments",
    "availability_status": "WNBOStatus",
    "photo_url": "photoUrl",
}


def _extract(row: Mapping[str, Any], mapping: Mapping[str, str], key: str) -> Optional[str]:
    column = mapping.get(key)
    if column is None:
        return None
    value = row.get(column)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class TeamRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str = ""
    raw_max_budget: Optional[str] = None
    raw_max_players: Optional[str] = None
    raw_min_players: Optional[str] = None
    raw_captain: Optional[str] = None
    raw_banner_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any], mapping: Mapping[str, str]) -> "TeamRow":
        return cls(
            raw_id=_extract(row, mapping, "team_id"),
            raw_name=_extract(row, mapping, "team_name") or "",
            raw_max_budget=_extract(row, mapping, "max_budget"),
            raw_max_players=_extract(row, mapping, "max_players"),
            raw_min_players=_extract(row, mapping, "min_players"),
            raw_captain=_extract(row, mapping, "captain_name"),
            raw_banner_url=_extract(row, mapping, "banner_url"),
        )


class PlayerRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str = ""
    raw_base_price: Optional[str] = None
    raw_round3_base_price: Optional[str] = None
    raw_availability: Optional[str] = None
    raw_comments: Optional[str] = None
    raw_status: Optional[str] = None
    raw_photo_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any], mapping: Mapping[str, str]) -> "PlayerRow":
        return cls(
            raw_id=_extract(row, mapping, "player_id"),
            raw_name=_extract(row, mapping, "player_name") or "",
            raw_base_price=_extract(row, mapping, "base_price"),
            raw_round3_base_price=_extract(row, mapping, "round3_base_price"),
            raw_availability=_extract(row, mapping, "availability_percentage"),
            raw_comments=_extract(row, mapping, "availability_comments"),
            raw_status=_extract(row, mapping, "availability_status"),
            raw_photo_url=_extract(row, mapping, "photo_url"),
        )


@dataclass
class IngestReport:
    total_rows: int = 0
    loaded: int = 0
    skipped: List[str] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)


_MONEY_PATTERN = re.compile(r"^\$?\s*([0-9][0-9,_]*(?:\.[0-9]+)?)\s*([KkMm])?$")
_MONEY_SCALE = {"K": 1_000, "M": 1_000_000}


def parse_money(raw: Optional[str]) -> Optional[int]:
    """Parse '1500000', '1,500,000', '$1.5M' or '750K' into whole currency units."""

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    match = _MONEY_PATTERN.match(text)
    if match is None:
        raise ValueError(f"amount '{raw}' is not a currency value")
    number = float(match.group(1).replace(",", "").replace("_", ""))
    suffix = match.group(2)
    if suffix:
        number *= _MONEY_SCALE[suffix.upper()]
    return int(round(number))


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"'{raw}' is not a whole number") from None
    if not value.is_integer():
        raise ValueError(f"'{raw}' is not a whole number")
    return int(value)


def _parse_percentage(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.rstrip("%").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"availability '{raw}' is not numeric") from None


def _read_raw_rows(path: Path) -> List[Mapping[str, Any]]:
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON list of objects")
        return [row for row in data if isinstance(row, Mapping)]
    if suffix == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    raise ValueError(f"Unsupported file type for {path}; expected .json or .csv")


def load_team_rows(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[TeamRow]:
    mapping = mapping or DEFAULT_TEAM_MAPPING
    return [TeamRow.from_mapping(row, mapping) for row in _read_raw_rows(path)]


def load_player_rows(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRow]:
    mapping = mapping or DEFAULT_PLAYER_MAPPING
    return [PlayerRow.from_mapping(row, mapping) for row in _read_raw_rows(path)]


def rows_to_teams(rows: Sequence[TeamRow]) -> Tuple[List[Team], IngestReport]:
    report = IngestReport(total_rows=len(rows))
    teams: List[Team] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        label = row.raw_id or row.raw_name or f"row {index + 1}"
        if row.raw_id and row.raw_id in seen:
            logger.warning("Skipping duplicate team id %s", row.raw_id)
            report.duplicates.append(row.raw_id)
            continue
        try:
            team = Team(
                team_id=row.raw_id or "",
                team_name=row.raw_name or (row.raw_id or ""),
                max_budget=parse_money(row.raw_max_budget),
                max_players=_parse_int(row.raw_max_players),
                min_players=_parse_int(row.raw_min_players),
                captain_name=row.raw_captain or "",
                banner_url=row.raw_banner_url,
            )
        except (ValidationError, ValueError) as exc:
            logger.warning("Skipping team %s: %s", label, exc)
            report.skipped.append(label)
            continue
        seen.add(team.team_id)
        teams.append(team)
    report.loaded = len(teams)
    return teams, report


def rows_to_players(rows: Sequence[PlayerRow]) -> Tuple[List[Player], IngestReport]:
    report = IngestReport(total_rows=len(rows))
    players: List[Player] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        label = row.raw_id or row.raw_name or f"row {index + 1}"
        if row.raw_id and row.raw_id in seen:
            logger.warning("Skipping duplicate player id %s", row.raw_id)
            report.duplicates.append(row.raw_id)
            continue
        try:
            player = Player(
                player_id=row.raw_id or "",
                player_name=row.raw_name,
                base_price=parse_money(row.raw_base_price),
                round3_base_price=parse_money(row.raw_round3_base_price),
                availability_percentage=_parse_percentage(row.raw_availability),
                availability_comments=row.raw_comments or "",
                availability_status=row.raw_status,
                photo_url=row.raw_photo_url,
            )
        except (ValidationError, ValueError) as exc:
            logger.warning("Skipping player %s: %s", label, exc)
            report.skipped.append(label)
            continue
        seen.add(player.player_id)
        players.append(player)
    report.loaded = len(players)
    return players, report


def load_teams(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Team]:
    teams, report = rows_to_teams(load_team_rows(path, mapping=mapping))
    logger.info("Loaded %d/%d teams from %s", report.loaded, report.total_rows, path)
    return teams


def load_players(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Player]:
    players, report = rows_to_players(load_player_rows(path, mapping=mapping))
    logger.info("Loaded %d/%d players from %s", report.loaded, report.total_rows, path)
    return players
