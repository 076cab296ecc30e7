"""JSON snapshot of an auction session."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from pyauction.models import PlayerStatus, SaleEntry, Sold, UnsoldInRound


logger = logging.getLogger(__name__)


class PersistenceLoadFailure(RuntimeError):
    """A saved session blob could not be decoded or applied."""


class SaleEntryPayload(BaseModel):
    player_id: str = Field(..., alias="playerId")
    bid_amount: int = Field(..., gt=0, alias="bidAmount")
    round_sold: int = Field(..., ge=1, alias="roundSold")

    model_config = ConfigDict(populate_by_name=True)


class TeamLedgerPayload(BaseModel):
    selected_players: List[SaleEntryPayload] = Field(default_factory=list, alias="selectedPlayers")
    budget_used: int = Field(default=0, ge=0, alias="budgetUsed")

    model_config = ConfigDict(populate_by_name=True)


class PlayerStatePayload(BaseModel):
    player_id: str = Field(..., alias="playerId")
    is_sold: bool = Field(default=False, alias="isSold")
    unsold_round: Optional[int] = Field(default=None, ge=1, alias="unsoldRound")

    model_config = ConfigDict(populate_by_name=True)


class SessionSnapshot(BaseModel):
    current_round: int = Field(default=1, ge=1, alias="currentRound")
    auction_data: Dict[str, TeamLedgerPayload] = Field(default_factory=dict, alias="auctionData")
    unsold_players: List[str] = Field(default_factory=list, alias="unsoldPlayers")
    player_states: List[PlayerStatePayload] = Field(default_factory=list, alias="playerStates")

    model_config = ConfigDict(populate_by_name=True)


@dataclass(frozen=True)
class RestoredState:
    current_round: int
    entries_by_team: Dict[str, List[SaleEntry]]
    unsold_rounds: Dict[str, int]
    unsold_players: List[str]


def encode_session(
    *,
    current_round: int,
    ledgers: Mapping[str, Sequence[SaleEntry]],
    unsold_players: Sequence[str],
    statuses: Mapping[str, PlayerStatus],
) -> str:
    snapshot = SessionSnapshot(
        current_round=current_round,
        auction_data={
            team_id: TeamLedgerPayload(
                selected_players=[
                    SaleEntryPayload(
                        player_id=entry.player_id,
                        bid_amount=entry.bid_amount,
                        round_sold=entry.round_sold,
                    )
                    for entry in entries
                ],
                budget_used=sum(entry.bid_amount for entry in entries),
            )
            for team_id, entries in ledgers.items()
        },
        unsold_players=list(unsold_players),
        player_states=[
            PlayerStatePayload(
                player_id=player_id,
                is_sold=isinstance(status, Sold),
                unsold_round=status.round_number if isinstance(status, UnsoldInRound) else None,
            )
            for player_id, status in statuses.items()
        ],
    )
    return snapshot.model_dump_json(by_alias=True)


def decode_session(
    payload: str,
    *,
    team_ids: Sequence[str],
    player_ids: Sequence[str],
    max_round: int,
) -> RestoredState:
    """Parse and cross-check a saved blob against the loaded records.

    Raises ``PersistenceLoadFailure`` when the blob is unreadable or refers to
    teams or players that do not exist.
    """

    try:
        snapshot = SessionSnapshot.model_validate(json.loads(payload))
    except (json.JSONDecodeError, ValidationError, TypeError) as exc:
        raise PersistenceLoadFailure(f"Saved session is corrupt: {exc}") from exc

    if snapshot.current_round > max_round:
        raise PersistenceLoadFailure(
            f"Saved round {snapshot.current_round} exceeds max round {max_round}"
        )

    known_teams = set(team_ids)
    known_players = set(player_ids)
    entries_by_team: Dict[str, List[SaleEntry]] = {}
    sold: set[str] = set()
    for team_id, ledger in snapshot.auction_data.items():
        if team_id not in known_teams:
            raise PersistenceLoadFailure(f"Saved ledger references unknown team {team_id!r}")
        entries: List[SaleEntry] = []
        for item in ledger.selected_players:
            if item.player_id not in known_players:
                raise PersistenceLoadFailure(
                    f"Saved ledger references unknown player {item.player_id!r}"
                )
            if item.player_id in sold:
                raise PersistenceLoadFailure(f"Player {item.player_id!r} sold more than once")
            if item.round_sold > snapshot.current_round:
                raise PersistenceLoadFailure(
                    f"Player {item.player_id!r} sold in round {item.round_sold} "
                    f"after saved round {snapshot.current_round}"
                )
            sold.add(item.player_id)
            entries.append(
                SaleEntry(player_id=item.player_id, bid_amount=item.bid_amount, round_sold=item.round_sold)
            )
        recomputed = sum(entry.bid_amount for entry in entries)
        if recomputed != ledger.budget_used:
            logger.warning(
                "Saved budget for %s was %d but purchases sum to %d; using the sum",
                team_id,
                ledger.budget_used,
                recomputed,
            )
        entries_by_team[team_id] = entries

    unsold_rounds: Dict[str, int] = {}
    for state in snapshot.player_states:
        if state.player_id not in known_players:
            logger.warning("Ignoring saved state for unknown player %s", state.player_id)
            continue
        if state.is_sold and state.player_id not in sold:
            logger.warning("Player %s saved as sold without a ledger entry; treating as available", state.player_id)
            continue
        if state.unsold_round is not None and state.player_id not in sold:
            # a player can only have been passed over in a round already reached
            if state.unsold_round > snapshot.current_round:
                raise PersistenceLoadFailure(
                    f"Player {state.player_id!r} unsold in round {state.unsold_round} "
                    f"after saved round {snapshot.current_round}"
                )
            unsold_rounds[state.player_id] = state.unsold_round

    return RestoredState(
        current_round=snapshot.current_round,
        entries_by_team=entries_by_team,
        unsold_rounds=unsold_rounds,
        unsold_players=[pid for pid in snapshot.unsold_players if pid in known_players],
    )
