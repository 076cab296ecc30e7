"""Team and auction summaries for display surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pyauction.auction import AuctionSession


@dataclass(frozen=True)
class PurchaseSummary:
    player_id: str
    player_name: str
    bid_amount: int
    round_sold: int


@dataclass(frozen=True)
class TeamSummary:
    team_id: str
    team_name: str
    captain_name: str
    max_budget: int
    budget_used: int
    remaining_purse: int
    roster_count: int
    max_players: int
    min_players: Optional[int]
    purchases: Tuple[PurchaseSummary, ...]

    @property
    def below_minimum(self) -> bool:
        return self.min_players is not None and self.roster_count < self.min_players


@dataclass(frozen=True)
class AuctionSummary:
    current_round: int
    max_round: int
    pending_players: int
    unsold_this_round: Tuple[str, ...]
    sold_players: int
    total_players: int
    complete: bool


def summarize_team(session: AuctionSession, team_id: str) -> TeamSummary:
    team = session.team(team_id)
    ledger = session.team_ledger(team_id)
    purchases = tuple(
        PurchaseSummary(
            player_id=entry.player_id,
            player_name=session.player(entry.player_id).player_name,
            bid_amount=entry.bid_amount,
            round_sold=entry.round_sold,
        )
        for entry in ledger.selected_players
    )
    budget_used = ledger.budget_used
    return TeamSummary(
        team_id=team.team_id,
        team_name=team.team_name,
        captain_name=team.captain_name,
        max_budget=team.max_budget,
        budget_used=budget_used,
        remaining_purse=team.max_budget - budget_used,
        roster_count=ledger.roster_count,
        max_players=team.max_players,
        min_players=team.min_players,
        purchases=purchases,
    )


def summarize_teams(session: AuctionSession) -> List[TeamSummary]:
    return [summarize_team(session, team.team_id) for team in session.teams]


def summarize_auction(session: AuctionSession) -> AuctionSummary:
    sold = sum(session.team_ledger(team.team_id).roster_count for team in session.teams)
    return AuctionSummary(
        current_round=session.current_round,
        max_round=session.rules.max_round,
        pending_players=len(session.pending_players()),
        unsold_this_round=tuple(player.player_id for player in session.unsold_players()),
        sold_players=sold,
        total_players=len(session.players),
        complete=session.is_complete,
    )
